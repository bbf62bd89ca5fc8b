"""
API server package: HTTP interface over reconstructed wallet history.

Serves the dashboard's history view; delegates to the history package
and never computes anything beyond display lookups itself.
"""
