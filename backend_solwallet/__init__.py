"""
Backend SolWallet: transaction history backend for a Solana wallet dashboard.

Reconstructs a wallet's recent activity from a Solana RPC node: lists
signatures, fetches and decodes each transaction, classifies it for the
watched address, and serves the normalized records to the dashboard over
HTTP. Degrades to a fixed synthetic dataset when the node is unreachable.
"""

__version__ = "0.1.0"
