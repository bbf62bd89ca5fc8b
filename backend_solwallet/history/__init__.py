"""
Transaction history package.

Reconstructs normalized wallet history from the ledger, classifies each
record for the watched address, and provides the display lookups and
helpers the dashboard renders with.
"""

from backend_solwallet.history.display import filter_transactions, format_address
from backend_solwallet.history.fallback import synthetic_transactions
from backend_solwallet.history.generation import RequestGeneration
from backend_solwallet.history.labels import format_transaction_type, type_color, type_icon
from backend_solwallet.history.models import (
    HistoryResult,
    HistorySource,
    SkipReason,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from backend_solwallet.history.reconstructor import (
    HistoryReconstructor,
    get_transaction_history,
    load_history,
)

__all__ = [
    "HistoryReconstructor",
    "HistoryResult",
    "HistorySource",
    "RequestGeneration",
    "SkipReason",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "filter_transactions",
    "format_address",
    "format_transaction_type",
    "get_transaction_history",
    "load_history",
    "synthetic_transactions",
    "type_color",
    "type_icon",
]
