"""
Ledger boundary: Solana RPC access and raw transaction decoding.

The history reconstructor depends only on the LedgerClient protocol;
SolanaRpcLedgerClient is the JSON-RPC implementation used in production.
"""

from backend_solwallet.ledger.client import LedgerClient
from backend_solwallet.ledger.models import ParticipantBalance, SignatureInfo, TransactionDetail
from backend_solwallet.ledger.parser import parse_transaction_detail
from backend_solwallet.ledger.rpc_client import SolanaRpcLedgerClient

__all__ = [
    "LedgerClient",
    "ParticipantBalance",
    "SignatureInfo",
    "SolanaRpcLedgerClient",
    "TransactionDetail",
    "parse_transaction_detail",
]
