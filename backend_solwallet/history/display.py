"""
Presentation helpers shared by the API server and the CLI.

Filtering by type, short addresses, signed amounts, fee text and explorer links.
"""

from __future__ import annotations

from typing import Iterable

from backend_solwallet.history.models import Transaction, TransactionType

FILTER_ALL = "all"
FILTER_CHOICES = (FILTER_ALL, "send", "receive", "swap", "stake")
EXPLORER_TX_URL = "https://explorer.solana.com/tx/{signature}"


def filter_transactions(transactions: Iterable[Transaction], kind: str = FILTER_ALL) -> list[Transaction]:
    """Keep transactions of one type ("all" keeps everything); order is preserved."""
    kind = (kind or FILTER_ALL).strip().lower()
    if kind not in FILTER_CHOICES:
        raise ValueError(f"Unknown transaction filter {kind!r}; expected one of {', '.join(FILTER_CHOICES)}")
    if kind == FILTER_ALL:
        return list(transactions)
    wanted = TransactionType(kind)
    return [tx for tx in transactions if tx.type is wanted]


def format_address(address: str | None) -> str:
    if not address:
        return "Unknown"
    return f"{address[:4]}...{address[-4:]}"


def format_amount(tx: Transaction) -> str:
    """'-0.5000 SOL' for sends, '+1.2500 SOL' for receives, unsigned otherwise."""
    sign = {TransactionType.SEND: "-", TransactionType.RECEIVE: "+"}.get(tx.type, "")
    return f"{sign}{tx.amount:.4f} {tx.token}"


def format_fee(tx: Transaction) -> str:
    return f"Fee: {tx.fee:.6f} SOL"


def counterparty_label(tx: Transaction) -> str:
    if not tx.from_address and not tx.to_address:
        return ""
    if tx.type is TransactionType.SEND:
        return f"To: {format_address(tx.to_address)}"
    if tx.type is TransactionType.RECEIVE:
        return f"From: {format_address(tx.from_address)}"
    return "Internal transaction"


def explorer_url(signature: str, cluster: str = "devnet") -> str:
    url = EXPLORER_TX_URL.format(signature=signature)
    if cluster and cluster not in ("mainnet", "mainnet-beta"):
        url += f"?cluster={cluster}"
    return url
