"""
Display lookups for transaction types: label, color tag, icon name.

Each table covers every TransactionType member; anything unmapped falls
through to the UNKNOWN entry, so these never raise.
"""

from __future__ import annotations

from typing import Any

from backend_solwallet.history.models import TransactionType

TYPE_LABELS: dict[TransactionType, str] = {
    TransactionType.SEND: "Sent",
    TransactionType.RECEIVE: "Received",
    TransactionType.SWAP: "Swapped",
    TransactionType.STAKE: "Staked",
    TransactionType.UNKNOWN: "Unknown",
}

TYPE_COLORS: dict[TransactionType, str] = {
    TransactionType.SEND: "text-destructive",
    TransactionType.RECEIVE: "text-accent",
    TransactionType.SWAP: "text-chart-1",
    TransactionType.STAKE: "text-primary",
    TransactionType.UNKNOWN: "text-muted-foreground",
}

TYPE_ICONS: dict[TransactionType, str] = {
    TransactionType.SEND: "arrow-up-right",
    TransactionType.RECEIVE: "arrow-down-left",
    TransactionType.SWAP: "rotate-ccw",
    TransactionType.STAKE: "zap",
    TransactionType.UNKNOWN: "history",
}

for _table in (TYPE_LABELS, TYPE_COLORS, TYPE_ICONS):
    _missing = set(TransactionType) - set(_table)
    if _missing:
        raise RuntimeError(f"display table missing entries for {sorted(m.value for m in _missing)}")


def format_transaction_type(tx_type: Any) -> str:
    return TYPE_LABELS[TransactionType.coerce(tx_type)]


def type_color(tx_type: Any) -> str:
    return TYPE_COLORS[TransactionType.coerce(tx_type)]


def type_icon(tx_type: Any) -> str:
    return TYPE_ICONS[TransactionType.coerce(tx_type)]
