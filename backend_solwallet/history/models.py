"""
Data models for reconstructed wallet history.

Transaction is the normalized, display-ready record; HistoryResult wraps a
batch with its provenance (live vs synthetic) and the per-signature skips.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

LAMPORTS_PER_SOL = 1_000_000_000
NATIVE_TOKEN = "SOL"


class TransactionType(str, Enum):
    SEND = "send"
    RECEIVE = "receive"
    SWAP = "swap"
    STAKE = "stake"
    UNKNOWN = "unknown"

    @classmethod
    def coerce(cls, value: Any) -> "TransactionType":
        """Map any input to a member; unmapped values become UNKNOWN."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            value = value.strip().lower()
        try:
            return cls(value)
        except (ValueError, TypeError):
            return cls.UNKNOWN


class TransactionStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    # Valid for display; never produced by the RPC decode path.
    PENDING = "pending"


class HistorySource(str, Enum):
    LIVE = "live"
    SYNTHETIC = "synthetic"


class SkipReason(str, Enum):
    FETCH_ERROR = "fetch_error"
    DECODE_ERROR = "decode_error"
    NOT_FOUND = "not_found"
    MISSING_BLOCK_TIME = "missing_block_time"
    NOT_INVOLVED = "not_involved"
    NO_BALANCE_CHANGE = "no_balance_change"


def lamports_to_sol(lamports: int) -> Decimal:
    """Convert minor units to SOL exactly (1 SOL = 1_000_000_000 lamports)."""
    return Decimal(lamports) / LAMPORTS_PER_SOL


@dataclass(frozen=True)
class Transaction:
    """
    One history entry as the dashboard displays it.

    amount and fee are non-negative; direction lives in `type` only.
    """

    signature: str
    timestamp: int
    """Milliseconds since epoch (block_time * 1000)."""
    type: TransactionType
    status: TransactionStatus
    amount: Decimal
    fee: Decimal
    token: str = NATIVE_TOKEN
    from_address: str = ""
    to_address: str = ""
    block_time: int | None = None

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"amount must be non-negative, got {self.amount}")
        if self.fee < 0:
            raise ValueError(f"fee must be non-negative, got {self.fee}")

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable dict with the dashboard's field names."""
        return {
            "signature": self.signature,
            "timestamp": self.timestamp,
            "type": self.type.value,
            "status": self.status.value,
            "amount": float(self.amount),
            "token": self.token,
            "from": self.from_address,
            "to": self.to_address,
            "fee": float(self.fee),
            "blockTime": self.block_time,
        }


@dataclass(frozen=True)
class SkippedRecord:
    """A listed signature that produced no Transaction, and why."""

    signature: str
    reason: SkipReason
    detail: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"signature": self.signature, "reason": self.reason.value}


@dataclass(frozen=True)
class DecodeOutcome:
    """Result slot for one signature: exactly one of transaction / skipped is set."""

    signature: str
    transaction: Transaction | None = None
    skipped: SkippedRecord | None = None

    @classmethod
    def ok(cls, transaction: Transaction) -> "DecodeOutcome":
        return cls(signature=transaction.signature, transaction=transaction)

    @classmethod
    def skip(cls, signature: str, reason: SkipReason, detail: str = "") -> "DecodeOutcome":
        return cls(signature=signature, skipped=SkippedRecord(signature, reason, detail))


@dataclass(frozen=True)
class HistoryResult:
    """Reconstructed history plus provenance; synthetic means the live listing failed."""

    transactions: tuple[Transaction, ...]
    source: HistorySource = HistorySource.LIVE
    skipped: tuple[SkippedRecord, ...] = field(default_factory=tuple)
    error: str | None = None

    @property
    def is_degraded(self) -> bool:
        return self.source is HistorySource.SYNTHETIC
