"""
Data models for the ledger boundary.

SignatureInfo mirrors one getSignaturesForAddress item; TransactionDetail is
the slice of a getTransaction result the history reconstructor reads
(participants with pre/post balances, fee, error, block time).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SignatureInfo:
    """
    Normalized transaction signature info from getSignaturesForAddress.

    Mirrors Solana RPC response fields; the unit of work handed to the
    history reconstructor (newest first, as the node returns them).
    """

    signature: str
    slot: int
    err: Any = None  # None if success; dict/object from RPC if failed
    block_time: int | None = None  # Unix timestamp; None if not available
    memo: str | None = None
    confirmation_status: str | None = None  # processed | confirmed | finalized

    @classmethod
    def from_rpc_item(cls, item: dict[str, Any]) -> "SignatureInfo":
        """Build from a single getSignaturesForAddress result item."""
        return cls(
            signature=item["signature"],
            slot=int(item["slot"]),
            err=item.get("err"),
            block_time=item.get("blockTime"),
            memo=item.get("memo"),
            confirmation_status=item.get("confirmationStatus"),
        )


@dataclass(frozen=True)
class ParticipantBalance:
    """One account of a transaction with its native balance before and after (lamports)."""

    address: str
    pre_balance: int
    post_balance: int

    @property
    def delta(self) -> int:
        return self.post_balance - self.pre_balance


@dataclass(frozen=True)
class TransactionDetail:
    """
    Decoded getTransaction result, reduced to what history classification needs.

    Participants keep message account-key order; fee is in lamports; error is
    meta.err as returned by the node (None on success).
    """

    participants: tuple[ParticipantBalance, ...] = field(default_factory=tuple)
    fee: int = 0
    error: Any = None
    block_time: int | None = None
    slot: int | None = None
    signature: str | None = None

    def find_participant(self, address: str) -> ParticipantBalance | None:
        """First participant matching address (accounts appear at most once for delta purposes)."""
        for participant in self.participants:
            if participant.address == address:
                return participant
        return None
