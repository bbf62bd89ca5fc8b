"""
Ledger-query capability consumed by the history reconstructor.

Any object with these two coroutines works: the shipped JSON-RPC client,
a stub in tests, or a wrapper around another SDK. Both calls may raise;
the reconstructor owns the failure policy.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from backend_solwallet.ledger.models import SignatureInfo, TransactionDetail


@runtime_checkable
class LedgerClient(Protocol):
    async def list_signatures(self, address: str, limit: int) -> list[SignatureInfo]:
        """Return up to limit most recent signatures for address, newest first."""
        ...

    async def get_transaction_detail(self, signature: str) -> TransactionDetail | None:
        """Return the decoded transaction, or None when the node has no record."""
        ...
