"""
Pytest fixtures for SolWallet tests. Stub ledger client, isolated env, API TestClient.
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from backend_solwallet.ledger.models import ParticipantBalance, SignatureInfo, TransactionDetail

# Valid Solana pubkeys (base58, 32 bytes)
WATCHED = "9QCfNuQuxct1Xk9ytFYgxc5fThmTzL4pHQnSjjrVUrka"
OTHER = "7F1WzVNQ1Qpurqxxdyv3UrFQR3uoNepULVW9A4bAJ5nZ"
THIRD = "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU"
BLOCK_TIME = 1_700_000_000


def make_detail(
    pre: int,
    post: int,
    *,
    fee: int = 5000,
    error: Any = None,
    block_time: int | None = BLOCK_TIME,
    others: list[tuple[str, int, int]] | None = None,
) -> TransactionDetail:
    """Detail where WATCHED is the first participant, followed by `others`."""
    participants = [ParticipantBalance(WATCHED, pre, post)]
    for address, o_pre, o_post in others or []:
        participants.append(ParticipantBalance(address, o_pre, o_post))
    return TransactionDetail(
        participants=tuple(participants),
        fee=fee,
        error=error,
        block_time=block_time,
    )


class StubLedgerClient:
    """
    In-memory LedgerClient.

    signatures: list of signature strings, or an Exception to raise from list_signatures.
    details: signature -> TransactionDetail | None | Exception.
    delays: signature -> seconds to sleep before answering (to shuffle completion order).
    """

    def __init__(
        self,
        signatures: list[str] | Exception,
        details: dict[str, Any] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.signatures = signatures
        self.details = details or {}
        self.delays = delays or {}
        self.list_calls: list[tuple[str, int]] = []
        self.detail_calls: list[str] = []

    async def list_signatures(self, address: str, limit: int) -> list[SignatureInfo]:
        self.list_calls.append((address, limit))
        if isinstance(self.signatures, Exception):
            raise self.signatures
        return [SignatureInfo(signature=s, slot=1000 - i) for i, s in enumerate(self.signatures[:limit])]

    async def get_transaction_detail(self, signature: str) -> TransactionDetail | None:
        self.detail_calls.append(signature)
        delay = self.delays.get(signature)
        if delay:
            await asyncio.sleep(delay)
        value = self.details.get(signature)
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Strip SolWallet env vars so tests see defaults unless they set them."""
    for name in (
        "SOLANA_NETWORK",
        "SOLANA_CLUSTER",
        "SOLANA_RPC_URL",
        "HELIUS_API_KEY",
        "SOLANA_RPC_TIMEOUT_SEC",
        "HISTORY_LIMIT",
        "HISTORY_FETCH_CONCURRENCY",
        "SOLWALLET_USE_SYNTHETIC_DATA",
        "API_HOST",
        "API_PORT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def stub_factory():
    return StubLedgerClient


@pytest.fixture
def api_client():
    """
    FastAPI TestClient whose reconstructor uses a swappable stub ledger client.
    Set `api_client.stub = StubLedgerClient(...)` before requesting.
    """
    from fastapi.testclient import TestClient

    from backend_solwallet.api_server.server import app, get_reconstructor
    from backend_solwallet.history.reconstructor import HistoryReconstructor

    holder: dict[str, Any] = {"stub": StubLedgerClient([])}

    async def _override():
        yield HistoryReconstructor(holder["stub"], fetch_concurrency=2)

    app.dependency_overrides[get_reconstructor] = _override
    client = TestClient(app)
    client.holder = holder  # type: ignore[attr-defined]
    try:
        yield client
    finally:
        app.dependency_overrides.pop(get_reconstructor, None)
