"""
Transaction history reconstruction: ledger listing to display-ready records.

Pipeline per call:
1. List up to `limit` recent signatures for the wallet. Failure here means
   the node is unusable: serve the synthetic dataset instead of raising.
2. Fetch each transaction detail (bounded concurrency, results kept in
   listing order). A failing item is logged and skipped; the batch goes on.
3. Classify each detail for the watched address (see classify.py).

Never raises: a bad limit or a failed or malformed listing serves the
synthetic dataset. An empty live result stays empty.
"""

from __future__ import annotations

import asyncio
import time
from typing import Callable

from backend_solwallet.config.settings import Settings, get_settings
from backend_solwallet.history.classify import classify_detail
from backend_solwallet.history.fallback import synthetic_transactions
from backend_solwallet.history.models import (
    DecodeOutcome,
    HistoryResult,
    HistorySource,
    SkipReason,
    Transaction,
)
from backend_solwallet.ledger.client import LedgerClient
from backend_solwallet.ledger.rpc_client import SolanaRpcLedgerClient
from backend_solwallet.wallet_logging import bind_wallet

DEFAULT_LIMIT = 20
DEFAULT_FETCH_CONCURRENCY = 4


def _now_ms() -> int:
    return int(time.time() * 1000)


def _is_valid_limit(limit: object) -> bool:
    return isinstance(limit, int) and not isinstance(limit, bool) and limit >= 1


def _signature_strings(listing: object) -> list[str]:
    """Reduce a list_signatures result to signature strings; TypeError if malformed."""
    if not isinstance(listing, (list, tuple)):
        raise TypeError(f"signature listing must be a list, got {type(listing).__name__}")
    signatures = []
    for info in listing:
        signature = getattr(info, "signature", None)
        if not isinstance(signature, str) or not signature:
            raise TypeError(f"signature listing item has no signature: {info!r}")
        signatures.append(signature)
    return signatures


class HistoryReconstructor:
    """
    Rebuilds a wallet's recent history from a LedgerClient.

    Holds no per-wallet state; one instance can serve many calls.
    """

    def __init__(
        self,
        client: LedgerClient,
        *,
        fetch_concurrency: int = DEFAULT_FETCH_CONCURRENCY,
        force_synthetic: bool = False,
        clock_ms: Callable[[], int] = _now_ms,
    ) -> None:
        """
        Args:
            client: Ledger-query capability (list_signatures / get_transaction_detail).
            fetch_concurrency: Max detail fetches in flight; 1 is strictly sequential.
                Values below 1 are treated as 1.
            force_synthetic: Serve the synthetic dataset without calling the ledger.
            clock_ms: Time source for synthetic timestamps (ms since epoch).
        """
        self._client = client
        self._fetch_concurrency = max(1, fetch_concurrency)
        self._force_synthetic = force_synthetic
        self._clock_ms = clock_ms

    def _synthetic(self, error: str | None) -> HistoryResult:
        return HistoryResult(
            transactions=tuple(synthetic_transactions(self._clock_ms())),
            source=HistorySource.SYNTHETIC,
            error=error,
        )

    async def reconstruct(self, address: str, limit: int = DEFAULT_LIMIT) -> HistoryResult:
        """Return the wallet's history (newest first) with its provenance and skips."""
        log = bind_wallet(address, __name__)

        if self._force_synthetic:
            log.info("history_fallback_synthetic", reason="forced")
            return self._synthetic(None)

        # a limit the node would reject counts as a failed listing
        if not _is_valid_limit(limit):
            error = f"invalid limit: {limit!r}"
            log.warning("history_signatures_failed", reason="invalid_limit", error=error)
            log.info("history_fallback_synthetic", reason="invalid_limit")
            return self._synthetic(error)

        try:
            listing = await self._client.list_signatures(address, limit)
            signatures = _signature_strings(listing)[:limit]
        except Exception as e:
            log.warning("history_signatures_failed", error=str(e), error_class=type(e).__name__)
            log.info("history_fallback_synthetic", reason="signatures_failed")
            return self._synthetic(str(e))

        outcomes = await self._decode_all(address, signatures)
        transactions = tuple(o.transaction for o in outcomes if o.transaction is not None)
        skipped = tuple(o.skipped for o in outcomes if o.skipped is not None)
        log.info(
            "history_reconstructed",
            source=HistorySource.LIVE.value,
            signature_count=len(signatures),
            count=len(transactions),
            skipped_count=len(skipped),
        )
        return HistoryResult(transactions=transactions, source=HistorySource.LIVE, skipped=skipped)

    async def _decode_all(self, address: str, signatures: list[str]) -> list[DecodeOutcome]:
        semaphore = asyncio.Semaphore(self._fetch_concurrency)

        async def _bounded(signature: str) -> DecodeOutcome:
            async with semaphore:
                return await self._decode_one(address, signature)

        # gather keeps argument order, so outcomes line up with the listing
        return list(await asyncio.gather(*(_bounded(s) for s in signatures)))

    async def _decode_one(self, address: str, signature: str) -> DecodeOutcome:
        log = bind_wallet(address, __name__).bind(signature=signature)
        try:
            detail = await self._client.get_transaction_detail(signature)
        except Exception as e:
            log.warning("history_item_skipped", reason=SkipReason.FETCH_ERROR.value, error=str(e))
            return DecodeOutcome.skip(signature, SkipReason.FETCH_ERROR, str(e))
        if detail is None:
            log.warning("history_item_skipped", reason=SkipReason.NOT_FOUND.value)
            return DecodeOutcome.skip(signature, SkipReason.NOT_FOUND)

        try:
            outcome = classify_detail(detail, address, signature)
        except Exception as e:
            log.warning("history_item_skipped", reason=SkipReason.DECODE_ERROR.value, error=str(e))
            return DecodeOutcome.skip(signature, SkipReason.DECODE_ERROR, str(e))

        if outcome.skipped is not None:
            reason = outcome.skipped.reason
            if reason is SkipReason.MISSING_BLOCK_TIME:
                log.warning("history_item_skipped", reason=reason.value)
            else:
                log.debug("history_item_skipped", reason=reason.value)
        return outcome


async def get_transaction_history(
    client: LedgerClient,
    address: str,
    limit: int = DEFAULT_LIMIT,
    *,
    fetch_concurrency: int = DEFAULT_FETCH_CONCURRENCY,
) -> list[Transaction]:
    """Plain list form of HistoryReconstructor.reconstruct for callers that ignore provenance."""
    result = await HistoryReconstructor(client, fetch_concurrency=fetch_concurrency).reconstruct(address, limit)
    return list(result.transactions)


async def load_history(
    address: str,
    limit: int | None = None,
    *,
    settings: Settings | None = None,
) -> HistoryResult:
    """Open an RPC client from settings, reconstruct one wallet's history, close the client."""
    settings = settings or get_settings()
    async with SolanaRpcLedgerClient(
        settings.solana_rpc_url, request_timeout_sec=settings.rpc_timeout_sec
    ) as client:
        reconstructor = HistoryReconstructor(
            client,
            fetch_concurrency=settings.fetch_concurrency,
            force_synthetic=settings.use_synthetic_data,
        )
        return await reconstructor.reconstruct(address, limit or settings.history_limit)
