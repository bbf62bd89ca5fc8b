"""
Solana JSON-RPC ledger client over httpx.

Responsibilities:
- getSignaturesForAddress with `before`-cursor paging (node caps a page at 1000).
- getTransaction (jsonParsed, versioned transactions allowed) decoded to TransactionDetail.
- Map transport and JSON-RPC failures to LedgerTransportError / LedgerRPCError.

No retries here; callers decide what a failure means.
"""

from __future__ import annotations

import itertools
from dataclasses import replace
from typing import Any

import httpx

from backend_solwallet.core.exceptions import LedgerRPCError, LedgerTransportError
from backend_solwallet.ledger.models import SignatureInfo, TransactionDetail
from backend_solwallet.ledger.parser import parse_transaction_detail
from backend_solwallet.wallet_logging import get_logger
from backend_solwallet.wallet_logging.logger import short_address

logger = get_logger(__name__)

MAX_SIGNATURES_PER_PAGE = 1000
DEFAULT_COMMITMENT = "finalized"
DEFAULT_REQUEST_TIMEOUT_SEC = 30.0


class SolanaRpcLedgerClient:
    """
    Read-only ledger client for a Solana RPC HTTP endpoint.

    Use as an async context manager, or call aclose() when done. An injected
    httpx.AsyncClient is not closed by this object.
    """

    def __init__(
        self,
        rpc_url: str,
        *,
        request_timeout_sec: float = DEFAULT_REQUEST_TIMEOUT_SEC,
        page_size: int = MAX_SIGNATURES_PER_PAGE,
        commitment: str = DEFAULT_COMMITMENT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            rpc_url: Solana RPC HTTP endpoint (e.g. https://api.devnet.solana.com).
            request_timeout_sec: HTTP timeout for each RPC request.
            page_size: Signatures requested per getSignaturesForAddress call (1–1000).
            commitment: Commitment level for both calls.
            http_client: Optional pre-built client (tests use httpx.MockTransport).
        """
        if not rpc_url.strip():
            raise ValueError("rpc_url must be non-empty")
        if not (1 <= page_size <= MAX_SIGNATURES_PER_PAGE):
            raise ValueError(f"page_size must be between 1 and {MAX_SIGNATURES_PER_PAGE}")
        self._rpc_url = rpc_url.strip()
        self._page_size = page_size
        self._commitment = commitment
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(request_timeout_sec))
        self._ids = itertools.count(1)

    async def __aenter__(self) -> "SolanaRpcLedgerClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _call(self, method: str, params: list[Any]) -> Any:
        """Perform one JSON-RPC call and return its `result` (may be None)."""
        body = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        try:
            resp = await self._client.post(self._rpc_url, json=body)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPError as e:
            raise LedgerTransportError(f"{method} failed: {e}") from e
        except ValueError as e:
            raise LedgerTransportError(f"{method} returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise LedgerRPCError("response is not a JSON-RPC object")
        if data.get("error") is not None:
            err = data["error"]
            if isinstance(err, dict):
                raise LedgerRPCError(str(err.get("message", err)), err.get("code"))
            raise LedgerRPCError(str(err))
        return data.get("result")

    async def _get_signatures_page(
        self, address: str, limit: int, before: str | None
    ) -> list[dict[str, Any]]:
        opts: dict[str, Any] = {"limit": limit, "commitment": self._commitment}
        if before is not None:
            opts["before"] = before
        result = await self._call("getSignaturesForAddress", [address, opts])
        if result is None:
            raise LedgerRPCError("getSignaturesForAddress returned no result")
        if not isinstance(result, list):
            raise LedgerRPCError("getSignaturesForAddress result is not a list")
        return result

    async def list_signatures(self, address: str, limit: int) -> list[SignatureInfo]:
        """
        Return up to limit most recent signatures, newest first.

        Pages backwards with the `before` cursor until limit is reached or the
        node returns a short page.
        """
        infos: list[SignatureInfo] = []
        before: str | None = None
        while len(infos) < limit:
            page_limit = min(self._page_size, limit - len(infos))
            page = await self._get_signatures_page(address, page_limit, before)
            for item in page:
                try:
                    infos.append(SignatureInfo.from_rpc_item(item))
                except (KeyError, TypeError, ValueError) as e:
                    logger.debug("ledger_signature_item_invalid", error=str(e))
            if len(page) < page_limit or not page:
                break
            last = page[-1]
            before = last.get("signature") if isinstance(last, dict) else None
            if before is None:
                break
        logger.debug(
            "ledger_signatures_listed",
            wallet_id=short_address(address),
            signature_count=len(infos),
        )
        return infos[:limit]

    async def get_transaction_detail(self, signature: str) -> TransactionDetail | None:
        """Fetch and decode one transaction; None when the node has no record of it."""
        result = await self._call(
            "getTransaction",
            [
                signature,
                {
                    "encoding": "jsonParsed",
                    "maxSupportedTransactionVersion": 0,
                    "commitment": self._commitment,
                },
            ],
        )
        if result is None:
            return None
        detail = parse_transaction_detail(result)
        if detail is not None and detail.signature is None:
            detail = replace(detail, signature=signature)
        return detail
