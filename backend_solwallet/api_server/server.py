"""
FastAPI server: read-only wallet history API for the dashboard.

Exposes GET /wallet/{address}/transactions returning reconstructed history
(live, or synthetic when the RPC node is unusable). Ledger failures never
surface as 5xx; config via env (SOLANA_RPC_URL, HISTORY_FETCH_CONCURRENCY, ...).
"""

from __future__ import annotations

from typing import Any, AsyncIterator

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from solders.pubkey import Pubkey

from backend_solwallet import __version__
from backend_solwallet.config import Settings, get_settings
from backend_solwallet.history.display import FILTER_ALL, explorer_url, filter_transactions
from backend_solwallet.history.labels import format_transaction_type, type_color, type_icon
from backend_solwallet.history.models import Transaction
from backend_solwallet.history.reconstructor import HistoryReconstructor
from backend_solwallet.ledger.rpc_client import MAX_SIGNATURES_PER_PAGE, SolanaRpcLedgerClient
from backend_solwallet.wallet_logging import get_logger
from backend_solwallet.wallet_logging.logger import short_address

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Config and dependency
# -----------------------------------------------------------------------------


def get_app_settings() -> Settings:
    return get_settings()


async def get_reconstructor(
    settings: Settings = Depends(get_app_settings),
) -> AsyncIterator[HistoryReconstructor]:
    """Dependency: one RPC client per request, closed when the response is done."""
    async with SolanaRpcLedgerClient(
        settings.solana_rpc_url, request_timeout_sec=settings.rpc_timeout_sec
    ) as client:
        yield HistoryReconstructor(
            client,
            fetch_concurrency=settings.fetch_concurrency,
            force_synthetic=settings.use_synthetic_data,
        )


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------


class TransactionItem(BaseModel):
    """One history row: normalized transaction plus display lookups."""

    signature: str = Field(..., description="Transaction signature (base58)")
    timestamp: int = Field(..., description="Block time in milliseconds since epoch")
    type: str = Field(..., description="send | receive | swap | stake | unknown")
    status: str = Field(..., description="success | failed | pending")
    amount: float = Field(..., ge=0, description="Magnitude of the wallet's balance change (major units)")
    token: str = Field(..., description="Asset symbol")
    from_: str = Field("", alias="from", description="Sender address, empty when unknown")
    to: str = Field("", description="Receiver address, empty when unknown")
    fee: float = Field(..., ge=0, description="Network fee in SOL")
    blockTime: int | None = Field(None, description="Raw block time in seconds")
    label: str = Field(..., description="Display label for the type")
    color: str = Field(..., description="Color tag for the type")
    icon: str = Field(..., description="Icon name for the type")
    explorerUrl: str = Field(..., description="Solana explorer link")

    model_config = {"populate_by_name": True}


class SkippedItem(BaseModel):
    signature: str
    reason: str


class TransactionHistoryResponse(BaseModel):
    """GET /wallet/{address}/transactions response."""

    address: str = Field(..., description="Watched wallet address")
    source: str = Field(..., description="live | synthetic")
    count: int = Field(..., ge=0, description="Number of transactions returned (after filtering)")
    transactions: list[TransactionItem] = Field(default_factory=list)
    skipped: list[SkippedItem] = Field(default_factory=list, description="Listed signatures that produced no row")


def _to_item(tx: Transaction, cluster: str) -> dict[str, Any]:
    row = tx.to_dict()
    row.update(
        label=format_transaction_type(tx.type),
        color=type_color(tx.type),
        icon=type_icon(tx.type),
        explorerUrl=explorer_url(tx.signature, cluster),
    )
    return row


# -----------------------------------------------------------------------------
# App and routes
# -----------------------------------------------------------------------------

app = FastAPI(
    title="Backend SolWallet API",
    description="Read-only wallet transaction history reconstructed from Solana RPC.",
    version=__version__,
)


@app.get("/health")
def health() -> dict[str, str]:
    """Liveness probe: API is up."""
    return {"status": "ok"}


@app.get("/wallet/{address}/transactions", response_model=TransactionHistoryResponse)
async def get_wallet_transactions(
    address: str,
    limit: int = Query(20, ge=1, le=MAX_SIGNATURES_PER_PAGE, description="Signatures to consider"),
    type: str = Query(FILTER_ALL, description="all | send | receive | swap | stake"),
    reconstructor: HistoryReconstructor = Depends(get_reconstructor),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    """
    Return the wallet's recent transactions, newest first.

    Falls back to the synthetic dataset (source="synthetic") when the
    signature listing fails; an empty live history is returned as-is.
    """
    address = address.strip()
    if not address:
        raise HTTPException(status_code=400, detail="address must be non-empty")
    try:
        Pubkey.from_string(address)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid Solana wallet address") from None

    result = await reconstructor.reconstruct(address, limit)
    try:
        rows = filter_transactions(result.transactions, type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    logger.info(
        "api_history_served",
        wallet_id=short_address(address),
        source=result.source.value,
        count=len(rows),
        filter=type,
    )
    body = TransactionHistoryResponse(
        address=address,
        source=result.source.value,
        count=len(rows),
        transactions=[TransactionItem(**_to_item(tx, settings.explorer_cluster)) for tx in rows],
        skipped=[SkippedItem(**s.to_dict()) for s in result.skipped],
    )
    return JSONResponse(status_code=200, content=body.model_dump(by_alias=True))


@app.exception_handler(HTTPException)
def http_exception_handler(request: Any, exc: HTTPException) -> JSONResponse:
    """Consistent JSON error response for HTTPException."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )
