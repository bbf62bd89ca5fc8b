"""
Solana transaction parser: raw getTransaction payloads to TransactionDetail.

Purely structural: resolves account keys (json and jsonParsed encodings,
versioned-transaction loaded addresses), pairs them with meta pre/post
balances, and lifts fee, error, block time and slot. No classification here.
"""

from __future__ import annotations

from typing import Any

from backend_solwallet.ledger.models import ParticipantBalance, TransactionDetail
from backend_solwallet.wallet_logging import get_logger

logger = get_logger(__name__)


def _get_account_keys(
    message: dict[str, Any],
    meta: dict[str, Any] | None = None,
) -> list[str]:
    """
    Resolve accountKeys to a list of base58 strings (handles json vs jsonParsed).
    For versioned transactions, appends meta.loadedAddresses (writable + readonly).
    """
    keys = message.get("accountKeys") or []
    out: list[str] = []
    for k in keys:
        if isinstance(k, str):
            out.append(k)
        elif isinstance(k, dict):
            out.append(str(k.get("pubkey") or ""))
    loaded = (meta or {}).get("loadedAddresses") or {}
    for role in ("writable", "readonly"):
        for addr in loaded.get(role) or []:
            if isinstance(addr, str):
                out.append(addr)
    return out


def _get_message_and_meta(raw: dict[str, Any]) -> tuple[dict[str, Any] | None, dict[str, Any] | None]:
    """Return (transaction.message, meta) from getTransaction-style result."""
    tx_obj = raw.get("transaction")
    if not tx_obj or not isinstance(tx_obj, dict):
        return None, None
    message = tx_obj.get("message")
    if not message or not isinstance(message, dict):
        return None, None
    meta = raw.get("meta")
    if not isinstance(meta, dict):
        meta = None
    return message, meta


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _first_signature(raw: dict[str, Any]) -> str | None:
    sigs = (raw.get("transaction") or {}).get("signatures") or []
    return sigs[0] if isinstance(sigs, list) and sigs and isinstance(sigs[0], str) else None


def parse_transaction_detail(raw: dict[str, Any] | None) -> TransactionDetail | None:
    """
    Parse a single getTransaction result into a TransactionDetail.

    Returns None when the payload has no message or no meta; a transaction
    without meta carries no balances and cannot be classified. Missing block
    time is preserved as None; the caller decides what to do with it.
    """
    if not raw or not isinstance(raw, dict):
        return None
    message, meta = _get_message_and_meta(raw)
    if message is None or meta is None:
        return None

    account_keys = _get_account_keys(message, meta)
    pre = meta.get("preBalances") or []
    post = meta.get("postBalances") or []
    participants: list[ParticipantBalance] = []
    for i, address in enumerate(account_keys):
        if not address or i >= len(pre) or i >= len(post):
            continue
        pre_balance, post_balance = _to_int(pre[i]), _to_int(post[i])
        if pre_balance is None or post_balance is None:
            continue
        participants.append(ParticipantBalance(address, pre_balance, post_balance))

    if len(pre) != len(account_keys) or len(post) != len(account_keys):
        logger.debug(
            "ledger_balance_length_mismatch",
            account_keys=len(account_keys),
            pre_balances=len(pre),
            post_balances=len(post),
        )

    fee = _to_int(meta.get("fee")) or 0
    return TransactionDetail(
        participants=tuple(participants),
        fee=max(fee, 0),
        error=meta.get("err"),
        block_time=_to_int(raw.get("blockTime")),
        slot=_to_int(raw.get("slot")),
        signature=_first_signature(raw),
    )
