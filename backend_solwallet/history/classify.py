"""
Classify a decoded TransactionDetail for the watched address.

Native balance delta of the first matching participant decides direction:
positive is a receive, negative a send, zero (or no participation) means
the record carries no evidence for this wallet and is dropped.
"""

from __future__ import annotations

from backend_solwallet.history.models import (
    NATIVE_TOKEN,
    DecodeOutcome,
    SkipReason,
    Transaction,
    TransactionStatus,
    TransactionType,
    lamports_to_sol,
)
from backend_solwallet.ledger.models import TransactionDetail


def derive_status(detail: TransactionDetail) -> TransactionStatus:
    return TransactionStatus.FAILED if detail.error is not None else TransactionStatus.SUCCESS


def _largest_counterparty(detail: TransactionDetail, watched: str, *, inflow: bool) -> str:
    """
    Other participant with the largest inflow (inflow=True) or outflow.
    Sender = biggest loser, receiver = biggest gainer; ties keep message order.
    """
    best_address = ""
    best_delta = 0
    for participant in detail.participants:
        if participant.address == watched:
            continue
        delta = participant.delta if inflow else -participant.delta
        if delta > best_delta:
            best_delta = delta
            best_address = participant.address
    return best_address


def classify_detail(
    detail: TransactionDetail,
    watched_address: str,
    signature: str,
) -> DecodeOutcome:
    """
    Turn one decoded transaction into a Transaction, or a skip with its reason.

    Missing block time is undecodable; a zero delta or absent watched
    address yields no record.
    """
    if detail.block_time is None:
        return DecodeOutcome.skip(signature, SkipReason.MISSING_BLOCK_TIME)

    participant = detail.find_participant(watched_address)
    if participant is None:
        return DecodeOutcome.skip(signature, SkipReason.NOT_INVOLVED)
    delta = participant.delta
    if delta == 0:
        return DecodeOutcome.skip(signature, SkipReason.NO_BALANCE_CHANGE)

    if delta > 0:
        tx_type = TransactionType.RECEIVE
        from_address = _largest_counterparty(detail, watched_address, inflow=False)
        to_address = watched_address
    else:
        tx_type = TransactionType.SEND
        from_address = watched_address
        to_address = _largest_counterparty(detail, watched_address, inflow=True)

    return DecodeOutcome.ok(
        Transaction(
            signature=signature,
            timestamp=detail.block_time * 1000,
            type=tx_type,
            status=derive_status(detail),
            amount=abs(lamports_to_sol(delta)),
            fee=lamports_to_sol(detail.fee),
            token=NATIVE_TOKEN,
            from_address=from_address,
            to_address=to_address,
            block_time=detail.block_time,
        )
    )
