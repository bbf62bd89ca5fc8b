"""
Tests for classify_detail: sign/magnitude law, status law, unit conversion, counterparties.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from backend_solwallet.history.classify import classify_detail, derive_status
from backend_solwallet.history.models import (
    SkipReason,
    Transaction,
    TransactionStatus,
    TransactionType,
    lamports_to_sol,
)
from backend_solwallet.ledger.models import ParticipantBalance, TransactionDetail
from tests.conftest import OTHER, THIRD, WATCHED, make_detail


@pytest.mark.parametrize(
    "pre,post,expected_type,expected_amount",
    [
        (1_000_000_000, 3_000_000_000, TransactionType.RECEIVE, Decimal("2")),
        (3_000_000_000, 1_000_000_000, TransactionType.SEND, Decimal("2")),
        (10, 11, TransactionType.RECEIVE, Decimal("0.000000001")),
    ],
)
def test_sign_and_magnitude(pre, post, expected_type, expected_amount):
    tx = classify_detail(make_detail(pre, post), WATCHED, "sig").transaction
    assert tx is not None
    assert tx.type is expected_type
    assert tx.amount == expected_amount
    assert tx.amount >= 0


def test_zero_delta_is_skipped():
    outcome = classify_detail(make_detail(5, 5), WATCHED, "sig")
    assert outcome.transaction is None
    assert outcome.skipped.reason is SkipReason.NO_BALANCE_CHANGE


def test_missing_block_time_is_skipped():
    outcome = classify_detail(make_detail(0, 10, block_time=None), WATCHED, "sig")
    assert outcome.skipped.reason is SkipReason.MISSING_BLOCK_TIME


def test_status_law():
    assert derive_status(make_detail(0, 1, error=None)) is TransactionStatus.SUCCESS
    assert derive_status(make_detail(0, 1, error={"err": 1})) is TransactionStatus.FAILED
    # Any non-null indicator counts, even a falsy one
    assert derive_status(make_detail(0, 1, error=0)) is TransactionStatus.FAILED


def test_unit_conversion_constants():
    assert lamports_to_sol(500_000_000) == Decimal("0.5")
    assert lamports_to_sol(5000) == Decimal("0.000005")
    tx = classify_detail(make_detail(1_000_000_000, 500_000_000, fee=5000), WATCHED, "sig").transaction
    assert tx.amount == Decimal("0.5")
    assert tx.fee == Decimal("0.000005")


def test_first_matching_participant_wins():
    detail = TransactionDetail(
        participants=(
            ParticipantBalance(OTHER, 0, 0),
            ParticipantBalance(WATCHED, 1_000_000_000, 2_000_000_000),
            ParticipantBalance(WATCHED, 2_000_000_000, 0),
        ),
        block_time=1,
    )
    tx = classify_detail(detail, WATCHED, "sig").transaction
    assert tx.type is TransactionType.RECEIVE
    assert tx.amount == Decimal("1")


def test_receive_counterparty_is_largest_outflow():
    detail = make_detail(
        0,
        1_000_000_000,
        others=[(OTHER, 2_000_000_000, 1_500_000_000), (THIRD, 5_000_000_000, 4_499_995_000)],
    )
    tx = classify_detail(detail, WATCHED, "sig").transaction
    assert tx.from_address == THIRD
    assert tx.to_address == WATCHED


def test_send_without_gaining_counterparty_leaves_to_empty():
    tx = classify_detail(make_detail(1_000_000_000, 999_995_000), WATCHED, "sig").transaction
    assert tx.from_address == WATCHED
    assert tx.to_address == ""


def test_timestamp_is_block_time_in_ms():
    tx = classify_detail(make_detail(0, 1, block_time=1_650_000_000), WATCHED, "sig").transaction
    assert tx.timestamp == 1_650_000_000_000
    assert tx.block_time == 1_650_000_000


def test_transaction_rejects_negative_amount_or_fee():
    with pytest.raises(ValueError):
        Transaction("s", 0, TransactionType.SEND, TransactionStatus.SUCCESS, Decimal("-1"), Decimal("0"))
    with pytest.raises(ValueError):
        Transaction("s", 0, TransactionType.SEND, TransactionStatus.SUCCESS, Decimal("1"), Decimal("-0.1"))


def test_to_dict_uses_dashboard_keys():
    tx = classify_detail(make_detail(2_000_000_000, 1_500_000_000, fee=5000), WATCHED, "S1").transaction
    d = tx.to_dict()
    assert d == {
        "signature": "S1",
        "timestamp": tx.timestamp,
        "type": "send",
        "status": "success",
        "amount": 0.5,
        "token": "SOL",
        "from": WATCHED,
        "to": "",
        "fee": 0.000005,
        "blockTime": tx.block_time,
    }
