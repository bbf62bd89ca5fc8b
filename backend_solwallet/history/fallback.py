"""
Synthetic history served when the live signature listing fails.

Five fixed example transactions; only their times move with the clock.
"""

from __future__ import annotations

import time
from decimal import Decimal

from backend_solwallet.history.models import Transaction, TransactionStatus, TransactionType

HOUR_MS = 3_600_000
DAY_MS = 24 * HOUR_MS

# (signature, age_ms, type, status, amount, token, from, to, fee)
_SYNTHETIC_ROWS: tuple[tuple[str, int, TransactionType, TransactionStatus, str, str, str, str, str], ...] = (
    (
        "5j7s8K9mN2pQ3rT4uV6wX7yZ8aB1cD2eF3gH4iJ5kL6mN7oP8qR9sT0uV1wX2yZ3",
        HOUR_MS,
        TransactionType.SEND,
        TransactionStatus.SUCCESS,
        "0.5",
        "SOL",
        "11111111111111111111111111111112",
        "22222222222222222222222222222223",
        "0.000005",
    ),
    (
        "4i6r7K8mL1nO2pP3qR4sS5tT6uU7vV8wW9xX0yY1zZ2aA3bB4cC5dD6eE7fF8gG9",
        2 * HOUR_MS,
        TransactionType.RECEIVE,
        TransactionStatus.SUCCESS,
        "1.25",
        "SOL",
        "33333333333333333333333333333334",
        "11111111111111111111111111111112",
        "0.000005",
    ),
    (
        "3h5q6J7kK8lL9mM0nN1oO2pP3qQ4rR5sS6tT7uU8vV9wW0xX1yY2zZ3aA4bB5cC6",
        DAY_MS,
        TransactionType.SEND,
        TransactionStatus.SUCCESS,
        "100.0",
        "USDC",
        "11111111111111111111111111111112",
        "44444444444444444444444444444445",
        "0.000005",
    ),
    (
        "2g4p5I6jJ7kK8lL9mM0nN1oO2pP3qQ4rR5sS6tT7uU8vV9wW0xX1yY2zZ3aA4bB5",
        2 * DAY_MS,
        TransactionType.SWAP,
        TransactionStatus.SUCCESS,
        "50.0",
        "RAY",
        "11111111111111111111111111111112",
        "11111111111111111111111111111112",
        "0.000025",
    ),
    (
        "1f3o4H5iI6jJ7kK8lL9mM0nN1oO2pP3qQ4rR5sS6tT7uU8vV9wW0xX1yY2zZ3aA4",
        3 * DAY_MS,
        TransactionType.SEND,
        TransactionStatus.FAILED,
        "0.1",
        "SOL",
        "11111111111111111111111111111112",
        "55555555555555555555555555555556",
        "0.000005",
    ),
)


def synthetic_transactions(now_ms: int | None = None) -> list[Transaction]:
    """Return the synthetic dataset, newest first, timed relative to now_ms."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    out: list[Transaction] = []
    for signature, age_ms, tx_type, status, amount, token, sender, receiver, fee in _SYNTHETIC_ROWS:
        timestamp = now_ms - age_ms
        out.append(
            Transaction(
                signature=signature,
                timestamp=timestamp,
                type=tx_type,
                status=status,
                amount=Decimal(amount),
                fee=Decimal(fee),
                token=token,
                from_address=sender,
                to_address=receiver,
                block_time=timestamp // 1000,
            )
        )
    return out
