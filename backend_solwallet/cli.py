"""
Print a wallet's reconstructed transaction history.

Usage:
  python -m backend_solwallet.cli history <address> [--limit 20] [--type send] [--json]
  python -m backend_solwallet.cli history <address> --rpc-url https://api.mainnet-beta.solana.com
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
import time
from dataclasses import replace
from typing import Sequence, TextIO

from backend_solwallet.config import get_settings
from backend_solwallet.config.env import mask_rpc_url
from backend_solwallet.history.display import (
    FILTER_ALL,
    FILTER_CHOICES,
    counterparty_label,
    filter_transactions,
    format_amount,
    format_fee,
)
from backend_solwallet.history.labels import format_transaction_type
from backend_solwallet.history.models import HistoryResult, Transaction
from backend_solwallet.history.reconstructor import load_history
from backend_solwallet.wallet_logging import get_logger

logger = get_logger(__name__)


def _age(timestamp_ms: int, now_ms: int) -> str:
    seconds = max(0, (now_ms - timestamp_ms) // 1000)
    if seconds < 60:
        return f"{seconds}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"


def render_table(transactions: Sequence[Transaction], now_ms: int) -> str:
    if not transactions:
        return "No transactions found"
    lines = []
    for tx in transactions:
        lines.append(
            "  ".join(
                [
                    f"{format_transaction_type(tx.type):<9}",
                    f"{tx.status.value:<7}",
                    f"{format_amount(tx):>18}",
                    f"{format_fee(tx):<20}",
                    f"{_age(tx.timestamp, now_ms):<8}",
                    f"{counterparty_label(tx):<24}",
                    tx.signature,
                ]
            ).rstrip()
        )
    return "\n".join(lines)


def render_json(address: str, result: HistoryResult, rows: Sequence[Transaction]) -> str:
    return json.dumps(
        {
            "address": address,
            "source": result.source.value,
            "count": len(rows),
            "transactions": [tx.to_dict() for tx in rows],
            "skipped": [s.to_dict() for s in result.skipped],
        },
        indent=2,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="backend_solwallet", description="Solana wallet history")
    sub = parser.add_subparsers(dest="command", required=True)
    history = sub.add_parser("history", help="Reconstruct recent transaction history for a wallet")
    history.add_argument("address", help="Wallet address (base58)")
    history.add_argument("--limit", type=int, default=None, help="Signatures to consider (default: HISTORY_LIMIT or 20)")
    history.add_argument("--type", dest="kind", choices=FILTER_CHOICES, default=FILTER_ALL)
    history.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    history.add_argument("--rpc-url", default=None, help="Override SOLANA_RPC_URL")
    return parser


def main(argv: Sequence[str] | None = None, out: TextIO | None = None, err: TextIO | None = None) -> int:
    out = out or sys.stdout
    err = err or sys.stderr
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.limit is not None and args.limit < 1:
        parser.error("--limit must be >= 1")

    settings = get_settings()
    if args.rpc_url:
        settings = replace(settings, solana_rpc_url=args.rpc_url)
    logger.debug("cli_history_start", rpc_url=mask_rpc_url(settings.solana_rpc_url))

    result = asyncio.run(load_history(args.address, args.limit, settings=settings))
    rows = filter_transactions(result.transactions, args.kind)
    if result.is_degraded:
        print(f"warning: showing synthetic data ({result.error or 'synthetic mode'})", file=err)

    if args.json:
        print(render_json(args.address, result, rows), file=out)
    else:
        print(render_table(rows, int(time.time() * 1000)), file=out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
