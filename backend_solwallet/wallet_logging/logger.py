"""
structlog configuration for backend_solwallet.

Every record carries an ISO timestamp, the level, the emitting module and an
event_type name (history_reconstructed, history_item_skipped, ...). Wallet
addresses are bound in shortened form via bind_wallet().

Imports nothing from backend_solwallet, so any module can import it first.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# anything but LOG_FORMAT=json gets the dev console renderer
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Stamp UTC time unless the caller supplied one."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Expose structlog's positional event as event_type and mirror it into message."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def _renderer() -> Any:
    if LOG_FORMAT == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_structlog() -> None:
    """Install the processor chain; rendering follows LOG_FORMAT."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
        _renderer(),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        # stderr keeps CLI stdout clean for --json output
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Logger for a module, with `logger` bound to its name.

        log = get_logger(__name__)
        log.info("api_history_served", source="live", count=12)
    """
    return structlog.get_logger(name).bind(logger=name)


def short_address(address: str) -> str:
    """Truncate an address for log lines (first 8 chars + '...')."""
    return address[:8] + "..." if len(address) > 8 else address


def bind_wallet(wallet_id: str, name: str = "backend_solwallet") -> structlog.BoundLogger:
    """Module logger with the shortened wallet address bound as wallet_id."""
    return get_logger(name).bind(wallet_id=short_address(wallet_id))
