"""
Application-level exceptions.

Ledger errors are raised by the RPC client and absorbed by the history
reconstructor; they never reach the dashboard as failures. ConfigError is
raised while loading settings.
"""

from __future__ import annotations

from typing import Any


class SolWalletError(Exception):
    """Base class for all backend_solwallet errors."""


class ConfigError(SolWalletError):
    """Invalid or inconsistent configuration value."""


class LedgerError(SolWalletError):
    """Generic fetch error from the ledger (Solana RPC) boundary."""


class LedgerTransportError(LedgerError):
    """HTTP-level failure: connection refused, timeout, non-2xx status, bad JSON."""


class LedgerRPCError(LedgerError):
    """JSON-RPC level failure: the node answered with an error object or no result."""

    def __init__(self, message: str, code: Any = None) -> None:
        super().__init__(f"Solana RPC error: {message} (code={code})")
        self.rpc_message = message
        self.code = code
