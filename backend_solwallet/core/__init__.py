"""
Core utilities: shared exceptions and cross-cutting concerns.
"""

from backend_solwallet.core.exceptions import (
    ConfigError,
    LedgerError,
    LedgerRPCError,
    LedgerTransportError,
    SolWalletError,
)

__all__ = [
    "ConfigError",
    "LedgerError",
    "LedgerRPCError",
    "LedgerTransportError",
    "SolWalletError",
]
