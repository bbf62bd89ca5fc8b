"""
Application settings.

Loads configuration from environment variables (and .env via env.py),
validates numeric values, and exposes a frozen Settings dataclass used by
the RPC client, the history reconstructor, the API server and the CLI.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from backend_solwallet.config.env import (
    get_solana_network,
    get_solana_rpc_url,
    load_solwallet_env,
    use_synthetic_data,
)
from backend_solwallet.core.exceptions import ConfigError

DEFAULT_RPC_TIMEOUT_SEC = 30.0
DEFAULT_HISTORY_LIMIT = 20
DEFAULT_FETCH_CONCURRENCY = 4
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8000


@dataclass(frozen=True)
class Settings:
    """Typed view over the process environment."""

    solana_network: str
    solana_rpc_url: str
    rpc_timeout_sec: float = DEFAULT_RPC_TIMEOUT_SEC
    history_limit: int = DEFAULT_HISTORY_LIMIT
    fetch_concurrency: int = DEFAULT_FETCH_CONCURRENCY
    use_synthetic_data: bool = False
    api_host: str = DEFAULT_API_HOST
    api_port: int = DEFAULT_API_PORT

    @property
    def explorer_cluster(self) -> str:
        """Cluster name for explorer links (mainnet links carry no cluster param)."""
        return "mainnet-beta" if self.solana_network == "mainnet" else self.solana_network


def _env_int(name: str, default: int, *, minimum: int = 1) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def get_settings() -> Settings:
    """
    Return the current application settings.

    Re-reads the environment on every call so tests can monkeypatch env vars.

    Raises:
        ConfigError: a numeric variable is malformed or out of range.
    """
    load_solwallet_env()
    return Settings(
        solana_network=get_solana_network(),
        solana_rpc_url=get_solana_rpc_url(),
        rpc_timeout_sec=_env_float("SOLANA_RPC_TIMEOUT_SEC", DEFAULT_RPC_TIMEOUT_SEC),
        history_limit=_env_int("HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT),
        fetch_concurrency=_env_int("HISTORY_FETCH_CONCURRENCY", DEFAULT_FETCH_CONCURRENCY),
        use_synthetic_data=use_synthetic_data(),
        api_host=(os.getenv("API_HOST") or DEFAULT_API_HOST).strip(),
        api_port=_env_int("API_PORT", DEFAULT_API_PORT),
    )
