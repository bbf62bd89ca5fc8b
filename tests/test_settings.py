"""
Tests for env resolution and Settings validation.
"""

from __future__ import annotations

import pytest

from backend_solwallet.config import get_settings
from backend_solwallet.config.env import (
    DEVNET_RPC_URL,
    MAINNET_RPC_URL,
    get_solana_rpc_url,
    mask_rpc_url,
)
from backend_solwallet.core.exceptions import ConfigError


def test_defaults():
    s = get_settings()
    assert s.solana_network == "devnet"
    assert s.solana_rpc_url == DEVNET_RPC_URL
    assert s.history_limit == 20
    assert s.fetch_concurrency == 4
    assert s.rpc_timeout_sec == 30.0
    assert s.use_synthetic_data is False
    assert s.explorer_cluster == "devnet"


def test_rpc_url_precedence(monkeypatch):
    monkeypatch.setenv("SOLANA_NETWORK", "mainnet-beta")
    assert get_solana_rpc_url() == MAINNET_RPC_URL
    monkeypatch.setenv("HELIUS_API_KEY", "k123")
    assert get_solana_rpc_url() == "https://mainnet.helius-rpc.com/?api-key=k123"
    monkeypatch.setenv("SOLANA_RPC_URL", "https://my.rpc")
    assert get_solana_rpc_url() == "https://my.rpc"


def test_helius_devnet(monkeypatch):
    monkeypatch.setenv("HELIUS_API_KEY", "k")
    assert get_solana_rpc_url() == "https://devnet.helius-rpc.com/?api-key=k"


def test_mainnet_explorer_cluster(monkeypatch):
    monkeypatch.setenv("SOLANA_NETWORK", "mainnet")
    assert get_settings().explorer_cluster == "mainnet-beta"


def test_numeric_overrides(monkeypatch):
    monkeypatch.setenv("HISTORY_LIMIT", "50")
    monkeypatch.setenv("HISTORY_FETCH_CONCURRENCY", "1")
    monkeypatch.setenv("SOLANA_RPC_TIMEOUT_SEC", "2.5")
    monkeypatch.setenv("SOLWALLET_USE_SYNTHETIC_DATA", "yes")
    s = get_settings()
    assert (s.history_limit, s.fetch_concurrency, s.rpc_timeout_sec) == (50, 1, 2.5)
    assert s.use_synthetic_data is True


@pytest.mark.parametrize(
    "name,value",
    [
        ("HISTORY_LIMIT", "abc"),
        ("HISTORY_LIMIT", "0"),
        ("HISTORY_FETCH_CONCURRENCY", "-2"),
        ("SOLANA_RPC_TIMEOUT_SEC", "fast"),
        ("SOLANA_RPC_TIMEOUT_SEC", "0"),
    ],
)
def test_invalid_numeric_env_raises(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigError, match=name):
        get_settings()


def test_mask_rpc_url():
    assert mask_rpc_url("https://mainnet.helius-rpc.com/?api-key=secret") == "https://mainnet.helius-rpc.com/?api-key=***"
    assert mask_rpc_url(DEVNET_RPC_URL) == DEVNET_RPC_URL
