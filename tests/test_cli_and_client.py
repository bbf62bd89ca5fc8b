"""
Tests for the history CLI (load_history mocked) and the requests-based API client.
"""

from __future__ import annotations

import io
import json
from unittest.mock import MagicMock, patch

import pytest

from backend_solwallet import cli
from backend_solwallet.api_client import WalletHistoryClient, WalletHistoryClientError
from backend_solwallet.history.fallback import synthetic_transactions
from backend_solwallet.history.models import HistoryResult, HistorySource
from tests.conftest import WATCHED


def _fake_load(result: HistoryResult):
    async def _load(address, limit=None, *, settings=None):
        _load.calls.append((address, limit, settings))
        return result

    _load.calls = []
    return _load


def test_cli_json_output_for_live_history():
    txs = tuple(synthetic_transactions(1_700_000_000_000)[:2])
    fake = _fake_load(HistoryResult(transactions=txs, source=HistorySource.LIVE))
    out, err = io.StringIO(), io.StringIO()
    with patch.object(cli, "load_history", fake):
        code = cli.main(["history", WATCHED, "--limit", "5", "--json"], out=out, err=err)

    assert code == 0
    data = json.loads(out.getvalue())
    assert data["source"] == "live"
    assert data["count"] == 2
    assert [t["type"] for t in data["transactions"]] == ["send", "receive"]
    assert err.getvalue() == ""
    assert fake.calls[0][:2] == (WATCHED, 5)


def test_cli_table_warns_on_synthetic_and_filters():
    txs = tuple(synthetic_transactions())
    fake = _fake_load(HistoryResult(transactions=txs, source=HistorySource.SYNTHETIC, error="rpc down"))
    out, err = io.StringIO(), io.StringIO()
    with patch.object(cli, "load_history", fake):
        code = cli.main(["history", WATCHED, "--type", "swap"], out=out, err=err)

    assert code == 0
    assert "synthetic" in err.getvalue()
    assert "rpc down" in err.getvalue()
    lines = out.getvalue().strip().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("Swapped")
    assert "50.0000 RAY" in lines[0]
    assert "2d ago" in lines[0]


def test_cli_rpc_url_override_reaches_settings():
    fake = _fake_load(HistoryResult(transactions=()))
    out = io.StringIO()
    with patch.object(cli, "load_history", fake):
        cli.main(["history", WATCHED, "--rpc-url", "https://custom.rpc"], out=out, err=io.StringIO())
    assert fake.calls[0][2].solana_rpc_url == "https://custom.rpc"
    assert out.getvalue().strip() == "No transactions found"


def test_cli_rejects_bad_limit():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["history", WATCHED, "--limit", "0"], out=io.StringIO(), err=io.StringIO())
    assert excinfo.value.code == 2


def _response(status: int, body, content_type: str = "application/json") -> MagicMock:
    resp = MagicMock()
    resp.ok = 200 <= status < 300
    resp.status_code = status
    resp.headers = {"content-type": content_type}
    resp.json.return_value = body
    resp.text = json.dumps(body) if not isinstance(body, str) else body
    return resp


def test_api_client_get_transactions():
    session = MagicMock()
    session.request.return_value = _response(200, {"address": WATCHED, "source": "live", "count": 0, "transactions": []})
    client = WalletHistoryClient("http://api.test/", session=session)

    body = client.get_transactions(WATCHED, limit=5, type="send")

    assert body["source"] == "live"
    session.request.assert_called_once_with(
        "GET",
        f"http://api.test/wallet/{WATCHED}/transactions",
        params={"limit": 5, "type": "send"},
        timeout=30.0,
    )


def test_api_client_error_carries_detail_and_status():
    session = MagicMock()
    session.request.return_value = _response(400, {"detail": "Invalid Solana wallet address"})
    client = WalletHistoryClient("http://api.test", session=session)

    with pytest.raises(WalletHistoryClientError) as excinfo:
        client.get_transactions("bad")
    assert excinfo.value.status_code == 400
    assert "Invalid Solana wallet address" in str(excinfo.value)


def test_api_client_non_json_error():
    session = MagicMock()
    session.request.return_value = _response(502, "Bad Gateway", content_type="text/html")
    client = WalletHistoryClient("http://api.test", session=session)
    with pytest.raises(WalletHistoryClientError, match="Bad Gateway"):
        client.health()
