"""
SolWallet API Python client.

Uses the requests library against the FastAPI server in api_server.

Usage:
    from backend_solwallet.api_client import WalletHistoryClient
    client = WalletHistoryClient("http://localhost:8000")
    history = client.get_transactions("7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU", limit=10)
"""

from __future__ import annotations

from typing import Any

import requests


class WalletHistoryClientError(Exception):
    """Raised when the API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None, response: requests.Response | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class WalletHistoryClient:
    """Client for the wallet history API."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def _request(self, method: str, path: str, *, params: dict[str, Any] | None = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        resp = self._session.request(method, url, params=params, timeout=self.timeout)
        if not resp.ok:
            if resp.headers.get("content-type", "").startswith("application/json"):
                detail = resp.json().get("detail", resp.text)
            else:
                detail = resp.text
            raise WalletHistoryClientError(
                f"API error: {detail}",
                status_code=resp.status_code,
                response=resp,
            )
        return resp

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/health").json()

    def get_transactions(self, address: str, limit: int = 20, type: str = "all") -> dict[str, Any]:
        """
        Get reconstructed history for a wallet.

        Returns the response body: address, source (live | synthetic), count,
        transactions, skipped.
        """
        return self._request(
            "GET",
            f"/wallet/{address}/transactions",
            params={"limit": limit, "type": type},
        ).json()
