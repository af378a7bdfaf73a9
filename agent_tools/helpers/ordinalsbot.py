"""
OrdinalsBot inscription API client (runes etching).
"""
from __future__ import annotations

import logging
from typing import Any

import requests

from agent_tools.config.network import get_http_timeout
from agent_tools.exceptions import NetworkError, ValidationError

logger = logging.getLogger(__name__)

ORDINALSBOT_API_URLS = {
    "mainnet": "https://api.ordinalsbot.com",
    "testnet": "https://testnet-api.ordinalsbot.com",
}


class InscriptionClient:
    def __init__(self, api_key: str, network: str = "testnet", timeout: int | None = None,
                 session: requests.Session | None = None):
        if network not in ORDINALSBOT_API_URLS:
            raise ValidationError("Network must be either 'testnet' or 'mainnet'")
        self.network = network
        self.api_url = ORDINALSBOT_API_URLS[network]
        self.timeout = timeout if timeout is not None else get_http_timeout()
        self.session = session or requests.Session()
        self.session.headers.update({"x-api-key": api_key, "Accept": "application/json"})

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.api_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
            return resp.json()
        except requests.exceptions.JSONDecodeError as exc:
            raise NetworkError(f"Malformed response from {url}: {exc}") from exc
        except requests.RequestException as exc:
            raise NetworkError(f"Request to {url} failed: {exc}") from exc

    def create_runes_etch_order(self, order: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/runes/etch", json=order)

    def get_order(self, order_id: str) -> dict[str, Any]:
        return self._request("GET", "/order", params={"id": order_id})
