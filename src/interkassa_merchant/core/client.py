"""
Authenticated HTTP client for the Interkassa REST API.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests
from requests.auth import HTTPBasicAuth

from .cache import (
    CURRENCY_KEY,
    INPUT_PAYWAYS_KEY,
    OUTPUT_PAYWAYS_KEY,
    CacheBackend,
    InMemoryCache,
    read_through,
)
from .config import MerchantConfig
from .errors import GatewayError
from .payloads import flatten_form

__all__ = [
    "ACCOUNT_HEADER",
    "ApiClient",
]

ACCOUNT_HEADER = "Ik-Api-Account-Id"


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _decode(response: requests.Response, url: str) -> Dict[str, Any]:
    try:
        payload = response.json()
    except ValueError as exc:
        if response.ok:
            raise GatewayError(
                f"Failed to parse JSON from gateway at {url}",
                status_code=response.status_code,
            ) from exc
        return {}
    return payload if isinstance(payload, dict) else {}


class ApiClient:
    """
    Sends single-attempt, Basic-authenticated calls to the gateway API.

    A call succeeds only when the HTTP response is OK *and* the gateway
    ``code`` is zero.
    """

    def __init__(
        self,
        config: MerchantConfig,
        *,
        session: Optional[requests.Session] = None,
        cache: Optional[CacheBackend] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.cache: CacheBackend = cache if cache is not None else InMemoryCache()

    def request(
        self,
        method: str,
        path: str,
        account_id: Optional[str] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        url = self.config.api_url + path
        headers: Dict[str, str] = {}
        if account_id is not None:
            headers[ACCOUNT_HEADER] = account_id

        kwargs: Dict[str, Any] = {
            "headers": headers,
            "auth": HTTPBasicAuth(self.config.api_user_id, self.config.api_user_key),
            "timeout": self.config.timeout_seconds,
        }
        if data:
            kwargs["data"] = flatten_form(data)

        logging.info("Requesting %s %s", method, url)
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            raise GatewayError(f"transport failure: {exc}") from exc

        payload = _decode(response, url)
        code = _as_int(payload.get("code"))

        if response.ok and code == 0:
            return payload.get("data")

        message = payload.get("message") or str(response.status_code)
        logging.warning(
            "Gateway rejected %s %s: status=%s code=%s message=%s",
            method,
            url,
            response.status_code,
            payload.get("code"),
            message,
        )
        raise GatewayError(str(message), status_code=response.status_code, code=code)

    def get_accounts(self) -> Any:
        """List the accounts available to the API user."""
        return self.request("GET", "account")

    def get_currencies(self) -> Any:
        return read_through(self.cache, CURRENCY_KEY, lambda: self.request("GET", "currency"))

    def get_input_payways(self) -> Any:
        """Payment directions available for deposits."""
        return read_through(
            self.cache,
            INPUT_PAYWAYS_KEY,
            lambda: self.request("GET", "paysystem-input-payway"),
        )

    def get_output_payways(self) -> Any:
        """
        Payment directions available for withdrawals.

        Each entry carries the payway id, its alias (``als``) and the keys of
        the details required to create a withdrawal (``prm``).
        """
        return read_through(
            self.cache,
            OUTPUT_PAYWAYS_KEY,
            lambda: self.request("GET", "paysystem-output-payway"),
        )
