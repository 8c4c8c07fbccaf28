"""Shared fixtures for the Interkassa merchant tests."""

from __future__ import annotations

from typing import Any, Callable, Dict, Tuple
from unittest.mock import MagicMock

import pytest
import requests

from interkassa_merchant import InMemoryCache, MerchantConfig

API_URL = "https://api.interkassa.com/v1/"

_NO_JSON = object()


class FakeResponse:
    """Minimal stand-in for :class:`requests.Response`."""

    def __init__(self, payload: Any = None, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._payload is _NO_JSON:
            raise ValueError("No JSON object could be decoded")
        return self._payload


def gateway_ok(data: Any) -> Dict[str, Any]:
    return {"status": "ok", "code": 0, "data": data, "message": "Success"}


def not_json(status_code: int = 200) -> FakeResponse:
    return FakeResponse(_NO_JSON, status_code=status_code)


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def config() -> MerchantConfig:
    return MerchantConfig(
        co_id="co-123",
        secret_key="live-secret",
        test_key="test-secret",
        api_user_id="user-1",
        api_user_key="key-1",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> InMemoryCache:
    return InMemoryCache(clock=clock)


RouteTable = Dict[Tuple[str, str], Any]


@pytest.fixture
def make_session() -> Callable[[RouteTable], MagicMock]:
    """
    Build a session whose ``request`` answers from a ``(method, path)`` table.

    Table values are gateway ``data`` payloads, ready-made :class:`FakeResponse`
    objects, or exceptions to raise.
    """

    def _make(routes: RouteTable) -> MagicMock:
        session = MagicMock(spec=requests.Session)

        def _request(method: str, url: str, **kwargs: Any) -> FakeResponse:
            path = url[len(API_URL):]
            answer = routes[(method, path)]
            if isinstance(answer, Exception):
                raise answer
            if isinstance(answer, FakeResponse):
                return answer
            return FakeResponse(gateway_ok(answer))

        session.request.side_effect = _request
        return session

    return _make


def calls_to(session: MagicMock, method: str, path: str) -> list:
    return [
        call
        for call in session.request.call_args_list
        if call.args[0] == method and call.args[1] == API_URL + path
    ]
