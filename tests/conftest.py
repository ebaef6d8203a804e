"""
Shared fixtures.

Provides:
- A valid public key and a config pointing at a fake backend
- A fake ``requests.Response``
- A ``requests.Session`` double that replays canned responses or errors
"""

from typing import Any, Callable, Optional
from unittest.mock import MagicMock

import pytest
import requests

from airxpay import SDKConfig

BACKEND_URL = "https://backend.test"
VALID_PUBLIC_KEY = "pk_test_1234567890abcdef"

_NO_BODY = object()


class FakeResponse:
    """Just enough of ``requests.Response`` for the client code."""

    def __init__(self, status_code: int = 200, body: Any = _NO_BODY, text: Optional[str] = None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else ("" if body is _NO_BODY else repr(body))

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._body is _NO_BODY:
            raise ValueError("No JSON object could be decoded")
        return self._body


@pytest.fixture
def public_key() -> str:
    return VALID_PUBLIC_KEY


@pytest.fixture
def base_config() -> SDKConfig:
    return SDKConfig(backend_url=BACKEND_URL)


@pytest.fixture
def ready_config(base_config: SDKConfig) -> SDKConfig:
    return base_config.with_public_key(VALID_PUBLIC_KEY)


@pytest.fixture
def make_session() -> Callable[..., MagicMock]:
    """
    Build a session double. Each positional item is returned (or raised, if
    it is an exception) by successive ``session.request`` calls.
    """

    def factory(*outcomes: Any) -> MagicMock:
        session = MagicMock(spec=requests.Session)
        session.request.side_effect = list(outcomes)
        return session

    return factory


@pytest.fixture
def merchant_payload() -> dict:
    return {
        "merchantName": "Jane Doe",
        "merchantEmail": "jane@example.com",
        "businessName": "Doe Coffee Roasters",
        "country": "US",
        "mode": "test",
    }


@pytest.fixture
def response() -> Callable[..., FakeResponse]:
    return FakeResponse
