"""
Error family raised by the SDK and the normalizer that maps anything
raised during a backend call onto it.

Every failure that reaches a caller is an :class:`AirXPayError`. Subclasses
tell the failure kinds apart; ``message`` always holds the human-readable
text.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

import requests

from .validators import FieldError

__all__ = [
    "AirXPayError",
    "ConfigError",
    "HttpError",
    "NetworkError",
    "NotInitializedError",
    "PayloadValidationError",
    "UnknownError",
    "NETWORK_ERROR_MESSAGE",
    "NOT_INITIALIZED_MESSAGE",
    "message_from_body",
    "normalize_error",
]

NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."
NOT_INITIALIZED_MESSAGE = "AirXPay SDK not initialized. Call initialize() first."
VALIDATION_FAILED_MESSAGE = "Validation failed"

_MESSAGE_KEYS = ("message", "userMessage", "error")


def message_from_body(data: Any) -> Optional[str]:
    """
    Pull the first usable message out of a backend error body.

    ``message`` wins over ``userMessage``, which wins over ``error``.
    """
    if not isinstance(data, Mapping):
        return None
    for key in _MESSAGE_KEYS:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


class AirXPayError(Exception):
    """Base class for every error surfaced by the SDK."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigError(AirXPayError):
    """Raised when the supplied configuration is invalid or incomplete."""


class NotInitializedError(AirXPayError):
    """Raised by the service when an operation runs before ``initialize``."""

    def __init__(self, message: str = NOT_INITIALIZED_MESSAGE):
        super().__init__(message)


class HttpError(AirXPayError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status_code: int, data: Any = None):
        self.status_code = status_code
        self.data = data if data is not None else {}
        message = message_from_body(self.data) or f"Request failed with status {status_code}"
        super().__init__(message)


class PayloadValidationError(HttpError):
    """
    Local validation failure, shaped like a 422 response so it travels the
    same path as errors reported by the backend. Nothing was sent.
    """

    def __init__(self, errors: Sequence[FieldError]):
        self.errors: List[FieldError] = list(errors)
        data: Dict[str, Any] = {
            "message": VALIDATION_FAILED_MESSAGE,
            "userMessage": self.errors[0].message if self.errors else VALIDATION_FAILED_MESSAGE,
            "errors": [error.as_dict() for error in self.errors],
        }
        super().__init__(422, data)

    @property
    def fields(self) -> List[str]:
        return [error.field for error in self.errors]

    @property
    def user_message(self) -> str:
        return self.data["userMessage"]


class NetworkError(AirXPayError):
    """The request was sent but no response came back."""

    def __init__(self, message: str = NETWORK_ERROR_MESSAGE):
        super().__init__(message)


class UnknownError(AirXPayError):
    """Anything else. The original exception is chained as ``__cause__``."""


def _response_data(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {"message": response.text} if response.text else {}


def normalize_error(exc: BaseException) -> AirXPayError:
    """
    Map ``exc`` onto the SDK error family. Never raises.

    SDK errors pass through unchanged. Transport errors carrying a response
    become :class:`HttpError`. Connection failures and timeouts, where the
    request went out but nothing came back, become :class:`NetworkError`.
    Anything else becomes :class:`UnknownError`.
    """
    if isinstance(exc, AirXPayError):
        return exc

    response = getattr(exc, "response", None)
    error: AirXPayError
    if isinstance(exc, requests.RequestException) and response is not None:
        try:
            error = HttpError(response.status_code, _response_data(response))
        except Exception:  # noqa: BLE001
            error = UnknownError(str(exc) or type(exc).__name__)
    elif isinstance(exc, (requests.ConnectionError, requests.Timeout)):
        error = NetworkError()
    else:
        error = UnknownError(str(exc) or type(exc).__name__)

    error.__cause__ = exc
    return error
