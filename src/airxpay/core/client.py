"""
HTTP proxy functions for the AirXPay merchant backend.

Each function sends exactly one request, returns the parsed JSON body on
success, and raises an :class:`~airxpay.core.errors.AirXPayError` on any
failure.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import requests

from .config import SDKConfig
from .errors import (
    ConfigError,
    HttpError,
    PayloadValidationError,
    UnknownError,
    normalize_error,
)
from .validators import mask_public_key, validate_create_merchant, validate_public_key

__all__ = [
    "API_ENDPOINTS",
    "MerchantClient",
    "create_merchant",
    "get_merchant_status",
    "initialize_config",
    "refresh_token",
    "verify_public_key",
]

API_ENDPOINTS = {
    "CREATE_MERCHANT": "/api/merchant/create",
    "GET_MERCHANT_STATUS": "/api/merchant/status",
    "REFRESH_TOKEN": "/api/merchant/refresh-token",
    "VERIFY_PUBLIC_KEY": "/api/merchant/verify-public-key",
}

PUBLIC_KEY_HEADER = "X-Public-Key"


def _parse_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        if response.ok:
            raise UnknownError(
                f"Backend returned a non-JSON body with status {response.status_code}"
            )
        return {"message": response.text} if response.text else {}


def _request_json(
    session: requests.Session,
    config: SDKConfig,
    method: str,
    endpoint: str,
    *,
    public_key: str,
    body: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    url = config.endpoint_url(API_ENDPOINTS[endpoint])
    headers = {
        "Content-Type": "application/json",
        PUBLIC_KEY_HEADER: public_key,
    }
    response = session.request(
        method,
        url,
        json=body,
        headers=headers,
        timeout=config.timeout_seconds,
    )
    data = _parse_body(response)

    if not response.ok:
        raise HttpError(response.status_code, data)
    return data


def initialize_config(config: SDKConfig, public_key: str) -> SDKConfig:
    """
    Validate ``public_key`` and return a config holding it. No network call.
    """
    errors = validate_public_key(public_key)
    if errors:
        raise ConfigError(errors[0].message)

    new_config = config.with_public_key(public_key)
    new_config.log("AirXPay SDK initialized with public key: %s", mask_public_key(public_key))
    return new_config


def create_merchant(
    session: requests.Session,
    config: SDKConfig,
    payload: Mapping[str, Any],
) -> Dict[str, Any]:
    try:
        errors = validate_create_merchant(payload)
        if errors:
            raise PayloadValidationError(errors)

        config.log("Creating merchant for %s", payload.get("merchantEmail"))
        public_key = config.get_public_key()
        body = dict(payload)
        body["publicKey"] = public_key

        data = _request_json(
            session, config, "POST", "CREATE_MERCHANT", public_key=public_key, body=body
        )
        config.log("Merchant created successfully: %s", data)
        return data
    except Exception as exc:
        error = normalize_error(exc)
        config.error("Create merchant failed: %s", error.message)
        raise error


def get_merchant_status(session: requests.Session, config: SDKConfig) -> Dict[str, Any]:
    try:
        config.log("Fetching merchant status")
        data = _request_json(
            session,
            config,
            "GET",
            "GET_MERCHANT_STATUS",
            public_key=config.get_public_key(),
        )
        config.log("Merchant status fetched: %s", data)
        return data
    except Exception as exc:
        error = normalize_error(exc)
        config.error("Fetch status failed: %s", error.message)
        raise error


def refresh_token(session: requests.Session, config: SDKConfig) -> Dict[str, Any]:
    try:
        config.log("Refreshing token")
        data = _request_json(
            session,
            config,
            "POST",
            "REFRESH_TOKEN",
            public_key=config.get_public_key(),
        )
        config.log("Token refreshed successfully")
        return data
    except Exception as exc:
        error = normalize_error(exc)
        config.error("Token refresh failed: %s", error.message)
        raise error


def verify_public_key(
    session: requests.Session,
    config: SDKConfig,
    public_key: str,
) -> Dict[str, Any]:
    """
    Ask the backend whether ``public_key`` is valid.

    The key to verify is sent in the body; it need not be the configured one.
    """
    try:
        config.log("Verifying public key: %s", mask_public_key(public_key))
        errors = validate_public_key(public_key)
        if errors:
            raise PayloadValidationError(errors)

        data = _request_json(
            session,
            config,
            "POST",
            "VERIFY_PUBLIC_KEY",
            public_key=public_key,
            body={"publicKey": public_key},
        )
        config.log("Public key verified successfully")
        return data
    except Exception as exc:
        error = normalize_error(exc)
        config.error("Public key verification failed: %s", error.message)
        raise error


class MerchantClient:
    """
    Thin convenience wrapper around the merchant endpoints.

    The session keeps cookies between calls, so a token the backend sets on
    merchant creation is sent back on status and refresh requests.
    """

    def __init__(
        self,
        config: SDKConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    def create_merchant(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        return create_merchant(self.session, self.config, payload)

    def get_merchant_status(self) -> Dict[str, Any]:
        return get_merchant_status(self.session, self.config)

    def refresh_token(self) -> Dict[str, Any]:
        return refresh_token(self.session, self.config)

    def verify_public_key(self, public_key: Optional[str] = None) -> Dict[str, Any]:
        """Verify ``public_key``, or the configured key when omitted."""
        if public_key is None:
            try:
                public_key = self.config.get_public_key()
            except ConfigError as exc:
                self.config.error("Public key verification failed: %s", exc.message)
                raise
        return verify_public_key(self.session, self.config, public_key)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "MerchantClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
