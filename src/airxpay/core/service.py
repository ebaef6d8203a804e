"""
Stateful entry point used by embedding applications.

:class:`AirXPayService` starts uninitialized. A successful
:meth:`AirXPayService.initialize` makes it ready; every other operation
refuses to run before that.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests

from .client import MerchantClient, initialize_config
from .config import SDKConfig
from .errors import AirXPayError, ConfigError, NotInitializedError
from .validators import mask_public_key

__all__ = ["AirXPayService", "airxpay_service"]

logger = logging.getLogger(__name__)


def _field(body: Any, *path: str) -> Any:
    """Read a nested key for logging; ``None`` when the body is not shaped that way."""
    for key in path:
        if not isinstance(body, Mapping):
            return None
        body = body.get(key)
    return body


class AirXPayService:
    def __init__(
        self,
        config: Optional[SDKConfig] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._config = config or SDKConfig()
        self._session = session
        self._client: Optional[MerchantClient] = None
        self._initialized = False

    @property
    def config(self) -> SDKConfig:
        return self._client.config if self._client is not None else self._config

    def initialize(
        self,
        public_key: str,
        *,
        verify: bool = False,
        config: Optional[SDKConfig] = None,
    ) -> None:
        """
        Initialize the SDK with ``public_key``.

        ``config`` replaces the base configuration (backend URL, timeout,
        debug flag) when given. With ``verify=True`` the key is also checked
        against the backend and the service is left as it was unless the
        backend reports it valid. Calling this again replaces the key.
        """
        try:
            if not isinstance(public_key, str) or not public_key.strip():
                raise ConfigError("Public key is required")

            base_config = config or self._config
            ready_config = initialize_config(base_config, public_key)
            client = MerchantClient(ready_config, session=self._session)

            if verify:
                result = client.verify_public_key(public_key)
                if not _field(result, "valid"):
                    raise ConfigError("Public key was rejected by the backend")

            self._config = base_config
            self._client = client
            self._initialized = True
            logger.info("AirXPay SDK initialized with key %s", mask_public_key(public_key))
        except AirXPayError as exc:
            logger.error("Failed to initialize AirXPay SDK: %s", exc.message)
            raise

    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def is_ready(self) -> bool:
        return self._initialized

    def create_merchant(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Create the merchant. Called on the final onboarding step."""
        client = self._check_initialized()
        email = payload.get("merchantEmail") if isinstance(payload, Mapping) else None
        try:
            logger.info("Creating merchant for %s", email)
            response = client.create_merchant(payload)
            logger.info(
                "Merchant created successfully: %s", _field(response, "merchant", "merchantId")
            )
            return response
        except AirXPayError as exc:
            self._log_failure("create merchant", exc)
            raise

    def get_merchant_status(self) -> Dict[str, Any]:
        client = self._check_initialized()
        try:
            logger.info("Fetching merchant status")
            response = client.get_merchant_status()
            logger.info("Merchant status retrieved: %s", _field(response, "status"))
            return response
        except AirXPayError as exc:
            self._log_failure("get merchant status", exc)
            raise

    def refresh_token(self) -> Dict[str, Any]:
        client = self._check_initialized()
        try:
            logger.info("Refreshing merchant token")
            response = client.refresh_token()
            logger.info("Token refreshed successfully")
            return response
        except AirXPayError as exc:
            self._log_failure("refresh token", exc)
            raise

    def verify_public_key(self, public_key: Optional[str] = None) -> Dict[str, Any]:
        """Verify ``public_key`` against the backend, defaulting to the configured key."""
        client = self._check_initialized()
        try:
            key = public_key if public_key is not None else client.config.public_key
            logger.info("Verifying public key %s", mask_public_key(key))
            response = client.verify_public_key(public_key)
            logger.info("Public key verification returned valid=%s", _field(response, "valid"))
            return response
        except AirXPayError as exc:
            self._log_failure("verify public key", exc)
            raise

    def _check_initialized(self) -> MerchantClient:
        if not self._initialized or self._client is None:
            raise NotInitializedError()
        return self._client

    @staticmethod
    def _log_failure(operation: str, exc: AirXPayError) -> None:
        status_code = getattr(exc, "status_code", None)
        if status_code is not None:
            logger.error("Failed to %s (HTTP %s): %s", operation, status_code, exc.message)
        else:
            logger.error("Failed to %s: %s", operation, exc.message)


# Default instance shared by the module-level helpers in ``airxpay.api``.
airxpay_service = AirXPayService()
