"""
Public, high-level helpers for onboarding merchants with AirXPay.

The free functions operate on the shared :data:`airxpay_service` instance;
applications that need isolated state can build their own
:class:`AirXPayService` or :class:`MerchantClient` instead.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import requests

from .core.client import MerchantClient
from .core.config import SDKConfig, SDKParameters, load_sdk_config
from .core.errors import ConfigError
from .core.service import AirXPayService, airxpay_service

__all__ = [
    "create_merchant",
    "create_merchant_client",
    "get_default_service",
    "get_merchant_status",
    "initialize",
    "is_ready",
    "refresh_token",
    "verify_public_key",
]


def _resolve_config(
    config: Optional[SDKConfig],
    *,
    env_file: Optional[str],
    overrides: Optional[Mapping[str, str]],
    base: Optional[Mapping[str, str]],
    parameters: Optional[SDKParameters],
    public_key: Optional[str],
    backend_url: Optional[str],
    timeout_seconds: Optional[float | int | str],
    debug: Optional[bool | str],
) -> SDKConfig:
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            public_key,
            backend_url,
            timeout_seconds,
            debug,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built SDKConfig or individual parameters, not both."
            )
        return config

    return load_sdk_config(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        public_key=public_key,
        backend_url=backend_url,
        timeout_seconds=timeout_seconds,
        debug=debug,
    )


def create_merchant_client(
    *,
    config: Optional[SDKConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[SDKParameters] = None,
    public_key: Optional[str] = None,
    backend_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
    debug: Optional[bool | str] = None,
) -> MerchantClient:
    """
    Construct a :class:`MerchantClient`.

    Callers can either supply a ready-made :class:`SDKConfig` or let the
    helper assemble one from environment data. The resulting config must
    carry a public key.
    """
    cfg = _resolve_config(
        config,
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        public_key=public_key,
        backend_url=backend_url,
        timeout_seconds=timeout_seconds,
        debug=debug,
    )
    if not cfg.public_key:
        raise ConfigError("A public key is required; set AIRXPAY_PUBLIC_KEY or pass public_key")
    return MerchantClient(cfg, session=session)


def get_default_service() -> AirXPayService:
    return airxpay_service


def initialize(
    public_key: str,
    *,
    verify: bool = False,
    config: Optional[SDKConfig] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    backend_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
    debug: Optional[bool | str] = None,
) -> None:
    """
    Initialize the shared service with ``public_key``.

    Backend URL, timeout and debug flag come from ``config`` or from the
    environment, exactly as in :func:`create_merchant_client`.
    """
    if config is None:
        # The explicit key replaces any AIRXPAY_PUBLIC_KEY in the environment.
        overrides = {**(overrides or {}), "AIRXPAY_PUBLIC_KEY": ""}
    cfg = _resolve_config(
        config,
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=None,
        public_key=None,
        backend_url=backend_url,
        timeout_seconds=timeout_seconds,
        debug=debug,
    )
    airxpay_service.initialize(public_key, verify=verify, config=cfg)


def is_ready() -> bool:
    return airxpay_service.is_ready


def create_merchant(payload: Mapping[str, Any]) -> Dict[str, Any]:
    return airxpay_service.create_merchant(payload)


def get_merchant_status() -> Dict[str, Any]:
    return airxpay_service.get_merchant_status()


def refresh_token() -> Dict[str, Any]:
    return airxpay_service.refresh_token()


def verify_public_key(public_key: Optional[str] = None) -> Dict[str, Any]:
    return airxpay_service.verify_public_key(public_key)
