"""
Configuration objects and helpers for the AirXPay SDK.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from .environment import build_environment
from .errors import ConfigError
from .validators import mask_public_key, validate_public_key

__all__ = [
    "ConfigError",
    "DEFAULT_BACKEND_URL",
    "SDKConfig",
    "SDKParameters",
    "load_sdk_config",
]

DEFAULT_BACKEND_URL = "http://localhost:7000"

_diagnostics = logging.getLogger("airxpay")

_PARAMETER_TO_ENV_KEY = {
    "public_key": "AIRXPAY_PUBLIC_KEY",
    "backend_url": "AIRXPAY_BACKEND_URL",
    "timeout_seconds": "AIRXPAY_TIMEOUT_SECONDS",
    "debug": "AIRXPAY_DEBUG",
}

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class SDKParameters:
    """
    Explicit parameter bundle for constructing :class:`SDKConfig`.

    Callers can either instantiate this helper or pass the individual keyword
    arguments directly to :func:`load_sdk_config`.
    """

    public_key: Optional[str] = None
    backend_url: Optional[str] = None
    timeout_seconds: Optional[float | int | str] = None
    debug: Optional[bool | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[SDKParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown SDK parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


def _normalize_backend_url(raw_url: str) -> str:
    url = raw_url.strip().rstrip("/")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(
            f"AIRXPAY_BACKEND_URL must be an http(s) URL, got '{raw_url}'"
        )
    return url


def _parse_timeout(raw_timeout: Optional[str]) -> Optional[float]:
    if raw_timeout is None or not raw_timeout.strip():
        return None
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise ConfigError(
            f"AIRXPAY_TIMEOUT_SECONDS must be a number, got '{raw_timeout}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("AIRXPAY_TIMEOUT_SECONDS must be greater than zero")
    return timeout


def _parse_bool(raw_value: Optional[str], field_name: str) -> bool:
    if raw_value is None:
        return False
    value = raw_value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{field_name} must be a boolean, got '{raw_value}'")


@dataclass(frozen=True)
class SDKConfig:
    backend_url: str = DEFAULT_BACKEND_URL
    public_key: Optional[str] = None
    timeout_seconds: Optional[float] = None
    debug: bool = False

    def with_public_key(self, public_key: str) -> "SDKConfig":
        """Return a copy holding ``public_key``. Any previous key is replaced."""
        return replace(self, public_key=public_key)

    def get_public_key(self) -> str:
        if not self.public_key:
            raise ConfigError("Public key is not configured. Call initialize() first.")
        return self.public_key

    @property
    def masked_public_key(self) -> str:
        return mask_public_key(self.public_key)

    def endpoint_url(self, path: str) -> str:
        return f"{self.backend_url}/{path.lstrip('/')}"

    def log(self, message: str, *args: Any) -> None:
        if self.debug:
            _diagnostics.info(message, *args)

    def error(self, message: str, *args: Any) -> None:
        if self.debug:
            _diagnostics.error(message, *args)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "SDKConfig":
        backend_url = _normalize_backend_url(
            values.get("AIRXPAY_BACKEND_URL", DEFAULT_BACKEND_URL)
        )

        public_key = values.get("AIRXPAY_PUBLIC_KEY") or None
        if public_key is not None:
            errors = validate_public_key(public_key)
            if errors:
                raise ConfigError(f"AIRXPAY_PUBLIC_KEY is invalid: {errors[0].message}")

        return cls(
            backend_url=backend_url,
            public_key=public_key,
            timeout_seconds=_parse_timeout(values.get("AIRXPAY_TIMEOUT_SECONDS")),
            debug=_parse_bool(values.get("AIRXPAY_DEBUG"), "AIRXPAY_DEBUG"),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[SDKParameters] = None,
        public_key: Optional[str] = None,
        backend_url: Optional[str] = None,
        timeout_seconds: Optional[float | int | str] = None,
        debug: Optional[bool | str] = None,
    ) -> "SDKConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "public_key": public_key,
                "backend_url": backend_url,
                "timeout_seconds": timeout_seconds,
                "debug": debug,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_sdk_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[SDKParameters] = None,
    public_key: Optional[str] = None,
    backend_url: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
    debug: Optional[bool | str] = None,
) -> SDKConfig:
    """
    Convenience wrapper that mirrors :meth:`SDKConfig.from_env`.

    The configuration can come from environment variables, a ``.env`` file,
    direct keyword arguments, or any combination of the three.
    """
    return SDKConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        public_key=public_key,
        backend_url=backend_url,
        timeout_seconds=timeout_seconds,
        debug=debug,
    )
