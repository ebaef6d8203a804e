"""
Public facade for the AirXPay merchant onboarding SDK.

The module re-exports the most useful pieces for integrators so they can
``from airxpay import ...`` without navigating the package.
"""

__version__ = "0.1.0"

from .api import (
    create_merchant,
    create_merchant_client,
    get_default_service,
    get_merchant_status,
    initialize,
    is_ready,
    refresh_token,
    verify_public_key,
)
from .core import (
    API_ENDPOINTS,
    AirXPayError,
    AirXPayService,
    ConfigError,
    FieldError,
    HttpError,
    MerchantClient,
    NetworkError,
    NotInitializedError,
    PayloadValidationError,
    SDKConfig,
    SDKEnvironment,
    SDKParameters,
    UnknownError,
    airxpay_service,
    build_environment,
    load_env_file,
    load_sdk_config,
    normalize_error,
    validate_create_merchant,
    validate_public_key,
)

__all__ = (
    "API_ENDPOINTS",
    "AirXPayError",
    "AirXPayService",
    "ConfigError",
    "FieldError",
    "HttpError",
    "MerchantClient",
    "NetworkError",
    "NotInitializedError",
    "PayloadValidationError",
    "SDKConfig",
    "SDKEnvironment",
    "SDKParameters",
    "UnknownError",
    "airxpay_service",
    "build_environment",
    "create_merchant",
    "create_merchant_client",
    "get_default_service",
    "get_merchant_status",
    "initialize",
    "is_ready",
    "load_env_file",
    "load_sdk_config",
    "normalize_error",
    "refresh_token",
    "validate_create_merchant",
    "validate_public_key",
    "verify_public_key",
)
