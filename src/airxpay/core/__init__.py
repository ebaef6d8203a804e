"""
Core primitives behind the AirXPay merchant onboarding SDK.
"""

from .client import (
    API_ENDPOINTS,
    MerchantClient,
    create_merchant,
    get_merchant_status,
    initialize_config,
    refresh_token,
    verify_public_key,
)
from .config import SDKConfig, SDKParameters, load_sdk_config
from .environment import SDKEnvironment, build_environment, load_env_file
from .errors import (
    AirXPayError,
    ConfigError,
    HttpError,
    NetworkError,
    NotInitializedError,
    PayloadValidationError,
    UnknownError,
    normalize_error,
)
from .service import AirXPayService, airxpay_service
from .validators import FieldError, validate_create_merchant, validate_public_key

__all__ = [
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
    "get_merchant_status",
    "initialize_config",
    "load_env_file",
    "load_sdk_config",
    "normalize_error",
    "refresh_token",
    "validate_create_merchant",
    "validate_public_key",
    "verify_public_key",
]
