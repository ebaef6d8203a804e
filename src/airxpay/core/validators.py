"""
Local checks run before anything is sent to the backend.

The functions never raise and never perform I/O. They return every
violation they find as a list of :class:`FieldError`; an empty list means
the input is acceptable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

__all__ = [
    "FieldError",
    "MIN_PUBLIC_KEY_LENGTH",
    "PUBLIC_KEY_PREFIX",
    "REQUIRED_MERCHANT_FIELDS",
    "mask_public_key",
    "validate_create_merchant",
    "validate_public_key",
]

PUBLIC_KEY_PREFIX = "pk_"
MIN_PUBLIC_KEY_LENGTH = 20
MAX_NAME_LENGTH = 100

REQUIRED_MERCHANT_FIELDS = ("merchantName", "merchantEmail", "businessName")
MERCHANT_MODES = ("test", "live")

_PUBLIC_KEY_RE = re.compile(r"[A-Za-z0-9_-]+")
_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[A-Za-z]{2,}")
_PHONE_RE = re.compile(r"\+?[0-9]{7,15}")
_COUNTRY_RE = re.compile(r"[A-Za-z]{2}")


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


def mask_public_key(key: Any) -> str:
    """First 8 characters followed by an ellipsis, safe to log."""
    if not isinstance(key, str) or not key:
        return "<unset>"
    return key[:8] + "..."


def validate_public_key(key: Any) -> List[FieldError]:
    if not isinstance(key, str):
        return [FieldError("publicKey", "Public key must be a string")]

    value = key.strip()
    if not value:
        return [FieldError("publicKey", "Public key is required")]

    errors: List[FieldError] = []
    if value != key:
        errors.append(
            FieldError("publicKey", "Public key must not have surrounding whitespace")
        )
    if len(value) < MIN_PUBLIC_KEY_LENGTH:
        errors.append(
            FieldError(
                "publicKey",
                f"Public key must be at least {MIN_PUBLIC_KEY_LENGTH} characters long",
            )
        )
    if not value.startswith(PUBLIC_KEY_PREFIX):
        errors.append(
            FieldError("publicKey", f"Public key must start with '{PUBLIC_KEY_PREFIX}'")
        )
    if not _PUBLIC_KEY_RE.fullmatch(value):
        errors.append(
            FieldError("publicKey", "Public key contains invalid characters")
        )
    return errors


def _check_name(payload: Mapping[str, Any], field: str, label: str) -> List[FieldError]:
    value = payload.get(field)
    if value is None or (isinstance(value, str) and not value.strip()):
        return [FieldError(field, f"{label} is required")]
    if not isinstance(value, str):
        return [FieldError(field, f"{label} must be a string")]
    if len(value.strip()) > MAX_NAME_LENGTH:
        return [
            FieldError(field, f"{label} must be at most {MAX_NAME_LENGTH} characters")
        ]
    return []


def validate_create_merchant(payload: Any) -> List[FieldError]:
    if not isinstance(payload, Mapping):
        return [FieldError("payload", "Merchant payload must be an object")]

    errors: List[FieldError] = []
    errors.extend(_check_name(payload, "merchantName", "Merchant name"))

    email = payload.get("merchantEmail")
    if email is None or (isinstance(email, str) and not email.strip()):
        errors.append(FieldError("merchantEmail", "Merchant email is required"))
    elif not isinstance(email, str) or not _EMAIL_RE.fullmatch(email.strip()):
        errors.append(FieldError("merchantEmail", "Merchant email is not a valid email address"))

    errors.extend(_check_name(payload, "businessName", "Business name"))

    # Optional fields are only checked when supplied.
    phone = payload.get("merchantPhone")
    if phone is not None:
        digits = phone.replace(" ", "").replace("-", "") if isinstance(phone, str) else None
        if digits is None or not _PHONE_RE.fullmatch(digits):
            errors.append(
                FieldError("merchantPhone", "Merchant phone must contain 7 to 15 digits")
            )

    country = payload.get("country")
    if country is not None and (not isinstance(country, str) or not _COUNTRY_RE.fullmatch(country)):
        errors.append(FieldError("country", "Country must be a two-letter code"))

    mode = payload.get("mode")
    if mode is not None and mode not in MERCHANT_MODES:
        errors.append(FieldError("mode", "Mode must be 'test' or 'live'"))

    return errors
