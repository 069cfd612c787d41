"""Core error types and shared helpers."""

from .exceptions import (
    ConfigurationError,
    DirectoryError,
    InvalidArgumentError,
    InvalidPhoneNumberError,
    NotFoundError,
    PermanentError,
    RiderValidationError,
    ValidationError,
)
from .phone import (
    DEFAULT_PHONE_REGION,
    canonicalize_phone,
    international_form,
    strip_non_digits,
)

__all__ = [
    "DirectoryError",
    "PermanentError",
    "ValidationError",
    "RiderValidationError",
    "NotFoundError",
    "InvalidArgumentError",
    "InvalidPhoneNumberError",
    "ConfigurationError",
    "DEFAULT_PHONE_REGION",
    "canonicalize_phone",
    "international_form",
    "strip_non_digits",
]
