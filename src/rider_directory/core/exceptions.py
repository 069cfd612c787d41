"""Standardized exception hierarchy for the rider directory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from rider_directory.changeset import RiderChangeset


class DirectoryError(Exception):
    """Base exception for all rider directory errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class PermanentError(DirectoryError):
    """Errors that will not succeed on retry."""

    pass


class ValidationError(PermanentError):
    """Invalid input or data format."""

    pass


class RiderValidationError(ValidationError):
    """Rider attributes were rejected; nothing was written or published."""

    def __init__(
        self,
        message: str,
        changeset: RiderChangeset,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details or {"errors": changeset.errors})
        self.changeset = changeset


class NotFoundError(PermanentError):
    """Requested entity does not exist."""

    pass


class InvalidArgumentError(PermanentError):
    """Argument could not be interpreted."""

    pass


class InvalidPhoneNumberError(InvalidArgumentError):
    """Phone string cannot be parsed into canonical form."""

    pass


class ConfigurationError(PermanentError):
    """Missing or invalid configuration."""

    pass
