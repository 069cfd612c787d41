"""Tests for the exception hierarchy."""

import pytest

from rider_directory.changeset import RiderChangeset
from rider_directory.core.exceptions import (
    ConfigurationError,
    DirectoryError,
    InvalidArgumentError,
    InvalidPhoneNumberError,
    NotFoundError,
    PermanentError,
    RiderValidationError,
    ValidationError,
)


@pytest.mark.unit
class TestExceptionHierarchy:
    """Test that exception classes follow the correct inheritance."""

    def test_permanent_errors_inherit_from_directory_error(self):
        assert issubclass(PermanentError, DirectoryError)
        assert issubclass(ValidationError, PermanentError)
        assert issubclass(NotFoundError, PermanentError)
        assert issubclass(InvalidArgumentError, PermanentError)
        assert issubclass(ConfigurationError, PermanentError)

    def test_rider_validation_error_is_validation_error(self):
        assert issubclass(RiderValidationError, ValidationError)

    def test_invalid_phone_is_invalid_argument(self):
        assert issubclass(InvalidPhoneNumberError, InvalidArgumentError)


@pytest.mark.unit
class TestExceptionAttributes:
    """Test exception message and details handling."""

    def test_directory_error_stores_message(self):
        err = DirectoryError("test message")
        assert err.message == "test message"
        assert str(err) == "test message"

    def test_directory_error_default_details_is_empty_dict(self):
        assert DirectoryError("test").details == {}

    def test_not_found_with_details(self):
        err = NotFoundError("missing", details={"rider_id": 7})
        assert err.details == {"rider_id": 7}

    def test_rider_validation_error_carries_changeset(self):
        changeset = RiderChangeset(
            data=None, attrs={}, errors=[{"field": "name", "message": "Field required"}]
        )
        err = RiderValidationError("Invalid rider attributes", changeset)

        assert err.changeset is changeset
        assert err.details == {"errors": [{"field": "name", "message": "Field required"}]}
