"""Rider attribute validation.

A changeset pairs the attributes a caller asked for with the outcome of
validating them against a rider's current values. Repositories only write
valid changesets; invalid ones are handed back inside
``RiderValidationError`` so callers can render the field errors.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from .core.exceptions import InvalidPhoneNumberError
from .core.phone import DEFAULT_PHONE_REGION, canonicalize_phone, international_form
from .db.schema import Rider

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
POSTAL_PATTERN = re.compile(r"^([A-Z]\d[A-Z])\s?(\d[A-Z]\d)$")

RIDER_FIELDS = ("name", "email", "phone", "pronouns", "postal", "city", "province", "country")


class RiderAttrs(BaseModel):
    """Validated, normalized rider attributes."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(min_length=1, max_length=255)
    email: str = Field(max_length=320)
    phone: str
    pronouns: str | None = Field(default=None, max_length=64)
    postal: str | None = None
    city: str = "Toronto"
    province: str = "Ontario"
    country: str = "Canada"

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        email = v.lower()
        if not EMAIL_PATTERN.match(email):
            raise ValueError("must be a valid email address")
        return email

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: str, info: ValidationInfo) -> str:
        region = (info.context or {}).get("phone_region", DEFAULT_PHONE_REGION)
        try:
            return canonicalize_phone(v, region)
        except InvalidPhoneNumberError as e:
            raise ValueError(e.message) from e

    @field_validator("postal")
    @classmethod
    def normalize_postal(cls, v: str | None) -> str | None:
        if not v:
            return None
        match = POSTAL_PATTERN.match(v.upper())
        if not match:
            raise ValueError("must be a Canadian postal code like M5V 2T6")
        return f"{match.group(1)} {match.group(2)}"


@dataclass
class RiderChangeset:
    """Outcome of validating attributes against an existing or new rider."""

    data: Rider | None
    attrs: dict[str, Any]
    changes: dict[str, Any] = field(default_factory=dict)
    errors: list[dict[str, str]] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def apply(self, rider: Rider) -> Rider:
        for key, value in self.changes.items():
            setattr(rider, key, value)
        return rider


def rider_values(rider: Rider) -> dict[str, Any]:
    """Current attribute values of a rider, skipping unset ones."""
    values = {name: getattr(rider, name) for name in RIDER_FIELDS}
    return {name: value for name, value in values.items() if value is not None}


def build_changeset(
    rider: Rider | None,
    attrs: Mapping[str, Any] | None = None,
    phone_region: str = DEFAULT_PHONE_REGION,
) -> RiderChangeset:
    """Validate ``attrs`` merged over the rider's current values.

    Args:
        rider: Existing rider, or None when creating a new one.
        attrs: Requested attribute values keyed by field name.
        phone_region: Region used to canonicalize phone numbers.

    Returns:
        A changeset whose ``changes`` hold only the normalized values that
        differ from ``rider`` (every value for a new rider), or whose
        ``errors`` list the rejected fields.
    """
    requested = {str(key): value for key, value in (attrs or {}).items()}
    current = rider_values(rider) if rider is not None else {}
    stored = dict(current)
    # Stored phones are canonical and may belong to another region
    if "phone" in stored:
        stored["phone"] = international_form(stored["phone"])

    try:
        validated = RiderAttrs.model_validate(
            {**stored, **requested}, context={"phone_region": phone_region}
        )
    except PydanticValidationError as e:
        errors = [
            {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
            for error in e.errors()
        ]
        return RiderChangeset(data=rider, attrs=requested, errors=errors)

    values = validated.model_dump()
    changes = {key: value for key, value in values.items() if current.get(key) != value}
    if rider is None:
        changes = values
    return RiderChangeset(data=rider, attrs=requested, changes=changes)
