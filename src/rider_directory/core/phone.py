"""Phone number canonicalization for storage and matching.

Riders store phones as E.164 digits without the leading ``+`` so that the
same string works for exact lookups and for digit-substring search.
"""

import re

import phonenumbers

from .exceptions import InvalidPhoneNumberError

DEFAULT_PHONE_REGION = "CA"

_NON_DIGIT = re.compile(r"[^0-9]")


def canonicalize_phone(raw: str, region: str = DEFAULT_PHONE_REGION) -> str:
    """Return the canonical digits-only form of a phone number.

    Args:
        raw: Phone number as typed, e.g. ``"(416) 967-1111"``.
        region: ISO region used for numbers written without a country code.

    Returns:
        E.164 digits without ``+``, e.g. ``"14169671111"``.

    Raises:
        InvalidPhoneNumberError: If the input is not a valid phone number.
    """
    try:
        number = phonenumbers.parse(raw, region)
    except phonenumbers.NumberParseException as e:
        raise InvalidPhoneNumberError(
            f"Cannot parse phone number: {e}", details={"region": region}
        ) from e

    if not phonenumbers.is_valid_number(number):
        raise InvalidPhoneNumberError(
            "Phone number is not valid", details={"region": region}
        )

    e164 = phonenumbers.format_number(number, phonenumbers.PhoneNumberFormat.E164)
    return e164.lstrip("+")


def strip_non_digits(text: str) -> str:
    return _NON_DIGIT.sub("", text)


def international_form(canonical: str) -> str:
    """Re-attach the ``+`` so a stored phone parses without a region."""
    return f"+{canonical}"
