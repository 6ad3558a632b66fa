"""Phone number normalization shared by registration, staff forms and checkout."""

import re

from protean.exceptions import ValidationError

_PHONE_PATTERN = re.compile(r"^[+]?[0-9\s\-\(\)]+$")


def normalize_phone(raw, field="phone"):
    """Validate a phone number and return it with all whitespace removed.

    Accepts digits, spaces, hyphens, parentheses and a leading +. The stripped
    value must be 10 to 15 characters long.
    """
    if not raw or not _PHONE_PATTERN.match(raw):
        raise ValidationError({field: ["Phone number may only contain digits, spaces, hyphens, parentheses and +"]})

    number = re.sub(r"\s+", "", raw)
    if not 10 <= len(number) <= 15:
        raise ValidationError({field: ["Phone number must be between 10 and 15 characters"]})
    return number


def require_ten_digits(raw, field="phone"):
    """Back-office forms accept exactly ten digits."""
    if not raw or not re.fullmatch(r"\d{10}", raw):
        raise ValidationError({field: ["Phone number must be exactly 10 digits"]})
    return raw
