"""Email address validation."""

from protean.exceptions import ValidationError

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def normalize_email(raw, field="email"):
    """Return the lower-cased address, or None for an empty value.

    Enforces exactly one @, non-empty local and domain parts, a dotted domain,
    no consecutive dots and no forbidden characters.
    """
    if raw is None or not raw.strip():
        return None

    email = raw.strip().lower()
    error = ValidationError({field: [f"Invalid email address: {raw!r}"]})

    if any(ch.isspace() for ch in email) or email.count("@") != 1:
        raise error

    local_part, domain_part = email.split("@", 1)
    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        raise error
    if not domain_part or "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        raise error
    if ".." in email or any(ch in email for ch in _FORBIDDEN):
        raise error
    if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
        raise error

    return email
