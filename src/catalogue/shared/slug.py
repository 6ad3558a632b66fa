"""URL slugs for categories and products."""

import re
from uuid import uuid4

from protean.exceptions import ValidationError


def slugify(text, fallback_prefix="item"):
    """Lower-case, hyphen-separated ASCII slug.

    Names without any ASCII letters or digits (e.g. Arabic product names) get a
    short random slug instead.
    """
    slug = re.sub(r"[^a-z0-9]+", "-", (text or "").lower()).strip("-")
    if not slug:
        slug = f"{fallback_prefix}-{uuid4().hex[:8]}"
    return slug


def validate_slug(slug, field="slug"):
    if not re.match(r"^[a-z0-9-]+$", slug):
        raise ValidationError({field: ["Slug must contain only lowercase alphanumeric characters and hyphens"]})
    if slug.startswith("-") or slug.endswith("-"):
        raise ValidationError({field: ["Slug must not start or end with a hyphen"]})
    if "--" in slug:
        raise ValidationError({field: ["Slug must not contain consecutive hyphens"]})
