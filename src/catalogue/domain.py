"""Catalogue bounded context: categories, products, offers and platform settings."""

import structlog
from protean.domain import Domain
from shared.logging import configure_logging

configure_logging()

catalogue = Domain(name="catalogue")

logger = structlog.get_logger(__name__)
