"""Reviews bounded context: product reviews, delivery ratings and app feedback.

Verified-purchase flags and rateable deliveries come from Ordering events.
"""

import structlog
from protean.domain import Domain
from shared.logging import configure_logging

configure_logging()

reviews = Domain(name="reviews")

logger = structlog.get_logger(__name__)
