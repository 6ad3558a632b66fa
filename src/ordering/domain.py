"""Ordering bounded context: carts, checkout, orders and deliveries.

Customers (or guests) fill a cart, check out into an order, and back-office
staff dispatch the order to a driver who takes it from PENDING to DELIVERED.
"""

import structlog
from protean.domain import Domain
from shared.logging import configure_logging

configure_logging()

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
