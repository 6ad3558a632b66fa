"""Notifications bounded context: in-app inbox, web push and contact messages.

Reacts to Identity and Ordering events. Customers get an in-app notification
and, when subscribed, a web push for each step of their order. Staff (admins
and marketers) hear about new orders and contact-form submissions.
"""

import structlog
from protean.domain import Domain
from shared.logging import configure_logging

configure_logging()

notifications = Domain(name="notifications")

logger = structlog.get_logger(__name__)
