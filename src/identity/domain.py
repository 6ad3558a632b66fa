"""Identity bounded context: users of every role, credentials and address books."""

import structlog
from protean.domain import Domain
from shared.logging import configure_logging

configure_logging()

identity = Domain(name="identity")

logger = structlog.get_logger(__name__)
