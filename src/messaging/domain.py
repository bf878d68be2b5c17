"""Messaging bounded context: buyer and seller conversations.

A chat ties one buyer to one seller, optionally about a specific product or
order. Open chat windows follow new messages through the message feed.
"""

import structlog
from protean.domain import Domain

messaging = Domain(name="messaging")

logger = structlog.get_logger(__name__)
