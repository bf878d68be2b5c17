"""Identity bounded context: user profiles, roles and seller onboarding.

Credential checks happen upstream; this context only knows the user id the
gateway forwards and the profile registered under it.
"""

import structlog
from protean.domain import Domain

identity = Domain(name="identity")

logger = structlog.get_logger(__name__)
