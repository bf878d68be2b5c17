"""Resolve the calling user into a Session.

The authentication gateway in front of the API verifies credentials and
forwards the user id in the ``X-User-Id`` header. The role always comes from
the stored profile, never from the request.
"""

from fastapi import Header, HTTPException
from protean.exceptions import ObjectNotFoundError

from identity.domain import identity
from identity.profile.profile import Profile
from shared.session import Session


def session_for(user_id: str) -> Session:
    """Build a Session for ``user_id``; raises ObjectNotFoundError without a profile."""
    with identity.domain_context():
        profile = identity.repository_for(Profile).get(user_id)
        return Session(user_id=str(profile.user_id), role=profile.role)


async def resolve_session(x_user_id: str | None = Header(default=None)) -> Session:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")

    try:
        return session_for(x_user_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=401, detail="Unknown user")


def profile_role(user_id: str) -> str | None:
    """The stored role for ``user_id``, or None when no profile exists."""
    with identity.domain_context():
        try:
            return identity.repository_for(Profile).get(user_id).role
        except ObjectNotFoundError:
            return None


async def resolve_profile_role():
    """Dependency returning the role lookup used to vet chat counterparts."""
    return profile_role
