"""Request-scoped session: who is calling and in which role.

A Session is built once per request from the authenticated user id and the
role stored on their profile, then passed explicitly to every operation that
needs to make an authorization decision. Nothing here is global.
"""

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


class NotAuthorized(Exception):
    """The caller is authenticated but not allowed to perform the operation."""

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class Session:
    user_id: str
    role: str

    @property
    def is_buyer(self) -> bool:
        return self.role == Role.BUYER.value

    @property
    def is_seller(self) -> bool:
        return self.role == Role.SELLER.value

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def require_role(self, *roles: Role) -> None:
        """Raise NotAuthorized unless the session holds one of ``roles``."""
        allowed = {role.value for role in roles}
        if self.role not in allowed:
            names = " or ".join(sorted(allowed))
            raise NotAuthorized(f"Only {names} accounts can perform this action")

    def require_user(self, user_id, message: str = "Not authorized") -> None:
        """Raise NotAuthorized unless the session belongs to ``user_id``."""
        if str(user_id) != str(self.user_id):
            raise NotAuthorized(message)
