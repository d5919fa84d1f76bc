"""
Authorization guards.

Each guard is a plain predicate over a verified caller identity and the
resource context. Guards raise ``ForbiddenError`` on denial and return
``None`` otherwise, so a chain can be evaluated in order with the first
failure short-circuiting the rest.
"""

from collections.abc import Callable
from typing import Protocol

from core.domain.user import normalize_email
from core.errors import ForbiddenError


class RoleHolder(Protocol):
    role: str


ADMIN_ROLE = "admin"


def is_owner(caller_email: str | None, owner_email: str | None) -> bool:
    """True when the caller is the resource owner. Emails compare normalized."""
    if not caller_email or not owner_email:
        return False
    return normalize_email(caller_email) == normalize_email(owner_email)


def is_admin(user: RoleHolder | None) -> bool:
    """True when a user record exists and carries the admin role."""
    return user is not None and user.role == ADMIN_ROLE


def require_owner(caller_email: str | None, owner_email: str | None) -> None:
    """Permit only when the caller owns the resource."""
    if not is_owner(caller_email, owner_email):
        raise ForbiddenError("Forbidden access")


def require_admin(user: RoleHolder | None) -> None:
    """Permit only admins. A missing user record is denied."""
    if not is_admin(user):
        raise ForbiddenError("Admin access required")


def require_owner_or_admin(
    caller_email: str | None,
    owner_email: str | None,
    user: RoleHolder | None,
) -> None:
    """Permit the resource owner or any admin."""
    if not (is_owner(caller_email, owner_email) or is_admin(user)):
        raise ForbiddenError("Forbidden access")


def run_guards(*guards: Callable[[], None]) -> None:
    """Evaluate guards in order; the first denial propagates."""
    for guard in guards:
        guard()
