"""
API dependencies for authentication and authorization.

Chains are built by stacking dependencies: ``get_token_email`` verifies
the bearer token, ``get_current_admin_email`` adds the admin guard on top.
Ownership checks need the resource context, so routes call
``require_owner`` after resolving the caller.
"""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.payments.stripe_adapter import create_stripe_adapter
from core.errors import ForbiddenError
from core.interfaces.services import PaymentProcessor
from core.security.guards import require_admin
from core.security.tokens import TokenService
from infrastructure.config.settings import settings
from infrastructure.database.connection import get_db
from infrastructure.database.models.user import User

logger = logging.getLogger(__name__)

token_service = TokenService(
    secret_key=settings.jwt_secret_key,
    algorithm=settings.jwt_algorithm,
    expire_days=settings.jwt_token_expire_days,
)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the credential from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


async def get_token_email(
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """
    Dependency resolving the caller's email from the bearer token.

    Only an absent header is 401. A header that is not a usable bearer
    credential, or a token that is expired or badly signed, is 403.
    """
    if not authorization or not authorization.strip():
        return token_service.verify(None)
    token = extract_bearer_token(authorization)
    if token is None:
        raise ForbiddenError("Forbidden access")
    return token_service.verify(token)


async def get_current_admin_email(
    caller_email: Annotated[str, Depends(get_token_email)],
    db: AsyncSession = Depends(get_db),
) -> str:
    """
    Dependency requiring the caller to be an admin.

    The role is looked up by email on every request; a caller with no user
    record is denied.
    """
    result = await db.execute(select(User).where(User.email == caller_email))
    user = result.scalar_one_or_none()
    if user is None or not user.is_admin:
        logger.warning("Admin access denied for %s", caller_email)
    require_admin(user)
    return caller_email


@lru_cache
def get_payment_processor() -> PaymentProcessor:
    """Process-wide payment processor client."""
    return create_stripe_adapter()
