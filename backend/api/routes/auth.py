"""
Token issuance route.
"""

import logging

from fastapi import APIRouter, Request

from api.dependencies import token_service
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.auth import TokenRequest, TokenResponse
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/jwt", response_model=TokenResponse)
@limiter.limit(get_rate_limit("token"))
async def issue_token(request: Request, body: TokenRequest):
    """
    Issue a bearer token for the given email.

    The token is signed with the process-wide key and expires after the
    configured number of days.
    """
    token = token_service.create_access_token(body.email)
    logger.info("Issued token for %s", body.email)
    return TokenResponse(
        token=token,
        expires_in=settings.jwt_token_expire_days * 24 * 60 * 60,
    )
