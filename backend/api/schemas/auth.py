"""
Token issuance request and response schemas.
"""

from typing import Optional

from pydantic import BaseModel


class TokenRequest(BaseModel):
    """Request a bearer token for an email identity."""

    email: Optional[str] = None


class TokenResponse(BaseModel):
    """Issued bearer token."""

    token: str
    token_type: str = "bearer"
    expires_in: int  # Seconds until the token expires
