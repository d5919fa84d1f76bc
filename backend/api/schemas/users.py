"""
User, profile and subscription schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field

from core.domain.user import MAX_DURATION_MINUTES


class UserUpsertRequest(BaseModel):
    """Login-time registration payload."""

    email: EmailStr
    name: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = None
    photo_url: Optional[str] = Field(
        None,
        max_length=1000,
        validation_alias=AliasChoices("photo_url", "photo"),
    )


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; only provided fields are applied."""

    name: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = None
    photo_url: Optional[str] = Field(
        None,
        max_length=1000,
        validation_alias=AliasChoices("photo_url", "photo"),
    )


class UserResponse(BaseModel):
    """User response schema."""

    id: str
    email: str
    role: str
    name: Optional[str] = None
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    is_premium: bool
    premium_taken_at: Optional[datetime] = None
    premium_expires_at: Optional[datetime] = None
    current_plan: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserUpsertResponse(BaseModel):
    """Outcome of a login upsert."""

    message: str
    inserted: bool
    user: UserResponse


class SubscribeRequest(BaseModel):
    """Grant premium after a confirmed payment.

    ``email`` defaults to the token identity.
    """

    email: Optional[EmailStr] = None
    duration_minutes: Optional[int] = Field(
        None,
        le=MAX_DURATION_MINUTES,
        validation_alias=AliasChoices("duration_minutes", "duration"),
    )
    plan: Optional[str] = Field(None, max_length=100)
    price: Optional[float] = Field(None, allow_inf_nan=False)
    transaction_id: Optional[str] = Field(None, max_length=255)


class PaymentRecordResponse(BaseModel):
    """Stored payment receipt."""

    id: str
    email: str
    price: float
    transaction_id: str
    plan: str
    paid_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SubscribeResponse(BaseModel):
    """Updated user together with the receipt that was recorded."""

    user: UserResponse
    payment: PaymentRecordResponse
