"""
User API routes.
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_current_admin_email, get_payment_processor, get_token_email
from api.schemas.users import (
    PaymentRecordResponse,
    ProfileUpdateRequest,
    SubscribeRequest,
    SubscribeResponse,
    UserResponse,
    UserUpsertRequest,
    UserUpsertResponse,
)
from core.interfaces.services import PaymentProcessor
from core.security.guards import require_owner
from infrastructure.config.settings import settings
from infrastructure.database.connection import get_db
from services.subscriptions import SubscriptionService
from services.users import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(db: AsyncSession = Depends(get_db)):
    """List all users."""
    return await UserService(db).list_users()


@router.post("", response_model=UserUpsertResponse)
async def upsert_user(
    request: UserUpsertRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Register the user on first login, otherwise record the login time.
    """
    payload = request.model_dump(exclude_unset=True)
    result = await UserService(db).upsert_on_login(request.email, payload)
    return UserUpsertResponse(
        message="User created" if result.inserted else "User already exists",
        inserted=result.inserted,
        user=UserResponse.model_validate(result.user),
    )


@router.patch("/subscribe", response_model=SubscribeResponse)
async def subscribe(
    request: SubscribeRequest,
    caller_email: str = Depends(get_token_email),
    db: AsyncSession = Depends(get_db),
    processor: PaymentProcessor = Depends(get_payment_processor),
):
    """
    Grant premium for the requested duration and record the payment.
    """
    email = request.email or caller_email
    require_owner(caller_email, email)

    service = SubscriptionService(
        db,
        processor=processor,
        verify_payments=settings.verify_payment_intents,
    )
    user, record = await service.grant_premium(
        email=email,
        duration_minutes=request.duration_minutes,
        plan=request.plan,
        price=request.price,
        transaction_id=request.transaction_id,
    )
    return SubscribeResponse(
        user=UserResponse.model_validate(user),
        payment=PaymentRecordResponse.model_validate(record),
    )


@router.get("/{email}", response_model=UserResponse)
async def get_user(email: str, db: AsyncSession = Depends(get_db)):
    """Fetch a user's role and profile."""
    return await UserService(db).get_user(email)


@router.patch("/{email}", response_model=UserResponse)
async def update_profile(
    email: str,
    request: ProfileUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """Update display name, bio or photo."""
    return await UserService(db).update_profile(email, request.model_dump(exclude_unset=True))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    admin_email: str = Depends(get_current_admin_email),
    db: AsyncSession = Depends(get_db),
):
    """Delete a user account. Admin only."""
    await UserService(db).delete_user(user_id)
    logger.info("User %s deleted by admin %s", user_id, admin_email)
