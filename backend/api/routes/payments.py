"""
Payment API routes.
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_payment_processor, get_token_email
from api.middleware.rate_limit import get_rate_limit, limiter
from api.schemas.payments import PaymentIntentRequest, PaymentIntentResponse
from api.schemas.users import PaymentRecordResponse
from core.interfaces.services import PaymentProcessor
from infrastructure.database.connection import get_db
from services.payments import create_intent
from services.users import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payment", tags=["payments"])


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
@limiter.limit(get_rate_limit("payment_intent"))
async def create_payment_intent(
    request: Request,
    body: PaymentIntentRequest,
    processor: PaymentProcessor = Depends(get_payment_processor),
):
    """
    Create a card payment intent and hand its client secret to the browser.
    """
    client_secret = await create_intent(processor, body.price)
    return PaymentIntentResponse(client_secret=client_secret)


@router.get("/history", response_model=list[PaymentRecordResponse])
async def payment_history(
    caller_email: str = Depends(get_token_email),
    db: AsyncSession = Depends(get_db),
):
    """The caller's payment receipts, newest first."""
    return await UserService(db).list_payments(caller_email)
