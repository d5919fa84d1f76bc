"""
Premium subscription service.

Granting premium updates the user and appends a payment receipt. Both
writes are flushed in the same session and committed once, so a failure
between them leaves neither applied.
"""

import logging
import math
from datetime import timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from adapters.payments.stripe_adapter import StripeError
from core.domain.user import MAX_DURATION_MINUTES, normalize_email
from core.errors import InternalFailureError, InvalidInputError, NotFoundError
from core.interfaces.services import PaymentProcessor
from infrastructure.database.models import PaymentRecord, User
from infrastructure.database.models.base import utcnow
from services.payments import to_minor_units

logger = logging.getLogger(__name__)

DEFAULT_PLAN = "premium"


class SubscriptionService:
    """Grants premium access and records the matching payment."""

    def __init__(
        self,
        db: AsyncSession,
        processor: Optional[PaymentProcessor] = None,
        verify_payments: bool = False,
    ):
        self.db = db
        self.processor = processor
        self.verify_payments = verify_payments

    async def grant_premium(
        self,
        email: Optional[str],
        duration_minutes: Optional[int],
        plan: Optional[str],
        price: Optional[float],
        transaction_id: Optional[str],
    ) -> tuple[User, PaymentRecord]:
        """Mark the user premium until now + duration and store the receipt."""
        email = normalize_email(email) if email else None
        if not email:
            raise InvalidInputError("Email is required")
        if not duration_minutes or duration_minutes <= 0:
            raise InvalidInputError("A positive duration is required")
        if duration_minutes > MAX_DURATION_MINUTES:
            raise InvalidInputError(f"Duration cannot exceed {MAX_DURATION_MINUTES} minutes")
        if not transaction_id:
            raise InvalidInputError("Transaction id is required")
        if price is None or not math.isfinite(price) or price < 0:
            raise InvalidInputError("A non-negative price is required")
        plan = plan or DEFAULT_PLAN

        if self.verify_payments:
            await self._verify_payment(transaction_id, price)

        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            raise NotFoundError("User not found")

        now = utcnow()
        user.is_premium = True
        user.premium_taken_at = now
        user.premium_expires_at = now + timedelta(minutes=duration_minutes)
        user.current_plan = plan

        record = PaymentRecord(
            email=email,
            price=price,
            transaction_id=transaction_id,
            plan=plan,
            paid_at=now,
        )
        self.db.add(record)
        await self.db.commit()

        logger.info(
            "Granted %s to %s until %s (transaction %s)",
            plan,
            email,
            user.premium_expires_at.isoformat(),
            transaction_id,
        )
        return user, record

    async def _verify_payment(self, transaction_id: str, price: float) -> None:
        """Confirm with the processor that the claimed charge succeeded for this price."""
        if self.processor is None:
            raise InternalFailureError("Payment verification is enabled but no processor is configured")

        try:
            intent = await self.processor.retrieve_payment_intent(transaction_id)
        except StripeError as e:
            logger.error("Could not verify payment %s: %s", transaction_id, e)
            raise InternalFailureError("Failed to verify payment") from e

        if intent.status != "succeeded":
            raise InvalidInputError("Payment has not succeeded")
        if intent.amount != to_minor_units(price):
            raise InvalidInputError("Payment amount does not match price")
