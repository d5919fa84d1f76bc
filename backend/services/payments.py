"""
Payment intent creation.

A thin call-through to the payment processor: no local bookkeeping happens
here. Receipts are written by the subscription service once the client has
confirmed the charge.
"""

import logging
import math
from typing import Optional

from adapters.payments.stripe_adapter import StripeError
from core.errors import InternalFailureError, InvalidInputError
from core.interfaces.services import PaymentProcessor

logger = logging.getLogger(__name__)


def to_minor_units(price: float) -> int:
    """Convert a major-unit price to integer minor units, rounding to nearest."""
    return int(round(price * 100))


async def create_intent(processor: PaymentProcessor, price: Optional[float]) -> str:
    """
    Create a card payment intent and return its client secret verbatim.

    Raises:
        InvalidInputError: If price is missing, not finite or not positive
        InternalFailureError: If the processor call fails
    """
    if price is None or not math.isfinite(price) or price <= 0:
        raise InvalidInputError("A positive price is required")

    amount = to_minor_units(price)

    try:
        intent = await processor.create_payment_intent(amount)
    except StripeError as e:
        logger.error("Payment intent creation failed for amount %d: %s", amount, e)
        raise InternalFailureError("Failed to create payment intent") from e

    return intent.client_secret
