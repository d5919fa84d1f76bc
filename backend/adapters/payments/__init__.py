"""Payment adapters for card payments."""

from .stripe_adapter import (
    StripeAdapter,
    StripeAPIError,
    StripeAuthError,
    StripeError,
    create_stripe_adapter,
)

__all__ = [
    "StripeAdapter",
    "StripeError",
    "StripeAPIError",
    "StripeAuthError",
    "create_stripe_adapter",
]
