"""Service interfaces for external integrations."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class PaymentIntent:
    """Payment intent as reported by the payment processor."""

    id: str
    client_secret: str | None
    amount: int  # minor currency units
    currency: str
    status: str
    metadata: dict[str, str] = field(default_factory=dict)


class PaymentProcessor(ABC):
    """Abstract card-payment processor."""

    @abstractmethod
    async def create_payment_intent(
        self,
        amount: int,
        currency: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> PaymentIntent:
        """Create a card payment intent for the given minor-unit amount."""
        ...

    @abstractmethod
    async def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        """Look up an existing payment intent."""
        ...
