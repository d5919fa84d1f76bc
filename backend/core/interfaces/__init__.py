# Interfaces (Abstract Contracts)
# Adapters implement these interfaces
from .services import PaymentIntent, PaymentProcessor

__all__ = [
    "PaymentIntent",
    "PaymentProcessor",
]
