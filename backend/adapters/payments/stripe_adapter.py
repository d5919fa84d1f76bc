"""
Stripe payment adapter.

Talks to the Stripe REST API over httpx to create and look up card
payment intents. Only the calls the subscription flow needs are
implemented; charges are confirmed client-side with the returned secret.
"""

import logging
from typing import Any

import httpx

from core.interfaces.services import PaymentIntent, PaymentProcessor
from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)


# Custom Exceptions
class StripeError(Exception):
    """Base exception for Stripe adapter errors."""

    pass


class StripeAPIError(StripeError):
    """Raised when the Stripe API returns an error or cannot be reached."""

    pass


class StripeAuthError(StripeError):
    """Raised when the API key is missing or rejected."""

    pass


def _intent_from_response(data: dict[str, Any]) -> PaymentIntent:
    return PaymentIntent(
        id=data.get("id", ""),
        client_secret=data.get("client_secret"),
        amount=int(data.get("amount", 0)),
        currency=data.get("currency", ""),
        status=data.get("status", ""),
        metadata=dict(data.get("metadata") or {}),
    )


class StripeAdapter(PaymentProcessor):
    """
    Stripe API adapter for card payments.

    Requests are form-encoded, as the Stripe API expects, and authenticated
    with the secret key as a bearer token.
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_base: str | None = None,
        currency: str | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize Stripe adapter.

        Args:
            api_key: Stripe secret key (defaults to settings)
            api_base: API base URL (defaults to settings)
            currency: Default ISO currency code (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
        """
        self.api_key = api_key or settings.stripe_secret_key
        self.api_base = (api_base or settings.stripe_api_base).rstrip("/")
        self.currency = currency or settings.payment_currency
        self.timeout = timeout or settings.stripe_timeout

        if not self.api_key:
            logger.warning("Stripe secret key not configured. Set STRIPE_SECRET_KEY.")

    def _get_headers(self) -> dict[str, str]:
        """Get HTTP headers for API requests."""
        if not self.api_key:
            raise StripeAuthError("Stripe secret key not configured. Set STRIPE_SECRET_KEY.")

        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/x-www-form-urlencoded",
        }

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Make HTTP request to the Stripe API.

        Raises:
            StripeAuthError: If the key is missing or rejected
            StripeAPIError: If the request fails for any other reason
        """
        url = f"{self.api_base}/{endpoint}"
        headers = self._get_headers()

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                logger.info("Making %s request to %s", method, endpoint)

                if method == "GET":
                    response = await client.get(url, headers=headers)
                elif method == "POST":
                    response = await client.post(url, headers=headers, data=data)
                else:
                    raise ValueError(f"Unsupported HTTP method: {method}")

                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            error_detail = str(e)
            try:
                error_detail = e.response.json().get("error", {}).get("message") or error_detail
            except ValueError:
                pass

            logger.error("Stripe API error (%s): %s", e.response.status_code, error_detail)
            if e.response.status_code == 401:
                raise StripeAuthError(f"Stripe rejected the API key: {error_detail}") from e
            raise StripeAPIError(f"API request failed: {error_detail}") from e
        except httpx.RequestError as e:
            logger.error("HTTP request error: %s", e)
            raise StripeAPIError(f"Request failed: {e}") from e

    async def create_payment_intent(
        self,
        amount: int,
        currency: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> PaymentIntent:
        """
        Create a card payment intent.

        Args:
            amount: Amount in minor currency units (cents)
            currency: ISO currency code, defaults to the configured one
            metadata: Optional key/value metadata stored on the intent

        Returns:
            The created PaymentIntent including its client secret
        """
        form: dict[str, Any] = {
            "amount": amount,
            "currency": currency or self.currency,
            "payment_method_types[]": "card",
        }
        for key, value in (metadata or {}).items():
            form[f"metadata[{key}]"] = value

        data = await self._make_request("POST", "payment_intents", data=form)
        intent = _intent_from_response(data)
        logger.info("Created payment intent %s for %d %s", intent.id, intent.amount, intent.currency)
        return intent

    async def retrieve_payment_intent(self, intent_id: str) -> PaymentIntent:
        """Fetch a payment intent by ID."""
        data = await self._make_request("GET", f"payment_intents/{intent_id}")
        return _intent_from_response(data)


def create_stripe_adapter(
    api_key: str | None = None,
    api_base: str | None = None,
    currency: str | None = None,
) -> StripeAdapter:
    """
    Create a Stripe adapter instance.

    Args:
        api_key: Stripe secret key (defaults to settings)
        api_base: API base URL (defaults to settings)
        currency: Default currency (defaults to settings)

    Returns:
        StripeAdapter instance
    """
    return StripeAdapter(api_key=api_key, api_base=api_base, currency=currency)
