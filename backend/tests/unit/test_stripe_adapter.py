"""
Unit tests for the Stripe payment adapter.

Tests the Stripe REST integration including:
- Payment intent creation (form encoding, metadata, currency)
- Payment intent lookup
- Error mapping for rejected keys, API errors and transport failures
"""

from typing import Any
from unittest.mock import Mock, patch

import httpx
import pytest

from adapters.payments.stripe_adapter import (
    StripeAdapter,
    StripeAPIError,
    StripeAuthError,
    StripeError,
    create_stripe_adapter,
)

API_BASE = "https://api.stripe.test/v1"


@pytest.fixture
def adapter():
    """Create StripeAdapter instance with test credentials."""
    return StripeAdapter(api_key="sk_test_123", api_base=API_BASE, currency="usd")


@pytest.fixture
def mock_intent_response() -> dict[str, Any]:
    """Mock payment intent object as returned by Stripe."""
    return {
        "id": "pi_3Nabc",
        "object": "payment_intent",
        "amount": 999,
        "currency": "usd",
        "status": "requires_payment_method",
        "client_secret": "pi_3Nabc_secret_xyz",
        "metadata": {"email": "reader@example.com"},
        "payment_method_types": ["card"],
    }


def _error_response(status_code: int, message: str, method: str = "POST") -> httpx.Response:
    return httpx.Response(
        status_code,
        json={"error": {"message": message}},
        request=httpx.Request(method, f"{API_BASE}/payment_intents"),
    )


class TestAdapterSetup:
    def test_headers_use_bearer_key(self, adapter):
        headers = adapter._get_headers()

        assert headers["Authorization"] == "Bearer sk_test_123"
        assert headers["Content-Type"] == "application/x-www-form-urlencoded"

    def test_missing_key_raises_auth_error(self):
        with patch("adapters.payments.stripe_adapter.settings") as mock_settings:
            mock_settings.stripe_secret_key = None
            mock_settings.stripe_api_base = API_BASE
            mock_settings.payment_currency = "usd"
            mock_settings.stripe_timeout = 5.0

            adapter = StripeAdapter()

            with pytest.raises(StripeAuthError):
                adapter._get_headers()

    def test_factory_applies_overrides(self):
        adapter = create_stripe_adapter(api_key="sk_test_x", api_base=API_BASE + "/", currency="eur")

        assert adapter.api_key == "sk_test_x"
        assert adapter.api_base == API_BASE
        assert adapter.currency == "eur"


class TestCreatePaymentIntent:
    @pytest.mark.asyncio
    async def test_create_success(self, adapter, mock_intent_response):
        """Amount, currency and card method are sent form-encoded."""
        with patch("httpx.AsyncClient.post") as mock_post:
            mock_response = Mock()
            mock_response.status_code = 200
            mock_response.json.return_value = mock_intent_response
            mock_post.return_value = mock_response

            intent = await adapter.create_payment_intent(999, metadata={"email": "reader@example.com"})

            assert intent.id == "pi_3Nabc"
            assert intent.client_secret == "pi_3Nabc_secret_xyz"
            assert intent.amount == 999
            assert intent.metadata == {"email": "reader@example.com"}

            args, kwargs = mock_post.call_args
            assert args[0] == f"{API_BASE}/payment_intents"
            assert kwargs["data"] == {
                "amount": 999,
                "currency": "usd",
                "payment_method_types[]": "card",
                "metadata[email]": "reader@example.com",
            }

    @pytest.mark.asyncio
    async def test_create_with_explicit_currency(self, adapter, mock_intent_response):
        with patch("httpx.AsyncClient.post") as mock_post:
            mock_response = Mock()
            mock_response.json.return_value = {**mock_intent_response, "currency": "eur"}
            mock_post.return_value = mock_response

            intent = await adapter.create_payment_intent(500, currency="eur")

            assert intent.currency == "eur"
            assert mock_post.call_args.kwargs["data"]["currency"] == "eur"

    @pytest.mark.asyncio
    async def test_rejected_key_raises_auth_error(self, adapter):
        with patch("httpx.AsyncClient.post") as mock_post:
            mock_post.return_value = _error_response(401, "Invalid API Key provided")

            with pytest.raises(StripeAuthError, match="Invalid API Key"):
                await adapter.create_payment_intent(999)

    @pytest.mark.asyncio
    async def test_api_error_carries_stripe_message(self, adapter):
        with patch("httpx.AsyncClient.post") as mock_post:
            mock_post.return_value = _error_response(400, "Amount must be at least 50 cents")

            with pytest.raises(StripeAPIError, match="at least 50 cents"):
                await adapter.create_payment_intent(10)

    @pytest.mark.asyncio
    async def test_network_failure_raises_api_error(self, adapter):
        with patch("httpx.AsyncClient.post") as mock_post:
            mock_post.side_effect = httpx.ConnectError("connection refused")

            with pytest.raises(StripeError):
                await adapter.create_payment_intent(999)


class TestRetrievePaymentIntent:
    @pytest.mark.asyncio
    async def test_retrieve_success(self, adapter, mock_intent_response):
        with patch("httpx.AsyncClient.get") as mock_get:
            mock_response = Mock()
            mock_response.json.return_value = {**mock_intent_response, "status": "succeeded"}
            mock_get.return_value = mock_response

            intent = await adapter.retrieve_payment_intent("pi_3Nabc")

            assert intent.status == "succeeded"
            assert mock_get.call_args.args[0] == f"{API_BASE}/payment_intents/pi_3Nabc"

    @pytest.mark.asyncio
    async def test_retrieve_not_found(self, adapter):
        with patch("httpx.AsyncClient.get") as mock_get:
            mock_get.return_value = _error_response(404, "No such payment_intent", method="GET")

            with pytest.raises(StripeAPIError, match="No such payment_intent"):
                await adapter.retrieve_payment_intent("pi_missing")
