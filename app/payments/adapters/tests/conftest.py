"""
Pytest fixtures for Stripe adapter tests.

Sections:
    - Test Data Fixtures
    - Mock Stripe Response Fixtures
    - Mock Stripe Error Fixtures
    - Mock Stripe Client Fixtures
"""

import uuid
from dataclasses import dataclass
from typing import Any
from unittest.mock import patch

import pytest
import stripe

from payments.adapters import CreateCheckoutSessionParams


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def purchase_id():
    return uuid.uuid4()


@pytest.fixture
def checkout_params(purchase_id):
    """Valid checkout parameters for 100 coins."""
    return CreateCheckoutSessionParams(
        amount_cents=500,
        currency="usd",
        product_name="100 coins",
        client_reference_id=str(purchase_id),
        success_url=f"http://localhost:3000/coins/verify?id={purchase_id}",
        cancel_url=f"http://localhost:3000/coins/verify?id={purchase_id}",
        idempotency_key=f"checkout:{purchase_id}:1:abcd1234",
        metadata={"purchase_id": str(purchase_id)},
    )


# =============================================================================
# Mock Stripe Response Fixtures
# =============================================================================


@dataclass
class MockStripeObject:
    """Mock Stripe API object with to_dict support."""

    data: dict[str, Any]

    def __getattr__(self, name: str) -> Any:
        if name == "data":
            return self.__dict__["data"]
        return self.data.get(name)

    def to_dict(self) -> dict[str, Any]:
        return self.data


@pytest.fixture
def mock_checkout_session():
    """Create a mock Checkout Session response."""

    def _create(
        id: str = "cs_test_a1b2c3",
        url: str | None = "https://checkout.stripe.com/c/pay/cs_test_a1b2c3",
        status: str = "open",
        payment_status: str = "unpaid",
        amount_total: int = 500,
        currency: str = "usd",
        client_reference_id: str | None = None,
    ) -> MockStripeObject:
        return MockStripeObject(
            {
                "id": id,
                "object": "checkout.session",
                "url": url,
                "status": status,
                "payment_status": payment_status,
                "amount_total": amount_total,
                "currency": currency,
                "client_reference_id": client_reference_id,
            }
        )

    return _create


# =============================================================================
# Mock Stripe Error Fixtures
# =============================================================================


@pytest.fixture
def card_error():
    """Create a Stripe CardError."""
    error = stripe.CardError(
        message="Your card was declined.",
        param=None,
        code="card_declined",
    )
    error.decline_code = "generic_decline"
    return error


@pytest.fixture
def invalid_request_error():
    return stripe.InvalidRequestError(
        message="No such checkout session: 'cs_missing'",
        param="id",
        code="resource_missing",
    )


@pytest.fixture
def rate_limit_error():
    return stripe.RateLimitError(
        message="Too many requests hit the API too quickly.",
    )


@pytest.fixture
def api_connection_error():
    return stripe.APIConnectionError(
        message="Could not connect to Stripe.",
    )


@pytest.fixture
def api_error():
    return stripe.APIError(
        message="Something went wrong on Stripe's end.",
    )


@pytest.fixture
def authentication_error():
    return stripe.AuthenticationError(
        message="Invalid API Key provided.",
    )


@pytest.fixture
def signature_verification_error():
    return stripe.SignatureVerificationError(
        message="Unable to verify webhook signature.",
        sig_header="bad_signature",
    )


# =============================================================================
# Mock Stripe Client Fixtures
# =============================================================================


@pytest.fixture
def mock_stripe_checkout_session(mock_checkout_session):
    """Mock stripe.checkout.Session API."""
    with patch("stripe.checkout.Session") as mock:
        mock.create.return_value = mock_checkout_session()
        mock.retrieve.return_value = mock_checkout_session(
            status="complete", payment_status="paid", url=None
        )
        yield mock


@pytest.fixture
def mock_stripe_webhook():
    """Mock stripe.Webhook API."""
    with patch("stripe.Webhook") as mock:
        mock.construct_event.return_value = MockStripeObject(
            {
                "id": "evt_test123",
                "type": "checkout.session.completed",
                "data": {"object": {"id": "cs_test_a1b2c3"}},
            }
        )
        yield mock
