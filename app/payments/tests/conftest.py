"""
Test configuration and fixtures for coin tests.

This module provides:
- A buyer and a JWT client for them
- Purchases in each state
- ``stripe_adapter``: StripeAdapter patched where CoinService uses it

Usage:
    def test_example(buyer_client, stripe_adapter):
        response = buyer_client.post("/api/v1/coins/buy/", {"coins": 100})
        assert response.status_code == 201
"""

from unittest.mock import patch

import pytest

from authentication.tests.factories import UserFactory
from payments.adapters import CheckoutSessionResult
from payments.state_machines import CoinPurchaseState
from payments.tests.factories import CoinPurchaseFactory


def make_session(
    id="cs_test_000001",
    payment_status="unpaid",
    status="open",
    url="https://checkout.stripe.com/c/pay/cs_test_000001",
    client_reference_id=None,
):
    """Build a CheckoutSessionResult as StripeAdapter returns it."""
    return CheckoutSessionResult(
        id=id,
        url=url,
        status=status,
        payment_status=payment_status,
        amount_total=500,
        currency="usd",
        client_reference_id=client_reference_id,
    )


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def buyer(db):
    return UserFactory(name="Buyer", coins=100)


@pytest.fixture
def buyer_client(authenticated_client_factory, buyer):
    return authenticated_client_factory(buyer)


# =============================================================================
# Purchase Fixtures
# =============================================================================


@pytest.fixture
def pending_purchase(buyer):
    return CoinPurchaseFactory(user=buyer, coins=200)


@pytest.fixture
def completed_purchase(buyer):
    return CoinPurchaseFactory(user=buyer, coins=200, state=CoinPurchaseState.COMPLETED)


@pytest.fixture
def failed_purchase(buyer):
    return CoinPurchaseFactory(
        user=buyer, coins=200, state=CoinPurchaseState.FAILED, stripe_session_id=""
    )


# =============================================================================
# Stripe Fixtures
# =============================================================================


@pytest.fixture
def stripe_adapter():
    """
    StripeAdapter as seen by CoinService.

    By default checkout creation succeeds and retrieved sessions are paid.
    """
    with patch("payments.services.coin_service.StripeAdapter") as mock:
        mock.create_checkout_session.return_value = make_session()
        mock.retrieve_checkout_session.return_value = make_session(
            payment_status="paid", status="complete", url=None
        )
        yield mock


@pytest.fixture
def checkout_session():
    """Factory for CheckoutSessionResult values returned by the mocked adapter."""
    return make_session
