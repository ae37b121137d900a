"""
Tests for coin Celery tasks.

Tasks are called directly (synchronously); Celery itself is not involved.
"""

import pytest

from authentication.tests.factories import UserFactory
from payments.exceptions import StripeAPIUnavailableError
from payments.services import CoinService
from payments.tasks import (
    RetryableCompletionError,
    complete_coin_purchase,
    grant_weekly_coins,
)


@pytest.mark.django_db
class TestGrantWeeklyCoins:
    def test_credits_active_users(self, settings):
        settings.WEEKLY_COIN_ALLOWANCE = 100
        user = UserFactory(coins=5)
        UserFactory(is_active=False)

        result = grant_weekly_coins()

        assert result == {"status": "completed", "users_credited": 1}
        assert CoinService.get_balance(user.id) == 105


@pytest.mark.django_db
class TestCompleteCoinPurchase:
    def test_completes_paid_purchase(self, buyer, pending_purchase, stripe_adapter):
        result = complete_coin_purchase(str(pending_purchase.id))

        assert result["status"] == "completed"
        assert CoinService.get_balance(buyer.id) == 300

    def test_unpaid_is_final(self, pending_purchase, stripe_adapter, checkout_session):
        stripe_adapter.retrieve_checkout_session.return_value = checkout_session()

        result = complete_coin_purchase(str(pending_purchase.id))

        assert result["status"] == "not_completed"
        assert result["error_code"] == "PAYMENT_NOT_COMPLETED"

    def test_gateway_error_is_retried(self, pending_purchase, stripe_adapter):
        stripe_adapter.retrieve_checkout_session.side_effect = StripeAPIUnavailableError(
            "Stripe service error. Please retry."
        )

        with pytest.raises(RetryableCompletionError):
            complete_coin_purchase(str(pending_purchase.id))
