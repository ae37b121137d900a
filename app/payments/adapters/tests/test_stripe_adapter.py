"""
Tests for Stripe adapter.

Tests cover:
- Checkout parameter validation
- Idempotency key generation
- Checkout Session creation and retrieval
- Error translation for each exception type
- Webhook signature verification
"""

import uuid

import pytest

from payments.adapters import (
    CheckoutSessionResult,
    CreateCheckoutSessionParams,
    IdempotencyKeyGenerator,
    StripeAdapter,
)
from payments.exceptions import (
    StripeAPIUnavailableError,
    StripeCardDeclinedError,
    StripeInvalidRequestError,
    StripeRateLimitError,
)


# =============================================================================
# CreateCheckoutSessionParams Tests
# =============================================================================


class TestCreateCheckoutSessionParams:
    """Tests for CreateCheckoutSessionParams dataclass validation."""

    def _params(self, **overrides):
        values = {
            "amount_cents": 500,
            "currency": "usd",
            "product_name": "100 coins",
            "client_reference_id": "purchase-1",
            "success_url": "http://localhost:3000/coins/verify?id=1",
            "cancel_url": "http://localhost:3000/coins/verify?id=1",
            "idempotency_key": "checkout:1:1:abcd",
        }
        values.update(overrides)
        return CreateCheckoutSessionParams(**values)

    def test_valid_params(self):
        params = self._params()

        assert params.amount_cents == 500
        assert params.metadata == {}

    @pytest.mark.parametrize("amount", [0, -100])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(ValueError, match="amount_cents must be positive"):
            self._params(amount_cents=amount)

    def test_idempotency_key_required(self):
        with pytest.raises(ValueError, match="idempotency_key is required"):
            self._params(idempotency_key="")

    def test_currency_required(self):
        with pytest.raises(ValueError, match="currency is required"):
            self._params(currency="")


# =============================================================================
# IdempotencyKeyGenerator Tests
# =============================================================================


class TestIdempotencyKeyGenerator:
    def test_format(self):
        entity_id = uuid.uuid4()

        key = IdempotencyKeyGenerator.generate("checkout", entity_id)

        operation, entity, attempt, digest = key.split(":")
        assert operation == "checkout"
        assert entity == str(entity_id)
        assert attempt == "1"
        assert len(digest) == 8

    def test_same_inputs_same_key(self):
        entity_id = uuid.uuid4()

        assert IdempotencyKeyGenerator.generate(
            "checkout", entity_id
        ) == IdempotencyKeyGenerator.generate("checkout", entity_id)

    def test_attempt_changes_key(self):
        """
        A retry with a new attempt number must not replay Stripe's cached
        response for the first attempt.
        """
        entity_id = uuid.uuid4()

        first = IdempotencyKeyGenerator.generate("checkout", entity_id, attempt=1)
        second = IdempotencyKeyGenerator.generate("checkout", entity_id, attempt=2)

        assert first != second


# =============================================================================
# Checkout Session Tests
# =============================================================================


class TestCreateCheckoutSession:
    @pytest.fixture(autouse=True)
    def stripe_key(self, settings):
        settings.STRIPE_SECRET_KEY = "sk_test_123"

    def test_creates_payment_mode_session(
        self, mock_stripe_checkout_session, checkout_params
    ):
        result = StripeAdapter.create_checkout_session(checkout_params)

        assert isinstance(result, CheckoutSessionResult)
        assert result.id == "cs_test_a1b2c3"
        assert result.url.startswith("https://checkout.stripe.com/")
        assert result.is_paid is False

        kwargs = mock_stripe_checkout_session.create.call_args.kwargs
        assert kwargs["mode"] == "payment"
        assert kwargs["client_reference_id"] == checkout_params.client_reference_id
        assert kwargs["idempotency_key"] == checkout_params.idempotency_key
        assert kwargs["success_url"] == checkout_params.success_url
        price_data = kwargs["line_items"][0]["price_data"]
        assert price_data["unit_amount"] == 500
        assert price_data["currency"] == "usd"
        assert price_data["product_data"]["name"] == "100 coins"

    def test_card_error_translated(
        self, mock_stripe_checkout_session, checkout_params, card_error
    ):
        mock_stripe_checkout_session.create.side_effect = card_error

        with pytest.raises(StripeCardDeclinedError) as exc_info:
            StripeAdapter.create_checkout_session(checkout_params)

        assert exc_info.value.stripe_code == "card_declined"
        assert exc_info.value.decline_code == "generic_decline"
        assert exc_info.value.is_retryable is False

    def test_invalid_request_translated(
        self, mock_stripe_checkout_session, checkout_params, invalid_request_error
    ):
        mock_stripe_checkout_session.create.side_effect = invalid_request_error

        with pytest.raises(StripeInvalidRequestError) as exc_info:
            StripeAdapter.create_checkout_session(checkout_params)

        assert exc_info.value.stripe_code == "resource_missing"

    def test_rate_limit_translated(
        self, mock_stripe_checkout_session, checkout_params, rate_limit_error
    ):
        mock_stripe_checkout_session.create.side_effect = rate_limit_error

        with pytest.raises(StripeRateLimitError) as exc_info:
            StripeAdapter.create_checkout_session(checkout_params)

        assert exc_info.value.is_retryable is True

    def test_connection_error_translated(
        self, mock_stripe_checkout_session, checkout_params, api_connection_error
    ):
        mock_stripe_checkout_session.create.side_effect = api_connection_error

        with pytest.raises(StripeAPIUnavailableError) as exc_info:
            StripeAdapter.create_checkout_session(checkout_params)

        assert exc_info.value.stripe_code == "api_connection_error"

    def test_api_error_translated(
        self, mock_stripe_checkout_session, checkout_params, api_error
    ):
        mock_stripe_checkout_session.create.side_effect = api_error

        with pytest.raises(StripeAPIUnavailableError):
            StripeAdapter.create_checkout_session(checkout_params)

    def test_authentication_error_translated(
        self, mock_stripe_checkout_session, checkout_params, authentication_error
    ):
        mock_stripe_checkout_session.create.side_effect = authentication_error

        with pytest.raises(StripeInvalidRequestError) as exc_info:
            StripeAdapter.create_checkout_session(checkout_params)

        assert exc_info.value.stripe_code == "authentication_error"

    def test_unexpected_error_translated(
        self, mock_stripe_checkout_session, checkout_params
    ):
        mock_stripe_checkout_session.create.side_effect = RuntimeError("boom")

        with pytest.raises(StripeAPIUnavailableError) as exc_info:
            StripeAdapter.create_checkout_session(checkout_params)

        assert exc_info.value.stripe_code == "unknown_error"


class TestRetrieveCheckoutSession:
    @pytest.fixture(autouse=True)
    def stripe_key(self, settings):
        settings.STRIPE_SECRET_KEY = "sk_test_123"

    def test_returns_paid_session(self, mock_stripe_checkout_session):
        result = StripeAdapter.retrieve_checkout_session("cs_test_a1b2c3")

        mock_stripe_checkout_session.retrieve.assert_called_once_with("cs_test_a1b2c3")
        assert result.is_paid is True
        assert result.status == "complete"
        assert result.raw_response["object"] == "checkout.session"

    def test_missing_session_translated(
        self, mock_stripe_checkout_session, invalid_request_error
    ):
        mock_stripe_checkout_session.retrieve.side_effect = invalid_request_error

        with pytest.raises(StripeInvalidRequestError):
            StripeAdapter.retrieve_checkout_session("cs_missing")


# =============================================================================
# Webhook Verification Tests
# =============================================================================


class TestVerifyWebhookSignature:
    @pytest.fixture(autouse=True)
    def webhook_secret(self, settings):
        settings.STRIPE_WEBHOOK_SECRET = "whsec_test"

    def test_valid_signature_returns_event_dict(self, mock_stripe_webhook):
        event = StripeAdapter.verify_webhook_signature(b"{}", "t=1,v1=abc")

        assert event["id"] == "evt_test123"
        assert event["type"] == "checkout.session.completed"
        mock_stripe_webhook.construct_event.assert_called_once_with(
            b"{}", "t=1,v1=abc", "whsec_test"
        )

    def test_bad_signature_raises(
        self, mock_stripe_webhook, signature_verification_error
    ):
        mock_stripe_webhook.construct_event.side_effect = signature_verification_error

        with pytest.raises(StripeInvalidRequestError) as exc_info:
            StripeAdapter.verify_webhook_signature(b"{}", "bad_signature")

        assert exc_info.value.stripe_code == "signature_verification_failed"

    def test_malformed_payload_raises(self, mock_stripe_webhook):
        mock_stripe_webhook.construct_event.side_effect = ValueError("bad json")

        with pytest.raises(StripeInvalidRequestError) as exc_info:
            StripeAdapter.verify_webhook_signature(b"not json", "t=1,v1=abc")

        assert exc_info.value.stripe_code == "invalid_payload"
