"""
Coin balance and coin purchase service.

Every user holds a non-negative coin balance. Coins are spent on chat
messages, bought through Stripe Checkout and topped up every week.

Balance changes are single conditional UPDATE statements, so concurrent
spends can never push a balance below zero and no read-modify-write race
is possible.

Usage:
    from payments.services import CoinService

    result = CoinService.debit(user.id, settings.MESSAGE_COIN_COST)
    if not result:
        ...  # result.error_code == "INSUFFICIENT_FUNDS"

    result = CoinService.start_purchase(user, coins=200)
    redirect_to(result.data.checkout_url)

    # Later, from the verify endpoint or the webhook
    CoinService.complete_purchase(purchase_id)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import F

from core.helpers import parse_uuid
from core.services import BaseService, ServiceResult

from payments.adapters import (
    CreateCheckoutSessionParams,
    IdempotencyKeyGenerator,
    StripeAdapter,
)
from payments.exceptions import StripeError
from payments.models import CoinPurchase
from payments.state_machines import CoinPurchaseState

if TYPE_CHECKING:
    from authentication.models import User


class ERROR_CODES:
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_ID = "INVALID_ID"
    PURCHASE_NOT_FOUND = "PURCHASE_NOT_FOUND"
    PAYMENT_GATEWAY_ERROR = "PAYMENT_GATEWAY_ERROR"
    PAYMENT_NOT_COMPLETED = "PAYMENT_NOT_COMPLETED"


@dataclass
class StartedPurchase:
    """A pending purchase and the page where the buyer pays for it."""

    purchase: CoinPurchase
    checkout_url: str


class CoinService(BaseService):
    """
    Service for coin balances and coin purchases.

    Methods:
        get_balance: Current balance of a user
        debit: Remove coins if the balance covers them
        credit: Add coins
        start_purchase: Create a pending purchase and its Stripe checkout
        complete_purchase: Credit a paid purchase (idempotent)
        fail_purchase: Mark a pending purchase failed
        grant_weekly_allowance: Add the weekly allowance to every active user
    """

    @classmethod
    def get_balance(cls, user_id) -> int:
        return get_user_model().objects.values_list("coins", flat=True).get(pk=user_id)

    @classmethod
    def debit(cls, user_id, amount: int) -> ServiceResult[int]:
        """
        Remove ``amount`` coins from a user.

        The decrement only happens if the balance covers it, in one
        ``UPDATE ... WHERE coins >= amount``.

        Returns:
            ServiceResult with the remaining balance

        Error codes:
            INVALID_AMOUNT: amount is negative
            INSUFFICIENT_FUNDS: Balance below amount (nothing changed)
        """
        if amount < 0:
            return ServiceResult.failure(
                "Amount must not be negative",
                error_code=ERROR_CODES.INVALID_AMOUNT,
            )

        User = get_user_model()
        with cls.atomic():
            updated = User.objects.filter(pk=user_id, coins__gte=amount).update(
                coins=F("coins") - amount
            )
            if not updated:
                cls.get_logger().info(
                    f"Debit of {amount} coins refused for user {user_id}"
                )
                return ServiceResult.failure(
                    "Not enough coins",
                    error_code=ERROR_CODES.INSUFFICIENT_FUNDS,
                )
            balance = cls.get_balance(user_id)

        cls.get_logger().info(
            f"Debited {amount} coins from user {user_id} (balance {balance})"
        )
        return ServiceResult.success(balance)

    @classmethod
    def credit(cls, user_id, amount: int) -> ServiceResult[int]:
        """
        Add ``amount`` coins to a user.

        Returns:
            ServiceResult with the new balance

        Error codes:
            INVALID_AMOUNT: amount is negative
        """
        if amount < 0:
            return ServiceResult.failure(
                "Amount must not be negative",
                error_code=ERROR_CODES.INVALID_AMOUNT,
            )

        User = get_user_model()
        with cls.atomic():
            User.objects.filter(pk=user_id).update(coins=F("coins") + amount)
            balance = cls.get_balance(user_id)

        cls.get_logger().info(
            f"Credited {amount} coins to user {user_id} (balance {balance})"
        )
        return ServiceResult.success(balance)

    @classmethod
    def start_purchase(cls, user: User, coins) -> ServiceResult[StartedPurchase]:
        """
        Start buying ``coins`` coins.

        Implementation:
            1. Validate MIN_COIN_PURCHASE <= coins <= MAX_COIN_PURCHASE
            2. Create a pending CoinPurchase priced at coins * COIN_PRICE_CENTS
            3. Create the Stripe Checkout Session (outside any transaction)
            4. Store the session on the purchase

        The buyer comes back to FRONTEND_URL/coins/verify?id=<purchase id>
        whether they paid or cancelled.

        Error codes:
            INVALID_AMOUNT: coins outside the allowed range
            PAYMENT_GATEWAY_ERROR: Stripe refused or was unreachable; the
                purchase is marked failed
        """
        minimum, maximum = settings.MIN_COIN_PURCHASE, settings.MAX_COIN_PURCHASE
        if not isinstance(coins, int) or isinstance(coins, bool) or not (
            minimum <= coins <= maximum
        ):
            return ServiceResult.failure(
                f"You can buy between {minimum} and {maximum} coins",
                error_code=ERROR_CODES.INVALID_AMOUNT,
            )

        purchase = CoinPurchase.objects.create(
            user=user,
            coins=coins,
            amount_cents=coins * settings.COIN_PRICE_CENTS,
            currency=settings.COIN_CURRENCY,
        )

        return_url = f"{settings.FRONTEND_URL.rstrip('/')}/coins/verify?id={purchase.id}"
        try:
            session = StripeAdapter.create_checkout_session(
                CreateCheckoutSessionParams(
                    amount_cents=purchase.amount_cents,
                    currency=purchase.currency,
                    product_name=f"{coins} coins",
                    client_reference_id=str(purchase.id),
                    success_url=return_url,
                    cancel_url=return_url,
                    idempotency_key=IdempotencyKeyGenerator.generate(
                        "checkout", purchase.id
                    ),
                    metadata={"purchase_id": str(purchase.id), "user_id": str(user.id)},
                )
            )
        except StripeError as e:
            purchase.fail(reason=e.message)
            purchase.save(update_fields=["state", "failure_reason", "updated_at"])
            return cls.handle_exception(
                e,
                f"Checkout for purchase {purchase.id} failed",
                error_code=ERROR_CODES.PAYMENT_GATEWAY_ERROR,
            )

        purchase.stripe_session_id = session.id
        purchase.checkout_url = session.url or ""
        purchase.save(update_fields=["stripe_session_id", "checkout_url", "updated_at"])

        cls.get_logger().info(
            f"User {user.id} started purchase {purchase.id} of {coins} coins "
            f"({purchase.amount_cents} {purchase.currency})"
        )
        return ServiceResult.success(
            StartedPurchase(purchase=purchase, checkout_url=purchase.checkout_url)
        )

    @classmethod
    def complete_purchase(cls, purchase_id, user: User | None = None) -> ServiceResult[CoinPurchase]:
        """
        Credit a purchase once Stripe reports its checkout paid.

        Safe to call any number of times, from the verify endpoint and the
        webhook alike: the coins are credited only by the call that moves
        the purchase from PENDING to COMPLETED, under a row lock.

        Args:
            purchase_id: CoinPurchase id
            user: When given, the purchase must belong to this user

        Error codes:
            INVALID_ID: purchase_id is not a well-formed identifier
            PURCHASE_NOT_FOUND: No such purchase (for this user)
            PAYMENT_NOT_COMPLETED: Checkout not paid, or purchase failed
            PAYMENT_GATEWAY_ERROR: Stripe could not be queried
        """
        parsed_id = parse_uuid(purchase_id)
        if parsed_id is None:
            return ServiceResult.failure(
                "Purchase id is not a valid identifier",
                error_code=ERROR_CODES.INVALID_ID,
            )

        purchases = CoinPurchase.objects.filter(pk=parsed_id)
        if user is not None:
            purchases = purchases.filter(user=user)
        purchase = purchases.first()
        if purchase is None:
            return ServiceResult.failure(
                "Purchase not found",
                error_code=ERROR_CODES.PURCHASE_NOT_FOUND,
            )

        if purchase.is_completed:
            return ServiceResult.success(purchase)

        if purchase.state == CoinPurchaseState.FAILED or not purchase.stripe_session_id:
            return ServiceResult.failure(
                "This purchase was not paid",
                error_code=ERROR_CODES.PAYMENT_NOT_COMPLETED,
            )

        try:
            session = StripeAdapter.retrieve_checkout_session(purchase.stripe_session_id)
        except StripeError as e:
            return cls.handle_exception(
                e,
                f"Could not verify purchase {purchase.id}",
                error_code=ERROR_CODES.PAYMENT_GATEWAY_ERROR,
            )

        if not session.is_paid:
            return ServiceResult.failure(
                "Payment has not been completed",
                error_code=ERROR_CODES.PAYMENT_NOT_COMPLETED,
            )

        with cls.atomic():
            purchase = CoinPurchase.objects.select_for_update().get(pk=purchase.pk)
            if purchase.is_completed:
                return ServiceResult.success(purchase)

            purchase.complete()
            purchase.save(update_fields=["state", "completed_at", "updated_at"])
            get_user_model().objects.filter(pk=purchase.user_id).update(
                coins=F("coins") + purchase.coins
            )

        cls.get_logger().info(
            f"Purchase {purchase.id} completed: credited {purchase.coins} coins "
            f"to user {purchase.user_id}"
        )
        return ServiceResult.success(purchase)

    @classmethod
    def fail_purchase(cls, purchase_id, reason: str = "") -> ServiceResult[CoinPurchase | None]:
        """
        Mark a pending purchase failed (checkout expired or payment failed).

        A purchase that is no longer pending is left untouched.

        Error codes:
            INVALID_ID: purchase_id is not a well-formed identifier
            PURCHASE_NOT_FOUND: No such purchase
        """
        parsed_id = parse_uuid(purchase_id)
        if parsed_id is None:
            return ServiceResult.failure(
                "Purchase id is not a valid identifier",
                error_code=ERROR_CODES.INVALID_ID,
            )

        with cls.atomic():
            purchase = CoinPurchase.objects.select_for_update().filter(pk=parsed_id).first()
            if purchase is None:
                return ServiceResult.failure(
                    "Purchase not found",
                    error_code=ERROR_CODES.PURCHASE_NOT_FOUND,
                )
            if purchase.state != CoinPurchaseState.PENDING:
                return ServiceResult.success(purchase)

            purchase.fail(reason=reason)
            purchase.save(update_fields=["state", "failure_reason", "updated_at"])

        cls.get_logger().info(f"Purchase {purchase.id} failed: {reason}")
        return ServiceResult.success(purchase)

    @classmethod
    def grant_weekly_allowance(cls) -> int:
        """
        Add WEEKLY_COIN_ALLOWANCE coins to every active user.

        One UPDATE statement for all users.

        Returns:
            Number of users credited
        """
        allowance = settings.WEEKLY_COIN_ALLOWANCE
        credited = (
            get_user_model()
            .objects.filter(is_active=True)
            .update(coins=F("coins") + allowance)
        )
        cls.get_logger().info(f"Granted weekly allowance of {allowance} coins to {credited} users")
        return credited
