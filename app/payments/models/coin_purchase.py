"""
CoinPurchase model: one attempt to buy coins through Stripe Checkout.

Usage:
    from payments.models import CoinPurchase

    purchase = CoinPurchase.objects.create(
        user=user,
        coins=100,
        amount_cents=500,
        currency="usd",
    )

    # State transitions using django-fsm
    purchase.complete()  # pending -> completed
    purchase.save()
"""

from __future__ import annotations

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django_fsm import FSMField, transition

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

from payments.state_machines import CoinPurchaseState


class CoinPurchase(UUIDPrimaryKeyMixin, BaseModel):
    """
    A purchase of coins paid through a Stripe Checkout Session.

    Coins are credited exactly once, by the transition to COMPLETED.

    State Flow:
        PENDING -> COMPLETED
        PENDING -> FAILED

    Fields:
        user: Buyer who receives the coins
        coins: Number of coins bought
        amount_cents: Price charged, in the smallest currency unit
        currency: ISO 4217 currency code
        stripe_session_id: Checkout Session id (cs_xxx)
        checkout_url: Hosted payment page the buyer is redirected to
        state: Purchase state (managed by FSM)
        completed_at: When the coins were credited
        failure_reason: Why the purchase failed, for support
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="coin_purchases",
        help_text="User buying the coins",
    )
    coins = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Number of coins bought",
    )
    amount_cents = models.PositiveIntegerField(
        help_text="Price in the smallest currency unit (e.g., cents)",
    )
    currency = models.CharField(
        max_length=3,
        default="usd",
        help_text="ISO 4217 currency code",
    )
    stripe_session_id = models.CharField(
        max_length=255,
        blank=True,
        db_index=True,
        help_text="Stripe Checkout Session ID (cs_xxx)",
    )
    checkout_url = models.URLField(
        max_length=2048,
        blank=True,
        help_text="Stripe hosted checkout page",
    )
    state = FSMField(
        default=CoinPurchaseState.PENDING,
        choices=CoinPurchaseState.choices,
        db_index=True,
        protected=True,
        help_text="Current state of the purchase (managed by FSM)",
    )
    completed_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the coins were credited",
    )
    failure_reason = models.TextField(
        blank=True,
        help_text="Why the purchase failed",
    )

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Coin Purchase"
        verbose_name_plural = "Coin Purchases"
        indexes = [
            models.Index(fields=["user", "state"], name="coin_purchase_user_state_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount_cents__gt=0),
                name="coin_purchase_amount_positive",
            ),
        ]

    def __str__(self) -> str:
        amount_display = f"{self.amount_cents / 100:.2f} {self.currency.upper()}"
        return f"CoinPurchase({self.id}, {self.state}, {self.coins} coins, {amount_display})"

    @property
    def is_completed(self) -> bool:
        return self.state == CoinPurchaseState.COMPLETED

    # ==========================================================================
    # State Transitions (django-fsm)
    # ==========================================================================

    @transition(
        field=state,
        source=CoinPurchaseState.PENDING,
        target=CoinPurchaseState.COMPLETED,
    )
    def complete(self):
        """
        Mark the purchase as paid.

        Transition: PENDING -> COMPLETED

        The caller credits the coins in the same transaction.
        """
        self.completed_at = timezone.now()

    @transition(
        field=state,
        source=CoinPurchaseState.PENDING,
        target=CoinPurchaseState.FAILED,
    )
    def fail(self, reason: str | None = None):
        """
        Mark the purchase as failed.

        Transition: PENDING -> FAILED
        """
        if reason:
            self.failure_reason = reason
