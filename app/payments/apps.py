"""
Payments app configuration.

Coins: balances, Stripe Checkout purchases and the weekly allowance.
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Configuration for the payments application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Coins"

    def ready(self):
        # Registers the webhook handlers
        import payments.webhooks.handlers  # noqa: F401
