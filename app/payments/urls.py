"""
URL configuration for the coins API.

All routes are prefixed with /api/v1/coins/ when included in the main URLconf.
"""

from django.urls import path

from payments.views import BalanceView, BuyCoinsView, VerifyPurchaseView
from payments.webhooks.views import stripe_webhook

app_name = "payments"

urlpatterns = [
    path("balance/", BalanceView.as_view(), name="balance"),
    path("buy/", BuyCoinsView.as_view(), name="buy"),
    path("verify/", VerifyPurchaseView.as_view(), name="verify"),
    path("webhook/", stripe_webhook, name="stripe_webhook"),
]
