"""
DRF serializers for the coins API.

Serializers:
    BuyCoinsSerializer: POST /coins/buy/ body
    PurchaseStartedSerializer: Response of a started purchase
    PurchaseVerifiedSerializer: Response of a verified purchase
    BalanceSerializer: Current coin balance
    CoinPurchaseSerializer: Purchase history entry (admin and tests)
"""

from __future__ import annotations

from rest_framework import serializers

from payments.models import CoinPurchase


class BuyCoinsSerializer(serializers.Serializer):
    """
    Coin purchase request.

    The range check (MIN_COIN_PURCHASE..MAX_COIN_PURCHASE) is done by
    CoinService so that it reports INVALID_AMOUNT.
    """

    coins = serializers.IntegerField(help_text="Number of coins to buy")


class PurchaseStartedSerializer(serializers.Serializer):
    purchase_id = serializers.UUIDField(source="purchase.id")
    coins = serializers.IntegerField(source="purchase.coins")
    amount_cents = serializers.IntegerField(source="purchase.amount_cents")
    currency = serializers.CharField(source="purchase.currency")
    checkout_url = serializers.URLField()


class PurchaseVerifiedSerializer(serializers.Serializer):
    purchase_id = serializers.UUIDField(source="id")
    status = serializers.CharField(source="state")
    coins = serializers.IntegerField()
    balance = serializers.SerializerMethodField()

    def get_balance(self, obj: CoinPurchase) -> int:
        return self.context["balance"]


class BalanceSerializer(serializers.Serializer):
    coins = serializers.IntegerField()


class CoinPurchaseSerializer(serializers.ModelSerializer):
    class Meta:
        model = CoinPurchase
        fields = [
            "id",
            "coins",
            "amount_cents",
            "currency",
            "state",
            "completed_at",
            "created_at",
        ]
        read_only_fields = fields
