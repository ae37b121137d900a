"""
Payment domain models.

- CoinPurchase: A purchase of coins through Stripe Checkout
"""

from payments.models.coin_purchase import CoinPurchase

__all__ = [
    "CoinPurchase",
]
