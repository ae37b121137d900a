"""
Payment services.

- CoinService: Coin balances, coin purchases and the weekly allowance

Usage:
    from payments.services import CoinService

    result = CoinService.debit(user.id, 10)
"""

from payments.services.coin_service import CoinService, StartedPurchase

__all__ = [
    "CoinService",
    "StartedPurchase",
]
