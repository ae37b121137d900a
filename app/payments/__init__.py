"""
Payments app: coins.

This app handles:
- Coin balances (spent on chat messages)
- Coin purchases through Stripe Checkout
- Stripe webhook events for those purchases
- The weekly coin allowance (Celery beat)

Related apps:
    - authentication: User.coins holds the balance
    - chat: Debits MESSAGE_COIN_COST per message

Usage:
    from payments.services import CoinService

    result = CoinService.debit(user.id, 10)
    result = CoinService.start_purchase(user, coins=200)
"""
