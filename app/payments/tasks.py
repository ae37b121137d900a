"""
Celery tasks for coins.

Tasks:
- grant_weekly_coins: Weekly allowance for every active user (celery-beat,
  schedule created by migration 0002)
- complete_coin_purchase: Credit a purchase reported paid by a webhook

Usage:
    from payments.tasks import complete_coin_purchase

    complete_coin_purchase.delay(str(purchase.id))
"""

from __future__ import annotations

import logging

from celery import shared_task

from payments.services import CoinService
from payments.services.coin_service import ERROR_CODES

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

MAX_COMPLETION_RETRIES = 5


class RetryableCompletionError(Exception):
    """Raised to make Celery retry a completion that hit a gateway error."""


# =============================================================================
# Tasks
# =============================================================================


@shared_task
def grant_weekly_coins() -> dict:
    """
    Add WEEKLY_COIN_ALLOWANCE coins to every active user.

    Returns:
        Dict with the number of users credited
    """
    credited = CoinService.grant_weekly_allowance()
    logger.info(
        "Weekly coin allowance granted",
        extra={"users_credited": credited},
    )
    return {"status": "completed", "users_credited": credited}


@shared_task(
    bind=True,
    autoretry_for=(RetryableCompletionError,),
    retry_backoff=True,
    retry_backoff_max=300,
    retry_kwargs={"max_retries": MAX_COMPLETION_RETRIES},
    acks_late=True,
)
def complete_coin_purchase(self, purchase_id: str) -> dict:
    """
    Credit a purchase once Stripe confirms it was paid.

    Safe to run after the verify endpoint already completed the purchase.
    Gateway errors are retried with backoff; any other failure is final.

    Args:
        purchase_id: CoinPurchase id

    Returns:
        Dict with the outcome
    """
    result = CoinService.complete_purchase(purchase_id)

    if result.success:
        return {"status": "completed", "purchase_id": str(purchase_id)}

    if result.error_code == ERROR_CODES.PAYMENT_GATEWAY_ERROR:
        logger.warning(
            "Coin purchase completion will be retried",
            extra={"purchase_id": str(purchase_id), "retries": self.request.retries},
        )
        raise RetryableCompletionError(result.error)

    logger.info(
        f"Coin purchase not completed: {result.error_code}",
        extra={"purchase_id": str(purchase_id)},
    )
    return {
        "status": "not_completed",
        "purchase_id": str(purchase_id),
        "error_code": result.error_code,
    }
