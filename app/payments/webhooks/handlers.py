"""
Webhook event handlers for Stripe events.

Handlers are looked up by event type in WEBHOOK_HANDLERS. Each receives the
verified event dict and returns a ServiceResult. Event types without a
handler are acknowledged and ignored.

Usage:
    from payments.webhooks.handlers import dispatch_webhook, register_handler

    @register_handler("custom.event")
    def handle_custom_event(event: dict) -> ServiceResult:
        ...

    result = dispatch_webhook(event)
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from core.services import ServiceResult

logger = logging.getLogger(__name__)


# =============================================================================
# Handler Registry
# =============================================================================


WEBHOOK_HANDLERS: dict[str, Callable[[dict[str, Any]], ServiceResult]] = {}


def register_handler(event_type: str) -> Callable:
    """
    Decorator to register a webhook event handler.

    Args:
        event_type: The Stripe event type (e.g., "checkout.session.completed")
    """

    def decorator(func: Callable[[dict[str, Any]], ServiceResult]) -> Callable:
        WEBHOOK_HANDLERS[event_type] = func
        logger.debug(f"Registered webhook handler for {event_type}")
        return func

    return decorator


def dispatch_webhook(event: dict[str, Any]) -> ServiceResult:
    """
    Dispatch a verified event to its handler.

    Returns:
        ServiceResult from the handler, or success if no handler is registered
    """
    event_type = event.get("type", "")
    handler = WEBHOOK_HANDLERS.get(event_type)

    if not handler:
        logger.info(
            f"No handler registered for event type: {event_type}",
            extra={"stripe_event_id": event.get("id")},
        )
        return ServiceResult.success(None)

    logger.info(
        f"Dispatching {event_type} to handler",
        extra={"stripe_event_id": event.get("id")},
    )
    return handler(event)


def _session_from_event(event: dict[str, Any]) -> dict[str, Any]:
    return event.get("data", {}).get("object", {}) or {}


# =============================================================================
# Checkout Session Handlers
# =============================================================================


@register_handler("checkout.session.completed")
@register_handler("checkout.session.async_payment_succeeded")
def handle_checkout_session_completed(event: dict[str, Any]) -> ServiceResult:
    """
    Queue completion of the purchase named by ``client_reference_id``.

    The task re-checks the session with Stripe before crediting, so a
    completed-but-unpaid session (delayed payment methods) is not credited.
    """
    from payments.tasks import complete_coin_purchase

    session = _session_from_event(event)
    purchase_id = session.get("client_reference_id")
    if not purchase_id:
        logger.warning(
            "Checkout session without client_reference_id",
            extra={"stripe_event_id": event.get("id"), "session_id": session.get("id")},
        )
        return ServiceResult.success(None)

    complete_coin_purchase.delay(str(purchase_id))
    logger.info(
        "Queued coin purchase completion",
        extra={"stripe_event_id": event.get("id"), "purchase_id": purchase_id},
    )
    return ServiceResult.success(purchase_id)


@register_handler("checkout.session.expired")
@register_handler("checkout.session.async_payment_failed")
def handle_checkout_session_failed(event: dict[str, Any]) -> ServiceResult:
    """Mark the purchase failed when its checkout expires or the payment fails."""
    from payments.services import CoinService
    from payments.services.coin_service import ERROR_CODES

    session = _session_from_event(event)
    purchase_id = session.get("client_reference_id")
    if not purchase_id:
        return ServiceResult.success(None)

    result = CoinService.fail_purchase(purchase_id, reason=event.get("type", ""))
    if result.error_code in (ERROR_CODES.INVALID_ID, ERROR_CODES.PURCHASE_NOT_FOUND):
        logger.warning(
            f"Ignoring {event.get('type')} for unknown purchase {purchase_id}",
            extra={"stripe_event_id": event.get("id")},
        )
        return ServiceResult.success(None)
    return result
