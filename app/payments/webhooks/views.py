"""
Webhook endpoint view for Stripe.

The view verifies the signature, hands the event to its handler and
answers immediately. Handlers only queue work, so the response stays well
inside Stripe's timeout.

Usage:
    # In urls.py
    from payments.webhooks.views import stripe_webhook

    urlpatterns = [
        path("webhook/", stripe_webhook, name="stripe_webhook"),
    ]
"""

from __future__ import annotations

import logging

from django.http import HttpRequest, HttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from payments.adapters import StripeAdapter
from payments.exceptions import StripeInvalidRequestError
from payments.webhooks.handlers import dispatch_webhook

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def stripe_webhook(request: HttpRequest) -> HttpResponse:
    """
    Receive Stripe webhook events.

    Returns:
        HttpResponse with status:
        - 200: Event accepted (handled or ignored)
        - 400: Missing or invalid signature, malformed event
        - 500: Handler failed; Stripe retries the delivery

    Example Stripe-Signature header:
        t=1614556800,v1=xxx,v0=yyy
    """
    payload = request.body
    signature = request.headers.get("Stripe-Signature", "")

    if not signature:
        logger.warning("Webhook received without Stripe-Signature header")
        return HttpResponse("Missing signature", status=400)

    try:
        event = StripeAdapter.verify_webhook_signature(payload, signature)
    except StripeInvalidRequestError as e:
        logger.warning(
            "Webhook signature verification failed",
            extra={"error": str(e)},
        )
        return HttpResponse("Invalid signature", status=400)

    stripe_event_id = event.get("id")
    event_type = event.get("type")
    if not stripe_event_id or not event_type:
        logger.warning("Webhook missing required fields")
        return HttpResponse("Invalid event", status=400)

    logger.info(
        f"Received Stripe webhook: {event_type}",
        extra={"stripe_event_id": stripe_event_id, "event_type": event_type},
    )

    result = dispatch_webhook(event)
    if not result.success:
        logger.error(
            f"Webhook handler failed: {result.error}",
            extra={"stripe_event_id": stripe_event_id, "error_code": result.error_code},
        )
        return HttpResponse("Handler failed", status=500)

    return HttpResponse("Accepted", status=200)
