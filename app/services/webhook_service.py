"""
Webhook service - verify and dispatch Stripe webhook events
"""

import logging
from typing import Callable, Dict, Optional

import stripe
from fastapi import HTTPException, status

from app.core.config import settings
from app.core.stripe_client import stripe_error_to_http
from app.services import stripe_events

logger = logging.getLogger(__name__)

EVENT_HANDLERS: Dict[str, Callable] = {
    "setup_intent.succeeded": stripe_events.setup_intent_succeeded,
    "invoice.payment_succeeded": stripe_events.invoice_payment_succeeded,
    "customer.subscription.created": stripe_events.customer_subscription_created,
}

# Known types that are acknowledged without side effects
LOGGED_EVENT_TYPES = frozenset(
    {
        "payment_intent.succeeded",
        "payment_intent.payment_failed",
        "checkout.session.completed",
        "invoice.paid",
        "invoice.payment_failed",
    }
)


class WebhookSignatureError(Exception):
    """The webhook payload could not be verified"""


def verify_event(payload: bytes, signature: Optional[str]):
    """
    Verify a webhook payload against the configured signing secret

    Args:
        payload: Raw request body, exactly as received
        signature: Value of the ``stripe-signature`` header

    Returns:
        The verified Stripe Event

    Raises:
        WebhookSignatureError: missing header, malformed payload or bad signature
        HTTPException: signing secret not configured
    """
    if not settings.STRIPE_WEBHOOK_SECRET:
        logger.error("STRIPE_WEBHOOK_SECRET is not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Webhook secret not configured",
        )

    if not signature:
        raise WebhookSignatureError("Missing stripe-signature header")

    try:
        return stripe.Webhook.construct_event(payload, signature, settings.STRIPE_WEBHOOK_SECRET)
    except ValueError as e:
        raise WebhookSignatureError(f"Invalid payload: {e}")
    except stripe.SignatureVerificationError as e:
        raise WebhookSignatureError(str(e))


def dispatch_event(stripe_module, event) -> bool:
    """
    Route a verified event to its handler

    Returns:
        True if a handler ran, False for logged-only and unknown types
    """
    event_type = event["type"]
    handler = EVENT_HANDLERS.get(event_type)

    if handler is None:
        if event_type in LOGGED_EVENT_TYPES:
            logger.info(event_type)
        else:
            logger.debug(f"Unhandled event type {event_type}")
        return False

    logger.info(event_type)
    try:
        handler(stripe_module, event["data"]["object"])
    except stripe.StripeError as e:
        raise stripe_error_to_http(e, f"handling {event_type}")
    return True


def handle_webhook(stripe_module, payload: bytes, signature: Optional[str]) -> None:
    """Verify then dispatch; verification failures never reach a handler"""
    event = verify_event(payload, signature)
    dispatch_event(stripe_module, event)
