"""
Process-wide Stripe handle
"""
import logging

import stripe
from fastapi import HTTPException, status

from app.core.config import settings

logger = logging.getLogger(__name__)


def configure_stripe() -> None:
    """Apply the API key and pinned API version to the stripe module"""
    if settings.STRIPE_SECRET_KEY:
        stripe.api_key = settings.STRIPE_SECRET_KEY
        logger.info(f"Stripe API key configured ({settings.STRIPE_SECRET_KEY[:8]}***)")
    else:
        logger.warning("Stripe API key not found in environment variables")
    stripe.api_version = settings.STRIPE_API_VERSION


def get_stripe_module():
    """
    FastAPI dependency returning the configured stripe module.

    The module is stateless apart from its key, so a single handle is shared
    by every request. Tests replace it through ``app.dependency_overrides``.
    """
    return stripe


def stripe_error_to_http(e: stripe.StripeError, action: str) -> HTTPException:
    """
    Translate a Stripe error into the HTTPException returned to the caller

    Args:
        e: The error raised by the stripe library
        action: Short description of what was being attempted, for the message

    Returns:
        HTTPException (402 for card errors, 502 for everything else)
    """
    logger.error(f"Stripe error {action}: {e}")
    if isinstance(e, stripe.CardError):
        status_code = status.HTTP_402_PAYMENT_REQUIRED
    else:
        status_code = status.HTTP_502_BAD_GATEWAY
    return HTTPException(
        status_code=status_code,
        detail={
            "message": str(e.user_message) if getattr(e, "user_message", None) else f"Failed {action}",
            "stripe_error": {
                "type": e.__class__.__name__,
                "code": getattr(e, "code", None),
                "message": str(e),
            },
        },
    )
