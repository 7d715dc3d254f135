#!/usr/bin/env python3
"""
Stripe connectivity check using the application settings.

Usage:
    python scripts/check_stripe.py
"""

import sys
import logging
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

import stripe

from app.core.config import settings
from app.core.logging_config import setup_logging
from app.core.stripe_client import configure_stripe

setup_logging()
logger = logging.getLogger("stripe-check")


def stripe_connectivity_check() -> bool:
    if not settings.STRIPE_SECRET_KEY:
        logger.error("❌ STRIPE_SECRET_KEY is NOT set")
        return False

    configure_stripe()

    try:
        acct = stripe.Account.retrieve()
        logger.info("✅ Stripe connectivity OK")
        logger.info(f"Stripe account ID: {acct.id}")
        logger.info(f"Stripe API version: {stripe.api_version}")
    except stripe.AuthenticationError as e:
        logger.error("❌ Stripe AUTHENTICATION ERROR")
        logger.error(str(e))
        return False
    except stripe.APIConnectionError as e:
        logger.error("❌ Stripe NETWORK / CONNECTION ERROR")
        logger.error(str(e))
        return False
    except stripe.StripeError as e:
        logger.error("❌ Stripe ERROR")
        logger.error(f"{type(e).__name__}: {e}")
        return False

    if not settings.STRIPE_WEBHOOK_SECRET:
        logger.warning("⚠️  STRIPE_WEBHOOK_SECRET is not set, /webhook will reject every event")
    if not settings.STRIPE_LOOKUP_KEYS:
        logger.warning("⚠️  STRIPE_LOOKUP_KEYS is empty, /load-prices will return no prices")

    return True


if __name__ == "__main__":
    sys.exit(0 if stripe_connectivity_check() else 1)
