"""
Checkout service - Stripe-hosted checkout, billing portal and price listing
"""

import logging
import time
from typing import List, Optional

import stripe

from app.core.config import settings
from app.core.stripe_client import stripe_error_to_http

logger = logging.getLogger(__name__)


def load_prices(stripe_module) -> List:
    """
    List the prices for the configured lookup keys

    Returns:
        List of Stripe Price objects with their product expanded (may be empty)
    """
    try:
        prices = stripe_module.Price.list(
            lookup_keys=settings.STRIPE_LOOKUP_KEYS,
            expand=["data.product"],
        ).data
    except stripe.StripeError as e:
        raise stripe_error_to_http(e, "listing prices")

    if not prices:
        logger.warning("[STRIPE] prices array is empty")

    return prices


def create_checkout_session(stripe_module, price: str, user_id: str, email: Optional[str] = None) -> str:
    """
    Create a subscription-mode checkout session with a trial period

    Args:
        stripe_module: Configured stripe handle
        price: Stripe Price ID
        user_id: User ID (stored in subscription metadata)
        email: Customer email (optional)

    Returns:
        URL of the Stripe-hosted checkout page
    """
    trial_end = int(time.time()) + settings.TRIAL_PERIOD_DAYS * settings.ONE_DAY

    try:
        session = stripe_module.checkout.Session.create(
            mode="subscription",
            line_items=[{"price": price, "quantity": 1}],
            customer_email=email,
            subscription_data={
                "metadata": {"userId": user_id, "email": email},
                "trial_end": trial_end,
            },
            success_url=f"{settings.CLIENT_DOMAIN}/subscription-success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{settings.CLIENT_DOMAIN}/checkout",
        )
    except stripe.StripeError as e:
        raise stripe_error_to_http(e, "creating checkout session")

    logger.info(f"Created checkout session {session.id} for user {user_id}")
    return session.url


def retrieve_checkout_customer(stripe_module, session_id: str):
    """Return the customer id attached to a completed checkout session"""
    try:
        session = stripe_module.checkout.Session.retrieve(session_id)
    except stripe.StripeError as e:
        raise stripe_error_to_http(e, "retrieving checkout session")
    return session.customer


def create_portal_session(stripe_module, customer: str) -> str:
    """Create a billing portal session and return its URL"""
    try:
        portal_session = stripe_module.billing_portal.Session.create(
            customer=customer,
            return_url=f"{settings.CLIENT_DOMAIN}/customer/{customer}",
        )
    except stripe.StripeError as e:
        raise stripe_error_to_http(e, "creating billing portal session")

    logger.info(f"Created billing portal session for customer {customer}")
    return portal_session.url
