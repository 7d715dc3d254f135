"""
Subscription service - Stripe integration for subscription management
"""

import hashlib
import logging
from typing import Optional

import stripe

from app.core.config import settings
from app.core.stripe_client import stripe_error_to_http

logger = logging.getLogger(__name__)

REQUIRES_PAYMENT_METHOD = "requires_payment_method"


def _search_query(field: str, value: str) -> str:
    """Build a Stripe search query clause, escaping embedded quotes"""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'{field}:"{escaped}"'


def _idempotency_key(*parts: str) -> str:
    """Stable idempotency key so concurrent retries of a create replay the first result"""
    digest = hashlib.sha256("|".join(parts).encode("utf-8")).hexdigest()
    return f"{parts[0]}-{digest}"


def find_customer_by_email(stripe_module, email: str):
    """
    Look up a Stripe customer by email

    Only the first match is considered; customers sharing an email are
    neither merged nor deduplicated.

    Returns:
        The first matching Stripe Customer, or None
    """
    result = stripe_module.Customer.search(query=_search_query("email", email))
    customers = result.data or []
    if not customers:
        return None
    if len(customers) > 1:
        logger.warning(f"{len(customers)} Stripe customers share email {email}, using {customers[0].id}")
    return customers[0]


def create_stripe_customer(stripe_module, user_id: str, email: str, name: Optional[str] = None):
    """
    Create a Stripe customer for the user

    Args:
        stripe_module: Configured stripe handle
        user_id: User ID (used as metadata)
        email: User email
        name: User name (optional)

    Returns:
        Stripe Customer
    """
    customer = stripe_module.Customer.create(
        email=email,
        name=name,
        metadata={"userId": user_id},
        idempotency_key=_idempotency_key("customer", email.strip().lower()),
    )
    logger.info(f"Created Stripe customer {customer.id} for user {user_id}")
    return customer


def _create_customer_or_find_existing(stripe_module, user_id: str, email: str, name: Optional[str]):
    """
    Create the customer, or return ``(None, existing)`` when another request won

    A concurrent request for the same email with different params makes
    Stripe reject the idempotency key; by then the customer exists, even if
    the first search did not see it yet.

    Returns:
        ``(created_customer, None)`` or ``(None, existing_customer)``
    """
    try:
        return create_stripe_customer(stripe_module, user_id=user_id, email=email, name=name), None
    except stripe.IdempotencyError:
        existing = find_customer_by_email(stripe_module, email)
        if existing is None:
            raise
        logger.info(f"Customer {existing.id} was created concurrently for {email}")
        return None, existing


def _pending_intent_response(intent, customer) -> Optional[dict]:
    """Client secret of an intent the customer still has to complete, if any"""
    if intent is not None and intent.status == REQUIRES_PAYMENT_METHOD:
        # customer has a pending process, for example a card declined
        logger.info(f"Resuming {intent.id} for customer {customer.id}")
        return {"clientSecret": intent.client_secret, "customerId": customer.id}
    return None


def create_no_trial_subscription(
    stripe_module,
    email: str,
    user_id: str,
    price_id: str,
    name: Optional[str] = None,
) -> dict:
    """
    Subscribe a new customer with deferred payment

    An existing customer with a payment intent awaiting a payment method gets
    that intent's client secret back. Any other existing customer is reported
    as ``customerExist`` and nothing is created.

    Returns:
        ``{clientSecret, customerId}`` or ``{customerExist}``
    """
    try:
        customer = find_customer_by_email(stripe_module, email)

        if customer is not None:
            intents = stripe_module.PaymentIntent.search(
                query=_search_query("customer", customer.id)
            ).data
            pending = _pending_intent_response(intents[0] if intents else None, customer)
            if pending:
                return pending

            logger.info(f"Customer {customer.id} already exists for {email}")
            return {"customerExist": customer.id}

        customer, existing = _create_customer_or_find_existing(stripe_module, user_id, email, name)
        if existing is not None:
            return {"customerExist": existing.id}

        subscription = stripe_module.Subscription.create(
            customer=customer.id,
            items=[{"price": price_id}],
            payment_behavior="default_incomplete",
            payment_settings={"save_default_payment_method": "on_subscription"},
            expand=["latest_invoice.payment_intent"],
            metadata={"userId": user_id, "email": email},
            idempotency_key=_idempotency_key("subscription", customer.id, price_id),
        )
    except stripe.StripeError as e:
        raise stripe_error_to_http(e, "creating subscription")

    logger.debug(f"[SUBSCRIPTION] {subscription}")
    logger.info(f"Created subscription {subscription.id} for user {user_id}")

    return {
        "clientSecret": subscription.latest_invoice.payment_intent.client_secret,
        "customerId": customer.id,
    }


def create_free_trial_subscription(
    stripe_module,
    user_id: str,
    customer_id: str,
    payment_method: str,
    price_id: str,
    email: Optional[str] = None,
):
    """
    Subscribe an existing customer with a trial period

    The customer and payment method come from the setup intent flow, so no
    customer search happens here.

    Returns:
        Stripe Subscription
    """
    try:
        subscription = stripe_module.Subscription.create(
            trial_period_days=settings.TRIAL_PERIOD_DAYS,
            customer=customer_id,
            default_payment_method=payment_method,
            items=[{"price": price_id}],
            metadata={"userId": user_id, "email": email},
        )
    except stripe.StripeError as e:
        raise stripe_error_to_http(e, "creating trial subscription")

    logger.debug(f"[SUBSCRIPTION] {subscription}")
    logger.info(f"Created trial subscription {subscription.id} for user {user_id}")
    return subscription


def create_setup_intent(stripe_module, email: str, user_id: str, name: Optional[str] = None) -> dict:
    """
    Start saving a payment method for a new customer

    Mirrors the no-trial flow: a pending setup intent of an existing customer
    is resumed, any other existing customer is reported as ``customerExist``.

    Returns:
        ``{clientSecret, customerId}`` or ``{customerExist}``
    """
    try:
        customer = find_customer_by_email(stripe_module, email)

        if customer is not None:
            intents = stripe_module.SetupIntent.list(customer=customer.id).data
            pending = _pending_intent_response(intents[0] if intents else None, customer)
            if pending:
                return pending

            logger.info(f"Customer {customer.id} already exists for {email}")
            return {"customerExist": customer.id}

        customer, existing = _create_customer_or_find_existing(stripe_module, user_id, email, name)
        if existing is not None:
            return {"customerExist": existing.id}

        setup_intent = stripe_module.SetupIntent.create(
            customer=customer.id,
            payment_method_types=settings.STRIPE_PAYMENT_METHOD_TYPES,
            metadata={"userId": user_id},
            idempotency_key=_idempotency_key("setup-intent", customer.id),
        )
    except stripe.StripeError as e:
        raise stripe_error_to_http(e, "creating setup intent")

    logger.debug(f"[SETUP_INTENT] {setup_intent}")

    return {"clientSecret": setup_intent.client_secret, "customerId": customer.id}
