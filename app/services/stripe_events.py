"""
Side effects for verified Stripe webhook events

Stripe is the system of record, so every handler writes back to Stripe
objects rather than to a local store.
"""

import logging

logger = logging.getLogger(__name__)


def setup_intent_succeeded(stripe_module, setup_intent) -> None:
    """Make the saved payment method the customer's default for invoices"""
    customer_id = setup_intent.get("customer")
    payment_method = setup_intent.get("payment_method")
    if not customer_id or not payment_method:
        logger.warning(f"Setup intent {setup_intent.get('id')} has no customer or payment method")
        return

    stripe_module.Customer.modify(
        customer_id,
        invoice_settings={"default_payment_method": payment_method},
    )
    logger.info(f"Set default payment method {payment_method} for customer {customer_id}")


def invoice_payment_succeeded(stripe_module, invoice) -> None:
    """
    Copy the first payment's method onto the subscription

    Subscriptions created with ``default_incomplete`` have no default payment
    method until their first invoice is paid.
    """
    if invoice.get("billing_reason") != "subscription_create":
        logger.info(f"Invoice {invoice.get('id')} paid")
        return

    subscription_id = invoice.get("subscription")
    payment_intent_id = invoice.get("payment_intent")
    if not subscription_id or not payment_intent_id:
        logger.warning(f"Invoice {invoice.get('id')} has no subscription or payment intent")
        return

    payment_intent = stripe_module.PaymentIntent.retrieve(payment_intent_id)
    stripe_module.Subscription.modify(
        subscription_id,
        default_payment_method=payment_intent.payment_method,
    )
    logger.info(f"Subscription {subscription_id} paid, default payment method set")


def customer_subscription_created(stripe_module, subscription) -> None:
    """Record the new subscription on the Stripe customer"""
    metadata = {"subscriptionId": subscription.get("id")}
    user_id = (subscription.get("metadata") or {}).get("userId")
    if user_id:
        metadata["userId"] = user_id

    stripe_module.Customer.modify(subscription.get("customer"), metadata=metadata)
    logger.info(
        f"Recorded subscription {subscription.get('id')} ({subscription.get('status')}) "
        f"on customer {subscription.get('customer')}"
    )
