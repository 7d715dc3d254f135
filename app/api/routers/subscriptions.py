"""
Subscription management API routes
"""
import logging
from fastapi import APIRouter, Depends

from app.core.stripe_client import get_stripe_module
from app.models.subscription import (
    NoTrialSubscriptionRequest,
    FreeTrialSubscriptionRequest,
    SetupIntentRequest,
    ClientSecretResponse,
    FreeTrialSubscriptionResponse,
)
from app.services.subscription_service import (
    create_no_trial_subscription,
    create_free_trial_subscription,
    create_setup_intent,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["subscriptions"])


@router.post(
    "/create-no-trial-subscription",
    response_model=ClientSecretResponse,
    response_model_exclude_none=True,
)
def create_no_trial_subscription_endpoint(
    request: NoTrialSubscriptionRequest, stripe_module=Depends(get_stripe_module)
):
    """
    Create a subscription that is paid immediately.

    Args:
        request: NoTrialSubscriptionRequest with name, email, userId and priceId

    Returns:
        ClientSecretResponse with clientSecret and customerId, or customerExist
    """
    logger.info(f"No-trial subscription request for {request.email} (user {request.userId})")
    return create_no_trial_subscription(
        stripe_module,
        email=request.email,
        user_id=request.userId,
        price_id=request.priceId,
        name=request.name,
    )


@router.post("/create-free-trial-subscription", response_model=FreeTrialSubscriptionResponse)
def create_free_trial_subscription_endpoint(
    request: FreeTrialSubscriptionRequest, stripe_module=Depends(get_stripe_module)
):
    """
    Create a trial subscription for a customer that already saved a payment method.

    Args:
        request: FreeTrialSubscriptionRequest with userId, email, customerId, paymentMethod and priceId

    Returns:
        FreeTrialSubscriptionResponse wrapping the Stripe subscription
    """
    subscription = create_free_trial_subscription(
        stripe_module,
        user_id=request.userId,
        customer_id=request.customerId,
        payment_method=request.paymentMethod,
        price_id=request.priceId,
        email=request.email,
    )
    return {"subscription": dict(subscription)}


@router.post("/setup-intent", response_model=ClientSecretResponse, response_model_exclude_none=True)
def setup_intent(request: SetupIntentRequest, stripe_module=Depends(get_stripe_module)):
    """Start saving a payment method ahead of a trial subscription"""
    logger.info(f"Setup intent request for {request.email} (user {request.userId})")
    return create_setup_intent(
        stripe_module,
        email=request.email,
        user_id=request.userId,
        name=request.name,
    )
