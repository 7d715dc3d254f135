"""
Checkout API routes
"""
import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from app.core.config import settings
from app.core.stripe_client import get_stripe_module
from app.models.checkout import (
    LoadStripeResponse,
    LoadPricesResponse,
    CheckoutSessionRequest,
    CheckoutSuccessRequest,
    CheckoutSuccessResponse,
    CustomerPortalRequest,
)
from app.services.checkout_service import (
    load_prices,
    create_checkout_session,
    retrieve_checkout_customer,
    create_portal_session,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["checkout"])


@router.get("/load-stripe", response_model=LoadStripeResponse)
def load_stripe():
    """Publishable key for initialising Stripe.js on the client"""
    return LoadStripeResponse(publishableKey=settings.STRIPE_PUBLISHABLE_KEY)


@router.get("/load-prices", response_model=LoadPricesResponse)
def load_prices_endpoint(stripe_module=Depends(get_stripe_module)):
    """List the prices offered at checkout"""
    return {"prices": load_prices(stripe_module)}


@router.post("/create-checkout-session")
def create_checkout_session_endpoint(
    request: CheckoutSessionRequest, stripe_module=Depends(get_stripe_module)
):
    """
    Start a Stripe-hosted checkout with a trial period

    Returns:
        303 redirect to the checkout page
    """
    url = create_checkout_session(
        stripe_module,
        price=request.price,
        user_id=request.userId,
        email=request.email,
    )
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


@router.post("/checkout-subscription-success", response_model=CheckoutSuccessResponse)
def checkout_subscription_success(
    request: CheckoutSuccessRequest, stripe_module=Depends(get_stripe_module)
):
    """Resolve the customer created by a completed checkout session"""
    customer = retrieve_checkout_customer(stripe_module, request.sessionId)
    logger.info(f"Checkout session {request.sessionId} completed for customer {customer}")
    return CheckoutSuccessResponse(customer=customer)


@router.post("/customer-portal")
def customer_portal(request: CustomerPortalRequest, stripe_module=Depends(get_stripe_module)):
    """Redirect to the Stripe billing portal"""
    url = create_portal_session(stripe_module, request.customer)
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
