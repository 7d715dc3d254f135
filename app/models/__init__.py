"""Pydantic models for request/response validation"""

# Import all models for easy access
from app.models.checkout import (
    LoadStripeResponse,
    LoadPricesResponse,
    CheckoutSessionRequest,
    CheckoutSuccessRequest,
    CheckoutSuccessResponse,
    CustomerPortalRequest,
)

from app.models.subscription import (
    NoTrialSubscriptionRequest,
    FreeTrialSubscriptionRequest,
    SetupIntentRequest,
    ClientSecretResponse,
    FreeTrialSubscriptionResponse,
)

__all__ = [
    # Checkout models
    "LoadStripeResponse",
    "LoadPricesResponse",
    "CheckoutSessionRequest",
    "CheckoutSuccessRequest",
    "CheckoutSuccessResponse",
    "CustomerPortalRequest",
    # Subscription models
    "NoTrialSubscriptionRequest",
    "FreeTrialSubscriptionRequest",
    "SetupIntentRequest",
    "ClientSecretResponse",
    "FreeTrialSubscriptionResponse",
]
