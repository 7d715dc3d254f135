"""
Checkout-related Pydantic models
"""
from pydantic import BaseModel, Field
from typing import Any, List, Optional


class LoadStripeResponse(BaseModel):
    """Publishable key for the client-side Stripe.js"""
    publishableKey: Optional[str] = None


class LoadPricesResponse(BaseModel):
    """Prices for the configured lookup keys, product expanded"""
    prices: List[Any] = []


class CheckoutSessionRequest(BaseModel):
    """Request to start a Stripe-hosted checkout"""
    price: str = Field(..., min_length=1)  # Stripe Price ID (e.g., price_xxx)
    userId: str = Field(..., min_length=1)
    email: Optional[str] = None


class CheckoutSuccessRequest(BaseModel):
    """Checkout session id handed back on the success URL"""
    sessionId: str = Field(..., min_length=1)


class CheckoutSuccessResponse(BaseModel):
    customer: Optional[str] = None


class CustomerPortalRequest(BaseModel):
    """Request to open the billing portal for a Stripe customer"""
    customer: str = Field(..., min_length=1)
