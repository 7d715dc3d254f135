"""
Subscription-related Pydantic models
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


class NoTrialSubscriptionRequest(BaseModel):
    """Request to subscribe a new customer without a trial period"""
    name: Optional[str] = None
    email: str = Field(..., min_length=1)
    userId: str = Field(..., min_length=1)
    priceId: str = Field(..., min_length=1)


class FreeTrialSubscriptionRequest(BaseModel):
    """Request to subscribe an existing customer with a trial period"""
    userId: str
    email: Optional[str] = None
    customerId: str = Field(..., min_length=1)
    paymentMethod: str = Field(..., min_length=1)  # Payment method saved via the setup intent flow
    priceId: str = Field(..., min_length=1)


class SetupIntentRequest(BaseModel):
    """Request to save a payment method for a new customer"""
    name: Optional[str] = None
    email: str = Field(..., min_length=1)
    userId: str = Field(..., min_length=1)


class ClientSecretResponse(BaseModel):
    """
    Either a client secret to complete payment-method capture, or the id of
    an already existing customer (nothing was created in that case)
    """
    clientSecret: Optional[str] = None
    customerId: Optional[str] = None
    customerExist: Optional[str] = None


class FreeTrialSubscriptionResponse(BaseModel):
    subscription: Dict[str, Any]
