"""
Stripe webhook API route
"""
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from app.core.stripe_client import get_stripe_module
from app.services.webhook_service import handle_webhook

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhooks"])


@router.post("/webhook")
async def stripe_webhook(request: Request, stripe_module=Depends(get_stripe_module)):
    """
    Receive a signed Stripe event.

    The signature is checked against the raw body, so the body is read as
    bytes rather than parsed. An empty 200 acknowledges receipt; any other
    status makes Stripe retry the delivery.
    """
    payload = await request.body()
    signature = request.headers.get("stripe-signature")

    # Handlers make blocking Stripe calls
    await run_in_threadpool(handle_webhook, stripe_module, payload, signature)

    return Response(status_code=200)
