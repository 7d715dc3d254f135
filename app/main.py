"""
FastAPI application entry point
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi import Request, status
import logging

from app.core.config import settings, get_cors_origins
from app.core.logging_config import setup_logging
from app.core.stripe_client import configure_stripe
from app.api.routers import checkout, subscriptions, webhooks
from app.services.webhook_service import WebhookSignatureError

# Setup logging
setup_logging(logging.DEBUG if settings.DEBUG else logging.INFO)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    # Startup
    configure_stripe()

    yield


# Create the FastAPI app instance
app = FastAPI(
    title=settings.APP_NAME,
    description="Checkout, subscription and webhook gateway for Stripe",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# Configure CORS
cors_origins = get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Add exception handler for validation errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors and log them for debugging"""
    body = await request.body()
    logger.error(f"Validation error on {request.url.path}: {exc.errors()}")
    logger.error(f"Request body: {body.decode('utf-8') if body else 'Empty body'}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": jsonable_encoder(exc.errors()),
            "body": body.decode("utf-8") if body else "Empty body",
        },
    )


@app.exception_handler(WebhookSignatureError)
async def webhook_signature_exception_handler(request: Request, exc: WebhookSignatureError):
    """Reject unverifiable webhook deliveries with a plain-text diagnostic"""
    logger.warning(f"Webhook verification failed: {exc}")
    return PlainTextResponse(f"Webhook Error: {exc}", status_code=status.HTTP_400_BAD_REQUEST)


# Include routers
app.include_router(checkout.router)
app.include_router(subscriptions.router)
app.include_router(webhooks.router)


# Health check endpoints
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/api/health")
async def health_check():
    """Health check endpoint, reports which Stripe settings are present"""
    return {
        "status": "healthy",
        "stripe": {
            "secret_key": bool(settings.STRIPE_SECRET_KEY),
            "publishable_key": bool(settings.STRIPE_PUBLISHABLE_KEY),
            "webhook_secret": bool(settings.STRIPE_WEBHOOK_SECRET),
            "lookup_keys": len(settings.STRIPE_LOOKUP_KEYS),
            "api_version": settings.STRIPE_API_VERSION,
        },
    }


def run() -> None:
    """Serve the app with uvicorn"""
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
