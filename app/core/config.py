"""
Application configuration and settings
"""
import os
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _split_env_list(name: str, default: str = "") -> List[str]:
    """Read a comma separated environment variable into a list"""
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings:
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Billing Gateway"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # CORS - defaults
    _DEFAULT_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:3001",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:3001",
    ]

    # Client-facing base URL used for redirect and callback URLs
    CLIENT_DOMAIN: str = os.getenv("CLIENT_DOMAIN", "http://localhost:3000").rstrip("/")

    # Stripe Configuration
    STRIPE_SECRET_KEY: Optional[str] = os.getenv("STRIPE_SECRET_KEY")
    STRIPE_PUBLISHABLE_KEY: Optional[str] = os.getenv("STRIPE_PUBLISHABLE_KEY")
    STRIPE_WEBHOOK_SECRET: Optional[str] = os.getenv("STRIPE_WEBHOOK_SECRET")
    # Pinned so that invoices still carry payment_intent. The webhook endpoint in the
    # Stripe dashboard must use the same version, event payloads follow the endpoint.
    STRIPE_API_VERSION: str = os.getenv("STRIPE_API_VERSION", "2024-06-20")
    STRIPE_LOOKUP_KEYS: List[str] = _split_env_list("STRIPE_LOOKUP_KEYS")
    STRIPE_PAYMENT_METHOD_TYPES: List[str] = _split_env_list("STRIPE_PAYMENT_METHOD_TYPES", "card")

    # Trial length for both checkout sessions and trial subscriptions
    TRIAL_PERIOD_DAYS: int = int(os.getenv("TRIAL_PERIOD_DAYS", "14"))
    ONE_DAY: int = 24 * 60 * 60  # seconds


# Global settings instance
settings = Settings()


def get_cors_origins() -> List[str]:
    """Get CORS origins from environment or defaults"""
    origins = _split_env_list("CORS_ORIGINS")
    if origins:
        # Combine with defaults and remove duplicates
        return list(set(settings._DEFAULT_CORS_ORIGINS + origins))
    return settings._DEFAULT_CORS_ORIGINS
