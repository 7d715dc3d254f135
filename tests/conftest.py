"""
Shared fixtures: the real application with the Stripe handle replaced by a mock
"""
import hashlib
import hmac
import os
import time
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

# Settings are read at import time, so these must be set before importing the app
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_gateway")
os.environ.setdefault("STRIPE_PUBLISHABLE_KEY", "pk_test_gateway")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_gateway")
os.environ.setdefault("STRIPE_LOOKUP_KEYS", "basic_monthly,premium_monthly")
os.environ.setdefault("CLIENT_DOMAIN", "https://checkout.example.com")

from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.stripe_client import get_stripe_module
from app.main import app


def stripe_list(*items):
    """Stand-in for a Stripe list or search result"""
    return SimpleNamespace(data=list(items))


def sign_payload(payload: bytes, secret: str, timestamp: int = None) -> str:
    """Build a stripe-signature header the way Stripe signs deliveries"""
    timestamp = timestamp or int(time.time())
    signed_payload = f"{timestamp}.".encode("utf-8") + payload
    signature = hmac.new(secret.encode("utf-8"), signed_payload, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


@pytest.fixture
def stripe_mock():
    mock = MagicMock(name="stripe")
    app.dependency_overrides[get_stripe_module] = lambda: mock
    yield mock
    app.dependency_overrides.clear()


@pytest.fixture
def client(stripe_mock):
    return TestClient(app)


@pytest.fixture
def webhook_secret():
    return settings.STRIPE_WEBHOOK_SECRET
