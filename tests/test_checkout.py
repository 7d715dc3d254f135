"""
Tests for the checkout routes: Stripe.js key, prices, checkout and portal redirects
"""
import time
from types import SimpleNamespace

import stripe

from app.core.config import settings
from conftest import stripe_list


def test_load_stripe_returns_publishable_key(client):
    response = client.get("/load-stripe")

    assert response.status_code == 200
    assert response.json() == {"publishableKey": "pk_test_gateway"}


def test_load_prices_uses_lookup_keys(client, stripe_mock):
    stripe_mock.Price.list.return_value = stripe_list({"id": "price_basic", "unit_amount": 900})

    response = client.get("/load-prices")

    assert response.status_code == 200
    assert response.json() == {"prices": [{"id": "price_basic", "unit_amount": 900}]}
    stripe_mock.Price.list.assert_called_once_with(
        lookup_keys=["basic_monthly", "premium_monthly"],
        expand=["data.product"],
    )


def test_load_prices_empty_list_is_not_an_error(client, stripe_mock, caplog):
    stripe_mock.Price.list.return_value = stripe_list()

    response = client.get("/load-prices")

    assert response.status_code == 200
    assert response.json() == {"prices": []}
    assert "prices array is empty" in caplog.text


def test_create_checkout_session_redirects(client, stripe_mock):
    stripe_mock.checkout.Session.create.return_value = SimpleNamespace(
        id="cs_test_1", url="https://checkout.stripe.com/c/pay/cs_test_1"
    )

    before = int(time.time())
    response = client.post(
        "/create-checkout-session",
        json={"price": "price_basic", "email": "a@x.com", "userId": "u1"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "https://checkout.stripe.com/c/pay/cs_test_1"

    kwargs = stripe_mock.checkout.Session.create.call_args.kwargs
    assert kwargs["mode"] == "subscription"
    assert kwargs["line_items"] == [{"price": "price_basic", "quantity": 1}]
    assert kwargs["customer_email"] == "a@x.com"
    assert kwargs["subscription_data"]["metadata"] == {"userId": "u1", "email": "a@x.com"}
    two_weeks = 14 * 24 * 60 * 60
    assert before + two_weeks <= kwargs["subscription_data"]["trial_end"] <= int(time.time()) + two_weeks
    assert kwargs["success_url"] == (
        "https://checkout.example.com/subscription-success?session_id={CHECKOUT_SESSION_ID}"
    )
    assert kwargs["cancel_url"] == "https://checkout.example.com/checkout"


def test_create_checkout_session_without_price_fails_validation(client, stripe_mock):
    response = client.post("/create-checkout-session", json={"email": "a@x.com", "userId": "u1"})

    assert response.status_code == 422
    stripe_mock.checkout.Session.create.assert_not_called()


def test_create_checkout_session_without_user_id_fails_validation(client, stripe_mock):
    response = client.post(
        "/create-checkout-session", json={"price": "price_basic", "email": "a@x.com", "userId": ""}
    )

    assert response.status_code == 422
    stripe_mock.checkout.Session.create.assert_not_called()


def test_checkout_subscription_success_returns_customer(client, stripe_mock):
    stripe_mock.checkout.Session.retrieve.return_value = SimpleNamespace(customer="cus_123")

    response = client.post("/checkout-subscription-success", json={"sessionId": "cs_test_1"})

    assert response.status_code == 200
    assert response.json() == {"customer": "cus_123"}
    stripe_mock.checkout.Session.retrieve.assert_called_once_with("cs_test_1")


def test_customer_portal_redirects(client, stripe_mock):
    stripe_mock.billing_portal.Session.create.return_value = SimpleNamespace(
        url="https://billing.stripe.com/p/session/test"
    )

    response = client.post("/customer-portal", json={"customer": "cus_123"}, follow_redirects=False)

    assert response.status_code == 303
    assert response.headers["location"] == "https://billing.stripe.com/p/session/test"
    stripe_mock.billing_portal.Session.create.assert_called_once_with(
        customer="cus_123",
        return_url="https://checkout.example.com/customer/cus_123",
    )


def test_stripe_error_is_forwarded_as_bad_gateway(client, stripe_mock):
    stripe_mock.checkout.Session.retrieve.side_effect = stripe.InvalidRequestError(
        "No such checkout.session: cs_missing", "id", code="resource_missing"
    )

    response = client.post("/checkout-subscription-success", json={"sessionId": "cs_missing"})

    assert response.status_code == 502
    detail = response.json()["detail"]
    assert detail["stripe_error"]["type"] == "InvalidRequestError"
    assert detail["stripe_error"]["code"] == "resource_missing"


def test_create_checkout_session_uses_configured_trial_length(client, stripe_mock, monkeypatch):
    monkeypatch.setattr(settings, "TRIAL_PERIOD_DAYS", 30)
    stripe_mock.checkout.Session.create.return_value = SimpleNamespace(
        id="cs_test_2", url="https://checkout.stripe.com/c/pay/cs_test_2"
    )

    before = int(time.time())
    client.post(
        "/create-checkout-session",
        json={"price": "price_basic", "userId": "u1"},
        follow_redirects=False,
    )

    trial_end = stripe_mock.checkout.Session.create.call_args.kwargs["subscription_data"]["trial_end"]
    thirty_days = 30 * 24 * 60 * 60
    assert before + thirty_days <= trial_end <= int(time.time()) + thirty_days
