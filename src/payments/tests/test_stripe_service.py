"""Tests for StripeCheckoutService with a mocked Stripe API."""

from urllib.parse import parse_qs

import httpx
import pytest

from src.payments.dtos import PaymentProviderError, PaymentValidationError
from src.payments.stripe_service import StripeCheckoutService, to_cents


class FakeStripeConfig:
    stripe_secret_key = "sk_test_123"
    stripe_api_base = "https://stripe.test/v1"
    frontend_url = "https://wedding.example"


class RecordingHandler:
    def __init__(self, status_code: int = 200, payload: dict | None = None):
        self.status_code = status_code
        self.payload = payload or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)


def make_service(handler) -> StripeCheckoutService:
    return StripeCheckoutService(FakeStripeConfig(), transport=httpx.MockTransport(handler))


@pytest.mark.parametrize("amount, cents", [(25, 2500), (12.345, 1235), (0.5, 50), (19.99, 1999)])
def test_to_cents(amount, cents):
    assert to_cents(amount) == cents


@pytest.mark.asyncio
async def test_create_checkout_session():
    handler = RecordingHandler(payload={"id": "cs_test_1", "url": "https://checkout.stripe.test/cs_test_1"})
    service = make_service(handler)

    session = await service.create_checkout_session(amount=25.5, product_id="prod_123")

    assert session.id == "cs_test_1"
    assert session.url == "https://checkout.stripe.test/cs_test_1"

    request = handler.requests[0]
    assert request.method == "POST"
    assert request.url == "https://stripe.test/v1/checkout/sessions"
    assert request.headers["Authorization"] == "Bearer sk_test_123"
    form = {key: values[0] for key, values in parse_qs(request.content.decode()).items()}
    assert form["mode"] == "payment"
    assert form["payment_method_types[0]"] == "card"
    assert form["line_items[0][price_data][currency]"] == "eur"
    assert form["line_items[0][price_data][product]"] == "prod_123"
    assert form["line_items[0][price_data][unit_amount]"] == "2550"
    assert form["line_items[0][quantity]"] == "1"
    assert form["success_url"] == (
        "https://wedding.example/payment/success?session_id={CHECKOUT_SESSION_ID}"
    )
    assert form["cancel_url"] == "https://wedding.example/payment/cancel"
    assert "metadata[created_at]" in form


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0, -10])
async def test_non_positive_amount_is_rejected_before_calling_stripe(amount):
    handler = RecordingHandler()
    service = make_service(handler)

    with pytest.raises(PaymentValidationError):
        await service.create_checkout_session(amount=amount, product_id="prod_123")
    assert handler.requests == []


@pytest.mark.asyncio
async def test_minimum_eur_amount():
    handler = RecordingHandler()
    service = make_service(handler)

    with pytest.raises(PaymentValidationError, match="0.50"):
        await service.create_checkout_session(amount=0.49, product_id="prod_123")
    assert handler.requests == []


@pytest.mark.asyncio
async def test_minimum_only_applies_to_eur():
    handler = RecordingHandler(payload={"id": "cs_1", "url": "https://checkout.stripe.test/cs_1"})
    service = make_service(handler)

    await service.create_checkout_session(amount=0.3, product_id="prod_123", currency="usd")

    assert len(handler.requests) == 1


@pytest.mark.asyncio
async def test_stripe_error_is_wrapped():
    handler = RecordingHandler(
        status_code=400, payload={"error": {"message": "No such product: 'prod_x'"}}
    )
    service = make_service(handler)

    with pytest.raises(PaymentProviderError, match="No such product"):
        await service.create_checkout_session(amount=10, product_id="prod_x")


@pytest.mark.asyncio
async def test_network_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    service = make_service(handler)

    with pytest.raises(PaymentProviderError):
        await service.create_checkout_session(amount=10, product_id="prod_123")


@pytest.mark.asyncio
async def test_get_balance():
    handler = RecordingHandler(
        payload={
            "available": [{"amount": 12050, "currency": "eur", "source_types": {"card": 12050}}],
            "pending": [
                {"amount": 1000, "currency": "eur", "source_types": {"card": 1000}},
                {"amount": 500, "currency": "usd"},
            ],
        }
    )
    service = make_service(handler)

    balance = await service.get_balance()

    assert handler.requests[0].url == "https://stripe.test/v1/balance"
    assert balance.available[0].amount == 120.5
    assert balance.available[0].currency == "EUR"
    assert balance.available[0].source_types == {"card": 12050}
    assert balance.pending[1].source_types == {}
    assert balance.total_available == 120.5
    assert balance.total_pending == 15.0
