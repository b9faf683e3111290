import logging
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Protocol

import httpx

from src.payments.dtos import (
    BalanceAmountDTO,
    BalanceDTO,
    CheckoutSessionDTO,
    PaymentProviderError,
    PaymentValidationError,
)

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "eur"
MINIMUM_EUR_CENTS = 50


class StripeConfig(Protocol):
    stripe_secret_key: str
    stripe_api_base: str
    frontend_url: str


def to_cents(amount: float) -> int:
    return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _balance_amounts(entries: list[dict[str, Any]]) -> list[BalanceAmountDTO]:
    return [
        BalanceAmountDTO(
            amount=entry["amount"] / 100,
            currency=entry["currency"].upper(),
            source_types=entry.get("source_types") or {},
        )
        for entry in entries
    ]


class StripeCheckoutService:
    """Creates hosted checkout sessions and reads the account balance over the Stripe REST API."""

    def __init__(self, config: StripeConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.stripe_api_base,
            headers={"Authorization": f"Bearer {self._config.stripe_secret_key}"},
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, data: dict[str, str] | None = None) -> dict:
        try:
            async with self._client() as client:
                response = await client.request(method, path, data=data)
        except httpx.HTTPError as e:
            raise PaymentProviderError(f"Stripe error: {e}") from e

        if response.is_error:
            try:
                message = response.json().get("error", {}).get("message") or response.text
            except ValueError:
                message = response.text
            logger.error(f"Stripe {method} {path} failed with {response.status_code}: {message}")
            raise PaymentProviderError(f"Stripe error: {message}")
        return response.json()

    async def create_checkout_session(
        self,
        amount: float,
        product_id: str,
        currency: str = DEFAULT_CURRENCY,
    ) -> CheckoutSessionDTO:
        """
        Create a one-off card payment session for ``amount`` major units.
        Raises PaymentValidationError before any network call when the amount is refused.
        """
        if amount <= 0:
            raise PaymentValidationError("Amount must be greater than 0")

        cents = to_cents(amount)
        if currency == DEFAULT_CURRENCY and cents < MINIMUM_EUR_CENTS:
            raise PaymentValidationError("Minimum amount is 0.50 EUR")

        base_url = self._config.frontend_url.rstrip("/")
        data = {
            "mode": "payment",
            "payment_method_types[0]": "card",
            "line_items[0][price_data][currency]": currency,
            "line_items[0][price_data][product]": product_id,
            "line_items[0][price_data][unit_amount]": str(cents),
            "line_items[0][quantity]": "1",
            "success_url": f"{base_url}/payment/success?session_id={{CHECKOUT_SESSION_ID}}",
            "cancel_url": f"{base_url}/payment/cancel",
            "metadata[created_at]": datetime.now(UTC).isoformat(),
        }

        session = await self._request("POST", "/checkout/sessions", data=data)
        logger.info(f"Checkout session {session.get('id')} created for {cents} {currency}")
        return CheckoutSessionDTO(id=session["id"], url=session.get("url"))

    async def get_balance(self) -> BalanceDTO:
        balance = await self._request("GET", "/balance")
        available = _balance_amounts(balance.get("available", []))
        pending = _balance_amounts(balance.get("pending", []))
        return BalanceDTO(
            available=available,
            pending=pending,
            total_available=sum(entry.amount for entry in available),
            total_pending=sum(entry.amount for entry in pending),
        )
