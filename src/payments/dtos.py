from dataclasses import dataclass, field


class PaymentValidationError(Exception):
    """Raised when a checkout request is rejected before reaching Stripe."""


class PaymentProviderError(Exception):
    """Raised when Stripe cannot be reached or answers with an error."""


@dataclass(frozen=True)
class CheckoutSessionDTO:
    id: str
    url: str | None = None


@dataclass(frozen=True)
class BalanceAmountDTO:
    amount: float
    currency: str
    source_types: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class BalanceDTO:
    available: list[BalanceAmountDTO]
    pending: list[BalanceAmountDTO]
    total_available: float
    total_pending: float
