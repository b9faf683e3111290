from src.config.settings import settings
from src.payments.stripe_service import StripeCheckoutService


def get_stripe_service() -> StripeCheckoutService:
    """Dependency to get the Stripe checkout service."""
    return StripeCheckoutService(config=settings)


def get_stripe_product_id() -> str:
    return settings.stripe_product_id
