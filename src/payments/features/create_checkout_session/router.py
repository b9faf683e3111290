import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from src.payments.dependencies import get_stripe_product_id, get_stripe_service
from src.payments.dtos import PaymentProviderError, PaymentValidationError
from src.payments.stripe_service import DEFAULT_CURRENCY, StripeCheckoutService
from src.responses import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()

CREATE_CHECKOUT_SESSION_URL = "/api/payments/create-checkout-session"


class CheckoutSessionRequest(BaseModel):
    amount: float = Field(strict=True)
    currency: str | None = Field(default=None, strict=True)


@router.post(
    CREATE_CHECKOUT_SESSION_URL,
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_checkout_session(
    request: CheckoutSessionRequest,
    service: StripeCheckoutService = Depends(get_stripe_service),
    product_id: str = Depends(get_stripe_product_id),
) -> MessageResponse:
    """
    Start a Stripe checkout for a gift of ``amount`` (major units).
    The checkout URL is returned in ``message``.
    """
    if request.amount <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Amount must be greater than 0"
        )

    if not product_id:
        logger.error("STRIPE_PRODUCT_ID is not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Stripe configuration incomplete",
        )

    try:
        session = await service.create_checkout_session(
            amount=request.amount,
            product_id=product_id,
            currency=(request.currency or DEFAULT_CURRENCY).lower(),
        )
    except PaymentValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PaymentProviderError as e:
        logger.error(f"Checkout session creation failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    if not session.url:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to create the checkout URL",
        )

    return MessageResponse(message=session.url)
