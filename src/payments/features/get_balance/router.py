import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from src.auth.security import require_admin
from src.payments.dependencies import get_stripe_service
from src.payments.dtos import PaymentProviderError
from src.payments.stripe_service import StripeCheckoutService
from src.responses import DataResponse

logger = logging.getLogger(__name__)

router = APIRouter()

BALANCE_URL = "/api/payments/balance"


class BalanceAmountResponse(BaseModel):
    amount: float
    currency: str
    source_types: dict[str, int] = {}


class BalanceResponse(BaseModel):
    available: list[BalanceAmountResponse]
    pending: list[BalanceAmountResponse]
    total_available: float
    total_pending: float


@router.get(
    BALANCE_URL,
    response_model=DataResponse[BalanceResponse],
    dependencies=[Depends(require_admin)],
)
async def get_balance(
    service: StripeCheckoutService = Depends(get_stripe_service),
) -> DataResponse[BalanceResponse]:
    try:
        balance = await service.get_balance()
    except PaymentProviderError as e:
        logger.error(f"Balance retrieval failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return DataResponse(data=BalanceResponse.model_validate(balance, from_attributes=True))
