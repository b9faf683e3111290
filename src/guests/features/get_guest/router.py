from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from src.auth.security import require_admin
from src.guests.dependencies import get_guest_read_model, valid_guest_id
from src.guests.repository.read_models import GuestReadModel
from src.guests.schemas import GuestResponse
from src.guests.urls import GUEST_DETAIL_URL
from src.responses import DataResponse

router = APIRouter()


@router.get(
    GUEST_DETAIL_URL,
    response_model=DataResponse[GuestResponse],
    dependencies=[Depends(require_admin)],
)
async def get_guest(
    guest_id: UUID = Depends(valid_guest_id),
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> DataResponse[GuestResponse]:
    guest = await read_model.get_guest(guest_id)
    if guest is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Guest not found")
    return DataResponse(data=GuestResponse.model_validate(guest))
