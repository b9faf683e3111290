import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from src.auth.security import require_admin
from src.guests.dependencies import get_guest_write_model, valid_guest_id
from src.guests.dtos import GuestNotFoundError
from src.guests.repository.write_models import GuestWriteModel
from src.guests.urls import GUEST_DETAIL_URL
from src.responses import DataResponse

logger = logging.getLogger(__name__)

router = APIRouter()


class GuestDeletedResponse(BaseModel):
    message: str


@router.delete(
    GUEST_DETAIL_URL,
    response_model=DataResponse[GuestDeletedResponse],
    dependencies=[Depends(require_admin)],
)
async def delete_guest(
    guest_id: UUID = Depends(valid_guest_id),
    write_model: GuestWriteModel = Depends(get_guest_write_model),
) -> DataResponse[GuestDeletedResponse]:
    try:
        await write_model.delete_guest(guest_id)
    except GuestNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Guest not found")

    logger.info(f"Guest {guest_id} deleted")
    return DataResponse(data=GuestDeletedResponse(message="Guest deleted successfully"))
