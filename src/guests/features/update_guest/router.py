import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from src.auth.security import require_admin
from src.guests.dependencies import get_guest_write_model, valid_guest_id
from src.guests.dtos import GuestEmailAlreadyExistsError, GuestNotFoundError, GuestValidationError
from src.guests.repository.write_models import GuestWriteModel
from src.guests.schemas import GuestResponse, GuestUpdateRequest
from src.guests.urls import GUEST_DETAIL_URL
from src.responses import DataResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.put(
    GUEST_DETAIL_URL,
    response_model=DataResponse[GuestResponse],
    dependencies=[Depends(require_admin)],
)
async def update_guest(
    request: GuestUpdateRequest,
    guest_id: UUID = Depends(valid_guest_id),
    write_model: GuestWriteModel = Depends(get_guest_write_model),
) -> DataResponse[GuestResponse]:
    """
    Partially update a guest.
    Only the fields present in the body are written; an explicit null clears
    a nullable field. ``id``, ``created_at`` and ``updated_at`` are ignored.
    """
    try:
        guest = await write_model.update_guest(guest_id, request.changes())
    except GuestNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Guest not found")
    except (GuestEmailAlreadyExistsError, GuestValidationError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info(f"Guest {guest_id} updated")
    return DataResponse(data=GuestResponse.model_validate(guest))
