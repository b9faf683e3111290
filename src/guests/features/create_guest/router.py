import logging

from fastapi import APIRouter, Depends, HTTPException, status

from src.guests.dependencies import get_guest_write_model
from src.guests.dtos import GuestEmailAlreadyExistsError, GuestValidationError
from src.guests.repository.write_models import GuestWriteModel
from src.guests.schemas import GuestCreateRequest, GuestResponse
from src.guests.urls import GUESTS_URL
from src.responses import DataResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    GUESTS_URL,
    response_model=DataResponse[GuestResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_guest(
    request: GuestCreateRequest,
    write_model: GuestWriteModel = Depends(get_guest_write_model),
) -> DataResponse[GuestResponse]:
    """
    Record an RSVP submission.
    Public endpoint used by the invitation form.
    """
    try:
        guest = await write_model.create_guest(request.model_dump())
    except (GuestEmailAlreadyExistsError, GuestValidationError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info(f"Guest {guest.id} created")
    return DataResponse(data=GuestResponse.model_validate(guest))
