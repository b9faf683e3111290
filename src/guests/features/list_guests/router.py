from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError

from src.auth.security import require_admin
from src.guests.dependencies import get_guest_read_model
from src.guests.query_builder import build_guest_query
from src.guests.repository.read_models import GuestReadModel
from src.guests.schemas import GuestFilters, GuestResponse
from src.guests.urls import GUESTS_URL
from src.responses import ListResponse, format_validation_error

router = APIRouter()


def get_guest_filters(request: Request) -> GuestFilters:
    """Build filters from the query string. ``?dinner_choice=null`` means "must be null"."""
    try:
        return GuestFilters.model_validate(dict(request.query_params))
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=format_validation_error(e.errors()),
        )


@router.get(
    GUESTS_URL,
    response_model=ListResponse[GuestResponse],
    dependencies=[Depends(require_admin)],
)
async def list_guests(
    filters: GuestFilters = Depends(get_guest_filters),
    read_model: GuestReadModel = Depends(get_guest_read_model),
) -> ListResponse[GuestResponse]:
    guests = await read_model.list_guests(build_guest_query(filters))
    return ListResponse(
        count=len(guests),
        data=[GuestResponse.model_validate(guest) for guest in guests],
    )
