from uuid import UUID

from fastapi import HTTPException, status

from src.guests.repository.read_models import GuestReadModel, SqlGuestReadModel
from src.guests.repository.write_models import GuestWriteModel, SqlGuestWriteModel


def get_guest_read_model() -> GuestReadModel:
    """Dependency to get guest read model instance."""
    return SqlGuestReadModel()


def get_guest_write_model() -> GuestWriteModel:
    """Dependency to get guest write model instance."""
    return SqlGuestWriteModel()


def valid_guest_id(guest_id: str) -> UUID:
    try:
        return UUID(guest_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid guest id")
