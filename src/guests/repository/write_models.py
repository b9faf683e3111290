"""Guest write models - return DTOs, never ORM models."""

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from functools import partial
from typing import Any
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.guests.dtos import (
    GuestDTO,
    GuestEmailAlreadyExistsError,
    GuestNotFoundError,
    GuestValidationError,
)
from src.guests.repository.orm_models import GUEST_EMAIL_UNIQUE_CONSTRAINT, Guest

# Never written from a client payload
PROTECTED_FIELDS = frozenset({"id", "uuid", "created_at", "updated_at"})


def _translate_integrity_error(error: IntegrityError, email: str | None) -> Exception:
    message = str(error.orig)
    # postgres names the constraint, sqlite names the column
    if GUEST_EMAIL_UNIQUE_CONSTRAINT in message or "guests.email" in message:
        return GuestEmailAlreadyExistsError(email)
    return GuestValidationError(f"Guest data validation error: {message}")


class GuestWriteModel(ABC):
    @abstractmethod
    async def create_guest(self, data: dict[str, Any]) -> GuestDTO:
        """Insert a guest; the store sets id and both timestamps."""
        raise NotImplementedError

    @abstractmethod
    async def update_guest(self, guest_id: UUID, changes: dict[str, Any]) -> GuestDTO:
        """
        Apply a partial update. Only keys present in ``changes`` are written,
        a ``None`` value is stored as null. ``updated_at`` is always reset.
        Raises GuestNotFoundError when the guest does not exist.
        """
        raise NotImplementedError

    @abstractmethod
    async def delete_guest(self, guest_id: UUID) -> None:
        """Raises GuestNotFoundError when nothing was deleted."""
        raise NotImplementedError


class SqlGuestWriteModel(GuestWriteModel):
    """SQL implementation of guest write operations."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def create_guest(self, data: dict[str, Any]) -> GuestDTO:
        values = {key: value for key, value in data.items() if key not in PROTECTED_FIELDS}
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = Guest(**values)
            session.add(guest)
            try:
                await session.flush()
            except IntegrityError as e:
                raise _translate_integrity_error(e, values.get("email")) from e
            # Load server-side timestamps
            await session.refresh(guest)
            return guest.to_dto()

    async def update_guest(self, guest_id: UUID, changes: dict[str, Any]) -> GuestDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await session.get(Guest, guest_id)
            if guest is None:
                raise GuestNotFoundError(guest_id)

            for key, value in changes.items():
                if key in PROTECTED_FIELDS:
                    continue
                setattr(guest, key, value)
            guest.updated_at = datetime.now(UTC)

            try:
                await session.flush()
            except IntegrityError as e:
                raise _translate_integrity_error(e, changes.get("email")) from e
            await session.refresh(guest)
            return guest.to_dto()

    async def delete_guest(self, guest_id: UUID) -> None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(delete(Guest).where(Guest.uuid == guest_id))
            if result.rowcount == 0:
                raise GuestNotFoundError(guest_id)
