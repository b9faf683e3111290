import abc
from functools import partial
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.guests.dtos import GuestDTO, GuestSummaryDTO
from src.guests.repository.orm_models import GUEST_SUMMARY_COLUMNS, Guest, summary_from_row


def _conditions(query: dict[str, Any] | None) -> list:
    # column == None renders as IS NULL
    return [getattr(Guest, column) == value for column, value in (query or {}).items()]


class GuestReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_guests(self, query: dict[str, Any] | None = None) -> list[GuestDTO]:
        """
        Get every guest matching the equality query, newest first.
        An empty query matches all guests.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def list_guest_summaries(
        self, query: dict[str, Any] | None = None, limit: int | None = None
    ) -> list[GuestSummaryDTO]:
        """Same as list_guests but projected onto the display fields."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_guest_by_email(self, email: str) -> GuestDTO | None:
        raise NotImplementedError


class SqlGuestReadModel(GuestReadModel):
    """SQL implementation of guest read model."""

    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def list_guests(self, query: dict[str, Any] | None = None) -> list[GuestDTO]:
        stmt = select(Guest).where(*_conditions(query)).order_by(Guest.created_at.desc())
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(stmt)
            return [guest.to_dto() for guest in result.scalars().all()]

    async def list_guest_summaries(
        self, query: dict[str, Any] | None = None, limit: int | None = None
    ) -> list[GuestSummaryDTO]:
        stmt = (
            select(*GUEST_SUMMARY_COLUMNS)
            .where(*_conditions(query))
            .order_by(Guest.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(stmt)
            return [summary_from_row(row) for row in result.all()]

    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await session.get(Guest, guest_id)
            return guest.to_dto() if guest else None

    async def get_guest_by_email(self, email: str) -> GuestDTO | None:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            result = await session.execute(select(Guest).where(Guest.email == email))
            guest = result.scalar_one_or_none()
            return guest.to_dto() if guest else None
