"""Pydantic models for the guest HTTP surface and the shared filter object."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from src.guests.dtos import DessertChoice, DinnerChoice

GuestCount = Annotated[int, Field(ge=1, le=10)]

NULL_QUERY_VALUES = {"null", "none"}


class GuestFilters(BaseModel):
    """Sparse equality constraints over the guest answer fields.

    A field left out of the payload imposes no constraint, an explicit ``None``
    means "must be null". ``model_fields_set`` keeps the two apart.
    """

    model_config = ConfigDict(extra="ignore")

    is_attending: bool | None = None
    dinner_participation: bool | None = None
    brunch_participation: bool | None = None
    needs_accommodation: bool | None = None
    dinner_choice: DinnerChoice | None = None
    dessert_choice: DessertChoice | None = None

    @field_validator("*", mode="before")
    @classmethod
    def parse_null_strings(cls, v):
        # query strings can only spell null as text
        if isinstance(v, str) and v.strip().lower() in NULL_QUERY_VALUES:
            return None
        return v


class GuestCreateRequest(BaseModel):
    """Body of an RSVP submission."""

    last_name: str
    first_name: str
    email: EmailStr
    is_attending: bool | None = None
    guest_count: GuestCount | None = None
    dinner_participation: bool | None = None
    dinner_choice: DinnerChoice | None = None
    dessert_choice: DessertChoice | None = None
    brunch_participation: bool | None = None
    needs_accommodation: bool | None = None
    accommodation_dates: str = ""
    comments: str = ""


class GuestUpdateRequest(BaseModel):
    """Partial update: only fields present in the payload are written.

    Unknown keys (including ``id``, ``created_at`` and ``updated_at``) are
    dropped silently.
    """

    model_config = ConfigDict(extra="ignore")

    last_name: str | None = None
    first_name: str | None = None
    email: EmailStr | None = None
    is_attending: bool | None = None
    guest_count: GuestCount | None = None
    dinner_participation: bool | None = None
    dinner_choice: DinnerChoice | None = None
    dessert_choice: DessertChoice | None = None
    brunch_participation: bool | None = None
    needs_accommodation: bool | None = None
    accommodation_dates: str | None = None
    comments: str | None = None

    @field_validator(
        "last_name",
        "first_name",
        "email",
        "guest_count",
        "accommodation_dates",
        "comments",
    )
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("this field cannot be null")
        return v

    def changes(self) -> dict:
        """Fields explicitly sent by the client, explicit nulls included."""
        return self.model_dump(exclude_unset=True)


class GuestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    last_name: str
    first_name: str
    email: str
    is_attending: bool | None = None
    guest_count: int | None = None
    dinner_participation: bool | None = None
    dinner_choice: DinnerChoice | None = None
    dessert_choice: DessertChoice | None = None
    brunch_participation: bool | None = None
    needs_accommodation: bool | None = None
    accommodation_dates: str = ""
    comments: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GuestSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    last_name: str
    first_name: str
    email: str
    is_attending: bool | None = None
    guest_count: int | None = None
    dinner_participation: bool | None = None
    brunch_participation: bool | None = None
    dinner_choice: DinnerChoice | None = None
    dessert_choice: DessertChoice | None = None
    needs_accommodation: bool | None = None
