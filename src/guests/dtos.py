from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class GuestNotFoundError(Exception):
    """Raised when no guest matches the given identifier."""

    def __init__(self, guest_id: UUID) -> None:
        self.guest_id = guest_id
        super().__init__(f"Guest '{guest_id}' not found")


class GuestEmailAlreadyExistsError(Exception):
    """Raised when the unique constraint on the guest email is violated."""

    def __init__(self, email: str | None = None) -> None:
        self.email = email
        super().__init__("A guest with this email already exists")


class GuestValidationError(Exception):
    """Raised when the store rejects a guest document that breaks the schema."""


class DinnerChoice(str, Enum):
    RACLETTE = "raclette"
    PIERRE_CHAUDE = "pierreChaudde"


class DessertChoice(str, Enum):
    SORBET = "sorbet"
    TARTE_MYRTILLE = "tarteMyrille"


@dataclass(frozen=True)
class GuestDTO:
    """DTO for a full guest record."""

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


@dataclass(frozen=True)
class GuestSummaryDTO:
    """Display projection of a guest: no free text, no timestamps."""

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


@dataclass(frozen=True)
class GuestStatsDTO:
    """Summary statistics computed over a set of guests."""

    total: int = 0
    attending: int = 0
    dinner: int = 0
    brunch: int = 0
    needs_accommodation: int = 0
    # headcount of attending guests only
    guest_count_sum: int = 0
    by_dinner_choice: dict[str, int] = field(default_factory=dict)
