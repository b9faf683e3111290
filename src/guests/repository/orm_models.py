from sqlalchemy import Boolean, CheckConstraint, Enum, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.guests.dtos import DessertChoice, DinnerChoice, GuestDTO, GuestSummaryDTO
from src.models.base import Base, TimeStamp

GUEST_EMAIL_UNIQUE_CONSTRAINT = "uq_guests_email"
GUEST_COUNT_CHECK_CONSTRAINT = "ck_guests_guest_count_range"


class Guest(Base, TimeStamp):
    __tablename__ = TableNames.GUESTS.value
    __table_args__ = (
        UniqueConstraint("email", name=GUEST_EMAIL_UNIQUE_CONSTRAINT),
        CheckConstraint(
            "guest_count IS NULL OR (guest_count >= 1 AND guest_count <= 10)",
            name=GUEST_COUNT_CHECK_CONSTRAINT,
        ),
        Index("ix_guests_created_at", "created_at"),
    )

    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    # Tri-state answers: None means the guest has not answered yet
    is_attending: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    dinner_participation: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    brunch_participation: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    needs_accommodation: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    dinner_choice: Mapped[DinnerChoice | None] = mapped_column(
        Enum(DinnerChoice, name="dinner_choice_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=True,
    )
    dessert_choice: Mapped[DessertChoice | None] = mapped_column(
        Enum(DessertChoice, name="dessert_choice_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=True,
    )

    guest_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    accommodation_dates: Mapped[str] = mapped_column(Text, nullable=False, default="")
    comments: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Guest {self.first_name} {self.last_name} <{self.email}>>"

    def to_dto(self) -> GuestDTO:
        return GuestDTO(
            id=self.uuid,
            last_name=self.last_name,
            first_name=self.first_name,
            email=self.email,
            is_attending=self.is_attending,
            guest_count=self.guest_count,
            dinner_participation=self.dinner_participation,
            dinner_choice=self.dinner_choice,
            dessert_choice=self.dessert_choice,
            brunch_participation=self.brunch_participation,
            needs_accommodation=self.needs_accommodation,
            accommodation_dates=self.accommodation_dates,
            comments=self.comments,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


# Columns returned by the list projection, in GuestSummaryDTO order
GUEST_SUMMARY_COLUMNS = (
    Guest.last_name,
    Guest.first_name,
    Guest.email,
    Guest.is_attending,
    Guest.guest_count,
    Guest.dinner_participation,
    Guest.brunch_participation,
    Guest.dinner_choice,
    Guest.dessert_choice,
    Guest.needs_accommodation,
)


def summary_from_row(row) -> GuestSummaryDTO:
    return GuestSummaryDTO(**row._asdict())
