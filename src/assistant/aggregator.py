from collections import Counter
from collections.abc import Iterable

from src.guests.dtos import GuestDTO, GuestStatsDTO

UNKNOWN_CHOICE = "unknown"


def aggregate_guests(guests: Iterable[GuestDTO]) -> GuestStatsDTO:
    guests = list(guests)
    attending = [guest for guest in guests if guest.is_attending is True]
    by_dinner_choice = Counter(
        guest.dinner_choice.value if guest.dinner_choice is not None else UNKNOWN_CHOICE
        for guest in guests
    )

    return GuestStatsDTO(
        total=len(guests),
        attending=len(attending),
        dinner=sum(1 for guest in guests if guest.dinner_participation is True),
        brunch=sum(1 for guest in guests if guest.brunch_participation is True),
        needs_accommodation=sum(1 for guest in guests if guest.needs_accommodation is True),
        # non-attending guests never add to the headcount
        guest_count_sum=sum(guest.guest_count or 0 for guest in attending),
        by_dinner_choice=dict(by_dinner_choice),
    )
