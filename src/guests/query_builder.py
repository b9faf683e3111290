from typing import Any

from src.guests.schemas import GuestFilters


def build_guest_query(filters: GuestFilters | None = None) -> dict[str, Any]:
    """Translate a filter object into an equality query for the guest store.

    Only fields explicitly set on ``filters`` become clauses, so an explicit
    ``None`` yields a "must be null" clause while an omitted field yields
    nothing.
    """
    if filters is None:
        return {}
    return {
        name: getattr(filters, name)
        for name in GuestFilters.model_fields
        if name in filters.model_fields_set
    }
