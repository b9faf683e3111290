"""Read-only guest tools the chat assistant may call.

The set of tools is closed: every ``ToolName`` has an argument model, a JSON
schema offered to the model, and a branch in ``GuestTools.run``.
"""

import json
from dataclasses import asdict
from enum import Enum
from typing import Any

from pydantic import BaseModel

from src.assistant.aggregator import aggregate_guests
from src.assistant.dtos import ToolCallDTO
from src.guests.dtos import DessertChoice, DinnerChoice
from src.guests.query_builder import build_guest_query
from src.guests.repository.read_models import GuestReadModel
from src.guests.schemas import GuestFilters, GuestResponse, GuestSummaryResponse

DEFAULT_LIST_LIMIT = 20
MIN_LIST_LIMIT = 1
MAX_LIST_LIMIT = 200


class UnknownToolError(Exception):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool '{name}'")


class ToolName(str, Enum):
    GET_GUEST_STATS = "get_guest_stats"
    LIST_GUESTS = "list_guests"
    GET_GUEST_BY_EMAIL = "get_guest_by_email"


class GuestStatsArgs(BaseModel):
    filters: GuestFilters | None = None


class ListGuestsArgs(BaseModel):
    filters: GuestFilters | None = None
    limit: float | None = None


class GuestByEmailArgs(BaseModel):
    email: str


def clamp_limit(limit: float | None) -> int:
    """Whole-number row limit in [1, 200]; fractional values are truncated."""
    if limit is None:
        return DEFAULT_LIST_LIMIT
    return min(max(int(limit), MIN_LIST_LIMIT), MAX_LIST_LIMIT)


_NULLABLE_BOOLEAN = {"type": ["boolean", "null"]}

FILTERS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "is_attending": _NULLABLE_BOOLEAN,
        "dinner_participation": _NULLABLE_BOOLEAN,
        "brunch_participation": _NULLABLE_BOOLEAN,
        "needs_accommodation": _NULLABLE_BOOLEAN,
        "dinner_choice": {
            "type": ["string", "null"],
            "enum": [choice.value for choice in DinnerChoice] + [None],
        },
        "dessert_choice": {
            "type": ["string", "null"],
            "enum": [choice.value for choice in DessertChoice] + [None],
        },
    },
    "additionalProperties": False,
}

TOOL_DEFINITIONS: list[dict[str, Any]] = [
    {
        "type": "function",
        "function": {
            "name": ToolName.GET_GUEST_STATS.value,
            "description": "Return aggregated stats of guests given optional filters.",
            "parameters": {
                "type": "object",
                "properties": {"filters": FILTERS_SCHEMA},
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": ToolName.LIST_GUESTS.value,
            "description": (
                f"List guests matching filters with an optional limit "
                f"(default {DEFAULT_LIST_LIMIT})."
            ),
            "parameters": {
                "type": "object",
                "properties": {
                    "filters": FILTERS_SCHEMA,
                    "limit": {
                        "type": "number",
                        "minimum": MIN_LIST_LIMIT,
                        "maximum": MAX_LIST_LIMIT,
                    },
                },
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": ToolName.GET_GUEST_BY_EMAIL.value,
            "description": "Find a guest by exact email.",
            "parameters": {
                "type": "object",
                "properties": {"email": {"type": "string"}},
                "required": ["email"],
            },
        },
    },
]


class GuestTools:
    """Tool implementations backed by a guest read model."""

    definitions = TOOL_DEFINITIONS

    def __init__(self, read_model: GuestReadModel):
        self._read_model = read_model

    async def run(self, call: ToolCallDTO) -> dict[str, Any]:
        """Validate the call's arguments and dispatch it. Errors propagate."""
        try:
            name = ToolName(call.name)
        except ValueError:
            raise UnknownToolError(call.name) from None

        # empty text and JSON null both mean "no arguments"
        arguments = json.loads(call.arguments or "null") or {}
        if name is ToolName.GET_GUEST_STATS:
            return await self.get_guest_stats(GuestStatsArgs.model_validate(arguments))
        if name is ToolName.LIST_GUESTS:
            return await self.list_guests(ListGuestsArgs.model_validate(arguments))
        if name is ToolName.GET_GUEST_BY_EMAIL:
            return await self.get_guest_by_email(GuestByEmailArgs.model_validate(arguments))
        raise UnknownToolError(call.name)

    async def get_guest_stats(self, args: GuestStatsArgs) -> dict[str, Any]:
        guests = await self._read_model.list_guests(build_guest_query(args.filters))
        return asdict(aggregate_guests(guests))

    async def list_guests(self, args: ListGuestsArgs) -> dict[str, Any]:
        summaries = await self._read_model.list_guest_summaries(
            build_guest_query(args.filters), limit=clamp_limit(args.limit)
        )
        return {
            "items": [
                GuestSummaryResponse.model_validate(summary).model_dump(mode="json")
                for summary in summaries
            ]
        }

    async def get_guest_by_email(self, args: GuestByEmailArgs) -> dict[str, Any]:
        guest = await self._read_model.get_guest_by_email(args.email)
        if guest is None:
            return {"guest": None}
        return {"guest": GuestResponse.model_validate(guest).model_dump(mode="json")}
