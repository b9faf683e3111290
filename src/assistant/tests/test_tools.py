"""Tests for the guest tools offered to the chat assistant."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from src.assistant.tests.fakes import tool_call
from src.assistant.tools import (
    DEFAULT_LIST_LIMIT,
    MAX_LIST_LIMIT,
    TOOL_DEFINITIONS,
    GuestTools,
    ToolName,
    UnknownToolError,
    clamp_limit,
)
from src.guests.dtos import DinnerChoice
from src.guests.tests.inmemory_models import InMemoryGuestStore, make_guest

NOW = datetime(2026, 6, 1, tzinfo=UTC)


@pytest.fixture
def store():
    return InMemoryGuestStore(
        [
            make_guest(
                first_name="Claire",
                email="claire@example.com",
                is_attending=True,
                guest_count=2,
                dinner_choice=DinnerChoice.RACLETTE,
                comments="Allergic to nuts",
                created_at=NOW - timedelta(days=1),
            ),
            make_guest(
                first_name="Paul",
                email="paul@example.com",
                is_attending=False,
                created_at=NOW,
            ),
        ]
    )


def test_every_tool_has_a_definition():
    names = {definition["function"]["name"] for definition in TOOL_DEFINITIONS}

    assert names == {name.value for name in ToolName}


@pytest.mark.parametrize(
    "limit, expected",
    [
        (None, DEFAULT_LIST_LIMIT),
        (0, 1),
        (-5, 1),
        (50, 50),
        (10.5, 10),
        (0.5, 1),
        (1000, MAX_LIST_LIMIT),
    ],
)
def test_clamp_limit(limit, expected):
    assert clamp_limit(limit) == expected


@pytest.mark.asyncio
async def test_get_guest_stats_without_filters(store):
    tools = GuestTools(store)

    result = await tools.run(tool_call("call_1", "get_guest_stats"))

    assert result["total"] == 2
    assert result["attending"] == 1
    assert result["guest_count_sum"] == 2
    assert result["by_dinner_choice"] == {"raclette": 1, "unknown": 1}
    assert store.queries == [{}]


@pytest.mark.asyncio
async def test_get_guest_stats_with_filters(store):
    tools = GuestTools(store)

    result = await tools.run(
        tool_call("call_1", "get_guest_stats", {"filters": {"is_attending": True}})
    )

    assert result["total"] == 1
    assert store.queries == [{"is_attending": True}]


@pytest.mark.asyncio
async def test_list_guests_projects_display_fields(store):
    tools = GuestTools(store)

    result = await tools.run(tool_call("call_1", "list_guests", {"limit": 1}))

    assert len(result["items"]) == 1
    item = result["items"][0]
    assert item["first_name"] == "Paul"
    assert "comments" not in item
    assert "accommodation_dates" not in item
    assert "created_at" not in item
    assert "id" not in item


@pytest.mark.asyncio
async def test_list_guests_fractional_limit(store):
    tools = GuestTools(store)

    result = await tools.run(tool_call("call_1", "list_guests", {"limit": 1.5}))

    assert [item["first_name"] for item in result["items"]] == ["Paul"]


@pytest.mark.asyncio
async def test_get_guest_stats_null_arguments(store):
    tools = GuestTools(store)

    result = await tools.run(tool_call("call_1", "get_guest_stats", "null"))

    assert result["total"] == 2
    assert store.queries == [{}]


@pytest.mark.asyncio
async def test_list_guests_null_filter(store):
    tools = GuestTools(store)

    result = await tools.run(
        tool_call("call_1", "list_guests", {"filters": {"dinner_choice": None}})
    )

    assert [item["first_name"] for item in result["items"]] == ["Paul"]
    assert store.queries == [{"dinner_choice": None}]


@pytest.mark.asyncio
async def test_get_guest_by_email(store):
    tools = GuestTools(store)

    found = await tools.run(
        tool_call("call_1", "get_guest_by_email", {"email": "claire@example.com"})
    )
    missing = await tools.run(
        tool_call("call_2", "get_guest_by_email", {"email": "nobody@example.com"})
    )

    assert found["guest"]["first_name"] == "Claire"
    assert found["guest"]["comments"] == "Allergic to nuts"
    assert missing == {"guest": None}


@pytest.mark.asyncio
async def test_get_guest_by_email_requires_email(store):
    tools = GuestTools(store)

    with pytest.raises(ValidationError):
        await tools.run(tool_call("call_1", "get_guest_by_email", {}))


@pytest.mark.asyncio
async def test_malformed_arguments_raise(store):
    tools = GuestTools(store)

    with pytest.raises(ValueError):
        await tools.run(tool_call("call_1", "list_guests", "{not json"))


@pytest.mark.asyncio
async def test_unknown_tool(store):
    tools = GuestTools(store)

    with pytest.raises(UnknownToolError):
        await tools.run(tool_call("call_1", "drop_all_guests"))
