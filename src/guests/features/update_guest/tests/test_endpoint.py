"""Tests for partial guest updates."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from src.guests.dependencies import get_guest_write_model
from src.guests.dtos import DessertChoice, DinnerChoice
from src.guests.tests.inmemory_models import InMemoryGuestStore, make_guest
from src.guests.urls import GUEST_DETAIL_URL

CREATED_AT = datetime(2026, 1, 1, tzinfo=UTC)


@pytest.fixture
def guest():
    return make_guest(
        first_name="Claire",
        email="claire@example.com",
        is_attending=True,
        guest_count=2,
        dinner_choice=DinnerChoice.RACLETTE,
        dessert_choice=DessertChoice.SORBET,
        comments="Vegetarian",
        created_at=CREATED_AT,
        updated_at=CREATED_AT,
    )


@pytest.mark.asyncio
async def test_update_guest_only_touches_sent_fields(client_factory, admin_override, guest):
    store = InMemoryGuestStore([guest])

    async with client_factory({**admin_override, get_guest_write_model: lambda: store}) as client:
        response = await client.put(
            GUEST_DETAIL_URL.format(guest_id=guest.id), json={"guest_count": 3}
        )

    assert response.status_code == 200
    updated = store.guests[guest.id]
    assert updated.guest_count == 3
    assert updated.first_name == "Claire"
    assert updated.dinner_choice == DinnerChoice.RACLETTE
    assert updated.comments == "Vegetarian"
    assert updated.updated_at > CREATED_AT


@pytest.mark.asyncio
async def test_update_guest_stores_explicit_null(client_factory, admin_override, guest):
    store = InMemoryGuestStore([guest])

    async with client_factory({**admin_override, get_guest_write_model: lambda: store}) as client:
        response = await client.put(
            GUEST_DETAIL_URL.format(guest_id=guest.id),
            json={"dinner_choice": None, "is_attending": None},
        )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["dinner_choice"] is None
    assert data["is_attending"] is None
    assert data["dessert_choice"] == "sorbet"


@pytest.mark.asyncio
async def test_update_guest_strips_protected_fields(client_factory, admin_override, guest):
    store = InMemoryGuestStore([guest])

    async with client_factory({**admin_override, get_guest_write_model: lambda: store}) as client:
        response = await client.put(
            GUEST_DETAIL_URL.format(guest_id=guest.id),
            json={
                "id": str(uuid4()),
                "created_at": "2000-01-01T00:00:00Z",
                "updated_at": "2000-01-01T00:00:00Z",
                "comments": "Updated",
            },
        )

    assert response.status_code == 200
    updated = store.guests[guest.id]
    assert updated.id == guest.id
    assert updated.created_at == CREATED_AT
    assert updated.comments == "Updated"


@pytest.mark.asyncio
async def test_update_guest_rejects_null_required_field(client_factory, admin_override, guest):
    store = InMemoryGuestStore([guest])

    async with client_factory({**admin_override, get_guest_write_model: lambda: store}) as client:
        response = await client.put(
            GUEST_DETAIL_URL.format(guest_id=guest.id), json={"email": None}
        )

    assert response.status_code == 400
    assert response.json()["error"] == "'email': this field cannot be null"
    assert store.guests[guest.id].email == "claire@example.com"


@pytest.mark.asyncio
async def test_update_guest_rejects_guest_count_out_of_range(
    client_factory, admin_override, guest
):
    store = InMemoryGuestStore([guest])

    async with client_factory({**admin_override, get_guest_write_model: lambda: store}) as client:
        response = await client.put(
            GUEST_DETAIL_URL.format(guest_id=guest.id), json={"guest_count": 11}
        )

    assert response.status_code == 400
    assert store.guests[guest.id].guest_count == 2


@pytest.mark.asyncio
async def test_update_guest_duplicate_email(client_factory, admin_override, guest):
    other = make_guest(email="other@example.com")
    store = InMemoryGuestStore([guest, other])

    async with client_factory({**admin_override, get_guest_write_model: lambda: store}) as client:
        response = await client.put(
            GUEST_DETAIL_URL.format(guest_id=guest.id), json={"email": "other@example.com"}
        )

    assert response.status_code == 400
    assert response.json()["error"] == "A guest with this email already exists"


@pytest.mark.asyncio
async def test_update_guest_not_found(client_factory, admin_override):
    store = InMemoryGuestStore()

    async with client_factory({**admin_override, get_guest_write_model: lambda: store}) as client:
        response = await client.put(
            GUEST_DETAIL_URL.format(guest_id=uuid4()), json={"comments": "Hi"}
        )

    assert response.status_code == 404
    assert response.json()["error"] == "Guest not found"
