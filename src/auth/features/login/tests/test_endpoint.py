import pytest

from src.auth.features.login.router import LOGIN_URL
from src.auth.security import decode_access_token, get_auth_settings
from src.config.settings import Settings
from src.guests.dependencies import get_guest_read_model
from src.guests.tests.inmemory_models import InMemoryGuestStore
from src.guests.urls import GUESTS_URL

CONFIG = Settings(
    admin_password="s3cret",
    secret_key="test-secret-key-with-enough-length-for-hs256",
)


@pytest.mark.asyncio
async def test_login_returns_verifiable_token(client_factory):
    async with client_factory({get_auth_settings: lambda: CONFIG}) as client:
        response = await client.post(LOGIN_URL, json={"password": "s3cret"})

    assert response.status_code == 200
    token = response.json()["token"]
    assert decode_access_token(token, CONFIG)["role"] == "admin"


@pytest.mark.asyncio
async def test_login_wrong_password(client_factory):
    async with client_factory({get_auth_settings: lambda: CONFIG}) as client:
        response = await client.post(LOGIN_URL, json={"password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid password"}


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"password": ""}])
async def test_login_missing_password(client_factory, body):
    async with client_factory({get_auth_settings: lambda: CONFIG}) as client:
        response = await client.post(LOGIN_URL, json=body)

    assert response.status_code == 400
    assert response.json()["error"] == "Password is required"


@pytest.mark.asyncio
async def test_login_token_opens_admin_endpoints(client_factory):
    overrides = {
        get_auth_settings: lambda: CONFIG,
        get_guest_read_model: lambda: InMemoryGuestStore(),
    }

    async with client_factory(overrides) as client:
        login = await client.post(LOGIN_URL, json={"password": "s3cret"})
        token = login.json()["token"]
        response = await client.get(GUESTS_URL, headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "count": 0, "data": []}
