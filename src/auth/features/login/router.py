from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from src.auth.security import create_access_token, get_auth_settings, verify_admin_password
from src.config.settings import Settings

router = APIRouter()

LOGIN_URL = "/api/auth/login"


class LoginRequest(BaseModel):
    password: str | None = None


class LoginResponse(BaseModel):
    token: str


@router.post(LOGIN_URL, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    config: Settings = Depends(get_auth_settings),
) -> LoginResponse:
    """Exchange the admin password for a signed bearer token."""
    if not request.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Password is required")

    if not verify_admin_password(request.password, config):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")

    return LoginResponse(token=create_access_token(config))
