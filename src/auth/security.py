import hmac
import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.config.settings import Settings, settings

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"

bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_settings() -> Settings:
    """Dependency to get the settings used to sign and verify tokens."""
    return settings


def verify_admin_password(password: str, config: Settings) -> bool:
    if not config.admin_password:
        return False
    return hmac.compare_digest(password.encode(), config.admin_password.encode())


def create_access_token(config: Settings, role: str = ADMIN_ROLE, now: datetime | None = None) -> str:
    issued_at = now or datetime.now(UTC)
    payload = {
        "role": role,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=config.access_token_expire_minutes),
    }
    return jwt.encode(payload, config.secret_key, algorithm=config.algorithm)


def decode_access_token(token: str, config: Settings) -> dict[str, Any]:
    """Verify signature and expiry. Raises ``jwt.InvalidTokenError``."""
    return jwt.decode(token, config.secret_key, algorithms=[config.algorithm])


async def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    config: Settings = Depends(get_auth_settings),
) -> dict[str, Any]:
    """Guard for admin-only endpoints."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_access_token(credentials.credentials, config)
    except jwt.InvalidTokenError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, token failed",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if payload.get("role") != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, admin role required",
        )
    return payload
