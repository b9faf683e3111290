import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.config.database import async_session_manager

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str
    version: str = "0.1.0"


async def ping_database() -> None:
    async with async_session_manager(auto_commit=False) as session:
        await session.execute(text("SELECT 1"))


def get_database_probe():
    """Dependency to get the callable that checks the guest store is reachable."""
    return ping_database


@router.get("/", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """Liveness probe; does not touch the database."""
    return HealthCheckResponse(status="healthy")


@router.get("/ready", response_model=HealthCheckResponse)
async def readiness_check(probe=Depends(get_database_probe)) -> HealthCheckResponse:
    try:
        await probe()
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database not reachable: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database unavailable")
    return HealthCheckResponse(status="ready")
