from fastapi import APIRouter

from .features.login.router import router as login_router

router = APIRouter()

router.include_router(login_router)
