from fastapi import APIRouter

from .features.create_checkout_session.router import router as create_checkout_session_router
from .features.get_balance.router import router as get_balance_router

router = APIRouter()

router.include_router(create_checkout_session_router)
router.include_router(get_balance_router)
