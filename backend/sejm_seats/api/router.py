from __future__ import annotations

from fastapi import APIRouter

from sejm_seats.api.allocation import router as allocation_router
from sejm_seats.api.health import router as health_router

api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(allocation_router)
