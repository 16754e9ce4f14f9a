from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sejm_seats import __version__
from sejm_seats.api.router import api_router
from sejm_seats.config import settings

app = FastAPI(
    title="Sejm seat allocation",
    description="D'Hondt seat allocation per electoral region with national totals",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")
