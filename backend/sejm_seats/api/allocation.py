from __future__ import annotations

from fastapi import APIRouter, HTTPException

from sejm_seats.config import settings
from sejm_seats.exceptions import InvalidInputError
from sejm_seats.schemas.allocation import (
    AllocationRequest,
    ElectionResult,
    RegionInput,
    RegionOutput,
)
from sejm_seats.services.allocation.dhondt import allocate_region
from sejm_seats.services.allocation.engine import AllocationEngine

router = APIRouter(prefix="/allocation", tags=["allocation"])


@router.post("/region", response_model=RegionOutput)
async def allocate_single_region(region: RegionInput, with_winners: bool = False):
    try:
        return allocate_region(region, with_winners=with_winners)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/election", response_model=ElectionResult)
async def allocate_election(request: AllocationRequest):
    """Allocate every posted region; rejected regions are listed under ``failures``."""
    engine = AllocationEngine(
        with_winners=request.with_winners,
        parallel_regions=settings.PARALLEL_REGIONS,
    )
    return engine.allocate(request.regions)
