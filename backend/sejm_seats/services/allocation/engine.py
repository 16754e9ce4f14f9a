"""
Allocation engine

Runs the whole count: roster first, then every region (fetched concurrently,
allocated independently), then the national fold in region order.
"""

from __future__ import annotations

import asyncio
from typing import Sequence

from sejm_seats.exceptions import DataUnavailableError, InvalidInputError
from sejm_seats.schemas.allocation import (
    ElectionConfig,
    ElectionResult,
    RegionFailure,
    RegionInput,
    RegionOutput,
)
from sejm_seats.services.allocation.dhondt import allocate_region
from sejm_seats.services.allocation.national import aggregate_national
from sejm_seats.services.allocation.validators import validate_election
from sejm_seats.services.sources.base import RegionSource, Roster, build_region_input
from sejm_seats.utils.logger import get_logger

logger = get_logger(__name__)

RegionOutcome = RegionOutput | RegionFailure


class AllocationEngine:
    """Seat allocation across all regions of an election."""

    def __init__(self, with_winners: bool = False, parallel_regions: int = 5):
        self.with_winners = with_winners
        self.parallel_regions = max(1, parallel_regions)

    def allocate_one(self, region: RegionInput) -> RegionOutcome:
        try:
            return allocate_region(region, with_winners=self.with_winners)
        except InvalidInputError as e:
            logger.error("Rejected region %d: %s", region.region_index, e)
            return RegionFailure(region_index=region.region_index, kind="invalid_input", detail=str(e))

    def allocate(self, regions: Sequence[RegionInput]) -> ElectionResult:
        """Allocate pre-built region inputs and aggregate them."""
        return self._collect([self.allocate_one(r) for r in regions])

    async def _run_region(
        self,
        source: RegionSource,
        roster: Roster,
        election: ElectionConfig,
        region_index: int,
        seat_count: int,
        semaphore: asyncio.Semaphore,
    ) -> RegionOutcome:
        async with semaphore:
            try:
                votes = await source.fetch_region_votes(region_index)
                region = build_region_input(region_index, seat_count, votes, roster, election)
            except DataUnavailableError as e:
                logger.error("Region %d unavailable: %s", region_index, e)
                return RegionFailure(region_index=region_index, kind="data_unavailable", detail=str(e))
            except Exception as e:
                logger.exception("Region %d failed, continuing with the rest", region_index)
                return RegionFailure(region_index=region_index, kind="data_unavailable", detail=repr(e))
        logger.info("Region %d: %d candidates, %d seats", region_index, len(region.candidates), seat_count)
        return self.allocate_one(region)

    async def run(self, source: RegionSource, election: ElectionConfig) -> ElectionResult:
        """Fetch and allocate every region of ``election``.

        A roster failure raises DataUnavailableError; region failures are
        recorded in the result and the remaining regions still count.
        """
        roster = await source.fetch_roster()
        semaphore = asyncio.Semaphore(self.parallel_regions)

        logger.info(
            "Allocating %s: %d regions, %d seats",
            election.name or "election", len(election.seats_per_region), election.total_seats,
        )
        outcomes = await asyncio.gather(*(
            self._run_region(source, roster, election, index, seats, semaphore)
            for index, seats in election.regions()
        ))
        return self._collect(list(outcomes))

    def _collect(self, outcomes: list[RegionOutcome]) -> ElectionResult:
        outcomes = sorted(outcomes, key=lambda o: o.region_index)
        regions = [o for o in outcomes if isinstance(o, RegionOutput)]
        failures = [o for o in outcomes if isinstance(o, RegionFailure)]

        result = ElectionResult(
            regions=regions,
            national=aggregate_national(regions),
            failures=failures,
        )

        report = validate_election(result)
        if report.passed and not report.warnings:
            logger.info(report.summary())
        else:
            logger.warning(report.summary())
        return result
