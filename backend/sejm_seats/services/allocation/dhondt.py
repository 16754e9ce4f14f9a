"""
D'Hondt seat allocation for a single region.

Every grouping's vote total V is divided by 1, 2, ..., N (integer division)
and the N highest quotients across all groupings each win one seat. Seats
inside a grouping then go to its candidates by descending personal votes.

Tie-break on equal quotients: the grouping with more votes in the region
first, then the grouping that appeared first in the candidate list, then
the smaller divisor. Candidates with equal votes keep their list order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from sejm_seats.exceptions import InvalidInputError
from sejm_seats.schemas.allocation import CandidateVotes, RegionInput, RegionOutput
from sejm_seats.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Quotient:
    grouping: str
    value: int
    divisor: int
    total_votes: int
    order: int  # first appearance of the grouping in the region

    def sort_key(self) -> tuple[int, int, int, int]:
        return (-self.value, -self.total_votes, self.order, self.divisor)


def validate_region(region: RegionInput) -> None:
    if region.seat_count < 0:
        raise InvalidInputError(region.region_index, f"negative seat count {region.seat_count}")
    for c in region.candidates:
        if c.vote_count < 0:
            raise InvalidInputError(
                region.region_index,
                f"candidate {c.candidate_id} ({c.display_name}) has negative vote count {c.vote_count}",
            )


def tally_votes(candidates: Iterable[CandidateVotes]) -> dict[str, int]:
    """Sum candidate votes per grouping, in order of first appearance."""
    totals: dict[str, int] = {}
    for c in candidates:
        totals[c.grouping_name] = totals.get(c.grouping_name, 0) + c.vote_count
    return totals


def dhondt_quotients(totals: dict[str, int], seats: int) -> list[Quotient]:
    """All V // d quotients for d = 1..seats, best first."""
    pool: list[Quotient] = []
    for order, (grouping, votes) in enumerate(totals.items()):
        for i in range(seats):
            pool.append(Quotient(grouping, votes // (i + 1), i + 1, votes, order))
    pool.sort(key=Quotient.sort_key)
    return pool


def allocate_seats(totals: dict[str, int], seats: int) -> dict[str, int]:
    """D'Hondt seat counts for every grouping present in ``totals``.

    Groupings that win nothing are kept with 0; ``seats == 0`` yields ``{}``.
    """
    if seats < 0:
        raise ValueError(f"seat count must be non-negative, got {seats}")
    if seats == 0:
        return {}
    allocated = {grouping: 0 for grouping in totals}
    for q in dhondt_quotients(totals, seats)[:seats]:
        allocated[q.grouping] += 1
    return allocated


def rank_candidates(candidates: Iterable[CandidateVotes]) -> dict[str, list[CandidateVotes]]:
    by_grouping: dict[str, list[CandidateVotes]] = {}
    for c in candidates:
        by_grouping.setdefault(c.grouping_name, []).append(c)
    return {
        grouping: sorted(members, key=lambda c: -c.vote_count)
        for grouping, members in by_grouping.items()
    }


def allocate_region(region: RegionInput, with_winners: bool = False) -> RegionOutput:
    """Allocate one region's seats, optionally naming the candidates who fill them."""
    validate_region(region)

    totals = tally_votes(region.candidates)
    seats = allocate_seats(totals, region.seat_count)

    winners: dict[str, list[str]] | None = None
    if with_winners:
        ranked = rank_candidates(region.candidates)
        winners = {}
        for grouping, count in seats.items():
            elected = ranked[grouping][:count]
            if len(elected) < count:
                logger.warning(
                    "Region %d: %s won %d seats but has only %d candidates",
                    region.region_index, grouping, count, len(elected),
                )
            winners[grouping] = [c.display_name for c in elected]

    logger.debug(
        "Region %d: %d seats among %d groupings", region.region_index, region.seat_count, len(totals)
    )
    return RegionOutput(
        region_index=region.region_index,
        seat_count=region.seat_count,
        seats_by_grouping=seats,
        winners_by_grouping=winners,
    )
