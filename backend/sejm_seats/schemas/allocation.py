"""Seat allocation schemas shared by the allocator, the engine and the API."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class CandidateVotes(BaseModel):
    candidate_id: int
    grouping_name: str            # committee name after alias resolution
    display_name: str
    vote_count: int               # sum of all sub-channels


class RegionInput(BaseModel):
    region_index: int             # 1-based
    seat_count: int
    candidates: list[CandidateVotes] = Field(default_factory=list)


class GroupingSeats(BaseModel):
    grouping: str
    seats: int


class RegionOutput(BaseModel):
    region_index: int
    seat_count: int
    seats_by_grouping: dict[str, int]
    winners_by_grouping: dict[str, list[str]] | None = None  # None = names not requested

    @property
    def allocated_seats(self) -> int:
        return sum(self.seats_by_grouping.values())


class NationalOutput(BaseModel):
    seats_by_grouping: dict[str, int]   # descending by seats
    ranking: list[GroupingSeats]
    regions_counted: list[int]

    @property
    def total_seats(self) -> int:
        return sum(self.seats_by_grouping.values())


class RegionFailure(BaseModel):
    region_index: int
    kind: Literal["data_unavailable", "invalid_input"]
    detail: str


class ElectionResult(BaseModel):
    regions: list[RegionOutput]
    national: NationalOutput
    failures: list[RegionFailure] = Field(default_factory=list)

    @property
    def failed_regions(self) -> list[int]:
        return [f.region_index for f in self.failures]


class AllocationRequest(BaseModel):
    regions: list[RegionInput]
    with_winners: bool = False


class ElectionConfig(BaseModel):
    """Fixed per-election data: seats per region and committee aliases."""
    name: str = ""
    seats_per_region: list[int]
    aliases: dict[str, str] = Field(default_factory=dict)

    @field_validator("seats_per_region")
    @classmethod
    def _non_negative(cls, value: list[int]) -> list[int]:
        bad = [i + 1 for i, seats in enumerate(value) if seats < 0]
        if bad:
            raise ValueError(f"negative seat count for regions {bad}")
        return value

    @property
    def total_seats(self) -> int:
        return sum(self.seats_per_region)

    def regions(self) -> list[tuple[int, int]]:
        """(1-based region index, seat count) pairs in region order."""
        return [(i + 1, seats) for i, seats in enumerate(self.seats_per_region)]

    def resolve_grouping(self, committee_name: str) -> str:
        return self.aliases.get(committee_name) or committee_name
