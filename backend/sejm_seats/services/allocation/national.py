"""National seat totals across regions."""

from __future__ import annotations

from typing import Iterable

from sejm_seats.schemas.allocation import GroupingSeats, NationalOutput, RegionOutput


def rank_groupings(seats: dict[str, int]) -> list[GroupingSeats]:
    """Descending by seats; equal counts keep the mapping's order."""
    ordered = sorted(seats.items(), key=lambda x: -x[1])
    return [GroupingSeats(grouping=g, seats=s) for g, s in ordered]


class NationalAggregator:
    """Running per-grouping seat totals, fed one region at a time."""

    def __init__(self) -> None:
        self._totals: dict[str, int] = {}
        self._regions: list[int] = []

    def add(self, output: RegionOutput) -> None:
        for grouping, seats in output.seats_by_grouping.items():
            self._totals[grouping] = self._totals.get(grouping, 0) + seats
        self._regions.append(output.region_index)

    @property
    def totals(self) -> dict[str, int]:
        return dict(self._totals)

    def result(self) -> NationalOutput:
        ranking = rank_groupings(self._totals)
        return NationalOutput(
            seats_by_grouping={r.grouping: r.seats for r in ranking},
            ranking=ranking,
            regions_counted=list(self._regions),
        )


def aggregate_national(outputs: Iterable[RegionOutput]) -> NationalOutput:
    aggregator = NationalAggregator()
    for output in sorted(outputs, key=lambda o: o.region_index):
        aggregator.add(output)
    return aggregator.result()
