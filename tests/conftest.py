from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from sejm_seats.exceptions import DataUnavailableError
from sejm_seats.schemas.allocation import CandidateVotes, ElectionConfig, RegionInput
from sejm_seats.services.sources.base import Roster, parse_region_votes

PIS = "KOMITET WYBORCZY PRAWO I SPRAWIEDLIWOŚĆ"
LEWICA = "KOMITET WYBORCZY NOWA LEWICA"
BEZPARTYJNI = "KOMITET WYBORCZY BEZPARTYJNI"

ROSTER_DOC = {
    "parties": [
        {"name": PIS, "candidates": [
            {"id": 1, "name": "Anna Nowak"},
            {"id": 2, "name": "Jan Kowalski"},
            {"id": 3, "name": "Piotr Wiśniewski"},
        ]},
        {"name": LEWICA, "candidates": [
            {"id": 4, "name": "Maria Zielińska"},
            {"id": 5, "name": "Tomasz Lewandowski"},
        ]},
        {"name": BEZPARTYJNI, "candidates": [
            {"id": 6, "name": "Ewa Wójcik"},
        ]},
    ]
}


def _person(candidate_id: int, cities: int, villages: int = 0, ships: int = 0, foreign: int = 0) -> dict:
    return {
        "id": candidate_id,
        "vote_count": {"cities": cities, "villages": villages, "ships": ships, "foreign": foreign},
    }


# Region 1 (4 seats): PiS 100, Lewica 50, Bezpartyjni 0 -> PiS 3, Lewica 1
# Region 2 (2 seats): Lewica 75, PiS 10 -> Lewica 2
# Region 3: no data
REGION_DOCS = {
    1: {"people": [
        _person(1, 50, 15, 0, 5),
        _person(2, 20),
        _person(3, 8, 2),
        _person(4, 30),
        _person(5, 12, 6, 1, 1),
        _person(6, 0),
    ]},
    2: {"people": [
        _person(1, 10),
        _person(4, 40),
        _person(5, 35),
    ]},
}

TEST_ELECTION = {
    "name": "test election",
    "seats_per_region": [4, 2, 3],
    "aliases": {PIS: "PiS", LEWICA: "Lewica"},
}


def make_region(region_index: int, seat_count: int, votes: list[tuple[str, int]]) -> RegionInput:
    """Region with one candidate per (grouping, votes) pair, named ``<grouping><n>``."""
    return RegionInput(
        region_index=region_index,
        seat_count=seat_count,
        candidates=[
            CandidateVotes(
                candidate_id=i + 1,
                grouping_name=grouping,
                display_name=f"{grouping}{i + 1}",
                vote_count=v,
            )
            for i, (grouping, v) in enumerate(votes)
        ],
    )


class FakeSource:
    """In-memory RegionSource with optional per-region delays."""

    def __init__(
        self,
        roster_doc: dict | None = None,
        region_docs: dict[int, dict] | None = None,
        delays: dict[int, float] | None = None,
    ):
        self.roster_doc = roster_doc
        self.region_docs = region_docs or {}
        self.delays = delays or {}
        self.active = 0
        self.max_active = 0
        self.fetched: list[int] = []

    async def fetch_roster(self) -> Roster:
        if self.roster_doc is None:
            raise DataUnavailableError("roster missing")
        return Roster.from_document(self.roster_doc)

    async def fetch_region_votes(self, region_index: int):
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            await asyncio.sleep(self.delays.get(region_index, 0))
            self.fetched.append(region_index)
            if region_index not in self.region_docs:
                raise DataUnavailableError(f"no data for region {region_index}", region_index)
            return parse_region_votes(self.region_docs[region_index], region_index)
        finally:
            self.active -= 1


@pytest.fixture
def election() -> ElectionConfig:
    return ElectionConfig.model_validate(TEST_ELECTION)


@pytest.fixture
def fake_source() -> FakeSource:
    return FakeSource(ROSTER_DOC, REGION_DOCS)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Directory source layout with roster, regions 1-2 and an election config."""
    root = tmp_path / "data"
    (root / "regions").mkdir(parents=True)
    (root / "roster.json").write_text(json.dumps(ROSTER_DOC, ensure_ascii=False), encoding="utf-8")
    for index, doc in REGION_DOCS.items():
        (root / "regions" / f"{index}.json").write_text(json.dumps(doc), encoding="utf-8")
    (root / "election.json").write_text(json.dumps(TEST_ELECTION, ensure_ascii=False), encoding="utf-8")
    return root
