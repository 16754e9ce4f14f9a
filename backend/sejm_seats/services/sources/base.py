"""
Vote data sources

A source supplies two documents: the candidate roster (which committee each
candidate runs for, and their name) and, per region, the candidates' vote
counts split by sub-channel.

Roster document::

    {"parties": [{"name": "...", "candidates": [{"id": 1, "name": "..."}]}]}

Region document::

    {"people": [{"id": 1, "vote_count": {"cities": 0, "villages": 0,
                                          "ships": 0, "foreign": 0}}]}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from pydantic import ValidationError

from sejm_seats.exceptions import DataUnavailableError
from sejm_seats.schemas.allocation import CandidateVotes, ElectionConfig, RegionInput

VOTE_CHANNELS = ("cities", "villages", "ships", "foreign")


@dataclass(frozen=True)
class VoteRecord:
    candidate_id: int
    cities: int = 0
    villages: int = 0
    ships: int = 0
    foreign: int = 0

    @property
    def total(self) -> int:
        return self.cities + self.villages + self.ships + self.foreign


@dataclass
class Roster:
    membership: dict[int, str] = field(default_factory=dict)  # candidate id -> committee
    names: dict[int, str] = field(default_factory=dict)       # candidate id -> display name

    @classmethod
    def from_document(cls, doc: Any) -> Roster:
        roster = cls()
        try:
            for party in doc["parties"]:
                committee = party["name"]
                for c in party["candidates"]:
                    candidate_id = int(c["id"])
                    roster.membership[candidate_id] = committee
                    roster.names[candidate_id] = c["name"]
        except (KeyError, TypeError, ValueError) as e:
            raise DataUnavailableError(f"Malformed roster document: {e!r}") from e
        return roster

    def __len__(self) -> int:
        return len(self.membership)


def parse_region_votes(doc: Any, region_index: int | None = None) -> list[VoteRecord]:
    try:
        records = []
        for person in doc["people"]:
            counts = person.get("vote_count") or {}
            records.append(VoteRecord(
                candidate_id=int(person["id"]),
                **{ch: int(counts.get(ch, 0)) for ch in VOTE_CHANNELS},
            ))
        return records
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DataUnavailableError(
            f"Malformed vote document for region {region_index}: {e!r}", region_index
        ) from e


def build_region_input(
    region_index: int,
    seat_count: int,
    votes: list[VoteRecord],
    roster: Roster,
    election: ElectionConfig | None = None,
) -> RegionInput:
    """Attach grouping (after the election's aliases) and display name to each vote record."""
    candidates = []
    for record in votes:
        committee = roster.membership.get(record.candidate_id)
        if committee is None:
            raise DataUnavailableError(
                f"Region {region_index}: candidate {record.candidate_id} is not in the roster",
                region_index,
            )
        name = roster.names.get(record.candidate_id, str(record.candidate_id))
        if not isinstance(committee, str) or not isinstance(name, str):
            raise DataUnavailableError(
                f"Region {region_index}: candidate {record.candidate_id} has a non-string "
                f"committee or name in the roster",
                region_index,
            )
        try:
            candidates.append(CandidateVotes(
                candidate_id=record.candidate_id,
                grouping_name=election.resolve_grouping(committee) if election else committee,
                display_name=name,
                vote_count=record.total,
            ))
        except ValidationError as e:
            raise DataUnavailableError(
                f"Region {region_index}: undecodable candidate {record.candidate_id}: {e}",
                region_index,
            ) from e
    return RegionInput(region_index=region_index, seat_count=seat_count, candidates=candidates)


class RegionSource(Protocol):
    async def fetch_roster(self) -> Roster: ...

    async def fetch_region_votes(self, region_index: int) -> list[VoteRecord]: ...
