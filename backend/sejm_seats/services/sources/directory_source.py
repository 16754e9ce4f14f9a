from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from sejm_seats.exceptions import DataUnavailableError
from sejm_seats.services.sources.base import Roster, VoteRecord, parse_region_votes
from sejm_seats.utils.logger import get_logger

logger = get_logger(__name__)


class DirectoryRegionSource:
    """Reads ``roster.json`` and ``regions/<index>.json`` from a local directory."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)

    def region_path(self, region_index: int) -> Path:
        return self.data_dir / "regions" / f"{region_index}.json"

    def _load(self, path: Path, region_index: int | None = None) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError as e:
            raise DataUnavailableError(f"Missing data file: {path}", region_index) from e
        except (OSError, json.JSONDecodeError) as e:
            raise DataUnavailableError(f"Could not read {path}: {e}", region_index) from e

    async def fetch_roster(self) -> Roster:
        roster = Roster.from_document(await asyncio.to_thread(self._load, self.data_dir / "roster.json"))
        logger.info("Loaded roster from %s: %d candidates", self.data_dir, len(roster))
        return roster

    async def fetch_region_votes(self, region_index: int) -> list[VoteRecord]:
        doc = await asyncio.to_thread(self._load, self.region_path(region_index), region_index)
        return parse_region_votes(doc, region_index)
