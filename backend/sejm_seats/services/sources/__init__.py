from __future__ import annotations

from sejm_seats.config import Settings, settings
from sejm_seats.services.sources.base import (
    RegionSource,
    Roster,
    VoteRecord,
    build_region_input,
    parse_region_votes,
)
from sejm_seats.services.sources.directory_source import DirectoryRegionSource
from sejm_seats.services.sources.http_source import HttpRegionSource


def make_source(config: Settings | None = None) -> RegionSource:
    """Build the vote data source selected by ``DATA_SOURCE``."""
    config = config or settings
    if config.DATA_SOURCE == "directory":
        return DirectoryRegionSource(config.DATA_DIR)
    if config.DATA_SOURCE == "http":
        return HttpRegionSource(
            config.SOURCE_BASE_URL,
            roster_path=config.ROSTER_PATH,
            region_path_template=config.REGION_PATH_TEMPLATE,
            timeout=config.REQUEST_TIMEOUT,
            max_retries=config.MAX_RETRIES,
            backoff=config.RETRY_BACKOFF,
        )
    raise ValueError(f"Unknown DATA_SOURCE: {config.DATA_SOURCE!r}")


__all__ = [
    "DirectoryRegionSource",
    "HttpRegionSource",
    "RegionSource",
    "Roster",
    "VoteRecord",
    "build_region_input",
    "make_source",
    "parse_region_votes",
]
