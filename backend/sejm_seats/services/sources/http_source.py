from __future__ import annotations

from typing import Any

import httpx
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from sejm_seats.config import settings
from sejm_seats.exceptions import DataUnavailableError
from sejm_seats.services.sources.base import Roster, VoteRecord, parse_region_votes
from sejm_seats.utils.logger import get_logger

logger = get_logger(__name__)


def _is_retryable(exc: BaseException) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.TransportError)


class HttpRegionSource:
    """Fetches roster and region vote documents over HTTP (httpx async).

    Each request is retried on transport errors and 5xx statuses; other
    error statuses fail at once.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        roster_path: str | None = None,
        region_path_template: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff: float | None = None,
    ) -> None:
        self.base_url = (base_url or settings.SOURCE_BASE_URL).rstrip("/")
        self.roster_path = roster_path or settings.ROSTER_PATH
        self.region_path_template = region_path_template or settings.REGION_PATH_TEMPLATE
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.max_retries = max_retries if max_retries is not None else settings.MAX_RETRIES
        self.backoff = backoff if backoff is not None else settings.RETRY_BACKOFF
        self._client = client

    def region_url(self, region_index: int) -> str:
        return f"{self.base_url}/{self.region_path_template.format(region=region_index)}"

    @property
    def roster_url(self) -> str:
        return f"{self.base_url}/{self.roster_path}"

    async def _get(self, client: httpx.AsyncClient, url: str) -> Any:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max(1, self.max_retries)),
            wait=wait_exponential(multiplier=self.backoff, min=self.backoff, max=30),
            retry=retry_if_exception(_is_retryable),
            reraise=True,
        ):
            with attempt:
                resp = await client.get(url)
                if resp.status_code != 200:
                    logger.warning("GET %s returned %d", url, resp.status_code)
                resp.raise_for_status()
                return resp.json()

    async def _get_json(self, url: str, region_index: int | None = None) -> Any:
        try:
            if self._client is not None:
                return await self._get(self._client, url)
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await self._get(client, url)
        except httpx.HTTPError as e:
            raise DataUnavailableError(f"Could not fetch {url}: {e}", region_index) from e
        except ValueError as e:
            raise DataUnavailableError(f"Invalid JSON at {url}: {e}", region_index) from e

    async def fetch_roster(self) -> Roster:
        doc = await self._get_json(self.roster_url)
        roster = Roster.from_document(doc)
        logger.info("Loaded roster: %d candidates", len(roster))
        return roster

    async def fetch_region_votes(self, region_index: int) -> list[VoteRecord]:
        doc = await self._get_json(self.region_url(region_index), region_index)
        return parse_region_votes(doc, region_index)
