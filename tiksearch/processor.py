from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

import httpx

from tiksearch.adapters import BaseAdapter, ScrapeCreatorsAdapter
from tiksearch.config import Settings
from tiksearch.date_range import is_video_in_time_range
from tiksearch.errors import InvalidQueryError, MissingCredentialError
from tiksearch.models import AggregatedResult, PageResult, SearchRequest

logger = logging.getLogger("tiksearch-processor")


@dataclass(frozen=True)
class SearchConfig:
    api_key: str
    max_pages: int = 5
    page_size: int = 30
    page_timeout_s: float = 15.0
    http_timeout_s: float = 20.0
    cursors: Optional[Tuple[int, ...]] = None

    @classmethod
    def from_settings(cls, source: Settings) -> "SearchConfig":
        return cls(
            api_key=source.tiktok_api_key,
            max_pages=source.search_max_pages,
            page_size=source.search_page_size,
            page_timeout_s=source.search_page_timeout_s,
            http_timeout_s=source.search_http_timeout_s,
        )

    def cursor_table(self) -> Tuple[int, ...]:
        if self.cursors is not None:
            return tuple(self.cursors[: self.max_pages])
        return tuple(i * self.page_size for i in range(max(0, self.max_pages)))


@dataclass
class PageOutcome:
    cursor: int
    page: Optional[PageResult] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.page is not None


class SearchOrchestrator:
    """Fans out fixed-cursor page fetches and reduces them into one result.

    Every configured cursor is requested up front and concurrently; upstream
    ``has_more``/``cursor`` hints are ignored. This assumes a constant page
    size, so a different upstream page size skips or repeats items at the
    assumed boundaries.
    """

    def __init__(
        self,
        config: SearchConfig,
        adapter: Optional[BaseAdapter] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config
        self.adapter = adapter or ScrapeCreatorsAdapter()
        self._client = client

    def validate(self, request: SearchRequest) -> SearchRequest:
        query = (request.query or "").strip()
        if not query:
            raise InvalidQueryError()
        if not self.config.api_key:
            raise MissingCredentialError()
        return request.model_copy(update={"query": query})

    async def run(self, request: SearchRequest) -> AggregatedResult:
        request = self.validate(request)
        cursors = self.config.cursor_table()

        if self._client is not None:
            outcomes = await self._fan_out(self._client, request, cursors)
        else:
            timeout = httpx.Timeout(self.config.http_timeout_s)
            async with httpx.AsyncClient(timeout=timeout) as client:
                outcomes = await self._fan_out(client, request, cursors)

        result = self.reduce(outcomes, request.publish_time)
        logger.info(
            "Search query=%r publish_time=%s pages=%d/%d checked=%d kept=%d filtered=%d",
            request.query,
            request.publish_time,
            result.pages_fetched,
            len(cursors),
            result.total_videos_checked,
            len(result.items),
            result.filtered_out,
        )
        return result

    async def _fan_out(
        self, client: httpx.AsyncClient, request: SearchRequest, cursors: Tuple[int, ...]
    ) -> List[PageOutcome]:
        tasks = [self._fetch_isolated(client, request, cursor) for cursor in cursors]
        return list(await asyncio.gather(*tasks))

    async def _fetch_isolated(self, client: httpx.AsyncClient, request: SearchRequest, cursor: int) -> PageOutcome:
        call = self.adapter.fetch_page(
            client,
            self.config.api_key,
            request.query,
            request.publish_time,
            request.sort_by,
            cursor=None if cursor == 0 else cursor,
        )
        try:
            if self.config.page_timeout_s and self.config.page_timeout_s > 0:
                page = await asyncio.wait_for(call, timeout=self.config.page_timeout_s)
            else:
                page = await call
            return PageOutcome(cursor=cursor, page=page)
        except asyncio.TimeoutError:
            reason = f"page_timeout_{int(self.config.page_timeout_s * 1000)}ms"
            logger.warning("Error fetching page with cursor %s: %s", cursor, reason)
            return PageOutcome(cursor=cursor, error=reason)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Error fetching page with cursor %s: %s", cursor, exc)
            return PageOutcome(cursor=cursor, error=str(exc) or exc.__class__.__name__)

    @staticmethod
    def reduce(
        outcomes: List[PageOutcome], publish_time: str, now: Optional[datetime] = None
    ) -> AggregatedResult:
        now = now or datetime.now()
        result = AggregatedResult()
        seen_ids: set[str] = set()

        for outcome in sorted(outcomes, key=lambda o: o.cursor):
            if not outcome.ok:
                continue
            result.pages_fetched += 1
            result.credits_remaining = outcome.page.credits_remaining

            for video in outcome.page.items:
                if video.id in seen_ids:
                    continue
                seen_ids.add(video.id)
                result.total_videos_checked += 1

                if is_video_in_time_range(video, publish_time, now):
                    result.items.append(video)
                else:
                    result.filtered_out += 1

        return result
