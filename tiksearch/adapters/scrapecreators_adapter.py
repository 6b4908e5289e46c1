from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from tiksearch.adapters.base import BaseAdapter
from tiksearch.config import settings
from tiksearch.errors import UpstreamStatusError
from tiksearch.models import PageResult, VideoItem

logger = logging.getLogger("tiksearch-adapter")


class ScrapeCreatorsAdapter(BaseAdapter):
    """Fetches one page of TikTok "top" search results from ScrapeCreators."""

    platform = "tiktok"

    def __init__(self, api_url: Optional[str] = None, region: Optional[str] = None) -> None:
        self.api_url = api_url or settings.search_api_url
        self.region = region or settings.search_region

    def build_params(self, query: str, publish_time: str, sort_by: str, cursor: Optional[int] = None) -> Dict[str, str]:
        params = {
            "query": query,
            "publish_time": publish_time,
            "sort_by": sort_by,
            "region": self.region,
        }
        # Absent cursor means "first page"; cursor=0 is not equivalent upstream.
        if cursor is not None:
            params["cursor"] = str(cursor)
        return params

    async def fetch_page(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        query: str,
        publish_time: str,
        sort_by: str,
        cursor: Optional[int] = None,
    ) -> PageResult:
        res = await client.get(
            self.api_url,
            params=self.build_params(query, publish_time, sort_by, cursor),
            headers={"x-api-key": api_key},
        )
        if res.status_code < 200 or res.status_code >= 300:
            raise UpstreamStatusError(res.status_code, res.text[:240])

        data = res.json()
        if not isinstance(data, dict):
            raise ValueError(f"malformed response body: expected object, got {type(data).__name__}")
        page = self.parse_page(data)
        logger.debug("Fetched page cursor=%s items=%d has_more=%s", cursor, len(page.items), page.has_more)
        return page

    @staticmethod
    def parse_page(data: Dict[str, Any]) -> PageResult:
        items = []
        for raw in data.get("items") or []:
            try:
                items.append(VideoItem.model_validate(raw))
            except ValidationError as exc:
                logger.warning("Skipping malformed item: %s", exc.errors(include_url=False))

        next_cursor = data.get("cursor")
        has_more = data.get("has_more")
        if has_more is None:
            has_more = next_cursor is not None
        return PageResult(
            items=items,
            cursor=next_cursor,
            has_more=bool(has_more),
            credits_remaining=_as_int(data.get("credits_remaining")),
        )


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0
