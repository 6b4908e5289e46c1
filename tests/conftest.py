import asyncio
from datetime import datetime, timedelta
from typing import Dict, Optional

import pytest

from tiksearch.adapters import BaseAdapter
from tiksearch.models import PageResult, VideoItem


def make_item(video_id, created: Optional[datetime] = None, **extra) -> Dict:
    created = created or datetime.now()
    return {
        "id": str(video_id),
        "create_time": int(created.timestamp()),
        "desc": f"video {video_id}",
        "statistics": {"play_count": 10, "digg_count": 2},
        "video": {"cover": {"url_list": [f"https://cdn.example/{video_id}.jpg"]}},
        **extra,
    }


def make_page(ids, credits=100, created: Optional[datetime] = None) -> PageResult:
    return PageResult(
        items=[VideoItem.model_validate(make_item(i, created)) for i in ids],
        credits_remaining=credits,
    )


class FakeAdapter(BaseAdapter):
    """Serves canned pages keyed by the cursor the orchestrator sends (None = first page)."""

    platform = "tiktok"

    def __init__(self, pages, delays=None):
        self.pages = pages
        self.delays = delays or {}
        self.calls = []

    async def fetch_page(self, client, api_key, query, publish_time, sort_by, cursor=None):
        self.calls.append(
            {"api_key": api_key, "query": query, "publish_time": publish_time, "sort_by": sort_by, "cursor": cursor}
        )
        delay = self.delays.get(cursor, 0)
        if delay:
            await asyncio.sleep(delay)
        page = self.pages.get(cursor)
        if isinstance(page, Exception):
            raise page
        if page is None:
            raise RuntimeError(f"no page for cursor {cursor}")
        return page


@pytest.fixture
def old_time():
    return datetime.now() - timedelta(days=400)
