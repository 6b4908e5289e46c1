from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import httpx

from tiksearch.models import PageResult


class BaseAdapter(ABC):
    platform: str

    @abstractmethod
    async def fetch_page(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        query: str,
        publish_time: str,
        sort_by: str,
        cursor: Optional[int] = None,
    ) -> PageResult:
        raise NotImplementedError
