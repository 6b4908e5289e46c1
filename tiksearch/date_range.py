from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Optional

from tiksearch.models import PublishTime, VideoItem
from tiksearch.normalizer import to_local_datetime


# Days subtracted from today for the start of each bounded window.
LOOKBACK_DAYS: Dict[PublishTime, int] = {
    "yesterday": 1,
    "this-week": 7,
    "this-month": 30,
    "last-3-months": 90,
    "last-6-months": 180,
}


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    def contains(self, value: datetime) -> bool:
        return self.start <= value <= self.end


def get_date_range_for_filter(publish_time: str, now: Optional[datetime] = None) -> DateRange:
    """Resolve a publish-time filter into an inclusive local wall-clock window.

    ``end`` is always the last millisecond of today. ``start`` is midnight of
    today minus the filter's lookback; ``yesterday`` therefore spans the whole
    previous day plus today. ``all-time`` and unknown values are unbounded.
    """
    now = now or datetime.now()
    end = now.replace(hour=23, minute=59, second=59, microsecond=999000)

    days = LOOKBACK_DAYS.get(publish_time)
    if days is None:
        return DateRange(start=datetime.min, end=end)

    start = (now - timedelta(days=days)).replace(hour=0, minute=0, second=0, microsecond=0)
    return DateRange(start=start, end=end)


def is_video_in_time_range(video: VideoItem, publish_time: str, now: Optional[datetime] = None) -> bool:
    if publish_time == "all-time":
        return True
    created = to_local_datetime(video.create_time)
    if created is None:
        return False
    return get_date_range_for_filter(publish_time, now).contains(created)
