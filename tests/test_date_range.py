from datetime import datetime, timedelta

import pytest

from tiksearch.date_range import get_date_range_for_filter, is_video_in_time_range
from tiksearch.models import VideoItem

from conftest import make_item

NOW = datetime(2024, 5, 15, 14, 30, 12, 345000)
FILTERS = ["yesterday", "this-week", "this-month", "last-3-months", "last-6-months", "all-time", "bogus"]


@pytest.mark.parametrize("publish_time", FILTERS)
def test_end_is_last_millisecond_of_today(publish_time):
    rng = get_date_range_for_filter(publish_time, NOW)
    assert rng.end == datetime(2024, 5, 15, 23, 59, 59, 999000)


@pytest.mark.parametrize(
    "publish_time,expected_start",
    [
        ("yesterday", datetime(2024, 5, 14)),
        ("this-week", datetime(2024, 5, 8)),
        ("this-month", datetime(2024, 4, 15)),
        ("last-3-months", datetime(2024, 2, 15)),
        ("last-6-months", datetime(2023, 11, 17)),
    ],
)
def test_start_is_midnight_of_lookback_day(publish_time, expected_start):
    assert get_date_range_for_filter(publish_time, NOW).start == expected_start


def test_all_time_and_unknown_are_unbounded():
    assert get_date_range_for_filter("all-time", NOW).start == datetime.min
    assert get_date_range_for_filter("bogus", NOW).start == datetime.min


def test_yesterday_spans_previous_calendar_day_not_24h():
    rng = get_date_range_for_filter("yesterday", NOW)
    # 00:05 yesterday is more than 24h before NOW but still inside
    assert rng.contains(datetime(2024, 5, 14, 0, 5))
    assert not rng.contains(datetime(2024, 5, 13, 23, 59, 59))


def test_all_time_accepts_any_timestamp():
    ancient = VideoItem.model_validate(make_item("1", datetime(1975, 1, 1)))
    unparseable = VideoItem(id="2", create_time="not a date")
    future = VideoItem.model_validate(make_item("3", datetime.now() + timedelta(days=900)))
    for video in (ancient, unparseable, future):
        assert is_video_in_time_range(video, "all-time") is True


def test_window_is_inclusive_on_both_ends():
    rng = get_date_range_for_filter("this-week", NOW)
    at_start = VideoItem.model_validate(make_item("1", rng.start))
    before_start = VideoItem.model_validate(make_item("2", rng.start - timedelta(seconds=1)))
    at_end = VideoItem(id="3", create_time=rng.end.isoformat())
    after_end = VideoItem(id="4", create_time=(rng.end + timedelta(seconds=1)).isoformat())

    assert is_video_in_time_range(at_start, "this-week", NOW)
    assert not is_video_in_time_range(before_start, "this-week", NOW)
    assert is_video_in_time_range(at_end, "this-week", NOW)
    assert not is_video_in_time_range(after_end, "this-week", NOW)


def test_unparseable_create_time_is_outside_bounded_windows():
    video = VideoItem(id="1", create_time="yesterday-ish")
    assert not is_video_in_time_range(video, "this-month", NOW)
