from datetime import date, datetime

from event_feed.core.event_type import EventType
from event_feed.core.filters import calendar_day, filter_events, home_feed, sort_by_date

from test_models import make


def _events():
    return [
        make(title="Late", date=date(2023, 6, 20), begin_posting=date(2023, 6, 15), end_posting=date(2023, 6, 20), tags=("Music",)),
        make(title="Early", date=date(2023, 6, 2), begin_posting=date(2023, 6, 1), end_posting=date(2023, 6, 2), event_type=EventType.MEETING),
        make(title="Mid", date=date(2023, 6, 14), tags=("Food", "Music"), event_type=EventType.ANNOUNCEMENT),
        make(title="Mid too", date=date(2023, 6, 14), description="Pizza night"),
    ]


def test_sort_by_date_is_stable():
    titles = [e.title for e in sort_by_date(_events())]
    assert titles == ["Early", "Mid", "Mid too", "Late"]


def test_filter_by_query_and_type():
    assert [e.title for e in filter_events(_events(), query="PIZZA")] == ["Mid too"]
    assert [e.title for e in filter_events(_events(), event_type=EventType.MEETING)] == ["Early"]


def test_filter_by_tags_matches_any():
    assert [e.title for e in filter_events(_events(), tags=["Food", "Dance"])] == ["Mid"]
    assert len(filter_events(_events(), tags=["Music"])) == 2


def test_filters_combine():
    got = filter_events(_events(), query="mid", tags=["Music"], on=date(2023, 6, 14))
    assert [e.title for e in got] == ["Mid"]


def test_home_feed_uses_posting_range():
    assert [e.title for e in home_feed(_events(), datetime(2023, 6, 14, 8))] == ["Mid", "Mid too"]
    assert [e.title for e in home_feed(_events(), date(2023, 6, 2))] == ["Early"]


def test_calendar_day():
    assert [e.title for e in calendar_day(_events(), date(2023, 6, 20))] == ["Late"]
    assert calendar_day(_events(), date(2023, 7, 1)) == []
