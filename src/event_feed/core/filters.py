from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable, List, Optional, Sequence

from .event_type import EventType
from .models import EventRecord, compare_by_date
from .normalize import DayLike


def sort_by_date(events: Iterable[EventRecord]) -> List[EventRecord]:
    # sorted() is stable, so same-day records keep their input order
    return sorted(events, key=cmp_to_key(compare_by_date))


def filter_events(
    events: Iterable[EventRecord],
    query: Optional[str] = None,
    on: Optional[DayLike] = None,
    posting_day: Optional[DayLike] = None,
    event_type: Optional[EventType] = None,
    tags: Optional[Sequence[str]] = None,
) -> List[EventRecord]:
    """Keep records meeting every given criterion; a tag criterion needs any one tag."""
    out: List[EventRecord] = []
    for e in events:
        if query is not None and not e.contains_string(query):
            continue
        if on is not None and not e.matches_date(on):
            continue
        if posting_day is not None and not e.in_posting_range(posting_day):
            continue
        if event_type is not None and e.event_type is not event_type:
            continue
        if tags and not any(t in e.tags for t in tags):
            continue
        out.append(e)
    return out


def home_feed(events: Iterable[EventRecord], today: DayLike) -> List[EventRecord]:
    return sort_by_date(filter_events(events, posting_day=today))


def calendar_day(events: Iterable[EventRecord], day: DayLike) -> List[EventRecord]:
    return filter_events(events, on=day)
