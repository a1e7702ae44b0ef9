from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .event_type import EventType
from .normalize import DayLike, as_day, as_text, split_tags, to_day

Classifier = Callable[[Any], Optional[EventType]]

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_day(d: date) -> str:
    """2023-06-14 -> 'Wed, Jun 14, 2023' (English names regardless of locale)."""
    return f"{_WEEKDAYS[d.weekday()]}, {_MONTHS[d.month - 1]} {d.day}, {d.year:04d}"


@dataclass(frozen=True)
class EventRecord:
    """
    One event, announcement or meeting item from the document store.

    Items are submitted through a form and moderated before they land in the
    store, whose documents are loosely typed, so records coming from the store
    go through `from_untyped`. `description` may carry `<a href=...>` markup;
    it is kept raw here (see `core.extract`). `contact_name` is internal only.
    """
    title: str
    description: str
    event_type: EventType
    date: date  # first day if the event spans several
    time: Optional[str]
    location: Optional[str]
    contact_name: str
    contact_email: str
    begin_posting: date
    end_posting: date  # not checked against begin_posting
    apply_deadline: Optional[date]
    tags: Tuple[str, ...]

    @classmethod
    def from_untyped(
        cls,
        data: Mapping[str, Any],
        classify: Classifier = EventType.from_string,
    ) -> Optional["EventRecord"]:
        """
        Build a record from an untyped document, or return None.

        Required: title, desc, type (must classify), date, contactName,
        contactEmail, beginPosting, endPosting. Optional fields of the wrong
        type are dropped to None rather than rejecting the record.
        """
        title = as_text(data.get("title"))
        if title is None:
            return None
        description = as_text(data.get("desc"))
        if description is None:
            return None
        event_type = classify(data.get("type"))
        if event_type is None:
            return None
        day = as_day(data.get("date"))
        if day is None:
            return None
        contact_name = as_text(data.get("contactName"))
        if contact_name is None:
            return None
        contact_email = as_text(data.get("contactEmail"))
        if contact_email is None:
            return None
        begin_posting = as_day(data.get("beginPosting"))
        if begin_posting is None:
            return None
        end_posting = as_day(data.get("endPosting"))
        if end_posting is None:
            return None

        return cls(
            title=title,
            description=description,
            event_type=event_type,
            date=day,
            time=as_text(data.get("time")),
            location=as_text(data.get("location")),
            contact_name=contact_name,
            contact_email=contact_email,
            begin_posting=begin_posting,
            end_posting=end_posting,
            apply_deadline=as_day(data.get("applyDeadline")),
            tags=split_tags(data.get("tags")),
        )

    def compare_by_date(self, other: "EventRecord") -> int:
        return compare_by_date(self, other)

    def display_date(self) -> str:
        return format_day(self.date)

    def display_deadline(self) -> Optional[str]:
        if self.apply_deadline is None:
            return None
        return format_day(self.apply_deadline)

    def contains_string(self, query: str) -> bool:
        """Case-insensitive match against title or description."""
        q = query.lower()
        return q in self.title.lower() or q in self.description.lower()

    def matches_date(self, day: DayLike) -> bool:
        return self.date == to_day(day)

    def in_posting_range(self, day: DayLike) -> bool:
        """Inclusive of both begin_posting and end_posting."""
        return self.begin_posting <= to_day(day) <= self.end_posting

    def to_row(self) -> Dict[str, Any]:
        # CSV-friendly; contact_name is never shown
        return {
            "title": self.title,
            "type": self.event_type.display_name,
            "date": self.display_date(),
            "time": self.time or "",
            "location": self.location or "",
            "contact_email": self.contact_email,
            "posting": f"{self.begin_posting.isoformat()}..{self.end_posting.isoformat()}",
            "deadline": self.display_deadline() or "",
            "tags": "; ".join(t for t in self.tags if t),
        }

    def to_json(self) -> Dict[str, Any]:
        d = asdict(self)
        d["event_type"] = self.event_type.value
        for key in ("date", "begin_posting", "end_posting", "apply_deadline"):
            if d[key] is not None:
                d[key] = d[key].isoformat()
        d["tags"] = list(self.tags)
        return d


def compare_by_date(a: EventRecord, b: EventRecord) -> int:
    """Ascending by date; equal dates compare as 0."""
    if a.date < b.date:
        return -1
    if a.date > b.date:
        return 1
    return 0
