from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Optional, Tuple, Union

import dateparser

TAG_DELIMITER = ";"

DayLike = Union[date, datetime]


@dataclass(frozen=True)
class Timestamp:
    """
    Document store timestamp: whole seconds since the epoch plus nanoseconds.
    Converts to a local naive datetime, the way the store's client does.
    """
    seconds: int
    nanoseconds: int = 0

    def to_datetime(self) -> datetime:
        base = datetime.fromtimestamp(self.seconds)
        return base + timedelta(microseconds=self.nanoseconds // 1000)

    def to_date(self) -> date:
        return self.to_datetime().date()

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Timestamp":
        return cls(seconds=math.floor(dt.timestamp()), nanoseconds=dt.microsecond * 1000)


def as_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def as_day(value: Any) -> Optional[date]:
    """
    Timestamp-like value -> calendar date, or None.
    Text is not timestamp-like here; the store hands over typed timestamps.
    """
    if isinstance(value, Timestamp):
        try:
            return value.to_date()
        except (ValueError, OverflowError, OSError):
            # outside what datetime can hold
            return None
    # datetime is a date subclass, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return None


def to_day(value: DayLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def split_tags(value: Any) -> Tuple[str, ...]:
    # missing tags split the empty string: ("",)
    return tuple((as_text(value) or "").split(TAG_DELIMITER))


def parse_day(raw: str) -> Optional[date]:
    """Human text ("June 14 2023", "today", "2023-06-14") -> date."""
    raw_clean = " ".join((raw or "").split()).strip()
    if not raw_clean:
        return None

    dt = dateparser.parse(
        raw_clean,
        settings={
            "DATE_ORDER": "MDY",
            "PREFER_DAY_OF_MONTH": "first",
            "RETURN_AS_TIMEZONE_AWARE": False,
        },
        languages=["en"],
    )
    if not dt:
        return None
    return dt.date()
