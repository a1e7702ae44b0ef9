from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class EventType(Enum):
    EVENT = "event"
    ANNOUNCEMENT = "announcement"
    MEETING = "meeting"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_string(cls, value: Any) -> Optional["EventType"]:
        """Case-insensitive lookup by name or plural ("Events"); None otherwise."""
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        for member in cls:
            if key in (member.value, member.value + "s"):
                return member
        return None
