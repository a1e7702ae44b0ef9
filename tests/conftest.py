from datetime import datetime

import pytest

from event_feed.core.normalize import Timestamp


def ts(year, month, day, hour=12):
    return Timestamp.from_datetime(datetime(year, month, day, hour))


@pytest.fixture
def raw_event():
    return {
        "title": "Hello world",
        "desc": "Come by <a href=https://example.edu/fair>the fair</a> on the lawn.",
        "type": "Event",
        "date": ts(2023, 6, 14),
        "time": "4-6 PM",
        "location": "Student Life Center",
        "contactName": "Pat Doe",
        "contactEmail": "pat@example.edu",
        "beginPosting": ts(2023, 6, 7),
        "endPosting": ts(2023, 6, 14),
        "applyDeadline": ts(2023, 6, 10),
        "tags": "Food;Music",
    }
