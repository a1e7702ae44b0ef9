from __future__ import annotations

import csv
import json
import os
from typing import Iterable, List, Sequence

from .models import EventRecord

# column order of EventRecord.to_row()
CSV_COLUMNS: Sequence[str] = (
    "title", "type", "date", "time", "location",
    "contact_email", "posting", "deadline", "tags",
)


def _prepare(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def write_csv(path: str, records: Iterable[EventRecord]) -> int:
    """Write one display row per record; returns the number of rows."""
    _prepare(path)
    count = 0
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(CSV_COLUMNS))
        writer.writeheader()
        for rec in records:
            writer.writerow(rec.to_row())
            count += 1
    return count


def write_json(path: str, records: Iterable[EventRecord]) -> int:
    _prepare(path)
    payload: List[dict] = [rec.to_json() for rec in records]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
        f.write("\n")
    return len(payload)
