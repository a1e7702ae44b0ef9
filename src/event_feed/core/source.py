from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

import yaml

from .errors import SourceError
from .models import EventRecord
from .normalize import Timestamp

JSON_EXTS = (".json",)
YAML_EXTS = (".yml", ".yaml")

ID_KEY = "_id"


def _decode_timestamp(obj: Dict[str, Any]) -> Optional[Timestamp]:
    # exports write timestamps as {"_seconds": .., "_nanoseconds": ..}
    for sec_key, ns_key in (("_seconds", "_nanoseconds"), ("seconds", "nanoseconds")):
        if set(obj) == {sec_key, ns_key}:
            sec, ns = obj[sec_key], obj[ns_key]
            if isinstance(sec, int) and isinstance(ns, int) and not isinstance(sec, bool):
                return Timestamp(seconds=sec, nanoseconds=ns)
    return None


def decode_values(value: Any) -> Any:
    """Replace encoded timestamps anywhere in a document."""
    if isinstance(value, dict):
        ts = _decode_timestamp(value)
        if ts is not None:
            return ts
        return {k: decode_values(v) for k, v in value.items()}
    if isinstance(value, list):
        return [decode_values(v) for v in value]
    return value


def _read(path: str) -> Any:
    ext = os.path.splitext(path)[1].lower()
    if ext not in JSON_EXTS + YAML_EXTS:
        raise SourceError(f"Unsupported export format: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            if ext in JSON_EXTS:
                return json.load(f)
            return yaml.safe_load(f)
    except OSError as e:
        raise SourceError(f"Cannot read {path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SourceError(f"Malformed export {path}: {e}") from e


def load_documents(path: str) -> List[Dict[str, Any]]:
    """
    Read one export file into a list of untyped documents.

    Accepted layouts:
      [ {...}, {...} ]
      { "documents": [ {...}, ... ] }
      { "<doc id>": {...}, ... }      (id kept under "_id")
    """
    raw = _read(path)
    if isinstance(raw, dict) and isinstance(raw.get("documents"), list):
        raw = raw["documents"]

    docs: List[Dict[str, Any]] = []
    if isinstance(raw, list):
        for item in raw:
            if not isinstance(item, dict):
                raise SourceError(f"{path}: expected documents to be objects, got {type(item).__name__}")
            docs.append(decode_values(item))
    elif isinstance(raw, dict):
        for doc_id, item in raw.items():
            if not isinstance(item, dict):
                raise SourceError(f"{path}: document {doc_id!r} is not an object")
            doc = decode_values(item)
            doc.setdefault(ID_KEY, str(doc_id))
            docs.append(doc)
    elif raw is None:
        return []
    else:
        raise SourceError(f"{path}: unexpected top-level {type(raw).__name__}")
    return docs


class DocumentSource:
    def __init__(self, paths: Iterable[str], log: Optional[logging.Logger] = None) -> None:
        self.paths = list(paths)
        self.log = log or logging.getLogger("event_feed")

    def documents(self) -> Iterator[Tuple[str, int, Dict[str, Any]]]:
        for path in self.paths:
            for idx, doc in enumerate(load_documents(path)):
                yield path, idx, doc

    def events(self) -> List[EventRecord]:
        records: List[EventRecord] = []
        seen: Dict[str, int] = {}
        dropped: Dict[str, int] = {}
        for path, idx, doc in self.documents():
            seen[path] = seen.get(path, 0) + 1
            rec = EventRecord.from_untyped(doc)
            if rec is None:
                dropped[path] = dropped.get(path, 0) + 1
                self.log.warning("Dropped invalid record %s in %s", doc.get(ID_KEY, f"#{idx}"), path)
                continue
            self.log.debug("Accepted %s in %s: %s on %s", doc.get(ID_KEY, f"#{idx}"), path, rec.title, rec.date.isoformat())
            records.append(rec)
        for path in self.paths:
            self.log.info("%s: %s documents, %s dropped", path, seen.get(path, 0), dropped.get(path, 0))
        return records
