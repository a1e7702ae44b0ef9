import json
import logging

import pytest

from event_feed.core.errors import SourceError
from event_feed.core.normalize import Timestamp
from event_feed.core.source import DocumentSource, decode_values, load_documents


def _doc(title="Hello world", **extra):
    doc = {
        "title": title,
        "desc": "desc",
        "type": "event",
        "date": {"_seconds": 1686744000, "_nanoseconds": 0},
        "contactName": "Pat Doe",
        "contactEmail": "pat@example.edu",
        "beginPosting": {"_seconds": 1686139200, "_nanoseconds": 0},
        "endPosting": {"seconds": 1686744000, "nanoseconds": 0},
    }
    doc.update(extra)
    return doc


def test_decode_values_converts_timestamps():
    out = decode_values({"date": {"_seconds": 10, "_nanoseconds": 5}, "nested": [{"seconds": 1, "nanoseconds": 0}]})
    assert out["date"] == Timestamp(10, 5)
    assert out["nested"] == [Timestamp(1, 0)]


def test_decode_values_leaves_other_objects():
    value = {"_seconds": "10", "_nanoseconds": 0}
    assert decode_values(value) == value
    assert decode_values({"seconds": 1, "nanoseconds": 0, "extra": 1})["extra"] == 1


def test_load_list_json(tmp_path):
    p = tmp_path / "events.json"
    p.write_text(json.dumps([_doc(), _doc("b")]), encoding="utf-8")
    docs = load_documents(str(p))
    assert [d["title"] for d in docs] == ["Hello world", "b"]
    assert isinstance(docs[0]["date"], Timestamp)


def test_load_mapping_keeps_ids(tmp_path):
    p = tmp_path / "events.json"
    p.write_text(json.dumps({"abc": _doc(), "def": _doc("b")}), encoding="utf-8")
    assert [d["_id"] for d in load_documents(str(p))] == ["abc", "def"]


def test_load_yaml_documents(tmp_path):
    p = tmp_path / "events.yml"
    p.write_text(
        "documents:\n"
        "  - title: Yaml event\n"
        "    desc: d\n"
        "    type: meeting\n"
        "    date: 2023-06-14\n",
        encoding="utf-8",
    )
    docs = load_documents(str(p))
    assert docs[0]["title"] == "Yaml event"
    assert str(docs[0]["date"]) == "2023-06-14"


def test_load_errors(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(SourceError):
        load_documents(str(bad))
    with pytest.raises(SourceError):
        load_documents(str(tmp_path / "events.csv"))
    with pytest.raises(SourceError):
        load_documents(str(tmp_path / "missing.json"))
    scalar = tmp_path / "scalar.json"
    scalar.write_text("42", encoding="utf-8")
    with pytest.raises(SourceError):
        load_documents(str(scalar))


def test_events_drop_invalid_and_log(tmp_path, caplog):
    p = tmp_path / "events.json"
    broken = _doc("broken")
    del broken["contactEmail"]
    p.write_text(json.dumps({"ok": _doc(), "bad": broken}), encoding="utf-8")

    log = logging.getLogger("event_feed.test")
    with caplog.at_level(logging.INFO, logger="event_feed.test"):
        events = DocumentSource([str(p)], log=log).events()

    assert [e.title for e in events] == ["Hello world"]
    assert "Dropped invalid record bad" in caplog.text
    assert "2 documents, 1 dropped" in caplog.text
