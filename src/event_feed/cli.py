from __future__ import annotations

import argparse
import sys
import os
import logging
from datetime import date
from typing import Any, Dict, List, Optional

import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from event_feed.core.errors import ConfigError, SourceError
from event_feed.core.event_type import EventType
from event_feed.core.extract import plain_text
from event_feed.core.filters import filter_events, sort_by_date
from event_feed.core.models import EventRecord
from event_feed.core.normalize import parse_day
from event_feed.core.output import write_csv, write_json
from event_feed.core.source import DocumentSource

console = Console()

DEFAULT_CONFIG = "feed.yml"

DEFAULTS: Dict[str, Any] = {
    "sources": [],
    "out": "",
    "json": "",
    "log": "out/feed.log",
    "limit": 20,
}


def load_config(path: str, required: bool = False) -> Dict[str, Any]:
    if not os.path.exists(path):
        if required:
            raise ConfigError(f"Config file not found: {path}")
        return dict(DEFAULTS)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed config {path}: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping")
    sources = data.get("sources", [])
    if isinstance(sources, str):
        sources = [sources]
    if not isinstance(sources, list):
        raise ConfigError(f"Config {path}: 'sources' must be a list of paths")

    cfg = dict(DEFAULTS)
    # Merge only known keys
    for key in DEFAULTS:
        if key in data:
            cfg[key] = data[key]
    cfg["sources"] = [str(s) for s in sources]
    limit = cfg["limit"]
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise ConfigError(f"Config {path}: 'limit' must be a non-negative integer, got {limit!r}")
    return cfg


def parse_args(argv: List[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List and filter event feed records from document exports")
    p.add_argument("--config", default=None, help="Path to config YAML (default: feed.yml if present)")
    p.add_argument("--source", action="append", default=[], help="Export file (.json/.yml); repeatable")
    p.add_argument("--search", default=None, help="Case-insensitive text in title or description")
    p.add_argument("--on", default=None, help="Only records occurring on this day, e.g. 'June 14 2023'")
    p.add_argument("--posting-day", default=None, help="Only records posted on this day")
    p.add_argument("--home", action="store_true", help="Only records posted today")
    p.add_argument("--type", default=None, help="event, announcement or meeting")
    p.add_argument("--tag", action="append", default=[], help="Keep records having this tag; repeatable")
    p.add_argument("--out", default=None, help="Optional CSV output path")
    p.add_argument("--json", default=None, help="Optional JSON output path")
    p.add_argument("--log", default=None, help="Log output path")
    p.add_argument("--limit", type=int, default=None, help="Rows in the preview table")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def setup_logging(log_path: str, verbose: bool = False) -> logging.Logger:
    """Console output goes through rich; the log file keeps plain timestamped lines."""
    os.makedirs(os.path.dirname(log_path) or ".", exist_ok=True)
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger("event_feed")
    logger.setLevel(level)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    console_handler = RichHandler(console=console, show_path=False, markup=False)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(file_handler)
    return logger


def _day_arg(name: str, raw: Optional[str]) -> Optional[date]:
    if raw is None:
        return None
    d = parse_day(raw)
    if d is None:
        raise ValueError(f"Cannot understand {name} date: {raw!r}")
    return d


def render_preview(records: List[EventRecord], limit: int = 20) -> None:
    t = Table(title=f"Preview (first {min(limit, len(records))} of {len(records)})")
    t.add_column("date")
    t.add_column("type")
    t.add_column("title")
    t.add_column("time")
    t.add_column("location")
    t.add_column("deadline")
    t.add_column("summary")
    for r in records[:limit]:
        summary = plain_text(r.description)
        if len(summary) > 60:
            summary = summary[:57] + "..."
        t.add_row(
            r.display_date(),
            r.event_type.display_name,
            r.title,
            r.time or "",
            r.location or "",
            r.display_deadline() or "",
            summary,
        )
    console.print(t)


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])

    try:
        cfg = load_config(args.config or DEFAULT_CONFIG, required=args.config is not None)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        return 2

    log = setup_logging(args.log or cfg["log"], verbose=args.verbose)

    sources = args.source or cfg["sources"]
    if not sources:
        log.error("No sources given (use --source or 'sources' in %s)", args.config or DEFAULT_CONFIG)
        return 2

    event_type = None
    if args.type is not None:
        event_type = EventType.from_string(args.type)
        if event_type is None:
            console.print(f"[red]Unknown type:[/red] {args.type}")
            return 2

    try:
        on = _day_arg("--on", args.on)
        posting_day = _day_arg("--posting-day", args.posting_day)
    except ValueError as e:
        log.error("%s", e)
        return 2
    if args.home and posting_day is None:
        posting_day = date.today()

    try:
        events = DocumentSource(sources, log=log).events()
    except SourceError as e:
        log.error("%s", e)
        return 2
    log.info("Loaded %s valid records", len(events))

    records = sort_by_date(filter_events(
        events,
        query=args.search,
        on=on,
        posting_day=posting_day,
        event_type=event_type,
        tags=args.tag or None,
    ))
    log.info("%s records after filtering", len(records))

    out = args.out if args.out is not None else cfg["out"]
    json_out = args.json if args.json is not None else cfg["json"]
    if out:
        log.info("Wrote %s rows to CSV: %s", write_csv(out, records), out)
    if json_out:
        log.info("Wrote %s records to JSON: %s", write_json(json_out, records), json_out)

    render_preview(records, limit=args.limit if args.limit is not None else cfg["limit"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
