"""
src/crawlers/feed_parser.py
Parse the whitespace-separated draw feed.

Each line: issue date p1 p2 p3 p4 p5 p6 s [extra columns ignored]
e.g.      2024153 2024-12-31 03 09 14 21 27 33 06 ...
Lines that do not parse into a valid draw are skipped.
"""
from __future__ import annotations

from src.models.types import DrawRecord
from src.utils.logger import get_logger

log = get_logger("crawler.parser")

MIN_COLUMNS = 9


def parse_line(line: str) -> DrawRecord | None:
    parts = line.split()
    if len(parts) < MIN_COLUMNS:
        return None

    issue, draw_date = parts[0], parts[1]
    try:
        primary = [int(p) for p in parts[2:8]]
        secondary = int(parts[8])
        return DrawRecord.create(issue, draw_date, primary, secondary)
    except ValueError as exc:
        log.debug(f"Skipping line {line.strip()!r}: {exc}")
        return None


def parse_feed(text: str) -> list[DrawRecord]:
    """All valid draws in the feed, ascending by issue, one per issue."""
    by_issue: dict[str, DrawRecord] = {}
    skipped = 0
    for line in text.splitlines():
        if not line.strip():
            continue
        record = parse_line(line)
        if record is None:
            skipped += 1
            continue
        by_issue[record.issue] = record

    if skipped:
        log.warning(f"Skipped {skipped} unparseable feed line(s)")
    return [by_issue[k] for k in sorted(by_issue)]
