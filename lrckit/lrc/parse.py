from __future__ import annotations

import logging
from dataclasses import dataclass

from .finalize import DEFAULT_FALLBACK_SPAN_MS, finalize_lines
from .model import LyricDocument, TimedLine
from .tags import parse_meta_tag, split_time_tags

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LrcParseStats:
    lines_total: int
    events_total: int
    lines_with_timestamps: int
    lines_ignored: int


def parse_lrc(
    text: str | None, duration_ms: int = 0, *, fallback_ms: int = DEFAULT_FALLBACK_SPAN_MS
) -> LyricDocument:
    """
    Supported:
    - [mm:ss], [mm:ss.x], [mm:ss.xx], [mm:ss.xxx], [mm:ss:xx], [hh:mm:ss.xx]
    - minutes above 59 ([120:00.00])
    - multiple timestamps per line, each one its own entry (no dedup)
    - metadata tags: [ar:], [ti:], [al:], ... (last one wins)

    Result is normalized:
    - lines sorted by begin (stable)
    - every end filled from the next line, `duration_ms` or begin + fallback_ms
    """
    doc, _stats = parse_lrc_with_stats(text, duration_ms, fallback_ms=fallback_ms)
    return doc


def parse_lrc_with_stats(
    text: str | None, duration_ms: int = 0, *, fallback_ms: int = DEFAULT_FALLBACK_SPAN_MS
) -> tuple[LyricDocument, LrcParseStats]:
    if not text or not text.strip():
        return LyricDocument(), LrcParseStats(0, 0, 0, 0)

    metadata: dict[str, str] = {}
    entries: list[TimedLine] = []

    total = 0
    lines_with_ts = 0
    ignored = 0

    for raw in text.splitlines():
        total += 1
        line = raw.strip()
        if not line:
            ignored += 1
            continue

        timed = split_time_tags(line)
        if timed is not None:
            lines_with_ts += 1
            cues, payload = timed
            for begin in cues:
                entries.append(TimedLine(begin=begin, end=begin, text=payload))
            continue

        tag = parse_meta_tag(line)
        if tag is not None:
            key, value = tag
            metadata[key] = value
            continue

        ignored += 1
        logger.debug("Dropping unparseable line %d: %r", total, line)

    lines = finalize_lines(entries, hint_ms=duration_ms, fallback_ms=fallback_ms)
    doc = LyricDocument(metadata=metadata, lines=lines)
    stats = LrcParseStats(
        lines_total=total,
        events_total=len(lines),
        lines_with_timestamps=lines_with_ts,
        lines_ignored=ignored,
    )
    logger.debug("Parsed %d lines into %d entries (%d ignored)", total, len(lines), ignored)
    return doc, stats
