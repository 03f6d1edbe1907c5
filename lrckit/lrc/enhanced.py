from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from .finalize import DEFAULT_FALLBACK_SPAN_MS, finalize_lines
from .model import LyricDocument, RichLine
from .parse import LrcParseStats
from .tags import BACKGROUND_ROLE, parse_meta_tag, split_role, split_time_tags
from .words import join_words, parse_words

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _VoiceState:
    # first non-background role seen in this document
    lead: str | None = None

    def aligned_right(self, role: str | None) -> bool:
        if role is None or role == BACKGROUND_ROLE:
            return False
        if self.lead is None:
            self.lead = role
            return False
        return role != self.lead


def parse_enhanced_lrc(
    text: str | None, duration_ms: int = 0, *, fallback_ms: int = DEFAULT_FALLBACK_SPAN_MS
) -> LyricDocument:
    """
    Enhanced LRC: everything `parse_lrc` accepts, plus

    - word timing: [00:01.00]<00:01.00>Hel<00:01.40>lo<00:02.00>
    - role prefixes after the time tags: v1: / v2: / bg:
    - two lines with the same begin fold into main + secondary
    - a standalone [bg: ...] line becomes the previous line's secondary
    """
    doc, _stats = parse_enhanced_lrc_with_stats(text, duration_ms, fallback_ms=fallback_ms)
    return doc


def parse_enhanced_lrc_with_stats(
    text: str | None, duration_ms: int = 0, *, fallback_ms: int = DEFAULT_FALLBACK_SPAN_MS
) -> tuple[LyricDocument, LrcParseStats]:
    if not text or not text.strip():
        return LyricDocument(), LrcParseStats(0, 0, 0, 0)

    metadata: dict[str, str] = {}
    out: list[RichLine] = []
    voices = _VoiceState()

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
            for candidate in _build_lines(cues, payload, voices):
                if out and out[-1].begin == candidate.begin and out[-1].secondary is None:
                    out[-1] = _merge_secondary(out[-1], candidate)
                else:
                    out.append(candidate)
            continue

        tag = parse_meta_tag(line)
        if tag is None:
            ignored += 1
            logger.debug("Dropping unparseable line %d: %r", total, line)
            continue

        key, value = tag
        if key == BACKGROUND_ROLE and out:
            out[-1] = _attach_background(out[-1], value)
        else:
            metadata[key] = value

    lines = finalize_lines(out, hint_ms=duration_ms, fallback_ms=fallback_ms)
    doc = LyricDocument(metadata=metadata, lines=lines)
    stats = LrcParseStats(
        lines_total=total,
        events_total=len(lines),
        lines_with_timestamps=lines_with_ts,
        lines_ignored=ignored,
    )
    logger.debug("Parsed %d lines into %d rich entries (%d ignored)", total, len(lines), ignored)
    return doc, stats


def _build_lines(cues: list[int], payload: str, voices: _VoiceState) -> list[RichLine]:
    role, content = split_role(payload)
    aligned = voices.aligned_right(role)

    words = parse_words(content)
    text = join_words(words) if words else content

    out: list[RichLine] = []
    for cue in cues:
        # word timing is finer than the line cue
        if words:
            begin = words[0].begin
            last = words[-1]
            # an open last word leaves the line end to the finalizer
            end = last.end if last.end > last.begin else begin
        else:
            begin = end = cue
        out.append(
            RichLine(
                begin=begin,
                end=max(end, begin),
                text=text,
                words=words or None,
                is_aligned_right=aligned,
            )
        )
    return out


def _merge_secondary(main: RichLine, other: RichLine) -> RichLine:
    return replace(
        main,
        secondary=other.text,
        secondary_words=other.words,
        end=max(main.end, other.end),
    )


def _attach_background(line: RichLine, content: str) -> RichLine:
    words = parse_words(content)
    end = line.end
    if words and words[-1].end > end:
        end = words[-1].end
    return replace(
        line,
        secondary=join_words(words) if words else content,
        secondary_words=words or None,
        end=end,
    )
