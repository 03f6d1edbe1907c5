from __future__ import annotations

from dataclasses import replace
from typing import Iterable, TypeVar

from .model import LyricWord, RichLine, TimedLine

DEFAULT_FALLBACK_SPAN_MS = 5000

T = TypeVar("T", TimedLine, RichLine, LyricWord)


def finalize(items: Iterable[T], hint_ms: int = 0, fallback_ms: int = DEFAULT_FALLBACK_SPAN_MS) -> list[T]:
    """
    Stable sort by begin, then close every entry whose end <= begin:
    next entry's begin, else the hint (if > 0), else begin + fallback_ms.
    """
    ordered = sorted(items, key=lambda it: it.begin)
    out: list[T] = []
    for i, cur in enumerate(ordered):
        if cur.end > cur.begin:
            out.append(cur)
            continue
        if i + 1 < len(ordered):
            end = ordered[i + 1].begin
        elif hint_ms > 0:
            end = hint_ms
        else:
            end = cur.begin + fallback_ms
        # the next begin or the hint may still precede this entry
        out.append(replace(cur, end=max(end, cur.begin)))
    return out


def _finalize_words(words: tuple[LyricWord, ...] | None, line_end: int, fallback_ms: int):
    if not words:
        return words
    return tuple(finalize(words, hint_ms=line_end, fallback_ms=fallback_ms))


def finalize_lines(
    lines: Iterable[T], hint_ms: int = 0, fallback_ms: int = DEFAULT_FALLBACK_SPAN_MS
) -> tuple[T, ...]:
    """Line-level pass, then a word-level pass inside each rich line bounded by its end."""
    out = []
    for line in finalize(lines, hint_ms=hint_ms, fallback_ms=fallback_ms):
        if isinstance(line, RichLine) and (line.words or line.secondary_words):
            words = _finalize_words(line.words, line.end, fallback_ms)
            secondary_words = _finalize_words(line.secondary_words, line.end, fallback_ms)
            # a line never ends before its own words
            end = max([line.end] + [w.end for w in (words or ()) + (secondary_words or ())])
            line = replace(line, end=end, words=words, secondary_words=secondary_words)
        out.append(line)
    return tuple(out)
