from __future__ import annotations

import json
from typing import Any

from lrckit.errors import ExportError

from .model import LyricDocument, LyricWord, RichLine, TimedLine
from .tags import format_ms

EXPORT_FORMATS = ("lrc", "srt", "json")


def _word_json(w: LyricWord) -> dict[str, Any]:
    return {"begin": w.begin, "end": w.end, "duration": w.duration, "text": w.text}


def _line_json(line: TimedLine | RichLine) -> dict[str, Any]:
    out: dict[str, Any] = {
        "begin": line.begin,
        "end": line.end,
        "duration": line.duration,
        "text": line.text,
    }
    if isinstance(line, RichLine):
        out["words"] = [_word_json(w) for w in line.words] if line.words else None
        out["translation"] = line.translation
        out["roma"] = line.roma
        out["secondary"] = line.secondary
        out["secondary_words"] = (
            [_word_json(w) for w in line.secondary_words] if line.secondary_words else None
        )
        out["is_aligned_right"] = line.is_aligned_right
    return out


def export_json(doc: LyricDocument) -> str:
    return json.dumps(
        {
            "metadata": doc.metadata,
            "lines": [_line_json(line) for line in doc.lines],
        },
        ensure_ascii=False,
        indent=2,
    )


def _words_lrc(words: tuple[LyricWord, ...]) -> str:
    body = "".join(f"{format_ms(w.begin, word=True)}{w.text}" for w in words)
    # closing anchor for the last word
    return body + format_ms(words[-1].end, word=True)


def export_lrc(doc: LyricDocument, include_tags: bool = True, include_words: bool = True) -> str:
    out: list[str] = []
    if include_tags and doc.metadata:
        for k in sorted(doc.metadata.keys()):
            out.append(f"[{k}:{doc.metadata[k]}]")

    for line in doc.lines:
        if isinstance(line, RichLine) and include_words and line.words:
            out.append(f"{format_ms(line.begin)}{_words_lrc(line.words)}")
        else:
            out.append(f"{format_ms(line.begin)}{line.text}")
        if isinstance(line, RichLine) and line.secondary:
            if include_words and line.secondary_words:
                out.append(f"[bg: {_words_lrc(line.secondary_words)}]")
            else:
                out.append(f"[bg: {line.secondary}]")
    return "\n".join(out) + ("\n" if out else "")


def _fmt_srt_time(ms: int) -> str:
    # HH:MM:SS,mmm
    h, rem = divmod(ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms2 = divmod(rem, 1_000)
    return f"{h:02d}:{m:02d}:{s:02d},{ms2:03d}"


def export_srt(doc: LyricDocument) -> str:
    """
    One cue per line using the finalized begin/end; secondary text goes on
    a second cue line.
    """
    if not doc.lines:
        return ""
    out: list[str] = []
    for i, line in enumerate(doc.lines, start=1):
        out.append(str(i))
        out.append(f"{_fmt_srt_time(line.begin)} --> {_fmt_srt_time(line.end)}")
        out.append(line.text or "")
        if isinstance(line, RichLine) and line.secondary:
            out.append(line.secondary)
        out.append("")
    return "\n".join(out)


def export(doc: LyricDocument, fmt: str) -> str:
    fmt_l = fmt.lower()
    if fmt_l == "json":
        return export_json(doc)
    if fmt_l == "lrc":
        return export_lrc(doc)
    if fmt_l == "srt":
        return export_srt(doc)
    raise ExportError(f"format must be one of: {', '.join(EXPORT_FORMATS)}")
