from __future__ import annotations

import re

# [mm:ss] / [mm:ss.xx] / [mm:ss.xxx] / [mm:ss:xx] / [hh:mm:ss.xx]
# The hour group is lazy so that [mm:ss:xx] reads as a colon-separated fraction.
TIME_TAG_RE = re.compile(r"\[(?:(\d+):)??(\d+):(\d{1,2})(?:[.:](\d+))?\]")
WORD_TAG_RE = re.compile(r"<(?:(\d+):)??(\d+):(\d{1,2})(?:[.:](\d+))?>")
META_TAG_RE = re.compile(r"^\[(\w+)\s*:\s*([^\]]*)\]$")
ROLE_RE = re.compile(r"^(v\d+|bg):\s*(.+)$", re.IGNORECASE)

BACKGROUND_ROLE = "bg"

MS_PER_SECOND = 1_000
MS_PER_MINUTE = 60_000
MS_PER_HOUR = 3_600_000


def fraction_to_ms(frac: str | None) -> int:
    """
    Precision follows the digit count, not the numeric value:
    "5" -> 500ms, "05" -> 50ms, "005" -> 5ms, "1234" -> 123ms.
    """
    if not frac:
        return 0
    if len(frac) == 1:
        return int(frac) * 100
    if len(frac) == 2:
        return int(frac) * 10
    return int(frac[:3])


def time_to_ms(hour: str | None, minute: str, second: str, frac: str | None) -> int:
    h = int(hour) if hour else 0
    return h * MS_PER_HOUR + int(minute) * MS_PER_MINUTE + int(second) * MS_PER_SECOND + fraction_to_ms(frac)


def match_to_ms(m: re.Match[str]) -> int:
    return time_to_ms(m.group(1), m.group(2), m.group(3), m.group(4))


def split_time_tags(line: str) -> tuple[list[int], str] | None:
    """
    For a line starting with a time tag, return every cue on it (in source
    order) and the text after the last tag, trimmed. None otherwise.
    """
    if not TIME_TAG_RE.match(line):
        return None
    matches = list(TIME_TAG_RE.finditer(line))
    payload = line[matches[-1].end() :].strip()
    return [match_to_ms(m) for m in matches], payload


def parse_meta_tag(line: str) -> tuple[str, str] | None:
    """[key: value] -> (key lower-cased, value trimmed); None for time tags."""
    if TIME_TAG_RE.match(line):
        return None
    m = META_TAG_RE.match(line)
    if m is None:
        return None
    return m.group(1).lower(), m.group(2).strip()


def split_role(text: str) -> tuple[str | None, str]:
    """'v1: hello' -> ('v1', 'hello'); role is lower-cased."""
    m = ROLE_RE.match(text)
    if m is None:
        return None, text
    return m.group(1).lower(), m.group(2)


def format_ms(ms: int, *, word: bool = False) -> str:
    """Inverse of the tag grammar at hundredths precision: [mm:ss.xx] or <mm:ss.xx>."""
    m, rem = divmod(ms, MS_PER_MINUTE)
    s, ms2 = divmod(rem, MS_PER_SECOND)
    body = f"{m:02d}:{s:02d}.{ms2 // 10:02d}"
    return f"<{body}>" if word else f"[{body}]"
