from __future__ import annotations

from dataclasses import replace

from .enhanced import parse_enhanced_lrc
from .model import LyricDocument, RichLine, TimedLine

# some providers emit "//" for lines that have no translation
_EMPTY_TRANSLATION = "//"


def _index_by_begin(text: str | None) -> dict[int, str]:
    if not text:
        return {}
    out: dict[int, str] = {}
    for line in parse_enhanced_lrc(text).lines:
        # last line with a given begin wins
        out[line.begin] = line.text
    return out


def _as_rich(line: TimedLine | RichLine) -> RichLine:
    if isinstance(line, RichLine):
        return line
    return RichLine(begin=line.begin, end=line.end, text=line.text)


def attach_companions(
    main: LyricDocument,
    translation: str | None = None,
    roma: str | None = None,
) -> LyricDocument:
    """
    Pair a lyric document with separately delivered translation and
    romanization LRC texts. Lines are matched on exact begin time; lines
    with blank text are dropped.
    """
    trans_map = _index_by_begin(translation)
    roma_map = _index_by_begin(roma)

    lines: list[RichLine] = []
    for line in main.lines:
        if not line.text or not line.text.strip():
            continue
        rich = _as_rich(line)
        trans = trans_map.get(rich.begin)
        if trans == _EMPTY_TRANSLATION or not trans:
            trans = rich.translation
        rich = replace(rich, translation=trans, roma=roma_map.get(rich.begin) or rich.roma)
        lines.append(rich)

    return LyricDocument(metadata=dict(main.metadata), lines=tuple(lines))
