from __future__ import annotations

from .model import LyricWord
from .tags import WORD_TAG_RE, match_to_ms


def parse_words(fragment: str) -> tuple[LyricWord, ...]:
    """
    Split `<00:01.10>Hello <00:01.50>World<00:02.00>` into timed words.

    - a word's text runs up to the next tag (or the end of the fragment)
    - a trailing tag with nothing after it only closes the previous word
    - words without an end inherit the next word's begin
    - the last word keeps end == begin when nothing closes it

    Returns an empty tuple when the fragment has no word tags.
    """
    matches = list(WORD_TAG_RE.finditer(fragment))
    if not matches:
        return ()

    words: list[LyricWord] = []
    for i, m in enumerate(matches):
        begin = match_to_ms(m)
        text_end = matches[i + 1].start() if i + 1 < len(matches) else len(fragment)
        content = fragment[m.end() : text_end]

        if content:
            words.append(LyricWord(begin=begin, end=begin, text=content))
        elif i == len(matches) - 1 and words:
            last = words[-1]
            words[-1] = LyricWord(begin=last.begin, end=max(begin, last.begin), text=last.text)

    for i in range(len(words) - 1):
        w = words[i]
        if w.end <= w.begin:
            words[i] = LyricWord(begin=w.begin, end=max(words[i + 1].begin, w.begin), text=w.text)

    return tuple(words)


def join_words(words: tuple[LyricWord, ...]) -> str:
    return "".join(w.text for w in words)
