from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class LyricWord:
    begin: int
    end: int
    text: str

    @property
    def duration(self) -> int:
        return max(0, self.end - self.begin)


@dataclass(frozen=True, slots=True)
class TimedLine:
    begin: int
    end: int
    text: str

    @property
    def duration(self) -> int:
        return max(0, self.end - self.begin)


@dataclass(frozen=True, slots=True)
class RichLine:
    begin: int
    end: int
    text: str
    words: tuple[LyricWord, ...] | None = None
    translation: str | None = None
    roma: str | None = None  # romanized transliteration
    secondary: str | None = None  # background / duet text
    secondary_words: tuple[LyricWord, ...] | None = None
    is_aligned_right: bool = False  # duet rendering hint

    @property
    def duration(self) -> int:
        return max(0, self.end - self.begin)


@dataclass(frozen=True, slots=True)
class LyricDocument:
    metadata: dict[str, str] = field(default_factory=dict)
    lines: tuple[TimedLine | RichLine, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def span_ms(self) -> int:
        return max((line.end for line in self.lines), default=0)
