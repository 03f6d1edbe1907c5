from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Sequence

from lrckit.lrc.model import RichLine, TimedLine


@dataclass(slots=True)
class LineTracker:
    """
    Efficient lookup: O(log n) via bisect + update only on change.
    """

    begins: list[int]
    ends: list[int]
    last_idx: int = -1

    @classmethod
    def from_lines(cls, lines: Sequence[TimedLine | RichLine]) -> "LineTracker":
        return cls(
            begins=[line.begin for line in lines],
            ends=[line.end for line in lines],
        )

    def current_index(self, now_ms: int) -> int:
        i = bisect_right(self.begins, now_ms) - 1
        return i if i >= 0 else -1

    def active_index(self, now_ms: int) -> int:
        """Like current_index, but -1 once the line's end has passed."""
        i = self.current_index(now_ms)
        if i >= 0 and now_ms < self.ends[i]:
            return i
        return -1

    def changed_index(self, now_ms: int) -> int | None:
        i = self.current_index(now_ms)
        if i != self.last_idx:
            self.last_idx = i
            return i
        return None
