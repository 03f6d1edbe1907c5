from lrckit.lrc.model import TimedLine
from lrckit.lrc.parse import parse_lrc
from lrckit.sync.tracker import LineTracker


def test_tracker_changed_only_on_change():
    lines = (
        TimedLine(0, 1000, "a"),
        TimedLine(1000, 2000, "b"),
        TimedLine(2000, 7000, "c"),
    )
    tr = LineTracker.from_lines(lines)
    assert tr.changed_index(0) == 0
    assert tr.changed_index(10) is None
    assert tr.changed_index(999) is None
    assert tr.changed_index(1000) == 1
    assert tr.changed_index(1500) is None
    assert tr.changed_index(2500) == 2


def test_active_index_respects_end():
    doc = parse_lrc("[00:01.00]a\n[00:02.00]b\n")
    tr = LineTracker.from_lines(doc.lines)
    assert tr.active_index(500) == -1
    assert tr.active_index(1000) == 0
    assert tr.active_index(6999) == 1
    assert tr.active_index(7000) == -1
    assert tr.current_index(7000) == 1


def test_from_lines_keeps_only_timing():
    doc = parse_lrc("[00:01.00]a\n[00:02.00]b\n")
    tr = LineTracker.from_lines(doc.lines)
    assert tr.begins == [1000, 2000]
    assert tr.ends == [2000, 7000]
    assert not hasattr(tr, "texts")
