import pytest

from lrckit.lrc.parse import parse_lrc, parse_lrc_with_stats


def test_parse_multiple_timestamps():
    doc = parse_lrc("[00:01.00][00:02.5]hey\n")
    assert [e.begin for e in doc.lines] == [1000, 2500]
    assert [e.text for e in doc.lines] == ["hey", "hey"]
    assert [e.end for e in doc.lines] == [2500, 7500]


def test_same_timestamp_is_not_merged():
    doc = parse_lrc("[00:10.00]a\n[00:10.00]b\n")
    assert [(e.begin, e.text) for e in doc.lines] == [(10000, "a"), (10000, "b")]
    assert doc.lines[0].end == 10000
    assert doc.lines[0].duration == 0
    assert doc.lines[1].end == 15000


def test_lines_sorted_and_ends_inferred():
    doc = parse_lrc("[00:05.00]b\n[00:01.00]a\n")
    assert [e.text for e in doc.lines] == ["a", "b"]
    assert doc.lines[0].end == 5000
    assert doc.lines[0].duration == 4000
    assert doc.lines[1].end == 10000


def test_duration_hint_closes_last_line():
    doc = parse_lrc("[00:01.00]a\n[00:03.00]b\n", duration_ms=60_000)
    assert doc.lines[0].end == 3000
    assert doc.lines[-1].end == 60_000
    assert doc.lines[-1].duration == 57_000


def test_zero_hint_uses_fallback_span():
    doc = parse_lrc("[00:03.00]b\n", duration_ms=0)
    assert doc.lines[-1].end == 8000


def test_custom_fallback_span():
    doc = parse_lrc("[00:03.00]b\n", fallback_ms=1000)
    assert doc.lines[-1].end == 4000


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("[00:12.34]", 12_340),
        ("[01:02:03.45]", 3_723_450),
        ("[00:12.345]", 12_345),
        ("[00:12:34]", 12_340),
        ("[00:12]", 12_000),
        ("[120:00.00]", 7_200_000),
        ("[00:00.5]", 500),
        ("[00:00.05]", 50),
        ("[00:00.1234]", 123),
    ],
)
def test_time_tag_forms(tag, expected):
    doc = parse_lrc(f"{tag}x")
    assert doc.lines[0].begin == expected


def test_metadata_tags_last_wins_and_lowercased():
    doc = parse_lrc("[ar: Someone ]\n[TI:Song]\n[ar:Other]\n[00:01.00]x\n")
    assert doc.metadata == {"ar": "Other", "ti": "Song"}
    assert len(doc.lines) == 1


def test_payload_trimmed():
    doc = parse_lrc("[00:01.00]   hi there   \n")
    assert doc.lines[0].text == "hi there"


@pytest.mark.parametrize("text", ["", "   \n\n\t", None])
def test_blank_input_gives_empty_document(text):
    doc = parse_lrc(text)
    assert doc.metadata == {}
    assert doc.lines == ()
    assert doc.is_empty


def test_unparseable_lines_are_dropped():
    doc, stats = parse_lrc_with_stats("hello\n[00:01.00]x\n[broken\n\n")
    assert [e.text for e in doc.lines] == ["x"]
    assert stats.lines_total == 4
    assert stats.lines_with_timestamps == 1
    assert stats.lines_ignored == 3
    assert stats.events_total == 1


def test_invariants_hold():
    text = "[00:09.00]c\n[00:01.00][00:09.00]a\n[00:03.50]b\n[01:00.00]\n"
    doc = parse_lrc(text, duration_ms=30_000)
    begins = [e.begin for e in doc.lines]
    assert begins == sorted(begins)
    for e in doc.lines:
        assert e.begin <= e.end
        assert e.duration == e.end - e.begin
    # hint earlier than the last cue cannot push end before begin
    assert doc.lines[-1].begin == 60_000
    assert doc.lines[-1].end == 60_000
