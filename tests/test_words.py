from lrckit.lrc.model import LyricWord
from lrckit.lrc.words import join_words, parse_words


def test_trailing_tag_closes_last_word():
    words = parse_words("<00:05.00>Hel<00:05.40>lo<00:06.00>")
    assert words == (LyricWord(5000, 5400, "Hel"), LyricWord(5400, 6000, "lo"))
    assert [w.duration for w in words] == [400, 600]
    assert join_words(words) == "Hello"


def test_last_word_left_open_without_anchor():
    words = parse_words("<00:01.00>a <00:02.00>b")
    assert words == (LyricWord(1000, 2000, "a "), LyricWord(2000, 2000, "b"))


def test_no_tags():
    assert parse_words("plain text") == ()
    assert parse_words("") == ()


def test_lone_anchor_is_not_a_word():
    assert parse_words("<00:01.00>") == ()


def test_empty_middle_segment_skipped():
    words = parse_words("<00:01.00><00:02.00>x<00:03.00>")
    assert words == (LyricWord(2000, 3000, "x"),)


def test_text_before_first_tag_is_ignored():
    words = parse_words("lead <00:01.00>x<00:01.50>")
    assert words == (LyricWord(1000, 1500, "x"),)
