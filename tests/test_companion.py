from lrckit.lrc.companion import attach_companions
from lrckit.lrc.enhanced import parse_enhanced_lrc
from lrckit.lrc.model import RichLine
from lrckit.lrc.parse import parse_lrc


def test_translation_and_roma_matched_by_begin():
    main = parse_enhanced_lrc("[ti:Song]\n[00:01.00]Hello\n[00:02.00]\n[00:03.00]World\n")
    doc = attach_companions(
        main,
        translation="[00:01.00]Hola\n[00:03.00]//\n",
        roma="[00:03.00]warudo\n",
    )
    assert [(line.text, line.translation, line.roma) for line in doc.lines] == [
        ("Hello", "Hola", None),
        ("World", None, "warudo"),
    ]
    assert doc.metadata == {"ti": "Song"}


def test_plain_lines_are_promoted():
    doc = attach_companions(parse_lrc("[00:01.00]a\n"), translation="[00:01.00]b\n")
    (line,) = doc.lines
    assert isinstance(line, RichLine)
    assert (line.begin, line.end, line.translation) == (1000, 6000, "b")


def test_no_companions_keeps_lines():
    main = parse_enhanced_lrc("[00:01.00]a\n")
    doc = attach_companions(main)
    assert doc.lines == main.lines
