from lrckit.lrc.companion import attach_companions
from lrckit.lrc.enhanced import parse_enhanced_lrc
from lrckit.lrc.model import LyricDocument, LyricWord, RichLine, TimedLine
from lrckit.lrc.parse import parse_lrc

__all__ = [
    "LyricDocument",
    "LyricWord",
    "RichLine",
    "TimedLine",
    "attach_companions",
    "parse_enhanced_lrc",
    "parse_lrc",
]
