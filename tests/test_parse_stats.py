import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ip6parse.analysis.errors import (
    ParseStatus,
    describe,
    error_for,
    error_position,
    is_syntax_error,
    IP6SyntaxError,
)
from ip6parse.analysis.ip6_parser import IPv6Parser
from ip6parse.analysis.parse_stats import ParseStatistics


def test_syntax_error_range():
    assert is_syntax_error(-1)
    assert is_syntax_error(-255)
    assert not is_syntax_error(ParseStatus.TOO_LONG)
    assert not is_syntax_error(ParseStatus.OK)
    assert error_position(-7) == 7
    assert error_position(ParseStatus.TRAILING_COLON) is None


def test_describe():
    assert describe(-3) == "syntax error at character 3"
    assert describe(ParseStatus.TRAILING_COLON) == "trailing colon"
    assert describe(-999) == "unknown status -999"


def test_error_for_picks_class():
    assert isinstance(error_for(-2, "1x"), IP6SyntaxError)
    error = error_for(ParseStatus.TOO_LONG)
    assert not isinstance(error, IP6SyntaxError)
    assert error.code == ParseStatus.TOO_LONG
    assert "-256" in str(error)


def test_statistics():
    parser = IPv6Parser()
    stats = ParseStatistics()

    for text in ["::1", "2001:db8::1", "2001:db8::g", "fe80::z1", "1:2:3", "2001:db8::1:"]:
        _, status = parser.parse(text)
        stats.update(text, status)

    summary = stats.get_summary()
    assert summary['total'] == 6
    assert summary['parsed'] == 2
    assert summary['failed'] == 4
    assert summary['errors'] == {
        'SYNTAX_ERROR': 2,
        'GROUP_COUNT_MISMATCH': 1,
        'TRAILING_COLON': 1,
    }
    assert summary['bad_chars'] == {'g': 1, 'z': 1}


def test_statistics_reset():
    stats = ParseStatistics()
    stats.update("::1", ParseStatus.OK)
    stats.reset()
    assert stats.get_summary()['total'] == 0
