import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from typer.testing import CliRunner

from ip6parse.cli.main import app, format_groups

runner = CliRunner()


def test_format_groups():
    ip6 = bytes.fromhex("20010db8123456780000000000000005")
    assert format_groups(ip6) == "2001-0db8-1234-5678 0000-0000-0000-0005"


def test_parse_default_address():
    result = runner.invoke(app, ["parse"])
    assert result.exit_code == 0
    assert "2001-0db8-1234-5678 0000-0000-0000-0005" in result.output


def test_parse_argument():
    result = runner.invoke(app, ["parse", "::1"])
    assert result.exit_code == 0
    assert "0000-0000-0000-0000 0000-0000-0000-0001" in result.output


def test_parse_with_length():
    result = runner.invoke(app, ["parse", "2001:0db8::1234", "--length", "11"])
    assert result.exit_code == 0
    assert "2001-0db8-0000-0000 0000-0000-0000-0000" in result.output


def test_parse_error():
    result = runner.invoke(app, ["parse", "2001:db8::1:2000:"])
    assert result.exit_code == 1
    assert "-263" in result.output


def test_truncate():
    result = runner.invoke(app, ["truncate"])
    assert result.exit_code == 0
    assert "-263" in result.output


def test_check(tmp_path):
    conf = tmp_path / "addresses.txt"
    conf.write_text("# resolvers\n::1\n\n2001:db8::53\n2001:db8::g\n")

    result = runner.invoke(app, ["check", str(conf)])
    assert result.exit_code == 1
    assert "2001:db8::g" in result.output
    assert "SYNTAX_ERROR: 1" in result.output


def test_check_all_valid(tmp_path):
    conf = tmp_path / "addresses.txt"
    conf.write_text("::1\n2001-0db8-1234-5678 0000-0000-0000-0005\n")

    result = runner.invoke(app, ["check", str(conf), "--verbose"])
    assert result.exit_code == 0
    assert "Parsed: 2" in result.output


def test_check_missing_file(tmp_path):
    result = runner.invoke(app, ["check", str(tmp_path / "nope.txt")])
    assert result.exit_code == 2


def test_check_file_not_utf8(tmp_path):
    conf = tmp_path / "addresses.txt"
    conf.write_bytes(b"::1\n\xff\xfe::2\n")

    result = runner.invoke(app, ["check", str(conf)])
    assert result.exit_code == 2
    assert "Could not read" in result.output
