import io

import pytest

from xvutils.grep import BUFFER_SIZE, grep, main, match


@pytest.mark.parametrize(
    "pattern,text,expected",
    [
        ("abc", "xxabcxx", True),
        ("abc", "abx", False),
        ("^ab", "abc", True),
        ("^ab", "cab", False),
        ("bc$", "abc", True),
        ("bc$", "abcd", False),
        ("a.c", "abc", True),
        ("a.c", "ac", False),
        ("ab*c", "ac", True),
        ("ab*c", "abbbc", True),
        ("^a.*z$", "abcz", True),
        ("^a.*z$", "abcza", False),
        ("", "", True),
        ("x*", "", True),
        ("$", "anything", True),
    ],
)
def test_match(pattern, text, expected):
    assert match(pattern, text) is expected


def test_grep_filters_lines():
    stream = io.StringIO("apple\nbanana\ncherry\napricot\n")
    assert list(grep("^ap", stream)) == ["apple\n", "apricot\n"]


def test_grep_drops_unterminated_last_line():
    stream = io.StringIO("match one\nmatch two")
    assert list(grep("match", stream)) == ["match one\n"]


def test_grep_lines_across_buffer_boundary():
    lines = [f"line{i}\n" for i in range(500)]
    stream = io.StringIO("".join(lines))
    result = list(grep("line", stream))
    assert result == lines


def test_grep_stops_on_overlong_line():
    stream = io.StringIO("a" * BUFFER_SIZE + "\nab\n")
    assert list(grep("ab", stream)) == []


def test_main_usage(capsys):
    assert main([]) == 1
    assert "usage: grep" in capsys.readouterr().err


def test_main_files(tmp_path, capsys):
    f = tmp_path / "f.txt"
    f.write_text("one\ntwo\nthree\n")
    assert main(["t", str(f)]) == 0
    assert capsys.readouterr().out == "two\nthree\n"


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "nope"
    assert main(["x", str(missing)]) == 1
    assert capsys.readouterr().out == f"grep: cannot open {missing}\n"