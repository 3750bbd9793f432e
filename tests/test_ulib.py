import io

import pytest

from xvutils.ulib import atoi, gets, memcmp, strcmp


def test_atoi_leading_digits():
    assert atoi("123abc") == 123
    assert atoi("42") == 42


def test_atoi_no_digits():
    assert atoi("") == 0
    assert atoi("-5") == 0
    assert atoi(" 7") == 0


def test_strcmp_equal():
    assert strcmp("abc", "abc") == 0
    assert strcmp(b"abc", "abc") == 0


def test_strcmp_ordering():
    assert strcmp("a", "b") < 0
    assert strcmp("b", "a") > 0
    assert strcmp("ab", "abc") == -ord("c")
    assert strcmp("abc", "ab") == ord("c")


def test_strcmp_stops_at_nul():
    assert strcmp("ab\0x", "ab\0y") == 0


def test_strcmp_unsigned():
    assert strcmp(b"\xff", b"\x01") > 0


def test_memcmp():
    assert memcmp(b"abc", b"abd", 2) == 0
    assert memcmp(b"abc", b"abd", 3) == ord("c") - ord("d")
    assert memcmp(b"\xff", b"\x01", 1) > 0


def test_memcmp_too_long():
    with pytest.raises(ValueError):
        memcmp(b"ab", b"abc", 3)


def test_gets_lines():
    stream = io.StringIO("hello\nworld")
    assert gets(stream, 100) == "hello\n"
    assert gets(stream, 100) == "world"
    assert gets(stream, 100) == ""


def test_gets_limit():
    stream = io.StringIO("hello")
    assert gets(stream, 4) == "hel"
    assert gets(stream, 1) == ""


def test_gets_stops_at_cr():
    stream = io.StringIO("ab\rcd")
    assert gets(stream, 100) == "ab\r"