import os
import re
import signal
from unittest import mock

import pytest

from xvutils.tools import (
    ParkMillerRandom,
    RtcDate,
    add,
    do_rand,
    echo,
    factorial,
    main,
)


@pytest.mark.parametrize("ctx", [0, 1, 2, 31, 7177, 0x7FFFFFFD, 0x7FFFFFFE, 2**40 + 5])
def test_do_rand_range(ctx):
    value = do_rand(ctx)
    assert 0 <= value <= 0x7FFFFFFD


@pytest.mark.parametrize("ctx", [0, 1, 31, 7177, 123456789, 0x7FFFFFFD])
def test_do_rand_is_minimal_standard_step(ctx):
    x = ctx % 0x7FFFFFFE + 1
    assert do_rand(ctx) + 1 == pow(7, 5) * x % (2**31 - 1)


def test_generator_follows_do_rand():
    gen = ParkMillerRandom(42)
    first = gen.next()
    second = gen.next()
    assert first == do_rand(42)
    assert second == do_rand(first)


def test_generator_deterministic():
    a = ParkMillerRandom(1)
    b = ParkMillerRandom(1)
    assert [a.next() for _ in range(10)] == [b.next() for _ in range(10)]


def test_generator_seeds_differ():
    assert ParkMillerRandom(1 ^ 31).next() != ParkMillerRandom(1 ^ 7177).next()


def test_rtcdate_format_unpadded():
    assert RtcDate(2024, 1, 5, 3, 4, 5).format() == "2024-1-5 3:4:5"


def test_rtcdate_now_fields_in_range():
    now = RtcDate.now()
    assert 1 <= now.month <= 12
    assert 1 <= now.day <= 31
    assert 0 <= now.hour <= 23
    assert 0 <= now.minute <= 59
    assert 0 <= now.second <= 60


def test_factorial_zero_is_one():
    assert factorial(0) == 1


@pytest.mark.parametrize("n", range(1, 12))
def test_factorial_recurrence(n):
    assert factorial(n) == n * factorial(n - 1)


def test_factorial_negative():
    with pytest.raises(ValueError):
        factorial(-1)


def test_add():
    assert add(2, 3) == add(3, 2)
    assert add(7, 0) == 7


def test_echo():
    assert echo(["hello", "world"]) == "hello world\n"
    assert echo([]) == ""


def test_main_echo(capsys):
    assert main(["echo", "a", "b"]) == 0
    assert capsys.readouterr().out == "a b\n"


def test_main_add(capsys):
    assert main(["add", "2", "3"]) == 0
    assert capsys.readouterr().out == "The sum of 2 and 3 is 5\n"


def test_main_add_usage_and_errors(capsys):
    main(["add", "?"])
    assert capsys.readouterr().out == "Usage: add number1 number2\n"
    main(["add", "1"])
    assert capsys.readouterr().out == "You can only add two numbers\n"


def test_main_fact(capsys):
    main(["fact", "0"])
    assert capsys.readouterr().out == "The factorial of 0 is 1\n"
    main(["fact", "1", "2"])
    assert capsys.readouterr().out == "You can only enter one number \n"


def test_main_sleep(capsys):
    with mock.patch("xvutils.tools.time.sleep") as fake_sleep:
        assert main(["sleep", "20"]) == 0
    fake_sleep.assert_called_once_with(2.0)
    assert capsys.readouterr().out == "Starting sleep for 20\nFinished sleeping...\n"


def test_main_kill(capsys):
    with mock.patch("xvutils.tools.os.kill") as fake_kill:
        assert main(["kill", "123", "abc"]) == 0
    fake_kill.assert_called_once_with(123, signal.SIGTERM)


def test_main_kill_usage(capsys):
    assert main(["kill"]) == 1
    assert capsys.readouterr().err == "usage: kill pid...\n"


def test_main_getppid(capsys):
    assert main(["getppid"]) == 0
    assert capsys.readouterr().out == f"Parent PID: {os.getppid()}\n"


def test_main_datetime(capsys):
    assert main(["datetime"]) == 0
    out = capsys.readouterr().out
    match = re.fullmatch(r"Current datetime: (\d+)-(\d+)-(\d+) (\d+):(\d+):(\d+)\n", out)
    assert match is not None
    year, month, day = (int(match.group(i)) for i in (1, 2, 3))
    assert year >= 1970
    assert 1 <= month <= 12
    assert 1 <= day <= 31
    assert main(["datetime", "?"]) == 0
    assert capsys.readouterr().out == "Usage: show date and time.\n"


def test_main_rand(capsys):
    main(["rand"])
    assert re.fullmatch(r"Random number: -?\d+\n", capsys.readouterr().out)
    main(["rand", "x"])
    assert capsys.readouterr().out == "invalid input\n"


def test_main_unknown_command(capsys):
    assert main(["nosuch"]) == 1
    assert capsys.readouterr().err.startswith("usage: tools")