"""Small commands: echo, add, fact, sleep, kill, datetime, getppid and rand."""

from __future__ import annotations

import datetime as _dt
import os
import signal
import sys
import time
from dataclasses import dataclass
from typing import Callable, Sequence

from xvutils.fmt import fprintf, format_message, printf
from xvutils.ulib import atoi

TICKS_PER_SECOND = 10
_MASK64 = (1 << 64) - 1


def do_rand(ctx: int) -> int:
    """Advance the Park-Miller state ``ctx`` and return the new state.

    Computes ``16807 * x mod (2**31 - 1)`` without overflow, mapping the
    state into ``[1, 0x7ffffffe]`` first and the result into
    ``[0, 0x7ffffffd]``. The returned value is both the output and the
    next state.
    """
    x = ((ctx & _MASK64) % 0x7FFFFFFE) + 1
    hi, lo = divmod(x, 127773)
    x = 16807 * lo - 2836 * hi
    if x < 0:
        x += 0x7FFFFFFF
    return x - 1


class ParkMillerRandom:
    """Deterministic generator built on :func:`do_rand`."""

    def __init__(self, seed: int = 1) -> None:
        self.state = seed & _MASK64

    def next(self) -> int:
        """Return the next number in the sequence."""
        self.state = do_rand(self.state)
        return self.state


@dataclass(frozen=True)
class RtcDate:
    """A calendar date and time of day."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int

    @classmethod
    def now(cls) -> "RtcDate":
        """Return the current UTC date and time."""
        t = _dt.datetime.now(_dt.timezone.utc)
        return cls(t.year, t.month, t.day, t.hour, t.minute, t.second)

    def format(self) -> str:
        """Render as ``year-month-day hour:minute:second`` without padding."""
        return format_message("%d-%d-%d %d:%d:%d", self.year, self.month,
                              self.day, self.hour, self.minute, self.second)


def factorial(n: int) -> int:
    """Return ``n!``; negative ``n`` raises ValueError."""
    if n < 0:
        raise ValueError("invalid number")
    result = 1
    for i in range(1, n + 1):
        result *= i
    return result


def add(a: int, b: int) -> int:
    """Return the sum of two numbers."""
    return a + b


def echo(args: Sequence[str]) -> str:
    """Return the arguments joined by spaces and ended by a newline."""
    if not args:
        return ""
    return " ".join(args) + "\n"


def _echo_main(args: list[str]) -> int:
    sys.stdout.write(echo(args))
    return 0


def _add_main(args: list[str]) -> int:
    if args == ["?"]:
        printf("Usage: add number1 number2\n")
        return 0
    if len(args) != 2:
        printf("You can only add two numbers\n")
        return 0
    a, b = atoi(args[0]), atoi(args[1])
    printf("The sum of %d and %d is %d\n", a, b, add(a, b))
    return 0


def _fact_main(args: list[str]) -> int:
    if args == ["?"]:
        printf("Usage: calc factorial of input number.\n")
        return 0
    if len(args) != 1:
        printf("You can only enter one number \n")
        return 0
    num = atoi(args[0])
    try:
        result = factorial(num)
    except ValueError:
        printf("invalid number \n")
        return 0
    printf("The factorial of %d is %d\n", num, result)
    return 0


def _sleep_main(args: list[str]) -> int:
    if args == ["?"]:
        printf("Usage: sleep number\n")
        return 0
    if len(args) != 1:
        printf("Invalid command, you can only use a single number\n")
        return 0
    ticks = atoi(args[0])
    printf("Starting sleep for %d\n", ticks)
    sys.stdout.flush()
    time.sleep(ticks / TICKS_PER_SECOND)
    printf("Finished sleeping...\n")
    return 0


def _kill_main(args: list[str]) -> int:
    if not args:
        fprintf(sys.stderr, "usage: kill pid...\n")
        return 1
    for arg in args:
        pid = atoi(arg)
        if pid <= 0:
            continue
        try:
            os.kill(pid, signal.SIGTERM)
        except OSError:
            pass
    return 0


def _datetime_main(args: list[str]) -> int:
    if args == ["?"]:
        printf("Usage: show date and time.\n")
        return 0
    if args:
        printf("invalid input\n")
        return 0
    printf("Current datetime: %s\n", RtcDate.now().format())
    return 0


def _getppid_main(args: list[str]) -> int:
    if args == ["?"]:
        printf("Usage: show parent pid.\n")
        return 0
    if args:
        printf("invalid input\n")
        return 0
    printf("Parent PID: %d\n", os.getppid())
    return 0


def _rand_main(args: list[str]) -> int:
    if args == ["?"]:
        printf("Usage:generate random number.\n")
        return 0
    if args:
        printf("invalid input\n")
        return 0
    printf("Random number: %d\n", ParkMillerRandom(time.time_ns()).next())
    return 0


_COMMANDS: dict[str, Callable[[list[str]], int]] = {
    "echo": _echo_main,
    "add": _add_main,
    "fact": _fact_main,
    "sleep": _sleep_main,
    "kill": _kill_main,
    "datetime": _datetime_main,
    "getppid": _getppid_main,
    "rand": _rand_main,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command named by the first argument with the rest."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] not in _COMMANDS:
        fprintf(sys.stderr, "usage: tools {%s} [args ...]\n",
                "|".join(sorted(_COMMANDS)))
        return 1
    return _COMMANDS[args[0]](args[1:])