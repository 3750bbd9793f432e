"""Minimal printf-style formatting understanding %d, %u, %x, %p, %s and %%."""

from __future__ import annotations

import sys
from typing import Any, Iterator, TextIO

_DIGITS = "0123456789ABCDEF"
_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _to_int32(value: int) -> int:
    value &= _MASK32
    return value - (1 << 32) if value >= (1 << 31) else value


def _format_int(value: int, base: int, signed: bool) -> str:
    xx = _to_int32(int(value))
    negative = signed and xx < 0
    x = -xx if negative else xx & _MASK32
    out = []
    while True:
        out.append(_DIGITS[x % base])
        x //= base
        if x == 0:
            break
    if negative:
        out.append("-")
    return "".join(reversed(out))


def _format_ptr(value: int) -> str:
    return f"0x{int(value) & _MASK64:016X}"


def _format_str(value: Any) -> str:
    if value is None:
        return "(null)"
    return str(value).split("\0", 1)[0]


def _next_arg(args: Iterator[Any]) -> Any:
    try:
        return next(args)
    except StopIteration:
        raise ValueError("not enough arguments for format string") from None


# (prefix, base, signed) for each integer conversion, longest first.
_INT_CONVERSIONS = (
    ("lld", 10, True),
    ("llu", 10, False),
    ("llx", 16, False),
    ("ld", 10, True),
    ("lu", 10, False),
    ("lx", 16, False),
    ("d", 10, True),
    ("u", 10, False),
    ("x", 16, False),
)


def format_message(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt`` and return the resulting text.

    Integer conversions use 32-bit arithmetic, hex digits are upper case and
    an unknown conversion is echoed as ``%`` followed by the character.
    A lone ``%`` at the end of the format produces nothing.
    """
    values = iter(args)
    out: list[str] = []
    i = 0
    n = len(fmt)
    while i < n:
        ch = fmt[i]
        if ch != "%":
            out.append(ch)
            i += 1
            continue
        i += 1
        if i >= n:
            break
        rest = fmt[i:i + 3]
        for spec, base, signed in _INT_CONVERSIONS:
            if rest.startswith(spec):
                out.append(_format_int(_next_arg(values), base, signed))
                i += len(spec)
                break
        else:
            c0 = fmt[i]
            if c0 == "p":
                out.append(_format_ptr(_next_arg(values)))
            elif c0 == "s":
                out.append(_format_str(_next_arg(values)))
            elif c0 == "%":
                out.append("%")
            else:
                out.append("%" + c0)
            i += 1
    return "".join(out)


def fprintf(stream: TextIO, fmt: str, *args: Any) -> None:
    """Write the formatted message to ``stream``."""
    stream.write(format_message(fmt, *args))


def printf(fmt: str, *args: Any) -> None:
    """Write the formatted message to standard output."""
    fprintf(sys.stdout, fmt, *args)