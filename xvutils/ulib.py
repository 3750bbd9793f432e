"""Small C-style string helpers: atoi, strcmp, memcmp and gets."""

from __future__ import annotations

from typing import TextIO, Union

Text = Union[str, bytes]


def _as_cstring(value: Text) -> bytes:
    data = value.encode("utf-8") if isinstance(value, str) else bytes(value)
    return data.split(b"\0", 1)[0]


def atoi(s: str) -> int:
    """Convert the leading decimal digits of ``s``; no sign or whitespace."""
    n = 0
    for ch in s:
        if not "0" <= ch <= "9":
            break
        n = n * 10 + (ord(ch) - ord("0"))
    return n


def strcmp(p: Text, q: Text) -> int:
    """Compare two NUL-terminated strings byte by byte as unsigned values."""
    a = _as_cstring(p)
    b = _as_cstring(q)
    for x, y in zip(a, b):
        if x != y:
            return x - y
    if len(a) == len(b):
        return 0
    return a[len(b)] if len(a) > len(b) else -b[len(a)]


def memcmp(a: bytes, b: bytes, n: int) -> int:
    """Compare the first ``n`` bytes of ``a`` and ``b`` as unsigned bytes."""
    if n < 0 or n > len(a) or n > len(b):
        raise ValueError("n exceeds buffer length")
    for x, y in zip(a[:n], b[:n]):
        if x != y:
            return x - y
    return 0


def gets(stream: TextIO, max_len: int) -> str:
    """Read at most ``max_len - 1`` characters, stopping after a newline or CR."""
    out: list[str] = []
    while len(out) + 1 < max_len:
        ch = stream.read(1)
        if not ch:
            break
        out.append(ch)
        if ch in "\n\r":
            break
    return "".join(out)