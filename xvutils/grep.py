"""Line filter supporting the ^ . * $ regular-expression operators."""

from __future__ import annotations

import sys
from typing import Iterator, Sequence, TextIO

from xvutils.fmt import fprintf, printf

BUFFER_SIZE = 1024


def _matchhere(re: str, ri: int, text: str, ti: int) -> bool:
    while True:
        if ri == len(re):
            return True
        if ri + 1 < len(re) and re[ri + 1] == "*":
            return _matchstar(re[ri], re, ri + 2, text, ti)
        if re[ri] == "$" and ri + 1 == len(re):
            return ti == len(text)
        if ti < len(text) and (re[ri] == "." or re[ri] == text[ti]):
            ri += 1
            ti += 1
            continue
        return False


def _matchstar(c: str, re: str, ri: int, text: str, ti: int) -> bool:
    while True:
        if _matchhere(re, ri, text, ti):
            return True
        if ti >= len(text):
            return False
        ch = text[ti]
        ti += 1
        if not (ch == c or c == "."):
            return False


def match(pattern: str, text: str) -> bool:
    """Return True if ``pattern`` matches anywhere in ``text``."""
    if pattern.startswith("^"):
        return _matchhere(pattern, 1, text, 0)
    return any(_matchhere(pattern, 0, text, ti) for ti in range(len(text) + 1))


def grep(pattern: str, stream: TextIO) -> Iterator[str]:
    """Yield each newline-terminated line of ``stream`` that matches.

    Input is read through a fixed buffer; a final line without a newline is
    not reported, and reading stops once a line fills the whole buffer.
    """
    pending = ""
    while True:
        room = BUFFER_SIZE - 1 - len(pending)
        if room <= 0:
            break
        chunk = stream.read(room)
        if not chunk:
            break
        pending += chunk
        *lines, pending = pending.split("\n")
        for line in lines:
            if match(pattern, line):
                yield line + "\n"


def main(argv: Sequence[str] | None = None) -> int:
    """Run the grep command; ``argv`` excludes the program name."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        fprintf(sys.stderr, "usage: grep pattern [file ...]\n")
        return 1
    pattern, paths = args[0], args[1:]
    if not paths:
        sys.stdout.writelines(grep(pattern, sys.stdin))
        return 0
    for path in paths:
        try:
            handle = open(path, encoding="latin-1", newline="")
        except OSError:
            printf("grep: cannot open %s\n", path)
            return 1
        with handle:
            sys.stdout.writelines(grep(pattern, handle))
    return 0