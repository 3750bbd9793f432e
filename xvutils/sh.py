"""Command-line parser for the shell: tokens, command trees and ``cd``."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, NamedTuple, Optional, Union

WHITESPACE = " \t\r\n\v"
SYMBOLS = "<|>&;()"
MAXARGS = 10


class ShellSyntaxError(ValueError):
    """Raised when a command line cannot be parsed."""


class OpenMode(enum.IntFlag):
    """Flags passed to open()."""

    RDONLY = 0x000
    WRONLY = 0x001
    RDWR = 0x002
    CREATE = 0x200
    TRUNC = 0x400


@dataclass
class ExecCmd:
    """Run a program with arguments; ``argv[0]`` names the program."""

    argv: list[str] = field(default_factory=list)


@dataclass
class RedirCmd:
    """Run ``cmd`` with descriptor ``fd`` reopened on ``file``."""

    cmd: "Command"
    file: str
    mode: OpenMode
    fd: int


@dataclass
class PipeCmd:
    """Connect the output of ``left`` to the input of ``right``."""

    left: "Command"
    right: "Command"


@dataclass
class ListCmd:
    """Run ``left`` to completion, then ``right``."""

    left: "Command"
    right: "Command"


@dataclass
class BackCmd:
    """Run ``cmd`` in the background."""

    cmd: "Command"


Command = Union[ExecCmd, RedirCmd, PipeCmd, ListCmd, BackCmd]


class Token(NamedTuple):
    """A lexical token: ``kind`` is the symbol, ``+`` for ``>>`` or ``a`` for a word."""

    kind: str
    text: str


class _Scanner:
    def __init__(self, line: str) -> None:
        self.text = line.split("\0", 1)[0]
        self.pos = 0

    def _skip_space(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.pos += 1

    def peek(self, toks: str) -> bool:
        self._skip_space()
        return self.pos < len(self.text) and self.text[self.pos] in toks

    def next(self) -> Optional[Token]:
        self._skip_space()
        s, start = self.text, self.pos
        if start >= len(s):
            return None
        ch = s[start]
        if ch in "|();&<":
            self.pos += 1
            kind = ch
        elif ch == ">":
            self.pos += 1
            if self.pos < len(s) and s[self.pos] == ">":
                self.pos += 1
                kind = "+"
            else:
                kind = ">"
        else:
            kind = "a"
            while (self.pos < len(s) and s[self.pos] not in WHITESPACE
                   and s[self.pos] not in SYMBOLS):
                self.pos += 1
        token = Token(kind, s[start:self.pos])
        self._skip_space()
        return token

    @property
    def at_end(self) -> bool:
        self._skip_space()
        return self.pos >= len(self.text)

    @property
    def rest(self) -> str:
        return self.text[self.pos:]


def tokens(line: str) -> Iterator[Token]:
    """Yield the tokens of ``line`` in order."""
    scanner = _Scanner(line)
    while (token := scanner.next()) is not None:
        yield token


class _Parser:
    def __init__(self, line: str) -> None:
        self.scan = _Scanner(line)

    def line(self) -> Command:
        cmd = self.pipe()
        while self.scan.peek("&"):
            self.scan.next()
            cmd = BackCmd(cmd)
        if self.scan.peek(";"):
            self.scan.next()
            cmd = ListCmd(cmd, self.line())
        return cmd

    def pipe(self) -> Command:
        cmd = self.exec()
        if self.scan.peek("|"):
            self.scan.next()
            cmd = PipeCmd(cmd, self.pipe())
        return cmd

    def redirs(self, cmd: Command) -> Command:
        while self.scan.peek("<>"):
            op = self.scan.next()
            word = self.scan.next()
            if op is None or word is None or word.kind != "a":
                raise ShellSyntaxError("missing file for redirection")
            if op.kind == "<":
                cmd = RedirCmd(cmd, word.text, OpenMode.RDONLY, 0)
            elif op.kind == ">":
                cmd = RedirCmd(cmd, word.text,
                               OpenMode.WRONLY | OpenMode.CREATE | OpenMode.TRUNC, 1)
            else:
                cmd = RedirCmd(cmd, word.text, OpenMode.WRONLY | OpenMode.CREATE, 1)
        return cmd

    def block(self) -> Command:
        if not self.scan.peek("("):
            raise ShellSyntaxError("parseblock")
        self.scan.next()
        cmd = self.line()
        if not self.scan.peek(")"):
            raise ShellSyntaxError("syntax - missing )")
        self.scan.next()
        return self.redirs(cmd)

    def exec(self) -> Command:
        if self.scan.peek("("):
            return self.block()
        node = ExecCmd()
        ret: Command = self.redirs(node)
        while not self.scan.peek("|)&;"):
            token = self.scan.next()
            if token is None:
                break
            if token.kind != "a":
                raise ShellSyntaxError("syntax")
            node.argv.append(token.text)
            if len(node.argv) >= MAXARGS:
                raise ShellSyntaxError("too many args")
            ret = self.redirs(ret)
        return ret


def parse_command(line: str) -> Command:
    """Parse a whole command line into a command tree."""
    parser = _Parser(line)
    cmd = parser.line()
    if not parser.scan.at_end:
        raise ShellSyntaxError(f"leftovers: {parser.scan.rest}")
    return cmd


def parse_cd(line: str) -> Optional[str]:
    """Return the directory of a ``cd`` line (last character dropped), else None."""
    if not line.startswith("cd "):
        return None
    return line[3:-1]