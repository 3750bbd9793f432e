"""File utilities: cat, wc, ls, find, cp, mv, ln, mkdir, rm and touch."""

from __future__ import annotations

import contextlib
import enum
import os
import stat
import sys
from typing import BinaryIO, Callable, Iterator, Sequence, TextIO

from xvutils.fmt import fprintf, printf

DIRSIZ = 14
PATH_BUFFER = 512
CAT_CHUNK = 512
WC_CHUNK = 512
CP_CHUNK = 500

# Bytes that end a word for wc; NUL counts as a separator too.
_WC_TABLE = bytes.maketrans(b"\r\t\n\v\0", b"     ")


class FileType(enum.IntEnum):
    """Kind of file as reported by ls."""

    DIR = 1
    FILE = 2
    DEVICE = 3


class _UnlinkError(OSError):
    """The source of a move could not be removed after linking."""


def _file_type(mode: int) -> FileType:
    if stat.S_ISDIR(mode):
        return FileType.DIR
    if stat.S_ISREG(mode):
        return FileType.FILE
    return FileType.DEVICE


def _basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def _copy_stream(src: BinaryIO, out: BinaryIO) -> None:
    while chunk := src.read(CAT_CHUNK):
        out.write(chunk)


def cat(paths: Sequence[str], out: BinaryIO) -> None:
    """Copy each file in ``paths`` to ``out``; standard input when empty."""
    if not paths:
        _copy_stream(sys.stdin.buffer, out)
        return
    for path in paths:
        with open(path, "rb") as handle:
            _copy_stream(handle, out)


def wc_counts(data: bytes) -> tuple[int, int, int]:
    """Return ``(lines, words, characters)`` for ``data``."""
    lines = data.count(b"\n")
    words = sum(1 for word in data.translate(_WC_TABLE).split(b" ") if word)
    return lines, words, len(data)


def _read_all(handle: BinaryIO) -> bytes:
    return b"".join(iter(lambda: handle.read(WC_CHUNK), b""))


def wc(paths: Sequence[str], out: TextIO) -> None:
    """Write line, word and character counts of each file to ``out``."""
    if not paths:
        lines, words, chars = wc_counts(_read_all(sys.stdin.buffer))
        fprintf(out, "%d %d %d %s\n", lines, words, chars, "")
        return
    for path in paths:
        with open(path, "rb") as handle:
            data = _read_all(handle)
        lines, words, chars = wc_counts(data)
        fprintf(out, "%d %d %d %s\n", lines, words, chars, path)


def fmtname(path: str) -> str:
    """Return the last path component, blank-padded to the directory name size."""
    name = _basename(path)
    if len(name) >= DIRSIZ:
        return name
    return name.ljust(DIRSIZ)


def _dir_entries(path: str) -> list[str]:
    return [".", ".."] + sorted(os.listdir(path))


def ls(path: str, out: TextIO) -> None:
    """List ``path`` to ``out``: name, type, inode number and size per entry."""
    st = os.stat(path)
    kind = _file_type(st.st_mode)
    if kind is not FileType.DIR:
        fprintf(out, "%s %d %d %d\n", fmtname(path), int(kind), st.st_ino, st.st_size)
        return
    if len(path) + 1 + DIRSIZ + 1 > PATH_BUFFER:
        fprintf(out, "ls: path too long\n")
        return
    for name in _dir_entries(path):
        full = f"{path}/{name}"
        try:
            est = os.stat(full)
        except OSError:
            fprintf(out, "ls: cannot stat %s\n", full)
            continue
        fprintf(out, "%s %d %d %d\n", fmtname(full),
                int(_file_type(est.st_mode)), est.st_ino, est.st_size)


def find(path: str, target: str) -> Iterator[str]:
    """Yield every non-directory below ``path`` whose name equals ``target``."""
    st = os.stat(path)
    if not stat.S_ISDIR(st.st_mode):
        if _basename(path) == target:
            yield path
        return
    if len(path) + 1 + DIRSIZ + 1 > PATH_BUFFER:
        printf("find: path too long\n")
        return
    for name in sorted(os.listdir(path)):
        full = f"{path}/{name}"
        try:
            os.stat(full)
        except OSError:
            printf("find: cannot stat %s\n", full)
            continue
        try:
            yield from find(full, target)
        except OSError:
            printf("find: cannot open %s\n", full)


def cp(src: str, dst: str) -> int:
    """Overwrite the existing ``dst`` from its start with ``src``; return bytes copied.

    ``dst`` is neither created nor truncated.
    """
    total = 0
    with open(src, "rb") as fin, open(dst, "r+b") as fout:
        while chunk := fin.read(CP_CHUNK):
            fout.write(chunk)
            total += len(chunk)
    return total


def mv(src: str, dst: str) -> None:
    """Link ``src`` as ``dst`` and then remove ``src``."""
    os.link(src, dst)
    try:
        os.unlink(src)
    except OSError as exc:
        with contextlib.suppress(OSError):
            os.unlink(dst)
        raise _UnlinkError(exc.errno, exc.strerror, src) from exc


def ln(old: str, new: str) -> None:
    """Create ``new`` as a hard link to ``old``."""
    os.link(old, new)


def mkdir(paths: Sequence[str]) -> None:
    """Create each directory in turn, stopping at the first failure."""
    for path in paths:
        os.mkdir(path)


def rm(paths: Sequence[str]) -> None:
    """Remove each file or empty directory in turn, stopping at the first failure."""
    for path in paths:
        if os.path.isdir(path) and not os.path.islink(path):
            os.rmdir(path)
        else:
            os.unlink(path)


def touch(path: str) -> None:
    """Create ``path`` if it does not exist; existing content is kept."""
    fd = os.open(path, os.O_CREAT | os.O_RDWR, 0o666)
    os.close(fd)


def _cat_main(args: list[str]) -> int:
    sys.stdout.flush()
    out = sys.stdout.buffer
    try:
        cat(args, out)
    except OSError as exc:
        out.flush()
        fprintf(sys.stderr, "cat: cannot open %s\n", exc.filename)
        return 1
    out.flush()
    return 0


def _wc_main(args: list[str]) -> int:
    try:
        wc(args, sys.stdout)
    except OSError as exc:
        printf("wc: cannot open %s\n", exc.filename)
        return 1
    return 0


def _ls_main(args: list[str]) -> int:
    for path in args or ["."]:
        try:
            ls(path, sys.stdout)
        except OSError:
            fprintf(sys.stderr, "ls: cannot open %s\n", path)
    return 0


def _find_main(args: list[str]) -> int:
    if args == ["?"]:
        printf("Usage: find <directory> <filename>\n")
        return 0
    if len(args) != 2:
        printf("invalid input\n")
        return 1
    try:
        for found in find(args[0], args[1]):
            printf("%s\n", found)
    except OSError:
        printf("find: cannot open %s\n", args[0])
    return 0


def _cp_main(args: list[str]) -> int:
    if args == ["?"]:
        printf("Usage: copy data from fd1 to fd2. \n")
        return 0
    if len(args) != 2:
        printf("You need to have 3 paramters: cp fd1 fd2 \n")
        return 0
    src, dst = args
    try:
        cp(src, dst)
    except OSError as exc:
        if exc.filename == src:
            printf("file descriptor 1 is invalid \n")
            return 0
        printf("file descriptor 2 is invalid \n")
    printf("successful copy,content of fd1 copied to fd2 \n")
    return 0


def _mv_main(args: list[str]) -> int:
    if args == ["?"]:
        printf("Usage: mv source destination\n")
        return 0
    if len(args) != 2:
        printf("unvalid paramaters \n")
        return 0
    src, dst = args
    try:
        mv(src, dst)
    except _UnlinkError:
        printf("Error: Cannot unlink %s. Removing destination.\n", src)
        return 0
    except OSError:
        printf("Error: Cannot link %s to %s. Source may not exist or destination "
               "already exists.\n", src, dst)
        return 0
    printf("Moved/renamed '%s' to '%s'\n", src, dst)
    return 0


def _ln_main(args: list[str]) -> int:
    if len(args) != 2:
        fprintf(sys.stderr, "Usage: ln old new\n")
        return 1
    try:
        ln(args[0], args[1])
    except OSError:
        fprintf(sys.stderr, "link %s %s: failed\n", args[0], args[1])
    return 0


def _mkdir_main(args: list[str]) -> int:
    if not args:
        fprintf(sys.stderr, "Usage: mkdir files...\n")
        return 1
    try:
        mkdir(args)
    except OSError as exc:
        fprintf(sys.stderr, "mkdir: %s failed to create\n", exc.filename)
    return 0


def _rm_main(args: list[str]) -> int:
    if not args:
        fprintf(sys.stderr, "Usage: rm files...\n")
        return 1
    try:
        rm(args)
    except OSError as exc:
        fprintf(sys.stderr, "rm: %s failed to delete\n", exc.filename)
    return 0


def _touch_main(args: list[str]) -> int:
    if args == ["?"]:
        printf("Usage: create file \n")
        return 0
    if len(args) != 1:
        printf("You need to have 2 paramters: cp fd  \n")
        return 1
    try:
        touch(args[0])
    except OSError:
        printf("touch: file %s cannot be created\n", args[0])
        return 1
    printf("file opened successful \n")
    return 0


_COMMANDS: dict[str, Callable[[list[str]], int]] = {
    "cat": _cat_main,
    "wc": _wc_main,
    "ls": _ls_main,
    "find": _find_main,
    "cp": _cp_main,
    "mv": _mv_main,
    "ln": _ln_main,
    "mkdir": _mkdir_main,
    "rm": _rm_main,
    "touch": _touch_main,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run the file command named by the first argument with the rest."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] not in _COMMANDS:
        fprintf(sys.stderr, "usage: fileutils {%s} [args ...]\n",
                "|".join(sorted(_COMMANDS)))
        return 1
    return _COMMANDS[args[0]](args[1:])