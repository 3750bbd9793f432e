"""Process-table listing."""

from __future__ import annotations

import enum
import os
import sys
from dataclasses import dataclass
from typing import Iterable, Sequence

from xvutils.fmt import format_message, printf

NPROC = 64
NAME_LEN = 16

_STATE_NAMES = {
    0: "unused",
    1: "used",
    2: "sleep ",
    3: "runble(ready)",
    4: "running ",
    5: "zombie",
}


class ProcState(enum.IntEnum):
    """Scheduling state of a process."""

    UNUSED = 0
    USED = 1
    SLEEPING = 2
    RUNNABLE = 3
    RUNNING = 4
    ZOMBIE = 5


@dataclass
class ProcessInfo:
    """One row of the process table."""

    pid: int
    ppid: int
    state: int
    name: str
    sz: int


def state_name(state: int) -> str:
    """Return the display name of ``state``; unknown states raise ValueError."""
    return _STATE_NAMES[int(ProcState(state))]


def format_process(info: ProcessInfo) -> str:
    """Render one process as a line of the table."""
    return format_message(
        "PID:%d    PPID:%d      NAME:%s       SIZE:%ld    STATE:%s\n",
        info.pid, info.ppid, info.name, info.sz, state_name(info.state),
    )


def format_table(processes: Iterable[ProcessInfo]) -> str:
    """Render every process, one per line."""
    return "".join(format_process(p) for p in processes)


_LETTER_STATES = {
    "R": ProcState.RUNNING,
    "S": ProcState.SLEEPING,
    "D": ProcState.SLEEPING,
    "I": ProcState.SLEEPING,
    "Z": ProcState.ZOMBIE,
}


def _read_proc_entry(pid: str) -> ProcessInfo | None:
    try:
        with open(f"/proc/{pid}/stat", encoding="utf-8", errors="replace") as handle:
            content = handle.read()
        head, _, tail = content.rpartition(")")
        name = head.split("(", 1)[1]
        fields = tail.split()
        state = _LETTER_STATES.get(fields[0], ProcState.USED)
        return ProcessInfo(int(pid), int(fields[1]), state,
                           name[:NAME_LEN - 1], int(fields[20]))
    except (OSError, ValueError, IndexError):
        return None


def _process_table(limit: int) -> list[ProcessInfo]:
    try:
        entries = [name for name in os.listdir("/proc") if name.isdigit()]
    except OSError:
        return []
    table = []
    for pid in sorted(entries, key=int):
        if len(table) >= limit:
            break
        info = _read_proc_entry(pid)
        if info is not None:
            table.append(info)
    return table


def main(argv: Sequence[str] | None = None) -> int:
    """Print the process table; ``argv`` excludes the program name."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args == ["?"]:
        printf("Usage: show proccess table.\n")
        return 0
    if args:
        printf("invalid input\n")
        return 0
    sys.stdout.write(format_table(_process_table(NPROC)))
    return 0