# xvutils

Small Unix-style tools and building blocks in plain Python, with no
third-party dependencies.

## Modules

| Module               | Contents                                                                          |
|----------------------|-----------------------------------------------------------------------------------|
| `xvutils.fmt`        | `format_message`, `fprintf`, `printf`: `%d %u %x %p %s %%` and the `l`/`ll` forms, 32-bit integer arithmetic, upper-case hex |
| `xvutils.ulib`       | `atoi`, `strcmp`, `memcmp` and the line reader `gets`                             |
| `xvutils.umalloc`    | `Allocator`, a first-fit circular free-list allocator over a bounded arena, and `OutOfMemoryError` |
| `xvutils.grep`       | `match` for patterns with `^ . * $`, the line filter `grep`, and a `main` command |
| `xvutils.memory`     | System parameters, the physical memory map, `PteFlag`, page rounding and Sv39 page-table helpers |
| `xvutils.sh`         | `tokens`, `parse_command` and `parse_cd` for a small shell language (`| ; & < > >> ( )`) |
| `xvutils.elf`        | `ElfHeader`, `ProgramHeader` and `program_headers` for reading and writing ELF64 headers |
| `xvutils.virtio`     | MMIO register offsets and packing of `VirtqDesc`, `VirtqAvail`, `VirtqUsed`, `BlockRequest`; `block_sector` |
| `xvutils.fileutils`  | `cat`, `wc`, `wc_counts`, `ls`, `fmtname`, `find`, `cp`, `mv`, `ln`, `mkdir`, `rm`, `touch` |
| `xvutils.tools`      | `echo`, `add`, `factorial`, `do_rand` and `ParkMillerRandom`, `RtcDate`           |
| `xvutils.ps`         | `ProcState`, `ProcessInfo`, `state_name`, `format_process`, `format_table`        |

## Installation

```console
pip install .
```

To run the tests:

```console
pip install ".[test]"
pytest
```

## Commands

Four commands are installed:

```console
xv-grep '^ab*c$' notes.txt
xv-files wc notes.txt
xv-tools add 2 3
xv-ps
```

- `xv-grep pattern [file ...]` prints the matching lines of each file, or of
  standard input when no file is given. Only newline-terminated lines are
  reported.
- `xv-files` takes one of `cat`, `wc`, `ls`, `find`, `cp`, `mv`, `ln`,
  `mkdir`, `rm`, `touch` followed by its arguments.
- `xv-tools` takes one of `echo`, `add`, `fact`, `sleep`, `kill`, `datetime`,
  `getppid`, `rand` followed by its arguments. `sleep` counts in tenths of a
  second, `kill` sends `SIGTERM`, `datetime` prints the current UTC time and
  `rand` seeds the Park–Miller generator from the clock.
- `xv-ps` lists up to 64 processes read from `/proc`.

Most utilities print a usage line when given the single argument `?`.

## Library use

```python
from xvutils.grep import match
from xvutils.sh import parse_command
from xvutils.umalloc import Allocator
from xvutils.memory import pgroundup
from xvutils.fmt import format_message

match("a.c", "xxabcxx")          # True
parse_command("cat < in | wc > out &")
pgroundup(4097)                   # 8192
format_message("%d items at %p", 3, 0x1000)  # '3 items at 0x0000000000001000'

heap = Allocator(64 * 1024)
addr = heap.malloc(100)
heap.free(addr)
heap.free_blocks()                # [(0, 65536)]
```

Errors are raised as exceptions: a malformed command line raises
`ShellSyntaxError`, bytes that are not an ELF image raise `ElfFormatError`,
and an exhausted arena raises `OutOfMemoryError`.

## What it does not do

- `xvutils.sh` only parses command lines into command trees; there is no
  interactive shell and nothing runs the parsed commands.
- `Allocator` hands out offsets into a modelled arena; it does not manage
  real memory.
- `xvutils.memory`, `xvutils.elf` and `xvutils.virtio` describe layouts and
  encode records; there is no loader, page-table walker or disk driver.
- `xv-ps` depends on a `/proc` file system and prints nothing without one.