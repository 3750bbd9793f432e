"""ELF64 executable header and program header records."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from typing import ClassVar

ELF_MAGIC = 0x464C457F
ELF_PROG_LOAD = 1


class ProgFlag(enum.IntFlag):
    """Permission bits of a program header."""

    EXEC = 1
    WRITE = 2
    READ = 4


ELF_PROG_FLAG_EXEC = ProgFlag.EXEC
ELF_PROG_FLAG_WRITE = ProgFlag.WRITE
ELF_PROG_FLAG_READ = ProgFlag.READ


class ElfFormatError(ValueError):
    """Raised when bytes do not hold a valid ELF image."""


@dataclass
class ElfHeader:
    """The file header at the start of an ELF executable."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct("<I12sHHIQQQIHHHHHH")

    magic: int = ELF_MAGIC
    elf: bytes = field(default=bytes(12))
    type: int = 0
    machine: int = 0
    version: int = 0
    entry: int = 0
    phoff: int = 0
    shoff: int = 0
    flags: int = 0
    ehsize: int = 0
    phentsize: int = 0
    phnum: int = 0
    shentsize: int = 0
    shnum: int = 0
    shstrndx: int = 0

    @classmethod
    def parse(cls, data: bytes) -> "ElfHeader":
        """Decode a header from the start of ``data``."""
        if len(data) < cls.FORMAT.size:
            raise ElfFormatError("file too short for an ELF header")
        header = cls(*cls.FORMAT.unpack_from(data))
        if header.magic != ELF_MAGIC:
            raise ElfFormatError(f"bad magic 0x{header.magic:08x}")
        return header

    def pack(self) -> bytes:
        """Encode the header as it appears in the file."""
        if len(self.elf) != 12:
            raise ValueError("elf identification must be 12 bytes")
        return self.FORMAT.pack(
            self.magic, self.elf, self.type, self.machine, self.version,
            self.entry, self.phoff, self.shoff, self.flags, self.ehsize,
            self.phentsize, self.phnum, self.shentsize, self.shnum, self.shstrndx,
        )


@dataclass
class ProgramHeader:
    """A program section header describing one segment."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct("<IIQQQQQQ")

    type: int = 0
    flags: int = 0
    off: int = 0
    vaddr: int = 0
    paddr: int = 0
    filesz: int = 0
    memsz: int = 0
    align: int = 0

    @classmethod
    def parse(cls, data: bytes) -> "ProgramHeader":
        """Decode a program header from the start of ``data``."""
        if len(data) < cls.FORMAT.size:
            raise ElfFormatError("data too short for a program header")
        return cls(*cls.FORMAT.unpack_from(data))

    def pack(self) -> bytes:
        """Encode the program header as it appears in the file."""
        return self.FORMAT.pack(
            self.type, self.flags, self.off, self.vaddr,
            self.paddr, self.filesz, self.memsz, self.align,
        )

    def is_loadable(self) -> bool:
        """True for segments that must be loaded into memory."""
        return self.type == ELF_PROG_LOAD


def program_headers(data: bytes) -> list[ProgramHeader]:
    """Return every program header of the ELF image in ``data``."""
    header = ElfHeader.parse(data)
    size = ProgramHeader.FORMAT.size
    result = []
    for i in range(header.phnum):
        start = header.phoff + i * size
        if start + size > len(data):
            raise ElfFormatError(f"program header {i} lies past end of file")
        result.append(ProgramHeader.parse(data[start:start + size]))
    return result