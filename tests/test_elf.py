import pytest

from xvutils.elf import (
    ELF_MAGIC,
    ELF_PROG_LOAD,
    ElfFormatError,
    ElfHeader,
    ProgFlag,
    ProgramHeader,
    program_headers,
)


def _image(phdrs):
    header = ElfHeader(entry=0x1000, phoff=ElfHeader.FORMAT.size, phnum=len(phdrs))
    return header.pack() + b"".join(p.pack() for p in phdrs)


def test_header_starts_with_magic_bytes():
    assert ElfHeader().pack()[:4] == b"\x7fELF"


def test_record_sizes_match_elf64():
    assert len(ElfHeader().pack()) == 64
    assert len(ProgramHeader().pack()) == 56


def test_header_round_trip():
    header = ElfHeader(elf=b"\x02\x01\x01" + bytes(9), type=2, machine=243,
                       version=1, entry=0x1234, phoff=64, phnum=3, shstrndx=7)
    assert ElfHeader.parse(header.pack()) == header


def test_parse_rejects_bad_magic():
    data = bytearray(ElfHeader().pack())
    data[0] = 0
    with pytest.raises(ElfFormatError):
        ElfHeader.parse(bytes(data))


def test_parse_rejects_short_data():
    with pytest.raises(ElfFormatError):
        ElfHeader.parse(ElfHeader().pack()[:-1])


def test_pack_rejects_wrong_identification_length():
    with pytest.raises(ValueError):
        ElfHeader(elf=b"abc").pack()


def test_program_header_round_trip():
    ph = ProgramHeader(type=ELF_PROG_LOAD, flags=ProgFlag.READ | ProgFlag.EXEC,
                       off=0x1000, vaddr=0x0, filesz=0x200, memsz=0x300, align=0x1000)
    assert ProgramHeader.parse(ph.pack()) == ph


def test_is_loadable():
    assert ProgramHeader(type=ELF_PROG_LOAD).is_loadable()
    assert not ProgramHeader(type=ELF_PROG_LOAD + 1).is_loadable()


def test_program_headers_from_image():
    phdrs = [
        ProgramHeader(type=ELF_PROG_LOAD, vaddr=0, filesz=10, memsz=20),
        ProgramHeader(type=4, vaddr=0x2000),
    ]
    assert program_headers(_image(phdrs)) == phdrs


def test_program_headers_truncated():
    data = _image([ProgramHeader(type=ELF_PROG_LOAD)])
    with pytest.raises(ElfFormatError):
        program_headers(data[:-8])


def test_parsed_magic_value():
    assert ElfHeader.parse(ElfHeader().pack()).magic == ELF_MAGIC