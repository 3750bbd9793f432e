"""Virtio MMIO register map, virtqueue records and block requests."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar

# MMIO control registers.
VIRTIO_MMIO_MAGIC_VALUE = 0x000
VIRTIO_MMIO_VERSION = 0x004
VIRTIO_MMIO_DEVICE_ID = 0x008
VIRTIO_MMIO_VENDOR_ID = 0x00C
VIRTIO_MMIO_DEVICE_FEATURES = 0x010
VIRTIO_MMIO_DRIVER_FEATURES = 0x020
VIRTIO_MMIO_QUEUE_SEL = 0x030
VIRTIO_MMIO_QUEUE_NUM_MAX = 0x034
VIRTIO_MMIO_QUEUE_NUM = 0x038
VIRTIO_MMIO_QUEUE_READY = 0x044
VIRTIO_MMIO_QUEUE_NOTIFY = 0x050
VIRTIO_MMIO_INTERRUPT_STATUS = 0x060
VIRTIO_MMIO_INTERRUPT_ACK = 0x064
VIRTIO_MMIO_STATUS = 0x070
VIRTIO_MMIO_QUEUE_DESC_LOW = 0x080
VIRTIO_MMIO_QUEUE_DESC_HIGH = 0x084
VIRTIO_MMIO_DRIVER_DESC_LOW = 0x090
VIRTIO_MMIO_DRIVER_DESC_HIGH = 0x094
VIRTIO_MMIO_DEVICE_DESC_LOW = 0x0A0
VIRTIO_MMIO_DEVICE_DESC_HIGH = 0x0A4

# Status register bits.
VIRTIO_CONFIG_S_ACKNOWLEDGE = 1
VIRTIO_CONFIG_S_DRIVER = 2
VIRTIO_CONFIG_S_DRIVER_OK = 4
VIRTIO_CONFIG_S_FEATURES_OK = 8

# Device feature bits.
VIRTIO_BLK_F_RO = 5
VIRTIO_BLK_F_SCSI = 7
VIRTIO_BLK_F_CONFIG_WCE = 11
VIRTIO_BLK_F_MQ = 12
VIRTIO_F_ANY_LAYOUT = 27
VIRTIO_RING_F_INDIRECT_DESC = 28
VIRTIO_RING_F_EVENT_IDX = 29

NUM = 8

VRING_DESC_F_NEXT = 1
VRING_DESC_F_WRITE = 2

VIRTIO_BLK_T_IN = 0
VIRTIO_BLK_T_OUT = 1

SECTOR_SIZE = 512


def _check_size(data: bytes, fmt: struct.Struct, what: str) -> None:
    if len(data) < fmt.size:
        raise ValueError(f"need {fmt.size} bytes for {what}, got {len(data)}")


@dataclass
class VirtqDesc:
    """One descriptor of the descriptor table."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct("<QIHH")

    addr: int = 0
    len: int = 0
    flags: int = 0
    next: int = 0

    def pack(self) -> bytes:
        return self.FORMAT.pack(self.addr, self.len, self.flags, self.next)

    @classmethod
    def unpack(cls, data: bytes) -> "VirtqDesc":
        _check_size(data, cls.FORMAT, "a descriptor")
        return cls(*cls.FORMAT.unpack_from(data))


def _zero_ring() -> list[int]:
    return [0] * NUM


@dataclass
class VirtqAvail:
    """The available ring written by the driver."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct(f"<HH{NUM}HH")

    flags: int = 0
    idx: int = 0
    ring: list[int] = field(default_factory=_zero_ring)
    unused: int = 0

    def pack(self) -> bytes:
        if len(self.ring) != NUM:
            raise ValueError(f"ring must hold {NUM} entries")
        return self.FORMAT.pack(self.flags, self.idx, *self.ring, self.unused)

    @classmethod
    def unpack(cls, data: bytes) -> "VirtqAvail":
        _check_size(data, cls.FORMAT, "an available ring")
        values = cls.FORMAT.unpack_from(data)
        return cls(values[0], values[1], list(values[2:2 + NUM]), values[2 + NUM])


@dataclass
class VirtqUsedElem:
    """A completed descriptor chain reported by the device."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct("<II")

    id: int = 0
    len: int = 0

    def pack(self) -> bytes:
        return self.FORMAT.pack(self.id, self.len)

    @classmethod
    def unpack(cls, data: bytes) -> "VirtqUsedElem":
        _check_size(data, cls.FORMAT, "a used element")
        return cls(*cls.FORMAT.unpack_from(data))


def _zero_used_ring() -> list[VirtqUsedElem]:
    return [VirtqUsedElem() for _ in range(NUM)]


@dataclass
class VirtqUsed:
    """The used ring written by the device."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct("<HH" + "II" * NUM)

    flags: int = 0
    idx: int = 0
    ring: list[VirtqUsedElem] = field(default_factory=_zero_used_ring)

    def pack(self) -> bytes:
        if len(self.ring) != NUM:
            raise ValueError(f"ring must hold {NUM} entries")
        pairs = [v for elem in self.ring for v in (elem.id, elem.len)]
        return self.FORMAT.pack(self.flags, self.idx, *pairs)

    @classmethod
    def unpack(cls, data: bytes) -> "VirtqUsed":
        _check_size(data, cls.FORMAT, "a used ring")
        values = cls.FORMAT.unpack_from(data)
        pairs = values[2:]
        ring = [VirtqUsedElem(id_, len_) for id_, len_ in zip(pairs[::2], pairs[1::2])]
        return cls(values[0], values[1], ring)


@dataclass
class BlockRequest:
    """The first descriptor of a block-device request."""

    FORMAT: ClassVar[struct.Struct] = struct.Struct("<IIQ")

    type: int = VIRTIO_BLK_T_IN
    reserved: int = 0
    sector: int = 0

    def pack(self) -> bytes:
        return self.FORMAT.pack(self.type, self.reserved, self.sector)

    @classmethod
    def unpack(cls, data: bytes) -> "BlockRequest":
        _check_size(data, cls.FORMAT, "a block request")
        return cls(*cls.FORMAT.unpack_from(data))


def block_sector(blockno: int, block_size: int) -> int:
    """Return the first 512-byte disk sector of file-system block ``blockno``."""
    if block_size <= 0 or block_size % SECTOR_SIZE:
        raise ValueError("block size must be a positive multiple of 512")
    if blockno < 0:
        raise ValueError("block number must be non-negative")
    return blockno * (block_size // SECTOR_SIZE)