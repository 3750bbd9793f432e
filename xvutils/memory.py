"""Sv39 paging helpers, the machine's memory map and system parameters."""

from __future__ import annotations

import enum

_MASK64 = (1 << 64) - 1

# System parameters.
NPROC = 64
NCPU = 8
NOFILE = 16
NFILE = 100
NINODE = 50
NDEV = 10
ROOTDEV = 1
MAXARG = 32
MAXOPBLOCKS = 10
LOGSIZE = MAXOPBLOCKS * 3
NBUF = MAXOPBLOCKS * 3
FSSIZE = 2000
MAXPATH = 128
USERSTACK = 1

# Control and status register bits.
MSTATUS_MPP_MASK = 3 << 11
MSTATUS_MPP_M = 3 << 11
MSTATUS_MPP_S = 1 << 11
MSTATUS_MPP_U = 0 << 11
MSTATUS_MIE = 1 << 3
SSTATUS_SPP = 1 << 8
SSTATUS_SPIE = 1 << 5
SSTATUS_UPIE = 1 << 4
SSTATUS_SIE = 1 << 1
SSTATUS_UIE = 1 << 0
SIE_SEIE = 1 << 9
SIE_STIE = 1 << 5
SIE_SSIE = 1 << 1
MIE_STIE = 1 << 5
SATP_SV39 = 8 << 60

# Paging.
PGSIZE = 4096
PGSHIFT = 12
PXMASK = 0x1FF
MAXVA = 1 << (9 + 9 + 9 + 12 - 1)

# Physical memory layout.
UART0 = 0x10000000
UART0_IRQ = 10
VIRTIO0 = 0x10001000
VIRTIO0_IRQ = 1
PLIC = 0x0C000000
PLIC_PRIORITY = PLIC + 0x0
PLIC_PENDING = PLIC + 0x1000
KERNBASE = 0x80000000
PHYSTOP = KERNBASE + 128 * 1024 * 1024
TRAMPOLINE = MAXVA - PGSIZE
TRAPFRAME = TRAMPOLINE - PGSIZE


class PteFlag(enum.IntFlag):
    """Page-table entry permission bits."""

    V = 1 << 0
    R = 1 << 1
    W = 1 << 2
    X = 1 << 3
    U = 1 << 4


def pgroundup(size: int) -> int:
    """Round ``size`` up to a page boundary."""
    return (size + PGSIZE - 1) & ~(PGSIZE - 1)


def pgrounddown(addr: int) -> int:
    """Round ``addr`` down to a page boundary."""
    return addr & ~(PGSIZE - 1)


def pa2pte(pa: int) -> int:
    """Shift a physical address into page-table-entry position."""
    return ((pa & _MASK64) >> 12) << 10


def pte2pa(pte: int) -> int:
    """Extract the physical address held by a page-table entry."""
    return (pte >> 10) << 12


def pte_flags(pte: int) -> PteFlag:
    """Return the low ten flag bits of a page-table entry."""
    return PteFlag(pte & 0x3FF)


def px(level: int, va: int) -> int:
    """Return the 9-bit page-table index of ``va`` at ``level`` (0 to 2)."""
    return ((va & _MASK64) >> (PGSHIFT + 9 * level)) & PXMASK


def make_satp(pagetable: int) -> int:
    """Build a satp value selecting Sv39 with the given root page table."""
    return SATP_SV39 | ((pagetable & _MASK64) >> 12)


def kstack(index: int) -> int:
    """Virtual address of kernel stack ``index``, separated by guard pages."""
    return TRAMPOLINE - (index + 1) * 2 * PGSIZE


def plic_senable(hart: int) -> int:
    """Address of the supervisor interrupt-enable bits for ``hart``."""
    return PLIC + 0x2080 + hart * 0x100


def plic_spriority(hart: int) -> int:
    """Address of the supervisor priority threshold for ``hart``."""
    return PLIC + 0x201000 + hart * 0x2000


def plic_sclaim(hart: int) -> int:
    """Address of the supervisor claim register for ``hart``."""
    return PLIC + 0x201004 + hart * 0x2000