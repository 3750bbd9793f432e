"""First-fit free-list allocator over a bounded arena."""

from __future__ import annotations

HEADER_SIZE = 16
MIN_CORE_UNITS = 4096
_BASE = -1


class OutOfMemoryError(MemoryError):
    """Raised when the arena cannot supply the requested space."""


class Allocator:
    """Circular free-list allocator; addresses are byte offsets in the arena.

    Space is taken from the arena in chunks of at least 4096 header units,
    blocks are carved from the end of a free block, and freed blocks are
    coalesced with their neighbours.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._capacity_units = capacity // HEADER_SIZE
        self._brk = 0
        self._size: dict[int, int] = {}
        self._next: dict[int, int] = {}
        self._freep: int | None = None
        self._allocated: set[int] = set()

    def malloc(self, nbytes: int) -> int:
        """Allocate ``nbytes`` and return the address of the usable space."""
        if nbytes < 0:
            raise ValueError("size must be non-negative")
        nunits = (nbytes + HEADER_SIZE - 1) // HEADER_SIZE + 1
        if self._freep is None:
            self._next[_BASE] = _BASE
            self._size[_BASE] = 0
            self._freep = _BASE
        prevp = self._freep
        p = self._next[prevp]
        while True:
            if self._size[p] >= nunits:
                if self._size[p] == nunits:
                    self._next[prevp] = self._next[p]
                    del self._next[p]
                else:
                    self._size[p] -= nunits
                    p += self._size[p]
                    self._size[p] = nunits
                self._freep = prevp
                self._allocated.add(p)
                return (p + 1) * HEADER_SIZE
            if p == self._freep:
                p = self._morecore(nunits)
            prevp, p = p, self._next[p]

    def free(self, addr: int) -> None:
        """Return the block at ``addr`` to the free list."""
        bp = addr // HEADER_SIZE - 1
        if addr % HEADER_SIZE or bp not in self._allocated:
            raise ValueError(f"address {addr} was not allocated")
        self._allocated.discard(bp)
        self._release(bp)

    def free_blocks(self) -> list[tuple[int, int]]:
        """Return ``(address, size_in_bytes)`` of each free block, in address order."""
        if self._freep is None:
            return []
        blocks = []
        p = self._next[_BASE]
        while p != _BASE:
            blocks.append((p * HEADER_SIZE, self._size[p] * HEADER_SIZE))
            p = self._next[p]
        return blocks

    def _morecore(self, nunits: int) -> int:
        nunits = max(nunits, MIN_CORE_UNITS)
        if self._brk + nunits > self._capacity_units:
            raise OutOfMemoryError(f"cannot grow arena by {nunits * HEADER_SIZE} bytes")
        hp = self._brk
        self._brk += nunits
        self._size[hp] = nunits
        self._release(hp)
        assert self._freep is not None
        return self._freep

    def _release(self, bp: int) -> None:
        assert self._freep is not None
        size, nxt = self._size, self._next
        p = self._freep
        while not (p < bp < nxt[p]):
            if p >= nxt[p] and (bp > p or bp < nxt[p]):
                break
            p = nxt[p]
        after = nxt[p]
        if bp + size[bp] == after:
            size[bp] += size[after]
            nxt[bp] = nxt[after]
            del size[after], nxt[after]
        else:
            nxt[bp] = after
        if p + size[p] == bp:
            size[p] += size[bp]
            nxt[p] = nxt[bp]
            del size[bp], nxt[bp]
        else:
            nxt[p] = bp
        self._freep = p