import pytest

from xvutils.virtio import (
    NUM,
    VIRTIO_BLK_T_OUT,
    VRING_DESC_F_NEXT,
    VRING_DESC_F_WRITE,
    BlockRequest,
    VirtqAvail,
    VirtqDesc,
    VirtqUsed,
    VirtqUsedElem,
    block_sector,
)


def test_descriptor_size_and_round_trip():
    desc = VirtqDesc(addr=0x80001000, len=1024,
                     flags=VRING_DESC_F_NEXT | VRING_DESC_F_WRITE, next=2)
    data = desc.pack()
    assert len(data) == 16
    assert VirtqDesc.unpack(data) == desc


def test_descriptor_little_endian_layout():
    data = VirtqDesc(addr=1, len=0, flags=0, next=0).pack()
    assert data[:8] == b"\x01" + bytes(7)


def test_avail_round_trip():
    avail = VirtqAvail(flags=0, idx=5, ring=list(range(NUM)), unused=0)
    assert VirtqAvail.unpack(avail.pack()) == avail


def test_avail_rejects_wrong_ring_length():
    with pytest.raises(ValueError):
        VirtqAvail(ring=[0, 1]).pack()


def test_used_round_trip():
    ring = [VirtqUsedElem(id=i, len=i * 3) for i in range(NUM)]
    used = VirtqUsed(flags=0, idx=9, ring=ring)
    assert VirtqUsed.unpack(used.pack()) == used


def test_used_element_round_trip():
    elem = VirtqUsedElem(id=4, len=17)
    assert VirtqUsedElem.unpack(elem.pack()) == elem


def test_block_request_round_trip():
    req = BlockRequest(type=VIRTIO_BLK_T_OUT, reserved=0, sector=42)
    data = req.pack()
    assert len(data) == 16
    assert BlockRequest.unpack(data) == req


@pytest.mark.parametrize("cls", [VirtqDesc, VirtqAvail, VirtqUsed, BlockRequest])
def test_unpack_rejects_short_data(cls):
    with pytest.raises(ValueError):
        cls.unpack(b"\x00\x00")


def test_block_sector():
    assert block_sector(7, 512) == 7
    assert block_sector(7, 1024) == 2 * block_sector(7, 512)
    assert block_sector(0, 4096) == 0


@pytest.mark.parametrize("size", [0, 100, -512])
def test_block_sector_rejects_bad_size(size):
    with pytest.raises(ValueError):
        block_sector(1, size)


def test_block_sector_rejects_negative_block():
    with pytest.raises(ValueError):
        block_sector(-1, 1024)