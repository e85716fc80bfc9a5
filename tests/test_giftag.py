import struct

import pytest

from dagfx.giftag import GIFTag, parse_giftag


def _pack(nloop, eop, pre, prim, flg, nreg, regs):
    low = (nloop & 0x7FFF) | (0x8000 if eop else 0)
    high = (int(pre) << 14) | ((prim & 0x3FF) << 15) | ((flg & 3) << 26) | ((nreg & 0xF) << 28)
    regs64 = 0
    regs96 = 0
    for i, r in enumerate(regs):
        if i > 7:
            regs96 |= r << ((i & 7) * 4)
        else:
            regs64 |= r << (i * 4)
    return struct.pack("<4I", low, high, regs64, regs96)


def test_ad_packet_tag():
    tag = parse_giftag(struct.pack("<4I", 0x8001, 0x10000000, 0x0E, 0))
    assert tag.nloop == 1
    assert tag.eop is True
    assert tag.nreg == 1
    assert tag.regs == (0x0E,)
    assert tag.flg == 0


def test_init_display_tag_nloop():
    tag = parse_giftag(struct.pack("<4I", 0x8009, 0x10000000, 0x0E, 0))
    assert tag.nloop == 9
    assert tag.eop


def test_round_trip_fields():
    regs = [1, 2, 3, 4, 5]
    tag = parse_giftag(_pack(300, False, True, 0x2AB, 2, len(regs), regs))
    assert tag == GIFTag(nloop=300, eop=False, pre=True, prim=0x2AB, flg=2, nreg=5, regs=tuple(regs))


def test_nreg_zero_means_sixteen():
    regs = list(range(16))
    tag = parse_giftag(_pack(1, True, False, 0, 0, 0, regs))
    assert tag.nreg == 16
    assert tag.regs == tuple(regs)


def test_upper_registers_from_fourth_word():
    regs = [0] * 8 + [0xF, 0xA]
    tag = parse_giftag(_pack(2, False, False, 0, 1, len(regs), regs))
    assert tag.regs[8:] == (0xF, 0xA)
    assert tag.flg == 1


def test_extra_bytes_ignored():
    data = _pack(7, True, False, 0, 2, 1, [0xE]) + b"\xff" * 32
    assert parse_giftag(data).nloop == 7


def test_short_data_rejected():
    with pytest.raises(ValueError):
        parse_giftag(b"\x00" * 15)