from dataclasses import dataclass

import pytest

from dagfx.dlist import DlistTexture
from dagfx.draw import SpriteDrawer, build_sprite_packet
from dagfx.gs_display import GsParams, GSReg, OutputMode


@dataclass(eq=False)
class SizedTexture(DlistTexture):
    width: int = 0
    height: int = 0


def _xy(word):
    return word & 0xFFFF, (word >> 16) & 0xFFFF


ALL_MODES = [
    dict(interlaced=False, omode=OutputMode.NTSC, odd_field=False),
    dict(interlaced=True, omode=OutputMode.DTV_480P, odd_field=False),
    dict(interlaced=True, omode=OutputMode.NTSC, odd_field=False),
    dict(interlaced=True, omode=OutputMode.NTSC, odd_field=True),
]


@pytest.mark.parametrize("mode", ALL_MODES)
def test_packet_header_counts_are_consistent(mode):
    words = build_sprite_packet(32, 16, 5, 7, 0x80808080, **mode)
    n = len(words)
    assert n % 2 == 0
    assert words[0] >> 28 == 7
    assert words[0] & 0xFFFF == (n - 2) // 2
    nloop = words[2] & 0x7FFF
    assert nloop == (n - 4) // 2
    assert words[2] & 0x8000
    assert (words[1] >> 32) & 0xFFFF == nloop + 1
    assert words[1] & 0xFFFFFFFF == 0x11000000
    assert all(0 <= w < 1 << 64 for w in words)


@pytest.mark.parametrize("mode", ALL_MODES)
def test_register_sequence(mode):
    words = build_sprite_packet(8, 8, 0, 0, 0x12345678, **mode)
    regs = words[5::2]
    assert regs == (
        GSReg.TEXFLUSH,
        GSReg.TEX0_1,
        GSReg.TEX1_1,
        GSReg.RGBAQ,
        GSReg.ALPHA_1,
        GSReg.PRIM,
        GSReg.TEST_1,
        3,
        GSReg.XYZ2,
        3,
        GSReg.XYZ2,
    )
    assert words[0x0A] == 0x12345678
    assert words[0x0E] == 0x156


def test_480p_position_and_extent():
    words = build_sprite_packet(64, 32, 0, 0, 0, interlaced=True, omode=OutputMode.DTV_480P)
    xyz0, xyz1 = words[0x14], words[0x18]
    assert _xy(xyz0) == (0x5800, 0x7000)
    assert xyz0 >> 32 == 0xA
    x1, y1 = _xy(xyz1)
    assert (x1 - 0x5800, y1 - 0x7000) == (64 * 16, 32 * 16)


def test_non_interlaced_origin():
    words = build_sprite_packet(10, 10, 0, 0, 0, interlaced=False)
    assert _xy(words[0x14]) == (0x7000, 0x6C00)
    assert _xy(words[0x12]) == (8, 8)


def test_interlaced_even_line_even_field():
    words = build_sprite_packet(16, 16, 0, 0, 0, interlaced=True, odd_field=False)
    assert _xy(words[0x12]) == (4, 4)
    x0, y0 = _xy(words[0x14])
    x1, y1 = _xy(words[0x18])
    assert (x0, y0) == (0x5800, 0x7000)
    assert (x1 - x0, y1 - y0) == (16 * 0x20, 16 * 0x10)


def test_interlaced_odd_line_odd_field():
    words = build_sprite_packet(16, 16, 0, 1, 0, interlaced=True, odd_field=True)
    assert _xy(words[0x14])[1] == 0x6FF0 + 16
    assert (words[0x12] >> 16) & 0xFFFF == 0


def test_draw_sprite_queues_packet():
    drawer = SpriteDrawer(params=GsParams(omode=OutputMode.DTV_480P))
    tex = SizedTexture(width=20, height=10)
    node = drawer.draw_sprite(tex, 3, 4, 2, True, 0x80FFFFFF)
    expected = build_sprite_packet(20, 10, 3, 4, 0x80FFFFFF, True, OutputMode.DTV_480P, False)
    assert node.dma_data == expected
    assert list(drawer.display_list.nodes(drawer.display_list.active_bank, 2)) == [node]
    assert tex.slot_nodes[2] is node


def test_non_append_goes_first():
    drawer = SpriteDrawer()
    first = drawer.draw_sprite(SizedTexture(width=4, height=4), 0, 0, 1, True)
    second = drawer.draw_sprite(SizedTexture(width=4, height=4), 0, 0, 1, False)
    assert list(drawer.display_list.nodes(drawer.display_list.active_bank, 1)) == [second, first]
    assert second.flags & 1
    assert first.flags & 1 == 0


def test_opaque_sprite_colour():
    drawer = SpriteDrawer()
    node = drawer.draw_opaque_sprite(SizedTexture(width=8, height=8), 1, 1, 0, True)
    assert node.dma_data[0x0A] == 0x80808080


def test_bad_slot_rejected():
    drawer = SpriteDrawer()
    with pytest.raises(ValueError):
        drawer.draw_sprite(SizedTexture(width=8, height=8), 0, 0, 8)