import pytest

from dagfx.frame_end_dma import (
    ALPHA_FIX_VALUE_INDEX,
    RGBAQ_VALUE_INDEX,
    build_480p_end_frame_dma,
    build_frame_dma_prog,
    build_init_display_packet,
    build_interlaced_end_frame_dma,
    make_uv,
    make_xy,
)
from dagfx.gs_display import GsParams, OutputMode, build_tex0


def _registers(words):
    return [words[i + 2] for i in range(4, len(words), 4)]


@pytest.mark.parametrize("u,v", [(0, 0), (0x10, 0x2010), (0x2810, 0x10), (0xFFFF, 0xFFFF)])
def test_make_uv_round_trip(u, v):
    packed = make_uv(u, v)
    assert packed & 0xFFFF == u
    assert packed >> 16 == v


@pytest.mark.parametrize("x,y", [(0x6C00, 0x7800), (0x9400, 0x8800)])
def test_make_xy_round_trip(x, y):
    packed = make_xy(x, y)
    assert (packed & 0xFFFF, packed >> 16) == (x, y)


@pytest.mark.parametrize("builder", [build_480p_end_frame_dma, build_interlaced_end_frame_dma])
def test_program_tags_are_consistent(builder):
    words = builder()
    assert len(words) % 4 == 0
    qwc = len(words) // 4
    assert words[0] == 0x70000000 | (qwc - 1)
    assert words[4] & 0x7FFF == qwc - 2
    assert words[4] & 0x8000
    assert words[5] == 0x10000000
    assert all(0 <= w <= 0xFFFFFFFF for w in words)


@pytest.mark.parametrize("builder", [build_480p_end_frame_dma, build_interlaced_end_frame_dma])
def test_patchable_values(builder):
    words = builder()
    assert words[RGBAQ_VALUE_INDEX] == 0x00808080
    assert words[ALPHA_FIX_VALUE_INDEX] == 0x80
    assert words[ALPHA_FIX_VALUE_INDEX - 1] == 0x64


def test_480p_register_sequence():
    words = build_480p_end_frame_dma()
    assert _registers(words) == [
        0xE, 0x45, 0x4C, 0x40, 0x18, 0x14, 0x47, 1, 0, 0x42, 0x3F, 6,
        3, 5, 3, 5, 0x45, 0x44,
    ]


def test_480p_tex0_and_sprite():
    words = build_480p_end_frame_dma()
    tex0 = build_tex0(0x1400, 0x0A, 0, 10, 10, 0, 2, 0, 0, 0, 0, 0)
    assert words[48] | (words[49] << 32) == tex0
    assert words[52] == make_uv(0, 0)
    assert words[56] == make_xy(0x6C00, 0x7800)
    assert words[57] == 0x0A
    assert words[60] == make_uv(640 * 16, 512 * 16)
    assert words[64] == make_xy(0x6C00 + 640 * 16, 0x7800 + 512 * 16)
    assert words[-4:-2] == (0x31317575, 0x31317575)


def test_interlaced_tex0_values_and_strips():
    words = build_interlaced_end_frame_dma()
    assert words[48:51] == (0xA8250A00, 0x20000012, 6)
    regs = _registers(words)
    assert regs.count(6) == 2
    assert regs.count(3) == regs.count(5)
    # two halves of 8 rows by 10 strips, each strip one UV/XYZ2 pair of pairs
    assert regs.count(3) == 2 * 8 * 10 * 2
    second = regs.index(6, regs.index(6) + 1)
    assert words[4 + second * 4] == 0xA8250B40


def test_interlaced_strips_are_contiguous():
    words = build_interlaced_end_frame_dma()
    first_x0 = words[56] & 0xFFFF
    first_x1 = words[64] & 0xFFFF
    next_x0 = words[72] & 0xFFFF
    assert first_x0 == 0x6C00
    assert next_x0 == first_x1


def test_scissor_heights_differ_between_modes():
    assert build_480p_end_frame_dma()[17] == 0x1FF0000
    assert build_interlaced_end_frame_dma()[17] == 0xFF0000


def test_build_frame_dma_prog_selects_by_mode():
    assert build_frame_dma_prog(GsParams(omode=OutputMode.DTV_480P)) == build_480p_end_frame_dma()
    assert build_frame_dma_prog(GsParams(omode=OutputMode.NTSC)) == build_interlaced_end_frame_dma()
    assert build_frame_dma_prog(GsParams(omode=OutputMode.PAL)) == build_interlaced_end_frame_dma()


def test_init_display_packet():
    words = build_init_display_packet()
    assert len(words) == 48
    assert words[0] == 0x7000000A
    assert words[4] == 0x8009
    assert words[32:34] == (0xDC00B200, 0x20000001)
    assert [words[i] for i in range(10, 44, 4)] == [0x4D, 0x4F, 0x41, 0x19, 0x43, 0x48, 7, 0x15, 9]
    assert words[0] & 0xFFFF == (words[4] & 0x7FFF) + 1