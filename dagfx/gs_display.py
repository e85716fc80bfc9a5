"""Graphics Synthesizer display settings: register ids, output modes and register encoders."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

_U64 = (1 << 64) - 1

GS_NONINTERLACED = 0
GS_INTERLACED = 1
GS_FFMD_FIELD = 0
GS_FFMD_FRAME = 1


class GSReg(IntEnum):
    """GS register addresses used with A+D packets."""

    PRIM = 0
    RGBAQ = 0x01
    XYZ2 = 5
    TEX0_1 = 6
    TEX1_1 = 0x14
    XYOFFSET_1 = 0x18
    XYOFFSET_2 = 0x19
    PRMODECONT = 0x1A
    FOGCOL = 0x3D
    TEXFLUSH = 0x3F
    SCISSOR_1 = 0x40
    ALPHA_1 = 0x42
    ALPHA_2 = 0x43
    DTHE = 0x45
    COLCLAMP = 0x46
    TEST_1 = 0x47
    PABE = 0x49
    FRAME_1 = 0x4C
    ZBUF_1 = 0x4E
    TRXDIR = 0x53


class OutputMode(IntEnum):
    """Video output standards the display can be configured for."""

    NTSC = 0x02
    PAL = 0x03
    DTV_480P = 0x50
    DTV_576P = 0x53


@dataclass
class GsParams:
    """Global GS configuration: interlacing, output mode and field/frame mode."""

    interlace: int = GS_INTERLACED
    omode: int = OutputMode.NTSC
    ffmode: int = GS_FFMD_FRAME
    version: int = 3


@dataclass
class GsDispEnv:
    """Values for the display-related privileged GS registers."""

    pmode: int = 0
    smode2: int = 0
    dispfb: int = 0
    display: int = 0
    bgcolor: int = 0


def build_display(
    display_x: int, display_y: int, magnify_h: int, magnify_v: int, display_w: int, display_h: int
) -> int:
    """Encode a DISPLAY register value."""
    return (
        (display_x & 0xFFF)
        | (display_y & 0x7FF) << 12
        | (magnify_h & 0xF) << 23
        | (magnify_v & 0x3) << 27
        | (display_w & 0xFFF) << 32
        | (display_h & 0x7FF) << 44
    )


def build_tex0(
    tba: int,
    tbw: int,
    psm: int,
    tw: int,
    th: int,
    tcc: int,
    tfnct: int,
    cba: int,
    cpsm: int,
    csm: int,
    csa: int,
    cld: int,
) -> int:
    """Encode a TEX0 register value."""
    value = (
        (tba & 0x3FFF)
        | (tbw & 0x3F) << 14
        | (psm & 0x3F) << 20
        | (tw & 0xF) << 26
        | (th & 0xF) << 30
        | (tcc & 0x1) << 34
        | (tfnct & 0x3) << 35
        | (cba & 0x3FFF) << 37
        | (cpsm & 0xF) << 51
        | (csm & 0x1) << 55
        | (csa & 0x1F) << 56
        | (cld & 0x7) << 61
    )
    return value & _U64


def build_pmode(en1: int, en2: int, mmod: int, amod: int, slbg: int, alp: int) -> int:
    """Encode a PMODE register value; the reserved bit 2 is always set."""
    value = en1 | en2 << 1 | 1 << 2 | mmod << 5 | amod << 6 | slbg << 7 | alp << 8
    return value & _U64


def _ntsc_pal_display(dx: int, dy_progressive: int, dy_interlaced: int, params: GsParams) -> int:
    if params.interlace != GS_INTERLACED:
        return dx | dy_progressive << 12 | 0xFF9FF01800000
    dh = 511 if params.ffmode else 255
    return dx | dy_interlaced << 12 | dh << 44 | 0x9FF01800000


def default_display_env(params: GsParams) -> GsDispEnv:
    """The display environment for the given GS parameters."""
    env = GsDispEnv(pmode=build_pmode(0, 1, 1, 1, 0, 0), dispfb=0x1400, bgcolor=0)

    if params.interlace:
        env.smode2 = 3 if params.ffmode == GS_FFMD_FRAME else 1
    else:
        env.smode2 = 2

    if params.omode == OutputMode.NTSC:
        env.display = _ntsc_pal_display(0x29C, 0x19, 0x32, params)
    elif params.omode == OutputMode.PAL:
        env.display = _ntsc_pal_display(0x2B0, 0x24, 0x48, params)
    elif params.omode == OutputMode.DTV_480P:
        start_x, start_y, dw, dh = 232, 35, 1440, 480
        width, height = 640, 480
        mag_h = dw // width - 1
        mag_v = dh // height - 1
        start_x += (dw - (mag_h + 1) * width) // 2
        start_y += (dh - (mag_v + 1) * height) // 2
        dw = (mag_h + 1) * width
        dh = (mag_v + 1) * height
        env.display = build_display(start_x, start_y, mag_h, mag_v, dw - 1, dh - 1)
    elif params.omode == OutputMode.DTV_576P:
        start_x, start_y, dw, dh = 320, 64, 1312, 576
        width, height = 640, 512
        mag_h = dw // width - 1
        mag_v = dh // height - 1
        dw = (mag_h + 1) * width
        dh = (mag_v + 1) * height
        start_x += (dw - (mag_h + 1) * width) // 2
        start_y += (dh - (mag_v + 1) * height) // 2
        env.display = build_display(start_x, start_y, mag_h, mag_v, dw - 1, dh - 1)
    return env


def is_progressive_mode(params: GsParams) -> bool:
    """True for the progressive-scan DTV output modes."""
    return params.omode in (OutputMode.DTV_480P, OutputMode.DTV_576P)


def disabled_pmode(env: GsDispEnv) -> int:
    """PMODE with both read circuits switched off."""
    return env.pmode & 0xFFFFFFC