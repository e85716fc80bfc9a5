"""GIF DMA programs that present the finished frame and set up the draw environment."""

from __future__ import annotations

from dagfx.gs_display import GsParams, GSReg, OutputMode, build_tex0

_U32 = 0xFFFFFFFF

DMA_TAG_END = 0x70000000
GIF_TAG_AD_LOW = 0x8000
GIF_TAG_AD_HIGH = 0x10000000
AD_REGISTER = 0xE

RGBAQ_VALUE_INDEX = 32
"""Word index of the RGBAQ value in an end-of-frame program."""

ALPHA_FIX_VALUE_INDEX = 41
"""Word index of the ALPHA_1 FIX value in an end-of-frame program."""

_UV_REG = 3
_XYZ2_REG = 5
_DIMX_REG = 0x44
_DITHER_MATRIX = 0x31317575
_XYZ_DEPTH_HIGH = 0x0A

_INTERLACED_TEX0_LOW = 0xA8250A00
_INTERLACED_TEX0_LOW_SECOND = 0xA8250B40
_INTERLACED_TEX0_HIGH = 0x20000012


def make_uv(u: int, v: int) -> int:
    """Pack texel coordinates into the low word of a UV register value."""
    return (u | (v << 16)) & _U32


def make_xy(x: int, y: int) -> int:
    """Pack primitive coordinates into the low word of an XYZ register value."""
    return (x | (y << 16)) & _U32


class _Program:
    """A GIF packet of A+D register writes behind a DMA end tag."""

    def __init__(self) -> None:
        self.words: list[int] = [0, 0, 0, 0, GIF_TAG_AD_LOW, GIF_TAG_AD_HIGH, AD_REGISTER, 0]

    def write(self, low: int, high: int, reg: int) -> None:
        self.words += [low & _U32, high & _U32, int(reg), 0]

    def finish(self) -> tuple[int, ...]:
        words = self.words
        while len(words) & 3:
            words.append(0)
        qwc = len(words) // 4
        words[0] = DMA_TAG_END | (qwc - 1)
        words[1] = 0
        words[4] |= qwc - 2
        return tuple(words)


def _common_prologue(prog: _Program, scissor_high: int) -> None:
    prog.write(0, 0, GSReg.DTHE)  # no dither
    prog.write(0x000A0000, 0, 0x4C)  # FRAME_1: FBP 0, FBW 10 (640), PSMCT32
    prog.write(0x27F0000, scissor_high, GSReg.SCISSOR_1)
    prog.write(0x6C00, 0x7800, GSReg.XYOFFSET_1)
    prog.write(0x61, 0, GSReg.TEX1_1)  # no mipmap
    prog.write(0x31001, 0, GSReg.TEST_1)  # only update the frame buffer, z always
    prog.write(0x00808080, 0, GSReg.RGBAQ)  # highlight mode
    prog.write(0x156, 0, GSReg.PRIM)  # textured alpha-blended sprite, UV mapped
    prog.write(0x64, 0x80, GSReg.ALPHA_1)  # Cv = (Cs - Cd) * FIX >> 7 + Cd
    prog.write(0, 0, GSReg.TEXFLUSH)


def _epilogue(prog: _Program) -> None:
    prog.write(1, 0, GSReg.DTHE)
    prog.write(_DITHER_MATRIX, _DITHER_MATRIX, _DIMX_REG)


def _sprite(prog: _Program, u0: int, v0: int, x0: int, y0: int, u1: int, v1: int, x1: int, y1: int) -> None:
    prog.write(make_uv(u0, v0), 0, _UV_REG)
    prog.write(make_xy(x0, y0), _XYZ_DEPTH_HIGH, _XYZ2_REG)
    prog.write(make_uv(u1, v1), 0, _UV_REG)
    prog.write(make_xy(x1, y1), _XYZ_DEPTH_HIGH, _XYZ2_REG)


def build_480p_end_frame_dma() -> tuple[int, ...]:
    """The 32-bit words of the program copying a 640x512 frame to the display buffer."""
    prog = _Program()
    _common_prologue(prog, 0x1FF0000)

    tex0 = build_tex0(0x1400, 0x0A, 0, 10, 10, 0, 2, 0, 0, 0, 0, 0)
    prog.write(tex0 & _U32, tex0 >> 32, GSReg.TEX0_1)

    x0, y0 = 0x6C00, 0x7800
    _sprite(prog, 0, 0, x0, y0, 640 * 16, 512 * 16, x0 + 640 * 16, y0 + 512 * 16)

    _epilogue(prog)
    return prog.finish()


def _interlaced_half(prog: _Program, start_x: int) -> None:
    for y0 in range(0, 512, 64):
        y1 = y0 + 64
        u0, x0 = 0x10, start_x
        for _ in range(0, 320, 32):
            x1, u1 = x0 + 0x200, u0 + 0x400
            _sprite(
                prog,
                u0, y0 * 0x10 + 0x10, x0, y0 * 8 + 0x7800,
                u1, y1 * 0x10 + 0x10, x1, y1 * 8 + 0x7800,
            )
            u0, x0 = u1, x1


def build_interlaced_end_frame_dma() -> tuple[int, ...]:
    """The 32-bit words of the program downsampling the 1280-wide frame in strips."""
    prog = _Program()
    _common_prologue(prog, 0xFF0000)

    prog.write(_INTERLACED_TEX0_LOW, _INTERLACED_TEX0_HIGH, GSReg.TEX0_1)
    _interlaced_half(prog, 0x6C00)

    prog.write(_INTERLACED_TEX0_LOW_SECOND, _INTERLACED_TEX0_HIGH, GSReg.TEX0_1)
    _interlaced_half(prog, 0x8000)

    _epilogue(prog)
    return prog.finish()


def build_frame_dma_prog(params: GsParams) -> tuple[int, ...]:
    """The end-of-frame program suited to the output mode."""
    if params.omode == OutputMode.DTV_480P:
        return build_480p_end_frame_dma()
    return build_interlaced_end_frame_dma()


def build_init_display_packet() -> tuple[int, ...]:
    """The 48 words of the packet setting up the context 2 draw environment."""
    return (
        0x7000000A, 0, 0, 0,  # DMA end, 10 quadwords follow
        0x8009, 0x10000000, 0xE, 0,  # GIF tag: NLOOP 9, EOP, A+D
        0x2140050, 0, 0x4D, 0,  # FRAME_2: FBW 1280, PSMCT16, FBP 0x50
        0x20000F0, 0, 0x4F, 0,  # ZBUF_2: PSMZ16, ZBP 0xF0
        0x4FF0000, 0x1FF0000, 0x41, 0,  # SCISSOR_2: (0,0)-(1279,511)
        0x5800, 0x7000, 0x19, 0,  # XYOFFSET_2
        0x2A, 0, 0x43, 0,  # ALPHA_2: D=Cs
        0x50013, 0, 0x48, 0,  # TEST_2: z test GEQUAL, alpha always
        0xDC00B200, 0x20000001, 7, 0,  # TEX0_2
        0x61, 0, 0x15, 0,  # TEX1_2: linear filtering
        0, 0, 9, 0,  # CLAMP_2: repeat
        0, 0, 0, 0,
    )