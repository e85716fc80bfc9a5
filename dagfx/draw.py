"""Building and queueing of textured sprite DMA packets."""

from __future__ import annotations

from typing import Any

from dagfx.dlist import DisplayList, DlistNode
from dagfx.gs_display import GsParams, GSReg, OutputMode

_U64 = (1 << 64) - 1
_UV_REG = 3
_XYZ_DEPTH = 0xA00000000
OPAQUE_COLOR = 0x80808080


def _sext32(value: int) -> int:
    """Treat ``value`` as a 32-bit signed int widened to 64 bits."""
    value &= 0xFFFFFFFF
    if value & 0x80000000:
        value -= 1 << 32
    return value & _U64


def _uv(u: int, v: int) -> int:
    return _sext32((v << 16) | u)


def _xyz(x: int, y: int) -> int:
    return (_XYZ_DEPTH | _sext32((y << 16) | x)) & _U64


def build_sprite_packet(
    width: int,
    height: int,
    xpos: int,
    ypos: int,
    vertex_color: int,
    interlaced: bool = True,
    omode: int = OutputMode.NTSC,
    odd_field: bool = False,
) -> tuple[int, ...]:
    """The 64-bit words of a DMA packet drawing one textured sprite.

    Words 6 and 8 hold TEX0_1 and TEX1_1 values that are filled in when
    the texture's GS memory location is known.
    """
    words = [
        0,
        0x5000000011000000,  # VIF FLUSH, DIRECT (count filled in below)
        0x1000000000008000,  # GIF tag: EOP, one A+D register
        0xE,
        0, int(GSReg.TEXFLUSH),
        0, int(GSReg.TEX0_1),
        1, int(GSReg.TEX1_1),
        vertex_color & 0xFFFFFFFF, int(GSReg.RGBAQ),
        0x44, int(GSReg.ALPHA_1),
        0x156, int(GSReg.PRIM),
        0x3001D, int(GSReg.TEST_1),
    ]

    if not interlaced:
        prim_x = xpos * 0x10 + 0x7000
        prim_y = ypos * 0x10 + 0x6C00
        prim_w, prim_h = width * 0x10, height * 0x10
        uv0 = _uv(8, 8)
        xyz0 = _xyz(prim_x, prim_y)
        uv1 = _uv(prim_w + 8, prim_h + 8)
        xyz1 = _xyz(prim_x + prim_w, prim_y + prim_h)
    elif omode == OutputMode.DTV_480P:
        prim_x = xpos * 0x10 + 0x5800
        prim_y = ypos * 0x10 + 0x7000
        prim_w, prim_h = width * 0x10, height * 0x10
        uv0 = _uv(8, 8)
        xyz0 = _xyz(prim_x, prim_y)
        uv1 = _uv(prim_w + 8, prim_h + 8)
        xyz1 = _xyz(prim_x + prim_w, prim_y + prim_h)
    else:
        prim_x = xpos * 0x20 + 0x5800
        prim_y = ypos * 0x10 + 0x7000
        v0 = 0
        if prim_y & 0x10 == 0:
            if odd_field:
                v0 = (height // 2) * 0x10 - 4
        elif odd_field:
            prim_y = ypos * 0x10 + 0x6FF0
            v0 = -4
        else:
            prim_y = ypos * 0x10 + 0x7010
            v0 = (height // 2) * 0x10
        uv0 = _uv(4, v0 + 4)
        xyz0 = _xyz(prim_x, prim_y)
        uv1 = _uv(width * 0x10 + 4, height * 8 + v0 + 4)
        xyz1 = _xyz(prim_x + width * 0x20, prim_y + height * 0x10)

    words += [uv0, _UV_REG, xyz0, int(GSReg.XYZ2), uv1, _UV_REG, xyz1, int(GSReg.XYZ2)]

    used = len(words)
    nloop = (used - 4) // 2
    words[0] = ((used - 2) // 2) | 0x70000000
    words[2] |= nloop
    words[1] |= (nloop + 1) << 32
    return tuple(words)


class SpriteDrawer:
    """Queues sprite packets into a display list for the current display mode.

    Textures are ``DlistTexture`` objects that also carry ``width`` and ``height``.
    """

    def __init__(
        self,
        display_list: DisplayList | None = None,
        params: GsParams | None = None,
        interlaced: bool = True,
        odd_field: bool = False,
    ) -> None:
        self.display_list = display_list if display_list is not None else DisplayList()
        self.params = params if params is not None else GsParams()
        self.interlaced = interlaced
        self.odd_field = odd_field

    def draw_sprite(
        self,
        texture: Any,
        xpos: int,
        ypos: int,
        slot: int,
        append: bool = True,
        vertex_color: int = OPAQUE_COLOR,
    ) -> DlistNode | None:
        """Queue a sprite; without ``append`` it goes to the front of its slot."""
        packet = build_sprite_packet(
            texture.width,
            texture.height,
            xpos,
            ypos,
            vertex_color,
            self.interlaced,
            self.params.omode,
            self.odd_field,
        )
        return self.display_list.queue(packet, slot, texture, None, not append)

    def draw_opaque_sprite(
        self, texture: Any, xpos: int, ypos: int, slot: int, append: bool = True
    ) -> DlistNode | None:
        """Queue a sprite with a neutral, fully opaque vertex colour."""
        return self.draw_sprite(texture, xpos, ypos, slot, append, OPAQUE_COLOR)