"""GIF DMA programs that open a frame: set the draw buffers and clear the screen."""

from __future__ import annotations

from dagfx.gs_display import GsParams, GSReg, OutputMode

_U32 = 0xFFFFFFFF

DMA_TAG_END = 0x70000000
GIF_TAG_AD_LOW = 0x8000
GIF_TAG_AD_HIGH = 0x10000000
AD_REGISTER = 0xE

CLEAR_COLOR = 0x80FF0000
FOG_COLOR = 0x425045
CLEAR_STRIP_WIDTH = 0x400
WINDOW_X_ORIGIN = 0x5800
EVEN_FIELD_Y_OFFSET = 0x7000
ODD_FIELD_Y_OFFSET = 0x7008


class _Packet:
    """A GIF packet of A+D register writes behind a DMA end tag."""

    def __init__(self) -> None:
        self.words: list[int] = [0, 0, 0, 0, GIF_TAG_AD_LOW, GIF_TAG_AD_HIGH, AD_REGISTER, 0]

    def write(self, low: int, high: int, reg: int) -> None:
        self.words += [low & _U32, high & _U32, int(reg), 0]

    def finish(self) -> tuple[int, ...]:
        words = self.words
        qwc = len(words) // 4
        words[0] = DMA_TAG_END | (qwc - 1)
        words[1] = 0
        words[4] |= qwc - 2
        return tuple(words)


class FrameStarter:
    """Builds start-of-frame programs, tracking the field offset between frames."""

    def __init__(self, strip_offset: int = 0) -> None:
        self.y_offset = EVEN_FIELD_Y_OFFSET
        self.strip_offset = strip_offset
        self.scissor_y0 = 0
        self.scissor_y1 = 0x1FF

    def _clear(self, packet: _Packet, width: int) -> None:
        packet.write(CLEAR_COLOR, 0, GSReg.RGBAQ)
        packet.write(0x387F4, 0, GSReg.TEST_1)  # alpha tests off, z test greater
        packet.write(1, 0, GSReg.PRMODECONT)
        packet.write(6, 0, GSReg.PRIM)  # untextured sprite

        strip_bottom = ((self.strip_offset * 2 + 0x900) * 0x10) << 16
        x = WINDOW_X_ORIGIN
        while x < WINDOW_X_ORIGIN + width * 16:
            packet.write(x | 0x70000000, 0, GSReg.XYZ2)
            x += CLEAR_STRIP_WIDTH
            packet.write(x | strip_bottom, 0, GSReg.XYZ2)

    def _render_state(self, packet: _Packet) -> None:
        packet.write(1, 0, GSReg.DTHE)
        packet.write(0, 0, GSReg.PABE)
        packet.write(1, 0, GSReg.COLCLAMP)

    def _tail(self, packet: _Packet, scissor_x: int) -> None:
        packet.write(FOG_COLOR, 0, GSReg.FOGCOL)
        packet.write(scissor_x, self.scissor_y1 << 16 | self.scissor_y0, GSReg.SCISSOR_1)

    def start_interlaced(self, odd_field: bool) -> tuple[int, ...]:
        """The 32-bit words for a 1280x512 16-bit frame.

        The Y offset written is the one chosen by the previous call; the
        offset for the next frame is then picked from ``odd_field``.
        """
        packet = _Packet()
        packet.write(0x2140050, 0, GSReg.FRAME_1)  # FBP 0x50, FBW 1280, PSMCT16
        packet.write(0x20000F0, 0, GSReg.ZBUF_1)  # ZBP 0xF0, PSMZ16
        self.scissor_y0, self.scissor_y1 = 0, 0x1FF
        packet.write(0x4FF0000, 0x1FF0000, GSReg.SCISSOR_1)
        packet.write(WINDOW_X_ORIGIN, self.y_offset, GSReg.XYOFFSET_1)
        packet.write(WINDOW_X_ORIGIN, self.y_offset, GSReg.XYOFFSET_2)

        self.y_offset = ODD_FIELD_Y_OFFSET if odd_field else EVEN_FIELD_Y_OFFSET

        self._render_state(packet)
        self._clear(packet, 1280)
        self._tail(packet, 0x4FF0000)
        return packet.finish()

    def start_480p(self) -> tuple[int, ...]:
        """The 32-bit words for a 640x512 32-bit progressive frame."""
        packet = _Packet()
        packet.write(0x00A00A0, 0, GSReg.FRAME_1)  # FBP 0xA0, FBW 640, PSMCT32
        packet.write(0x2000140, 0, GSReg.ZBUF_1)  # ZBP 0x140, PSMZ16
        self.scissor_y0, self.scissor_y1 = 0, 0x1FF
        packet.write(0x27F0000, 0x1FF0000, GSReg.SCISSOR_1)
        packet.write(WINDOW_X_ORIGIN, EVEN_FIELD_Y_OFFSET, GSReg.XYOFFSET_1)
        packet.write(WINDOW_X_ORIGIN, EVEN_FIELD_Y_OFFSET, GSReg.XYOFFSET_2)

        self._render_state(packet)
        self._clear(packet, 640)
        self._tail(packet, 0x27F0000)
        return packet.finish()

    def start_frame(self, params: GsParams, odd_field: bool = False) -> tuple[int, ...]:
        """The start-of-frame program suited to the output mode."""
        if params.omode == OutputMode.DTV_480P:
            return self.start_480p()
        return self.start_interlaced(odd_field)