"""Decoding of 128-bit GIF tags."""

from __future__ import annotations

import struct
from dataclasses import dataclass

GIFTAG_SIZE = 16


@dataclass(frozen=True)
class GIFTag:
    """The fields of a GIF tag; ``regs`` holds ``nreg`` register descriptors."""

    nloop: int
    eop: bool
    pre: bool
    prim: int
    flg: int
    nreg: int
    regs: tuple[int, ...]


def parse_giftag(data: bytes) -> GIFTag:
    """Decode the little-endian GIF tag at the start of ``data``."""
    if len(data) < GIFTAG_SIZE:
        raise ValueError(f"a GIF tag needs {GIFTAG_SIZE} bytes, got {len(data)}")
    low32, next32, regs64, regs96 = struct.unpack_from("<4I", data)

    nreg = (next32 >> (60 - 32)) & 0xF
    if nreg == 0:
        nreg = 16
    regs = tuple(
        ((regs96 if reg > 7 else regs64) >> ((reg & 7) * 4)) & 0x0F for reg in range(nreg)
    )
    return GIFTag(
        nloop=low32 & 0x7FFF,
        eop=(low32 & 0x8000) == 0x8000,
        pre=((next32 >> (46 - 32)) & 1) == 1,
        prim=(next32 >> (47 - 32)) & 0x3FF,
        flg=(next32 >> (58 - 32)) & 0x3,
        nreg=nreg,
        regs=regs,
    )