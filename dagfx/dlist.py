"""Double-buffered display lists of DMA packets, ordered by slot and grouped by texture."""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

NUM_SLOTS = 8
NUM_BANKS = 2
DLIST_HEAP_SIZE = 1024

NODE_PREPENDED = 1
NODE_IN_GROUP = 2

TEX_LEVEL_TEXTURE = 0x100

_FLUSH_AND_FINISH_WORDS = (
    0x70000002, 0,
    0x11000000,  # VIF FLUSH
    0x50000002,  # VIF DIRECT, two quadwords
    0x8001, 0x10000000,  # GIF tag: EOP, NLOOP=1, NREG=1
    0x0E, 0,  # A+D
    0, 2,
    0x61, 0,  # FINISH
)


def flush_and_finish_packet() -> bytes:
    """The VIF1 chain packet that flushes the pipeline and raises a GS FINISH event."""
    return struct.pack(f"<{len(_FLUSH_AND_FINISH_WORDS)}I", *_FLUSH_AND_FINISH_WORDS)


@dataclass(eq=False)
class DlistTexture:
    """The parts of a texture that display-list ordering reads and updates."""

    flags: int = 0
    gif_tadr: Any = None
    allocated: bool = False
    frame_count_plus_one: int = 0
    reset_frame_no: int = 0
    slot_nodes: list[DlistNode | None] = field(default_factory=lambda: [None] * NUM_SLOTS)


@dataclass(eq=False)
class DlistNode:
    """One queued DMA packet; sentinel heads carry no data."""

    dma_data: Any = None
    flags: int = 0
    texture: DlistTexture | None = None
    next: DlistNode | None = field(default=None, repr=False)


class DisplayList:
    """Two banks of per-slot linked lists: one is filled while the other is uploaded."""

    def __init__(self, heap_size: int = DLIST_HEAP_SIZE) -> None:
        if heap_size <= NUM_SLOTS:
            raise ValueError(f"heap_size must exceed {NUM_SLOTS}")
        self.heap_size = heap_size
        self.active_bank = 1
        self.uploading_bank = 0
        self.frame_count = 0
        self.scene_frame_num = 0
        self._heads: list[list[DlistNode] | None] = [None] * NUM_BANKS
        self._used = 0
        self.init_heads()

    @property
    def used(self) -> int:
        """Heap entries consumed in the active bank, sentinels included."""
        return self._used

    def init_heads(self) -> None:
        """Reset the active bank to eight empty slot lists."""
        self._heads[self.active_bank] = [DlistNode() for _ in range(NUM_SLOTS)]
        self._used = NUM_SLOTS

    def swap_banks(self) -> int:
        """Hand the filled bank over for upload and start a fresh one; returns the upload bank."""
        self.active_bank ^= 1
        self.init_heads()
        self.uploading_bank ^= 1
        return self.uploading_bank

    def queue(
        self,
        dma_data: Any,
        slot: int,
        texture: DlistTexture | None = None,
        head_node: DlistNode | None = None,
        prepend: bool = False,
    ) -> DlistNode | None:
        """Link a packet into ``slot`` of the active bank.

        Packets sharing a texture within a frame are kept together unless
        ``prepend`` is set; with ``head_node`` the packet is chained straight
        after it. Returns None when the heap is full or the texture is a
        level texture that cannot be queued.
        """
        if not 0 <= slot < NUM_SLOTS:
            raise ValueError(f"slot must be in 0..{NUM_SLOTS - 1}, got {slot}")

        self._used += 1
        if texture is not None and texture.flags & TEX_LEVEL_TEXTURE and texture.gif_tadr is None:
            return None
        if self._used >= self.heap_size:
            return None

        node = DlistNode(dma_data, NODE_PREPENDED if prepend else 0, texture)
        previous: DlistNode | None = None
        if texture is not None:
            if texture.allocated:
                texture.frame_count_plus_one = self.scene_frame_num + 1
            if texture.reset_frame_no == self.frame_count:
                previous = texture.slot_nodes[slot]
            else:
                texture.slot_nodes = [None] * NUM_SLOTS
                texture.reset_frame_no = self.frame_count
            texture.slot_nodes[slot] = node

        if head_node is None:
            if previous is None or prepend:
                previous = self._heads[self.active_bank][slot]
            else:
                while previous.flags & NODE_IN_GROUP and previous.next is not None:
                    previous = previous.next
            node.next = previous.next
            previous.next = node
        else:
            if head_node.flags & NODE_IN_GROUP == 0:
                head_node.flags |= NODE_IN_GROUP
            else:
                node.flags |= NODE_IN_GROUP
            node.next = head_node.next
            head_node.next = node
        return node

    def nodes(self, bank: int, slot: int) -> Iterator[DlistNode]:
        """Iterate the queued nodes of one slot of a bank, in upload order."""
        if not 0 <= bank < NUM_BANKS:
            raise ValueError(f"bank must be 0 or 1, got {bank}")
        if not 0 <= slot < NUM_SLOTS:
            raise ValueError(f"slot must be in 0..{NUM_SLOTS - 1}, got {slot}")
        heads = self._heads[bank]
        if heads is None:
            return
        node = heads[slot].next
        while node is not None:
            yield node
            node = node.next