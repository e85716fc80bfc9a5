"""Priority-ordered registry of per-frame callbacks."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass

MAX_FRAME_FUNCTIONS = 16


@dataclass(frozen=True)
class FrameFunctionDef:
    """A registered callback; lower priority values run first."""

    func: Callable[[], None]
    priority: int
    name: str


class FrameFunctionRegistry:
    """Holds frame functions sorted by priority, stable for equal priorities."""

    def __init__(self, capacity: int = MAX_FRAME_FUNCTIONS) -> None:
        self.capacity = capacity
        self._entries: list[FrameFunctionDef] = []
        self.prev_executed_index = 0

    def register(self, function: Callable[[], None], priority: int, name: str) -> None:
        """Insert a function after every entry of equal or lower priority value.

        A function that is already registered is left where it is.
        """
        if any(entry.func is function for entry in self._entries):
            return
        if len(self._entries) >= self.capacity:
            raise OverflowError(f"at most {self.capacity} frame functions can be registered")

        index = len(self._entries)
        while index > 0 and priority < self._entries[index - 1].priority:
            index -= 1
        self._entries.insert(index, FrameFunctionDef(function, priority, name))
        if self.prev_executed_index >= index - 1:
            self.prev_executed_index += 1

    def names(self) -> list[str]:
        return [entry.name for entry in self._entries]

    @property
    def functions(self) -> tuple[FrameFunctionDef, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[FrameFunctionDef]:
        return iter(self._entries)