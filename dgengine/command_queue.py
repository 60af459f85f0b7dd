"""A double-buffered queue of render commands, filled by one thread and run by another."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from dgengine.mem_buffer import MemBuffer
from dgengine.render_state import RenderState

RENDER_COMMAND_MEM_POOL = 1024 * 1024

RenderCommand = Callable[[], object]


class RenderSortCriterion:
    """A rule for ordering render commands before they are executed."""


@dataclass
class _CommandBuffer:
    entries: list[tuple[RenderState, RenderCommand]] = field(default_factory=list)

    def clear(self) -> None:
        self.entries.clear()


class RenderCommandQueue:
    """Commands are submitted to the write buffer and executed from the other one.

    ``swap`` turns the write buffer into the read buffer and starts a fresh
    write buffer, together with a fresh scratch memory pool.
    """

    def __init__(self, mem_pool_size: int = RENDER_COMMAND_MEM_POOL) -> None:
        self._buffers = (_CommandBuffer(), _CommandBuffer())
        self._mem = (MemBuffer(mem_pool_size), MemBuffer(mem_pool_size))
        self._write_index = 0
        self._sorted: list[int] = []
        self._criteria: list[RenderSortCriterion] = []

    @property
    def _read_index(self) -> int:
        return (self._write_index + 1) & 1

    def submit(self, state: RenderState, command: RenderCommand) -> None:
        """Queue ``command`` with its sort key ``state`` in the write buffer."""
        self._buffers[self._write_index].entries.append((RenderState(state.data), command))

    def allocate(self, size: int) -> memoryview:
        """Reserve scratch memory that lives until this buffer is reused."""
        return self._mem[self._write_index].allocate(size)

    def push_criterion(self, criterion: RenderSortCriterion) -> None:
        self._criteria.append(criterion)

    def clear_criterion(self) -> None:
        self._criteria.clear()

    def swap(self) -> None:
        """Make the write buffer readable and start an empty write buffer."""
        self._write_index = self._read_index
        self._buffers[self._write_index].clear()
        self._mem[self._write_index].clear()

    def sort(self) -> list[int]:
        """Work out the order of the read buffer's commands and return it.

        Commands currently keep their submission order.
        """
        self._sorted = list(range(len(self._buffers[self._read_index].entries)))
        return list(self._sorted)

    def execute(self) -> None:
        """Run every command in the read buffer in sorted order."""
        self.sort()
        entries = self._buffers[self._read_index].entries
        for index in self._sorted:
            _, command = entries[index]
            command()