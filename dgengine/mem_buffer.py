"""Linear (bump) memory buffers and the shared per-frame scratch buffer."""

from __future__ import annotations

import threading

DEFAULT_SIZE = 1024
DEFAULT_ALIGNMENT = 16
TEMP_BUFFER_SIZE = 1024 * 1024


def forward_align(value: int, alignment: int) -> int:
    """Round ``value`` up to the next multiple of ``alignment``."""
    if alignment <= 0:
        raise ValueError("alignment must be positive")
    return -(-value // alignment) * alignment


def _check(size: int, alignment: int) -> None:
    if size < 0:
        raise ValueError("size must not be negative")
    if alignment <= 0:
        raise ValueError("alignment must be positive")


class MemBufferDynamic:
    """A bump allocator that grows its storage as needed.

    Allocations are identified by their byte offset, since the storage may
    move when it grows.
    """

    def __init__(self, initial_size: int = DEFAULT_SIZE, alignment: int = DEFAULT_ALIGNMENT) -> None:
        _check(initial_size, alignment)
        self._block = bytearray(initial_size)
        self._alignment = alignment
        self._cursor = 0

    def allocate(self, size: int) -> int:
        """Reserve ``size`` bytes and return the offset of the reservation."""
        if size < 0:
            raise ValueError("size must not be negative")
        new_cursor = forward_align(self._cursor + size, self._alignment)
        if new_cursor > len(self._block):
            self._block.extend(bytes(new_cursor - len(self._block)))
        old_cursor, self._cursor = self._cursor, new_cursor
        return old_cursor

    def view(self, index: int, size: int) -> bytes:
        """Return a copy of ``size`` bytes starting at offset ``index``."""
        if index < 0 or size < 0 or index + size > len(self._block):
            raise IndexError("range outside the buffer")
        return bytes(self._block[index:index + size])

    def write(self, data: bytes, index: int) -> None:
        """Copy ``data`` into the buffer at offset ``index``."""
        if index < 0 or index + len(data) > len(self._block):
            raise IndexError("range outside the buffer")
        self._block[index:index + len(data)] = data

    def clear(self) -> None:
        """Release every allocation; the storage is kept."""
        self._cursor = 0

    def __len__(self) -> int:
        return self._cursor

    def __copy__(self) -> MemBufferDynamic:
        other = MemBufferDynamic(0, self._alignment)
        other._block = bytearray(self._block)
        other._cursor = self._cursor
        return other


class MemBuffer:
    """A fixed-size bump allocator handing out views into one block."""

    def __init__(self, size: int = DEFAULT_SIZE, alignment: int = DEFAULT_ALIGNMENT) -> None:
        _check(size, alignment)
        self._block = bytearray(size)
        self._view = memoryview(self._block)
        self._alignment = alignment
        self._cursor = 0

    def allocate(self, size: int) -> memoryview:
        """Reserve ``size`` bytes and return a writable view of them."""
        if size < 0:
            raise ValueError("size must not be negative")
        if self._cursor + size >= len(self._block):
            raise MemoryError("MemBuffer out of memory!")
        start = self._cursor
        self._cursor = forward_align(self._cursor + size, self._alignment)
        return self._view[start:start + size]

    def clear(self) -> None:
        """Release every allocation; the memory is reused afterwards."""
        self._cursor = 0

    def __len__(self) -> int:
        return self._cursor


_temp_lock = threading.Lock()
_temp_buffer = MemBuffer(TEMP_BUFFER_SIZE)


def temp_alloc(size: int) -> memoryview:
    """Allocate from the per-frame scratch buffer."""
    with _temp_lock:
        return _temp_buffer.allocate(size)


def temp_clear() -> None:
    """Release everything in the per-frame scratch buffer."""
    with _temp_lock:
        _temp_buffer.clear()