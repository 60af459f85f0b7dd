"""Allocation of uniform and shader-storage block binding points."""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum

_MAX_POINTS_PER_DOMAIN = 32
_MAX_INDEX = 0xFFFF


class StorageBlockType(IntEnum):
    UNIFORM = 0
    SHADER_STORAGE = 1


class ShaderDomain(IntEnum):
    VERTEX = 0
    GEOMETRY = 1
    FRAGMENT = 2


class BindingPointTable:
    """Binding point ranges per block type and shader domain.

    ``limits`` gives the number of blocks each (block type, domain) pair
    supports; each is capped at 32. Within a block type the domains get
    consecutive ranges in domain order.
    """

    def __init__(self, limits: Mapping[tuple[StorageBlockType, ShaderDomain], int] | None = None) -> None:
        limits = dict(limits or {})
        self._begin: dict[tuple[StorageBlockType, ShaderDomain], int] = {}
        self._count: dict[tuple[StorageBlockType, ShaderDomain], int] = {}
        self._used: dict[tuple[StorageBlockType, ShaderDomain], int] = {}
        for block_type in StorageBlockType:
            begin = 0
            for domain in ShaderDomain:
                key = (block_type, domain)
                count = max(0, min(int(limits.get(key, 0)), _MAX_POINTS_PER_DOMAIN))
                self._begin[key] = begin
                self._count[key] = count
                self._used[key] = 0
                begin += count

    def begin(self, block_type: StorageBlockType, domain: ShaderDomain) -> int:
        """Return the first binding point of the range."""
        return self._begin[(StorageBlockType(block_type), ShaderDomain(domain))]

    def count(self, block_type: StorageBlockType, domain: ShaderDomain) -> int:
        """Return the number of binding points in the range."""
        return self._count[(StorageBlockType(block_type), ShaderDomain(domain))]

    def _acquire(self, block_type: StorageBlockType, domain: ShaderDomain) -> int | None:
        key = (block_type, domain)
        used = self._used[key]
        for bit in range(self._count[key]):
            if not used & (1 << bit):
                self._used[key] = used | (1 << bit)
                return self._begin[key] + bit
        return None

    def _free(self, block_type: StorageBlockType, domain: ShaderDomain, address: int) -> None:
        key = (block_type, domain)
        self._used[key] &= ~(1 << (address - self._begin[key]))


class BindingPoint:
    """One binding point taken from a table; released on ``release`` or exit."""

    def __init__(self, table: BindingPointTable) -> None:
        self._table = table
        self._binding: tuple[StorageBlockType, ShaderDomain, int] | None = None

    def capture(self, block_type: StorageBlockType, domain: ShaderDomain) -> bool:
        """Release any held point and take the next free one; False if none."""
        self.release()
        block_type = StorageBlockType(block_type)
        domain = ShaderDomain(domain)
        address = self._table._acquire(block_type, domain)
        if address is None:
            return False
        if address >= _MAX_INDEX:
            self._table._free(block_type, domain, address)
            raise ValueError("binding point index too high")
        self._binding = (block_type, domain, address)
        return True

    def release(self) -> None:
        """Give the held point back to the table, if any."""
        if self._binding is None:
            return
        block_type, domain, address = self._binding
        self._table._free(block_type, domain, address)
        self._binding = None

    def is_bound(self) -> bool:
        return self._binding is not None

    def _held(self) -> tuple[StorageBlockType, ShaderDomain, int]:
        if self._binding is None:
            raise LookupError("binding point is not bound")
        return self._binding

    def address(self) -> int:
        return self._held()[2]

    def domain(self) -> ShaderDomain:
        return self._held()[1]

    def block_type(self) -> StorageBlockType:
        return self._held()[0]

    def __enter__(self) -> BindingPoint:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()