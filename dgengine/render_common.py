"""Shared renderer enumerations and render resource identifiers."""

from __future__ import annotations

import itertools
import threading
from enum import Enum

INVALID_RENDER_RESOURCE_ID = 0xFFFFFFFF


class RenderFeature(Enum):
    """Renderer features that can be switched on and off."""

    SCISSOR = 0
    DEPTH_TEST = 1


class RenderMode(Enum):
    """Primitive type of a draw call."""

    POINTS = 0
    LINES = 1
    TRIANGLES = 2


class IndexDataType(Enum):
    """Element type of an index buffer."""

    UNSIGNED_8 = 0
    UNSIGNED_16 = 1
    UNSIGNED_32 = 2


_INDEX_SIZES = {
    IndexDataType.UNSIGNED_8: 1,
    IndexDataType.UNSIGNED_16: 2,
    IndexDataType.UNSIGNED_32: 4,
}


def index_data_type_size(data_type: IndexDataType) -> int:
    """Return the size in bytes of one index of ``data_type``."""
    return _INDEX_SIZES[IndexDataType(data_type)]


class RenderResource:
    """Base for objects that the render thread refers to by a unique id."""

    _ids = itertools.count(1)
    _lock = threading.Lock()

    def __init__(self) -> None:
        with RenderResource._lock:
            self._id = next(RenderResource._ids)

    def id(self) -> int:
        """Return this resource's id."""
        return self._id