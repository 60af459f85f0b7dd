"""A 64-bit sort key describing a render command or draw call."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

_ATTR_COUNT_BITS = 7
_ATTR_COUNT_MASK = (1 << _ATTR_COUNT_BITS) - 1
_DATA_MASK = (1 << 64) - 1

# Field widths.
_COUNT = {
    "SYSTEM": 4,
    "TYPE": 4,
    "COMMAND": 40,
    "GROUP": 16,
    "TRANSLUCENCY": 2,
    "DEPTH": 16,
    "VAO": 8,
    "MATERIAL": 30,
}

# Field offsets. Command fields and draw-call fields share the low bits.
_BEGIN = {"COMMAND": 0, "GROUP": _COUNT["COMMAND"], "MATERIAL": 0}
_BEGIN["VAO"] = _COUNT["MATERIAL"]
_BEGIN["DEPTH"] = _BEGIN["VAO"] + _COUNT["VAO"]
_BEGIN["TRANSLUCENCY"] = _BEGIN["DEPTH"] + _COUNT["DEPTH"]
_BEGIN["TYPE"] = _BEGIN["TRANSLUCENCY"] + _COUNT["TRANSLUCENCY"]
_BEGIN["SYSTEM"] = _BEGIN["TYPE"] + _COUNT["TYPE"]


class Attr(IntEnum):
    """A field of the render state: offset and width packed together."""

    SYSTEM = (_BEGIN["SYSTEM"] << _ATTR_COUNT_BITS) | _COUNT["SYSTEM"]
    TYPE = (_BEGIN["TYPE"] << _ATTR_COUNT_BITS) | _COUNT["TYPE"]
    COMMAND = (_BEGIN["COMMAND"] << _ATTR_COUNT_BITS) | _COUNT["COMMAND"]
    GROUP = (_BEGIN["GROUP"] << _ATTR_COUNT_BITS) | _COUNT["GROUP"]
    TRANSLUCENCY = (_BEGIN["TRANSLUCENCY"] << _ATTR_COUNT_BITS) | _COUNT["TRANSLUCENCY"]
    DEPTH = (_BEGIN["DEPTH"] << _ATTR_COUNT_BITS) | _COUNT["DEPTH"]
    VAO = (_BEGIN["VAO"] << _ATTR_COUNT_BITS) | _COUNT["VAO"]
    MATERIAL = (_BEGIN["MATERIAL"] << _ATTR_COUNT_BITS) | _COUNT["MATERIAL"]

    @property
    def bit_begin(self) -> int:
        return self.value >> _ATTR_COUNT_BITS

    @property
    def bit_count(self) -> int:
        return self.value & _ATTR_COUNT_MASK


class StateType(IntEnum):
    DRAW_CALL = 0
    COMMAND = 1


class Command(IntEnum):
    NONE = 0
    RESIZE = 1
    SWAP_WINDOW = 2
    SET_CLEAR_COLOR = 3
    SET_SCISSOR = 4
    ENABLE_DEPTH_TEST = 5
    DISABLE_DEPTH_TEST = 6
    ENABLE_FEATURE = 7
    DISABLE_FEATURE = 8
    CLEAR = 9
    DRAW = 10
    BUFFER_CREATE = 11
    BUFFER_DELETE = 12
    BUFFER_SET_DATA = 13
    BUFFER_BIND = 14
    BUFFER_SET_LAYOUT = 15
    BUFFER_END = 16
    VERTEX_ARRAY = 17
    VERTEX_ARRAY_CREATE = 18
    VERTEX_ARRAY_DELETE = 19
    VERTEX_ARRAY_BIND = 20
    VERTEX_ARRAY_UNBIND = 21
    VERTEX_ARRAY_ADD_VERTEX_BUFFER = 22
    VERTEX_ARRAY_SET_INDEX_BUFFER = 23
    VERTEX_ARRAY_END = 24
    INDEXED_BUFFER_BIND = 25
    BINDING_POINT_CREATE = 26
    BINDING_POINT_DELETE = 27
    RENDERER_PROGRAM_CREATE = 28
    RENDERER_PROGRAM_DELETE = 29
    RENDERER_PROGRAM_INIT = 30
    RENDERER_PROGRAM_DESTROY = 31
    RENDERER_PROGRAM_BIND = 32
    RENDERER_PROGRAM_UNBIND = 33
    RENDERER_PROGRAM_UPLOAD_UNIFORM = 34
    MATERIAL_BIND = 35
    TEXTURE_CREATE = 36
    TEXTURE_DELETE = 37
    TEXTURE_BIND_TO_SLOT = 38


class StateSystem(IntEnum):
    NONE = 0
    GAME = 1
    EFFECT = 2
    HUD = 3


class Translucency(IntEnum):
    NONE = 0
    ADDITIVE = 1
    SUBTRACTIVE = 2


@dataclass(order=True)
class RenderState:
    """Packed 64-bit render key; comparing states compares the keys."""

    data: int = 0

    @classmethod
    def create(cls) -> RenderState:
        """Return an empty state belonging to no system."""
        state = cls(0)
        state.set(Attr.SYSTEM, StateSystem.NONE)
        return state

    def set(self, attr: Attr, value: int) -> None:
        """Store ``value`` in field ``attr``, truncated to the field width."""
        attr = Attr(attr)
        mask = ((1 << attr.bit_count) - 1) << attr.bit_begin
        self.data = ((self.data & ~mask) | ((int(value) << attr.bit_begin) & mask)) & _DATA_MASK

    def get(self, attr: Attr) -> int:
        """Return the value of field ``attr``."""
        attr = Attr(attr)
        return (self.data >> attr.bit_begin) & ((1 << attr.bit_count) - 1)

    @staticmethod
    def compute_normalized_depth(low: float, high: float, value: float) -> int:
        """Map ``value`` in [low, high] onto the full range of the depth field."""
        span = high - low
        if span <= 0:
            raise ValueError("high must be greater than low")
        offset = min(max(value - low, 0.0), span)
        upper = float((1 << Attr.DEPTH.bit_count) - 1)
        return int((offset / span) * upper)