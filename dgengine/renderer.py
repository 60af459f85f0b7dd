"""Front end that records renderer calls as commands for the render thread."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from dgengine.command_queue import RenderCommand, RenderCommandQueue
from dgengine.group import GroupStack
from dgengine.render_common import IndexDataType, RenderFeature, RenderMode
from dgengine.render_state import Attr, Command, RenderState, StateType

Colour = tuple[float, float, float, float]


class RendererBackend(Protocol):
    """The graphics calls that recorded commands eventually make."""

    def clear(self, colour: Colour | None) -> None: ...

    def set_clear_color(self, r: float, g: float, b: float, a: float) -> None: ...

    def set_scissor_box(self, x: int, y: int, w: int, h: int) -> None: ...

    def enable(self, feature: RenderFeature) -> None: ...

    def disable(self, feature: RenderFeature) -> None: ...

    def draw_indexed(self, mode: RenderMode, data_type: IndexDataType,
                     instance_count: int, element_count: int) -> None: ...


def _features_off() -> dict[RenderFeature, bool]:
    return {feature: False for feature in RenderFeature}


@dataclass
class GlobalRenderState:
    """Which features are on and the current scissor box."""

    features: dict[RenderFeature, bool] = field(default_factory=_features_off)
    scissor_box: tuple[int, int, int, int] = (0, 0, 0, 0)


def _command_state(command: Command) -> RenderState:
    state = RenderState.create()
    state.set(Attr.TYPE, StateType.COMMAND)
    state.set(Attr.COMMAND, command)
    return state


class Renderer:
    """Records renderer calls; they reach the backend once executed."""

    def __init__(self, backend: RendererBackend, queue: RenderCommandQueue | None = None) -> None:
        self._backend = backend
        self._queue = queue if queue is not None else RenderCommandQueue()
        self._group = GroupStack()
        self._state = GlobalRenderState()

    def submit(self, state: RenderState, command: RenderCommand) -> RenderState:
        """Queue ``command`` tagged with the current group; return the stored key."""
        tagged = RenderState(state.data)
        tagged.set(Attr.GROUP, self._group.current_id())
        self._queue.submit(tagged, command)
        return tagged

    def begin_scene(self) -> None:
        """Start a scene; group numbering starts again."""
        self._group.reset()

    def end_scene(self) -> None:
        """Finish a scene; nothing needs to happen here yet."""

    def begin_new_group(self) -> int:
        return self._group.begin_new_group()

    def end_current_group(self) -> None:
        self._group.end_current_group()

    def swap_buffers(self) -> None:
        self._queue.swap()

    def allocate(self, size: int) -> memoryview:
        return self._queue.allocate(size)

    def execute_render_commands(self) -> None:
        self._queue.execute()

    def clear(self, colour: Colour | None = None) -> None:
        """Clear the colour and depth buffers, optionally with ``colour``."""
        backend = self._backend
        value = None if colour is None else tuple(float(c) for c in colour)
        if value is not None and len(value) != 4:
            raise ValueError("colour needs four components")
        self.submit(_command_state(Command.CLEAR), lambda: backend.clear(value))

    def set_clear_color(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        backend = self._backend
        self.submit(_command_state(Command.SET_CLEAR_COLOR),
                    lambda: backend.set_clear_color(r, g, b, a))

    def set_scissor_box(self, x: int, y: int, w: int, h: int) -> None:
        backend = self._backend
        self.submit(_command_state(Command.SET_SCISSOR),
                    lambda: backend.set_scissor_box(x, y, w, h))
        self._state.scissor_box = (x, y, w, h)

    def enable(self, feature: RenderFeature) -> None:
        feature = RenderFeature(feature)
        backend = self._backend
        self.submit(_command_state(Command.ENABLE_FEATURE), lambda: backend.enable(feature))
        self._state.features[feature] = True

    def disable(self, feature: RenderFeature) -> None:
        feature = RenderFeature(feature)
        backend = self._backend
        self.submit(_command_state(Command.DISABLE_FEATURE), lambda: backend.disable(feature))
        self._state.features[feature] = False

    def draw_indexed(self, mode: RenderMode, data_type: IndexDataType,
                     instance_count: int, element_count: int) -> None:
        """Queue a draw of ``element_count`` indices, instanced if count > 1."""
        if element_count < 1:
            raise ValueError("element_count must be positive")
        mode = RenderMode(mode)
        data_type = IndexDataType(data_type)
        backend = self._backend
        self.submit(_command_state(Command.DRAW),
                    lambda: backend.draw_indexed(mode, data_type, instance_count, element_count))

    def global_render_state(self) -> GlobalRenderState:
        """Return a snapshot of the feature states and scissor box."""
        return GlobalRenderState(dict(self._state.features), self._state.scissor_box)

    def set_render_state(self, state: GlobalRenderState | None) -> None:
        """Switch features to match ``state`` and adopt its scissor box."""
        if state is None:
            return
        for feature in RenderFeature:
            wanted = state.features.get(feature, False)
            if self._state.features[feature] != wanted:
                if wanted:
                    self.enable(feature)
                else:
                    self.disable(feature)
        self._state.scissor_box = tuple(state.scissor_box)