import pytest

from dgengine.render_common import IndexDataType, RenderFeature, RenderMode
from dgengine.render_state import Attr, Command, RenderState, StateType
from dgengine.renderer import GlobalRenderState, Renderer


class FakeBackend:
    def __init__(self):
        self.calls = []

    def clear(self, colour):
        self.calls.append(("clear", colour))

    def set_clear_color(self, r, g, b, a):
        self.calls.append(("set_clear_color", r, g, b, a))

    def set_scissor_box(self, x, y, w, h):
        self.calls.append(("set_scissor_box", x, y, w, h))

    def enable(self, feature):
        self.calls.append(("enable", feature))

    def disable(self, feature):
        self.calls.append(("disable", feature))

    def draw_indexed(self, mode, data_type, instance_count, element_count):
        self.calls.append(("draw_indexed", mode, data_type, instance_count, element_count))


def _flush(renderer):
    renderer.swap_buffers()
    renderer.execute_render_commands()


@pytest.fixture
def setup():
    backend = FakeBackend()
    return backend, Renderer(backend)


def test_calls_reach_backend_only_after_swap(setup):
    backend, renderer = setup
    renderer.clear()
    renderer.execute_render_commands()
    assert backend.calls == []
    _flush(renderer)
    assert backend.calls == [("clear", None)]


def test_calls_keep_order(setup):
    backend, renderer = setup
    renderer.set_clear_color(0.5, 0.25, 0.0)
    renderer.clear((0.5, 0.25, 0.0, 1.0))
    renderer.draw_indexed(RenderMode.TRIANGLES, IndexDataType.UNSIGNED_16, 1, 6)
    _flush(renderer)
    assert backend.calls == [
        ("set_clear_color", 0.5, 0.25, 0.0, 1.0),
        ("clear", (0.5, 0.25, 0.0, 1.0)),
        ("draw_indexed", RenderMode.TRIANGLES, IndexDataType.UNSIGNED_16, 1, 6),
    ]


def test_clear_rejects_bad_colour(setup):
    _, renderer = setup
    with pytest.raises(ValueError):
        renderer.clear((1.0, 0.0))


def test_draw_indexed_needs_elements(setup):
    _, renderer = setup
    with pytest.raises(ValueError):
        renderer.draw_indexed(RenderMode.LINES, IndexDataType.UNSIGNED_8, 1, 0)


def test_submit_tags_state_with_current_group(setup):
    _, renderer = setup
    state = RenderState.create()
    state.set(Attr.TYPE, StateType.COMMAND)
    state.set(Attr.COMMAND, Command.DRAW)
    gid = renderer.begin_new_group()
    tagged = renderer.submit(state, lambda: None)
    assert tagged.get(Attr.GROUP) == gid
    assert tagged.get(Attr.COMMAND) == Command.DRAW
    renderer.end_current_group()
    assert renderer.submit(state, lambda: None).get(Attr.GROUP) == 0


def test_begin_scene_resets_groups(setup):
    _, renderer = setup
    first = renderer.begin_new_group()
    renderer.begin_scene()
    assert renderer.begin_new_group() == first


def test_enable_and_disable_track_state(setup):
    backend, renderer = setup
    renderer.enable(RenderFeature.DEPTH_TEST)
    assert renderer.global_render_state().features[RenderFeature.DEPTH_TEST] is True
    renderer.disable(RenderFeature.DEPTH_TEST)
    assert renderer.global_render_state().features[RenderFeature.DEPTH_TEST] is False
    _flush(renderer)
    assert backend.calls == [("enable", RenderFeature.DEPTH_TEST), ("disable", RenderFeature.DEPTH_TEST)]


def test_scissor_box_is_recorded(setup):
    backend, renderer = setup
    renderer.set_scissor_box(1, 2, 3, 4)
    assert renderer.global_render_state().scissor_box == (1, 2, 3, 4)
    _flush(renderer)
    assert backend.calls == [("set_scissor_box", 1, 2, 3, 4)]


def test_snapshot_is_independent(setup):
    _, renderer = setup
    snapshot = renderer.global_render_state()
    renderer.enable(RenderFeature.SCISSOR)
    assert snapshot.features[RenderFeature.SCISSOR] is False


def test_set_render_state_restores_snapshot(setup):
    backend, renderer = setup
    saved = renderer.global_render_state()
    renderer.enable(RenderFeature.SCISSOR)
    renderer.set_scissor_box(5, 6, 7, 8)
    renderer.set_render_state(saved)
    assert renderer.global_render_state() == saved
    _flush(renderer)
    assert backend.calls[-1] == ("disable", RenderFeature.SCISSOR)


def test_set_render_state_only_changes_differences(setup):
    backend, renderer = setup
    target = GlobalRenderState()
    target.features[RenderFeature.DEPTH_TEST] = True
    renderer.set_render_state(target)
    renderer.set_render_state(None)
    _flush(renderer)
    assert backend.calls == [("enable", RenderFeature.DEPTH_TEST)]