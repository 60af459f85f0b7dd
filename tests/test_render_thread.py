import threading

import pytest

from dgengine.render_thread import RenderThread


class FakeContext:
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []
        self.thread_names = []

    def init(self):
        self.calls.append("init")
        self.thread_names.append(threading.current_thread().name)
        if self.fail:
            raise RuntimeError("no context")

    def shut_down(self):
        self.calls.append("shut_down")


class Counter:
    def __init__(self):
        self.count = 0

    def __call__(self):
        self.count += 1


@pytest.mark.timeout(10)
def test_frames_run_once_per_resume():
    context = FakeContext()
    counter = Counter()
    thread = RenderThread(context, counter)
    assert thread.start() is True
    assert counter.count == 0
    thread.resume()
    thread.sync()
    assert counter.count == 1
    thread.resume()
    thread.sync()
    assert counter.count == 2
    thread.stop()
    assert counter.count == 2
    assert context.calls == ["init", "shut_down"]
    assert thread.should_exit() is True


@pytest.mark.timeout(10)
def test_context_initialised_on_render_thread():
    context = FakeContext()
    thread = RenderThread(context, Counter())
    thread.start()
    thread.stop()
    assert context.thread_names == ["render"]


@pytest.mark.timeout(10)
def test_failed_init_reports_false():
    context = FakeContext(fail=True)
    counter = Counter()
    thread = RenderThread(context, counter)
    assert thread.start() is False
    thread.stop()
    assert context.calls == ["init"]
    assert counter.count == 0


@pytest.mark.timeout(10)
def test_context_manager_raises_on_failed_start():
    with pytest.raises(RuntimeError):
        with RenderThread(FakeContext(fail=True), Counter()):
            pass


@pytest.mark.timeout(10)
def test_context_manager_stops_thread():
    context = FakeContext()
    counter = Counter()
    with RenderThread(context, counter) as thread:
        thread.resume()
        thread.sync()
    assert counter.count == 1
    assert context.calls == ["init", "shut_down"]


@pytest.mark.timeout(10)
def test_frame_error_surfaces_in_sync():
    def broken():
        raise ValueError("boom")

    context = FakeContext()
    thread = RenderThread(context, broken)
    assert thread.start() is True
    thread.resume()
    with pytest.raises(RuntimeError):
        thread.sync()
    thread.stop()
    assert context.calls == ["init", "shut_down"]


@pytest.mark.timeout(10)
def test_start_twice_raises():
    thread = RenderThread(FakeContext(), Counter())
    thread.start()
    with pytest.raises(RuntimeError):
        thread.start()
    thread.stop()
    assert thread.should_exit() is True