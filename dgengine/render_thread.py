"""A render thread that runs one frame at a time in lock-step with the main thread."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from enum import Enum
from typing import Protocol

_log = logging.getLogger(__name__)


class GraphicsContext(Protocol):
    """A graphics context owned by the render thread; ``init`` raises on failure."""

    def init(self) -> None: ...

    def shut_down(self) -> None: ...


class _ReturnCode(Enum):
    NONE = 0
    READY = 1
    FAIL = 2


class RenderThread:
    """Runs ``frame`` on its own thread, one call per ``resume``.

    After ``start`` and after each frame the render thread waits; ``sync``
    waits for it to reach that point and ``resume`` lets it run the next frame.
    """

    def __init__(self, context: GraphicsContext, frame: Callable[[], object]) -> None:
        self._context = context
        self._frame = frame
        self._cond = threading.Condition()
        self._render_done = False
        self._return_code = _ReturnCode.NONE
        self._should_stop = False
        self._error: BaseException | None = None
        self._thread: threading.Thread | None = None

    def _signal_done_and_wait(self) -> None:
        with self._cond:
            self._render_done = True
            self._cond.notify_all()
            self._cond.wait_for(lambda: not self._render_done)

    def _worker(self) -> None:
        try:
            self._context.init()
        except Exception:
            _log.exception("Unable to set rendering context!")
            with self._cond:
                self._return_code = _ReturnCode.FAIL
                self._render_done = True
                self._cond.notify_all()
            return

        self._return_code = _ReturnCode.READY
        self._signal_done_and_wait()

        while not self.should_exit():
            try:
                self._frame()
            except Exception as exc:
                _log.exception("Render frame failed")
                with self._cond:
                    self._error = exc
                    self._should_stop = True
                    self._render_done = True
                    self._cond.notify_all()
                break
            self._signal_done_and_wait()

        try:
            self._context.shut_down()
        except Exception:
            _log.exception("Trouble shutting down the rendering context!")

    def start(self) -> bool:
        """Start the thread; return True once its context is ready."""
        if self._thread is not None:
            raise RuntimeError("render thread already started")
        with self._cond:
            self._render_done = False
        self._thread = threading.Thread(target=self._worker, name="render", daemon=True)
        self._thread.start()
        with self._cond:
            self._cond.wait_for(lambda: self._render_done)
        return self._return_code is _ReturnCode.READY

    def stop(self) -> None:
        """Wait for the current frame, then end the thread and join it."""
        if self._thread is None:
            return
        with self._cond:
            self._cond.wait_for(lambda: self._render_done)
            self._should_stop = True
            self._render_done = False
            self._cond.notify_all()
        self._thread.join()
        self._thread = None

    def sync(self) -> None:
        """Wait until the render thread has finished its frame and is waiting."""
        with self._cond:
            self._cond.wait_for(lambda: self._render_done)
        if self._error is not None:
            raise RuntimeError("render frame failed") from self._error

    def resume(self) -> None:
        """Let the render thread run its next frame."""
        with self._cond:
            self._render_done = False
            self._cond.notify_all()

    def should_exit(self) -> bool:
        with self._cond:
            return self._should_stop

    def __enter__(self) -> RenderThread:
        if not self.start():
            self.stop()
            raise RuntimeError("render thread failed to start")
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()