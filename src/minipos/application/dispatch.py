from __future__ import annotations

import logging
import queue
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional, Protocol

log = logging.getLogger(__name__)

Callback = Callable[[Any], None]
ErrorCallback = Callable[[BaseException], None]


class Dispatcher(Protocol):
    def submit(self, fn: Callable[[], Any], on_done: Callback, on_error: Optional[ErrorCallback] = None) -> None: ...


class ImmediateDispatcher:
    """Runs jobs inline. Used by tests and headless scripts."""

    def submit(self, fn: Callable[[], Any], on_done: Callback, on_error: Optional[ErrorCallback] = None) -> None:
        try:
            result = fn()
        except Exception as e:
            log.exception("background_job_failed error=%s", e)
            if on_error is None:
                raise
            on_error(e)
            return
        on_done(result)


class ThreadDispatcher:
    """Runs jobs on a worker pool and hands results back to the UI thread.

    Workers never touch UI state: finished futures are queued and ``poll()``
    (called from the Tk event loop) runs the callbacks.
    """

    def __init__(self, max_workers: int = 4):
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="minipos-api")
        self._done: "queue.SimpleQueue[tuple[Future, Callback, Optional[ErrorCallback]]]" = queue.SimpleQueue()

    def submit(self, fn: Callable[[], Any], on_done: Callback, on_error: Optional[ErrorCallback] = None) -> None:
        future = self._pool.submit(fn)
        future.add_done_callback(lambda f: self._done.put((f, on_done, on_error)))

    def poll(self) -> int:
        handled = 0
        while True:
            try:
                future, on_done, on_error = self._done.get_nowait()
            except queue.Empty:
                return handled
            handled += 1
            if future.cancelled():
                continue
            err = future.exception()
            if err is not None:
                log.error("background_job_failed error=%s", err, exc_info=err)
                if on_error is not None:
                    on_error(err)
                continue
            on_done(future.result())

    def shutdown(self) -> None:
        self._pool.shutdown(wait=False, cancel_futures=True)
