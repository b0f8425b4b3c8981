"""Serialization queue - one read-modify-write at a time, in FIFO order."""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SerialQueue:
    """
    Run submitted callables one at a time on a single worker thread.

    Callables run in submission order and a callable starts only after the
    previous one has finished, whether it returned or raised. A failure is
    delivered to its own submitter and the queue keeps going.

    A callable must not submit to the queue it is running on and wait for
    the result; that would deadlock the single worker.
    """

    def __init__(self, name: str = "journal"):
        self.name = name
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"{name}-queue")
        self._lock = threading.Lock()
        self._pending = 0

    @property
    def pending(self) -> int:
        """Callables submitted but not yet finished (including the running one)."""
        with self._lock:
            return self._pending

    def submit_async(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> Future:
        """Queue fn and return a Future for its result."""
        with self._lock:
            future = self._executor.submit(self._run, fn, *args, **kwargs)
            self._pending += 1
        return future

    def submit(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Queue fn, block until it has run, and return its result (or raise its error)."""
        return self.submit_async(fn, *args, **kwargs).result()

    def _run(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            logger.warning(f"Queued operation failed on {self.name} queue: {e}")
            raise
        finally:
            with self._lock:
                self._pending -= 1

    def close(self) -> None:
        """Finish queued work and stop the worker. Later submits raise RuntimeError."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "SerialQueue":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
