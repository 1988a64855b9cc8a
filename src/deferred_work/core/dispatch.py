"""Execution contexts that work functions hand their work to.

Deferred tasks do not schedule anything themselves. A work function that
wants to run off the calling thread dispatches to one of these queues and
invokes its completion from there.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class DispatchQueue(Protocol):
    """Something that runs a function now or later, on some thread."""

    def dispatch(self, fn: Callable[..., Any], /, *args: Any) -> None: ...


class InlineQueue(DispatchQueue):
    """Runs every dispatched function immediately on the calling thread."""

    def dispatch(self, fn: Callable[..., Any], /, *args: Any) -> None:
        fn(*args)


class BackgroundQueue(DispatchQueue):
    """A thread pool backed queue.

    Exceptions escaping a dispatched function are logged; they cannot reach
    the caller of ``dispatch`` because it has already returned.
    """

    def __init__(self, max_workers: int = 4, *, name: str = "deferred-work") -> None:
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix=name)

    def dispatch(self, fn: Callable[..., Any], /, *args: Any) -> None:
        future = self._executor.submit(fn, *args)
        future.add_done_callback(_log_unhandled)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> BackgroundQueue:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown(wait=True)


def _log_unhandled(future: Future[Any]) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error(
            "Dispatched function raised",
            exc_info=(type(exc), exc, exc.__traceback__),
        )
