"""Await deferred tasks from asyncio code."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import TypeVar

from deferred_work.core.outcome import Outcome
from deferred_work.core.task import DeferredTask

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def outcome_of(task: DeferredTask[T]) -> Outcome[T]:
    """Start ``task`` and wait for its outcome on the running loop.

    The completion may fire on any thread. Cancelling the awaiting coroutine
    abandons the result but does not stop work already handed to another
    thread.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[Outcome[T]] = loop.create_future()
    lock = threading.Lock()
    completed = False

    def resolve(outcome: Outcome[T]) -> None:
        if not future.done():
            future.set_result(outcome)

    def completion(outcome: Outcome[T]) -> None:
        nonlocal completed
        with lock:
            if completed:
                logger.warning("Ignoring repeated completion", extra={"outcome": repr(outcome)})
                return
            completed = True
        try:
            loop.call_soon_threadsafe(resolve, outcome)
        except RuntimeError:
            # Loop already closed; nobody is waiting anymore.
            logger.debug("Dropping completion after loop shutdown")

    task.start(completion)
    return await future
