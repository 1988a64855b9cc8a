"""Deferred units of work and the chain combinator.

A :class:`DeferredTask` wraps a work function. Building tasks and chaining
them is pure data assembly: nothing runs until :meth:`DeferredTask.start` is
called on the final task of a pipeline.

Example:
    >>> task = DeferredTask.succeed(2).chain(lambda x: DeferredTask.succeed(x * 10))
    >>> task.start(print)
    Success(value=20)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeAlias, TypeVar

from deferred_work.core.errors import TaskError
from deferred_work.core.outcome import Failure, Outcome, Success

logger = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")

Completion: TypeAlias = Callable[[Outcome[A]], None]
Work: TypeAlias = Callable[[Completion[A]], None]


class DeferredTask(Generic[A]):
    """A unit of work that completes exactly once with an :data:`Outcome`.

    The work function receives a completion callback and must call it exactly
    once. It may do so synchronously or later from another thread; this class
    does not enforce either.
    """

    __slots__ = ("_work",)

    def __init__(self, work: Work[A]) -> None:
        self._work = work

    @classmethod
    def create(cls, work: Work[A]) -> DeferredTask[A]:
        """Wrap ``work`` without invoking it."""
        return cls(work)

    @classmethod
    def succeed(cls, value: A) -> DeferredTask[A]:
        return cls(lambda completion: completion(Success(value)))

    @classmethod
    def fail(cls, error: Exception) -> DeferredTask[A]:
        return cls(lambda completion: completion(Failure(error)))

    def start(self, completion: Completion[A]) -> None:
        """Run the work function, delivering its outcome to ``completion``.

        Every call runs the work function again; whether that is safe depends
        on the work function.
        """
        self._work(completion)

    def chain(self, function: Callable[[A], DeferredTask[B]]) -> DeferredTask[B]:
        """Sequence this task with the task produced by ``function``.

        On success the value is handed to ``function`` and the resulting task
        is started with the final completion. On failure the error goes
        straight to the final completion and ``function`` is never called.
        An exception raised by ``function`` itself becomes the failure.

        Args:
            function: Builds the next task from this task's value.

        Returns:
            A task that completes with the outcome of the second task, or with
            the first failure encountered.
        """

        def work(completion: Completion[B]) -> None:
            def handle(outcome: Outcome[A]) -> None:
                if isinstance(outcome, Failure):
                    logger.debug("Chain short-circuited", extra={"error": repr(outcome.error)})
                    completion(outcome)
                    return

                try:
                    following = function(outcome.value)
                except TaskError as e:
                    completion(Failure(e))
                    return
                except Exception as e:
                    # Completion must fire even for unexpected errors.
                    logger.warning("Chained function raised", exc_info=True)
                    completion(Failure(e))
                    return
                following.start(completion)

            self.start(handle)

        return DeferredTask(work)
