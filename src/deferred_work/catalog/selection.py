"""Pick the best item from a sequence, directly or as a deferred task."""

from __future__ import annotations

from collections.abc import Sequence

from deferred_work.catalog.models import Item
from deferred_work.core.dispatch import DispatchQueue, InlineQueue
from deferred_work.core.errors import EmptySelectionError
from deferred_work.core.outcome import Failure, Success
from deferred_work.core.task import Completion, DeferredTask


def select_best(items: Sequence[Item]) -> Item | None:
    """Return the highest scoring item, or None when there are none.

    Ties keep the first item in input order.
    """
    best: Item | None = None
    for item in items:
        if best is None or item > best:
            best = item
    return best


def find_best(items: Sequence[Item], queue: DispatchQueue | None = None) -> DeferredTask[Item]:
    """Run :func:`select_best` on ``queue``; fail with EmptySelectionError on no input."""
    snapshot = list(items)
    target = queue if queue is not None else InlineQueue()

    def work(completion: Completion[Item]) -> None:
        def run() -> None:
            best = select_best(snapshot)
            if best is None:
                completion(Failure(EmptySelectionError()))
            else:
                completion(Success(best))

        target.dispatch(run)

    return DeferredTask.create(work)
