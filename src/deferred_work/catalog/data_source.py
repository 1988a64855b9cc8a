"""Data sources the catalog pipeline reads from and writes to."""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable

from deferred_work.catalog.models import Item
from deferred_work.core.dispatch import DispatchQueue, InlineQueue
from deferred_work.core.outcome import Failure, Success
from deferred_work.core.task import Completion, DeferredTask

logger = logging.getLogger(__name__)


class DataSource(ABC):
    """Abstract base class for item stores.

    Implementations may be in-memory, remote, or anything else, as long as
    both operations return deferred tasks.
    """

    @abstractmethod
    def fetch(self, query: str) -> DeferredTask[list[Item]]:
        """Fetch the items matching a query.

        Args:
            query: Substring matched against item labels; empty matches all.

        Returns:
            A task completing with the matching items.
        """

    @abstractmethod
    def persist(self, item: Item) -> DeferredTask[Item]:
        """Store an item.

        Args:
            item: The item to store.

        Returns:
            A task completing with the stored item.
        """


class InMemoryDataSource(DataSource):
    """A data source backed by a list owned by this instance.

    Completions are delivered through ``queue``. ``latency_seconds`` sleeps
    inside the dispatched work to imitate a slow backend, and ``fail_with``
    makes every operation fail with the given error.
    """

    def __init__(
        self,
        items: Iterable[Item] = (),
        queue: DispatchQueue | None = None,
        *,
        latency_seconds: float = 0.0,
        fail_with: Exception | None = None,
    ) -> None:
        self._items = list(items)
        self._queue = queue if queue is not None else InlineQueue()
        self._latency_seconds = latency_seconds
        self._fail_with = fail_with
        self._lock = threading.Lock()

    @property
    def items(self) -> list[Item]:
        with self._lock:
            return list(self._items)

    def fetch(self, query: str) -> DeferredTask[list[Item]]:
        def work(completion: Completion[list[Item]]) -> None:
            def run() -> None:
                self._pause()
                if self._fail_with is not None:
                    completion(Failure(self._fail_with))
                    return
                with self._lock:
                    found = [i for i in self._items if query in i.label]
                logger.info("Fetched items", extra={"query": query, "count": len(found)})
                completion(Success(found))

            self._queue.dispatch(run)

        return DeferredTask.create(work)

    def persist(self, item: Item) -> DeferredTask[Item]:
        def work(completion: Completion[Item]) -> None:
            if self._fail_with is not None:
                error = self._fail_with
                self._queue.dispatch(completion, Failure(error))
                return
            with self._lock:
                self._items.append(item)

            def run() -> None:
                self._pause()
                logger.info("Persisted item", extra={"score": item.score, "label": item.label})
                completion(Success(item))

            self._queue.dispatch(run)

        return DeferredTask.create(work)

    def _pause(self) -> None:
        if self._latency_seconds > 0:
            time.sleep(self._latency_seconds)
