"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from deferred_work.catalog.data_source import InMemoryDataSource
from deferred_work.catalog.models import Item
from deferred_work.core.dispatch import BackgroundQueue, InlineQueue

from .fakes import OutcomeRecorder

SAMPLE_SCORES = [1, 3, 4, 6, 7, 1, 10, 11]


@pytest.fixture
def recorder() -> Callable[[], OutcomeRecorder]:
    """Provide a factory for fresh outcome recorders."""
    return OutcomeRecorder


@pytest.fixture
def inline_queue() -> InlineQueue:
    return InlineQueue()


@pytest.fixture
def background_queue() -> Iterator[BackgroundQueue]:
    """Provide a thread pool queue that is shut down after the test."""
    queue = BackgroundQueue(max_workers=2, name="test-pool")
    yield queue
    queue.shutdown(wait=True)


@pytest.fixture
def sample_items() -> list[Item]:
    return [Item(score=s, label=f"cat-{i}") for i, s in enumerate(SAMPLE_SCORES)]


@pytest.fixture
def inline_source(sample_items: list[Item], inline_queue: InlineQueue) -> InMemoryDataSource:
    return InMemoryDataSource(sample_items, inline_queue)


@pytest.fixture
def background_source(
    sample_items: list[Item], background_queue: BackgroundQueue
) -> InMemoryDataSource:
    return InMemoryDataSource(sample_items, background_queue, latency_seconds=0.01)
