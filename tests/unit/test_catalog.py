"""Unit tests for the catalog models, selection, and in-memory data source."""

from __future__ import annotations

from collections.abc import Callable

from deferred_work.catalog.data_source import InMemoryDataSource
from deferred_work.catalog.models import Item
from deferred_work.catalog.selection import find_best, select_best
from deferred_work.core.dispatch import BackgroundQueue
from deferred_work.core.errors import EmptySelectionError, NetworkError
from deferred_work.core.outcome import Failure, Success

from ..fakes import OutcomeRecorder


def test_items_compare_by_score_only() -> None:
    assert Item(3, "a") == Item(3, "b")
    assert Item(2, "z") < Item(3, "a")
    assert max([Item(1), Item(11), Item(10)]).score == 11


def test_select_best_picks_highest_score(sample_items: list[Item]) -> None:
    best = select_best(sample_items)

    assert best is not None
    assert best.score == 11


def test_select_best_of_nothing_is_none() -> None:
    assert select_best([]) is None


def test_select_best_keeps_first_of_ties() -> None:
    first = Item(5, "first")
    best = select_best([Item(1), first, Item(5, "second")])

    assert best is not None
    assert best.label == "first"


def test_find_best_fails_on_empty_input(recorder: Callable[[], OutcomeRecorder]) -> None:
    rec = recorder()
    find_best([]).start(rec)

    assert len(rec.outcomes) == 1
    assert isinstance(rec.outcomes[0], Failure)
    assert isinstance(rec.outcomes[0].error, EmptySelectionError)


def test_find_best_runs_on_queue(
    sample_items: list[Item],
    background_queue: BackgroundQueue,
    recorder: Callable[[], OutcomeRecorder],
) -> None:
    rec = recorder()
    find_best(sample_items, background_queue).start(rec)

    assert rec.wait() == Success(Item(11))
    assert rec.threads[0].startswith("test-pool")


def test_fetch_filters_by_label(recorder: Callable[[], OutcomeRecorder]) -> None:
    source = InMemoryDataSource([Item(1, "tabby"), Item(2, "siamese"), Item(3, "tabby-2")])

    rec = recorder()
    source.fetch("tabby").start(rec)

    assert rec.outcomes == [Success([Item(1), Item(3)])]


def test_fetch_with_empty_query_returns_everything(
    inline_source: InMemoryDataSource, recorder: Callable[[], OutcomeRecorder]
) -> None:
    rec = recorder()
    inline_source.fetch("").start(rec)

    outcome = rec.outcomes[0]
    assert isinstance(outcome, Success)
    assert [i.score for i in outcome.value] == [1, 3, 4, 6, 7, 1, 10, 11]


def test_fetch_is_lazy_and_returns_a_snapshot(
    inline_source: InMemoryDataSource, recorder: Callable[[], OutcomeRecorder]
) -> None:
    task = inline_source.fetch("")
    inline_source.persist(Item(99, "late")).start(lambda _: None)

    rec = recorder()
    task.start(rec)

    outcome = rec.outcomes[0]
    assert isinstance(outcome, Success)
    assert Item(99) in outcome.value
    outcome.value.clear()
    assert len(inline_source.items) == 9


def test_persist_appends_and_echoes(
    background_source: InMemoryDataSource, recorder: Callable[[], OutcomeRecorder]
) -> None:
    item = Item(42, "new")
    rec = recorder()
    background_source.persist(item).start(rec)

    assert rec.wait() == Success(item)
    assert background_source.items[-1] is item


def test_persist_started_twice_appends_twice(
    inline_source: InMemoryDataSource,
) -> None:
    task = inline_source.persist(Item(5, "dup"))
    task.start(lambda _: None)
    task.start(lambda _: None)

    assert [i.label for i in inline_source.items].count("dup") == 2


def test_outage_fails_every_operation(recorder: Callable[[], OutcomeRecorder]) -> None:
    error = NetworkError("offline")
    source = InMemoryDataSource([Item(1)], fail_with=error)

    fetched, persisted = recorder(), recorder()
    source.fetch("").start(fetched)
    source.persist(Item(2)).start(persisted)

    assert fetched.outcomes == [Failure(error)]
    assert persisted.outcomes == [Failure(error)]
    assert source.items == [Item(1)]
