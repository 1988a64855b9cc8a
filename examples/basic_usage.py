#!/usr/bin/env python3
"""Programmatic pipeline example.

This demonstrates using the components directly:

* load settings from `.env`
* seed an in-memory data source
* compose fetch -> select -> persist with `chain`
* start the pipeline and wait for its single completion
"""

from __future__ import annotations

import argparse
import threading
from typing import Sequence

from deferred_work.catalog import BestItemService, InMemoryDataSource, Item
from deferred_work.core import BackgroundQueue, Failure, Outcome
from deferred_work.core.config import DeferredWorkSettings
from deferred_work.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Save the best item (programmatic example).")
    parser.add_argument("--query", default="", help="Substring matched against item labels")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = DeferredWorkSettings()
    configure_logging(settings.log_level)

    done = threading.Event()
    result: list[Outcome[Item]] = []

    def on_complete(outcome: Outcome[Item]) -> None:
        result.append(outcome)
        done.set()

    with BackgroundQueue(max_workers=settings.max_workers) as queue:
        source = InMemoryDataSource(
            (Item(score=s, label=f"cat-{i}") for i, s in enumerate(settings.seed_scores)),
            queue,
            latency_seconds=settings.latency_seconds,
        )
        pipeline = BestItemService(source=source, queue=queue).save_best(args.query)

        # Nothing has run yet; starting the pipeline kicks off the fetch.
        pipeline.start(on_complete)
        done.wait()

    outcome = result[0]
    if isinstance(outcome, Failure):
        print(f"Failed: {outcome.error!r}")
        return 1

    print(f"Saved {outcome.value!r}; store now holds {len(source.items)} items")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
