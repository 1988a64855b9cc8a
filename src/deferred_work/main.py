"""CLI entrypoint for the deferred-work demo pipeline."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from pydantic import ValidationError

from deferred_work import __version__
from deferred_work.catalog.data_source import InMemoryDataSource
from deferred_work.catalog.models import Item
from deferred_work.catalog.service import BestItemService
from deferred_work.core.bridge import outcome_of
from deferred_work.core.config import DeferredWorkSettings
from deferred_work.core.dispatch import BackgroundQueue
from deferred_work.core.errors import NetworkError
from deferred_work.core.outcome import Failure, Outcome
from deferred_work.core.task import DeferredTask
from deferred_work.logging import configure_logging

logger = logging.getLogger(__name__)


def _parse_scores(value: str) -> list[int]:
    parts = [p.strip() for p in value.split(",")]
    try:
        return [int(p) for p in parts if p]
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected comma-separated integers, got '{value}'"
        ) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deferred-work",
        description="Run a fetch -> select -> persist pipeline built from deferred tasks",
    )
    parser.add_argument("--version", action="version", version=f"deferred-work {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    save_best = subparsers.add_parser(
        "save-best", help="Fetch items, pick the highest score, and persist it"
    )
    save_best.add_argument(
        "--query",
        default="",
        help="Substring matched against item labels (empty matches everything)",
    )
    save_best.add_argument(
        "--scores",
        type=_parse_scores,
        default=None,
        help="Comma-separated seed scores, e.g. '1,3,4' (defaults to DEFERRED_WORK_SEED_SCORES)",
    )
    save_best.add_argument(
        "--style",
        choices=("chained", "nested"),
        default="chained",
        help="Compose the pipeline with chain() or with hand-written nested callbacks",
    )
    save_best.add_argument(
        "--simulate-outage",
        action="store_true",
        help="Make every data source operation fail with a network error",
    )

    return parser


def _nested_task(service: BestItemService, query: str) -> DeferredTask[Item]:
    return DeferredTask.create(lambda completion: service.save_best_nested(query, completion))


def _run_save_best(args: argparse.Namespace, settings: DeferredWorkSettings) -> int:
    scores: list[int] | None = args.scores
    if scores is None:
        scores = settings.seed_scores

    items = [Item(score=s, label=f"item-{i}") for i, s in enumerate(scores)]

    with BackgroundQueue(max_workers=settings.max_workers) as queue:
        source = InMemoryDataSource(
            items,
            queue,
            latency_seconds=settings.latency_seconds,
            fail_with=NetworkError("Data source unavailable") if args.simulate_outage else None,
        )
        service = BestItemService(source=source, queue=queue)

        if args.style == "nested":
            task = _nested_task(service, args.query)
        else:
            task = service.save_best(args.query)

        outcome: Outcome[Item] = asyncio.run(outcome_of(task))

    if isinstance(outcome, Failure):
        logger.warning(
            "Pipeline failed",
            extra={"error_type": type(outcome.error).__name__, "error": str(outcome.error)},
        )
        print(f"Failed: {type(outcome.error).__name__}: {outcome.error}", file=sys.stderr)
        return 1

    print(json.dumps({"saved": outcome.value.to_json(), "stored": len(source.items)}))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = DeferredWorkSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        if args.command == "save-best":
            return _run_save_best(args, settings)

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
