"""Save the best item matching a query.

Two renditions of the same pipeline (fetch, select, persist):

- :meth:`BestItemService.save_best` composes deferred tasks with ``chain``.
- :meth:`BestItemService.save_best_nested` wires the same steps by hand with
  nested completion handlers.

Both deliver identical outcomes; the second one exists to show what ``chain``
removes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from deferred_work.catalog.data_source import DataSource
from deferred_work.catalog.models import Item
from deferred_work.catalog.selection import find_best
from deferred_work.core.dispatch import DispatchQueue, InlineQueue
from deferred_work.core.outcome import Failure, Outcome
from deferred_work.core.task import Completion, DeferredTask

logger = logging.getLogger(__name__)


@dataclass
class BestItemService:
    source: DataSource
    queue: DispatchQueue = field(default_factory=InlineQueue)

    def find_best(self, items: list[Item]) -> DeferredTask[Item]:
        return find_best(items, self.queue)

    def save_best(self, query: str) -> DeferredTask[Item]:
        logger.debug("Building save-best pipeline", extra={"query": query})
        return self.source.fetch(query).chain(self.find_best).chain(self.source.persist)

    def save_best_nested(self, query: str, callback: Completion[Item]) -> None:
        def on_fetched(fetched: Outcome[list[Item]]) -> None:
            if isinstance(fetched, Failure):
                callback(fetched)
                return

            def on_selected(selected: Outcome[Item]) -> None:
                if isinstance(selected, Failure):
                    callback(selected)
                    return
                self.source.persist(selected.value).start(callback)

            self.find_best(fetched.value).start(on_selected)

        self.source.fetch(query).start(on_fetched)
