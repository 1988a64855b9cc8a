"""Catalog pipeline built on deferred tasks."""

from deferred_work.catalog.data_source import DataSource, InMemoryDataSource
from deferred_work.catalog.models import Item
from deferred_work.catalog.selection import find_best, select_best
from deferred_work.catalog.service import BestItemService

__all__ = [
    "BestItemService",
    "DataSource",
    "InMemoryDataSource",
    "Item",
    "find_best",
    "select_best",
]
