"""Core package initialization."""

from deferred_work.core.bridge import outcome_of
from deferred_work.core.dispatch import BackgroundQueue, DispatchQueue, InlineQueue
from deferred_work.core.errors import EmptySelectionError, NetworkError, TaskError
from deferred_work.core.outcome import Failure, Outcome, Success
from deferred_work.core.task import DeferredTask

__all__ = [
    "BackgroundQueue",
    "DeferredTask",
    "DispatchQueue",
    "EmptySelectionError",
    "Failure",
    "InlineQueue",
    "NetworkError",
    "Outcome",
    "Success",
    "TaskError",
    "outcome_of",
]
