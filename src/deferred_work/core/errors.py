"""Errors carried as the payload of a failed outcome."""

from __future__ import annotations


class TaskError(Exception):
    """Base class for failures delivered through a deferred task."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class NetworkError(TaskError):
    pass


class EmptySelectionError(TaskError):
    def __init__(self, message: str = "Cannot select from an empty sequence") -> None:
        super().__init__(message)
