"""Deferred work.

Composes asynchronous operations without nested callbacks:
- `DeferredTask`, a lazily started unit of work with a single completion
- `chain`, which sequences tasks and stops at the first failure
- an in-memory catalog pipeline that exercises both end to end
"""

__version__ = "0.1.0"

from deferred_work.core.outcome import Failure, Outcome, Success
from deferred_work.core.task import DeferredTask

__all__ = ["__version__", "DeferredTask", "Failure", "Outcome", "Success"]
