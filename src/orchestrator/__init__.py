"""Trial executors and run event logging."""

from .executor import EXECUTOR_KINDS, Executor, PoolExecutor, SequentialExecutor, make_executor
from . import log

__all__ = [
    "EXECUTOR_KINDS",
    "Executor",
    "PoolExecutor",
    "SequentialExecutor",
    "log",
    "make_executor",
]
