"""Executor backends for evaluating independent hypothesis trials."""

from __future__ import annotations

import logging
import os
from concurrent.futures import Executor as _FuturesExecutor
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import Callable, Iterable, Iterator, Protocol, TypeVar

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

EXECUTOR_KINDS = ("process", "thread")


class Executor(Protocol):
    """Abstract execution backend.

    ``map`` must yield results in the order of ``items`` regardless of the
    order in which they finish; callers rely on this for deterministic
    first-success selection.
    """

    def map(self, fn: Callable[[T], R], items: Iterable[T]) -> Iterator[R]:
        """Apply ``fn`` to every item, yielding results in item order."""

    def shutdown(self) -> None:
        """Release resources and drop work that has not started yet."""


class SequentialExecutor:
    """Deterministic executor evaluating items lazily, one at a time."""

    def map(self, fn: Callable[[T], R], items: Iterable[T]) -> Iterator[R]:
        for item in items:
            yield fn(item)

    def shutdown(self) -> None:
        return None

    def __enter__(self) -> "SequentialExecutor":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


class PoolExecutor:
    """Process or thread pool backed by :mod:`concurrent.futures`.

    The pool is created on first use.  ``shutdown`` cancels trials that were
    queued but not started, which is what the caller wants once a winning
    trial has been found.
    """

    def __init__(self, *, kind: str = "process", max_workers: int | None = None, chunksize: int = 9) -> None:
        if kind not in EXECUTOR_KINDS:
            raise ValueError(f"Unsupported executor kind: {kind!r}")
        self.kind = kind
        self.max_workers = max_workers or os.cpu_count() or 1
        self.chunksize = max(1, chunksize)
        self._pool: _FuturesExecutor | None = None

    def _ensure_pool(self) -> _FuturesExecutor:
        if self._pool is None:
            _LOGGER.debug("starting %s pool with %d worker(s)", self.kind, self.max_workers)
            if self.kind == "process":
                self._pool = ProcessPoolExecutor(max_workers=self.max_workers)
            else:
                self._pool = ThreadPoolExecutor(max_workers=self.max_workers)
        return self._pool

    def map(self, fn: Callable[[T], R], items: Iterable[T]) -> Iterator[R]:
        pool = self._ensure_pool()
        return pool.map(fn, items, chunksize=self.chunksize)

    def shutdown(self) -> None:
        if self._pool is not None:
            self._pool.shutdown(wait=True, cancel_futures=True)
            self._pool = None

    def __enter__(self) -> "PoolExecutor":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


def make_executor(parallel: bool, *, kind: str = "process", max_workers: int = 0) -> Executor:
    """Return the executor matching the resolved solver settings."""

    if not parallel:
        return SequentialExecutor()
    return PoolExecutor(kind=kind, max_workers=max_workers or None)


__all__ = ["EXECUTOR_KINDS", "Executor", "PoolExecutor", "SequentialExecutor", "make_executor"]
