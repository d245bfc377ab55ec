"""Execution policies: how independent realization tasks are scheduled.

A policy runs ``fn(task)`` for every task and returns the results in task
order, regardless of completion order. If any task raises, outstanding tasks
are cancelled, completed results are dropped, and the first exception (in
completion order) propagates unchanged.
"""

from __future__ import annotations

import pickle
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

import structlog

from geosolve.errors import ConfigurationError

if TYPE_CHECKING:
    from geosolve.config import ExecutionConfig

logger = structlog.get_logger()

T = TypeVar("T")
R = TypeVar("R")


class ExecutionPolicy(ABC):
    """Base class for realization scheduling policies."""

    name: ClassVar[str]

    @abstractmethod
    def run(self, fn: Callable[[T], R], tasks: Sequence[T]) -> list[R]:
        """Run ``fn`` on every task and return results in task order."""
        raise NotImplementedError

    def check_payload(self, payload: Any) -> None:
        """Reject task inputs this policy cannot hand to its workers.

        In-process policies share memory with their workers and accept anything.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SerialPolicy(ExecutionPolicy):
    """Runs tasks one after another in the calling thread.

    The first failure stops the loop, so later tasks never start.
    """

    name: ClassVar[str] = "serial"

    def run(self, fn: Callable[[T], R], tasks: Sequence[T]) -> list[R]:
        return [fn(task) for task in tasks]


class PoolPolicy(ExecutionPolicy):
    """Base for policies backed by a concurrent.futures executor.

    Args:
        max_workers: Worker count (None lets the executor decide)
    """

    def __init__(self, max_workers: int | None = None) -> None:
        if max_workers is not None and max_workers <= 0:
            raise ConfigurationError(f"max_workers must be positive, got {max_workers}")
        self.max_workers = max_workers

    @abstractmethod
    def make_executor(self) -> Executor:
        raise NotImplementedError

    def run(self, fn: Callable[[T], R], tasks: Sequence[T]) -> list[R]:
        if not tasks:
            return []

        results: list[Any] = [None] * len(tasks)
        futures: dict[Future[R], int] = {}
        executor = self.make_executor()
        try:
            for position, task in enumerate(tasks):
                futures[executor.submit(fn, task)] = position
            for future in as_completed(futures):
                # result() re-raises the task exception
                results[futures[future]] = future.result()
        except BaseException:
            cancelled = sum(1 for future in futures if future.cancel())
            logger.debug("pending_tasks_cancelled", policy=self.name, cancelled=cancelled)
            # Joining a failed process pool can block forever
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown(wait=True)
        return results

    def __repr__(self) -> str:
        return f"{type(self).__name__}(max_workers={self.max_workers})"


class ThreadPolicy(PoolPolicy):
    """Runs tasks on a thread pool. Suited to solvers that release the GIL (numpy, scipy)."""

    name: ClassVar[str] = "thread"

    def make_executor(self) -> Executor:
        return ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="geosolve")


class ProcessPolicy(PoolPolicy):
    """Runs tasks on a process pool.

    The task function and everything it closes over (solver, problem,
    preprocessed state) must be picklable.
    """

    name: ClassVar[str] = "process"

    def make_executor(self) -> Executor:
        return ProcessPoolExecutor(max_workers=self.max_workers)

    def check_payload(self, payload: Any) -> None:
        """Pickle the payload once so unpicklable inputs fail before any work starts.

        Raises:
            ConfigurationError: If the payload cannot be pickled
        """
        try:
            pickle.dumps(payload)
        except (pickle.PicklingError, AttributeError, TypeError) as err:
            raise ConfigurationError(
                f"Process execution needs picklable task inputs: {err}"
            ) from err

    def run(self, fn: Callable[[T], R], tasks: Sequence[T]) -> list[R]:
        self.check_payload(fn)
        return super().run(fn, tasks)


_POLICIES: dict[str, type[ExecutionPolicy]] = {
    SerialPolicy.name: SerialPolicy,
    ThreadPolicy.name: ThreadPolicy,
    ProcessPolicy.name: ProcessPolicy,
}


def policy_from_config(config: ExecutionConfig) -> ExecutionPolicy:
    """Build the execution policy named by a config."""
    try:
        policy_cls = _POLICIES[config.executor]
    except KeyError as err:
        raise ConfigurationError(f"Unknown executor '{config.executor}'") from err
    if issubclass(policy_cls, PoolPolicy):
        return policy_cls(max_workers=config.max_workers)
    return policy_cls()
