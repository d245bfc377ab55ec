"""Async host wrapper around the blocking driver.

The framework imposes no deadlines itself. Hosts running an event loop can
use solve_async to run a solve in the default executor, optionally bounded
by a timeout.
"""

from __future__ import annotations

import asyncio
from functools import partial
from typing import TYPE_CHECKING, Any

import structlog

from geosolve.execution.driver import Driver

if TYPE_CHECKING:
    from geosolve.models.problems import AnyProblem
    from geosolve.models.solutions import AnySolution

logger = structlog.get_logger()


async def solve_async(
    problem: AnyProblem,
    solver: Any,
    realization_count: int | None = None,
    *,
    seed: int | None = None,
    driver: Driver | None = None,
    timeout: float | None = None,
) -> AnySolution:
    """Run Driver.solve in the loop's default executor.

    Args:
        problem: Problem to solve
        solver: Solver to run
        realization_count: Realizations to generate (see Driver.solve)
        seed: Root seed for realization random streams
        driver: Driver to use (a default Driver when None)
        timeout: Seconds to wait before giving up; None waits indefinitely

    Raises:
        TimeoutError: If the timeout expires. The blocking solve is not
            interrupted; its result is discarded when it finishes.
    """
    driver = driver if driver is not None else Driver()
    loop = asyncio.get_running_loop()
    call = partial(driver.solve, problem, solver, realization_count, seed=seed)

    if timeout is None:
        return await loop.run_in_executor(None, call)

    try:
        return await asyncio.wait_for(loop.run_in_executor(None, call), timeout=timeout)
    except TimeoutError:
        logger.warning(
            "solve_timeout",
            problem=problem.kind.value,
            timeout_seconds=timeout,
        )
        raise
