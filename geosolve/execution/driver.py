"""Execution driver: the single entry point that runs any solver on any problem.

The driver resolves the solver's capability once, then takes exactly one path:

- whole-problem: call ``solver.solve(problem)``, validate, return unchanged.
- single-realization: preprocess once, fan out one task per realization
  through the execution policy, merge hard data into each realization, and
  assemble the results in realization index order.
"""

from __future__ import annotations

import pickle
import time
from collections.abc import Mapping
from concurrent.futures import BrokenExecutor
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any

import numpy as np
import structlog

from geosolve.assembly import assemble_simulation, check_realization, validate_solution
from geosolve.config import DEFAULT_EXECUTION_CONFIG, ExecutionConfig, check_int
from geosolve.domain.adapter import DomainAdapter
from geosolve.errors import ComputationError, ConfigurationError, GeoSolveError
from geosolve.execution.hard_data import HardData, locate_hard_data, merge_hard_data
from geosolve.execution.policies import ExecutionPolicy, policy_from_config
from geosolve.execution.seeding import realization_rng, realization_seeds
from geosolve.models.problems import SimulationProblem
from geosolve.solvers.base import Capability, Solver, capability_of, solver_name

if TYPE_CHECKING:
    from geosolve.models.problems import AnyProblem
    from geosolve.models.solutions import AnySolution, SimulationSolution

logger = structlog.get_logger()


@dataclass(frozen=True)
class RealizationTask:
    """One unit of work: realization ``index`` with its own seed sequence."""

    index: int
    seed: np.random.SeedSequence


def run_realization(
    solver: Any,
    problem: SimulationProblem,
    state: Any,
    hard_data: Mapping[str, HardData],
    point_count: int,
    task: RealizationTask,
) -> dict[str, np.ndarray]:
    """Compute one realization and merge hard data into it.

    Module-level so process pools can pickle it.

    Raises:
        ComputationError: If solve_single raises
        ShapeMismatch: If its result has the wrong variables or lengths
    """
    name = solver_name(solver)
    rng = realization_rng(task.seed)
    try:
        raw = solver.solve_single(problem, problem.variables, state, rng)
    except GeoSolveError:
        raise
    except Exception as err:
        raise ComputationError(
            f"{name}.solve_single failed: {err}",
            realization=task.index,
            solver=name,
        ) from err

    values = check_realization(raw, problem.variables, point_count, task.index)
    merged = {var: merge_hard_data(arr, hard_data.get(var)) for var, arr in values.items()}
    logger.debug("realization_completed", solver=name, realization=task.index)
    return merged


class Driver:
    """Runs solvers against problems.

    Args:
        config: Execution settings (defaults to DEFAULT_EXECUTION_CONFIG)
        policy: Scheduling policy for realizations; built from ``config`` when None
        adapter: Domain adapter for point counts and hard-data locations
    """

    def __init__(
        self,
        config: ExecutionConfig | None = None,
        policy: ExecutionPolicy | None = None,
        adapter: DomainAdapter | None = None,
    ) -> None:
        self.config = config if config is not None else DEFAULT_EXECUTION_CONFIG
        self.policy = policy if policy is not None else policy_from_config(self.config)
        self.adapter = adapter if adapter is not None else DomainAdapter()

    def solve(
        self,
        problem: AnyProblem,
        solver: Any,
        realization_count: int | None = None,
        *,
        seed: int | None = None,
    ) -> AnySolution:
        """Solve a problem with a solver.

        Args:
            problem: Problem to solve (never mutated)
            solver: Solver exposing exactly one capability
            realization_count: Realizations to generate (single-realization
                solvers only; defaults to config.default_realizations)
            seed: Root seed for realization random streams (defaults to config.seed)

        Returns:
            The solution variant matching the problem kind

        Raises:
            ConfigurationError: Before any work, if the inputs cannot be combined
            ComputationError: If the solver fails
            ShapeMismatch: If the result violates solution invariants
        """
        count = self._resolve_realization_count(realization_count)
        capability = capability_of(solver)
        if isinstance(solver, Solver):
            solver.check_params(problem)

        logger.info(
            "solve_started",
            solver=solver_name(solver),
            capability=capability.value,
            problem=problem.kind.value,
            variables=sorted(problem.variables),
        )
        start = time.perf_counter()

        if capability is Capability.WHOLE_PROBLEM:
            solution = self._solve_whole(problem, solver)
        else:
            seed = seed if seed is not None else self.config.seed
            solution = self._solve_realizations(problem, solver, count, seed)

        logger.info(
            "solve_completed",
            solver=solver_name(solver),
            problem=problem.kind.value,
            elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return solution

    def _resolve_realization_count(self, realization_count: int | None) -> int:
        if realization_count is None:
            return self.config.default_realizations
        return check_int("realization_count", realization_count)

    def _solve_whole(self, problem: AnyProblem, solver: Any) -> AnySolution:
        name = solver_name(solver)
        try:
            solution = solver.solve(problem)
        except GeoSolveError:
            raise
        except Exception as err:
            logger.error("solver_failed", solver=name, error=str(err))
            raise ComputationError(f"{name}.solve failed: {err}", solver=name) from err

        validate_solution(problem, solution, self.adapter.point_count(problem.domain))
        return solution

    def _solve_realizations(
        self,
        problem: AnyProblem,
        solver: Any,
        count: int,
        seed: int | None,
    ) -> SimulationSolution:
        name = solver_name(solver)
        if not isinstance(problem, SimulationProblem):
            raise ConfigurationError(
                f"{name} solves single realizations, which only applies to simulation "
                f"problems (got {problem.kind.value})"
            )

        point_count = self.adapter.point_count(problem.domain)
        hard_data = locate_hard_data(problem, self.adapter)
        self.policy.check_payload((solver, problem, hard_data))
        state = self._preprocess(problem, solver)

        entropy, seeds = realization_seeds(seed, count)
        tasks = [RealizationTask(index=index, seed=child) for index, child in enumerate(seeds)]
        logger.debug(
            "realizations_scheduled",
            solver=name,
            policy=getattr(self.policy, "name", type(self.policy).__name__),
            realizations=count,
            seed_entropy=entropy,
        )

        fn = partial(run_realization, solver, problem, state, hard_data, point_count)
        try:
            results = self.policy.run(fn, tasks)
        except GeoSolveError as err:
            logger.error(
                "realization_failed",
                solver=name,
                realization=getattr(err, "realization", None),
                error=str(err),
            )
            raise
        except (BrokenExecutor, pickle.PicklingError) as err:
            logger.error("realization_execution_failed", solver=name, error=str(err))
            raise ComputationError(
                f"Realization execution failed for {name}: {err}", solver=name
            ) from err

        return assemble_simulation(problem, results, count, point_count)

    def _preprocess(self, problem: SimulationProblem, solver: Any) -> Any:
        preprocess = getattr(solver, "preprocess", None)
        if not callable(preprocess):
            return None

        name = solver_name(solver)
        try:
            state = preprocess(problem)
        except GeoSolveError:
            raise
        except Exception as err:
            logger.error("preprocess_failed", solver=name, error=str(err))
            raise ComputationError(f"{name}.preprocess failed: {err}", solver=name) from err

        logger.debug("preprocess_completed", solver=name, state_type=type(state).__name__)
        return state


def solve(
    problem: AnyProblem,
    solver: Any,
    realization_count: int | None = None,
    *,
    seed: int | None = None,
    policy: ExecutionPolicy | None = None,
    config: ExecutionConfig | None = None,
) -> AnySolution:
    """Solve a problem with a solver using a one-off Driver.

    See Driver.solve for arguments and errors.
    """
    driver = Driver(config=config, policy=policy)
    return driver.solve(problem, solver, realization_count, seed=seed)
