"""Result assembly and solution validation.

Builds SimulationSolutions from per-realization results and validates
solutions returned by whole-problem solvers. Any invariant violation
raises ShapeMismatch and nothing partial is returned.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

import numpy as np
import structlog

from geosolve.errors import ShapeMismatch
from geosolve.models.problems import ProblemKind
from geosolve.models.solutions import (
    AnySolution,
    EstimationSolution,
    LearningSolution,
    SimulationSolution,
)

if TYPE_CHECKING:
    from geosolve.models.problems import AnyProblem, SimulationProblem

logger = structlog.get_logger()


def _check_keys(
    keys: set[str] | frozenset[str],
    variables: frozenset[str],
    *,
    what: str,
    realization: int | None = None,
) -> None:
    missing = sorted(variables - keys)
    if missing:
        raise ShapeMismatch(
            f"{what} is missing variables {missing}",
            variable=missing[0],
            realization=realization,
        )
    extra = sorted(keys - variables)
    if extra:
        raise ShapeMismatch(
            f"{what} has unexpected variables {extra}",
            variable=extra[0],
            realization=realization,
        )


def _check_values(
    values: Any,
    point_count: int,
    *,
    what: str,
    variable: str,
    realization: int | None = None,
) -> np.ndarray:
    try:
        array = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as err:
        raise ShapeMismatch(
            f"{what} for '{variable}' is not a numeric sequence: {err}",
            variable=variable,
            realization=realization,
        ) from err
    if array.ndim != 1 or array.shape[0] != point_count:
        raise ShapeMismatch(
            f"{what} for '{variable}' has shape {array.shape}, expected ({point_count},)",
            variable=variable,
            realization=realization,
        )
    return array


def check_realization(
    result: Mapping[str, Any],
    variables: frozenset[str],
    point_count: int,
    realization: int,
) -> dict[str, np.ndarray]:
    """Validate one realization's result mapping.

    Args:
        result: Variable -> values as returned by solve_single
        variables: The problem's target variables
        point_count: Number of domain points
        realization: Realization index (for error context)

    Returns:
        Variable -> one-dimensional float array

    Raises:
        ShapeMismatch: If variables are missing/extra or a sequence has the wrong length
    """
    if not isinstance(result, Mapping):
        raise ShapeMismatch(
            f"Realization {realization} returned {type(result).__name__}, expected a mapping",
            realization=realization,
        )
    _check_keys(set(result), variables, what=f"Realization {realization}", realization=realization)
    return {
        name: _check_values(
            result[name],
            point_count,
            what=f"Realization {realization}",
            variable=name,
            realization=realization,
        )
        for name in sorted(variables)
    }


def assemble_simulation(
    problem: SimulationProblem,
    results: Sequence[Mapping[str, Any]],
    realization_count: int,
    point_count: int,
) -> SimulationSolution:
    """Fold index-ordered realization results into a SimulationSolution.

    Args:
        problem: The simulation problem being solved
        results: One mapping per realization, ordered by realization index
        realization_count: Number of realizations requested
        point_count: Number of domain points

    Returns:
        SimulationSolution with realizations in index order

    Raises:
        ShapeMismatch: If the realization count or any realization's shape is wrong
    """
    if len(results) != realization_count:
        raise ShapeMismatch(
            f"Expected {realization_count} realizations, got {len(results)}",
        )

    checked = [
        check_realization(result, problem.variables, point_count, index)
        for index, result in enumerate(results)
    ]
    realizations = {
        name: tuple(result[name] for result in checked) for name in sorted(problem.variables)
    }

    logger.debug(
        "simulation_assembled",
        variables=sorted(problem.variables),
        realizations=realization_count,
        points=point_count,
    )
    return SimulationSolution(domain=problem.domain, realizations=realizations)


def _same_domain(left: Any, right: Any) -> bool:
    if left is right:
        return True
    try:
        return bool(left == right)
    except (TypeError, ValueError):
        return False


def validate_solution(problem: AnyProblem, solution: AnySolution, point_count: int) -> None:
    """Validate a solution returned by a whole-problem solver.

    Checks the solution kind, domain, variable set and value lengths. For
    learning problems ``point_count`` is the target domain's point count.

    Raises:
        ShapeMismatch: On the first violated invariant
    """
    expected = {
        ProblemKind.ESTIMATION: EstimationSolution,
        ProblemKind.SIMULATION: SimulationSolution,
        ProblemKind.LEARNING: LearningSolution,
    }[problem.kind]
    if not isinstance(solution, expected):
        raise ShapeMismatch(
            f"{problem.kind.value} problem needs a {expected.__name__}, "
            f"got {type(solution).__name__}"
        )
    if not _same_domain(solution.domain, problem.domain):
        raise ShapeMismatch("Solution domain differs from the problem domain")

    _check_keys(set(solution.variables), problem.variables, what="Solution")

    if isinstance(solution, EstimationSolution):
        _check_keys(set(solution.variance), problem.variables, what="Estimation variance")
        for name in sorted(problem.variables):
            _check_values(solution.mean[name], point_count, what="Mean", variable=name)
            _check_values(solution.variance[name], point_count, what="Variance", variable=name)
    elif isinstance(solution, SimulationSolution):
        nreals = {len(reals) for reals in solution.realizations.values()}
        if len(nreals) != 1 or 0 in nreals:
            raise ShapeMismatch(
                f"Variables must share a positive realization count, got {sorted(nreals)}"
            )
        for name in sorted(problem.variables):
            for index, real in enumerate(solution.realizations[name]):
                _check_values(
                    real, point_count, what="Realization", variable=name, realization=index
                )
    else:
        for name in sorted(problem.variables):
            _check_values(solution.values[name], point_count, what="Values", variable=name)
