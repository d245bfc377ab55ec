"""Solver capability contract.

A solver implements exactly one of two capabilities:

- whole-problem: ``solve(problem)`` builds the full solution itself, and the
  framework returns it as-is after shape validation.
- single-realization: ``solve_single(problem, variables, state, rng)``
  computes one realization; the framework runs it once per realization,
  merges hard data, and assembles the SimulationSolution. An optional
  ``preprocess(problem)`` computes state shared read-only by all realizations.

Solvers can subclass ProblemSolver / RealizationSolver, or just provide the
methods (checked structurally by capability_of).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

from geosolve.errors import ConfigurationError

if TYPE_CHECKING:
    import numpy as np

    from geosolve.models.problems import AnyProblem, Problem, SimulationProblem
    from geosolve.models.solutions import AnySolution


class Capability(str, Enum):
    """Execution protocol a solver implements."""

    WHOLE_PROBLEM = "whole_problem"
    SINGLE_REALIZATION = "single_realization"


# Method each capability requires
_REQUIRED_METHOD = {
    Capability.WHOLE_PROBLEM: "solve",
    Capability.SINGLE_REALIZATION: "solve_single",
}


@runtime_checkable
class SupportsSolve(Protocol):
    """Protocol for whole-problem solvers."""

    def solve(self, problem: AnyProblem) -> AnySolution:
        """Solve the problem and return the matching solution kind."""
        ...


@runtime_checkable
class SupportsSolveSingle(Protocol):
    """Protocol for single-realization solvers."""

    def solve_single(
        self,
        problem: SimulationProblem,
        variables: frozenset[str],
        state: Any,
        rng: np.random.Generator,
    ) -> Mapping[str, Any]:
        """Compute one realization.

        Must be safe to call concurrently. ``state`` is the preprocess result
        and must not be mutated; ``rng`` is this realization's own random stream.

        Returns:
            Variable -> values, one value per domain point
        """
        ...


class Solver(ABC):
    """Base class for solvers.

    Args:
        params: Optional per-variable parameters, keyed by variable name.
            Keys are checked against the problem's variables before solving.
    """

    capability: ClassVar[Capability | None] = None

    def __init__(self, params: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self.params: dict[str, dict[str, Any]] = {
            name: dict(values) for name, values in (params or {}).items()
        }

    @property
    def name(self) -> str:
        return solver_name(self)

    def variable_params(self, variable: str) -> dict[str, Any]:
        """Parameters for one variable (empty dict when none were given)."""
        return self.params.get(variable, {})

    def check_params(self, problem: Problem) -> None:
        """Reject parameters for variables the problem does not target.

        Raises:
            ConfigurationError: If params name unknown variables
        """
        unknown = set(self.params) - set(problem.variables)
        if unknown:
            raise ConfigurationError(
                f"{self.name} has parameters for variables not in the problem: {sorted(unknown)}"
            )

    def __repr__(self) -> str:
        return f"{self.name}(params={self.params!r})"


class ProblemSolver(Solver):
    """Solver that owns construction of the whole solution."""

    capability: ClassVar[Capability | None] = Capability.WHOLE_PROBLEM

    @abstractmethod
    def solve(self, problem: AnyProblem) -> AnySolution:
        """Solve the problem and return the matching solution kind."""
        raise NotImplementedError


class RealizationSolver(Solver):
    """Solver that computes one simulation realization at a time."""

    capability: ClassVar[Capability | None] = Capability.SINGLE_REALIZATION

    def preprocess(self, problem: SimulationProblem) -> Any:
        """Compute state shared by all realizations of one solve call.

        Called exactly once per solve call, before any realization runs.
        The default has nothing to share.
        """
        return None

    @abstractmethod
    def solve_single(
        self,
        problem: SimulationProblem,
        variables: frozenset[str],
        state: Any,
        rng: np.random.Generator,
    ) -> Mapping[str, Any]:
        """Compute one realization of every variable in ``variables``."""
        raise NotImplementedError


def solver_name(solver: Any) -> str:
    """Name used for a solver in errors and log events."""
    return type(solver).__name__


def capability_of(solver: Any) -> Capability:
    """Determine which execution protocol a solver implements.

    An explicit ``capability`` tag wins and is checked against the method it
    requires. Untagged solvers are classified by the methods they expose.

    Raises:
        ConfigurationError: If the solver exposes no capability, an unknown
            tag, a tag without its method, or both methods without a tag
    """
    name = solver_name(solver)
    tag = getattr(solver, "capability", None)
    if tag is not None:
        try:
            capability = Capability(tag)
        except ValueError as err:
            raise ConfigurationError(f"{name} has unknown capability tag {tag!r}") from err
        method = _REQUIRED_METHOD[capability]
        if not callable(getattr(solver, method, None)):
            raise ConfigurationError(f"{name} is tagged {capability.value} but has no {method}()")
        return capability

    has_solve = callable(getattr(solver, "solve", None))
    has_solve_single = callable(getattr(solver, "solve_single", None))
    if has_solve and has_solve_single:
        raise ConfigurationError(
            f"{name} exposes both solve() and solve_single(); set a capability tag"
        )
    if has_solve:
        return Capability.WHOLE_PROBLEM
    if has_solve_single:
        return Capability.SINGLE_REALIZATION
    raise ConfigurationError(f"{name} exposes neither solve() nor solve_single()")
