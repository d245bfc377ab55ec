"""Error classes for the solver execution framework.

All framework errors derive from GeoSolveError so callers can catch
them with a single except clause.
"""

from __future__ import annotations


class GeoSolveError(Exception):
    """Base error for solver execution."""

    pass


class ConfigurationError(GeoSolveError):
    """Solver, problem or execution settings cannot be used together.

    Raised before any work is performed: a solver exposing no recognized
    capability, a non-positive realization count, or an invalid config value.
    """

    pass


class ComputationError(GeoSolveError):
    """A solver failed while computing a result.

    Attributes:
        realization: Index of the failing realization, or None when the
            failure happened outside a realization (preprocess, whole-problem solve)
        solver: Name of the solver class that failed
    """

    def __init__(
        self,
        message: str,
        *,
        realization: int | None = None,
        solver: str | None = None,
    ) -> None:
        super().__init__(message)
        self.realization = realization
        self.solver = solver

    def __str__(self) -> str:
        base = super().__str__()
        if self.realization is None:
            return base
        return f"{base} (realization {self.realization})"


class ShapeMismatch(GeoSolveError):
    """A result violates the shape invariants of its solution.

    Attributes:
        variable: Offending variable name, if known
        realization: Offending realization index, if applicable
    """

    def __init__(
        self,
        message: str,
        *,
        variable: str | None = None,
        realization: int | None = None,
    ) -> None:
        super().__init__(message)
        self.variable = variable
        self.realization = realization
