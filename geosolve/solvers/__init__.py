"""Solver base classes and capability detection."""

from geosolve.solvers.base import (
    Capability,
    ProblemSolver,
    RealizationSolver,
    Solver,
    SupportsSolve,
    SupportsSolveSingle,
    capability_of,
    solver_name,
)

__all__ = [
    "Capability",
    "ProblemSolver",
    "RealizationSolver",
    "Solver",
    "SupportsSolve",
    "SupportsSolveSingle",
    "capability_of",
    "solver_name",
]
