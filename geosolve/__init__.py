"""geosolve - solver execution framework for geostatistical problems."""

from geosolve.config import DEFAULT_EXECUTION_CONFIG, ExecutionConfig
from geosolve.errors import ComputationError, ConfigurationError, GeoSolveError, ShapeMismatch
from geosolve.execution import Driver, solve, solve_async
from geosolve.models import (
    EstimationProblem,
    EstimationSolution,
    GeoData,
    LearningProblem,
    LearningSolution,
    SimulationProblem,
    SimulationSolution,
    TaskKind,
)
from geosolve.solvers import Capability, ProblemSolver, RealizationSolver, capability_of

__version__ = "0.1.0"
__all__ = [
    "solve",
    "solve_async",
    "Driver",
    "ExecutionConfig",
    "DEFAULT_EXECUTION_CONFIG",
    # Errors
    "GeoSolveError",
    "ConfigurationError",
    "ComputationError",
    "ShapeMismatch",
    # Models
    "GeoData",
    "TaskKind",
    "EstimationProblem",
    "SimulationProblem",
    "LearningProblem",
    "EstimationSolution",
    "SimulationSolution",
    "LearningSolution",
    # Solvers
    "Capability",
    "ProblemSolver",
    "RealizationSolver",
    "capability_of",
    "__version__",
]
