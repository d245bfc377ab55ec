"""Problem, data and solution models."""

from geosolve.models.data import GeoData
from geosolve.models.problems import (
    AnyProblem,
    EstimationProblem,
    LearningProblem,
    Problem,
    ProblemKind,
    SimulationProblem,
)
from geosolve.models.solutions import (
    AnySolution,
    EstimationSolution,
    LearningSolution,
    SimulationSolution,
    realizations_as_lists,
)
from geosolve.models.types import ReadOnlyDict, TaskKind, VariableName, normalize_variables

__all__ = [
    # Types
    "ReadOnlyDict",
    "TaskKind",
    "VariableName",
    "normalize_variables",
    # Data
    "GeoData",
    # Problems
    "AnyProblem",
    "Problem",
    "ProblemKind",
    "EstimationProblem",
    "SimulationProblem",
    "LearningProblem",
    # Solutions
    "AnySolution",
    "EstimationSolution",
    "SimulationSolution",
    "LearningSolution",
    "realizations_as_lists",
]
