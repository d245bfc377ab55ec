"""Reference solvers used across tests.

Defined at module level so process pools can pickle them.
"""

import threading
import time
from collections.abc import Mapping
from typing import Any

import numpy as np

from geosolve.models import (
    EstimationProblem,
    EstimationSolution,
    LearningProblem,
    LearningSolution,
    SimulationProblem,
    SimulationSolution,
)
from geosolve.solvers import ProblemSolver, RealizationSolver


class ConstantSolver(RealizationSolver):
    """Fills every point of every variable with the same value."""

    def __init__(self, value: float = 1.0, params: Mapping[str, Mapping[str, Any]] | None = None):
        super().__init__(params)
        self.value = value

    def solve_single(self, problem, variables, state, rng):
        n = problem.domain.npoints
        return {name: [self.value] * n for name in variables}


class RandomSolver(RealizationSolver):
    """Draws uniform values from the realization's own random stream.

    With ``jitter`` set, sleeps a random fraction of it first so that
    realizations complete out of index order on concurrent policies.
    """

    def __init__(self, jitter: float = 0.0):
        super().__init__()
        self.jitter = jitter

    def solve_single(self, problem, variables, state, rng):
        if self.jitter:
            time.sleep(rng.random() * self.jitter)
        n = problem.domain.npoints
        return {name: rng.random(n) for name in sorted(variables)}


class PreprocessingSolver(RealizationSolver):
    """Shares a precomputed offset across realizations and counts preprocess calls."""

    def __init__(self, offset: float = 10.0):
        super().__init__()
        self.offset = offset
        self.preprocess_calls = 0
        self.states_seen: list[int] = []
        self._lock = threading.Lock()

    def preprocess(self, problem):
        self.preprocess_calls += 1
        state = np.full(problem.domain.npoints, self.offset)
        state.setflags(write=False)
        return state

    def solve_single(self, problem, variables, state, rng):
        with self._lock:
            self.states_seen.append(id(state))
        return {name: state + 1.0 for name in variables}


class RecordingSolver(RealizationSolver):
    """Records each call (thread-safe) and fails on the listed call numbers."""

    def __init__(self, fail_on_call: tuple[int, ...] = (), delay: float = 0.0):
        super().__init__()
        self.fail_on_call = fail_on_call
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def solve_single(self, problem, variables, state, rng):
        with self._lock:
            call = self.calls
            self.calls += 1
        if call in self.fail_on_call:
            raise RuntimeError(f"boom on call {call}")
        if self.delay:
            time.sleep(self.delay)
        return {name: np.zeros(problem.domain.npoints) for name in variables}


class FailingSolver(RealizationSolver):
    """Always fails in solve_single (picklable, for process pools)."""

    def solve_single(self, problem, variables, state, rng):
        raise ValueError("cannot simulate")


class FailingPreprocessSolver(RealizationSolver):
    """Fails in preprocess; solve_single must never run."""

    def __init__(self):
        super().__init__()
        self.solve_calls = 0

    def preprocess(self, problem):
        raise RuntimeError("preprocess exploded")

    def solve_single(self, problem, variables, state, rng):
        self.solve_calls += 1
        return {name: np.zeros(problem.domain.npoints) for name in variables}


class UnpicklableStateSolver(RealizationSolver):
    """Picklable itself, but its preprocessed state holds a lock."""

    def preprocess(self, problem):
        return threading.Lock()

    def solve_single(self, problem, variables, state, rng):
        return {name: np.zeros(problem.domain.npoints) for name in variables}


class ShortSolver(RealizationSolver):
    """Returns one value too few."""

    def solve_single(self, problem, variables, state, rng):
        return {name: [0.0] * (problem.domain.npoints - 1) for name in variables}


class MissingVariableSolver(RealizationSolver):
    """Returns nothing for any variable."""

    def solve_single(self, problem, variables, state, rng):
        return {}


class MeanEstimator(ProblemSolver):
    """Estimates every point with the data mean and a unit variance."""

    def solve(self, problem: EstimationProblem) -> EstimationSolution:
        n = problem.domain.npoints
        mean = {}
        variance = {}
        for name in problem.variables:
            column = problem.data.column(name)
            mean[name] = np.full(n, np.nanmean(column))
            variance[name] = np.ones(n)
        return EstimationSolution(domain=problem.domain, mean=mean, variance=variance)


class WholeSimulator(ProblemSolver):
    """Builds a SimulationSolution itself (no hard-data merge by the framework)."""

    def __init__(self, nreals: int = 2, value: float = 0.0):
        super().__init__()
        self.nreals = nreals
        self.value = value

    def solve(self, problem: SimulationProblem) -> SimulationSolution:
        n = problem.domain.npoints
        return SimulationSolution(
            domain=problem.domain,
            realizations={
                name: tuple(np.full(n, self.value) for _ in range(self.nreals))
                for name in problem.variables
            },
        )


class NearestLearner(ProblemSolver):
    """Copies the value of the nearest source point onto each target point."""

    def solve(self, problem: LearningProblem) -> LearningSolution:
        target = problem.target_domain.coordinates()
        values = {}
        for name in problem.variables:
            column = problem.source_data.column(name)
            source = np.asarray(problem.source_data.locations)
            nearest = np.abs(target[:, None, 0] - source[None, :, 0]).argmin(axis=1)
            values[name] = column[nearest]
        return LearningSolution(domain=problem.target_domain, values=values)


class WrongKindSolver(ProblemSolver):
    """Answers any problem with a LearningSolution."""

    def solve(self, problem):
        n = problem.domain.npoints
        return LearningSolution(
            domain=problem.domain, values={name: np.zeros(n) for name in problem.variables}
        )


class ExplodingSolver(ProblemSolver):
    def solve(self, problem):
        raise ZeroDivisionError("division by zero")


class NeitherSolver:
    """Has a preprocess hook but no solve capability."""

    def __init__(self):
        self.preprocess_calls = 0

    def preprocess(self, problem):
        self.preprocess_calls += 1


class DuckRealizationSolver:
    """Untagged solver implementing only solve_single (no base class)."""

    def solve_single(self, problem, variables, state, rng):
        return {name: np.full(problem.domain.npoints, 2.0) for name in variables}


class DuckBothSolver:
    """Untagged solver exposing both capabilities."""

    def solve(self, problem):
        raise AssertionError("should not be called")

    def solve_single(self, problem, variables, state, rng):
        raise AssertionError("should not be called")
