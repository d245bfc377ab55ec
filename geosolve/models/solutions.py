"""Solution models: what solvers return.

Solutions are frozen dataclasses holding one-dimensional float64 arrays.
Arrays are copied and marked read-only on construction, so once a solution
exists nothing else can write to its values.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

import numpy as np

from geosolve.models.problems import ProblemKind


def freeze_values(values: Any) -> np.ndarray:
    """Copy values into a read-only one-dimensional float64 array.

    Shape is not checked here; Result Assembly reports shape problems with
    variable and realization context.
    """
    array = np.array(values, dtype=float, copy=True)
    array.setflags(write=False)
    return array


def _freeze_mapping(mapping: Mapping[str, Any]) -> dict[str, np.ndarray]:
    return {name: freeze_values(values) for name, values in mapping.items()}


@dataclass(frozen=True, eq=False)
class EstimationSolution:
    """Mean and variance of each variable at every domain point.

    Attributes:
        domain: Domain the values are indexed by
        mean: Variable -> estimated mean per point
        variance: Variable -> estimation variance per point
    """

    kind: ClassVar[ProblemKind] = ProblemKind.ESTIMATION

    domain: Any
    mean: dict[str, np.ndarray]
    variance: dict[str, np.ndarray]

    def __post_init__(self) -> None:
        object.__setattr__(self, "mean", _freeze_mapping(self.mean))
        object.__setattr__(self, "variance", _freeze_mapping(self.variance))

    @property
    def variables(self) -> frozenset[str]:
        return frozenset(self.mean)

    def __getitem__(self, variable: str) -> tuple[np.ndarray, np.ndarray]:
        """Return (mean, variance) for a variable."""
        return self.mean[variable], self.variance[variable]


@dataclass(frozen=True, eq=False)
class SimulationSolution:
    """Realizations of each variable over a domain.

    Realizations are ordered by realization index: ``realizations[v][i]`` is
    realization ``i`` of variable ``v``, whatever order they were computed in.

    Attributes:
        domain: Domain the values are indexed by
        realizations: Variable -> tuple of realizations, one array per realization
    """

    kind: ClassVar[ProblemKind] = ProblemKind.SIMULATION

    domain: Any
    realizations: dict[str, tuple[np.ndarray, ...]]

    def __post_init__(self) -> None:
        frozen = {
            name: tuple(freeze_values(real) for real in reals)
            for name, reals in self.realizations.items()
        }
        object.__setattr__(self, "realizations", frozen)

    @property
    def rdict(self) -> dict[str, tuple[np.ndarray, ...]]:
        """Alias of ``realizations``."""
        return self.realizations

    @property
    def variables(self) -> frozenset[str]:
        return frozenset(self.realizations)

    @property
    def nreals(self) -> int:
        """Number of realizations per variable (0 for an empty solution)."""
        for reals in self.realizations.values():
            return len(reals)
        return 0

    def __getitem__(self, variable: str) -> tuple[np.ndarray, ...]:
        return self.realizations[variable]

    def stack(self, variable: str) -> np.ndarray:
        """Return realizations of a variable as an (nreals, npoints) array."""
        return np.stack(self.realizations[variable])

    def mean(self) -> dict[str, np.ndarray]:
        """Pointwise mean across realizations, per variable."""
        return {name: self.stack(name).mean(axis=0) for name in self.realizations}

    def variance(self, ddof: int = 0) -> dict[str, np.ndarray]:
        """Pointwise variance across realizations, per variable.

        Args:
            ddof: Delta degrees of freedom, as in numpy.var
        """
        return {name: self.stack(name).var(axis=0, ddof=ddof) for name in self.realizations}

    def quantile(self, q: float) -> dict[str, np.ndarray]:
        """Pointwise q-quantile across realizations, per variable."""
        if not 0.0 <= q <= 1.0:
            raise ValueError(f"Quantile must be in [0, 1], got {q}")
        return {name: np.quantile(self.stack(name), q, axis=0) for name in self.realizations}

    def summarize(self, ddof: int = 0) -> EstimationSolution:
        """Collapse the realizations into an EstimationSolution (mean, variance)."""
        return EstimationSolution(
            domain=self.domain,
            mean=self.mean(),
            variance=self.variance(ddof=ddof),
        )


@dataclass(frozen=True, eq=False)
class LearningSolution:
    """Learned values of each variable on the target domain.

    Attributes:
        domain: The target domain
        values: Variable -> learned value per target point
    """

    kind: ClassVar[ProblemKind] = ProblemKind.LEARNING

    domain: Any
    values: dict[str, np.ndarray]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", _freeze_mapping(self.values))

    @property
    def variables(self) -> frozenset[str]:
        return frozenset(self.values)

    def __getitem__(self, variable: str) -> np.ndarray:
        return self.values[variable]


AnySolution = EstimationSolution | SimulationSolution | LearningSolution


def realizations_as_lists(solution: SimulationSolution) -> dict[str, list[list[float]]]:
    """Return realizations as plain nested lists (handy for comparisons and JSON)."""
    return {
        name: [real.tolist() for real in reals] for name, reals in solution.realizations.items()
    }

