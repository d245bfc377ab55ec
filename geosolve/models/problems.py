"""Problem models: what a solver is asked to compute.

Problems are frozen pydantic models. Their variable sets and observed data
are validated at construction so that the driver never has to check keys at
lookup time.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, BeforeValidator, Field, field_validator, model_validator

from geosolve.domain.base import Domain
from geosolve.models.data import GeoData
from geosolve.models.types import TaskKind, VariableName, normalize_variables


class ProblemKind(str, Enum):
    """The three problem kinds solvers can be written against."""

    ESTIMATION = "estimation"
    SIMULATION = "simulation"
    LEARNING = "learning"


# Set of target variables; duplicates are rejected rather than collapsed
VariableSet = Annotated[frozenset[str], BeforeValidator(normalize_variables)]


def _check_domain(domain: Any) -> Any:
    if not isinstance(domain, Domain):
        raise ValueError(
            f"{type(domain).__name__} is not a domain (needs an npoints property and locate())"
        )
    if domain.npoints <= 0:
        raise ValueError(f"Domain must have at least one point, got {domain.npoints}")
    return domain


class Problem(BaseModel):
    """Common base for all problem kinds."""

    kind: ClassVar[ProblemKind]

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @property
    def hard_data(self) -> GeoData | None:
        """Observed data to honor at matching domain points, if any."""
        return None


class EstimationProblem(Problem):
    """Estimate mean and variance of target variables at every domain point.

    Every target variable must be a column of the conditioning data.
    """

    kind: ClassVar[ProblemKind] = ProblemKind.ESTIMATION

    domain: Any = Field(description="Domain to estimate over.")
    variables: VariableSet = Field(description="Target variable names.")
    data: GeoData = Field(description="Conditioning data.")

    @field_validator("domain")
    @classmethod
    def check_domain(cls, domain: Any) -> Any:
        return _check_domain(domain)

    @model_validator(mode="after")
    def check_variables_in_data(self) -> EstimationProblem:
        missing = self.variables - self.data.variables
        if missing:
            raise ValueError(f"Target variables missing from data: {sorted(missing)}")
        return self

    @property
    def hard_data(self) -> GeoData:
        return self.data


class SimulationProblem(Problem):
    """Generate realizations of target variables over a domain.

    Without data the simulation is unconditional. Target variables that are
    not columns of ``data`` simply have no hard data.
    """

    kind: ClassVar[ProblemKind] = ProblemKind.SIMULATION

    domain: Any = Field(description="Domain to simulate over.")
    variables: VariableSet = Field(description="Target variable names.")
    data: GeoData | None = Field(default=None, description="Optional conditioning data.")

    @field_validator("domain")
    @classmethod
    def check_domain(cls, domain: Any) -> Any:
        return _check_domain(domain)

    @property
    def is_conditional(self) -> bool:
        return self.data is not None and bool(self.variables & self.data.variables)

    @property
    def hard_data(self) -> GeoData | None:
        return self.data


class LearningProblem(Problem):
    """Learn target variables on a target domain from data on a source domain."""

    kind: ClassVar[ProblemKind] = ProblemKind.LEARNING

    source_domain: Any = Field(description="Domain the source data lives on.")
    source_data: GeoData = Field(description="Training data.")
    target_domain: Any = Field(description="Domain to produce values on.")
    tasks: dict[VariableName, TaskKind] = Field(description="Learning task per target variable.")

    @field_validator("source_domain", "target_domain")
    @classmethod
    def check_domains(cls, domain: Any) -> Any:
        return _check_domain(domain)

    @model_validator(mode="after")
    def check_tasks(self) -> LearningProblem:
        if not self.tasks:
            raise ValueError("At least one learning task is required")
        missing = set(self.tasks) - self.source_data.variables
        if missing:
            raise ValueError(f"Task variables missing from source data: {sorted(missing)}")
        return self

    @property
    def variables(self) -> frozenset[str]:
        return frozenset(self.tasks)

    @property
    def domain(self) -> Any:
        """The target domain (solutions are indexed by it)."""
        return self.target_domain


AnyProblem = EstimationProblem | SimulationProblem | LearningProblem
