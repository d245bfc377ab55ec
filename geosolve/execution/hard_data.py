"""Hard-data merge: observed values overwrite computed ones at their domain index."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
import structlog

from geosolve.errors import ConfigurationError

if TYPE_CHECKING:
    from geosolve.domain.adapter import DomainAdapter
    from geosolve.models.problems import Problem

logger = structlog.get_logger()


@dataclass(frozen=True)
class HardData:
    """Observed values of one variable, located on the domain.

    Attributes:
        indices: Domain indices holding an observation (unique, ascending)
        values: Observed value at each index
    """

    indices: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.intp))
    values: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=float))

    @classmethod
    def from_pairs(cls, pairs: list[tuple[int, float]]) -> HardData:
        if not pairs:
            return cls()
        indices, values = zip(*pairs)
        return cls(
            indices=np.asarray(indices, dtype=np.intp),
            values=np.asarray(values, dtype=float),
        )

    def __len__(self) -> int:
        return int(self.indices.shape[0])


def locate_hard_data(problem: Problem, adapter: DomainAdapter) -> dict[str, HardData]:
    """Resolve the hard data of every target variable once per solve call.

    Raises:
        ConfigurationError: If observed locations cannot be located on the
            domain (e.g. coordinate dimension mismatch)
    """
    located: dict[str, HardData] = {}
    for name in sorted(problem.variables):
        try:
            pairs = adapter.hard_data_locations(problem, name)
        except ValueError as err:
            raise ConfigurationError(
                f"Cannot locate observed data of '{name}' on the domain: {err}"
            ) from err
        located[name] = HardData.from_pairs(pairs)

    logger.debug(
        "hard_data_located",
        counts={name: len(hard) for name, hard in located.items()},
    )
    return located


def merge_hard_data(values: np.ndarray, hard: HardData | None) -> np.ndarray:
    """Return a copy of ``values`` with observed values written at their indices.

    Identity merge: the observed value replaces the computed one exactly.
    """
    merged = np.array(values, dtype=float, copy=True)
    if hard is not None and len(hard):
        merged[hard.indices] = hard.values
    return merged
