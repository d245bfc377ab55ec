"""Maps problems and their observed data onto domain indices."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from geosolve.models.problems import Problem

logger = structlog.get_logger()


class DomainAdapter:
    """The framework's only view of a domain.

    Provides the point count used to validate solution shapes, and the
    (domain index, observed value) pairs used for the hard-data merge.
    """

    def point_count(self, domain: Any) -> int:
        """Number of points in a domain."""
        return int(domain.npoints)

    def hard_data_locations(self, problem: Problem, variable: str) -> list[tuple[int, float]]:
        """Locate the observed values of a variable on the problem's domain.

        Rows whose location falls outside the domain are skipped. If several
        rows land on the same domain index, the last row in table order wins.

        Args:
            problem: Problem holding the observed data and the domain
            variable: Variable whose observations to locate

        Returns:
            (domain index, observed value) pairs, sorted by domain index
        """
        data = problem.hard_data
        if data is None or variable not in data.columns:
            return []

        domain = problem.domain
        located: dict[int, float] = {}
        outside = 0
        for location, value in data.observed(variable):
            index = domain.locate(location)
            if index is None:
                outside += 1
                continue
            if index in located and located[index] != value:
                logger.debug(
                    "hard_data_index_overwritten",
                    variable=variable,
                    index=index,
                    previous=located[index],
                    value=value,
                )
            located[index] = value

        if outside:
            logger.warning(
                "hard_data_location_outside_domain",
                variable=variable,
                skipped_rows=outside,
            )
        return sorted(located.items())
