"""Protocol for the spatial domains solved over.

The framework treats a domain as opaque except for two things: how many
points it has, and which point a coordinate falls on.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class Domain(Protocol):
    """A discretized spatial domain.

    Values in every solution are indexed by domain point: index i of a
    value array refers to point i of the domain.
    """

    @property
    def npoints(self) -> int:
        """Number of points in the domain."""
        ...

    def locate(self, coords: Sequence[float]) -> int | None:
        """Map a coordinate tuple to a domain index.

        Args:
            coords: Coordinates of a location, one value per dimension

        Returns:
            Index of the domain point the location falls on, or None if the
            location lies outside the domain
        """
        ...
