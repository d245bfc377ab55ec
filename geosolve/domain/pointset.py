"""Unstructured point-cloud domain."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from scipy.spatial import cKDTree


class PointSet:
    """A domain made of arbitrary points.

    Locations are mapped to their nearest point. With a finite ``tol``,
    locations farther than ``tol`` from every point are outside the domain.

    Args:
        points: Point coordinates, shape (npoints, ndim) or a flat sequence
            of scalars for 1-D point sets
        tol: Maximum distance for a location to snap onto a point
    """

    def __init__(self, points: Sequence[Sequence[float]] | Sequence[float], tol: float = math.inf):
        coords = np.asarray(points, dtype=float)
        if coords.ndim == 1:
            coords = coords.reshape(-1, 1)
        if coords.ndim != 2 or coords.shape[0] == 0:
            raise ValueError(f"PointSet needs a non-empty (npoints, ndim) array, got {coords.shape}")
        if tol < 0:
            raise ValueError(f"tol must be non-negative, got {tol}")
        coords.setflags(write=False)
        self._coords = coords
        self._tol = tol
        self._tree = cKDTree(coords)

    @property
    def npoints(self) -> int:
        return int(self._coords.shape[0])

    @property
    def ndim(self) -> int:
        return int(self._coords.shape[1])

    def coordinates(self) -> np.ndarray:
        """Return the (read-only) point coordinates, shape (npoints, ndim)."""
        return self._coords

    def locate(self, coords: Sequence[float]) -> int | None:
        location = np.asarray(coords, dtype=float).reshape(-1)
        if location.shape[0] != self.ndim:
            raise ValueError(f"Expected {self.ndim} coordinates, got {location.shape[0]}")
        distance, index = self._tree.query(location)
        if distance > self._tol:
            return None
        return int(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointSet):
            return NotImplemented
        return self._tol == other._tol and np.array_equal(self._coords, other._coords)

    def __hash__(self) -> int:
        return hash((self._coords.shape, self._coords.tobytes(), self._tol))

    def __repr__(self) -> str:
        return f"PointSet(npoints={self.npoints}, ndim={self.ndim})"
