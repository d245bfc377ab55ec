"""Regular Cartesian grid domain."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class RegularGrid:
    """A regular grid of points.

    Point ``(i, j, ...)`` sits at ``origin + (i, j, ...) * spacing``. Linear
    indices follow C order (last dimension varies fastest).

    Attributes:
        dims: Number of points along each dimension
        origin: Coordinates of the first point (defaults to zeros)
        spacing: Distance between neighbouring points (defaults to ones)
    """

    dims: tuple[int, ...]
    origin: tuple[float, ...] | None = None
    spacing: tuple[float, ...] | None = None

    def __post_init__(self) -> None:
        dims = tuple(int(d) for d in self.dims)
        if not dims or any(d <= 0 for d in dims):
            raise ValueError(f"Grid dims must be positive, got {self.dims}")
        origin = tuple(float(o) for o in self.origin) if self.origin is not None else (0.0,) * len(dims)
        spacing = (
            tuple(float(s) for s in self.spacing) if self.spacing is not None else (1.0,) * len(dims)
        )
        if len(origin) != len(dims) or len(spacing) != len(dims):
            raise ValueError("origin and spacing must have one entry per dimension")
        if any(s <= 0 for s in spacing):
            raise ValueError(f"Grid spacing must be positive, got {spacing}")
        # Frozen dataclass: normalize fields through object.__setattr__
        object.__setattr__(self, "dims", dims)
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "spacing", spacing)

    @property
    def npoints(self) -> int:
        return int(np.prod(self.dims))

    @property
    def ndim(self) -> int:
        return len(self.dims)

    def coordinates(self) -> np.ndarray:
        """Return point coordinates in linear index order, shape (npoints, ndim)."""
        axes = [o + s * np.arange(d) for d, o, s in zip(self.dims, self.origin, self.spacing)]
        mesh = np.meshgrid(*axes, indexing="ij")
        return np.stack([m.reshape(-1) for m in mesh], axis=1)

    def locate(self, coords: Sequence[float]) -> int | None:
        location = np.asarray(coords, dtype=float).reshape(-1)
        if location.shape[0] != self.ndim:
            raise ValueError(f"Expected {self.ndim} coordinates, got {location.shape[0]}")
        cell = np.rint((location - np.asarray(self.origin)) / np.asarray(self.spacing)).astype(int)
        if np.any(cell < 0) or np.any(cell >= np.asarray(self.dims)):
            return None
        return int(np.ravel_multi_index(tuple(cell), self.dims))
