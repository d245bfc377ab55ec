"""Observed (hard) data tables."""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Any

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator

from geosolve.models.types import ReadOnlyDict, VariableName


class GeoData(BaseModel):
    """A table of samples observed at known locations.

    Rows are sample locations, columns are variables. A missing entry
    (None or NaN) means the variable was not observed at that row. The table
    is immutable: locations and column values are tuples and the column
    mapping is read-only.
    """

    locations: tuple[tuple[float, ...], ...] = Field(
        description="Sample coordinates, one tuple per row."
    )
    columns: dict[VariableName, tuple[float | None, ...]] = Field(
        description="Observed values per variable, aligned with locations."
    )

    model_config = {"frozen": True}

    @field_validator("locations")
    @classmethod
    def check_locations(
        cls, locations: tuple[tuple[float, ...], ...]
    ) -> tuple[tuple[float, ...], ...]:
        dims = {len(loc) for loc in locations}
        if len(dims) > 1:
            raise ValueError(f"All locations must have the same dimension, got {sorted(dims)}")
        if 0 in dims:
            raise ValueError("Locations must have at least one coordinate")
        return locations

    @field_validator("columns")
    @classmethod
    def freeze_columns(cls, columns: dict[str, tuple[float | None, ...]]) -> ReadOnlyDict:
        return ReadOnlyDict(columns)

    @model_validator(mode="after")
    def check_column_lengths(self) -> GeoData:
        for name, values in self.columns.items():
            if len(values) != len(self.locations):
                raise ValueError(
                    f"Column '{name}' has {len(values)} values for {len(self.locations)} locations"
                )
        return self

    @classmethod
    def from_records(cls, records: list[dict[str, Any]], coords: tuple[str, ...]) -> GeoData:
        """Build a table from row dicts.

        Args:
            records: One dict per sample, holding coordinate and variable keys
            coords: Keys holding the coordinates, in dimension order

        Returns:
            GeoData with every non-coordinate key as a column
        """
        names: list[str] = []
        for record in records:
            for key in record:
                if key not in coords and key not in names:
                    names.append(key)
        return cls(
            locations=[tuple(float(r[c]) for c in coords) for r in records],
            columns={name: [r.get(name) for r in records] for name in names},
        )

    @property
    def nrows(self) -> int:
        return len(self.locations)

    @property
    def variables(self) -> frozenset[str]:
        return frozenset(self.columns)

    def column(self, name: str) -> np.ndarray:
        """Return a column as a float array with missing entries as NaN."""
        if name not in self.columns:
            raise KeyError(f"No column '{name}' in data (columns: {sorted(self.columns)})")
        return np.array(
            [np.nan if v is None else float(v) for v in self.columns[name]], dtype=float
        )

    def observed(self, name: str) -> Iterator[tuple[tuple[float, ...], float]]:
        """Yield (location, value) for the rows where ``name`` was observed."""
        for location, value in zip(self.locations, self.columns.get(name, ())):
            if value is None or math.isnan(value):
                continue
            yield location, float(value)
