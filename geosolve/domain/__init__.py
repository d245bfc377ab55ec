"""Domains and the adapter the framework uses to read them."""

from geosolve.domain.adapter import DomainAdapter
from geosolve.domain.base import Domain
from geosolve.domain.grid import RegularGrid
from geosolve.domain.pointset import PointSet

__all__ = ["Domain", "DomainAdapter", "PointSet", "RegularGrid"]
