"""Tests for domains and the domain adapter."""

import pytest

from geosolve.domain import Domain, DomainAdapter, PointSet, RegularGrid
from geosolve.models import GeoData, SimulationProblem
from tests.helpers import make_line


class TestPointSet:
    """Tests for PointSet."""

    def test_flat_sequence_is_one_dimensional(self):
        points = PointSet([0.0, 1.0, 2.0])

        assert points.npoints == 3
        assert points.ndim == 1
        assert isinstance(points, Domain)

    def test_locate_nearest(self):
        points = PointSet([[0.0, 0.0], [10.0, 0.0], [0.0, 10.0]])

        assert points.locate((9.0, 1.0)) == 1
        assert points.locate((0.5, 7.0)) == 2

    def test_locate_respects_tolerance(self):
        points = PointSet([0.0, 1.0], tol=0.25)

        assert points.locate((1.2,)) == 1
        assert points.locate((0.5,)) is None

    def test_locate_dimension_mismatch(self):
        with pytest.raises(ValueError, match="Expected 1 coordinates"):
            PointSet([0.0, 1.0]).locate((0.0, 0.0))

    def test_empty_rejected(self):
        with pytest.raises(ValueError, match="non-empty"):
            PointSet([])

    def test_coordinates_are_read_only(self):
        coords = PointSet([0.0, 1.0]).coordinates()
        with pytest.raises(ValueError):
            coords[0, 0] = 5.0

    def test_equality(self):
        assert PointSet([0.0, 1.0]) == PointSet([0.0, 1.0])
        assert PointSet([0.0, 1.0]) != PointSet([0.0, 2.0])
        assert hash(PointSet([0.0, 1.0])) == hash(PointSet([0.0, 1.0]))


class TestRegularGrid:
    """Tests for RegularGrid."""

    def test_defaults(self, grid):
        assert grid.npoints == 12
        assert grid.ndim == 2
        assert grid.origin == (0.0, 0.0)
        assert grid.spacing == (1.0, 1.0)
        assert isinstance(grid, Domain)

    def test_locate_uses_c_order(self, grid):
        # Point (i, j) has linear index i * 4 + j
        assert grid.locate((0.0, 0.0)) == 0
        assert grid.locate((0.0, 3.0)) == 3
        assert grid.locate((1.0, 0.0)) == 4
        assert grid.locate((2.2, 2.9)) == 11

    def test_locate_outside(self, grid):
        assert grid.locate((-1.0, 0.0)) is None
        assert grid.locate((0.0, 4.0)) is None

    def test_origin_and_spacing(self):
        grid = RegularGrid(dims=(5,), origin=(100.0,), spacing=(10.0,))

        assert grid.locate((120.0,)) == 2
        assert grid.coordinates()[:, 0].tolist() == [100.0, 110.0, 120.0, 130.0, 140.0]

    def test_coordinates_match_locate(self, grid):
        coords = grid.coordinates()

        assert coords.shape == (12, 2)
        for index, point in enumerate(coords):
            assert grid.locate(point) == index

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"dims": ()},
            {"dims": (0, 3)},
            {"dims": (2, 2), "origin": (0.0,)},
            {"dims": (2,), "spacing": (0.0,)},
        ],
    )
    def test_invalid_grids_rejected(self, kwargs):
        with pytest.raises(ValueError):
            RegularGrid(**kwargs)


class TestDomainAdapter:
    """Tests for DomainAdapter."""

    def test_point_count(self, grid):
        assert DomainAdapter().point_count(grid) == 12

    def test_hard_data_locations(self):
        problem = SimulationProblem(
            domain=make_line(4),
            variables=["v"],
            data=GeoData(locations=[(3.0,), (0.1,), (2.0,)], columns={"v": [7.0, 1.0, None]}),
        )

        assert DomainAdapter().hard_data_locations(problem, "v") == [(0, 1.0), (3, 7.0)]

    def test_no_data_means_no_locations(self):
        problem = SimulationProblem(domain=make_line(4), variables=["v"])
        assert DomainAdapter().hard_data_locations(problem, "v") == []

    def test_variable_without_column(self):
        problem = SimulationProblem(
            domain=make_line(4),
            variables=["v", "w"],
            data=GeoData(locations=[(1.0,)], columns={"v": [1.0]}),
        )
        assert DomainAdapter().hard_data_locations(problem, "w") == []

    def test_rows_outside_domain_are_skipped(self):
        problem = SimulationProblem(
            domain=RegularGrid(dims=(4,)),
            variables=["v"],
            data=GeoData(locations=[(1.0,), (50.0,)], columns={"v": [1.0, 2.0]}),
        )
        assert DomainAdapter().hard_data_locations(problem, "v") == [(1, 1.0)]

    def test_last_row_wins_on_shared_index(self):
        problem = SimulationProblem(
            domain=make_line(4),
            variables=["v"],
            data=GeoData(locations=[(1.0,), (1.1,)], columns={"v": [1.0, 2.0]}),
        )
        assert DomainAdapter().hard_data_locations(problem, "v") == [(1, 2.0)]
