"""Pytest configuration and fixtures."""

import pytest

from geosolve.domain import PointSet, RegularGrid
from geosolve.execution import Driver, SerialPolicy, ThreadPolicy
from geosolve.models import SimulationProblem
from tests.helpers import make_line, make_simulation_problem


@pytest.fixture
def line() -> PointSet:
    """Four points at x = 0, 1, 2, 3."""
    return make_line(4)


@pytest.fixture
def grid() -> RegularGrid:
    """A 3 x 4 grid with unit spacing at the origin."""
    return RegularGrid(dims=(3, 4))


@pytest.fixture
def conditioned_problem() -> SimulationProblem:
    """Four-point simulation of 'v' with 9.0 observed at index 2."""
    return make_simulation_problem(npoints=4, observed={"v": {2: 9.0}})


@pytest.fixture
def serial_driver() -> Driver:
    return Driver(policy=SerialPolicy())


@pytest.fixture
def thread_driver() -> Driver:
    return Driver(policy=ThreadPolicy(max_workers=4))
