"""Tests for the hard-data merge."""

import numpy as np
import pytest

from geosolve.domain import DomainAdapter, PointSet
from geosolve.errors import ConfigurationError
from geosolve.execution import HardData, locate_hard_data, merge_hard_data
from geosolve.models import GeoData, SimulationProblem
from tests.helpers import make_simulation_problem


class TestMergeHardData:
    """Tests for merge_hard_data."""

    def test_observed_values_replace_computed(self):
        hard = HardData.from_pairs([(0, 5.0), (2, 9.0)])

        merged = merge_hard_data(np.array([1.0, 1.0, 1.0, 1.0]), hard)

        assert merged.tolist() == [5.0, 1.0, 9.0, 1.0]

    def test_input_is_not_mutated(self):
        values = np.zeros(3)

        merge_hard_data(values, HardData.from_pairs([(1, 4.0)]))

        assert values.tolist() == [0.0, 0.0, 0.0]

    def test_merge_is_identity_not_average(self):
        hard = HardData.from_pairs([(1, 0.1234567890123)])

        merged = merge_hard_data(np.full(3, 100.0), hard)

        assert merged[1] == 0.1234567890123

    def test_no_hard_data(self):
        assert merge_hard_data([1.0, 2.0], None).tolist() == [1.0, 2.0]
        assert merge_hard_data([1.0, 2.0], HardData()).tolist() == [1.0, 2.0]

    def test_idempotent(self):
        hard = HardData.from_pairs([(1, 3.0)])

        once = merge_hard_data(np.zeros(3), hard)
        twice = merge_hard_data(once, hard)

        assert once.tolist() == twice.tolist()


class TestLocateHardData:
    """Tests for locate_hard_data."""

    def test_every_variable_gets_an_entry(self):
        problem = make_simulation_problem(variables=("v", "w"), observed={"v": {2: 9.0}})

        located = locate_hard_data(problem, DomainAdapter())

        assert set(located) == {"v", "w"}
        assert located["v"].indices.tolist() == [2]
        assert located["v"].values.tolist() == [9.0]
        assert len(located["w"]) == 0

    def test_dimension_mismatch_is_configuration_error(self):
        problem = SimulationProblem(
            domain=PointSet([0.0, 1.0]),
            variables=["v"],
            data=GeoData(locations=[(0.0, 0.0)], columns={"v": [1.0]}),
        )

        with pytest.raises(ConfigurationError, match="Cannot locate observed data of 'v'"):
            locate_hard_data(problem, DomainAdapter())
