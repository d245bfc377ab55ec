"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- factories: domain, data and problem factory functions
- solvers: reference solvers exercising each capability
"""

from tests.helpers.factories import (
    make_data,
    make_estimation_problem,
    make_learning_problem,
    make_line,
    make_simulation_problem,
)

__all__ = [
    "make_line",
    "make_data",
    "make_simulation_problem",
    "make_estimation_problem",
    "make_learning_problem",
]
