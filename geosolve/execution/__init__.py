"""Execution driver, scheduling policies and hard-data merge."""

from geosolve.execution.driver import Driver, RealizationTask, run_realization, solve
from geosolve.execution.hard_data import HardData, locate_hard_data, merge_hard_data
from geosolve.execution.host import solve_async
from geosolve.execution.policies import (
    ExecutionPolicy,
    PoolPolicy,
    ProcessPolicy,
    SerialPolicy,
    ThreadPolicy,
    policy_from_config,
)
from geosolve.execution.seeding import realization_rng, realization_seeds

__all__ = [
    # Driver
    "Driver",
    "RealizationTask",
    "run_realization",
    "solve",
    "solve_async",
    # Policies
    "ExecutionPolicy",
    "PoolPolicy",
    "SerialPolicy",
    "ThreadPolicy",
    "ProcessPolicy",
    "policy_from_config",
    # Hard data
    "HardData",
    "locate_hard_data",
    "merge_hard_data",
    # Seeding
    "realization_rng",
    "realization_seeds",
]
