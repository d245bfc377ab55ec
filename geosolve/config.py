"""Execution configuration for the solver driver."""

from __future__ import annotations

import operator
import os
from dataclasses import dataclass
from typing import Any

from geosolve.constants import (
    DEFAULT_EXECUTOR,
    DEFAULT_REALIZATIONS,
    ENV_DEFAULT_REALIZATIONS,
    ENV_EXECUTOR,
    ENV_MAX_WORKERS,
    ENV_SEED,
    EXECUTORS,
)
from geosolve.errors import ConfigurationError


@dataclass(frozen=True)
class ExecutionConfig:
    """Centralized configuration for realization execution.

    Holds the execution policy and defaults used by the Driver, making it
    easy to test with different configurations.

    Attributes:
        executor: Execution policy name: "serial", "thread" or "process"
        max_workers: Worker count for thread/process policies
            (None lets concurrent.futures pick, based on os.cpu_count())
        default_realizations: Realization count used when solve() is not given one
        seed: Default root seed for realization random streams (None = fresh entropy)
    """

    executor: str = DEFAULT_EXECUTOR
    max_workers: int | None = None
    default_realizations: int = DEFAULT_REALIZATIONS
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.executor not in EXECUTORS:
            raise ConfigurationError(
                f"Unknown executor '{self.executor}', expected one of {', '.join(EXECUTORS)}"
            )
        # object.__setattr__ because the dataclass is frozen
        if self.max_workers is not None:
            object.__setattr__(self, "max_workers", check_int("max_workers", self.max_workers))
        object.__setattr__(
            self,
            "default_realizations",
            check_int("default_realizations", self.default_realizations),
        )
        if self.seed is not None:
            object.__setattr__(self, "seed", check_int("seed", self.seed, minimum=0))

    @classmethod
    def from_env(cls) -> ExecutionConfig:
        """Build a config from GEOSOLVE_* environment variables.

        Unset variables fall back to the dataclass defaults.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        executor = os.environ.get(ENV_EXECUTOR, DEFAULT_EXECUTOR).strip().lower()
        return cls(
            executor=executor,
            max_workers=_int_from_env(ENV_MAX_WORKERS),
            default_realizations=_env_or_default(ENV_DEFAULT_REALIZATIONS, DEFAULT_REALIZATIONS),
            seed=_int_from_env(ENV_SEED),
        )


def _int_from_env(name: str) -> int | None:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError as err:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'") from err


def _env_or_default(name: str, default: int) -> int:
    value = _int_from_env(name)
    return default if value is None else value


def check_int(name: str, value: Any, *, minimum: int = 1) -> int:
    """Return ``value`` as an int, rejecting bools, non-integers and values below ``minimum``.

    Raises:
        ConfigurationError: If the value is not an integer or is too small
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got bool")
    try:
        number = operator.index(value)
    except TypeError as err:
        raise ConfigurationError(
            f"{name} must be an integer, got {type(value).__name__}"
        ) from err
    if number < minimum:
        qualifier = "positive" if minimum == 1 else f"at least {minimum}"
        raise ConfigurationError(f"{name} must be {qualifier}, got {number}")
    return number

# Default configuration instance
DEFAULT_EXECUTION_CONFIG = ExecutionConfig()
