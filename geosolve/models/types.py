"""Shared type definitions for problem and solution models."""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum
from typing import Annotated, Any

from pydantic import AfterValidator

from geosolve.constants import VARIABLE_NAME_PATTERN

_VARIABLE_RE = re.compile(VARIABLE_NAME_PATTERN)


def validate_variable_name(value: Any) -> str:
    """Validate that a value is a usable variable identifier.

    Args:
        value: Candidate variable name

    Returns:
        The name unchanged

    Raises:
        ValueError: If the name is not an identifier-like string
    """
    if not isinstance(value, str):
        raise ValueError(f"Variable name must be a string, got {type(value).__name__}")
    if not _VARIABLE_RE.match(value):
        raise ValueError(f"Invalid variable name: '{value}'")
    return value


# Variable identifier (letter or underscore, then letters, digits, underscores)
VariableName = Annotated[str, AfterValidator(validate_variable_name)]


def normalize_variables(names: Iterable[str] | str) -> frozenset[str]:
    """Turn an iterable of variable names into a validated frozenset.

    Args:
        names: Variable names; a single string is treated as one name

    Returns:
        Frozenset of names

    Raises:
        ValueError: If a name is invalid, repeated, or the set is empty
    """
    if isinstance(names, str):
        names = [names]
    seen: list[str] = []
    for name in names:
        validate_variable_name(name)
        if name in seen:
            raise ValueError(f"Duplicate variable name: '{name}'")
        seen.append(name)
    if not seen:
        raise ValueError("At least one target variable is required")
    return frozenset(seen)


class TaskKind(str, Enum):
    """Kind of learning task attached to a target variable."""

    REGRESSION = "regression"
    CLASSIFICATION = "classification"


class ReadOnlyDict(dict):
    """A dict that rejects every in-place change.

    Pickles and copies as a ReadOnlyDict, so it survives the trip to worker
    processes.
    """

    def _read_only(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError(f"{type(self).__name__} is read-only")

    __setitem__ = _read_only
    __delitem__ = _read_only
    __ior__ = _read_only
    clear = _read_only
    pop = _read_only
    popitem = _read_only
    setdefault = _read_only
    update = _read_only

    def __reduce__(self) -> tuple[type[ReadOnlyDict], tuple[dict[Any, Any]]]:
        return type(self), (dict(self),)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict.__repr__(self)})"
