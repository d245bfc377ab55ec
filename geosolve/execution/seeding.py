"""Per-realization random streams.

Every realization index gets its own child of one root SeedSequence, so a
given root seed reproduces the same streams whatever policy runs them and
whatever order they complete in.
"""

from __future__ import annotations

import numpy as np


def realization_seeds(seed: int | None, count: int) -> tuple[int, list[np.random.SeedSequence]]:
    """Spawn one independent SeedSequence per realization index.

    Args:
        seed: Root seed; None draws fresh OS entropy
        count: Number of realizations

    Returns:
        (root entropy, child seed sequences in realization index order).
        Passing the returned entropy back as ``seed`` reproduces the streams.
    """
    root = np.random.SeedSequence(seed)
    return int(root.entropy), root.spawn(count)


def realization_rng(seed: np.random.SeedSequence) -> np.random.Generator:
    """Build the Generator handed to solve_single for one realization."""
    return np.random.default_rng(seed)
