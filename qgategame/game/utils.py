"""Random-number helpers shared by the game layer."""

from __future__ import annotations

from typing import Optional

import numpy as np


def seed_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a seeded NumPy random number generator.

    Args:
        seed: Random seed. If None, fresh OS entropy is used so that real
            sessions differ; pass an integer for deterministic replay.

    Examples:
        >>> rng = seed_rng(42)
        >>> 0 <= int(rng.integers(10)) < 10
        True
    """
    return np.random.default_rng(seed)
