"""Session configuration for the game engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_DURATION_ENV_VAR = "QGATEGAME_DURATION"
_TICK_ENV_VAR = "QGATEGAME_TICK_SECONDS"


@dataclass(frozen=True)
class GameConfig:
    """
    Tunable constants of a game session.

    Args:
        duration: Session length in countdown ticks (seconds in play).
        tick_seconds: Wall-clock length of one countdown tick.
        recent_window: Number of recent problem keys a new problem must
            not collide with.
        max_generation_attempts: Upper bound on candidate problems tried
            before generation gives up.
        trivial_fidelity: Candidates whose target has at least this fidelity
            with the start state are rejected as zero-effort problems.
        solved_flash_seconds: How long ``did_solve_last_problem`` stays set
            after a solve.
        max_misses: Carried for bookkeeping only; no transition reads it.
    """

    duration: int = 60
    tick_seconds: float = 1.0
    recent_window: int = 4
    max_generation_attempts: int = 256
    trivial_fidelity: float = 0.99
    solved_flash_seconds: float = 0.5
    max_misses: int = 3

    def __post_init__(self) -> None:
        """Validate GameConfig invariants."""
        if self.duration < 1:
            raise ValueError(f"duration must be >= 1, got {self.duration}.")

        if self.tick_seconds <= 0:
            raise ValueError(
                f"tick_seconds must be positive, got {self.tick_seconds}."
            )

        if self.recent_window < 0:
            raise ValueError(
                f"recent_window must be >= 0, got {self.recent_window}."
            )

        if self.max_generation_attempts < 1:
            raise ValueError(
                "max_generation_attempts must be >= 1, "
                f"got {self.max_generation_attempts}."
            )

        if not (0.0 < self.trivial_fidelity <= 1.0):
            raise ValueError(
                f"trivial_fidelity must be in (0, 1], got {self.trivial_fidelity}."
            )

        if self.solved_flash_seconds < 0:
            raise ValueError(
                "solved_flash_seconds must be >= 0, "
                f"got {self.solved_flash_seconds}."
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GameConfig":
        """
        Build a config, overriding duration and tick length from the
        QGATEGAME_DURATION and QGATEGAME_TICK_SECONDS environment variables.
        """
        if environ is None:
            environ = os.environ

        kwargs = {}
        if environ.get(_DURATION_ENV_VAR):
            kwargs["duration"] = int(environ[_DURATION_ENV_VAR])
        if environ.get(_TICK_ENV_VAR):
            kwargs["tick_seconds"] = float(environ[_TICK_ENV_VAR])
        return cls(**kwargs)
