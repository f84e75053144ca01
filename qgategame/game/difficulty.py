"""Difficulty tiers and their table-driven constants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from qgategame.quantum import CARDINAL_STATES, ROTATED_STATES, QuantumState


class GameDifficulty(str, Enum):
    """Player-selectable difficulty tier."""

    EASY = "easy"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def profile(self) -> "DifficultyProfile":
        return _PROFILES[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        return self.profile.description


@dataclass(frozen=True)
class DifficultyProfile:
    """
    Constants bundled with a difficulty tier.

    Args:
        max_gates: Circuit capacity offered to the player.
        start_states: Pool the problem start state is drawn from.
        sequence_length: Inclusive (min, max) length of the generated
            gate sequence; max never exceeds ``max_gates``.
        base_score: Points awarded for every solve.
        max_bonus: Ceiling of the combo bonus.
        bonus_midpoint: Combo count at which the bonus reaches half its
            ceiling.
        description: Short text shown on the tier selector.
    """

    max_gates: int
    start_states: Tuple[QuantumState, ...]
    sequence_length: Tuple[int, int]
    base_score: int
    max_bonus: float
    bonus_midpoint: float
    description: str

    def __post_init__(self) -> None:
        """Validate DifficultyProfile invariants."""
        low, high = self.sequence_length
        if not (1 <= low <= high <= self.max_gates):
            raise ValueError(
                f"sequence_length {self.sequence_length} must satisfy "
                f"1 <= min <= max <= max_gates ({self.max_gates})."
            )
        if not self.start_states:
            raise ValueError("start_states must not be empty.")


_PROFILES = {
    GameDifficulty.EASY: DifficultyProfile(
        max_gates=4,
        start_states=(QuantumState.ZERO,),
        sequence_length=(2, 3),
        base_score=200,
        max_bonus=600.0,
        bonus_midpoint=8.0,
        description="Start from |0⟩",
    ),
    GameDifficulty.HARD: DifficultyProfile(
        max_gates=4,
        start_states=CARDINAL_STATES,
        sequence_length=(2, 4),
        base_score=500,
        max_bonus=1200.0,
        bonus_midpoint=6.0,
        description="Random start",
    ),
    GameDifficulty.EXPERT: DifficultyProfile(
        max_gates=6,
        start_states=CARDINAL_STATES + ROTATED_STATES,
        sequence_length=(3, 6),
        base_score=3000,
        max_bonus=3000.0,
        bonus_midpoint=4.0,
        description="Advanced States",
    ),
}
