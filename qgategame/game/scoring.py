"""Score gain per solve and per-session score bookkeeping."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .difficulty import GameDifficulty

# Logistic steepness shared by every tier.
COMBO_STEEPNESS = 0.5

# Combos shorter than this earn no bonus.
MIN_BONUS_COMBO = 2


def logistic(u: float) -> float:
    """1 / (1 + e^-u), evaluated without overflow for large |u|."""
    if u >= 0:
        return 1.0 / (1.0 + math.exp(-u))
    e = math.exp(u)
    return e / (1.0 + e)


@dataclass(frozen=True)
class ScoreResult:
    """Points earned by one solve."""

    base_score: int
    combo_bonus: int

    @property
    def total_gain(self) -> int:
        return self.base_score + self.combo_bonus


class ScoreCalculator:
    """
    Maps (difficulty, combo streak) to a score gain.

    The combo bonus follows a logistic curve, so short streaks barely
    matter while sustained streaks approach the tier's ceiling:

        bonus = round(max_bonus * logistic(k * (combo - midpoint)))

    Harder tiers have a lower midpoint and a higher ceiling.
    """

    def __init__(self, steepness: float = COMBO_STEEPNESS) -> None:
        self.steepness = steepness

    def combo_bonus(self, difficulty: GameDifficulty, combo_count: int) -> int:
        if combo_count < MIN_BONUS_COMBO:
            return 0
        profile = GameDifficulty(difficulty).profile
        u = self.steepness * (combo_count - profile.bonus_midpoint)
        return int(round(profile.max_bonus * logistic(u)))

    def calculate(self, difficulty: GameDifficulty, combo_count: int) -> ScoreResult:
        profile = GameDifficulty(difficulty).profile
        return ScoreResult(
            base_score=profile.base_score,
            combo_bonus=self.combo_bonus(difficulty, combo_count),
        )


class ScoreKeeper:
    """
    Running score, combo and solve counters of one session.

    ``miss_count`` is tracked for compatibility; nothing reads it to end
    a session.
    """

    def __init__(self, calculator: ScoreCalculator | None = None) -> None:
        self.calculator = calculator if calculator is not None else ScoreCalculator()
        self.reset()

    def reset(self) -> None:
        self.score = 0
        self.problems_solved = 0
        self.combo_count = 0
        self.last_combo_bonus = 0
        self.miss_count = 0

    def record_correct_answer(self, difficulty: GameDifficulty) -> ScoreResult:
        self.combo_count += 1
        result = self.calculator.calculate(difficulty, self.combo_count)
        self.last_combo_bonus = result.combo_bonus
        self.score += result.total_gain
        self.problems_solved += 1
        return result

    def record_wrong_answer(self) -> None:
        self.combo_count = 0
        self.last_combo_bonus = 0
        self.miss_count += 1
