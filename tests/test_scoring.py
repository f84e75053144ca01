"""Tests for score calculation and bookkeeping."""

import pytest

from qgategame.game import (
    GameDifficulty,
    ScoreCalculator,
    ScoreKeeper,
    logistic,
)

EASY, HARD, EXPERT = GameDifficulty.EASY, GameDifficulty.HARD, GameDifficulty.EXPERT


def test_first_solve_has_no_bonus():
    result = ScoreCalculator().calculate(EASY, combo_count=1)
    assert result.combo_bonus == 0
    assert result.total_gain == EASY.profile.base_score == 200


@pytest.mark.parametrize("difficulty, base", [(EASY, 200), (HARD, 500), (EXPERT, 3000)])
def test_base_scores(difficulty, base):
    assert ScoreCalculator().calculate(difficulty, 0).base_score == base


@pytest.mark.parametrize(
    "difficulty, combo, bonus",
    [
        (EASY, 2, 28),
        (HARD, 6, 600),
        (EXPERT, 4, 1500),
    ],
)
def test_bonus_values(difficulty, combo, bonus):
    assert ScoreCalculator().combo_bonus(difficulty, combo) == bonus


@pytest.mark.parametrize("difficulty", list(GameDifficulty))
def test_bonus_monotone_and_capped(difficulty):
    calc = ScoreCalculator()
    bonuses = [calc.combo_bonus(difficulty, c) for c in range(0, 60)]
    assert bonuses[0] == bonuses[1] == 0
    assert all(a <= b for a, b in zip(bonuses, bonuses[1:]))
    assert max(bonuses) <= difficulty.profile.max_bonus
    assert bonuses[-1] == pytest.approx(difficulty.profile.max_bonus, abs=1)


def test_logistic_is_stable_for_large_inputs():
    assert logistic(0.0) == pytest.approx(0.5)
    assert logistic(1000.0) == pytest.approx(1.0)
    assert logistic(-1000.0) == pytest.approx(0.0)


class TestScoreKeeper:
    def test_correct_answers_accumulate(self):
        keeper = ScoreKeeper()
        keeper.record_correct_answer(EASY)
        gain = keeper.record_correct_answer(EASY)
        assert gain.combo_bonus == 28
        assert keeper.score == 200 + 228
        assert keeper.problems_solved == 2
        assert keeper.combo_count == 2
        assert keeper.last_combo_bonus == 28

    def test_wrong_answer_breaks_combo_only(self):
        keeper = ScoreKeeper()
        keeper.record_correct_answer(HARD)
        keeper.record_correct_answer(HARD)
        keeper.record_wrong_answer()
        assert keeper.combo_count == 0
        assert keeper.last_combo_bonus == 0
        assert keeper.miss_count == 1
        assert keeper.problems_solved == 2
        assert keeper.score > 0

    def test_reset(self):
        keeper = ScoreKeeper()
        keeper.record_correct_answer(EXPERT)
        keeper.record_wrong_answer()
        keeper.reset()
        assert (keeper.score, keeper.problems_solved, keeper.combo_count) == (0, 0, 0)
        assert keeper.miss_count == 0
