"""Tests for problem generation."""

import numpy as np
import pytest

from qgategame.config import GameConfig
from qgategame.game import (
    GameDifficulty,
    ProblemGenerationError,
    ProblemGenerator,
    ProblemManager,
    problem_key,
)
from qgategame.quantum import CARDINAL_STATES, ROTATED_STATES, QuantumState

ALL_TIERS = list(GameDifficulty)


class LowestDrawRNG:
    """Stand-in generator whose every draw returns the lowest value."""

    def integers(self, low, high=None, endpoint=False):
        return 0 if high is None else low


@pytest.mark.parametrize("difficulty", ALL_TIERS)
def test_reference_solution_reaches_target(difficulty, rng):
    generator = ProblemGenerator(rng=rng)
    for n in range(30):
        problem, _ = generator.generate(difficulty, problem_number=n)
        reached = problem.start_state.applying(problem.reference_solution)
        assert reached.fidelity(problem.target_state) == pytest.approx(1.0, abs=1e-9)
        assert problem.difficulty == n


@pytest.mark.parametrize("difficulty", ALL_TIERS)
def test_solution_fits_circuit(difficulty, rng):
    profile = difficulty.profile
    low, high = profile.sequence_length
    generator = ProblemGenerator(rng=rng)
    for _ in range(30):
        problem, _ = generator.generate(difficulty)
        assert problem.minimum_gates == len(problem.reference_solution)
        assert low <= problem.minimum_gates <= high <= profile.max_gates


@pytest.mark.parametrize("difficulty", ALL_TIERS)
def test_targets_are_never_trivial(difficulty, rng):
    generator = ProblemGenerator(rng=rng)
    cutoff = generator.config.trivial_fidelity
    for _ in range(50):
        problem, _ = generator.generate(difficulty)
        assert problem.target_state.fidelity(problem.start_state) < cutoff


def test_easy_always_starts_from_zero(rng):
    generator = ProblemGenerator(rng=rng)
    for _ in range(20):
        problem, _ = generator.generate(GameDifficulty.EASY)
        assert problem.start_state == QuantumState.ZERO


def test_start_states_come_from_tier_pool(rng):
    generator = ProblemGenerator(rng=rng)
    hard_pool = set(CARDINAL_STATES)
    expert_pool = set(CARDINAL_STATES + ROTATED_STATES)
    for _ in range(30):
        hard, _ = generator.generate(GameDifficulty.HARD)
        expert, _ = generator.generate(GameDifficulty.EXPERT)
        assert hard.start_state in hard_pool
        assert expert.start_state in expert_pool


def test_no_gate_repeated_back_to_back(rng):
    generator = ProblemGenerator(rng=rng)
    for _ in range(50):
        problem, _ = generator.generate(GameDifficulty.EXPERT)
        gates = problem.reference_solution
        assert all(a is not b for a, b in zip(gates, gates[1:]))


def test_bloch_vectors_match_states(rng):
    problem, _ = ProblemGenerator(rng=rng).generate(GameDifficulty.HARD)
    assert problem.start_bloch_vector.is_close(
        type(problem.start_bloch_vector).from_state(problem.start_state)
    )
    assert problem.target_bloch_vector.is_close(
        type(problem.target_bloch_vector).from_state(problem.target_state)
    )


def test_seeded_generators_replay_identically():
    a = ProblemGenerator(rng=np.random.default_rng(1234))
    b = ProblemGenerator(rng=np.random.default_rng(1234))
    for difficulty in ALL_TIERS * 5:
        pa, ka = a.generate(difficulty)
        pb, kb = b.generate(difficulty)
        assert ka == kb
        assert pa.reference_solution == pb.reference_solution
        assert pa.start_state == pb.start_state


def test_recent_keys_are_avoided(rng):
    generator = ProblemGenerator(rng=rng)
    first, key = generator.generate(GameDifficulty.EASY)
    for _ in range(30):
        _, other = generator.generate(GameDifficulty.EASY, recent_keys=[key])
        assert other != key


def test_problem_key_format():
    key = problem_key(QuantumState.ZERO, QuantumState.PLUS)
    assert key == "(0.000,0.000,1.000)->(1.000,0.000,0.000)"


def test_problem_key_ignores_global_phase():
    phased = QuantumState.from_amplitudes(-1.0, 0.0)
    assert problem_key(phased, QuantumState.MINUS_I) == problem_key(
        QuantumState.ZERO, QuantumState.MINUS_I
    )


def test_generation_gives_up_after_bounded_attempts():
    # Lowest draws always produce X then Y, which maps |0> back onto itself.
    config = GameConfig(max_generation_attempts=10)
    generator = ProblemGenerator(rng=LowestDrawRNG(), config=config)
    with pytest.raises(ProblemGenerationError, match="10 attempts"):
        generator.generate(GameDifficulty.EASY)


class TestProblemManager:
    def test_generate_installs_current_problem(self, rng):
        manager = ProblemManager(ProblemGenerator(rng=rng))
        assert manager.current_problem is None
        problem = manager.generate(GameDifficulty.EASY, problem_number=0)
        assert manager.current_problem is problem
        assert len(manager.recent_keys) == 1

    def test_window_is_rolling(self, rng):
        manager = ProblemManager(ProblemGenerator(rng=rng), recent_window=4)
        for n in range(20):
            before = manager.recent_keys
            manager.generate(GameDifficulty.EASY, problem_number=n)
            new_key = manager.recent_keys[-1]
            assert new_key not in before
            assert len(manager.recent_keys) <= 4

    def test_reset(self, rng):
        manager = ProblemManager(ProblemGenerator(rng=rng))
        manager.generate(GameDifficulty.HARD, problem_number=0)
        manager.reset()
        assert manager.current_problem is None
        assert manager.recent_keys == ()
