"""Procedural generation of always-solvable target states.

A problem is built forwards: pick a start state, draw a short random gate
sequence, and fold it onto the start state. The resulting target is
reachable by construction, and the drawn sequence is kept as the
reference solution. Candidates are rejected when they are trivial (the
target is the start state) or when they repeat one of the last few
problems of the session.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from qgategame.config import GameConfig
from qgategame.logging import get_logger
from qgategame.quantum import ALL_GATES, BlochVector, QuantumGate, QuantumState

from .difficulty import GameDifficulty
from .utils import seed_rng

logger = get_logger(__name__)

_KEY_DECIMALS = 3


class ProblemGenerationError(RuntimeError):
    """Raised when no acceptable problem was found within the retry budget."""


@dataclass(frozen=True)
class Problem:
    """
    One puzzle: rotate ``start_state`` onto ``target_state``.

    Attributes
    ----------
    start_state, start_bloch_vector:
        State the player's circuit acts on, and its sphere position.
    target_state, target_bloch_vector:
        Goal state and its sphere position.
    minimum_gates:
        Length of the generated sequence (an upper bound on the shortest
        solution).
    reference_solution:
        The gate sequence that produced the target.
    difficulty:
        Sequence number of the problem within the session (0-based).
    """

    start_state: QuantumState
    start_bloch_vector: BlochVector
    target_state: QuantumState
    target_bloch_vector: BlochVector
    minimum_gates: int
    reference_solution: Tuple[QuantumGate, ...]
    difficulty: int


def problem_key(start: QuantumState, target: QuantumState) -> str:
    """
    Identify a problem by its rounded start and target sphere positions.

    Bloch coordinates ignore global phase, so two problems that look the
    same on screen share a key.
    """
    start_key = _vector_key(BlochVector.from_state(start))
    target_key = _vector_key(BlochVector.from_state(target))
    return f"{start_key}->{target_key}"


def _vector_key(vector: BlochVector) -> str:
    # "+ 0.0" folds -0.0 into 0.0 so both render identically
    coords = [round(c, _KEY_DECIMALS) + 0.0 for c in vector.as_tuple()]
    return "(" + ",".join(f"{c:.{_KEY_DECIMALS}f}" for c in coords) + ")"


class ProblemGenerator:
    """
    Produce solvable problems for a difficulty tier.

    Randomness comes only from the injected ``numpy.random.Generator``, so
    a seeded generator replays the exact same problem stream.

    Args:
        rng: Random source. Defaults to an unseeded generator.
        config: Supplies the retry budget and the trivial-fidelity cutoff.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        config: Optional[GameConfig] = None,
    ) -> None:
        self.rng = rng if rng is not None else seed_rng()
        self.config = config if config is not None else GameConfig()

    def generate(
        self,
        difficulty: GameDifficulty,
        problem_number: int = 0,
        recent_keys: Iterable[str] = (),
    ) -> Tuple[Problem, str]:
        """
        Generate a problem whose key is not among ``recent_keys``.

        Returns:
            The problem and its identifying key.

        Raises:
            ProblemGenerationError: If ``max_generation_attempts`` candidates
                were all rejected.
        """
        tier = GameDifficulty(difficulty)
        profile = tier.profile
        recent = set(recent_keys)

        for attempt in range(1, self.config.max_generation_attempts + 1):
            start = self._choose_start_state(profile.start_states)
            gates = self._draw_sequence(profile.sequence_length)
            target = start.applying(gates)

            if target.fidelity(start) >= self.config.trivial_fidelity:
                logger.debug("Attempt %d rejected: trivial target", attempt)
                continue

            key = problem_key(start, target)
            if key in recent:
                logger.debug("Attempt %d rejected: recent key %s", attempt, key)
                continue

            problem = Problem(
                start_state=start,
                start_bloch_vector=BlochVector.from_state(start),
                target_state=target,
                target_bloch_vector=BlochVector.from_state(target),
                minimum_gates=len(gates),
                reference_solution=tuple(gates),
                difficulty=problem_number,
            )
            return problem, key

        logger.warning(
            "No acceptable %s problem after %d attempts",
            tier.value,
            self.config.max_generation_attempts,
        )
        raise ProblemGenerationError(
            f"Could not generate a {tier.value} problem in "
            f"{self.config.max_generation_attempts} attempts."
        )

    def _choose_start_state(self, pool: Sequence[QuantumState]) -> QuantumState:
        if len(pool) == 1:
            return pool[0]
        return pool[int(self.rng.integers(len(pool)))]

    def _draw_sequence(self, length_range: Tuple[int, int]) -> List[QuantumGate]:
        low, high = length_range
        length = int(self.rng.integers(low, high, endpoint=True))

        gates: List[QuantumGate] = []
        for _ in range(length):
            # A gate directly followed by itself is never drawn.
            choices = [g for g in ALL_GATES if not gates or g is not gates[-1]]
            gates.append(choices[int(self.rng.integers(len(choices)))])
        return gates


class ProblemManager:
    """
    Holds the current problem and the rolling window of recent keys.

    Args:
        generator: Problem source.
        recent_window: How many past keys a new problem must avoid.
    """

    def __init__(self, generator: ProblemGenerator, recent_window: int = 4) -> None:
        self.generator = generator
        self.recent_window = recent_window
        self._recent: Deque[str] = deque()
        self._current: Optional[Problem] = None

    @property
    def current_problem(self) -> Optional[Problem]:
        return self._current

    @property
    def recent_keys(self) -> Tuple[str, ...]:
        """Keys of the most recent problems, oldest first."""
        return tuple(self._recent)

    def generate(self, difficulty: GameDifficulty, problem_number: int) -> Problem:
        """Generate, install and remember a new current problem."""
        problem, key = self.generator.generate(
            difficulty, problem_number=problem_number, recent_keys=self._recent
        )
        self._current = problem
        self._recent.append(key)
        while len(self._recent) > self.recent_window:
            self._recent.popleft()
        return problem

    def reset(self) -> None:
        self._current = None
        self._recent.clear()
