"""Timed game session: a finite state machine over problems and scoring.

States::

    READY --start--> PLAYING --pause--> PAUSED --resume--> PLAYING
                        |
                   countdown hits 0
                        v
                    FINISHED

``reset`` returns to READY from any state. Calls that are not valid in
the current state are ignored rather than raising, so a stray tap from
the UI can never corrupt a session.

All engine mutation happens on one logical thread (the caller's event
loop). The countdown task is the only background activity.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import Callable, List, Optional, Tuple

import numpy as np

from qgategame.circuit import Circuit
from qgategame.config import GameConfig
from qgategame.logging import get_logger
from qgategame.quantum import BlochVector, QuantumGate, QuantumState

from .difficulty import GameDifficulty
from .judge import JudgeResult, JudgeService
from .problems import Problem, ProblemGenerator, ProblemManager
from .records import ScoreEntry
from .scoring import ScoreCalculator, ScoreKeeper
from .timer import CountdownTimer

logger = get_logger(__name__)

Observer = Callable[[str, "GameEngine"], None]

EVENT_STATE = "state"
EVENT_CIRCUIT = "circuit"
EVENT_PROBLEM = "problem"
EVENT_SCORE = "score"
EVENT_TIME = "time"


class GameState(Enum):
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    FINISHED = "finished"


class GameEngine:
    """
    Orchestrates one timed session.

    Args:
        config: Session constants; defaults to :class:`GameConfig`.
        rng: Random source for problem generation.
        clock: Monotonic clock used for the "just solved" flash.
        judge: Judge used by :meth:`check_current_state`.
        calculator: Score calculator used on every solve.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[np.random.Generator] = None,
        clock: Callable[[], float] = time.monotonic,
        judge: Optional[JudgeService] = None,
        calculator: Optional[ScoreCalculator] = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self._clock = clock
        self._judge = judge if judge is not None else JudgeService()
        self._scores = ScoreKeeper(calculator)
        self._problems = ProblemManager(
            ProblemGenerator(rng=rng, config=self.config),
            recent_window=self.config.recent_window,
        )
        self._timer = CountdownTimer(
            duration=self.config.duration,
            tick_seconds=self.config.tick_seconds,
            on_time_up=self._end_game,
            on_tick=self._on_tick,
        )

        self._state = GameState.READY
        self._difficulty = GameDifficulty.EASY
        self._circuit = Circuit(self._difficulty.profile.max_gates)
        self._current_vector = BlochVector.ZERO
        self._solved_at: Optional[float] = None
        self._final_score_entry: Optional[ScoreEntry] = None
        self._observers: List[Observer] = []

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def difficulty(self) -> GameDifficulty:
        return self._difficulty

    @property
    def remaining_time(self) -> int:
        return self._timer.remaining_time

    @property
    def score(self) -> int:
        return self._scores.score

    @property
    def problems_solved(self) -> int:
        return self._scores.problems_solved

    @property
    def combo_count(self) -> int:
        return self._scores.combo_count

    @property
    def last_combo_bonus(self) -> int:
        return self._scores.last_combo_bonus

    @property
    def miss_count(self) -> int:
        return self._scores.miss_count

    @property
    def current_problem(self) -> Optional[Problem]:
        return self._problems.current_problem

    @property
    def current_circuit(self) -> Circuit:
        """A copy of the live circuit; mutate through the engine instead."""
        return self._circuit.copy()

    @property
    def circuit_gates(self) -> Tuple[QuantumGate, ...]:
        return self._circuit.gates

    @property
    def current_vector(self) -> BlochVector:
        return self._current_vector

    @property
    def target_vector(self) -> BlochVector:
        problem = self.current_problem
        if problem is None:
            return BlochVector.ZERO
        return problem.target_bloch_vector

    @property
    def current_fidelity(self) -> float:
        """Fidelity of the live circuit output with the target (1.0 if idle)."""
        problem = self.current_problem
        if problem is None:
            return 1.0
        return self._circuit.apply(problem.start_state).fidelity(problem.target_state)

    @property
    def did_solve_last_problem(self) -> bool:
        if self._solved_at is None:
            return False
        return self._clock() - self._solved_at < self.config.solved_flash_seconds

    @property
    def final_score_entry(self) -> Optional[ScoreEntry]:
        return self._final_score_entry

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """
        Register ``callback(event, engine)``; returns an unsubscribe function.

        Events: "state", "circuit", "problem", "score", "time".
        """
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _emit(self, event: str) -> None:
        for callback in list(self._observers):
            try:
                callback(event, self)
            except Exception:
                logger.exception("Observer %r failed on %r event", callback, event)

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def start(
        self,
        difficulty: GameDifficulty = GameDifficulty.EASY,
        start_timer: bool = True,
    ) -> None:
        """READY -> PLAYING. Ignored in any other state."""
        if self._state is not GameState.READY:
            return

        difficulty = GameDifficulty(difficulty)
        self._problems.reset()
        problem = self._problems.generate(difficulty, problem_number=0)

        self._difficulty = difficulty
        self._scores.reset()
        self._circuit = Circuit(difficulty.profile.max_gates)
        self._current_vector = problem.start_bloch_vector
        self._solved_at = None
        self._final_score_entry = None
        self._state = GameState.PLAYING

        if start_timer:
            self._timer.start()
        else:
            self._timer.reset()

        logger.info("Session started (%s, %ds)", difficulty.value, self.config.duration)
        for event in (EVENT_STATE, EVENT_PROBLEM, EVENT_CIRCUIT, EVENT_SCORE, EVENT_TIME):
            self._emit(event)

    def start_countdown(self) -> None:
        """Begin ticking a session started with ``start_timer=False``."""
        if self._state is not GameState.PLAYING:
            return
        self._timer.resume()

    def tick(self) -> None:
        """Deliver one countdown tick by hand (no event loop needed)."""
        if self._state is not GameState.PLAYING:
            return
        self._timer.tick()

    def pause(self) -> None:
        if self._state is not GameState.PLAYING:
            return
        self._state = GameState.PAUSED
        self._timer.pause()
        self._emit(EVENT_STATE)

    def resume(self) -> None:
        if self._state is not GameState.PAUSED:
            return
        self._state = GameState.PLAYING
        self._timer.resume()
        self._emit(EVENT_STATE)

    def reset(self) -> None:
        """Cancel the countdown, then return to READY with a clean slate."""
        self._timer.reset()
        self._state = GameState.READY
        self._scores.reset()
        self._circuit = Circuit(self._difficulty.profile.max_gates)
        self._problems.reset()
        self._current_vector = BlochVector.ZERO
        self._solved_at = None
        self._final_score_entry = None

        logger.info("Session reset")
        for event in (EVENT_STATE, EVENT_PROBLEM, EVENT_CIRCUIT, EVENT_SCORE, EVENT_TIME):
            self._emit(event)

    def _on_tick(self, remaining: int) -> None:
        logger.debug("Tick: %ds left", remaining)
        self._emit(EVENT_TIME)

    def _end_game(self) -> None:
        if self._state is not GameState.PLAYING:
            return
        self._state = GameState.FINISHED
        self._timer.pause()
        self._final_score_entry = ScoreEntry(
            score=self._scores.score,
            problems_solved=self._scores.problems_solved,
            difficulty=self._difficulty,
        )
        logger.info(
            "Session finished: score=%d solved=%d",
            self._scores.score,
            self._scores.problems_solved,
        )
        self._emit(EVENT_STATE)

    # ------------------------------------------------------------------
    # Circuit editing
    # ------------------------------------------------------------------

    def add_gate(self, gate: QuantumGate) -> bool:
        """Append a gate while PLAYING; False if ignored or the circuit is full."""
        if self._state is not GameState.PLAYING:
            return False
        if not self._circuit.add_gate(gate):
            return False
        self._refresh_vector()
        return True

    def remove_gate(self, index: int) -> None:
        if self._state is not GameState.PLAYING:
            return
        self._circuit.remove_gate(index)
        self._refresh_vector()

    def clear_circuit(self) -> None:
        if self._state is not GameState.PLAYING:
            return
        self._circuit.clear()
        self._refresh_vector()

    def _refresh_vector(self) -> None:
        problem = self.current_problem
        if problem is None:
            self._current_vector = BlochVector.ZERO
        else:
            self._current_vector = BlochVector.from_state(
                self._circuit.apply(problem.start_state)
            )
        self._emit(EVENT_CIRCUIT)

    def current_state(self) -> QuantumState:
        """State produced by the live circuit (|0> when no problem is loaded)."""
        problem = self.current_problem
        if problem is None:
            return QuantumState.ZERO
        return self._circuit.apply(problem.start_state)

    # ------------------------------------------------------------------
    # Judging
    # ------------------------------------------------------------------

    def judge_current(self) -> Optional[JudgeResult]:
        problem = self.current_problem
        if problem is None:
            return None
        return self._judge.judge(self._circuit, problem.start_state, problem.target_state)

    def check_current_state(self) -> bool:
        """Whether the live circuit solves the current problem. Pure query."""
        result = self.judge_current()
        return result is not None and result.is_correct

    def handle_correct_answer(self) -> None:
        """
        Score the solve and load the next problem.

        The next problem is generated before any state changes, so a
        ``ProblemGenerationError`` leaves the session untouched.
        """
        if self._state is not GameState.PLAYING or self.current_problem is None:
            return

        problem = self._problems.generate(
            self._difficulty, problem_number=self._scores.problems_solved + 1
        )
        gain = self._scores.record_correct_answer(self._difficulty)
        self._solved_at = self._clock()
        self._circuit.clear()
        self._current_vector = problem.start_bloch_vector

        logger.debug(
            "Solved #%d: +%d (combo %d)",
            self._scores.problems_solved,
            gain.total_gain,
            self._scores.combo_count,
        )
        for event in (EVENT_SCORE, EVENT_PROBLEM, EVENT_CIRCUIT):
            self._emit(event)

    def handle_wrong_answer(self) -> bool:
        """Break the combo; the session continues. Always returns False."""
        self._scores.record_wrong_answer()
        self._emit(EVENT_SCORE)
        return False

    def run_circuit(self) -> Tuple[bool, bool]:
        """
        Judge the live circuit and score the outcome.

        Returns:
            ``(is_correct, is_game_over)``. Outside PLAYING nothing is
            judged; an empty circuit is not judged and is not a miss.
        """
        if self._state is not GameState.PLAYING:
            return False, self._state is GameState.FINISHED
        if self._circuit.is_empty:
            return False, False

        if self.check_current_state():
            self.handle_correct_answer()
            return True, False

        self.handle_wrong_answer()
        return False, False
