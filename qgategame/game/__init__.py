"""Game layer: problem generation, judging, scoring and the session engine."""

from .difficulty import DifficultyProfile, GameDifficulty
from .engine import GameEngine, GameState
from .judge import (
    ADVISORY_FIDELITY_THRESHOLD,
    EXACT_FIDELITY_THRESHOLD,
    JudgeResult,
    JudgeService,
    feedback_message,
)
from .problems import (
    Problem,
    ProblemGenerationError,
    ProblemGenerator,
    ProblemManager,
    problem_key,
)
from .records import ScoreEntry, ScoreRepository
from .scoring import ScoreCalculator, ScoreKeeper, ScoreResult, logistic
from .timer import CountdownTimer
from .utils import seed_rng

__all__ = [
    # Difficulty
    "GameDifficulty",
    "DifficultyProfile",
    # Problems
    "Problem",
    "ProblemGenerator",
    "ProblemManager",
    "ProblemGenerationError",
    "problem_key",
    "seed_rng",
    # Judging
    "JudgeResult",
    "JudgeService",
    "EXACT_FIDELITY_THRESHOLD",
    "ADVISORY_FIDELITY_THRESHOLD",
    "feedback_message",
    # Scoring
    "ScoreResult",
    "ScoreCalculator",
    "ScoreKeeper",
    "logistic",
    # Session
    "CountdownTimer",
    "GameState",
    "GameEngine",
    # Records
    "ScoreEntry",
    "ScoreRepository",
]
