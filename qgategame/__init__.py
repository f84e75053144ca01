"""qgategame - single-qubit gate puzzle engine on the Bloch sphere."""

__version__ = "0.1.0"

# Circuit
from .circuit import Circuit

# Configuration
from .config import GameConfig

# Diagnostics
from .diagnostics import (
    assert_normalized,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
    state_norm,
)

# Game layer
from .game import (
    CountdownTimer,
    DifficultyProfile,
    GameDifficulty,
    GameEngine,
    GameState,
    JudgeResult,
    JudgeService,
    Problem,
    ProblemGenerationError,
    ProblemGenerator,
    ProblemManager,
    ScoreCalculator,
    ScoreEntry,
    ScoreKeeper,
    ScoreRepository,
    ScoreResult,
    seed_rng,
)

# Quantum simulation
from .quantum import (
    ALL_GATES,
    BlochVector,
    Complex,
    QuantumGate,
    QuantumState,
    is_unitary,
)

__all__ = [
    # Version
    "__version__",
    # Quantum
    "Complex",
    "QuantumState",
    "QuantumGate",
    "ALL_GATES",
    "is_unitary",
    "BlochVector",
    # Circuit
    "Circuit",
    # Config
    "GameConfig",
    # Game
    "GameDifficulty",
    "DifficultyProfile",
    "Problem",
    "ProblemGenerator",
    "ProblemManager",
    "ProblemGenerationError",
    "seed_rng",
    "JudgeResult",
    "JudgeService",
    "ScoreResult",
    "ScoreCalculator",
    "ScoreKeeper",
    "CountdownTimer",
    "GameState",
    "GameEngine",
    "ScoreEntry",
    "ScoreRepository",
    # Diagnostics
    "state_norm",
    "assert_normalized",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
