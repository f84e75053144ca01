"""Pass/fail judgment of a player's circuit."""

from __future__ import annotations

from dataclasses import dataclass

from qgategame.circuit import Circuit
from qgategame.quantum import QuantumState

# Pass condition: identical up to floating round-off, never partial credit.
EXACT_FIDELITY_THRESHOLD = 1.0 - 1e-6

# Only used to pick feedback text; it never passes a judgment.
ADVISORY_FIDELITY_THRESHOLD = 0.95

_FEEDBACK_BANDS = (
    (ADVISORY_FIDELITY_THRESHOLD, "Almost there!"),
    (0.7, "Getting closer..."),
    (0.5, "Right direction, maybe"),
    (0.3, "Still far away"),
)


@dataclass(frozen=True)
class JudgeResult:
    """
    Outcome of a judgment.

    Attributes
    ----------
    is_correct:
        Whether the fidelity reached the exact threshold.
    fidelity:
        |<result|target>|^2 in [0, 1].
    feedback:
        Short advisory text for the player.
    """

    is_correct: bool
    fidelity: float
    feedback: str = ""


class JudgeService:
    """Compares the state a circuit produces with the target state."""

    def __init__(self, threshold: float = EXACT_FIDELITY_THRESHOLD) -> None:
        if not (0.0 < threshold <= 1.0):
            raise ValueError(f"threshold must be in (0, 1], got {threshold}.")
        self.threshold = threshold

    def judge(
        self,
        circuit: Circuit,
        start_state: QuantumState,
        target_state: QuantumState,
    ) -> JudgeResult:
        """Run ``circuit`` on ``start_state`` and judge against ``target_state``."""
        return self.judge_state(circuit.apply(start_state), target_state)

    def judge_state(
        self, current_state: QuantumState, target_state: QuantumState
    ) -> JudgeResult:
        """Judge an already computed state."""
        fidelity = current_state.fidelity(target_state)
        is_correct = fidelity >= self.threshold
        return JudgeResult(
            is_correct=is_correct,
            fidelity=fidelity,
            feedback=feedback_message(fidelity, is_correct),
        )


def feedback_message(fidelity: float, is_correct: bool) -> str:
    """Pick the advisory message for a fidelity value."""
    if is_correct:
        return "Correct!"
    for lower, message in _FEEDBACK_BANDS:
        if fidelity >= lower:
            return message
    return "Try more gates"
