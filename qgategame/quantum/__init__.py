"""Single-qubit simulation: amplitudes, states, gates and Bloch vectors."""

from .bloch import BlochVector
from .complex import Complex
from .gates import ALL_GATES, QuantumGate, is_unitary
from .state import CARDINAL_STATES, ROTATED_STATES, QuantumState

__all__ = [
    "Complex",
    "QuantumState",
    "CARDINAL_STATES",
    "ROTATED_STATES",
    "QuantumGate",
    "ALL_GATES",
    "is_unitary",
    "BlochVector",
]
