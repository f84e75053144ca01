"""Bloch-sphere projection of single-qubit states."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, ClassVar, Sequence, Tuple

import numpy as np

from .state import QuantumState

if TYPE_CHECKING:
    from .gates import QuantumGate

_NORTH_POLE = np.array([0.0, 0.0, 1.0])


class BlochVector:
    """
    Unit vector in R^3 representing a pure single-qubit state.

    Every constructor renormalizes its input; a zero-length (or non-finite)
    input falls back to the north pole (0, 0, 1), i.e. |0>.
    """

    __slots__ = ("_vector",)

    ZERO: ClassVar["BlochVector"]
    ONE: ClassVar["BlochVector"]
    PLUS: ClassVar["BlochVector"]
    MINUS: ClassVar["BlochVector"]
    PLUS_I: ClassVar["BlochVector"]
    MINUS_I: ClassVar["BlochVector"]

    def __init__(self, x: float, y: float, z: float) -> None:
        self._vector = _normalized(np.array([x, y, z], dtype=np.float64))
        self._vector.setflags(write=False)

    @classmethod
    def from_array(cls, vector: Sequence[float] | np.ndarray) -> "BlochVector":
        """Build from any length-3 sequence or array."""
        arr = np.asarray(vector, dtype=np.float64)
        if arr.shape != (3,):
            raise ValueError(f"Bloch vector must have shape (3,), got {arr.shape}")
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    @classmethod
    def from_state(cls, state: QuantumState) -> "BlochVector":
        """
        Project a state onto the sphere.

        With alpha = ar + i*ai and beta = br + i*bi:

            x = 2 (ar*br + ai*bi)
            y = 2 (ar*bi - ai*br)
            z = |alpha|^2 - |beta|^2
        """
        ar, ai = state.alpha.real, state.alpha.imaginary
        br, bi = state.beta.real, state.beta.imaginary
        x = 2.0 * (ar * br + ai * bi)
        y = 2.0 * (ar * bi - ai * br)
        z = (ar * ar + ai * ai) - (br * br + bi * bi)
        return cls(x, y, z)

    @property
    def vector(self) -> np.ndarray:
        """Read-only float64 array of shape (3,)."""
        return self._vector

    @property
    def x(self) -> float:
        return float(self._vector[0])

    @property
    def y(self) -> float:
        return float(self._vector[1])

    @property
    def z(self) -> float:
        return float(self._vector[2])

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @property
    def theta(self) -> float:
        """Polar angle from the north pole, in [0, pi]."""
        return math.acos(max(-1.0, min(1.0, self.z)))

    @property
    def phi(self) -> float:
        """Azimuth in the XY plane, atan2(y, x)."""
        return math.atan2(self.y, self.x)

    def distance(self, other: "BlochVector") -> float:
        """
        Euclidean distance in R^3, in [0, 2].

        This is a visual "how far is the arrow" measure; orthogonal states
        sit at distance 2, and it is not a substitute for fidelity.
        """
        return float(np.linalg.norm(self._vector - other._vector))

    def rotated(self, gate: "QuantumGate") -> "BlochVector":
        """Rotate by the gate's axis/angle (Rodrigues' rotation formula)."""
        k = np.asarray(gate.rotation_axis, dtype=np.float64)
        angle = gate.rotation_angle
        v = self._vector
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        rotated = v * cos_a + np.cross(k, v) * sin_a + k * np.dot(k, v) * (1.0 - cos_a)
        return BlochVector.from_array(rotated)

    def is_close(self, other: "BlochVector", atol: float = 1e-9) -> bool:
        return bool(np.allclose(self._vector, other._vector, atol=atol, rtol=0.0))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlochVector):
            return NotImplemented
        return bool(np.array_equal(self._vector, other._vector))

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __repr__(self) -> str:
        return f"BlochVector(x={self.x:.6g}, y={self.y:.6g}, z={self.z:.6g})"


def _normalized(v: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(v))
    if length > 0.0 and math.isfinite(length):
        return v / length
    return _NORTH_POLE.copy()


BlochVector.ZERO = BlochVector(0.0, 0.0, 1.0)
BlochVector.ONE = BlochVector(0.0, 0.0, -1.0)
BlochVector.PLUS = BlochVector(1.0, 0.0, 0.0)
BlochVector.MINUS = BlochVector(-1.0, 0.0, 0.0)
BlochVector.PLUS_I = BlochVector(0.0, 1.0, 0.0)
BlochVector.MINUS_I = BlochVector(0.0, -1.0, 0.0)
