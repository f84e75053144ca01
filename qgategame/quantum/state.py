"""Single-qubit pure state |psi> = alpha|0> + beta|1>."""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Iterable

import torch

from .complex import Complex

if TYPE_CHECKING:
    from .gates import QuantumGate


@dataclass(frozen=True)
class QuantumState:
    """
    Normalized two-amplitude state vector.

    Construction always rescales the amplitudes so that
    |alpha|^2 + |beta|^2 = 1. A zero-length input falls back to |0>, so
    floating-point edge cases never produce an invalid state.

    Attributes
    ----------
    alpha:
        Amplitude of |0>.
    beta:
        Amplitude of |1>.
    """

    alpha: Complex
    beta: Complex

    ZERO: ClassVar["QuantumState"]
    ONE: ClassVar["QuantumState"]
    PLUS: ClassVar["QuantumState"]
    MINUS: ClassVar["QuantumState"]
    PLUS_I: ClassVar["QuantumState"]
    MINUS_I: ClassVar["QuantumState"]
    T_PLUS: ClassVar["QuantumState"]
    T_MINUS: ClassVar["QuantumState"]
    T_PLUS_I: ClassVar["QuantumState"]
    T_MINUS_I: ClassVar["QuantumState"]

    def __post_init__(self) -> None:
        """Normalize the amplitudes in place."""
        norm = math.hypot(self.alpha.magnitude, self.beta.magnitude)
        if norm > 0.0 and math.isfinite(norm):
            alpha = Complex(self.alpha.real / norm, self.alpha.imaginary / norm)
            beta = Complex(self.beta.real / norm, self.beta.imaginary / norm)
        else:
            alpha, beta = Complex.ONE, Complex.ZERO
        object.__setattr__(self, "alpha", alpha)
        object.__setattr__(self, "beta", beta)

    @classmethod
    def from_amplitudes(cls, alpha: complex, beta: complex) -> "QuantumState":
        """Build a state from builtin complex amplitudes."""
        return cls(Complex.from_complex(alpha), Complex.from_complex(beta))

    @classmethod
    def from_tensor(cls, tensor: torch.Tensor) -> "QuantumState":
        """Build a state from a complex tensor of shape (2,)."""
        if tensor.shape != (2,):
            raise ValueError(f"state tensor must have shape (2,), got {tuple(tensor.shape)}")
        alpha, beta = (complex(v) for v in tensor.detach().cpu().tolist())
        return cls.from_amplitudes(alpha, beta)

    def to_tensor(
        self,
        dtype: torch.dtype = torch.complex128,
        device: torch.device | None = None,
    ) -> torch.Tensor:
        """Return the amplitudes as a complex tensor of shape (2,)."""
        return torch.tensor(
            [complex(self.alpha), complex(self.beta)], dtype=dtype, device=device
        )

    @property
    def probability_zero(self) -> float:
        """Born-rule probability of measuring 0."""
        return self.alpha.magnitude_squared

    @property
    def probability_one(self) -> float:
        """Born-rule probability of measuring 1."""
        return self.beta.magnitude_squared

    def inner_product(self, other: "QuantumState") -> Complex:
        """<self|other>, conjugating the receiver's amplitudes."""
        return self.alpha.conjugate * other.alpha + self.beta.conjugate * other.beta

    def fidelity(self, other: "QuantumState") -> float:
        """|<self|other>|^2 in [0, 1]; 1 means identical up to global phase."""
        return min(1.0, self.inner_product(other).magnitude_squared)

    def applying(self, gates: Iterable["QuantumGate"]) -> "QuantumState":
        """Apply ``gates`` in order; the first gate acts first."""
        state = self
        for gate in gates:
            state = gate.apply(state)
        return state

    def is_close(self, other: "QuantumState", atol: float = 1e-9) -> bool:
        """True if the amplitudes agree component-wise (global phase matters)."""
        return self.alpha.is_close(other.alpha, atol) and self.beta.is_close(
            other.beta, atol
        )

    def __repr__(self) -> str:
        return f"QuantumState(alpha={complex(self.alpha):.6g}, beta={complex(self.beta):.6g})"


_INV_SQRT2 = 1.0 / math.sqrt(2.0)
_T_PHASE = cmath.exp(1.0j * math.pi / 4.0)

QuantumState.ZERO = QuantumState(Complex.ONE, Complex.ZERO)
QuantumState.ONE = QuantumState(Complex.ZERO, Complex.ONE)
QuantumState.PLUS = QuantumState.from_amplitudes(_INV_SQRT2, _INV_SQRT2)
QuantumState.MINUS = QuantumState.from_amplitudes(_INV_SQRT2, -_INV_SQRT2)
QuantumState.PLUS_I = QuantumState.from_amplitudes(_INV_SQRT2, 1.0j * _INV_SQRT2)
QuantumState.MINUS_I = QuantumState.from_amplitudes(_INV_SQRT2, -1.0j * _INV_SQRT2)

# T applied to the four equator states: azimuths pi/4, 5pi/4, 3pi/4, 7pi/4.
QuantumState.T_PLUS = QuantumState.from_amplitudes(_INV_SQRT2, _INV_SQRT2 * _T_PHASE)
QuantumState.T_MINUS = QuantumState.from_amplitudes(_INV_SQRT2, -_INV_SQRT2 * _T_PHASE)
QuantumState.T_PLUS_I = QuantumState.from_amplitudes(
    _INV_SQRT2, 1.0j * _INV_SQRT2 * _T_PHASE
)
QuantumState.T_MINUS_I = QuantumState.from_amplitudes(
    _INV_SQRT2, -1.0j * _INV_SQRT2 * _T_PHASE
)

CARDINAL_STATES = (
    QuantumState.ZERO,
    QuantumState.ONE,
    QuantumState.PLUS,
    QuantumState.MINUS,
    QuantumState.PLUS_I,
    QuantumState.MINUS_I,
)

ROTATED_STATES = (
    QuantumState.T_PLUS,
    QuantumState.T_MINUS,
    QuantumState.T_PLUS_I,
    QuantumState.T_MINUS_I,
)
