"""The fixed catalog of six single-qubit gates."""

from __future__ import annotations

import cmath
import math
from enum import Enum
from typing import Tuple

import torch

from ..diagnostics import assert_normalized, is_debug_enabled
from .complex import Complex
from .state import QuantumState

Matrix2 = Tuple[Tuple[Complex, Complex], Tuple[Complex, Complex]]
Axis = Tuple[float, float, float]

_INV_SQRT2 = 1.0 / math.sqrt(2.0)


class QuantumGate(Enum):
    """
    Single-qubit unitary operators available to the player.

    Every gate has two equivalent descriptions: a 2x2 complex matrix (used
    by the simulation) and an axis/angle rotation of the Bloch sphere (used
    to animate the state arrow). Gates are stateless.
    """

    X = "x"
    Y = "y"
    Z = "z"
    H = "h"
    S = "s"
    T = "t"

    @classmethod
    def from_symbol(cls, symbol: str) -> "QuantumGate":
        """
        Parse a gate symbol such as ``"h"`` or ``"H"``.

        Raises:
            ValueError: If the symbol does not name one of the six gates.
        """
        try:
            return cls(symbol.strip().lower())
        except ValueError:
            supported = [g.symbol for g in cls]
            raise ValueError(
                f"Unknown gate symbol: {symbol!r}. Supported gates: {supported}"
            ) from None

    @property
    def symbol(self) -> str:
        """Upper-case label, e.g. ``"H"``."""
        return self.name

    @property
    def elements(self) -> Matrix2:
        """Matrix entries as :class:`Complex` values, row-major."""
        return _ELEMENTS[self]

    def matrix(
        self,
        dtype: torch.dtype = torch.complex128,
        device: torch.device | None = None,
    ) -> torch.Tensor:
        """
        Return the gate as a (2, 2) complex tensor.

        Args:
            dtype: Complex dtype for the gate matrix. Defaults to torch.complex128.
            device: PyTorch device. Defaults to CPU.
        """
        rows = [[complex(v) for v in row] for row in self.elements]
        return torch.tensor(rows, dtype=dtype, device=device)

    @property
    def rotation_axis(self) -> Axis:
        """Unit axis of the equivalent Bloch-sphere rotation."""
        return _ROTATIONS[self][0]

    @property
    def rotation_angle(self) -> float:
        """Angle in radians of the equivalent Bloch-sphere rotation."""
        return _ROTATIONS[self][1]

    @property
    def display_name(self) -> str:
        return _LABELS[self][0]

    @property
    def description(self) -> str:
        return _LABELS[self][1]

    @property
    def is_involution(self) -> bool:
        """True for gates that square to the identity (up to global phase)."""
        return self in (QuantumGate.X, QuantumGate.Y, QuantumGate.Z, QuantumGate.H)

    def apply(self, state: QuantumState) -> QuantumState:
        """
        Apply the gate: alpha' = m00*alpha + m01*beta, beta' = m10*alpha + m11*beta.

        The product is evaluated as a torch matrix-vector product in double
        precision and re-wrapped as a (renormalized) QuantumState.
        """
        new_state = torch.matmul(self.matrix(), state.to_tensor())

        if is_debug_enabled():
            assert_normalized(new_state, atol=1e-9)

        return QuantumState.from_tensor(new_state)


def is_unitary(matrix: torch.Tensor, atol: float = 1e-9) -> bool:
    """
    Check if a matrix is unitary (U^dagger U = I) within a given tolerance.

    Args:
        matrix: Tensor of shape (..., n, n).
        atol: Absolute tolerance for the check.
    """
    if matrix.shape[-1] != matrix.shape[-2]:
        return False

    adjoint = matrix.conj().transpose(-1, -2)
    product = torch.matmul(adjoint, matrix)

    n = matrix.shape[-1]
    identity = torch.eye(n, dtype=matrix.dtype, device=matrix.device)
    if product.ndim > 2:
        identity = identity.expand(product.shape)

    diff = torch.abs(product - identity)
    return bool(torch.all(diff < atol).item())


def _c(value: complex) -> Complex:
    return Complex.from_complex(value)


_ELEMENTS: dict[QuantumGate, Matrix2] = {
    QuantumGate.X: ((Complex.ZERO, Complex.ONE), (Complex.ONE, Complex.ZERO)),
    QuantumGate.Y: ((Complex.ZERO, _c(-1.0j)), (Complex.I, Complex.ZERO)),
    QuantumGate.Z: ((Complex.ONE, Complex.ZERO), (Complex.ZERO, _c(-1.0))),
    QuantumGate.H: (
        (_c(_INV_SQRT2), _c(_INV_SQRT2)),
        (_c(_INV_SQRT2), _c(-_INV_SQRT2)),
    ),
    QuantumGate.S: ((Complex.ONE, Complex.ZERO), (Complex.ZERO, Complex.I)),
    QuantumGate.T: (
        (Complex.ONE, Complex.ZERO),
        (Complex.ZERO, _c(cmath.exp(1.0j * math.pi / 4.0))),
    ),
}

_ROTATIONS: dict[QuantumGate, Tuple[Axis, float]] = {
    QuantumGate.X: ((1.0, 0.0, 0.0), math.pi),
    QuantumGate.Y: ((0.0, 1.0, 0.0), math.pi),
    QuantumGate.Z: ((0.0, 0.0, 1.0), math.pi),
    QuantumGate.H: ((_INV_SQRT2, 0.0, _INV_SQRT2), math.pi),
    QuantumGate.S: ((0.0, 0.0, 1.0), math.pi / 2.0),
    QuantumGate.T: ((0.0, 0.0, 1.0), math.pi / 4.0),
}

_LABELS: dict[QuantumGate, Tuple[str, str]] = {
    QuantumGate.X: ("Pauli-X (NOT)", "Bit flip: |0⟩ ↔ |1⟩"),
    QuantumGate.Y: ("Pauli-Y", "180° rotation about the Y axis"),
    QuantumGate.Z: ("Pauli-Z", "Phase flip: |1⟩ → -|1⟩"),
    QuantumGate.H: ("Hadamard", "Superposition: |0⟩ → |+⟩"),
    QuantumGate.S: ("S (√Z)", "90° phase shift"),
    QuantumGate.T: ("T (√S)", "45° phase shift"),
}

ALL_GATES: Tuple[QuantumGate, ...] = tuple(QuantumGate)
