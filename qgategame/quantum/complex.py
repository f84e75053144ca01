"""Minimal complex-number value type used for state amplitudes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Union

Scalar = Union[int, float]


@dataclass(frozen=True)
class Complex:
    """
    Immutable complex number ``real + imaginary * i``.

    Amplitudes are kept in this explicit form so that the simulation layer
    reads like the textbook formulas; ``complex(c)`` and
    :meth:`from_complex` convert to and from Python's builtin type.
    """

    real: float
    imaginary: float = 0.0

    ZERO: ClassVar["Complex"]
    ONE: ClassVar["Complex"]
    I: ClassVar["Complex"]

    @classmethod
    def from_complex(cls, value: complex) -> "Complex":
        """Wrap a builtin complex (or real) number."""
        value = complex(value)
        return cls(value.real, value.imag)

    @property
    def magnitude(self) -> float:
        """|z| = sqrt(a^2 + b^2)."""
        return math.hypot(self.real, self.imaginary)

    @property
    def magnitude_squared(self) -> float:
        """|z|^2, the form probabilities and fidelities need."""
        return self.real * self.real + self.imaginary * self.imaginary

    @property
    def conjugate(self) -> "Complex":
        return Complex(self.real, -self.imaginary)

    @property
    def phase(self) -> float:
        """Argument of z in radians, in (-pi, pi]."""
        return math.atan2(self.imaginary, self.real)

    def __add__(self, other: "Complex") -> "Complex":
        if not isinstance(other, Complex):
            return NotImplemented
        return Complex(self.real + other.real, self.imaginary + other.imaginary)

    def __sub__(self, other: "Complex") -> "Complex":
        if not isinstance(other, Complex):
            return NotImplemented
        return Complex(self.real - other.real, self.imaginary - other.imaginary)

    def __mul__(self, other: Union["Complex", Scalar]) -> "Complex":
        if isinstance(other, Complex):
            return Complex(
                self.real * other.real - self.imaginary * other.imaginary,
                self.real * other.imaginary + self.imaginary * other.real,
            )
        if isinstance(other, (int, float)):
            return Complex(self.real * other, self.imaginary * other)
        return NotImplemented

    def __rmul__(self, other: Scalar) -> "Complex":
        if isinstance(other, (int, float)):
            return Complex(other * self.real, other * self.imaginary)
        return NotImplemented

    def __complex__(self) -> complex:
        return complex(self.real, self.imaginary)

    def is_close(self, other: "Complex", atol: float = 1e-9) -> bool:
        """Return True if both components agree within ``atol``."""
        return (
            abs(self.real - other.real) <= atol
            and abs(self.imaginary - other.imaginary) <= atol
        )


Complex.ZERO = Complex(0.0, 0.0)
Complex.ONE = Complex(1.0, 0.0)
Complex.I = Complex(0.0, 1.0)
