"""Capacity-bounded single-wire gate sequence."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import torch

from qgategame.quantum import QuantumGate, QuantumState

DEFAULT_MAX_GATES = 6


class Circuit:
    """
    Ordered list of gates acting on one qubit, with a fixed slot capacity.

    The capacity is set at construction and never changes. Adding past
    capacity and removing at an invalid index are silent no-ops; the
    invariant ``gate_count <= max_gates`` therefore always holds.
    """

    def __init__(
        self,
        max_gates: int = DEFAULT_MAX_GATES,
        gates: Optional[Iterable[QuantumGate]] = None,
    ) -> None:
        """Initialize a Circuit, keeping at most ``max_gates`` of ``gates``."""
        if max_gates < 1:
            raise ValueError(f"Circuit requires max_gates >= 1, got {max_gates}.")

        self._max_gates = int(max_gates)
        self._gates: List[QuantumGate] = list(gates or [])[: self._max_gates]

    @property
    def max_gates(self) -> int:
        return self._max_gates

    @property
    def gates(self) -> Tuple[QuantumGate, ...]:
        """Read-only tuple of gates in application order."""
        return tuple(self._gates)

    @property
    def gate_count(self) -> int:
        return len(self._gates)

    @property
    def is_empty(self) -> bool:
        return not self._gates

    @property
    def is_full(self) -> bool:
        return len(self._gates) >= self._max_gates

    def add_gate(self, gate: QuantumGate) -> bool:
        """Append ``gate``; returns False (and changes nothing) when full."""
        if self.is_full:
            return False
        self._gates.append(gate)
        return True

    def remove_gate(self, index: int) -> None:
        """Remove the gate at ``index``; out-of-range indices are ignored."""
        if 0 <= index < len(self._gates):
            del self._gates[index]

    def remove_last_gate(self) -> None:
        if self._gates:
            self._gates.pop()

    def clear(self) -> None:
        self._gates.clear()

    def apply(self, initial_state: QuantumState) -> QuantumState:
        """Fold every gate onto ``initial_state``; the circuit is unchanged."""
        return initial_state.applying(self._gates)

    def intermediate_states(self, initial_state: QuantumState) -> List[QuantumState]:
        """
        Return the N+1 states seen after 0, 1, ..., N gate applications.

        Used to animate the arrow gate by gate; judging only needs
        :meth:`apply`.
        """
        states = [initial_state]
        current = initial_state
        for gate in self._gates:
            current = gate.apply(current)
            states.append(current)
        return states

    def unitary(self, dtype: torch.dtype = torch.complex128) -> torch.Tensor:
        """Return the overall 2x2 operator G_n ... G_2 G_1."""
        total = torch.eye(2, dtype=dtype)
        for gate in self._gates:
            total = torch.matmul(gate.matrix(dtype=dtype), total)
        return total

    def copy(self) -> "Circuit":
        return Circuit(self._max_gates, self._gates)

    def to_text_diagram(self) -> str:
        """
        Return a one-wire ASCII diagram, e.g. ``q: ─H──S──□─`` where ``□``
        marks an empty slot.
        """
        slots = [f"─{gate.symbol}─" for gate in self._gates]
        slots.extend("─□─" for _ in range(self._max_gates - len(self._gates)))
        return "q: " + "".join(slots)

    def __len__(self) -> int:
        return len(self._gates)

    def __iter__(self):
        return iter(self.gates)

    def __repr__(self) -> str:
        symbols = "".join(g.symbol for g in self._gates)
        return f"Circuit(max_gates={self._max_gates}, gates={symbols!r})"
