"""Tests for the capacity-bounded circuit."""

import pytest
import torch

from qgategame.circuit import DEFAULT_MAX_GATES, Circuit
from qgategame.quantum import QuantumGate, QuantumState, is_unitary

H, S, T, X, Z = (
    QuantumGate.H,
    QuantumGate.S,
    QuantumGate.T,
    QuantumGate.X,
    QuantumGate.Z,
)


class TestCapacity:
    def test_default_capacity(self):
        circuit = Circuit()
        assert circuit.max_gates == DEFAULT_MAX_GATES
        assert circuit.is_empty

    def test_invalid_capacity(self):
        with pytest.raises(ValueError, match="max_gates"):
            Circuit(0)

    def test_add_past_capacity_is_rejected(self):
        circuit = Circuit(2)
        assert circuit.add_gate(H)
        assert circuit.add_gate(S)
        assert circuit.is_full
        assert not circuit.add_gate(T)
        assert circuit.gates == (H, S)

    def test_initial_gates_truncated(self):
        circuit = Circuit(3, [H, S, T, X])
        assert circuit.gates == (H, S, T)

    def test_gate_count_never_exceeds_capacity(self, rng):
        circuit = Circuit(4)
        catalog = list(QuantumGate)
        for _ in range(200):
            if rng.random() < 0.7:
                circuit.add_gate(catalog[int(rng.integers(len(catalog)))])
            else:
                circuit.remove_gate(int(rng.integers(-2, 6)))
            assert 0 <= circuit.gate_count <= circuit.max_gates


class TestEditing:
    def test_remove_at_index(self):
        circuit = Circuit(4, [H, S, T])
        circuit.remove_gate(1)
        assert circuit.gates == (H, T)

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_remove_out_of_range_is_noop(self, index):
        circuit = Circuit(4, [H, S, T])
        circuit.remove_gate(index)
        assert circuit.gates == (H, S, T)

    def test_remove_last_and_clear(self):
        circuit = Circuit(4, [H, S])
        circuit.remove_last_gate()
        assert circuit.gates == (H,)
        circuit.clear()
        assert circuit.is_empty
        circuit.remove_last_gate()
        assert circuit.is_empty

    def test_gates_tuple_is_a_snapshot(self):
        circuit = Circuit(4, [H])
        snapshot = circuit.gates
        circuit.add_gate(S)
        assert snapshot == (H,)

    def test_copy_is_independent(self):
        circuit = Circuit(4, [H])
        other = circuit.copy()
        other.add_gate(X)
        assert circuit.gates == (H,)
        assert other.max_gates == 4


class TestSimulation:
    def test_empty_circuit_is_identity(self):
        assert Circuit().apply(QuantumState.PLUS_I) == QuantumState.PLUS_I

    def test_apply_in_order(self):
        assert Circuit(4, [H, S]).apply(QuantumState.ZERO).is_close(QuantumState.PLUS_I)
        assert Circuit(4, [S, H]).apply(QuantumState.ZERO).is_close(QuantumState.PLUS)

    def test_apply_does_not_mutate(self):
        circuit = Circuit(4, [H, Z])
        circuit.apply(QuantumState.ZERO)
        assert circuit.gates == (H, Z)

    def test_intermediate_states(self):
        states = Circuit(4, [H, Z, H]).intermediate_states(QuantumState.ZERO)
        assert len(states) == 4
        assert states[0] == QuantumState.ZERO
        assert states[1].is_close(QuantumState.PLUS)
        assert states[2].is_close(QuantumState.MINUS)
        assert states[3].is_close(QuantumState.ONE)

    def test_unitary_matches_apply(self, rng):
        catalog = list(QuantumGate)
        gates = [catalog[int(i)] for i in rng.integers(len(catalog), size=5)]
        circuit = Circuit(6, gates)
        u = circuit.unitary()
        assert is_unitary(u)

        start = QuantumState.PLUS_I
        expected = circuit.apply(start).to_tensor()
        assert torch.allclose(u @ start.to_tensor(), expected, atol=1e-12)

    def test_empty_unitary_is_identity(self):
        assert torch.equal(Circuit().unitary(), torch.eye(2, dtype=torch.complex128))


class TestIntrospection:
    def test_text_diagram(self):
        assert Circuit(3, [H, S]).to_text_diagram() == "q: ─H──S──□─"

    def test_len_iter_repr(self):
        circuit = Circuit(4, [X, Z])
        assert len(circuit) == 2
        assert list(circuit) == [X, Z]
        assert repr(circuit) == "Circuit(max_gates=4, gates='XZ')"
