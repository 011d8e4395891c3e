# circuitsim/tests/test_gates.py
import numpy as np
import pytest
from circuitsim import apply_serial
from circuitsim import gates as G
from circuitsim.errors import InvalidOperationError, MissingParameterError, UnknownGateError
from circuitsim.gates import GateKind, GateOp, gate_matrix
from circuitsim.state import State

def is_unitary(U):
    return np.allclose(U.conj().T @ U, np.eye(U.shape[0]))

def random_state(n, seed):
    rng = np.random.default_rng(seed)
    psi = rng.normal(size=1 << n) + 1j*rng.normal(size=1 << n)
    return State(n, psi / np.linalg.norm(psi))

@pytest.mark.parametrize("kind", ["H", "X", "Y", "Z", "S", "T"])
def test_fixed_gates_unitary(kind):
    assert is_unitary(gate_matrix(kind))

@pytest.mark.parametrize("kind", ["RX", "RY", "RZ"])
def test_rotations_unitary_and_identity_at_zero(kind):
    assert is_unitary(gate_matrix(kind, 1.234))
    assert np.allclose(gate_matrix(kind, 0.0), np.eye(2))

def test_known_relations():
    assert np.allclose(G.S() @ G.S(), G.Z())
    assert np.allclose(G.T() @ G.T(), G.S())
    assert np.allclose(G.H() @ G.Z() @ G.H(), G.X())
    assert np.allclose(G.RZ(np.pi), -1j * G.Z())

def test_gate_matrix_errors():
    with pytest.raises(MissingParameterError):
        gate_matrix("RX")
    with pytest.raises(InvalidOperationError):
        gate_matrix("SWAP")
    with pytest.raises(InvalidOperationError):
        gate_matrix("MEASURE")
    with pytest.raises(UnknownGateError):
        gate_matrix("U3")

def test_kind_parsing():
    assert GateKind.parse("h") is GateKind.H
    assert GateKind.parse(" cx ") is GateKind.CNOT
    assert GateKind.parse("M") is GateKind.MEASURE
    assert GateKind.parse(GateKind.RZ) is GateKind.RZ
    assert GateKind.SWAP.is_two_qubit and GateKind.RY.is_rotation and GateKind.T.is_fixed

def test_gate_op_from_dict():
    op = GateOp.from_dict({"gate": "RY", "qubit": 1, "params": {"theta": 0.5}, "position": 3})
    assert (op.kind, op.qubit, op.theta, op.position) == (GateKind.RY, 1, 0.5, 3)
    op = GateOp.from_dict({"kind": "SWAP", "qubit": 0, "target_qubit": 2})
    assert op.qubits == (0, 2) and op.position == 0 and op.theta is None
    with pytest.raises(MissingParameterError):
        GateOp.from_dict({"qubit": 0})

def test_gate_op_params_are_a_private_read_only_copy():
    params = {"theta": 0.5}
    op = GateOp("RX", 0, params=params)
    params["theta"] = 2.0
    assert op.theta == 0.5
    with pytest.raises(TypeError):
        op.params["theta"] = 1.0

def test_gate_op_hashable():
    a = GateOp("RZ", 1, params={"theta": 0.3}, position=2)
    b = GateOp(GateKind.RZ, 1, params={"theta": 0.3}, position=2)
    assert a == b and hash(a) == hash(b)
    assert len({a, b, GateOp("H", 0), GateOp("CNOT", 0, 1)}) == 3

@pytest.mark.parametrize("kind, structural", [
    ("CNOT", apply_serial.apply_CNOT),
    ("CZ", apply_serial.apply_CZ),
    ("SWAP", apply_serial.apply_SWAP),
])
def test_structural_rules_match_dense_4x4(kind, structural):
    n = 4
    for seed, (a, b) in enumerate([(0, 1), (1, 0), (0, 3), (3, 1), (2, 0)]):
        s1 = random_state(n, seed)
        s2 = s1.copy()
        structural(s1, a, b)
        apply_serial.apply_two_qubit_4x4(s2, G.dense_two_qubit(kind), a, b)
        assert np.allclose(s1.psi, s2.psi, atol=1e-12)

def test_single_qubit_scatter_matches_kron():
    n = 3
    st = random_state(n, 4)
    U = G.RY(0.9) @ G.T()
    expect = np.kron(np.kron(np.eye(2), U), np.eye(2)) @ st.psi   # qubit 1 is the middle factor
    apply_serial.apply_single_qubit(st, U, 1)
    assert np.allclose(st.psi, expect)

def test_dense_two_qubit_rejects_single():
    with pytest.raises(InvalidOperationError):
        G.dense_two_qubit("H")
