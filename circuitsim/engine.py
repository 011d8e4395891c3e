# circuitsim/engine.py
"""State vector engine: owns one amplitude vector and applies gates to it."""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
import numpy as np

from . import apply_serial
from . import sampling
from .errors import InvalidOperationError, MissingParameterError, check_qubit
from .gates import GateKind, GateOp, gate_matrix
from .logging import get_logger
from .reduce import ReducedState, reduce_qubit
from .state import BasisAmplitude, State

logger = get_logger(__name__)


@dataclass
class SimulationResult:
    num_qubits: int
    state_vector: np.ndarray
    probabilities: np.ndarray

    def amplitude_pairs(self) -> List[Tuple[float, float]]:
        return [(float(a.real), float(a.imag)) for a in self.state_vector]


def _load_backend(name: str, num_threads=None):
    if name == "serial":
        return apply_serial
    elif name == "numba":
        try:
            from . import apply_numba
        except ImportError as e:
            raise RuntimeError("Numba backend not available. Did you `pip install numba`?") from e
        if num_threads is not None:
            apply_numba.set_threads(int(num_threads))
        return apply_numba
    raise NotImplementedError(f"Unknown backend: {name}")


class StateVectorEngine:
    """Exact simulator for one register of ``num_qubits`` qubits.

    Gate calls validate their arguments before touching the amplitudes, so a
    rejected call leaves the state exactly as it was. Each engine owns its
    vector; use separate engines for concurrent simulations.
    """

    def __init__(self, num_qubits: int = 1, backend: str = "serial",
                 dtype=np.complex128, num_threads: Optional[int] = None,
                 norm_tol: float = 1e-6):
        self.backend = backend
        self.dtype = dtype
        self.norm_tol = norm_tol
        self._kernels = _load_backend(backend, num_threads)
        self.state = State.zero(num_qubits, dtype=dtype)

    @property
    def num_qubits(self) -> int:
        return self.state.n

    @property
    def state_vector(self) -> np.ndarray:
        return self.state.psi.copy()

    def reset(self, num_qubits: Optional[int] = None):
        if num_qubits is None:
            num_qubits = self.state.n
        self.state = State.zero(num_qubits, dtype=self.dtype)
        logger.debug("reset to |0...0> on %d qubit(s)", num_qubits)

    # ---------- validation ----------

    def _check_pair(self, a: int, b: int, num_qubits: Optional[int] = None):
        if num_qubits is None:
            num_qubits = self.num_qubits
        check_qubit(a, num_qubits)
        check_qubit(b, num_qubits)
        if a == b:
            raise InvalidOperationError(f"two-qubit gate needs distinct qubits, got {a} and {b}")

    def validate(self, op, num_qubits: Optional[int] = None) -> GateOp:
        """Return ``op`` as a GateOp or raise without touching the state."""
        if num_qubits is None:
            num_qubits = self.num_qubits
        op = GateOp.coerce(op)
        kind = op.kind
        if kind.is_two_qubit:
            if op.target_qubit is None:
                raise MissingParameterError(f"{kind.value} requires a target qubit")
            self._check_pair(op.qubit, op.target_qubit, num_qubits)
        else:
            check_qubit(op.qubit, num_qubits)
            if kind.is_rotation and op.theta is None:
                raise MissingParameterError(f"{kind.value} requires a theta parameter")
        return op

    # ---------- gate application ----------

    def apply_single_qubit_gate(self, kind, qubit: int, params: Optional[Mapping[str, float]] = None):
        kind = GateKind.parse(kind)
        theta = params.get("theta") if params else None
        U2 = gate_matrix(kind, theta, dtype=self.dtype)
        check_qubit(qubit, self.num_qubits)
        self._kernels.apply_single_qubit(self.state, U2, qubit)

    def apply_controlled_not(self, control: int, target: int):
        self._check_pair(control, target)
        self._kernels.apply_CNOT(self.state, control, target)

    def apply_controlled_z(self, control: int, target: int):
        self._check_pair(control, target)
        self._kernels.apply_CZ(self.state, control, target)

    def apply_swap(self, qubit_a: int, qubit_b: int):
        self._check_pair(qubit_a, qubit_b)
        self._kernels.apply_SWAP(self.state, qubit_a, qubit_b)

    def apply_gate_operation(self, op):
        op = self.validate(op)
        kind = op.kind
        if kind.is_fixed or kind.is_rotation:
            self.apply_single_qubit_gate(kind, op.qubit, op.params)
        elif kind is GateKind.CNOT:
            self.apply_controlled_not(op.qubit, op.target_qubit)
        elif kind is GateKind.CZ:
            self.apply_controlled_z(op.qubit, op.target_qubit)
        elif kind is GateKind.SWAP:
            self.apply_swap(op.qubit, op.target_qubit)
        elif kind is GateKind.MEASURE:
            # no collapse; sampling is a separate read-only step
            logger.debug("measurement marker on qubit %d ignored", op.qubit)
        else:
            raise InvalidOperationError(f"No rule for gate kind {kind!r}")

    def simulate(self, operations: Iterable, num_qubits: Optional[int] = None) -> SimulationResult:
        """Reset, then apply ``operations`` in stable ``position`` order."""
        if num_qubits is None:
            num_qubits = self.num_qubits
        ops = [self.validate(op, num_qubits) for op in operations]
        self.reset(num_qubits)
        ordered = sorted(ops, key=lambda op: op.position)
        logger.debug("simulating %d operation(s) on %d qubit(s) [%s]",
                     len(ordered), self.num_qubits, self.backend)
        for op in ordered:
            self.apply_gate_operation(op)

        n2 = self.state.norm2()
        if abs(1.0 - n2) > self.norm_tol:
            logger.warning("norm drifted after %d gate(s): ||psi||^2=%.12g", len(ordered), n2)

        return SimulationResult(
            num_qubits=self.num_qubits,
            state_vector=self.state_vector,
            probabilities=self.probabilities(),
        )

    # ---------- read-only views ----------

    def probabilities(self) -> np.ndarray:
        return sampling.probabilities(self.state.psi)

    def reduce_qubit(self, qubit: int) -> ReducedState:
        return reduce_qubit(self.state.psi, self.num_qubits, qubit)

    def bloch_vectors(self) -> List[ReducedState]:
        return [self.reduce_qubit(q) for q in range(self.num_qubits)]

    def sample_one(self, rng=None) -> str:
        return sampling.sample_one(self.state.psi, rng=rng)

    def sample_counts(self, shots: int, rng=None) -> Dict[str, int]:
        return sampling.sample_counts(self.state.psi, self.num_qubits, shots, rng=rng)

    def formatted_state(self, threshold: float = 1e-4) -> List[BasisAmplitude]:
        return self.state.formatted(threshold)
