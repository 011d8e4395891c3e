# circuitsim/gates.py
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple
import numpy as np

from .errors import InvalidOperationError, MissingParameterError, UnknownGateError


class GateKind(str, Enum):
    H = "H"
    X = "X"
    Y = "Y"
    Z = "Z"
    S = "S"
    T = "T"
    RX = "RX"
    RY = "RY"
    RZ = "RZ"
    CNOT = "CNOT"
    CZ = "CZ"
    SWAP = "SWAP"
    MEASURE = "MEASURE"

    @classmethod
    def parse(cls, name) -> "GateKind":
        """Case-insensitive lookup; ``M`` and ``CX`` are accepted aliases."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().upper()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnknownGateError(f"Unknown gate kind: {name!r}") from None

    @property
    def is_fixed(self) -> bool:
        return self in _FIXED_KINDS

    @property
    def is_rotation(self) -> bool:
        return self in _ROTATION_KINDS

    @property
    def is_two_qubit(self) -> bool:
        return self in _TWO_QUBIT_KINDS

    @property
    def is_measurement(self) -> bool:
        return self is GateKind.MEASURE


_ALIASES = {"M": "MEASURE", "CX": "CNOT"}
_FIXED_KINDS = frozenset({GateKind.H, GateKind.X, GateKind.Y, GateKind.Z, GateKind.S, GateKind.T})
_ROTATION_KINDS = frozenset({GateKind.RX, GateKind.RY, GateKind.RZ})
_TWO_QUBIT_KINDS = frozenset({GateKind.CNOT, GateKind.CZ, GateKind.SWAP})


@dataclass(frozen=True)
class GateOp:
    """One gate placed in a circuit. ``position`` only orders operations."""
    kind: GateKind
    qubit: int
    target_qubit: Optional[int] = None
    params: Optional[Mapping[str, float]] = None
    position: int = 0

    def __post_init__(self):
        object.__setattr__(self, "kind", GateKind.parse(self.kind))
        if self.params is not None:
            # read-only copy of the caller's mapping
            object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def __hash__(self):
        params = tuple(sorted(self.params.items())) if self.params is not None else None
        return hash((self.kind, self.qubit, self.target_qubit, params, self.position))

    @property
    def theta(self) -> Optional[float]:
        if not self.params:
            return None
        return self.params.get("theta")

    @property
    def qubits(self) -> Tuple[int, ...]:
        if self.target_qubit is None:
            return (self.qubit,)
        return (self.qubit, self.target_qubit)

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "GateOp":
        """Build from ``{kind|gate, qubit, targetQubit|target_qubit, params, position}``."""
        kind = d.get("kind", d.get("gate"))
        if kind is None:
            raise MissingParameterError("gate operation has no kind")
        if "qubit" not in d:
            raise MissingParameterError(f"{kind} operation has no qubit")
        target = d.get("targetQubit", d.get("target_qubit"))
        params = d.get("params") or None
        return GateOp(kind=kind, qubit=d["qubit"], target_qubit=target,
                      params=params,
                      position=d.get("position", 0))

    @staticmethod
    def coerce(op) -> "GateOp":
        if isinstance(op, GateOp):
            return op
        if isinstance(op, Mapping):
            return GateOp.from_dict(op)
        raise InvalidOperationError(f"Not a gate operation: {op!r}")


# ---------- fixed single-qubit matrices ----------

def H(dtype=np.complex128) -> np.ndarray:
    s = np.sqrt(0.5)
    return np.array([[s, s],
                     [s, -s]], dtype=dtype)

def X(dtype=np.complex128) -> np.ndarray:
    return np.array([[0, 1],
                     [1, 0]], dtype=dtype)

def Y(dtype=np.complex128) -> np.ndarray:
    return np.array([[0, -1j],
                     [1j, 0]], dtype=dtype)

def Z(dtype=np.complex128) -> np.ndarray:
    return np.array([[1, 0],
                     [0, -1]], dtype=dtype)

def S(dtype=np.complex128) -> np.ndarray:
    return np.array([[1, 0],
                     [0, 1j]], dtype=dtype)

def T(dtype=np.complex128) -> np.ndarray:
    return np.array([[1, 0],
                     [0, np.exp(0.25j*np.pi)]], dtype=dtype)

# ---------- rotations ----------

def RX(theta: float, dtype=np.complex128) -> np.ndarray:
    c = np.cos(theta/2.0)
    s = -1j*np.sin(theta/2.0)
    return np.array([[c, s],
                     [s, c]], dtype=dtype)

def RY(theta: float, dtype=np.complex128) -> np.ndarray:
    c = np.cos(theta/2.0)
    s = np.sin(theta/2.0)
    return np.array([[c, -s],
                     [s, c]], dtype=dtype)

def RZ(theta: float, dtype=np.complex128) -> np.ndarray:
    return np.array([[np.exp(-0.5j*theta), 0],
                     [0, np.exp(+0.5j*theta)]], dtype=dtype)

# ---------- dense two-qubit forms ----------
# The engine applies these structurally; the 4x4 forms use basis order
# |q_a q_b> = 00,01,10,11 and exist to check the structural kernels.

def CNOT(dtype=np.complex128) -> np.ndarray:
    mat = np.eye(4, dtype=dtype)
    # swap |10> <-> |11>
    mat[2,2] = 0; mat[3,3] = 0
    mat[2,3] = 1; mat[3,2] = 1
    return mat

def CZ(dtype=np.complex128) -> np.ndarray:
    return np.diag(np.array([1, 1, 1, -1], dtype=dtype))

def SWAP(dtype=np.complex128) -> np.ndarray:
    mat = np.eye(4, dtype=dtype)
    # swap |01> <-> |10>
    mat[1,1] = 0; mat[2,2] = 0
    mat[1,2] = 1; mat[2,1] = 1
    return mat


def gate_matrix(kind, theta: Optional[float] = None, dtype=np.complex128) -> np.ndarray:
    """2x2 matrix for a single-qubit or rotation gate kind."""
    kind = GateKind.parse(kind)
    if kind is GateKind.H:
        return H(dtype)
    elif kind is GateKind.X:
        return X(dtype)
    elif kind is GateKind.Y:
        return Y(dtype)
    elif kind is GateKind.Z:
        return Z(dtype)
    elif kind is GateKind.S:
        return S(dtype)
    elif kind is GateKind.T:
        return T(dtype)
    elif kind.is_rotation:
        if theta is None:
            raise MissingParameterError(f"{kind.value} requires a theta parameter")
        if kind is GateKind.RX:
            return RX(theta, dtype)
        elif kind is GateKind.RY:
            return RY(theta, dtype)
        return RZ(theta, dtype)
    elif kind.is_two_qubit or kind.is_measurement:
        raise InvalidOperationError(f"{kind.value} has no single-qubit matrix")
    raise UnknownGateError(f"Unknown gate kind: {kind!r}")


def dense_two_qubit(kind, dtype=np.complex128) -> np.ndarray:
    kind = GateKind.parse(kind)
    if kind is GateKind.CNOT:
        return CNOT(dtype)
    elif kind is GateKind.CZ:
        return CZ(dtype)
    elif kind is GateKind.SWAP:
        return SWAP(dtype)
    raise InvalidOperationError(f"{kind.value} is not a two-qubit gate")
