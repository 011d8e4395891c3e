# circuitsim/reduce.py
"""Single-qubit reduced state by partial trace over all other qubits."""
from dataclasses import dataclass
import math
import numpy as np

from .errors import check_qubit


@dataclass(frozen=True)
class ReducedState:
    x: float
    y: float
    z: float
    purity: float
    rho: np.ndarray  # 2x2 reduced density matrix

    @property
    def bloch(self):
        return (self.x, self.y, self.z)

    @property
    def bloch_length(self) -> float:
        return math.sqrt(self.x*self.x + self.y*self.y + self.z*self.z)


def density_matrix(state_vector, num_qubits: int, qubit: int) -> np.ndarray:
    """rho[a, b] = sum over the other bits of amp[..a..] * conj(amp[..b..])."""
    psi = np.asarray(state_vector)
    if psi.shape != (1 << num_qubits,):
        raise ValueError(
            f"state vector of shape {psi.shape} does not match {num_qubits} qubit(s)")
    check_qubit(qubit, num_qubits)
    # qubit 0 is the most significant bit, so qubit q is the middle axis of
    # a C-ordered (2^q, 2, 2^(n-q-1)) view
    psi3 = psi.reshape(1 << qubit, 2, 1 << (num_qubits - qubit - 1))
    return np.einsum("lar,lbr->ab", psi3, psi3.conj())


def reduce_qubit(state_vector, num_qubits: int, qubit: int) -> ReducedState:
    rho = density_matrix(state_vector, num_qubits, qubit)
    rho00 = float(rho[0, 0].real)
    rho11 = float(rho[1, 1].real)
    rho01 = complex(rho[0, 1])
    return ReducedState(
        x=2.0 * rho01.real,
        y=2.0 * rho01.imag,
        z=rho00 - rho11,
        purity=rho00*rho00 + rho11*rho11 + 2.0*(rho01.real**2 + rho01.imag**2),
        rho=rho,
    )
