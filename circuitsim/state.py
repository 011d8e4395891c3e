# circuitsim/state.py
import numpy as np
from dataclasses import dataclass
from typing import List, NamedTuple

from . import complex_math as cm


class BasisAmplitude(NamedTuple):
    basis: str          # e.g. "|01>"
    amplitude: str
    probability: float
    phase: float


@dataclass
class State:
    n: int
    psi: np.ndarray  # shape (2**n,), qubit 0 is the most significant index bit

    @staticmethod
    def zero(n: int, dtype=np.complex128) -> "State":
        if n < 0:
            raise ValueError(f"number of qubits must be >= 0, got {n}")
        N = 1 << n
        psi = np.zeros(N, dtype=dtype)
        psi[0] = 1.0 + 0.0j
        return State(n=n, psi=psi)

    @property
    def dtype(self):
        return self.psi.dtype

    @property
    def dim(self) -> int:
        return self.psi.shape[0]

    def mask(self, qubit: int) -> int:
        """Index bit of ``qubit`` under the big-endian convention."""
        return 1 << (self.n - 1 - qubit)

    def norm2(self) -> float:
        return float(np.vdot(self.psi, self.psi).real)

    def check_normalized(self, tol=1e-6):
        n2 = self.norm2()
        if not (abs(1.0 - n2) <= tol):
            raise AssertionError(f"Normalization failed: ||psi||^2={n2}")

    def copy(self) -> "State":
        return State(self.n, self.psi.copy())

    def as_numpy(self) -> np.ndarray:
        return self.psi

    def formatted(self, threshold: float = 1e-4, precision: int = 3) -> List[BasisAmplitude]:
        """Basis states whose probability exceeds ``threshold``."""
        rows = []
        for i, amp in enumerate(self.psi):
            prob = cm.magnitude(amp) ** 2
            if prob > threshold:
                bits = format(i, "b").zfill(self.n) if self.n else ""
                rows.append(BasisAmplitude(
                    basis=f"|{bits}>",
                    amplitude=cm.to_display_string(amp, precision),
                    probability=prob,
                    phase=cm.phase(amp),
                ))
        return rows
