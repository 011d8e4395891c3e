# circuitsim/circuit.py
from dataclasses import dataclass
from typing import List, Optional
import numpy as np
from .engine import SimulationResult, StateVectorEngine
from .gates import GateKind, GateOp

@dataclass
class Circuit:
    n: int
    ops: List[GateOp]

    @staticmethod
    def empty(n:int) -> "Circuit":
        return Circuit(n, [])

    def _next_position(self, qubits) -> int:
        used = [op.position for op in self.ops if set(op.qubits) & set(qubits)]
        return max(used) + 1 if used else 0

    def add(self, kind, qubit:int, target_qubit:Optional[int]=None,
            theta:Optional[float]=None, position:Optional[int]=None) -> "Circuit":
        """Append a gate; without ``position`` it goes after the last gate on its qubits."""
        if position is None:
            touched = (qubit,) if target_qubit is None else (qubit, target_qubit)
            position = self._next_position(touched)
        params = {"theta": float(theta)} if theta is not None else None
        self.ops.append(GateOp(GateKind.parse(kind), qubit, target_qubit, params, position))
        return self

    def h(self, k:int): return self.add(GateKind.H, k)
    def x(self, k:int): return self.add(GateKind.X, k)
    def y(self, k:int): return self.add(GateKind.Y, k)
    def z(self, k:int): return self.add(GateKind.Z, k)
    def s(self, k:int): return self.add(GateKind.S, k)
    def t(self, k:int): return self.add(GateKind.T, k)
    def rx(self, k:int, theta:float): return self.add(GateKind.RX, k, theta=theta)
    def ry(self, k:int, theta:float): return self.add(GateKind.RY, k, theta=theta)
    def rz(self, k:int, theta:float): return self.add(GateKind.RZ, k, theta=theta)
    def cnot(self, c:int, t:int): return self.add(GateKind.CNOT, c, t)
    def cz(self, c:int, t:int): return self.add(GateKind.CZ, c, t)
    def swap(self, a:int, b:int): return self.add(GateKind.SWAP, a, b)
    def measure(self, k:int): return self.add(GateKind.MEASURE, k)

    def depth(self) -> int:
        if not self.ops:
            return 0
        return max(op.position for op in self.ops) + 1

    def engine(self, backend:str="serial", dtype=np.complex128, num_threads=None) -> StateVectorEngine:
        """Fresh engine already holding this circuit's final state."""
        eng = StateVectorEngine(self.n, backend=backend, dtype=dtype, num_threads=num_threads)
        eng.simulate(self.ops)
        return eng

    def run(self, backend:str="serial", dtype=np.complex128, num_threads=None) -> SimulationResult:
        eng = StateVectorEngine(self.n, backend=backend, dtype=dtype, num_threads=num_threads)
        return eng.simulate(self.ops)
