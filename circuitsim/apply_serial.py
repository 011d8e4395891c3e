# circuitsim/apply_serial.py
"""Vectorised NumPy kernels. Qubit 0 is the most significant index bit."""
import numpy as np
from .state import State

def _indices(state: State) -> np.ndarray:
    return np.arange(state.dim, dtype=np.int64)

def apply_single_qubit(state: State, U2: np.ndarray, k: int):
    """Apply 2x2 gate U2 to qubit k by scattering into a fresh vector.

    out[i with bit b'] += U2[b', b] * psi[i] for both b', where b is bit k of i.
    """
    assert U2.shape == (2,2)
    psi = state.psi
    shift = state.n - 1 - k
    mask = 1 << shift
    idx = _indices(state)
    bit = (idx >> shift) & 1
    cleared = idx & ~mask
    U2 = U2.astype(state.dtype, copy=False)
    out = np.zeros_like(psi)
    for new_bit in (0, 1):
        np.add.at(out, cleared | (new_bit << shift), U2[new_bit, bit] * psi)
    state.psi = out

def apply_two_qubit_4x4(state: State, U4: np.ndarray, a: int, b: int):
    """Apply dense 4x4 gate U4 to qubits (a, b), basis order |ab> = 00,01,10,11."""
    if a == b:
        raise ValueError("a and b must differ")
    assert U4.shape == (4,4)
    psi = state.psi
    ma, mb = state.mask(a), state.mask(b)
    idx = _indices(state)
    row = 2*((idx & ma) != 0) + ((idx & mb) != 0)
    base = idx & ~(ma | mb)
    U4 = U4.astype(state.dtype, copy=False)
    out = np.zeros_like(psi)
    for col in range(4):
        src = base | (ma if col & 2 else 0) | (mb if col & 1 else 0)
        out += U4[row, col] * psi[src]
    state.psi = out

def apply_CNOT(state: State, control: int, target: int):
    if control == target:
        raise ValueError("control and target must differ")
    psi = state.psi
    mc, mt = state.mask(control), state.mask(target)
    idx = _indices(state)
    # each (c=1,t=0) index pairs with its (c=1,t=1) partner exactly once
    i10 = idx[((idx & mc) != 0) & ((idx & mt) == 0)]
    i11 = i10 | mt
    a10 = psi[i10]
    psi[i10] = psi[i11]
    psi[i11] = a10

def apply_CZ(state: State, control: int, target: int):
    if control == target:
        raise ValueError("control and target must differ")
    psi = state.psi
    both = state.mask(control) | state.mask(target)
    idx = _indices(state)
    psi[(idx & both) == both] *= -1

def apply_SWAP(state: State, a: int, b: int):
    if a == b:
        raise ValueError("a and b must differ")
    psi = state.psi
    ma, mb = state.mask(a), state.mask(b)
    idx = _indices(state)
    differ = ((idx & ma) != 0) != ((idx & mb) != 0)
    swapped = np.where(differ, idx ^ (ma | mb), idx)
    out = np.empty_like(psi)
    out[swapped] = psi
    state.psi = out
