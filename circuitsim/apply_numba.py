# circuitsim/apply_numba.py
import numpy as np
from numba import njit, prange, set_num_threads, get_num_threads
from .state import State

# ---------- low-level kernels (Numba JIT) ----------

@njit(parallel=True, fastmath=True)
def _single_qubit_kernel(psi, U2, shift, out):
    # gather form of the scatter rule: each out[j] reads its two sources
    N = psi.shape[0]
    mask = 1 << shift
    for j in prange(N):
        b = (j >> shift) & 1
        i0 = j & ~mask
        i1 = i0 | mask
        out[j] = U2[b,0]*psi[i0] + U2[b,1]*psi[i1]

@njit(parallel=True)
def _cnot_kernel(psi, mc, mt):
    N = psi.shape[0]
    for i10 in prange(N):
        if (i10 & mc) != 0 and (i10 & mt) == 0:
            i11 = i10 | mt
            a10 = psi[i10]
            psi[i10] = psi[i11]
            psi[i11] = a10

@njit(parallel=True)
def _cz_kernel(psi, mc, mt):
    N = psi.shape[0]
    both = mc | mt
    for i in prange(N):
        if (i & both) == both:
            psi[i] = -psi[i]

@njit(parallel=True)
def _swap_kernel(psi, ma, mb):
    N = psi.shape[0]
    for i in prange(N):
        # visit each pair from its (a=1,b=0) side only
        if (i & ma) != 0 and (i & mb) == 0:
            j = (i ^ ma) | mb
            tmp = psi[i]
            psi[i] = psi[j]
            psi[j] = tmp

# ---------- user-facing apply helpers ----------

def set_threads(n: int):
    set_num_threads(n)

def get_threads() -> int:
    return get_num_threads()

def apply_single_qubit(state: State, U2: np.ndarray, k: int):
    out = np.zeros_like(state.psi)
    _single_qubit_kernel(state.psi, U2.astype(state.dtype), state.n - 1 - k, out)
    state.psi = out

def apply_CNOT(state: State, control: int, target: int):
    if control == target:
        raise ValueError("control and target must differ")
    _cnot_kernel(state.psi, state.mask(control), state.mask(target))

def apply_CZ(state: State, control: int, target: int):
    if control == target:
        raise ValueError("control and target must differ")
    _cz_kernel(state.psi, state.mask(control), state.mask(target))

def apply_SWAP(state: State, a: int, b: int):
    if a == b:
        raise ValueError("a and b must differ")
    _swap_kernel(state.psi, state.mask(a), state.mask(b))
