# circuitsim/sampling.py
"""Measurement probabilities and weighted sampling. Never mutates the state."""
from typing import Dict
import numpy as np


def probabilities(state_vector) -> np.ndarray:
    psi = np.asarray(state_vector)
    return np.abs(psi)**2


def bitstring(index: int, num_qubits: int) -> str:
    """Fixed-width big-endian binary string; qubit 0 is the leftmost bit."""
    if num_qubits == 0:
        return ""
    return format(int(index), "b").zfill(num_qubits)


def _num_qubits(psi: np.ndarray) -> int:
    dim = psi.shape[0]
    n = dim.bit_length() - 1
    if dim == 0 or (1 << n) != dim:
        raise ValueError(f"state vector length {dim} is not a power of two")
    return n


def _draw(probs: np.ndarray, size: int, rng: np.random.Generator) -> np.ndarray:
    # first index whose cumulative mass reaches r; drift past the end
    # falls back to the last index
    cumulative = np.cumsum(probs)
    r = rng.random(size)
    idx = np.searchsorted(cumulative, r, side="left")
    return np.minimum(idx, probs.shape[0] - 1)


def sample_one(state_vector, rng=None) -> str:
    """One weighted draw, as a bitstring."""
    psi = np.asarray(state_vector)
    n = _num_qubits(psi)
    rng = np.random.default_rng(rng)
    (i,) = _draw(probabilities(psi), 1, rng)
    return bitstring(i, n)


def sample_counts(state_vector, num_qubits: int, shots: int, rng=None) -> Dict[str, int]:
    """Draw ``shots`` independent outcomes and count them by bitstring.

    ``rng`` may be None, an integer seed or a ``numpy.random.Generator``.
    Only observed outcomes appear, in ascending bitstring order.
    """
    psi = np.asarray(state_vector)
    if _num_qubits(psi) != num_qubits:
        raise ValueError(
            f"state vector of length {psi.shape[0]} does not match {num_qubits} qubit(s)")
    if shots < 0:
        raise ValueError(f"shots must be >= 0, got {shots}")
    rng = np.random.default_rng(rng)
    outcomes = _draw(probabilities(psi), int(shots), rng)
    values, counts = np.unique(outcomes, return_counts=True)
    return {bitstring(v, num_qubits): int(c) for v, c in zip(values, counts)}
