# circuitsim/errors.py
import numpy as np


class InvalidOperationError(ValueError):
    """A gate operation the engine refuses to apply."""


class InvalidQubitError(InvalidOperationError):
    """Qubit index is negative or not below the register size."""


class UnknownGateError(InvalidOperationError):
    """Gate kind is not one of the supported kinds."""


class MissingParameterError(InvalidOperationError):
    """Rotation without theta, or two-qubit gate without a target qubit."""


def check_qubit(qubit: int, num_qubits: int):
    """Raise InvalidQubitError unless ``qubit`` is an integer index in range."""
    if not isinstance(qubit, (int, np.integer)) or isinstance(qubit, bool):
        raise InvalidQubitError(f"qubit index must be an integer, got {qubit!r}")
    if qubit < 0 or qubit >= num_qubits:
        raise InvalidQubitError(
            f"qubit index {qubit} out of range for {num_qubits} qubit(s)")
