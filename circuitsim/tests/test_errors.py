# circuitsim/tests/test_errors.py
import numpy as np
import pytest
from circuitsim.errors import InvalidOperationError, InvalidQubitError, check_qubit

def test_check_qubit_accepts_python_and_numpy_ints():
    check_qubit(0, 1)
    check_qubit(2, 3)
    check_qubit(np.int64(1), 2)

@pytest.mark.parametrize("qubit, n", [(-1, 2), (2, 2), (0, 0)])
def test_check_qubit_out_of_range(qubit, n):
    with pytest.raises(InvalidQubitError):
        check_qubit(qubit, n)

@pytest.mark.parametrize("qubit", [True, 1.0, "0", None])
def test_check_qubit_rejects_non_integers(qubit):
    with pytest.raises(InvalidQubitError):
        check_qubit(qubit, 2)

def test_invalid_qubit_is_an_invalid_operation():
    assert issubclass(InvalidQubitError, InvalidOperationError)
    assert issubclass(InvalidOperationError, ValueError)
