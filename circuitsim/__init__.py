# circuitsim/__init__.py
from .circuit import Circuit
from .engine import SimulationResult, StateVectorEngine
from .errors import (
    InvalidOperationError,
    InvalidQubitError,
    MissingParameterError,
    UnknownGateError,
)
from .gates import GateKind, GateOp, gate_matrix
from .reduce import ReducedState, reduce_qubit
from .sampling import probabilities, sample_counts, sample_one
from .state import State

__version__ = "0.1.0"
