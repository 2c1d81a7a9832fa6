"""Small simulations of superposition, interference and entanglement."""

from . import config, ensemble, entanglement, errors, qubit, session, waves
from .entanglement import SPIN_DOWN, SPIN_UP, EntangledOutcome, measure_pair, opposite
from .errors import (
    InvalidGateError,
    InvalidParameterError,
    MissingParameterError,
    PairStateError,
    QuantumPlaygroundError,
)
from .qubit import (
    GateSpec,
    MeasurementResult,
    QubitState,
    apply_gate,
    bloch_vector,
    format_ket,
    gate_matrix,
    measure,
    reset,
    rotation_matrix,
)
from .session import CorrelationStatistics, EntanglementSession, QubitSession, WaveAnimation
from .waves import (
    InterferenceKind,
    SampledWaves,
    WaveParams,
    WaveSeries,
    advance_phase,
    classify_interference,
    interference,
    interference_intensity,
    sample_series,
    wave,
)

__all__ = [
    "CorrelationStatistics",
    "EntangledOutcome",
    "EntanglementSession",
    "GateSpec",
    "InterferenceKind",
    "InvalidGateError",
    "InvalidParameterError",
    "MeasurementResult",
    "MissingParameterError",
    "PairStateError",
    "QuantumPlaygroundError",
    "QubitSession",
    "QubitState",
    "SPIN_DOWN",
    "SPIN_UP",
    "SampledWaves",
    "WaveAnimation",
    "WaveParams",
    "WaveSeries",
    "advance_phase",
    "apply_gate",
    "bloch_vector",
    "classify_interference",
    "config",
    "ensemble",
    "entanglement",
    "errors",
    "format_ket",
    "gate_matrix",
    "interference",
    "interference_intensity",
    "measure",
    "measure_pair",
    "opposite",
    "qubit",
    "reset",
    "rotation_matrix",
    "sample_series",
    "session",
    "waves",
]
