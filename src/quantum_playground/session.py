"""Stateful sessions around the pure simulation functions.

Each session owns the mutable state of one demonstration and stores the
results of kernel calls back into itself.  Sessions are meant to be driven
by a single caller (a CLI loop, a notebook, a UI event handler).
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, fields, replace
from typing import Deque, Dict, List, Optional

import numpy as np

from . import entanglement, qubit, waves
from .entanglement import EntangledOutcome
from .errors import InvalidParameterError, PairStateError
from .qubit import GateLike, MeasurementResult, QubitState
from .waves import InterferenceKind, SampledWaves, WaveParams

logger = logging.getLogger(__name__)

HISTORY_SIZE = 10
TICK_INTERVAL_MS = 50


def _make_rng(rng: Optional[np.random.Generator], seed: Optional[int]) -> np.random.Generator:
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


class QubitSession:
    """Current qubit, last outcome and a bounded measurement history."""

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        history_size: int = HISTORY_SIZE,
    ):
        if history_size < 1:
            raise InvalidParameterError(f"history_size must be >= 1, got {history_size}")
        self.rng = _make_rng(rng, seed)
        self.state: QubitState = qubit.reset()
        self.last_result: Optional[int] = None
        self.history: Deque[int] = deque(maxlen=history_size)
        self.measurement_count = 0

    def apply_gate(self, gate: GateLike, angle: Optional[float] = None) -> QubitState:
        # the kernel validates before returning, so a bad gate leaves state untouched
        self.state = qubit.apply_gate(self.state, gate, angle)
        self.last_result = None
        return self.state

    def measure(self) -> MeasurementResult:
        result = qubit.measure(self.state, self.rng)
        self.state = result.state
        self.last_result = result.outcome
        self.history.append(result.outcome)
        self.measurement_count += 1
        logger.debug("measurement #%d -> %d", self.measurement_count, result.outcome)
        return result

    def reset(self) -> QubitState:
        self.state = qubit.reset()
        self.last_result = None
        return self.state

    @property
    def probabilities(self):
        return self.state.probabilities

    @property
    def ket(self) -> str:
        return qubit.format_ket(self.state)

    def recent_outcomes(self) -> List[int]:
        return list(self.history)


class WaveAnimation:
    """Wave parameters plus the phase advanced by an external clock.

    The owner calls :meth:`tick` every ``interval_ms`` milliseconds; ticks
    while stopped leave the phase unchanged.
    """

    def __init__(
        self,
        params: Optional[WaveParams] = None,
        step: float = waves.DEFAULT_PHASE_STEP,
        sample_count: int = waves.DEFAULT_SAMPLE_COUNT,
        x_step: float = waves.DEFAULT_X_STEP,
        interval_ms: int = TICK_INTERVAL_MS,
    ):
        if interval_ms <= 0:
            raise InvalidParameterError(f"interval_ms must be > 0, got {interval_ms}")
        self.params = params if params is not None else WaveParams()
        self.step = float(step)
        self.sample_count = sample_count
        self.x_step = x_step
        self.interval_ms = interval_ms
        self.t = 0.0
        self.ticks = 0
        self.running = False

    def start(self) -> None:
        self.running = True

    def stop(self) -> None:
        self.running = False

    def toggle(self) -> bool:
        self.running = not self.running
        return self.running

    def tick(self) -> SampledWaves:
        if self.running:
            self.t = waves.advance_phase(self.t, self.step)
            self.ticks += 1
        return self.frame()

    def frame(self) -> SampledWaves:
        return waves.sample_series(self.params, self.t, self.sample_count, self.x_step)

    def set_params(self, **changes) -> WaveParams:
        """Replace wave parameters; invalid values raise and keep the old ones."""
        unknown = sorted(set(changes) - {f.name for f in fields(WaveParams)})
        if unknown:
            raise InvalidParameterError(f"Unknown wave parameters: {', '.join(unknown)}")
        self.params = replace(self.params, **changes)
        return self.params

    @property
    def elapsed_ms(self) -> int:
        """Clock time covered by the ticks that advanced the phase."""
        return self.ticks * self.interval_ms

    @property
    def intensity(self) -> float:
        return waves.interference_intensity(self.params.phase_shift)

    @property
    def classification(self) -> InterferenceKind:
        return waves.classify_interference(self.intensity)


@dataclass
class CorrelationStatistics:
    """Counts of measured pairs and of those that took the correlated branch."""

    total: int = 0
    correlated: int = 0

    def record(self, outcome: EntangledOutcome) -> None:
        self.total += 1
        if outcome.was_correlated:
            self.correlated += 1

    @property
    def fraction(self) -> float:
        if self.total == 0:
            return 0.0
        return self.correlated / self.total

    def reset(self) -> None:
        self.total = 0
        self.correlated = 0


class EntanglementSession:
    """One pair at a time; each particle can be measured once per pair."""

    def __init__(
        self,
        strength: float = 1.0,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
    ):
        self.strength = entanglement.check_strength(strength)
        self.rng = _make_rng(rng, seed)
        self.entangled = False
        self.outcomes: Dict[str, Optional[str]] = {"A": None, "B": None}
        self.last_outcome: Optional[EntangledOutcome] = None
        self.statistics = CorrelationStatistics()

    def set_strength(self, strength: float) -> float:
        self.strength = entanglement.check_strength(strength)
        return self.strength

    def create_pair(self) -> None:
        self.entangled = True
        self.outcomes = {"A": None, "B": None}
        self.last_outcome = None

    @property
    def resolved(self) -> bool:
        return self.outcomes["A"] is not None

    def can_measure(self, particle: str) -> bool:
        particle = entanglement.check_particle(particle)
        return self.entangled and self.outcomes[particle] is None

    def measure(self, particle: str) -> EntangledOutcome:
        particle = entanglement.check_particle(particle)
        if not self.entangled:
            raise PairStateError("Create an entangled pair before measuring")
        if self.outcomes[particle] is not None:
            raise PairStateError(f"Particle {particle} of this pair was already measured")

        outcome = entanglement.measure_pair(particle, self.strength, self.rng)
        self.outcomes = {"A": outcome.result_a, "B": outcome.result_b}
        self.last_outcome = outcome
        self.statistics.record(outcome)
        return outcome

    @property
    def status(self) -> str:
        if not self.entangled:
            return "No entangled pair."
        if not self.resolved:
            return "Particles are entangled. Measuring one instantly affects the other!"
        return "Measurement complete. Entanglement broken."
