"""Repeated trials of the qubit measurement and the pair measurement.

The functions here run many independent shots with a single generator and
summarise the empirical frequencies, so the probabilistic rules of
:mod:`quantum_playground.qubit` and :mod:`quantum_playground.entanglement`
can be checked against their expected values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import numpy as np
from scipy.stats import binomtest
from tqdm import tqdm

from . import entanglement, qubit
from .entanglement import EntangledOutcome
from .errors import InvalidParameterError
from .qubit import QubitState
from .session import CorrelationStatistics


def _check_count(name: str, value: int) -> int:
    if isinstance(value, bool) or int(value) != value or value < 1:
        raise InvalidParameterError(f"{name} must be a positive integer, got {value}")
    return int(value)


@dataclass
class MeasurementEnsemble:
    """Outcomes of measuring fresh copies of one state.

    Attributes
    ----------
    state : QubitState
        The state that was prepared before every shot.
    outcomes : numpy.ndarray
        Integer array of ``0``/``1`` outcomes.
    """

    state: QubitState
    outcomes: np.ndarray

    @property
    def shots(self) -> int:
        return int(self.outcomes.size)

    @property
    def p0_expected(self) -> float:
        return self.state.probabilities[0]

    @property
    def counts(self) -> tuple[int, int]:
        zeros = int(np.count_nonzero(self.outcomes == 0))
        return zeros, self.shots - zeros

    @property
    def frequency_zero(self) -> float:
        return self.counts[0] / self.shots

    def born_rule_pvalue(self) -> float:
        """Two-sided binomial test of the zero count against ``p0_expected``."""
        return float(binomtest(self.counts[0], self.shots, self.p0_expected).pvalue)


@dataclass
class PairEnsemble:
    strength: float
    outcomes: List[EntangledOutcome] = field(default_factory=list)
    statistics: CorrelationStatistics = field(default_factory=CorrelationStatistics)

    @property
    def agreement_fraction(self) -> float:
        """Fraction of pairs whose two spins came out equal."""
        if not self.outcomes:
            return 0.0
        agree = sum(1 for outcome in self.outcomes if not outcome.opposite_spins)
        return agree / len(self.outcomes)

    @property
    def opposite_fraction(self) -> float:
        if not self.outcomes:
            return 0.0
        return 1.0 - self.agreement_fraction


def simulate_measurements(
    state: QubitState,
    shots: int,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    progress: bool = False,
) -> MeasurementEnsemble:
    """Measure ``shots`` fresh copies of ``state``.

    Parameters
    ----------
    state : QubitState
        State prepared before each shot.
    shots : int
        Number of measurements.
    rng : numpy.random.Generator, optional
        Generator to draw from.  When ``None`` one is created from ``seed``.
    seed : int, optional
        Seed used only when ``rng`` is not given.
    progress : bool
        Show a :mod:`tqdm` progress bar.
    """
    shots = _check_count("shots", shots)
    if rng is None:
        rng = np.random.default_rng(seed)

    outcomes = np.empty(shots, dtype=int)
    for i in tqdm(range(shots), desc="Measuring", disable=not progress):
        outcomes[i] = qubit.measure(state, rng).outcome
    return MeasurementEnsemble(state, outcomes)


def simulate_pairs(
    strength: float,
    trials: int,
    particle: str = "A",
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    progress: bool = False,
) -> PairEnsemble:
    """Create and measure ``trials`` pairs, always measuring ``particle`` first."""
    trials = _check_count("trials", trials)
    strength = entanglement.check_strength(strength)
    if rng is None:
        rng = np.random.default_rng(seed)

    ensemble = PairEnsemble(strength)
    for _ in tqdm(range(trials), desc="Measuring pairs", disable=not progress):
        outcome = entanglement.measure_pair(particle, strength, rng)
        ensemble.outcomes.append(outcome)
        ensemble.statistics.record(outcome)
    return ensemble


def save_ensemble(ensemble: MeasurementEnsemble, path: str | Path) -> Path:
    """Write outcomes and the prepared state to a ``.npz`` file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    np.savez(
        path,
        outcomes=ensemble.outcomes,
        state=ensemble.state.as_array(),
        p0_expected=ensemble.p0_expected,
        frequency_zero=ensemble.frequency_zero,
    )
    # numpy appends the suffix when it is missing
    return path if path.suffix == ".npz" else path.with_name(path.name + ".npz")
