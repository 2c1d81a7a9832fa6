"""Correlated spin pair measured one particle at a time.

This is a correlated coin-flip model rather than a physical description of
entanglement.  With probability ``strength`` the two particles come out with
opposite spins; otherwise the partner's spin is an independent fair draw.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import InvalidParameterError

logger = logging.getLogger(__name__)

SPIN_UP = "↑"
SPIN_DOWN = "↓"
PARTICLES = ("A", "B")


def opposite(symbol: str) -> str:
    """Flip a spin symbol."""
    if symbol == SPIN_UP:
        return SPIN_DOWN
    if symbol == SPIN_DOWN:
        return SPIN_UP
    raise InvalidParameterError(f"Unknown spin symbol {symbol!r}")


def partner(particle: str) -> str:
    return "B" if check_particle(particle) == "A" else "A"


def check_particle(particle: str) -> str:
    key = str(particle).upper()
    if key not in PARTICLES:
        raise InvalidParameterError(f"particle must be 'A' or 'B', got {particle!r}")
    return key


def check_strength(strength: float) -> float:
    strength = float(strength)
    if not (0.0 <= strength <= 1.0):
        raise InvalidParameterError(f"strength must lie in [0, 1], got {strength}")
    return strength


@dataclass(frozen=True)
class EntangledOutcome:
    """Result of measuring one particle of a pair.

    Attributes
    ----------
    particle : str
        The particle that was measured, ``"A"`` or ``"B"``.
    result : str
        Spin of the measured particle.
    other : str
        Spin assigned to the partner.
    was_correlated : bool
        Whether the correlated branch was taken.
    """

    particle: str
    result: str
    other: str
    was_correlated: bool

    @property
    def result_a(self) -> str:
        return self.result if self.particle == "A" else self.other

    @property
    def result_b(self) -> str:
        return self.result if self.particle == "B" else self.other

    @property
    def opposite_spins(self) -> bool:
        return self.result != self.other


def _fair_spin(rng) -> str:
    return SPIN_UP if rng.random() < 0.5 else SPIN_DOWN


def measure_pair(particle: str, strength: float, rng) -> EntangledOutcome:
    """Measure ``particle`` and resolve its partner.

    Parameters
    ----------
    particle : str
        ``"A"`` or ``"B"``.
    strength : float
        Probability in ``[0, 1]`` that the pair comes out anti-correlated.
    rng : numpy.random.Generator
        Source of uniform draws.  The first draw decides correlation, the
        second the measured spin, and in the uncorrelated branch a third
        draw gives the partner's spin.

    Raises
    ------
    InvalidParameterError
        Unknown particle or ``strength`` outside ``[0, 1]``.
    """
    particle = check_particle(particle)
    strength = check_strength(strength)

    is_correlated = bool(rng.random() < strength)
    result = _fair_spin(rng)
    other = opposite(result) if is_correlated else _fair_spin(rng)
    logger.debug("pair measured on %s: %s/%s correlated=%s", particle, result, other, is_correlated)
    return EntangledOutcome(particle, result, other, is_correlated)
