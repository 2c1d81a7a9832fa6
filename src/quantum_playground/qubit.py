r"""Single real-valued qubit: gates, measurement and collapse.

The qubit is described by two real amplitudes :math:`(a_0, a_1)` with
:math:`a_0^2 + a_1^2 = 1`.  Restricting the amplitudes to the reals keeps the
arithmetic elementary; the only phase information that survives is the
relative sign of the two amplitudes.

Gates
~~~~~

The fixed gates are the real matrices

.. math::

   I = \begin{pmatrix}1 & 0\\0 & 1\end{pmatrix},\quad
   X = \begin{pmatrix}0 & 1\\1 & 0\end{pmatrix},\quad
   Y = \begin{pmatrix}0 & -1\\1 & 0\end{pmatrix},\quad
   Z = \begin{pmatrix}1 & 0\\0 & -1\end{pmatrix},\quad
   H = \frac{1}{\sqrt{2}}\begin{pmatrix}1 & 1\\1 & -1\end{pmatrix},

where ``Y`` is the real stand-in for the Pauli-Y operator (it equals
:math:`-i\sigma_y`).  The rotation gate ``R`` takes an angle in degrees and
acts as

.. math::

   R(\theta) = \begin{pmatrix}\cos\frac{\theta}{2} & -\sin\frac{\theta}{2}\\
   \sin\frac{\theta}{2} & \cos\frac{\theta}{2}\end{pmatrix},

so that ``R(180)`` coincides with ``Y``.  All of them are orthogonal and
therefore norm preserving.

Measurement
~~~~~~~~~~~

Measuring in the computational basis yields ``0`` with probability
:math:`p_0 = a_0^2`.  The state collapses onto the exact basis vector of the
outcome.  The random draw comes from an injected generator so results are
reproducible under a fixed seed.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from .errors import InvalidGateError, InvalidParameterError, MissingParameterError

logger = logging.getLogger(__name__)

INPUT_TOLERANCE = 1e-3

_SQRT_HALF = 1.0 / math.sqrt(2.0)

FIXED_GATES = {
    "I": np.array([[1.0, 0.0], [0.0, 1.0]]),
    "X": np.array([[0.0, 1.0], [1.0, 0.0]]),
    "Y": np.array([[0.0, -1.0], [1.0, 0.0]]),
    "Z": np.array([[1.0, 0.0], [0.0, -1.0]]),
    "H": np.array([[_SQRT_HALF, _SQRT_HALF], [_SQRT_HALF, -_SQRT_HALF]]),
}
ROTATION = "R"
GATE_NAMES = tuple(FIXED_GATES) + (ROTATION,)


@dataclass(frozen=True)
class QubitState:
    r"""Real amplitudes of the basis outcomes ``0`` and ``1``.

    Attributes
    ----------
    a0 : float
        Amplitude of :math:`|0\rangle`.
    a1 : float
        Amplitude of :math:`|1\rangle`.

    The amplitudes must satisfy :math:`a_0^2 + a_1^2 = 1` to within
    :data:`INPUT_TOLERANCE`, so rounded input such as ``(0.707, 0.707)`` is
    accepted; the stored amplitudes are renormalised to unit length.  Use
    :meth:`from_unnormalized` for arbitrary input.
    """

    a0: float = 1.0
    a1: float = 0.0

    def __post_init__(self):
        a0, a1 = float(self.a0), float(self.a1)
        if not (math.isfinite(a0) and math.isfinite(a1)):
            raise InvalidParameterError(f"Amplitudes must be finite, got ({a0}, {a1})")
        norm_squared = a0 * a0 + a1 * a1
        if abs(norm_squared - 1.0) > INPUT_TOLERANCE:
            raise InvalidParameterError(
                f"State is not normalized: a0² + a1² = {norm_squared:.12f} ≠ 1"
            )
        if norm_squared != 1.0:
            norm = math.sqrt(norm_squared)
            a0, a1 = a0 / norm, a1 / norm
        object.__setattr__(self, "a0", a0)
        object.__setattr__(self, "a1", a1)

    @classmethod
    def from_unnormalized(cls, a0: float, a1: float) -> "QubitState":
        """Create a state from amplitudes of any non-zero length."""
        norm = math.hypot(a0, a1)
        if norm == 0.0 or not math.isfinite(norm):
            raise InvalidParameterError("Cannot normalize a zero or non-finite amplitude vector")
        return cls(a0 / norm, a1 / norm)

    @property
    def norm(self) -> float:
        return math.hypot(self.a0, self.a1)

    @property
    def probabilities(self) -> Tuple[float, float]:
        """Born probabilities ``(p0, p1)``."""
        p0 = self.a0 * self.a0
        p1 = self.a1 * self.a1
        total = p0 + p1
        return p0 / total, p1 / total

    def as_array(self) -> np.ndarray:
        return np.array([self.a0, self.a1], dtype=float)


ZERO = QubitState(1.0, 0.0)
ONE = QubitState(0.0, 1.0)


def _normalise_name(name: str) -> str:
    if not isinstance(name, str):
        raise InvalidGateError(f"Gate identifier must be a string, got {name!r}")
    key = name.strip().upper()
    if key not in GATE_NAMES:
        raise InvalidGateError(
            f"Unknown gate {name!r}; expected one of {', '.join(GATE_NAMES)}"
        )
    return key


@dataclass(frozen=True)
class GateSpec:
    """A named gate, with its angle in degrees when the gate is ``R``.

    The angle of a fixed gate is ignored and dropped.
    """

    name: str
    angle: Optional[float] = None

    def __post_init__(self):
        name = _normalise_name(self.name)
        object.__setattr__(self, "name", name)
        if name != ROTATION:
            object.__setattr__(self, "angle", None)
            return
        if self.angle is None:
            raise MissingParameterError("The rotation gate R requires an angle in degrees")
        angle = float(self.angle)
        if not math.isfinite(angle):
            raise InvalidParameterError(f"Rotation angle must be finite, got {self.angle!r}")
        object.__setattr__(self, "angle", angle)

    @classmethod
    def parse(cls, token: str) -> "GateSpec":
        """Parse ``"H"`` or ``"R:90"`` style tokens."""
        name, sep, angle = token.partition(":")
        if not sep:
            return cls(name)
        try:
            value = float(angle)
        except ValueError as exc:
            raise InvalidParameterError(f"Invalid rotation angle in {token!r}") from exc
        return cls(name, value)

    def matrix(self) -> np.ndarray:
        if self.name == ROTATION:
            return rotation_matrix(self.angle)
        return FIXED_GATES[self.name].copy()

    def __str__(self) -> str:
        if self.name == ROTATION:
            return f"R({self.angle:g}°)"
        return self.name


GateLike = Union[str, GateSpec]


def rotation_matrix(angle: float) -> np.ndarray:
    """Closed-form rotation matrix ``R(angle)`` with ``angle`` in degrees."""
    half = math.radians(angle) / 2.0
    c, s = math.cos(half), math.sin(half)
    return np.array([[c, -s], [s, c]])


def gate_matrix(gate: GateLike, angle: Optional[float] = None) -> np.ndarray:
    """Return the 2×2 matrix of ``gate``."""
    return _as_spec(gate, angle).matrix()


def _as_spec(gate: GateLike, angle: Optional[float]) -> GateSpec:
    if isinstance(gate, GateSpec):
        if angle is not None and gate.name == ROTATION:
            return GateSpec(ROTATION, angle)
        return gate
    return GateSpec(gate, angle)


def apply_gate(state: QubitState, gate: GateLike, angle: Optional[float] = None) -> QubitState:
    """Apply ``gate`` to ``state`` and return the new state.

    Parameters
    ----------
    state : QubitState
        State before the gate.
    gate : str or GateSpec
        One of ``I, X, Y, Z, H, R`` (case-insensitive) or a prepared spec.
    angle : float, optional
        Rotation angle in degrees, required when ``gate`` is ``R``.

    Raises
    ------
    InvalidGateError
        Unknown gate identifier.
    MissingParameterError
        ``R`` without an angle.
    """
    spec = _as_spec(gate, angle)
    a0, a1 = spec.matrix() @ state.as_array()
    # every gate is orthogonal; renormalising only absorbs rounding drift
    new_state = QubitState.from_unnormalized(float(a0), float(a1))
    logger.debug("applied %s: (%.6f, %.6f) -> (%.6f, %.6f)", spec, state.a0, state.a1,
                 new_state.a0, new_state.a1)
    return new_state


@dataclass(frozen=True)
class MeasurementResult:
    """Outcome of a computational-basis measurement and the collapsed state."""

    outcome: int
    state: QubitState


def measure(state: QubitState, rng) -> MeasurementResult:
    """Measure ``state`` in the computational basis.

    Parameters
    ----------
    state : QubitState
        State to measure.
    rng : numpy.random.Generator
        Source of the uniform draw.  Anything with a ``random()`` method
        returning a float in ``[0, 1)`` is accepted.

    Returns
    -------
    MeasurementResult
        ``outcome`` is ``0`` when the draw falls below :math:`p_0`, and the
        state is the exact basis vector of the outcome.
    """
    p0, _ = state.probabilities
    sample = float(rng.random())
    outcome = 0 if sample < p0 else 1
    collapsed = ZERO if outcome == 0 else ONE
    logger.debug("measured outcome %d (p0=%.6f, u=%.6f)", outcome, p0, sample)
    return MeasurementResult(outcome, collapsed)


def reset() -> QubitState:
    r"""Return the basis state :math:`|0\rangle`."""
    return ZERO


def format_ket(state: QubitState, precision: int = 3) -> str:
    """Render ``state`` as ``"0.707|0⟩ + 0.707|1⟩"``."""
    sign = "-" if state.a1 < 0 else "+"
    return f"{state.a0:.{precision}f}|0⟩ {sign} {abs(state.a1):.{precision}f}|1⟩"


def bloch_vector(state: QubitState) -> Tuple[float, float, float]:
    r"""Bloch coordinates ``(x, y, z)`` of a real-amplitude state.

    For real amplitudes the relative phase is either 0 or :math:`\pi`, which
    is carried by the sign of ``x = 2 a0 a1``; ``y`` is always zero.
    """
    x = 2.0 * state.a0 * state.a1
    z = state.a0 * state.a0 - state.a1 * state.a1
    return float(x), 0.0, float(z)
