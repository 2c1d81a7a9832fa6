r"""Two travelling waves and their interference.

Wave ``A`` and wave ``B`` share frequency and amplitude and differ only by a
phase shift :math:`\varphi`:

.. math::

   A(x, t) = \mathcal{A}\sin(kx - t),\qquad
   B(x, t) = \mathcal{A}\sin(kx - t + \varphi),

and the interference trace is their mean :math:`\tfrac12(A + B)`.  The
envelope of the interference trace relative to a single wave is
:math:`|\cos(\varphi/2)|`, which is reported as the interference intensity.

The time ``t`` is always supplied by the caller; nothing here schedules or
sleeps.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from .errors import InvalidParameterError

TWO_PI = 2.0 * math.pi

DEFAULT_SAMPLE_COUNT = 60
DEFAULT_X_STEP = 0.3
DEFAULT_PHASE_STEP = 0.1

CONSTRUCTIVE_THRESHOLD = 0.8
DESTRUCTIVE_THRESHOLD = 0.2


def _check_phase_shift(phase_shift: float) -> float:
    phase_shift = float(phase_shift)
    if not (0.0 <= phase_shift < TWO_PI):
        raise InvalidParameterError(
            f"phase_shift must lie in [0, 2π), got {phase_shift}"
        )
    return phase_shift


@dataclass(frozen=True)
class WaveParams:
    """Parameters shared by the two waves."""

    frequency: float = 1.0
    amplitude: float = 1.0
    phase_shift: float = math.pi / 2.0

    def __post_init__(self):
        frequency = float(self.frequency)
        amplitude = float(self.amplitude)
        if not (math.isfinite(frequency) and frequency > 0.0):
            raise InvalidParameterError(f"frequency must be > 0, got {self.frequency}")
        if not (math.isfinite(amplitude) and amplitude > 0.0):
            raise InvalidParameterError(f"amplitude must be > 0, got {self.amplitude}")
        object.__setattr__(self, "frequency", frequency)
        object.__setattr__(self, "amplitude", amplitude)
        object.__setattr__(self, "phase_shift", _check_phase_shift(self.phase_shift))


class WaveSeries(NamedTuple):
    """Sampled ``(x, y)`` points of one trace."""

    x: np.ndarray
    y: np.ndarray

    def points(self) -> list[tuple[float, float]]:
        return [(float(px), float(py)) for px, py in zip(self.x, self.y)]


class SampledWaves(NamedTuple):
    a: WaveSeries
    b: WaveSeries
    interference: WaveSeries


class InterferenceKind(str, enum.Enum):
    CONSTRUCTIVE = "constructive"
    PARTIAL = "partial"
    DESTRUCTIVE = "destructive"


def _check_time(t: float) -> float:
    t = float(t)
    if not math.isfinite(t):
        raise InvalidParameterError(f"t must be finite, got {t}")
    return t


def wave(kind: str, x, t: float, params: WaveParams):
    """Evaluate wave ``"A"`` or ``"B"`` at ``x`` (scalar or array) and time ``t``."""
    key = str(kind).upper()
    if key == "A":
        offset = 0.0
    elif key == "B":
        offset = params.phase_shift
    else:
        raise InvalidParameterError(f"Unknown wave {kind!r}; expected 'A' or 'B'")
    t = _check_time(t)
    values = params.amplitude * np.sin(params.frequency * np.asarray(x, dtype=float) - t + offset)
    if np.ndim(values) == 0:
        return float(values)
    return values


def interference(x, t: float, params: WaveParams):
    """Mean of waves ``A`` and ``B``."""
    return 0.5 * (wave("A", x, t, params) + wave("B", x, t, params))


def sample_series(
    params: WaveParams,
    t: float,
    sample_count: int = DEFAULT_SAMPLE_COUNT,
    x_step: float = DEFAULT_X_STEP,
) -> SampledWaves:
    """Sample both waves and their interference at ``x_i = i * x_step``.

    The returned values are unbiased; baseline offsets and pixel scaling are
    left to the renderer.
    """
    t = _check_time(t)
    if isinstance(sample_count, bool) or int(sample_count) != sample_count or sample_count < 1:
        raise InvalidParameterError(f"sample_count must be a positive integer, got {sample_count}")
    x_step = float(x_step)
    if not (math.isfinite(x_step) and x_step > 0.0):
        raise InvalidParameterError(f"x_step must be > 0, got {x_step}")

    xs = np.arange(int(sample_count), dtype=float) * x_step
    ya = wave("A", xs, t, params)
    yb = wave("B", xs, t, params)
    return SampledWaves(
        a=WaveSeries(xs, ya),
        b=WaveSeries(xs.copy(), yb),
        interference=WaveSeries(xs.copy(), 0.5 * (ya + yb)),
    )


def interference_intensity(phase_shift: float) -> float:
    r"""Return :math:`|\cos(\varphi/2)|`, a value in ``[0, 1]``."""
    phase_shift = _check_phase_shift(phase_shift)
    return min(1.0, abs(math.cos(phase_shift / 2.0)))


def classify_interference(intensity: float) -> InterferenceKind:
    """Label an intensity as constructive, destructive or partial."""
    if intensity > CONSTRUCTIVE_THRESHOLD:
        return InterferenceKind.CONSTRUCTIVE
    if intensity < DESTRUCTIVE_THRESHOLD:
        return InterferenceKind.DESTRUCTIVE
    return InterferenceKind.PARTIAL


def advance_phase(t: float, step: float = DEFAULT_PHASE_STEP) -> float:
    """Advance the animation phase by ``step``, wrapped into ``[0, 2π)``."""
    t = _check_time(t)
    if not math.isfinite(step):
        raise InvalidParameterError(f"step must be finite, got {step}")
    return (t + step) % TWO_PI
