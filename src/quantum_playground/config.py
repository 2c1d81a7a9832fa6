"""Configuration for sessions and the command-line interface.

A configuration can be loaded from a JSON file whose keys are the field
names of :class:`PlaygroundConfig`, for example::

    {"phase_shift": 3.14159, "strength": 0.8, "seed": 7}
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Optional

from .errors import InvalidParameterError, QuantumPlaygroundError
from .waves import DEFAULT_PHASE_STEP, DEFAULT_SAMPLE_COUNT, DEFAULT_X_STEP, WaveParams
from .entanglement import check_strength


@dataclass(slots=True)
class PlaygroundConfig:
    """Default parameters of the three demonstrations."""

    frequency: float = 1.0
    amplitude: float = 1.0
    phase_shift: float = math.pi / 2.0
    sample_count: int = DEFAULT_SAMPLE_COUNT
    x_step: float = DEFAULT_X_STEP
    phase_step: float = DEFAULT_PHASE_STEP
    tick_interval_ms: int = 50
    strength: float = 1.0
    history_size: int = 10
    seed: Optional[int] = None

    def __post_init__(self):
        self.wave_params()
        check_strength(self.strength)
        if isinstance(self.sample_count, bool) or not isinstance(self.sample_count, int) or self.sample_count < 1:
            raise InvalidParameterError(f"sample_count must be a positive integer, got {self.sample_count!r}")
        if not (self.x_step > 0 and math.isfinite(self.x_step)):
            raise InvalidParameterError(f"x_step must be > 0, got {self.x_step}")
        if not (self.phase_step > 0 and math.isfinite(self.phase_step)):
            raise InvalidParameterError(f"phase_step must be > 0, got {self.phase_step}")
        if self.history_size < 1:
            raise InvalidParameterError(f"history_size must be >= 1, got {self.history_size}")
        if self.tick_interval_ms <= 0:
            raise InvalidParameterError(f"tick_interval_ms must be > 0, got {self.tick_interval_ms}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise InvalidParameterError(f"seed must be an integer or null, got {self.seed!r}")

    def wave_params(self) -> WaveParams:
        return WaveParams(self.frequency, self.amplitude, self.phase_shift)

    def updated(self, **changes) -> "PlaygroundConfig":
        """Copy with the non-``None`` entries of ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def to_dict(self) -> dict:
        return asdict(self)


def load_config(path: str | Path) -> PlaygroundConfig:
    """Read a :class:`PlaygroundConfig` from a JSON file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise InvalidParameterError(f"Config file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidParameterError(f"Config file {path} must contain a JSON object")

    known = {f.name for f in fields(PlaygroundConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise InvalidParameterError(f"Unknown config keys in {path}: {', '.join(unknown)}")
    try:
        return PlaygroundConfig(**data)
    except QuantumPlaygroundError:
        raise
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"Invalid value in config file {path}: {exc}") from exc
