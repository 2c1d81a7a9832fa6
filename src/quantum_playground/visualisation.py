"""Plots of sampled waves, measurement statistics and interference intensity."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np

from .ensemble import MeasurementEnsemble
from .waves import (
    CONSTRUCTIVE_THRESHOLD,
    DESTRUCTIVE_THRESHOLD,
    SampledWaves,
    interference_intensity,
)


def _save(fig, filename: Optional[str | Path]) -> None:
    if filename is not None:
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path, dpi=150)
    plt.close(fig)


def plot_waves(
    sampled: SampledWaves,
    baseline: float = 0.0,
    scale: float = 1.0,
    filename: Optional[str | Path] = None,
) -> None:
    """Draw waves A and B and their interference, shifted by ``baseline``."""

    fig, ax = plt.subplots(figsize=(8.0, 4.0))
    ax.plot(sampled.a.x, baseline + scale * sampled.a.y, color="tab:blue", linewidth=1.5, label="Wave A")
    ax.plot(sampled.b.x, baseline + scale * sampled.b.y, color="tab:red", linewidth=1.5, label="Wave B")
    ax.plot(
        sampled.interference.x,
        baseline + scale * sampled.interference.y,
        color="tab:purple",
        linewidth=2.5,
        label="Interference",
    )
    ax.axhline(baseline, color="grey", linewidth=0.5)
    ax.set_xlabel("x")
    ax.set_ylabel("displacement")
    ax.set_title("Wave interference")
    ax.legend(loc="upper right")
    fig.tight_layout()
    _save(fig, filename)


def plot_measurement_histogram(
    ensemble: MeasurementEnsemble,
    filename: Optional[str | Path] = None,
) -> None:
    """Bar chart of outcome frequencies next to the Born probabilities."""

    p0, p1 = ensemble.state.probabilities
    zeros, ones = ensemble.counts
    positions = np.arange(2)

    fig, ax = plt.subplots(figsize=(5.0, 4.0))
    ax.bar(positions - 0.2, [zeros / ensemble.shots, ones / ensemble.shots], width=0.4,
           color="#4682b4", edgecolor="black", label="Measured")
    ax.bar(positions + 0.2, [p0, p1], width=0.4, color="#d8a0c0", edgecolor="black", label="Born rule")
    ax.set_xticks(positions)
    ax.set_xticklabels(["|0⟩", "|1⟩"])
    ax.set_ylim(0.0, 1.05)
    ax.set_ylabel("Probability")
    ax.set_title(f"{ensemble.shots} measurements")
    ax.legend()
    fig.tight_layout()
    _save(fig, filename)


def plot_intensity_curve(filename: Optional[str | Path] = None, points: int = 400) -> None:
    """Interference intensity against phase shift with the classification bands."""

    phases = np.linspace(0.0, 2.0 * math.pi, points, endpoint=False)
    intensity = [interference_intensity(phase) for phase in phases]

    fig, ax = plt.subplots(figsize=(6.0, 3.5))
    ax.axhspan(CONSTRUCTIVE_THRESHOLD, 1.05, color="tab:green", alpha=0.12, label="constructive")
    ax.axhspan(0.0, DESTRUCTIVE_THRESHOLD, color="tab:red", alpha=0.12, label="destructive")
    ax.plot(phases, intensity, color="black", linewidth=2.0)
    ax.set_xlabel("Phase shift φ (rad)")
    ax.set_ylabel("|cos(φ/2)|")
    ax.set_ylim(0.0, 1.05)
    ax.set_title("Interference intensity")
    ax.legend(loc="upper center")
    fig.tight_layout()
    _save(fig, filename)
