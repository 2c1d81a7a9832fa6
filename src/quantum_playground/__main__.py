"""Command-line entry point for the :mod:`quantum_playground` package."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import PlaygroundConfig, load_config
from .ensemble import save_ensemble, simulate_measurements, simulate_pairs
from .errors import QuantumPlaygroundError
from .qubit import GateSpec, bloch_vector, format_ket
from .session import QubitSession, WaveAnimation
from .visualisation import plot_measurement_histogram, plot_waves


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="quantum-playground",
        description=(
            "Explore superposition, interference and entanglement with a "
            "small real-valued qubit, a two-wave sampler and a correlated "
            "spin pair."
        ),
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help="JSON file with default parameters (command-line flags take precedence).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random number generator (default: None).",
    )
    parser.add_argument("--verbose", action="store_true", help="Log kernel calls at DEBUG level.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    qubit_parser = subparsers.add_parser("qubit", help="Apply gates to |0⟩ and measure.")
    qubit_parser.add_argument(
        "--gates",
        nargs="*",
        default=[],
        metavar="GATE",
        help="Gates applied in order: I, X, Y, Z, H or R:<degrees> (default: none).",
    )
    qubit_parser.add_argument(
        "--shots",
        type=int,
        default=1000,
        help="Number of measurements of the prepared state (default: 1000).",
    )
    qubit_parser.add_argument("--progress", action="store_true", help="Show a progress bar.")
    qubit_parser.add_argument(
        "--save-plot",
        type=Path,
        default=None,
        metavar="PATH",
        help="Save a histogram of the outcomes with the Born probabilities.",
    )
    qubit_parser.add_argument(
        "--save-data",
        type=Path,
        default=None,
        metavar="PATH",
        help="Persist the outcomes and the prepared state to a .npz file.",
    )

    waves_parser = subparsers.add_parser("waves", help="Sample two interfering waves.")
    waves_parser.add_argument("--frequency", type=float, default=None, help="Wave number (default: 1).")
    waves_parser.add_argument("--amplitude", type=float, default=None, help="Amplitude (default: 1).")
    waves_parser.add_argument(
        "--phase-shift",
        type=float,
        default=None,
        help="Phase of wave B relative to wave A in radians, in [0, 2π) (default: π/2).",
    )
    waves_parser.add_argument(
        "--frames",
        type=int,
        default=0,
        help="Number of animation ticks to advance before reporting (default: 0).",
    )
    waves_parser.add_argument(
        "--save-plot",
        type=Path,
        default=None,
        metavar="PATH",
        help="Save the final frame as an image.",
    )

    pair_parser = subparsers.add_parser("entangle", help="Measure correlated spin pairs.")
    pair_parser.add_argument(
        "--strength",
        type=float,
        default=None,
        help="Probability in [0, 1] that a pair comes out anti-correlated (default: 1).",
    )
    pair_parser.add_argument("--trials", type=int, default=1000, help="Number of pairs (default: 1000).")
    pair_parser.add_argument(
        "--particle",
        choices=["A", "B"],
        default="A",
        help="Particle measured first (default: A).",
    )
    pair_parser.add_argument("--progress", action="store_true", help="Show a progress bar.")
    return parser.parse_args(argv)


def _run_qubit(args: argparse.Namespace, config: PlaygroundConfig) -> None:
    session = QubitSession(seed=config.seed, history_size=config.history_size)
    for token in args.gates:
        session.apply_gate(GateSpec.parse(token))
    state = session.state
    p0, p1 = state.probabilities
    x, y, z = bloch_vector(state)

    print("Prepared qubit state")
    print("--------------------")
    print(f"Gates: {' '.join(args.gates) if args.gates else '(none)'}")
    print(f"|ψ⟩ = {format_ket(state)}")
    print(f"P(0) = {p0:.3f}, P(1) = {p1:.3f}")
    print(f"Bloch vector: ({x:.3f}, {y:.3f}, {z:.3f})")

    ensemble = simulate_measurements(state, args.shots, rng=session.rng, progress=args.progress)
    zeros, ones = ensemble.counts
    print(f"Shots: {ensemble.shots}")
    print(f"Counts: 0 -> {zeros}, 1 -> {ones}")
    print(f"Frequency of 0: {ensemble.frequency_zero:.3f}")
    print(f"Born-rule p-value: {ensemble.born_rule_pvalue():.3f}")

    if args.save_plot is not None:
        plot_measurement_histogram(ensemble, args.save_plot)
        print(f"Saved outcome histogram to {args.save_plot}")

    if args.save_data is not None:
        saved = save_ensemble(ensemble, args.save_data)
        print(f"Saved outcomes to {saved}")


def _run_waves(args: argparse.Namespace, config: PlaygroundConfig) -> None:
    config = config.updated(
        frequency=args.frequency,
        amplitude=args.amplitude,
        phase_shift=args.phase_shift,
    )
    animation = WaveAnimation(
        config.wave_params(),
        step=config.phase_step,
        sample_count=config.sample_count,
        x_step=config.x_step,
        interval_ms=config.tick_interval_ms,
    )
    animation.start()
    frame = animation.frame()
    for _ in range(max(0, args.frames)):
        frame = animation.tick()

    params = animation.params
    print("Wave interference")
    print("-----------------")
    print(f"Frequency: {params.frequency}")
    print(f"Amplitude: {params.amplitude}")
    print(f"Phase shift: {params.phase_shift:.3f} rad")
    print(f"Animation phase t: {animation.t:.3f} after {max(0, args.frames)} ticks")
    print(f"Tick interval: {animation.interval_ms} ms ({animation.elapsed_ms} ms elapsed)")
    print(f"Intensity |cos(φ/2)|: {animation.intensity:.3f} ({animation.classification.value})")
    print(f"Peak |interference|: {abs(frame.interference.y).max():.3f}")

    if args.save_plot is not None:
        plot_waves(frame, filename=args.save_plot)
        print(f"Saved frame to {args.save_plot}")


def _run_entangle(args: argparse.Namespace, config: PlaygroundConfig) -> None:
    config = config.updated(strength=args.strength)
    ensemble = simulate_pairs(
        config.strength,
        args.trials,
        particle=args.particle,
        seed=config.seed,
        progress=args.progress,
    )
    stats = ensemble.statistics
    print("Correlated pair statistics")
    print("--------------------------")
    print(f"Strength: {config.strength}")
    print(f"Pairs: {stats.total}")
    print(f"Correlated: {stats.correlated} ({stats.fraction:.3f})")
    print(f"Opposite spins: {ensemble.opposite_fraction:.3f}")
    print(f"Equal spins: {ensemble.agreement_fraction:.3f}")


COMMANDS = {
    "qubit": _run_qubit,
    "waves": _run_waves,
    "entangle": _run_entangle,
}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        config = load_config(args.config) if args.config is not None else PlaygroundConfig()
        config = config.updated(seed=args.seed)
        COMMANDS[args.command](args, config)
    except (QuantumPlaygroundError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
