"""Unit tests for the real-valued qubit: gates, measurement and read-outs."""

import math

import numpy as np
import pytest

from quantum_playground.errors import (
    InvalidGateError,
    InvalidParameterError,
    MissingParameterError,
)
from quantum_playground.qubit import (
    FIXED_GATES,
    GateSpec,
    QubitState,
    apply_gate,
    bloch_vector,
    format_ket,
    gate_matrix,
    measure,
    reset,
    rotation_matrix,
)

S = 1.0 / math.sqrt(2.0)


def random_states(count, seed=7):
    angles = np.random.default_rng(seed).uniform(0.0, 2.0 * math.pi, size=count)
    return [QubitState(math.cos(a), math.sin(a)) for a in angles]


class TestQubitState:
    """Construction and derived quantities."""

    def test_default_is_zero(self):
        assert QubitState() == QubitState(1.0, 0.0)
        assert reset() == QubitState(1.0, 0.0)

    def test_rejects_unnormalized(self):
        with pytest.raises(InvalidParameterError):
            QubitState(0.5, 0.5)

    def test_accepts_rounded_amplitudes(self):
        state = QubitState(0.707, 0.707)
        assert state.norm == pytest.approx(1.0, abs=1e-12)
        assert state.a0 == pytest.approx(state.a1)

    def test_rejects_non_finite(self):
        with pytest.raises(InvalidParameterError):
            QubitState(float("nan"), 1.0)

    def test_from_unnormalized(self):
        state = QubitState.from_unnormalized(3.0, 4.0)
        assert state.a0 == pytest.approx(0.6)
        assert state.a1 == pytest.approx(0.8)
        assert state.norm == pytest.approx(1.0)

    def test_from_unnormalized_zero_vector(self):
        with pytest.raises(InvalidParameterError):
            QubitState.from_unnormalized(0.0, 0.0)

    def test_probabilities(self):
        p0, p1 = QubitState.from_unnormalized(1.0, 1.0).probabilities
        assert p0 == pytest.approx(0.5)
        assert p1 == pytest.approx(0.5)


class TestGates:
    """Gate matrices and their application."""

    @pytest.mark.parametrize("gate", ["I", "X", "Y", "Z", "H"])
    def test_fixed_gates_preserve_norm(self, gate):
        for state in random_states(50):
            new_state = apply_gate(state, gate)
            assert abs(new_state.a0 ** 2 + new_state.a1 ** 2 - 1.0) < 1e-9

    @pytest.mark.parametrize("angle", [0.0, 33.0, 90.0, 180.0, 270.0, 360.0, -45.0, 1000.0])
    def test_rotation_preserves_norm(self, angle):
        for state in random_states(20):
            new_state = apply_gate(state, "R", angle)
            assert new_state.norm == pytest.approx(1.0, abs=1e-9)

    @pytest.mark.parametrize("gate", ["H", "X", "Z"])
    def test_self_inverse_gates(self, gate):
        for state in random_states(20):
            twice = apply_gate(apply_gate(state, gate), gate)
            assert np.allclose(twice.as_array(), state.as_array(), atol=1e-12)

    def test_y_twice_is_global_sign_flip(self):
        # the real Y squares to -I: same physical state, opposite global sign
        for state in random_states(20):
            twice = apply_gate(apply_gate(state, "Y"), "Y")
            assert np.allclose(twice.as_array(), -state.as_array(), atol=1e-12)
            assert np.allclose(twice.probabilities, state.probabilities)

    def test_matrices_are_orthogonal(self):
        for matrix in list(FIXED_GATES.values()) + [rotation_matrix(37.0)]:
            assert np.allclose(matrix @ matrix.T, np.eye(2))

    def test_rotation_closed_form(self):
        expected = np.array([[math.cos(math.radians(30)), -math.sin(math.radians(30))],
                             [math.sin(math.radians(30)), math.cos(math.radians(30))]])
        assert np.allclose(rotation_matrix(60.0), expected)

    def test_rotation_wraps_periodically(self):
        assert np.allclose(rotation_matrix(90.0), rotation_matrix(90.0 + 720.0))
        assert np.allclose(rotation_matrix(360.0), -np.eye(2))

    def test_rotation_180_equals_y(self):
        assert np.allclose(rotation_matrix(180.0), FIXED_GATES["Y"])

    def test_gate_names_are_case_insensitive(self):
        assert apply_gate(QubitState(), "h") == apply_gate(QubitState(), "H")
        assert GateSpec(" r ", 45).name == "R"

    def test_gate_matrix_returns_copy(self):
        matrix = gate_matrix("X")
        matrix[0, 0] = 5.0
        assert FIXED_GATES["X"][0, 0] == 0.0

    def test_unknown_gate(self):
        with pytest.raises(InvalidGateError):
            apply_gate(QubitState(), "Q")

    def test_non_string_gate(self):
        with pytest.raises(InvalidGateError):
            apply_gate(QubitState(), 3)

    def test_rotation_without_angle(self):
        with pytest.raises(MissingParameterError):
            apply_gate(QubitState(), "R")

    def test_rotation_with_nan_angle(self):
        with pytest.raises(InvalidParameterError):
            apply_gate(QubitState(), "R", float("nan"))

    def test_fixed_gate_ignores_angle(self):
        assert GateSpec("X", 45.0).angle is None

    def test_gate_spec_argument(self):
        spec = GateSpec("R", 90.0)
        assert apply_gate(QubitState(), spec) == apply_gate(QubitState(), "R", 90.0)
        # an explicit angle overrides the one stored on an R spec
        overridden = apply_gate(QubitState(), spec, 180.0)
        assert np.allclose(overridden.as_array(), apply_gate(QubitState(), "Y").as_array())

    def test_scenario_h_x_rotation(self):
        state = reset()
        state = apply_gate(state, "H")
        assert state.a0 == pytest.approx(S)
        assert state.a1 == pytest.approx(S)

        after_x = apply_gate(state, "X")
        assert after_x.a0 == pytest.approx(S)
        assert after_x.a1 == pytest.approx(S)

        rotated = apply_gate(after_x, "R", 180.0)
        expected = rotation_matrix(180.0) @ after_x.as_array()
        assert np.allclose(rotated.as_array(), expected)
        assert np.allclose(rotated.as_array(), [-S, S])


class TestGateSpecParse:
    def test_fixed(self):
        assert GateSpec.parse("H") == GateSpec("H")

    def test_rotation(self):
        spec = GateSpec.parse("R:90")
        assert spec.name == "R"
        assert spec.angle == 90.0
        assert str(spec) == "R(90°)"

    def test_rotation_missing_angle(self):
        with pytest.raises(MissingParameterError):
            GateSpec.parse("R")

    def test_rotation_bad_angle(self):
        with pytest.raises(InvalidParameterError):
            GateSpec.parse("R:ninety")


class TestMeasurement:
    """Sampling and collapse."""

    def test_zero_always_measures_zero(self, rng):
        for _ in range(200):
            result = measure(QubitState(1.0, 0.0), rng)
            assert result.outcome == 0
            assert result.state == QubitState(1.0, 0.0)

    def test_one_always_measures_one(self, rng):
        for _ in range(200):
            result = measure(QubitState(0.0, 1.0), rng)
            assert result.outcome == 1
            assert result.state == QubitState(0.0, 1.0)

    def test_extreme_draws_on_basis_states(self, fixed_draws):
        draws = fixed_draws(0.0, 0.999999)
        assert measure(QubitState(1.0, 0.0), draws).outcome == 0
        assert measure(QubitState(1.0, 0.0), draws).outcome == 0
        assert measure(QubitState(0.0, 1.0), draws).outcome == 1
        assert measure(QubitState(0.0, 1.0), draws).outcome == 1

    def test_threshold(self, fixed_draws):
        state = QubitState.from_unnormalized(1.0, 1.0)
        assert measure(state, fixed_draws(0.49)).outcome == 0
        assert measure(state, fixed_draws(0.51)).outcome == 1

    def test_collapse_is_exact_basis_vector(self, rng):
        state = QubitState.from_unnormalized(1.0, 2.0)
        result = measure(state, rng)
        assert result.state.as_array().tolist() in ([1.0, 0.0], [0.0, 1.0])
        assert result.state.as_array()[result.outcome] == 1.0

    def test_equal_superposition_frequency(self, rng):
        state = QubitState.from_unnormalized(1.0, 1.0)
        outcomes = [measure(state, rng).outcome for _ in range(20000)]
        assert outcomes.count(0) / len(outcomes) == pytest.approx(0.5, abs=0.02)

    def test_rounded_superposition_frequency(self, rng):
        state = QubitState(0.707, 0.707)
        outcomes = [measure(state, rng).outcome for _ in range(20000)]
        assert outcomes.count(0) / len(outcomes) == pytest.approx(0.5, abs=0.02)

    def test_same_seed_same_outcomes(self):
        state = QubitState.from_unnormalized(1.0, 1.0)
        first_rng = np.random.default_rng(3)
        second_rng = np.random.default_rng(3)
        first = [measure(state, first_rng).outcome for _ in range(20)]
        second = [measure(state, second_rng).outcome for _ in range(20)]
        assert first == second


class TestReadouts:
    def test_format_ket(self):
        assert format_ket(QubitState()) == "1.000|0⟩ + 0.000|1⟩"
        assert format_ket(QubitState.from_unnormalized(1.0, -1.0)) == "0.707|0⟩ - 0.707|1⟩"
        assert format_ket(QubitState.from_unnormalized(1.0, 1.0), precision=1) == "0.7|0⟩ + 0.7|1⟩"

    @pytest.mark.parametrize(
        "state, expected",
        [
            (QubitState(1.0, 0.0), (0.0, 0.0, 1.0)),
            (QubitState(0.0, 1.0), (0.0, 0.0, -1.0)),
            (QubitState.from_unnormalized(1.0, 1.0), (1.0, 0.0, 0.0)),
            (QubitState.from_unnormalized(1.0, -1.0), (-1.0, 0.0, 0.0)),
        ],
    )
    def test_bloch_vector(self, state, expected):
        assert np.allclose(bloch_vector(state), expected)

    def test_bloch_vector_is_unit(self):
        for state in random_states(20):
            assert np.linalg.norm(bloch_vector(state)) == pytest.approx(1.0)
