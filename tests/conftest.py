"""Shared fixtures."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded generator so stochastic tests are reproducible."""
    return np.random.default_rng(12345)


class FixedDraws:
    """Returns a scripted sequence of uniform draws."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = 0

    def random(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def fixed_draws():
    return FixedDraws
