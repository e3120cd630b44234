"""Weighting functions and random sampling used by the particle filter."""

from __future__ import annotations

import math
import random

_TWO_PI = 2.0 * math.pi
_APPROX_TERMS = 12


def _check_variance(variance: float) -> None:
    if variance <= 0:
        raise ValueError("variance must be positive")


def prob_density(diff: float, variance: float) -> float:
    """Normal probability density at a distance `diff` from the mean."""
    _check_variance(variance)
    return (1.0 / math.sqrt(_TWO_PI * variance)) * math.exp(-0.5 * diff * diff / variance)


def exp_weight(diff: float, variance: float) -> float:
    """Unnormalized Gaussian weight: 1 at the mean, falling off with `diff`."""
    _check_variance(variance)
    return math.exp(-0.5 * diff * diff / variance)


class RandomSampler:
    """Seedable source of the random draws the particle filter needs."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def uniform_int(self, low: int, high: int) -> int:
        """Integer drawn uniformly from low..high, both ends included."""
        if low > high:
            raise ValueError("low must not exceed high")
        return self._rng.randint(low, high)

    def uniform_real(self, low: float, high: float) -> float:
        """Real number drawn uniformly between low and high."""
        if low > high:
            raise ValueError("low must not exceed high")
        if low == high:
            return float(low)
        return self._rng.uniform(low, high)

    def normal(self, mean: float, stddev: float) -> float:
        """Normally distributed value with the given mean and standard deviation."""
        if stddev <= 0:
            raise ValueError("standard deviation must be positive")
        return self._rng.gauss(mean, stddev)

    def sample_normal(self, variance: float) -> float:
        """Zero-mean approximately normal value with the given variance.

        Half the sum of twelve uniform draws on [-sd, sd].
        """
        if variance < 0:
            raise ValueError("variance must not be negative")
        std_dev = math.sqrt(variance)
        total = sum(self.uniform_real(-std_dev, std_dev) for _ in range(_APPROX_TERMS))
        return 0.5 * total