"""Baseline statistics using Welford's algorithm.

Provides numerically stable one-pass computation of the mean and sample
standard deviation used to z-normalize a series before aggregation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from ..exceptions import EmptyInputError

logger = logging.getLogger(__name__)

ArrayLike = Union[np.ndarray, Sequence[float]]

# Smallest positive normal double; substituted for a zero or undefined stdev.
MIN_STDEV = float(np.finfo(float).tiny)


@dataclass(frozen=True)
class BaselineStatistics:
    """Normalization baseline of a quantizer.

    Attributes
    ----------
    mean : float
        Baseline mean.
    stdev : float
        Baseline standard deviation, always > 0.
    """

    mean: float
    stdev: float

    def normalize(self, x: ArrayLike) -> np.ndarray:
        """Standardize input against the baseline.

        Parameters
        ----------
        x : array_like
            Raw value(s).

        Returns
        -------
        np.ndarray
            ``(x - mean) / stdev``.
        """
        x = np.asarray(x, dtype=float)
        with np.errstate(over="ignore"):
            return (x - self.mean) / self.stdev

    def denormalize(self, z: ArrayLike) -> np.ndarray:
        """Map standardized value(s) back to the raw scale."""
        z = np.asarray(z, dtype=float)
        return self.mean + z * self.stdev


class RunningStats:
    """Numerically stable running mean/variance using Welford's method.

    Scalar observations only. Use `update(x)` per sample or
    `update_batch(X)` for a whole sequence.

    Parameters
    ----------
    min_stdev : float
        Positive floor returned by `std` when the sample variance is
        undefined (fewer than two samples) or zero.

    Attributes
    ----------
    n : int
        Number of samples seen.
    mean : float
        Running mean estimate.
    M2 : float
        Sum of squares of differences from the mean.
    """

    def __init__(self, min_stdev: float = MIN_STDEV):
        if not min_stdev > 0:
            raise ValueError(f"min_stdev must be > 0, got {min_stdev}")
        self.n = 0
        self.mean = 0.0
        self.M2 = 0.0
        self.min_stdev = float(min_stdev)

    def update(self, x: float) -> None:
        """Update statistics with a single observation.

        Parameters
        ----------
        x : float
            Single finite observation.
        """
        x = float(x)
        if not np.isfinite(x):
            raise ValueError(f"Cannot train on non-finite sample {x}")

        self.n += 1
        delta = x - self.mean
        self.mean += delta / self.n
        delta2 = x - self.mean
        self.M2 += delta * delta2

    def update_batch(self, X: ArrayLike) -> None:
        """Update statistics with a 1-D sequence of observations.

        Parameters
        ----------
        X : array_like
            Observations, shape (N,).
        """
        X = np.asarray(X, dtype=float)
        if X.ndim != 1:
            raise ValueError(f"Expected a 1-D sequence, got shape {X.shape}")
        for x in X:
            self.update(x)

    @property
    def var(self) -> float:
        """Sample variance (n-1 denominator); 0.0 with fewer than two samples."""
        if self.n < 2:
            return 0.0
        return self.M2 / (self.n - 1)

    @property
    def std(self) -> float:
        """Sample standard deviation, floored to `min_stdev` when zero."""
        stdev = float(np.sqrt(self.var))
        if stdev == 0.0:
            return self.min_stdev
        return stdev

    @property
    def is_degenerate(self) -> bool:
        """True when `std` is the substituted floor rather than a real estimate."""
        return self.n < 2 or self.var == 0.0

    def normalize(self, x: ArrayLike) -> np.ndarray:
        """Standardize input using current statistics.

        Parameters
        ----------
        x : array_like
            Input to standardize.

        Returns
        -------
        np.ndarray
            Standardized input: (x - mean) / std.
        """
        return self.baseline().normalize(x)

    def baseline(self) -> BaselineStatistics:
        """Freeze the current statistics into a baseline.

        Raises
        ------
        EmptyInputError
            If no samples have been seen.
        """
        if self.n == 0:
            raise EmptyInputError("No samples seen; cannot build a baseline")
        return BaselineStatistics(mean=float(self.mean), stdev=self.std)

    def __repr__(self) -> str:
        return f"RunningStats(n={self.n}, mean={self.mean}, std={self.std})"


def train_baseline(samples: ArrayLike) -> BaselineStatistics:
    """Compute the normalization baseline of a sample sequence.

    Parameters
    ----------
    samples : array_like
        Non-empty 1-D sequence of finite reals.

    Returns
    -------
    BaselineStatistics
        Mean and sample standard deviation. A single sample or a constant
        sequence gets the minimal positive stdev instead of zero.

    Raises
    ------
    EmptyInputError
        If `samples` is empty.
    """
    samples = np.asarray(samples, dtype=float)
    if samples.ndim != 1:
        raise ValueError(f"Expected a 1-D sequence, got shape {samples.shape}")
    if samples.size == 0:
        raise EmptyInputError("Cannot train a baseline on an empty sequence")

    stats = RunningStats()
    stats.update_batch(samples)
    baseline = stats.baseline()

    if stats.is_degenerate:
        logger.debug("Degenerate baseline over %d sample(s); stdev floored to %g",
                     stats.n, baseline.stdev)
    logger.debug("Trained baseline: n=%d mean=%g stdev=%g",
                 stats.n, baseline.mean, baseline.stdev)
    return baseline
