"""Gaussian cutpoints and symbol mapping for SAX.

Builds equal-probability decision boundaries from the standard normal
distribution and maps normalized aggregates to zero-based symbols.
"""

import bisect
from functools import lru_cache

import numpy as np
from scipy.stats import norm

from ..exceptions import ConfigurationError

# cutpoints[0]: every real value compares >= to it.
SENTINEL = float(np.finfo(float).min)


@lru_cache(maxsize=None)
def _cutpoints(alphabet_size: int) -> np.ndarray:
    qs = np.arange(1, alphabet_size) / alphabet_size
    cutpoints = np.concatenate([[SENTINEL], norm.ppf(qs)]).astype(float)
    cutpoints.setflags(write=False)
    return cutpoints


def gaussian_cutpoints(alphabet_size: int) -> np.ndarray:
    """Generate the SAX alphabet's decision boundaries.

    Parameters
    ----------
    alphabet_size : int
        Number of symbols A, must be >= 1.

    Returns
    -------
    np.ndarray
        Read-only array of length A. Element 0 is the minimum representable
        float; element i (i >= 1) is the N(0,1) quantile at i/A.

    Raises
    ------
    ConfigurationError
        If `alphabet_size` < 1.
    """
    if alphabet_size < 1:
        raise ConfigurationError(f"alphabet_size must be >= 1, got {alphabet_size}")
    return _cutpoints(int(alphabet_size))


class SymbolMapper:
    """Maps a normalized aggregate to a symbol by N(0,1) quantile bins.

    A value's symbol is the number of cutpoints less than or equal to it,
    minus one, so symbols live in [0, alphabet_size).

    Parameters
    ----------
    alphabet_size : int
        Number of symbols.

    Attributes
    ----------
    alphabet_size : int
        Number of symbols.
    cutpoints : np.ndarray
        Decision boundaries, shape (alphabet_size,).
    """

    def __init__(self, alphabet_size: int):
        self.cutpoints = gaussian_cutpoints(alphabet_size)
        self.alphabet_size = int(alphabet_size)

    def encode_scalar(self, value: float) -> int:
        """Encode a single aggregate to a symbol.

        Symbols are defined as:
        - Symbol 0: (-inf, cutpoints[1])
        - Symbol i: [cutpoints[i], cutpoints[i+1])
        - Symbol A-1: [cutpoints[A-1], inf)

        Parameters
        ----------
        value : float
            Normalized aggregate.

        Returns
        -------
        int
            Symbol in range [0, alphabet_size).
        """
        value = float(value)
        if np.isnan(value):
            return self.alphabet_size - 1
        count = bisect.bisect_right(self.cutpoints.tolist(), value)
        return max(count - 1, 0)

    def encode_batch(self, values: np.ndarray) -> np.ndarray:
        """Encode an array of aggregates to symbols.

        Parameters
        ----------
        values : np.ndarray
            Normalized aggregates.

        Returns
        -------
        np.ndarray
            Symbols (int64), same shape as input.
        """
        values = np.asarray(values, dtype=float)
        # NaN sorts after every cutpoint and lands in the last bin
        counts = np.searchsorted(self.cutpoints, values.ravel(), side="right")
        symbols = np.clip(counts - 1, 0, self.alphabet_size - 1).astype(np.int64)
        return symbols.reshape(values.shape)

    def decode_scalar(self, symbol: int) -> float:
        """Decode a symbol to a representative z-value.

        Uses the probability midpoint of the symbol's bin.

        Parameters
        ----------
        symbol : int
            Symbol in [0, alphabet_size).

        Returns
        -------
        float
            Approximate normalized value.
        """
        if not (0 <= symbol < self.alphabet_size):
            raise ValueError(f"Symbol {symbol} out of range [0, {self.alphabet_size})")

        q_lo = symbol / self.alphabet_size
        q_hi = (symbol + 1) / self.alphabet_size
        return float(norm.ppf(0.5 * (q_lo + q_hi)))

    def decode_batch(self, symbols: np.ndarray) -> np.ndarray:
        """Decode an array of symbols to representative z-values."""
        symbols = np.asarray(symbols)
        z_flat = np.array([self.decode_scalar(int(s)) for s in symbols.ravel()], dtype=float)
        return z_flat.reshape(symbols.shape)

    def get_bin_edges(self) -> np.ndarray:
        """Get all bin edges including -inf and +inf.

        Returns
        -------
        np.ndarray
            Bin edges, shape (alphabet_size + 1,).
        """
        return np.concatenate([[-np.inf], self.cutpoints[1:], [np.inf]])

    def __repr__(self) -> str:
        return f"SymbolMapper(alphabet_size={self.alphabet_size})"
