"""Symbolic Aggregate approXimation quantizer for 1D series.

Combines a trained normalization baseline, fractional-window PAA and
Gaussian cutpoints to turn a real-valued series into a symbol sequence,
with optional run-length numerosity reduction.
"""

import logging
import string
import warnings
from typing import Iterator, Optional, Tuple

import numpy as np

from ..config import SaxConfig
from ..utils.running_stats import ArrayLike, BaselineStatistics, train_baseline
from .cutpoints import SymbolMapper
from .paa import FractionalPAA

logger = logging.getLogger(__name__)


def _as_series(sequence: ArrayLike) -> np.ndarray:
    values = np.asarray(sequence, dtype=float)
    if values.ndim != 1:
        raise ValueError(f"Expected a 1-D sequence, got shape {values.shape}")
    return values


class Sax:
    """SAX quantizer with fractional sliding window and numerosity reduction.

    The first call to `quantize` trains the baseline on its input unless
    `train` was called before. Once trained, the baseline is kept for the
    lifetime of the instance.

    Usage:
        sax = Sax(window_size=6, string_size=1, alphabet_size=5)
        symbols, consumed = sax.quantize(series, reduce=False)

    Parameters
    ----------
    window_size : int
        Sliding window size in samples.
    string_size : int
        Symbols per window; may be greater than `window_size`.
    alphabet_size : int
        Number of symbols.

    Attributes
    ----------
    config : SaxConfig
        Validated sizes.
    mapper : SymbolMapper
        Cutpoint-based symbol mapper.
    paa : FractionalPAA
        Window aggregator.
    baseline : BaselineStatistics or None
        Normalization baseline, None until trained.
    """

    def __init__(self, window_size: int, string_size: int, alphabet_size: int):
        self.config = SaxConfig(window_size, string_size, alphabet_size)
        self.mapper = SymbolMapper(self.config.alphabet_size)
        self.paa = FractionalPAA(self.config.window_size, self.config.string_size)
        self.baseline: Optional[BaselineStatistics] = None

    @classmethod
    def from_config(cls, config: SaxConfig) -> "Sax":
        """Build a quantizer from an existing configuration."""
        return cls(config.window_size, config.string_size, config.alphabet_size)

    @property
    def window_size(self) -> int:
        return self.config.window_size

    @property
    def string_size(self) -> int:
        return self.config.string_size

    @property
    def alphabet_size(self) -> int:
        return self.config.alphabet_size

    @property
    def cutpoints(self) -> np.ndarray:
        return self.mapper.cutpoints

    @property
    def is_trained(self) -> bool:
        """Check if the baseline has been computed."""
        return self.baseline is not None

    def train(self, samples: ArrayLike) -> None:
        """Compute the normalization baseline from `samples`.

        Parameters
        ----------
        samples : array_like
            Non-empty 1-D sequence of training values.

        Raises
        ------
        EmptyInputError
            If `samples` is empty.
        """
        self.baseline = train_baseline(samples)

    def _saxify(self, values: np.ndarray, start: int) -> np.ndarray:
        paa = self.paa.aggregate(values, self.baseline, start=start)
        return self.mapper.encode_batch(paa)

    def iter_windows(self, sequence: ArrayLike, reduce: bool = True) -> Iterator[Tuple[int, np.ndarray]]:
        """Yield the symbol block of every emitted window.

        The window start advances one sample at a time, so consecutive
        windows overlap by ``window_size - 1`` samples. Windows that run off
        the end of the input yield truncated blocks.

        Parameters
        ----------
        sequence : array_like
            1-D series to quantize.
        reduce : bool
            If True, skip a block identical to the last emitted one.

        Yields
        ------
        tuple of (int, np.ndarray)
            Window start offset and its symbols.
        """
        values = _as_series(sequence)
        if not self.is_trained:
            self.train(values)

        last: Optional[np.ndarray] = None
        for start in range(len(values)):
            block = self._saxify(values, start)
            if reduce:
                if last is not None and np.array_equal(block, last):
                    continue
                last = block
            yield start, block

    def quantize(self, sequence: ArrayLike, reduce: bool = True) -> Tuple[np.ndarray, int]:
        """Quantize a series into SAX symbols.

        Trains the baseline on `sequence` first if the quantizer is not
        trained yet.

        Parameters
        ----------
        sequence : array_like
            1-D series to quantize.
        reduce : bool
            Apply run-length numerosity reduction (default True).

        Returns
        -------
        symbols : np.ndarray
            Concatenated symbol blocks (int64).
        consumed : int
            Number of input samples visited, always len(sequence).
        """
        values = _as_series(sequence)
        if 0 < len(values) < self.window_size:
            warnings.warn(
                f"Sequence length ({len(values)}) < window_size ({self.window_size}); "
                "every window will be truncated",
                UserWarning,
            )

        blocks = [block for _, block in self.iter_windows(values, reduce=reduce)]
        consumed = len(values)

        logger.debug("Quantized %d samples into %d block(s) (reduce=%s)",
                     consumed, len(blocks), reduce)
        if not blocks:
            return np.empty(0, dtype=np.int64), consumed
        return np.concatenate(blocks), consumed

    def decode(self, symbols: np.ndarray) -> np.ndarray:
        """Decode symbols back to approximate raw values.

        Parameters
        ----------
        symbols : np.ndarray
            Symbols in [0, alphabet_size).

        Returns
        -------
        np.ndarray
            Bin-midpoint z-values mapped back through the baseline.
        """
        if not self.is_trained:
            raise ValueError("Quantizer not trained. Call train() or quantize() first.")
        z = self.mapper.decode_batch(np.asarray(symbols))
        return self.baseline.denormalize(z)

    def to_string(self, symbols: np.ndarray) -> str:
        """Render symbols as lowercase letters ('a' is symbol 0)."""
        if self.alphabet_size > len(string.ascii_lowercase):
            raise ValueError(
                f"alphabet_size {self.alphabet_size} too large for a letter alphabet"
            )
        return "".join(string.ascii_lowercase[int(s)] for s in np.asarray(symbols).ravel())

    def get_alphabet_utilization(self, symbols: np.ndarray) -> float:
        """Fraction of the alphabet actually used by `symbols`."""
        return len(np.unique(symbols)) / self.alphabet_size

    def order(self) -> int:
        """Order of the quantizer (the window size)."""
        return self.window_size

    def ratio(self) -> float:
        """Nominal compression ratio (window_size / string_size)."""
        return self.config.ratio

    def __repr__(self) -> str:
        return (f"Sax(window_size={self.window_size}, "
                f"string_size={self.string_size}, "
                f"alphabet_size={self.alphabet_size}, "
                f"trained={self.is_trained})")


def sax_quantize(
    sequence: ArrayLike,
    window_size: int,
    string_size: int,
    alphabet_size: int,
    reduce: bool = True,
) -> np.ndarray:
    """Quantize `sequence` with a fresh quantizer trained on it.

    Returns
    -------
    np.ndarray
        Symbol sequence.
    """
    symbols, _ = Sax(window_size, string_size, alphabet_size).quantize(sequence, reduce=reduce)
    return symbols
