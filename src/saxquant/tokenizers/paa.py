"""Piecewise aggregate approximation with fractional cell widths.

A window of ``window_size`` samples is split into ``string_size`` cells of
width ``window_size / string_size``. The width need not be an integer: a
sample that straddles a cell boundary contributes the covered fraction of its
weight to each side.
"""

from typing import Optional

import numpy as np

from ..config import SaxConfig
from ..utils.running_stats import ArrayLike, BaselineStatistics


class FractionalPAA:
    """Fractional-width sliding-window PAA.

    Weights are tracked in integer units to keep cell boundaries exact: a
    sample carries ``string_size`` units and a cell holds ``window_size``
    units, so the cell width ``window_size / string_size`` in samples is
    represented without rounding.

    Parameters
    ----------
    window_size : int
        Samples per window.
    string_size : int
        Aggregates (cells) per window.

    Attributes
    ----------
    window_size : int
        Samples per window.
    string_size : int
        Aggregates per window.
    """

    def __init__(self, window_size: int, string_size: int):
        config = SaxConfig(window_size, string_size, alphabet_size=1)
        self.window_size = config.window_size
        self.string_size = config.string_size

    @property
    def cell_width(self) -> float:
        """Width of one cell in samples (may be fractional)."""
        return self.window_size / self.string_size

    def aggregate(
        self,
        sequence: ArrayLike,
        baseline: BaselineStatistics,
        start: int = 0,
        stop: Optional[int] = None,
    ) -> np.ndarray:
        """Aggregate the window beginning at `start`.

        Parameters
        ----------
        sequence : array_like
            1-D indexable sequence of raw reals.
        baseline : BaselineStatistics
            Statistics used to normalize each sample.
        start : int
            Index of the first sample of the window.
        stop : int, optional
            Exclusive bound on the samples read. Defaults to len(sequence).

        Returns
        -------
        np.ndarray
            Up to `string_size` averages of normalized samples. Fewer are
            returned when the input runs out before the window is complete;
            the last one then averages only the weight it received.
        """
        n = len(sequence)
        stop = n if stop is None else min(stop, n)
        if start < 0:
            raise ValueError(f"start must be >= 0, got {start}")

        # A full window never needs more than window_size samples.
        end = min(start + self.window_size, stop)
        if end <= start:
            return np.empty(0, dtype=float)
        z = baseline.normalize(np.asarray(sequence[start:end], dtype=float)).tolist()

        unit = self.string_size     # weight of one sample
        capacity = self.window_size  # weight of one cell

        paa = np.empty(self.string_size, dtype=float)
        available = 0
        pos = 0
        pending = unit  # unconsumed weight of z[pos]
        while available < self.string_size and pos < len(z):
            total = 0.0
            filled = 0
            while filled < capacity and pos < len(z):
                w = min(pending, capacity - filled)
                total += w * z[pos]
                filled += w
                pending -= w
                if pending == 0:
                    pos += 1
                    pending = unit
            paa[available] = total / filled
            available += 1

        return paa[:available]

    def __repr__(self) -> str:
        return (f"FractionalPAA(window_size={self.window_size}, "
                f"string_size={self.string_size})")
