"""Window configuration for SAX quantizers."""

from __future__ import annotations

import numbers
from dataclasses import dataclass

from .exceptions import ConfigurationError


def _check_positive_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be > 0, got {value}")
    return int(value)


@dataclass(frozen=True)
class SaxConfig:
    """Immutable sizes of a SAX quantizer.

    Parameters
    ----------
    window_size : int
        Number of raw samples covered by one sliding window.
    string_size : int
        Number of symbols produced per window. May exceed ``window_size``.
    alphabet_size : int
        Number of distinct symbols.
    """

    window_size: int
    string_size: int
    alphabet_size: int

    def __post_init__(self):
        for name in ("window_size", "string_size", "alphabet_size"):
            object.__setattr__(self, name, _check_positive_int(name, getattr(self, name)))

    @property
    def ratio(self) -> float:
        """Nominal compression ratio (window_size / string_size)."""
        return self.window_size / self.string_size
