"""SAXQuant: Symbolic Aggregate approXimation for Time Series.

A lightweight library for turning real-valued time series into discrete
symbol sequences using fractional-window piecewise aggregation and
equal-probability Gaussian binning.
"""

__version__ = "0.1.0"

from .config import SaxConfig
from .exceptions import ConfigurationError, EmptyInputError, SaxError
from .tokenizers.cutpoints import SymbolMapper, gaussian_cutpoints
from .tokenizers.paa import FractionalPAA
from .tokenizers.sax import Sax, sax_quantize
from .utils.running_stats import BaselineStatistics, RunningStats, train_baseline

__all__ = [
    "Sax",
    "SaxConfig",
    "FractionalPAA",
    "SymbolMapper",
    "gaussian_cutpoints",
    "train_baseline",
    "BaselineStatistics",
    "RunningStats",
    "sax_quantize",
    "SaxError",
    "ConfigurationError",
    "EmptyInputError",
]
