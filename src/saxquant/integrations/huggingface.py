"""Hugging Face Datasets integration for SAXQuant quantizers.

Provides helpers for quantizing time series stored in HF Datasets,
including Features definitions and dataset mapping functions.
"""

from typing import Any, Callable, Dict

import numpy as np

try:
    from datasets import Features, Sequence, Value
    HAS_DATASETS = True
except ImportError:
    HAS_DATASETS = False

from ..tokenizers.sax import Sax


def symbols_feature(name: str = "symbols") -> "Features":
    """Create HF Features schema for quantized time series.

    Parameters
    ----------
    name : str
        Name of the symbols column.

    Returns
    -------
    Features
        HuggingFace Features object.
    """
    if not HAS_DATASETS:
        raise ImportError("datasets package required for HF integration")

    return Features({name: Sequence(Value("int32"))})


def timeseries_symbols_feature(
    timeseries_name: str = "timeseries",
    symbols_name: str = "symbols"
) -> "Features":
    """Create Features schema for both raw timeseries and symbols.

    Parameters
    ----------
    timeseries_name : str
        Name of the raw timeseries column.
    symbols_name : str
        Name of the symbols column.

    Returns
    -------
    Features
        Combined Features object.
    """
    if not HAS_DATASETS:
        raise ImportError("datasets package required for HF integration")

    return Features({
        timeseries_name: Sequence(Value("float32")),
        symbols_name: Sequence(Value("int32"))
    })


def create_quantize_map_fn(
    quantizer: Sax,
    input_column: str = "timeseries",
    output_column: str = "symbols",
    reduce: bool = True
) -> Callable:
    """Create a batched map function that quantizes every series.

    An untrained quantizer is trained on the first series it sees and keeps
    that baseline for the rest of the dataset.

    Parameters
    ----------
    quantizer : Sax
        Quantizer instance.
    input_column : str
        Name of input column containing time series data.
    output_column : str
        Name of output column to store symbols.
    reduce : bool
        Apply numerosity reduction.

    Returns
    -------
    Callable
        Map function suitable for dataset.map(batched=True).
    """
    def quantize_fn(batch: Dict[str, Any]) -> Dict[str, Any]:
        batch_symbols = []
        for ts in batch[input_column]:
            symbols, _ = quantizer.quantize(np.asarray(ts, dtype=float), reduce=reduce)
            batch_symbols.append(symbols.tolist())
        return {**batch, output_column: batch_symbols}

    return quantize_fn


class DatasetQuantizer:
    """High-level wrapper for quantizing HF datasets.

    Parameters
    ----------
    quantizer : Sax
        Quantizer instance.
    input_column : str
        Input column name.
    output_column : str
        Output column name.
    reduce : bool
        Apply numerosity reduction.
    """

    def __init__(
        self,
        quantizer: Sax,
        input_column: str = "timeseries",
        output_column: str = "symbols",
        reduce: bool = True
    ):
        if not HAS_DATASETS:
            raise ImportError("datasets package required for DatasetQuantizer")

        self.quantizer = quantizer
        self.input_column = input_column
        self.output_column = output_column
        self.reduce = reduce

    def fit(self, dataset) -> Sax:
        """Train the quantizer baseline on every series of `dataset`."""
        series = [np.asarray(ts, dtype=float).ravel() for ts in dataset[self.input_column]]
        samples = np.concatenate(series) if series else np.empty(0, dtype=float)
        self.quantizer.train(samples)
        return self.quantizer

    def fit_and_transform(self, dataset, batch_size: int = 1000):
        """Train on the whole dataset, then quantize it.

        Parameters
        ----------
        dataset : Dataset
            HuggingFace dataset.
        batch_size : int
            Batch size for mapping.

        Returns
        -------
        Dataset
            Dataset with an added symbols column.
        """
        self.fit(dataset)
        return self.transform(dataset, batch_size=batch_size)

    def transform(self, dataset, batch_size: int = 1000):
        """Quantize dataset using the trained baseline.

        Parameters
        ----------
        dataset : Dataset
            HuggingFace dataset.
        batch_size : int
            Batch size.

        Returns
        -------
        Dataset
            Dataset with an added symbols column.
        """
        if not self.quantizer.is_trained:
            raise ValueError("Quantizer not trained. Use fit_and_transform() first.")

        map_fn = create_quantize_map_fn(
            self.quantizer,
            self.input_column,
            self.output_column,
            reduce=self.reduce
        )

        return dataset.map(
            map_fn,
            batched=True,
            batch_size=batch_size,
            desc="Quantizing time series"
        )
