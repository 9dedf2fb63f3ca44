"""Tests for cutpoint generation and symbol mapping."""

import numpy as np
import pytest
from scipy.stats import norm
from saxquant.exceptions import ConfigurationError
from saxquant.tokenizers.cutpoints import SENTINEL, SymbolMapper, gaussian_cutpoints


class TestGaussianCutpoints:
    """Test cases for gaussian_cutpoints."""

    @pytest.mark.parametrize("alphabet_size", [1, 2, 3, 5, 8, 26, 100])
    def test_shape_and_values(self, alphabet_size):
        cutpoints = gaussian_cutpoints(alphabet_size)

        assert len(cutpoints) == alphabet_size
        assert cutpoints[0] == np.finfo(float).min
        expected = norm.ppf(np.arange(1, alphabet_size) / alphabet_size)
        np.testing.assert_allclose(cutpoints[1:], expected, rtol=1e-12)
        assert np.all(np.diff(cutpoints) >= 0)

    def test_single_symbol(self):
        cutpoints = gaussian_cutpoints(1)
        np.testing.assert_array_equal(cutpoints, [SENTINEL])

    def test_quantile_spacing(self):
        """Cutpoints sit at equal probabilities."""
        cutpoints = gaussian_cutpoints(4)
        np.testing.assert_allclose(norm.cdf(cutpoints[1:]), [0.25, 0.5, 0.75], rtol=1e-10)
        assert cutpoints[2] == pytest.approx(0.0, abs=1e-12)

    def test_read_only(self):
        cutpoints = gaussian_cutpoints(5)
        with pytest.raises(ValueError):
            cutpoints[1] = 0.0

    def test_deterministic(self):
        np.testing.assert_array_equal(gaussian_cutpoints(7), gaussian_cutpoints(7))

    @pytest.mark.parametrize("alphabet_size", [0, -1])
    def test_invalid_size(self, alphabet_size):
        with pytest.raises(ConfigurationError):
            gaussian_cutpoints(alphabet_size)


class TestSymbolMapper:
    """Test cases for SymbolMapper class."""

    def test_initialization(self):
        mapper = SymbolMapper(alphabet_size=4)

        assert mapper.alphabet_size == 4
        assert len(mapper.cutpoints) == 4

    def test_encode_scalar(self):
        mapper = SymbolMapper(alphabet_size=4)

        assert mapper.encode_scalar(-10.0) == 0
        assert mapper.encode_scalar(10.0) == 3
        assert mapper.encode_scalar(0.0) == 2  # cutpoint equality counts

        for i, cutpoint in enumerate(mapper.cutpoints[1:], start=1):
            assert mapper.encode_scalar(cutpoint - 1e-6) == i - 1
            assert mapper.encode_scalar(cutpoint) == i
            assert mapper.encode_scalar(cutpoint + 1e-6) == i

    def test_count_definition(self):
        """Symbol is the number of cutpoints <= value, minus one."""
        mapper = SymbolMapper(alphabet_size=5)
        for value in np.linspace(-3, 3, 61):
            expected = int(np.sum(mapper.cutpoints <= value)) - 1
            assert mapper.encode_scalar(value) == expected

    def test_encode_batch_matches_scalar(self):
        mapper = SymbolMapper(alphabet_size=6)

        values = np.random.default_rng(0).standard_normal(200) * 2
        symbols = mapper.encode_batch(values)

        expected = [mapper.encode_scalar(v) for v in values]
        np.testing.assert_array_equal(symbols, expected)
        assert symbols.dtype == np.int64

    def test_encode_multidimensional(self):
        mapper = SymbolMapper(alphabet_size=4)
        Z = np.random.default_rng(1).standard_normal((5, 3))
        assert mapper.encode_batch(Z).shape == Z.shape

    def test_monotonic(self):
        mapper = SymbolMapper(alphabet_size=9)
        symbols = mapper.encode_batch(np.linspace(-5, 5, 500))
        assert np.all(np.diff(symbols) >= 0)
        assert symbols[0] == 0
        assert symbols[-1] == 8

    def test_non_finite_values_stay_in_alphabet(self):
        mapper = SymbolMapper(alphabet_size=5)
        values = np.array([-np.inf, np.inf, np.nan])

        np.testing.assert_array_equal(mapper.encode_batch(values), [0, 4, 4])
        assert [mapper.encode_scalar(v) for v in values] == [0, 4, 4]

    def test_single_symbol_alphabet(self):
        mapper = SymbolMapper(alphabet_size=1)
        np.testing.assert_array_equal(mapper.encode_batch([-1e308, 0.0, 1e308]), [0, 0, 0])

    def test_decode_scalar(self):
        mapper = SymbolMapper(alphabet_size=4)

        for symbol in range(4):
            z = mapper.decode_scalar(symbol)
            assert mapper.encode_scalar(z) == symbol

        assert mapper.decode_scalar(0) == pytest.approx(norm.ppf(0.125))

    def test_decode_batch(self):
        mapper = SymbolMapper(alphabet_size=4)

        symbols = np.array([0, 1, 2, 3, 1, 0])
        z_scores = mapper.decode_batch(symbols)

        expected = [mapper.decode_scalar(s) for s in symbols]
        np.testing.assert_array_equal(z_scores, expected)

    def test_decode_errors(self):
        mapper = SymbolMapper(alphabet_size=4)

        with pytest.raises(ValueError):
            mapper.decode_scalar(-1)
        with pytest.raises(ValueError):
            mapper.decode_scalar(4)

    def test_get_bin_edges(self):
        mapper = SymbolMapper(alphabet_size=4)

        edges = mapper.get_bin_edges()

        assert len(edges) == 5
        assert edges[0] == -np.inf
        assert edges[-1] == np.inf
        np.testing.assert_array_equal(edges[1:-1], mapper.cutpoints[1:])

    def test_uniform_distribution_property(self):
        """Standard normal samples are spread evenly over the alphabet."""
        mapper = SymbolMapper(alphabet_size=8)

        z_samples = np.random.default_rng(42).standard_normal(20000)
        symbols = mapper.encode_batch(z_samples)

        freqs = np.bincount(symbols, minlength=mapper.alphabet_size) / len(z_samples)
        for freq in freqs:
            assert abs(freq - 1.0 / mapper.alphabet_size) < 0.02

    def test_repr(self):
        mapper = SymbolMapper(alphabet_size=16)
        assert "SymbolMapper" in repr(mapper)
        assert "16" in repr(mapper)
