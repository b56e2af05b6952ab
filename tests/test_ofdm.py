"""Tests for the single-block IFFT/FFT transform pair."""

import numpy as np
import pytest
from hypothesis import given
from hypothesis import strategies as st

from ofdmlink.errors import InvalidInputError
from ofdmlink.phy.ofdm import SpectralTransform, ofdm_demodulate, ofdm_modulate

finite_complex = st.complex_numbers(max_magnitude=1e6, allow_nan=False, allow_infinity=False)


def _dft_matrix(n: int) -> np.ndarray:
    k = np.arange(n)
    return np.exp(-2j * np.pi * np.outer(k, k) / n)


@given(st.lists(finite_complex, min_size=1, max_size=96))
def test_forward_inverse_roundtrip(values: list) -> None:
    """forward(inverse(x)) reproduces x to floating-point accuracy."""
    x = np.array(values, dtype=np.complex128)
    tr = SpectralTransform()
    y = tr.forward(tr.inverse(x))
    assert y.size == x.size
    scale = max(1.0, float(np.max(np.abs(x))))
    np.testing.assert_allclose(y, x, rtol=0, atol=1e-9 * scale)


@pytest.mark.parametrize("n", [1, 3, 7, 12, 100])
def test_matches_dft_definition_for_any_length(n: int, rng: np.random.Generator) -> None:
    """Lengths need not be powers of two; only the inverse carries 1/N."""
    X = rng.standard_normal(n) + 1j * rng.standard_normal(n)
    W = _dft_matrix(n)
    np.testing.assert_allclose(ofdm_demodulate(X), W @ X, atol=1e-9)
    np.testing.assert_allclose(ofdm_modulate(X), np.conj(W) @ X / n, atol=1e-9)


def test_bpsk_block_example() -> None:
    """X = [-1, 1, -1, 1] -> x = [0, 0, -1, 0] with the 1/N on the IFFT."""
    x = ofdm_modulate(np.array([-1, 1, -1, 1], dtype=np.complex128))
    np.testing.assert_allclose(x, [0, 0, -1, 0], atol=1e-12)


def test_normalization_convention() -> None:
    n = 8
    np.testing.assert_allclose(ofdm_modulate(np.ones(n)), np.eye(n)[0], atol=1e-12)
    np.testing.assert_allclose(ofdm_demodulate(np.eye(n)[0]), np.ones(n), atol=1e-12)


def test_empty_block() -> None:
    assert ofdm_modulate(np.array([], dtype=np.complex128)).size == 0
    assert ofdm_demodulate(np.array([], dtype=np.complex128)).size == 0


def test_matrix_rejected() -> None:
    with pytest.raises(InvalidInputError):
        ofdm_modulate(np.zeros((4, 4)))
