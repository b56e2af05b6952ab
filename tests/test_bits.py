"""Tests for the random bit source."""

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ofdmlink.errors import InvalidInputError
from ofdmlink.phy.bits import generate_bits


@settings(max_examples=50)
@given(n=st.integers(min_value=0, max_value=2000), seed=st.integers(min_value=0, max_value=2**32 - 1))
def test_length_and_alphabet(n: int, seed: int) -> None:
    """Every draw has the requested length and only contains 0/1."""
    bits = generate_bits(n, np.random.default_rng(seed))
    assert bits.shape == (n,)
    assert bits.dtype == np.uint8
    assert np.all((bits == 0) | (bits == 1))


def test_zero_bits_is_empty(rng: np.random.Generator) -> None:
    assert generate_bits(0, rng).size == 0


def test_seeded_draws_repeat() -> None:
    a = generate_bits(32, np.random.default_rng(5))
    b = generate_bits(32, np.random.default_rng(5))
    np.testing.assert_array_equal(a, b)


def test_roughly_balanced(rng: np.random.Generator) -> None:
    bits = generate_bits(100_000, rng)
    assert abs(bits.mean() - 0.5) < 0.01


@pytest.mark.parametrize("bad", [-1, -100])
def test_negative_count_rejected(rng: np.random.Generator, bad: int) -> None:
    with pytest.raises(InvalidInputError):
        generate_bits(bad, rng)


@pytest.mark.parametrize("bad", [2.5, "8", True, None])
def test_non_integer_count_rejected(rng: np.random.Generator, bad) -> None:
    with pytest.raises(InvalidInputError):
        generate_bits(bad, rng)


def test_numpy_integer_count_accepted(rng: np.random.Generator) -> None:
    assert generate_bits(np.int64(4), rng).size == 4
