"""
bits.py
Random source bits (Bernoulli(0.5)).
"""
from __future__ import annotations

import numbers

import numpy as np

from ofdmlink.errors import InvalidInputError


def validate_count(value, name: str = "num_bits", minimum: int = 0) -> int:
    """Integer count >= minimum, else InvalidInputError (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInputError(f"{name} must be an integer, got {value!r}.")
    if value < minimum:
        raise InvalidInputError(f"{name} must be >= {minimum}, got {value}.")
    return int(value)


def generate_bits(num_bits: int, rng: np.random.Generator) -> np.ndarray:
    """
    Draw num_bits independent fair bits from rng.

    Returns: uint8 array of 0/1, length num_bits (empty for num_bits == 0).
    """
    n = validate_count(num_bits)
    return rng.integers(0, 2, size=n, dtype=np.uint8)
