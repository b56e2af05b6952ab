"""
mapping.py
BPSK mapper / hard-decision demapper.

Mapping (antipodal, unit energy):
  bit 0 -> -1 + 0j
  bit 1 -> +1 + 0j
"""
from __future__ import annotations

import numpy as np

from ofdmlink.errors import InvalidInputError


def _as_bit_array(bits: np.ndarray) -> np.ndarray:
    b = np.asarray(bits)
    if b.ndim > 1:
        raise InvalidInputError(f"Expected a 1D bit sequence, got shape {b.shape}.")
    b = b.reshape(-1)
    if b.size and not np.all((b == 0) | (b == 1)):
        bad = np.unique(b[(b != 0) & (b != 1)])
        raise InvalidInputError(f"Bits must be 0 or 1, found {bad.tolist()}.")
    return b.astype(np.int64)


def bpsk_modulate(bits: np.ndarray) -> np.ndarray:
    """Map bits {0,1} to BPSK symbols {-1,+1} (0->-1, 1->+1), imaginary part 0."""
    b0 = _as_bit_array(bits)
    I = 2 * b0 - 1
    return (I + 0j).astype(np.complex128)


def bpsk_demodulate(symbols: np.ndarray, decision_bias: float = 0.0) -> np.ndarray:
    """
    Hard decision on the real part:
        bit = 1 if Re(s) + decision_bias >= 0 else 0
    """
    syms = np.asarray(symbols, dtype=np.complex128)
    if syms.ndim > 1:
        raise InvalidInputError(f"Expected a 1D symbol sequence, got shape {syms.shape}.")
    if not np.isfinite(decision_bias):
        raise InvalidInputError(f"decision_bias must be finite, got {decision_bias}.")
    return (np.real(syms.reshape(-1)) + decision_bias >= 0).astype(np.uint8)