"""
transmitter.py
TX chain:
  random bits -> BPSK map -> OFDM mod (one IFFT over the whole block)
"""

from __future__ import annotations

import logging

import numpy as np

from ofdmlink.errors import InvalidInputError
from ofdmlink.phy.bits import generate_bits, validate_count
from ofdmlink.phy.mapping import bpsk_modulate
from ofdmlink.phy.ofdm import SpectralTransform, DEFAULT_TRANSFORM

logger = logging.getLogger(__name__)


def build_tx_chain(
    num_bits: int,
    rng: np.random.Generator,
    info_bits_in: np.ndarray | None = None,
):
    """
    Builds the TX symbol block.

    If info_bits_in is given it replaces the random source and must hold
    exactly num_bits values in a 1D array.

    Returns:
      info_bits: (num_bits,) uint8
      symbols:   (num_bits,) complex BPSK symbols
    """
    n = validate_count(num_bits)
    if info_bits_in is None:
        info_bits = generate_bits(n, rng)
    else:
        info_bits = np.asarray(info_bits_in)
        if info_bits.size != n:
            raise InvalidInputError(
                f"Payload holds {info_bits.size} bits but num_bits is {n}."
            )

    symbols = bpsk_modulate(info_bits)
    info_bits = info_bits.reshape(-1).astype(np.uint8)
    logger.debug("Generated bits: %s", info_bits)
    logger.debug("BPSK symbols: %s", symbols)
    return info_bits, symbols


def build_tx_waveform(
    symbols: np.ndarray, transform: SpectralTransform = DEFAULT_TRANSFORM
) -> np.ndarray:
    """Time-domain OFDM waveform for one symbol block."""
    tx_wave = transform.inverse(symbols)
    logger.debug("OFDM symbols: %s", tx_wave)
    return tx_wave
