# receiver.py
from __future__ import annotations

import logging

import numpy as np

from ofdmlink.phy.mapping import bpsk_demodulate
from ofdmlink.phy.ofdm import SpectralTransform, DEFAULT_TRANSFORM

logger = logging.getLogger(__name__)


def rx_demodulate(
    rx_wave: np.ndarray, transform: SpectralTransform = DEFAULT_TRANSFORM
) -> np.ndarray:
    """Received time samples -> frequency-domain symbol estimates (FFT)."""
    rx_symbols = transform.forward(rx_wave)
    logger.debug("Demodulated symbols: %s", rx_symbols)
    return rx_symbols


def rx_recover_bits(
    rx_wave: np.ndarray,
    decision_bias: float = 0.0,
    transform: SpectralTransform = DEFAULT_TRANSFORM,
) -> tuple[np.ndarray, np.ndarray]:
    """
    rx_wave -> FFT -> BPSK hard decision

    No channel estimate is applied, so a fading gain with negative real part
    flips every decision in the block.

    Returns:
      rx_symbols: complex FFT output
      rx_bits:    uint8 decided bits
    """
    rx_symbols = rx_demodulate(rx_wave, transform=transform)
    rx_bits = bpsk_demodulate(rx_symbols, decision_bias=decision_bias)
    logger.debug("Decoded bits: %s", rx_bits)
    return rx_symbols, rx_bits
