"""
ofdm.py
Single-block OFDM transform: IFFT at the transmitter, FFT at the receiver.

The whole symbol vector is one transform (no subcarrier map, no CP).
Normalization follows numpy's default "backward" convention:
  inverse: x[n] = (1/N) sum_k X[k] e^{+j2pi kn/N}
  forward: X[k] =       sum_n x[n] e^{-j2pi kn/N}
so forward(inverse(X)) == X up to rounding. np.fft handles any N (not only 2^m).
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ofdmlink.errors import InvalidInputError


def _as_block(x: np.ndarray) -> np.ndarray:
    x = np.asarray(x, dtype=np.complex128)
    if x.ndim > 1:
        raise InvalidInputError(f"Expected a 1D symbol block, got shape {x.shape}.")
    return x.reshape(-1)


@dataclass(frozen=True)
class SpectralTransform:
    """
    Paired DFT / inverse DFT over a full block.
    Only `inverse` applies the 1/N scaling.
    """

    def inverse(self, X: np.ndarray) -> np.ndarray:
        """Frequency -> time (transmit-side synthesis)."""
        X = _as_block(X)
        if X.size == 0:
            return X.copy()
        return np.fft.ifft(X)

    def forward(self, x: np.ndarray) -> np.ndarray:
        """Time -> frequency (receive-side analysis)."""
        x = _as_block(x)
        if x.size == 0:
            return x.copy()
        return np.fft.fft(x)


DEFAULT_TRANSFORM = SpectralTransform()


def ofdm_modulate(symbols: np.ndarray) -> np.ndarray:
    """OFDM modulation via IFFT (includes 1/N)."""
    return DEFAULT_TRANSFORM.inverse(symbols)


def ofdm_demodulate(samples: np.ndarray) -> np.ndarray:
    """OFDM demodulation via FFT (inverse of ofdm_modulate)."""
    return DEFAULT_TRANSFORM.forward(samples)
