"""
channel.py
Flat (block) fading and additive noise channels.

RayleighFadingChannel:
  y[n] = g * x[n],  g = N(0,1) + j N(0,1)  drawn once per call
  |g| is Rayleigh distributed, arg(g) is uniform.

AWGNChannel:
  y[n] = x[n] + w[n],  w[n] ~ CN(0, P_n)
  P_n = 10^((noise_floor_db - snr_db) / 10)
  Real and imaginary parts each carry P_n / 2.

Every channel owns its numpy Generator, so independent runs never share
random state unless the caller hands them the same generator.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging

import numpy as np

from ofdmlink import params
from ofdmlink.errors import InvalidInputError

logger = logging.getLogger(__name__)


def noise_power_from_snr(snr_db: float, noise_floor_db: float = params.NOISE_FLOOR_DB) -> float:
    """
    Linear noise power P_n = 10^((noise_floor_db - snr_db) / 10).

    SNR values whose power overflows to inf or underflows to 0 in float64
    are rejected.
    """
    if not np.isfinite(snr_db):
        raise InvalidInputError(f"snr_db must be finite, got {snr_db}.")
    if not np.isfinite(noise_floor_db):
        raise InvalidInputError(f"noise_floor_db must be finite, got {noise_floor_db}.")
    with np.errstate(over="ignore", under="ignore"):
        p = float(np.power(10.0, (float(noise_floor_db) - float(snr_db)) / 10.0))
    if not np.isfinite(p) or p <= 0.0:
        raise InvalidInputError(
            f"snr_db={snr_db} with noise_floor_db={noise_floor_db} gives a noise power "
            f"outside float64 range ({p})."
        )
    return p


def _as_signal(x: np.ndarray) -> np.ndarray:
    x = np.asarray(x, dtype=np.complex128)
    if x.ndim > 1:
        raise InvalidInputError(f"Expected a 1D signal, got shape {x.shape}.")
    return x.reshape(-1)


@dataclass
class FixedGainChannel:
    """
    Deterministic flat channel: y = gain * x.
    gain=1 gives the ideal (identity) channel.
    """

    gain: complex = 1.0 + 0j

    def apply_with_gain(self, x: np.ndarray) -> tuple[np.ndarray, complex]:
        x = _as_signal(x)
        g = complex(self.gain)
        return x * g, g

    def __call__(self, x: np.ndarray) -> np.ndarray:
        return self.apply_with_gain(x)[0]


@dataclass
class RayleighFadingChannel:
    """
    Flat Rayleigh block fading: one complex gain per call, applied to every sample.
    """

    rng: np.random.Generator = field(default_factory=np.random.default_rng)

    def draw_gain(self) -> complex:
        re, im = self.rng.standard_normal(2)
        return complex(re, im)

    def apply_with_gain(self, x: np.ndarray) -> tuple[np.ndarray, complex]:
        """
        Returns (faded signal, gain used). A new gain is drawn on every call.
        """
        x = _as_signal(x)
        g = self.draw_gain()
        logger.debug("Rayleigh gain g=%s (|g|=%.4f)", g, abs(g))
        return x * g, g

    def __call__(self, x: np.ndarray) -> np.ndarray:
        return self.apply_with_gain(x)[0]


@dataclass
class AWGNChannel:
    """
    Complex AWGN at a given SNR relative to a fixed noise floor.
    There is no noiseless mode: make results reproducible by seeding rng.
    """

    snr_db: float
    noise_floor_db: float = params.NOISE_FLOOR_DB
    rng: np.random.Generator = field(default_factory=np.random.default_rng)

    def __post_init__(self):
        # validates both values up front
        noise_power_from_snr(self.snr_db, self.noise_floor_db)

    @property
    def noise_power(self) -> float:
        return noise_power_from_snr(self.snr_db, self.noise_floor_db)

    def noise(self, n: int) -> np.ndarray:
        sigma = np.sqrt(self.noise_power / 2.0)
        return sigma * (self.rng.standard_normal(n) + 1j * self.rng.standard_normal(n))

    def __call__(self, x: np.ndarray) -> np.ndarray:
        x = _as_signal(x)
        logger.debug("AWGN snr=%.2f dB, noise_power=%.3e", self.snr_db, self.noise_power)
        return x + self.noise(x.size)