"""
utils.py
Plot helpers. Each function draws one figure, saves it to `filename` and
closes it; nothing here feeds back into the simulation.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt
from scipy.signal import welch

logger = logging.getLogger(__name__)


def _save(fig, filename: str | Path, dpi: int = 200) -> Path:
    out = Path(filename)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    logger.info("Saved plot %s", out)
    return out


def plot_series(values: np.ndarray, title: str, filename: str | Path) -> Path:
    """
    Line plot of a real-valued series against its index (e.g. a bit stream).
    """
    y = np.asarray(values, dtype=float).reshape(-1)
    fig = plt.figure(figsize=(4, 4))
    plt.plot(np.arange(y.size), y, linewidth=1, label=title)
    plt.xlabel("Bit Index")
    plt.ylabel("Bit Value")
    plt.title(title)
    plt.legend()
    return _save(fig, filename)


def plot_magnitudes(samples: np.ndarray, title: str, filename: str | Path) -> Path:
    """
    |x[n]| on a log axis. Zero-magnitude samples cannot be shown on a log
    scale and are masked out.
    """
    mag = np.abs(np.asarray(samples, dtype=np.complex128).reshape(-1))
    mag = np.ma.masked_less_equal(mag, 0.0)
    fig = plt.figure(figsize=(6, 6))
    plt.plot(np.arange(mag.size), mag, linewidth=1, label="|rx|")
    plt.yscale("log")
    plt.grid(True, which="both")
    plt.xlabel("Point Index")
    plt.ylabel("Magnitude (log scale)")
    plt.title(title)
    plt.legend()
    return _save(fig, filename)


def plot_psd(x: np.ndarray, fs_hz: float, title: str, filename: str | Path) -> Path:
    """Two-sided Welch PSD of a complex baseband block."""
    x = np.asarray(x, dtype=np.complex128).reshape(-1)
    f, Pxx = welch(x, fs=fs_hz, nperseg=min(256, len(x)), return_onesided=False)
    f = np.fft.fftshift(f)
    Pxx = np.fft.fftshift(Pxx)
    fig = plt.figure()
    plt.plot(f / 1e6, 10 * np.log10(Pxx + 1e-30))
    plt.grid(True)
    plt.xlabel("Frequency (MHz)")
    plt.ylabel("PSD (dB/Hz)")
    plt.title(title)
    return _save(fig, filename)


def plot_ber_curve(
    snr_dbs: np.ndarray, ber: np.ndarray, title: str, filename: str | Path
) -> Path:
    snr_dbs = np.asarray(snr_dbs, dtype=float).reshape(-1)
    ber = np.asarray(ber, dtype=float).reshape(-1)
    fig = plt.figure()
    # zero BER points vanish on a log axis
    plt.semilogy(snr_dbs, np.ma.masked_less_equal(ber, 0.0), marker="o", label="simulated")
    plt.grid(True, which="both")
    plt.xlabel("SNR (dB)")
    plt.ylabel("BER")
    plt.title(title)
    plt.legend()
    return _save(fig, filename)
