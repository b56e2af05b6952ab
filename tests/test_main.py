"""Tests for the command-line driver and plot helpers."""

import os
from pathlib import Path
import subprocess
import sys

import numpy as np

import main
from ofdmlink.metrics.utils import plot_magnitudes, plot_series


def test_run_writes_plots(tmp_path: Path) -> None:
    rc = main.main(["--num-bits", "32", "--snr-db", "20", "--seed", "3", "--out-dir", str(tmp_path)])
    assert rc == 0
    for name in (
        "bits_plot_transmitted.png",
        "bits_plot_received.png",
        "magnitudes_plot_received.png",
        "psd_transmitted.png",
    ):
        assert (tmp_path / name).is_file()


def test_sweep_writes_ber_curve(tmp_path: Path) -> None:
    rc = main.main(
        ["--num-bits", "16", "--seed", "1", "--sweep", "0,10,20", "--trials", "3", "--out-dir", str(tmp_path)]
    )
    assert rc == 0
    assert (tmp_path / "ber_curve.png").is_file()


def test_no_plots(tmp_path: Path) -> None:
    assert main.main(["--num-bits", "8", "--seed", "1", "--no-plots", "--out-dir", str(tmp_path)]) == 0
    assert not any(tmp_path.iterdir())


def test_invalid_input_returns_2_and_writes_nothing(tmp_path: Path) -> None:
    assert main.main(["--num-bits", "-5", "--out-dir", str(tmp_path)]) == 2
    assert not any(tmp_path.iterdir())


def test_malformed_sweep_returns_2(tmp_path: Path) -> None:
    assert main.main(["--num-bits", "8", "--sweep", "0,abc", "--out-dir", str(tmp_path)]) == 2


def test_low_snr_warns(tmp_path: Path, caplog) -> None:
    main.main(["--num-bits", "8", "--snr-db", "0", "--seed", "1", "--no-plots", "--out-dir", str(tmp_path)])
    assert any("below" in r.getMessage() for r in caplog.records)


def test_plot_helpers_accept_zero_magnitudes(tmp_path: Path) -> None:
    out = plot_magnitudes(np.array([0j, 1 + 1j, 0.5j]), "mag", tmp_path / "mag.png")
    assert out.is_file()
    assert plot_series(np.array([0, 1, 1, 0]), "bits", tmp_path / "sub" / "bits.png").is_file()


def test_plot_module_keeps_callers_backend() -> None:
    """Importing the plot helpers must not switch the matplotlib backend."""
    code = "import matplotlib, ofdmlink.metrics.utils; print(matplotlib.get_backend())"
    out = subprocess.run(
        [sys.executable, "-c", code],
        cwd=Path(__file__).resolve().parents[1],
        env={**os.environ, "MPLBACKEND": "svg"},
        capture_output=True,
        text=True,
        check=True,
    )
    assert out.stdout.strip().lower() == "svg"
