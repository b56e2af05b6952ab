"""
main.py
Run one BPSK/OFDM link over a flat Rayleigh + AWGN channel:
- Source bits (random, seeded if --seed is given)
- BPSK mapping (0 -> -1, 1 -> +1)
- One IFFT over the whole block, Rayleigh block fading, AWGN at --snr-db
- FFT, hard decision, BER
- Save plots: transmitted bits, decided bits, |received samples|, TX PSD
Optionally sweep BER over several SNR values (--sweep).
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import List

import matplotlib

# the driver only writes files; pick the headless backend before pyplot loads
matplotlib.use("Agg")

from ofdmlink import params
from ofdmlink.chains.simulation import SimulationConfig, run_simulation, simulate_ber
from ofdmlink.errors import PipelineIntegrityError
from ofdmlink.metrics.utils import (
    plot_ber_curve,
    plot_magnitudes,
    plot_psd,
    plot_series,
)

logger = logging.getLogger(__name__)


def parse_snr_list(s: str) -> List[float]:
    return [float(x) for x in s.split(",") if x.strip()]


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="BPSK over single-block OFDM through Rayleigh fading + AWGN")
    p.add_argument("--num-bits", type=int, default=params.DEFAULT_NUM_BITS, help="Number of bits per run")
    p.add_argument("--snr-db", type=float, default=params.DEFAULT_SNR_DB, help="SNR in dB")
    p.add_argument("--noise-floor-db", type=float, default=params.NOISE_FLOOR_DB, help="Noise reference level in dB")
    p.add_argument("--decision-bias", type=float, default=0.0, help="Offset added to Re(y) before the sign decision")
    p.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
    p.add_argument("--out-dir", type=Path, default=Path("results"), help="Directory for saved plots")
    p.add_argument("--no-plots", action="store_true", help="Skip saving plots")
    p.add_argument("--sweep", type=str, default=None, help="Comma-separated SNRs in dB for a BER sweep")
    p.add_argument("--trials", type=int, default=200, help="Runs per SNR point in the sweep")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = SimulationConfig(noise_floor_db=args.noise_floor_db, decision_bias=args.decision_bias)

    if args.snr_db < params.SNR_THRESHOLD_DB:
        logger.warning(
            "SNR %.1f dB is below the %.1f dB link threshold", args.snr_db, params.SNR_THRESHOLD_DB
        )

    try:
        res = run_simulation(args.num_bits, args.snr_db, seed=args.seed, config=cfg)
        ber_curve = None
        if args.sweep:
            snr_list = parse_snr_list(args.sweep)
            ber_curve = (snr_list, simulate_ber(snr_list, args.num_bits, args.trials, seed=args.seed, config=cfg))
    except PipelineIntegrityError as exc:
        logger.error("Pipeline integrity violated: %s", exc)
        return 1
    except ValueError as exc:
        # InvalidInputError, or a malformed --sweep list
        logger.error("Invalid input: %s", exc)
        return 2

    logger.info(
        "Bits: %d, SNR: %.1f dB, gain: %.3f%+.3fj, errors: %d, BER: %.4f",
        res.score.total,
        args.snr_db,
        res.channel_gain.real,
        res.channel_gain.imag,
        res.score.errors,
        res.ber,
    )

    if not args.no_plots:
        out = args.out_dir
        plot_series(res.tx_bits, "Transmitted Bits", out / "bits_plot_transmitted.png")
        plot_series(res.rx_bits, "Received Bits", out / "bits_plot_received.png")
        if res.rx_signal.size:
            plot_magnitudes(res.rx_signal, "Received Bit Magnitudes", out / "magnitudes_plot_received.png")
            plot_psd(
                res.tx_waveform,
                fs_hz=params.CHANNEL_BANDWIDTH_HZ,
                title="PSD (TX waveform)",
                filename=out / "psd_transmitted.png",
            )
        if ber_curve is not None:
            plot_ber_curve(
                ber_curve[0],
                ber_curve[1],
                title=f"BER vs SNR ({args.num_bits} bits, {args.trials} trials)",
                filename=out / "ber_curve.png",
            )

    return 0


if __name__ == "__main__":
    sys.exit(main())
