"""
params.py
Link parameters for the BPSK / single-transform OFDM simulation.
The "OFDM" step is one spectral transform over the whole bit block, so
NUM_SUBCARRIERS is informational only (it does not split the block).
"""
from __future__ import annotations

# ----------------------------
# RF link budget
# ----------------------------
CHANNEL_BANDWIDTH_HZ: float = 10e6
CARRIER_FREQUENCY_HZ: float = 2e9
TX_POWER_DBM: float = 20.0

# Reference power level for SNR -> noise power conversion (dB).
NOISE_FLOOR_DB: float = -90.0

# Below this SNR the driver warns that the link is unreliable.
SNR_THRESHOLD_DB: float = 10.0

NUM_SUBCARRIERS: int = 64

# ----------------------------
# Driver defaults
# ----------------------------
DEFAULT_NUM_BITS: int = 100
DEFAULT_SNR_DB: float = 20.0
