"""
BPSK over a single-block OFDM transform through flat Rayleigh fading + AWGN.
"""
from ofdmlink.chains.simulation import (
    SimulationConfig,
    SimulationResult,
    run_simulation,
    simulate_ber,
)
from ofdmlink.errors import InvalidInputError, LinkSimulationError, PipelineIntegrityError

__version__ = "0.1.0"

__all__ = [
    "SimulationConfig",
    "SimulationResult",
    "run_simulation",
    "simulate_ber",
    "InvalidInputError",
    "LinkSimulationError",
    "PipelineIntegrityError",
]
