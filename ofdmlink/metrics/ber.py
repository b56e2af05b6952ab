"""
ber.py
Bit error counting.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ofdmlink.errors import PipelineIntegrityError


@dataclass(frozen=True)
class BitErrorScore:
    errors: int
    total: int

    @property
    def ber(self) -> float:
        """Bit error rate; 0.0 for an empty block."""
        if self.total == 0:
            return 0.0
        return self.errors / self.total


def score_bits(tx_bits: np.ndarray, rx_bits: np.ndarray) -> BitErrorScore:
    """
    Count positions where tx_bits and rx_bits differ.

    Unequal lengths mean the pipeline dropped or invented samples somewhere,
    so this raises PipelineIntegrityError rather than truncating.
    """
    tx = np.asarray(tx_bits).reshape(-1)
    rx = np.asarray(rx_bits).reshape(-1)
    if tx.size != rx.size:
        raise PipelineIntegrityError(
            f"Bit sequences differ in length: transmitted {tx.size}, received {rx.size}.",
            stage="error_scoring",
        )
    errors = int(np.count_nonzero(tx.astype(np.int64) != rx.astype(np.int64)))
    return BitErrorScore(errors=errors, total=int(tx.size))
