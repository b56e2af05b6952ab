"""
errors.py
Exception types raised by the link simulation.

InvalidInputError      -> bad caller input (negative bit count, non-binary bits, NaN SNR ...)
PipelineIntegrityError -> an internal invariant broke between stages (length mismatch).

Both carry `stage`, the pipeline stage that failed (None when raised outside a run).
"""
from __future__ import annotations


class LinkSimulationError(Exception):
    """Base class for all simulator errors."""

    def __init__(self, message: str, stage: str | None = None):
        super().__init__(message if stage is None else f"[{stage}] {message}")
        self.stage = stage


class InvalidInputError(LinkSimulationError, ValueError):
    pass


class PipelineIntegrityError(LinkSimulationError, RuntimeError):
    pass
