"""
src/utils/errors.py
Error taxonomy for the prediction engine and its collaborators.
"""
from __future__ import annotations


class PredictionError(Exception):
    """Base class for engine errors."""


class InsufficientHistoryError(PredictionError):
    """Fewer records than the engine needs. The only error shown to end users."""

    def __init__(self, available: int, required: int) -> None:
        self.available = available
        self.required = required
        super().__init__(
            f"Not enough draw history: {available} records available, at least {required} required."
        )


class SuggestionServiceError(PredictionError):
    """External suggestion call failed, timed out, or returned unusable data."""


class StoreNotConfiguredError(PredictionError):
    """Supabase credentials are missing."""
