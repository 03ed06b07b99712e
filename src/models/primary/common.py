"""
src/models/primary/common.py
Shared step for the primary methods: rank secondary candidates left over
after a single exclusion rule.
"""
from __future__ import annotations

from src.models.secondary.exclusion import ExclusionResult
from src.models.statistical.frequency_analyzer import frequency, rank_within
from src.models.types import DrawRecord
from src.utils.config import secondary_domain

SECONDARY_TOP_N = 5


def rank_secondary_candidates(window: list[DrawRecord], exclusion: ExclusionResult) -> list[int]:
    """
    Non-excluded secondary numbers ordered by frequency over `window`, top 5.
    An empty pool means the rule excludes nothing.
    """
    pool = [n for n in secondary_domain() if n not in exclusion.excluded]
    if not pool:
        pool = secondary_domain()
    freq = frequency(window, "secondary")
    return rank_within(pool, freq)[:SECONDARY_TOP_N]
