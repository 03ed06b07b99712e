"""
src/models/primary/hot_cold_warm.py
Hot/warm/cold tiers over 50 draws with an adaptive tier ratio.

Over the last 10 draws: a hot hit rate above 45% switches to 3:2:1, a cold
hit rate above 35% to 1:2:3, otherwise 2:2:2. Cold picks use inverted
weights so the coldest numbers are most likely.
Secondary: exclude the current calendar month's number.
"""
from __future__ import annotations

import random
from datetime import datetime

from src.models.primary.common import rank_secondary_candidates
from src.models.secondary.exclusion import month
from src.models.statistical.frequency_analyzer import Tiers, classify, frequency, rank_within
from src.models.statistical.selection import fill_primary_set, validate_primary_set, weighted_sample
from src.models.types import DrawRecord, MethodResult

NAME = "hot_cold_warm"

WINDOW = 50
FILL_WINDOW = 100
TREND_WINDOW = 10
HOT_THRESHOLD = 10
COLD_THRESHOLD = 4
HOT_RATE = 0.45
COLD_RATE = 0.35


def tier_ratio(recent: list[DrawRecord], tiers: Tiers) -> tuple[int, int, int]:
    """(hot, warm, cold) pick counts from recent hit rates."""
    total = sum(len(r.primary) for r in recent)
    if not total:
        return 2, 2, 2
    hot_hits = sum(1 for r in recent for n in r.primary if n in tiers.hot)
    cold_hits = sum(1 for r in recent for n in r.primary if n in tiers.cold)
    if hot_hits / total > HOT_RATE:
        return 3, 2, 1
    if cold_hits / total > COLD_RATE:
        return 1, 2, 3
    return 2, 2, 2


def hot_cold_warm(records: list[DrawRecord], rng: random.Random, now: datetime) -> MethodResult:
    window = records[-WINDOW:]
    freq = frequency(window, "primary")
    tiers = classify(freq, HOT_THRESHOLD, COLD_THRESHOLD)

    hot_n, warm_n, cold_n = tier_ratio(records[-TREND_WINDOW:], tiers)
    selected: list[int] = []

    hot = rank_within(tiers.hot, freq)
    if hot_n and hot:
        selected += weighted_sample(hot, [max(1, freq[n]) for n in hot], min(hot_n, len(hot)), rng)

    warm = [n for n in rank_within(tiers.warm, freq) if n not in selected]
    if warm_n and warm:
        selected += weighted_sample(warm, [max(1, freq[n]) for n in warm], min(warm_n, len(warm)), rng)

    cold = [n for n in rank_within(tiers.cold, freq) if n not in selected]
    if cold_n and cold:
        peak = max(freq[n] for n in cold)
        selected += weighted_sample(cold, [max(1, peak - freq[n] + 2) for n in cold], min(cold_n, len(cold)), rng)

    overall = frequency(records[-FILL_WINDOW:], "primary")
    primary = fill_primary_set(validate_primary_set(selected), overall, rng)

    if hot_n == 3:
        trend = "hot numbers active"
    elif cold_n == 3:
        trend = "cold numbers returning"
    else:
        trend = "balanced"
    exclusion = month(records, now)
    return MethodResult(
        name=NAME,
        primary=primary,
        secondary_candidates=rank_secondary_candidates(window, exclusion),
        rationale=(
            f"Last {len(window)} draws: hot {len(tiers.hot)} (≥{HOT_THRESHOLD}), warm {len(tiers.warm)}, "
            f"cold {len(tiers.cold)} (≤{COLD_THRESHOLD}). Trend: {trend}, ratio {hot_n}:{warm_n}:{cold_n}. "
            f"Picked hot {[n for n in primary if n in tiers.hot]}, warm {[n for n in primary if n in tiers.warm]}, "
            f"cold {[n for n in primary if n in tiers.cold]}. {exclusion.rationale}."
        ),
    )
