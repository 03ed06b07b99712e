"""
src/models/primary/decision_tree.py
Frequency tiers + dominant odd/even ratio + sum-range fit.

1. Tier numbers by count over the last 100 draws (hot ≥ 8, cold ≤ 4).
2. Target the most common odd:even ratio of the last 30 draws.
3. Accept a pick whose sum lies within mean ± 15 of the last 50 sums,
   else keep the closest attempt.
Secondary: exclude numbers ending in tail(S + 6).
"""
from __future__ import annotations

import random
from datetime import datetime

from src.models.primary.common import rank_secondary_candidates
from src.models.secondary.exclusion import plus_six
from src.models.statistical.distribution import mode_pattern, parity_ratio, round_half_up, sum_stats
from src.models.statistical.frequency_analyzer import classify, frequency
from src.models.statistical.selection import fill_primary_set, random_pick, validate_primary_set
from src.models.types import DrawRecord, MethodResult

NAME = "decision_tree"

FREQ_WINDOW = 100
SUM_WINDOW = 50
PARITY_WINDOW = 30
HOT_THRESHOLD = 8
COLD_THRESHOLD = 4
SUM_MARGIN = 15
MAX_ATTEMPTS = 200


def _tier_counts(rng: random.Random) -> tuple[int, int, int]:
    """Hot-first split: usually 3 hot, sometimes 4 or 2."""
    if rng.random() < 0.6:
        hot = 3
    else:
        hot = 4 if rng.random() < 0.5 else 2
    warm = min(6 - hot, 2 if rng.random() < 0.5 else 1)
    return hot, warm, 6 - hot - warm


def _split(nums: list[int]) -> tuple[list[int], list[int]]:
    return [n for n in nums if n % 2 == 1], [n for n in nums if n % 2 == 0]


def decision_tree(records: list[DrawRecord], rng: random.Random, now: datetime) -> MethodResult:
    window = records[-FREQ_WINDOW:]
    freq = frequency(window, "primary")

    avg_sum, _ = sum_stats(records[-SUM_WINDOW:])
    sum_min, sum_max = avg_sum - SUM_MARGIN, avg_sum + SUM_MARGIN

    (target_odd, target_even), _ = mode_pattern(parity_ratio(r.primary) for r in records[-PARITY_WINDOW:])

    tiers = classify(freq, HOT_THRESHOLD, COLD_THRESHOLD)
    hot_odd, hot_even = _split(tiers.hot)
    warm_odd, warm_even = _split(tiers.warm)
    cold_odd, cold_even = _split(tiers.cold)

    best: list[int] = []
    best_diff = float("inf")

    for _ in range(MAX_ATTEMPTS):
        hot_n, warm_n, cold_n = _tier_counts(rng)
        odd_needed, even_needed = target_odd, target_even
        selected: list[int] = []

        h_odd = min(round_half_up(hot_n * target_odd / 6), len(hot_odd), odd_needed)
        h_even = min(hot_n - h_odd, len(hot_even), even_needed)
        selected += random_pick(hot_odd, h_odd, rng) + random_pick(hot_even, h_even, rng)
        odd_needed -= h_odd
        even_needed -= h_even

        avail_odd = [n for n in warm_odd if n not in selected]
        avail_even = [n for n in warm_even if n not in selected]
        w_odd = min(
            round_half_up(warm_n * odd_needed / max(1, odd_needed + even_needed)),
            len(avail_odd),
            odd_needed,
        )
        w_even = min(warm_n - w_odd, len(avail_even), even_needed)
        selected += random_pick(avail_odd, w_odd, rng) + random_pick(avail_even, w_even, rng)
        odd_needed -= w_odd
        even_needed -= w_even

        if cold_n > 0:
            avail_odd = [n for n in cold_odd if n not in selected]
            avail_even = [n for n in cold_even if n not in selected]
            selected += random_pick(avail_odd, min(odd_needed, len(avail_odd)), rng)
            selected += random_pick(avail_even, min(even_needed, len(avail_even)), rng)

        filled = fill_primary_set(validate_primary_set(selected), freq, rng)
        total = sum(filled)
        if sum_min <= total <= sum_max:
            best = filled
            break
        diff = abs(total - avg_sum)
        if diff < best_diff:
            best_diff = diff
            best = filled

    primary = fill_primary_set(best, freq, rng)

    exclusion = plus_six(records, now)
    return MethodResult(
        name=NAME,
        primary=primary,
        secondary_candidates=rank_secondary_candidates(window, exclusion),
        rationale=(
            f"Last {len(window)} draws tiered into hot {len(tiers.hot)} / warm {len(tiers.warm)} / "
            f"cold {len(tiers.cold)}. Sum mean over {SUM_WINDOW} draws {avg_sum:.1f}, "
            f"target [{sum_min:.0f}-{sum_max:.0f}]. Dominant odd:even over {PARITY_WINDOW} draws "
            f"{target_odd}:{target_even}. {exclusion.rationale}."
        ),
    )
