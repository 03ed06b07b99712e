"""
src/models/primary/magnitude_parity.py
Joint small/big (split at 17) and odd/even ratio modes solved into four
categories: small-odd, small-even, big-odd, big-even.

With so = small-odd, the category counts satisfy
    so + se = small, bo + be = big, so + bo = odd, se + be = even
and every count ≥ 0 bounds so to [max(0, odd − big), min(small, odd)].
The midpoint of that range is used.
Secondary: exclude numbers ending in tail(tail(S) + 1).
"""
from __future__ import annotations

import random
from datetime import datetime

from src.models.primary.common import rank_secondary_candidates
from src.models.secondary.exclusion import tail_plus_one
from src.models.statistical.distribution import (
    describe_patterns,
    magnitude_ratio,
    parity_ratio,
    round_half_up,
    top_patterns,
)
from src.models.statistical.frequency_analyzer import frequency, frequency_within
from src.models.statistical.selection import fill_primary_set, validate_primary_set, weighted_sample
from src.models.types import DrawRecord, MethodResult
from src.utils.config import PRIMARY_MAGNITUDE_SPLIT, primary_domain

NAME = "magnitude_parity"

WINDOW = 100

CATEGORIES: dict[str, list[int]] = {
    "small-odd": [n for n in primary_domain() if n < PRIMARY_MAGNITUDE_SPLIT and n % 2 == 1],
    "small-even": [n for n in primary_domain() if n < PRIMARY_MAGNITUDE_SPLIT and n % 2 == 0],
    "big-odd": [n for n in primary_domain() if n >= PRIMARY_MAGNITUDE_SPLIT and n % 2 == 1],
    "big-even": [n for n in primary_domain() if n >= PRIMARY_MAGNITUDE_SPLIT and n % 2 == 0],
}


def split_categories(small: int, big: int, odd: int, even: int) -> tuple[int, int, int, int]:
    """(small-odd, small-even, big-odd, big-even) counts for the target ratios."""
    lo = max(0, odd - big)
    hi = min(small, odd)
    so = round_half_up((lo + hi) / 2)
    se = small - so
    bo = odd - so
    be = big - bo
    return max(0, so), max(0, se), max(0, bo), max(0, be)


def magnitude_parity(records: list[DrawRecord], rng: random.Random, now: datetime) -> MethodResult:
    window = records[-WINDOW:]

    size_ranked = top_patterns((magnitude_ratio(r.primary, PRIMARY_MAGNITUDE_SPLIT) for r in window), n=3)
    parity_ranked = top_patterns((parity_ratio(r.primary) for r in window), n=3)
    (small, big), _ = size_ranked[0]
    (odd, even), _ = parity_ranked[0]

    counts = split_categories(small, big, odd, even)
    selected: list[int] = []
    for (label, numbers), count in zip(CATEGORIES.items(), counts):
        if count <= 0:
            continue
        cat_freq = frequency_within(window, numbers)
        available = [n for n in numbers if n not in selected]
        weights = [max(1, cat_freq[n] + 1) for n in available]
        if len(available) >= count:
            selected += weighted_sample(available, weights, count, rng)
        else:
            selected += available

    overall = frequency(window, "primary")
    primary = fill_primary_set(validate_primary_set(selected), overall, rng)

    picked = ", ".join(f"{label} {[n for n in primary if n in nums]}" for label, nums in CATEGORIES.items())
    exclusion = tail_plus_one(records, now)
    return MethodResult(
        name=NAME,
        primary=primary,
        secondary_candidates=rank_secondary_candidates(window, exclusion),
        rationale=(
            f"Small:big over {len(window)} draws "
            f"{describe_patterns(size_ranked, ':')}, target {small}:{big}. "
            f"Odd:even {describe_patterns(parity_ranked, ':')}, "
            f"target {odd}:{even}. Picked {picked}. {exclusion.rationale}."
        ),
    )
