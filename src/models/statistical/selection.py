"""
src/models/statistical/selection.py
Random selection helpers and primary/secondary set validation.
All randomness comes from the caller's `random.Random`.
"""
from __future__ import annotations

import random
from typing import Iterable, Sequence, TypeVar

from src.models.statistical.distribution import round_half_up
from src.models.types import FrequencyMap
from src.utils.config import PRIMARY_PICK, PRIMARY_RANGE, SECONDARY_RANGE

T = TypeVar("T")

FILL_POOL = 10


def weighted_sample(
    candidates: Sequence[int],
    weights: Sequence[float],
    k: int,
    rng: random.Random,
    min_weight: float = 1.0,
) -> list[int]:
    """
    Draw k distinct candidates without replacement. Each step picks an item
    with probability proportional to its remaining weight; weights are floored
    at `min_weight` so every candidate stays selectable.
    Returns the picks in ascending order.
    """
    if len(candidates) != len(weights):
        raise ValueError("candidates and weights must have the same length")

    available = [(c, max(min_weight, float(w))) for c, w in zip(candidates, weights)]
    picked: list[int] = []

    while len(picked) < k and available:
        total = sum(w for _, w in available)
        if total <= 0:
            idx = rng.randrange(len(available))
        else:
            threshold = rng.random() * total
            idx = len(available) - 1
            for i, (_, w) in enumerate(available):
                threshold -= w
                if threshold <= 0:
                    idx = i
                    break
        picked.append(available.pop(idx)[0])

    return sorted(picked)


def random_pick(items: Sequence[T], n: int, rng: random.Random) -> list[T]:
    """Uniform sample of min(n, len(items)) items."""
    if n <= 0 or not items:
        return []
    return rng.sample(list(items), min(n, len(items)))


def validate_primary_set(numbers: Iterable[int]) -> list[int]:
    """Dedup, keep [1,33], sort ascending, truncate to 6."""
    lo, hi = PRIMARY_RANGE
    unique = sorted({int(n) for n in numbers if lo <= int(n) <= hi})
    return unique[:PRIMARY_PICK]


def fill_primary_set(current: Iterable[int], freq: FrequencyMap, rng: random.Random) -> list[int]:
    """
    Top up to 6 numbers. Each addition is a random pick among the ten most
    frequent remaining candidates, so the result does not collapse to the
    same set every call.
    """
    result = validate_primary_set(current)
    if len(result) >= PRIMARY_PICK:
        return result

    lo, hi = PRIMARY_RANGE
    candidates = sorted(
        (n for n in sorted(freq) if lo <= n <= hi and n not in result),
        key=lambda n: freq.get(n, 0),
        reverse=True,
    )

    while len(result) < PRIMARY_PICK and candidates:
        idx = rng.randrange(min(FILL_POOL, len(candidates)))
        result.append(candidates.pop(idx))

    return sorted(result)


def validate_secondary(n: float) -> int:
    """Round to the nearest integer and clamp to [1,16]."""
    lo, hi = SECONDARY_RANGE
    return max(lo, min(hi, round_half_up(n)))
