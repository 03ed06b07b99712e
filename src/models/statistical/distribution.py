"""
src/models/statistical/distribution.py
Per-draw bucket counts (zone, residue, parity, magnitude) and pattern modes.
"""
from __future__ import annotations

from collections import Counter
from typing import Hashable, Iterable, TypeVar

import numpy as np

from src.models.types import DrawRecord
from src.utils.config import ZONE_BOUNDS

P = TypeVar("P", bound=Hashable)


def tail(n: int) -> int:
    """Last decimal digit."""
    return abs(n) % 10


def round_half_up(x: float) -> int:
    return int(np.floor(x + 0.5))


def zone_numbers(zone: int) -> list[int]:
    lo, hi = ZONE_BOUNDS[zone]
    return list(range(lo, hi + 1))


def zone_distribution(numbers: Iterable[int]) -> tuple[int, int, int]:
    """Counts per zone (1–11 / 12–22 / 23–33)."""
    counts = [0, 0, 0]
    for n in numbers:
        if n <= 11:
            counts[0] += 1
        elif n <= 22:
            counts[1] += 1
        else:
            counts[2] += 1
    return counts[0], counts[1], counts[2]


def residue_distribution(numbers: Iterable[int], modulus: int = 3) -> tuple[int, ...]:
    """Counts per residue class 0..modulus-1."""
    counts = [0] * modulus
    for n in numbers:
        counts[n % modulus] += 1
    return tuple(counts)


def parity_ratio(numbers: Iterable[int]) -> tuple[int, int]:
    """(odd, even)."""
    nums = list(numbers)
    odd = sum(1 for n in nums if n % 2 == 1)
    return odd, len(nums) - odd


def magnitude_ratio(numbers: Iterable[int], threshold: int) -> tuple[int, int]:
    """(small, big) where big means n ≥ threshold."""
    nums = list(numbers)
    big = sum(1 for n in nums if n >= threshold)
    return len(nums) - big, big


def mode_pattern(patterns: Iterable[P]) -> tuple[P, int]:
    """Most common pattern and its count. Ties go to the first one seen."""
    ranked = Counter(patterns).most_common()
    if not ranked:
        raise ValueError("mode_pattern() needs at least one pattern")
    return ranked[0]


def top_patterns(patterns: Iterable[P], n: int = 3) -> list[tuple[P, int]]:
    return Counter(patterns).most_common(n)


def format_pattern(pattern: tuple[int, ...], sep: str = "-") -> str:
    return sep.join(str(p) for p in pattern)


def sum_stats(records: list[DrawRecord]) -> tuple[float, float]:
    """(mean, std) of the primary-number sums."""
    sums = np.array([r.sum for r in records], dtype=float)
    if sums.size == 0:
        return 0.0, 0.0
    return float(np.mean(sums)), float(np.std(sums))


def describe_patterns(ranked: list[tuple[tuple[int, ...], int]], sep: str = "-") -> str:
    """Summary like 2-2-2(31), 3-2-1(18)."""
    return ", ".join(f"{format_pattern(p, sep)}({c})" for p, c in ranked)
