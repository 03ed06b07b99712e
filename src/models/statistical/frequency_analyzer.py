"""
src/models/statistical/frequency_analyzer.py
Occurrence counts over a record window and hot/warm/cold tiering.
"""
from __future__ import annotations

from typing import Iterable, Literal, NamedTuple

import numpy as np

from src.models.types import DrawRecord, FrequencyMap
from src.utils.config import PRIMARY_RANGE, SECONDARY_RANGE

Field = Literal["primary", "secondary"]


class Tiers(NamedTuple):
    hot: list[int]
    warm: list[int]
    cold: list[int]


def frequency(records: Iterable[DrawRecord], field: Field = "primary") -> FrequencyMap:
    """
    Count every possible value of `field` across the records.
    Values that never appear report 0.
    """
    if field == "primary":
        lo, hi = PRIMARY_RANGE
        values = [n for r in records for n in r.primary]
    elif field == "secondary":
        lo, hi = SECONDARY_RANGE
        values = [r.secondary for r in records]
    else:
        raise ValueError(f"Unknown field: {field}")

    counts = np.bincount(np.asarray(values, dtype=int), minlength=hi + 1) if values else np.zeros(hi + 1, dtype=int)
    return {n: int(counts[n]) for n in range(lo, hi + 1)}


def frequency_within(records: Iterable[DrawRecord], numbers: Iterable[int]) -> FrequencyMap:
    """Primary-number counts restricted to a sub-domain (a zone, a residue class)."""
    freq: FrequencyMap = {n: 0 for n in numbers}
    for r in records:
        for n in r.primary:
            if n in freq:
                freq[n] += 1
    return freq


def sort_by_frequency(freq: FrequencyMap, desc: bool = True) -> list[int]:
    """Numbers ordered by count. Equal counts keep ascending number order."""
    ordered = sorted(freq)
    return sorted(ordered, key=lambda n: freq[n], reverse=desc)


def rank_within(numbers: Iterable[int], freq: FrequencyMap) -> list[int]:
    """Order a subset of numbers by descending count, stable on input order."""
    return sorted(numbers, key=lambda n: freq.get(n, 0), reverse=True)


def classify(freq: FrequencyMap, hot_threshold: int, cold_threshold: int) -> Tiers:
    """
    Partition the whole domain of `freq`:
    hot = count ≥ hot_threshold, cold = count ≤ cold_threshold, warm otherwise.
    """
    hot: list[int] = []
    warm: list[int] = []
    cold: list[int] = []
    for num in sorted(freq):
        count = freq[num]
        if count >= hot_threshold:
            hot.append(num)
        elif count <= cold_threshold:
            cold.append(num)
        else:
            warm.append(num)
    return Tiers(hot, warm, cold)
