"""
src/models/primary/zone_distribution.py
Three-zone (1–11 / 12–22 / 23–33) pattern mode with per-zone temperature.

A zone is hot when its average count exceeds the overall average by 15%,
cold when it falls 15% below. Hot zones favour frequent numbers, cold
zones invert the weights, warm zones add a flat base.
Secondary: exclude numbers ending in tail(|S − 7|).
"""
from __future__ import annotations

import random
from datetime import datetime

from src.models.primary.common import rank_secondary_candidates
from src.models.secondary.exclusion import minus_seven
from src.models.statistical.distribution import (
    describe_patterns,
    format_pattern,
    top_patterns,
    zone_distribution,
    zone_numbers,
)
from src.models.statistical.frequency_analyzer import frequency, frequency_within
from src.models.statistical.selection import fill_primary_set, validate_primary_set, weighted_sample
from src.models.types import DrawRecord, FrequencyMap, MethodResult

NAME = "zone_distribution"

WINDOW = 100
HOT_FACTOR = 1.15
COLD_FACTOR = 0.85
ZONE_LABELS = ("01-11", "12-22", "23-33")


def zone_temperature(zone_freq: FrequencyMap, overall_avg: float) -> str:
    zone_avg = sum(zone_freq.values()) / len(zone_freq)
    if zone_avg > overall_avg * HOT_FACTOR:
        return "hot"
    if zone_avg < overall_avg * COLD_FACTOR:
        return "cold"
    return "warm"


def _zone_weights(numbers: list[int], freq: FrequencyMap, temperature: str) -> list[float]:
    if temperature == "hot":
        return [max(1.0, freq[n] * 1.5) for n in numbers]
    if temperature == "cold":
        peak = max(freq[n] for n in numbers)
        return [max(1.0, peak - freq[n] + 2) for n in numbers]
    return [max(1.0, freq[n] + 2) for n in numbers]


def zone_distribution_method(records: list[DrawRecord], rng: random.Random, now: datetime) -> MethodResult:
    window = records[-WINDOW:]

    ranked = top_patterns((zone_distribution(r.primary) for r in window), n=3)
    pattern, pattern_count = ranked[0]

    overall = frequency(window, "primary")
    overall_avg = sum(overall.values()) / len(overall)

    selected: list[int] = []
    temperatures: list[str] = []
    for zone, count in enumerate(pattern):
        numbers = zone_numbers(zone)
        zone_freq = frequency_within(window, numbers)
        temperature = zone_temperature(zone_freq, overall_avg)
        temperatures.append(temperature)
        if count <= 0:
            continue

        available = [n for n in numbers if n not in selected]
        weights = _zone_weights(available, zone_freq, temperature)
        if len(available) >= count:
            selected += weighted_sample(available, weights, count, rng)
        else:
            selected += available

    primary = fill_primary_set(validate_primary_set(selected), overall, rng)

    zones_desc = ", ".join(f"{label} {temp}" for label, temp in zip(ZONE_LABELS, temperatures))
    exclusion = minus_seven(records, now)
    return MethodResult(
        name=NAME,
        primary=primary,
        secondary_candidates=rank_secondary_candidates(window, exclusion),
        rationale=(
            f"Top zone patterns over {len(window)} draws: "
            f"{describe_patterns(ranked)}. "
            f"Using {format_pattern(pattern)} (seen {pattern_count} times). Zones: {zones_desc}. "
            f"{exclusion.rationale}."
        ),
    )
