"""
src/models/primary/mod3_residue.py
Mod-3 residue pattern mode over three fixed residue classes.

Secondary: exclude (issue suffix + draw day of month) mod 16, 0 → 16.
"""
from __future__ import annotations

import random
from datetime import datetime

from src.models.primary.common import rank_secondary_candidates
from src.models.secondary.exclusion import issue_date
from src.models.statistical.distribution import describe_patterns, format_pattern, residue_distribution, top_patterns
from src.models.statistical.frequency_analyzer import frequency, frequency_within
from src.models.statistical.selection import fill_primary_set, validate_primary_set, weighted_sample
from src.models.types import DrawRecord, MethodResult
from src.utils.config import primary_domain

NAME = "mod3_residue"

WINDOW = 100

RESIDUE_CLASSES: tuple[list[int], ...] = tuple(
    [n for n in primary_domain() if n % 3 == r] for r in range(3)
)


def mod3_residue(records: list[DrawRecord], rng: random.Random, now: datetime) -> MethodResult:
    window = records[-WINDOW:]

    ranked = top_patterns((residue_distribution(r.primary, 3) for r in window), n=3)
    pattern, pattern_count = ranked[0]

    selected: list[int] = []
    for residue, count in enumerate(pattern):
        if count <= 0:
            continue
        numbers = RESIDUE_CLASSES[residue]
        class_freq = frequency_within(window, numbers)
        available = [n for n in numbers if n not in selected]
        weights = [max(1, class_freq[n] + 1) for n in available]
        if len(available) >= count:
            selected += weighted_sample(available, weights, count, rng)
        else:
            selected += available

    overall = frequency(window, "primary")
    primary = fill_primary_set(validate_primary_set(selected), overall, rng)

    picked = ", ".join(
        f"r{residue}: {[n for n in primary if n % 3 == residue] or 'none'}" for residue in range(3)
    )
    exclusion = issue_date(records, now)
    return MethodResult(
        name=NAME,
        primary=primary,
        secondary_candidates=rank_secondary_candidates(window, exclusion),
        rationale=(
            f"Top mod-3 patterns over {len(window)} draws: "
            f"{describe_patterns(ranked)}. "
            f"Using {format_pattern(pattern)} (seen {pattern_count} times); picked {picked}. "
            f"{exclusion.rationale}."
        ),
    )
