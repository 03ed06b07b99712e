"""
src/models/primary/sum_tail.py
Sum last-digit targeting with mod 3/5/7 residue weighting.

The three most common last digits of the draw sum (last 100 draws) are the
targets. Each number is weighted 60% by frequency and 40% by how common its
residues mod 3, 5 and 7 are; weighted picks are retried until the sum's last
digit hits a target, then a single-number swap is tried as a repair.
Secondary: exclude numbers ending in tail(S + 10).
"""
from __future__ import annotations

import random
from collections import Counter
from datetime import datetime

from src.models.primary.common import rank_secondary_candidates
from src.models.secondary.exclusion import plus_ten
from src.models.statistical.distribution import tail
from src.models.statistical.frequency_analyzer import frequency
from src.models.statistical.selection import fill_primary_set, validate_primary_set, weighted_sample
from src.models.types import DrawRecord, MethodResult
from src.utils.config import primary_domain

NAME = "sum_tail"

WINDOW = 100
TOP_TAILS = 3
MODULI = (3, 5, 7)
FREQ_WEIGHT = 0.6
RESIDUE_WEIGHT = 0.4
MAX_ATTEMPTS = 300


def residue_weights(records: list[DrawRecord]) -> dict[int, list[float]]:
    """Share of all drawn numbers falling in each residue class, per modulus."""
    weights: dict[int, list[float]] = {}
    for m in MODULI:
        counts = [0] * m
        for r in records:
            for n in r.primary:
                counts[n % m] += 1
        total = sum(counts) or 1
        weights[m] = [c / total for c in counts]
    return weights


def top_sum_tails(records: list[DrawRecord], n: int = TOP_TAILS) -> list[int]:
    counts = Counter(tail(r.sum) for r in records)
    return sorted(range(10), key=lambda d: counts.get(d, 0), reverse=True)[:n]


def _repair(picked: list[int], targets: list[int]) -> list[int] | None:
    """Swap one number so the sum's last digit lands on a target."""
    for idx in range(len(picked)):
        rest = picked[:idx] + picked[idx + 1:]
        partial = sum(rest)
        for target in targets:
            needed = (target - partial % 10 + 10) % 10
            for n in primary_domain():
                if n not in rest and tail(n) == needed:
                    return sorted(rest + [n])
    return None


def sum_tail(records: list[DrawRecord], rng: random.Random, now: datetime) -> MethodResult:
    window = records[-WINDOW:]
    targets = top_sum_tails(window)
    residues = residue_weights(window)
    freq = frequency(window, "primary")

    candidates = primary_domain()
    weights = [
        (freq[n] / len(window)) * FREQ_WEIGHT
        + sum(residues[m][n % m] for m in MODULI) * RESIDUE_WEIGHT
        for n in candidates
    ]

    best: list[int] = []
    matched = False
    for _ in range(MAX_ATTEMPTS):
        picked = weighted_sample(candidates, weights, 6, rng, min_weight=1e-6)
        if tail(sum(picked)) in targets:
            best, matched = picked, True
            break
        if not best:
            best = picked

    if not matched and len(best) == 6:
        repaired = _repair(best, targets)
        if repaired is not None:
            best = repaired

    primary = fill_primary_set(validate_primary_set(best), freq, rng)
    result_tail = tail(sum(primary))
    hit = " (target hit)" if result_tail in targets else ""

    exclusion = plus_ten(records, now)
    return MethodResult(
        name=NAME,
        primary=primary,
        secondary_candidates=rank_secondary_candidates(window, exclusion),
        rationale=(
            f"Most common sum tails over {len(window)} draws: {', '.join(map(str, targets))}. "
            f"Pick sum {sum(primary)}, tail {result_tail}{hit}. Weighted by residues mod 3/5/7. "
            f"{exclusion.rationale}."
        ),
    )
