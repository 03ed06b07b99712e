"""
src/models/secondary/analysis.py
Four secondary-number analysis methods and a rank-point vote across them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from src.models.statistical.frequency_analyzer import frequency, rank_within, sort_by_frequency
from src.models.types import DrawRecord
from src.utils.config import SECONDARY_MAGNITUDE_SPLIT, secondary_domain

WINDOW = 50
RECENT_WINDOW = 10
STREAK_REVERSAL = 3
HOT_COUNT = 5
WARM_COUNT = 6
COLD_SURGE_HITS = 4
HOT_STREAK_HITS = 6

SMALL = [n for n in secondary_domain() if n < SECONDARY_MAGNITUDE_SPLIT]
BIG = [n for n in secondary_domain() if n >= SECONDARY_MAGNITUDE_SPLIT]
ODD = [n for n in secondary_domain() if n % 2 == 1]
EVEN = [n for n in secondary_domain() if n % 2 == 0]

JOINT_CATEGORIES: dict[str, list[int]] = {
    "small-odd": [n for n in SMALL if n % 2 == 1],
    "small-even": [n for n in SMALL if n % 2 == 0],
    "big-odd": [n for n in BIG if n % 2 == 1],
    "big-even": [n for n in BIG if n % 2 == 0],
}


@dataclass
class AnalysisResult:
    name: str
    ranked: list[int]
    rationale: str


@dataclass
class CombinedAnalysis:
    ranked: list[int]
    scores: dict[int, int]
    results: list[AnalysisResult]


def _is_small(n: int) -> bool:
    return n < SECONDARY_MAGNITUDE_SPLIT


def size_parity_majority(records: list[DrawRecord]) -> AnalysisResult:
    """Majority size class ∩ majority parity class, ordered by frequency."""
    recent = records[-WINDOW:]
    small = sum(1 for r in recent if _is_small(r.secondary))
    big = len(recent) - small
    odd = sum(1 for r in recent if r.secondary % 2 == 1)
    even = len(recent) - odd

    size_pool = SMALL if small >= big else BIG
    parity_pool = ODD if odd >= even else EVEN
    pool = [n for n in size_pool if n in parity_pool]
    freq = frequency(recent, "secondary")
    ranked = rank_within(pool, freq) if pool else sort_by_frequency(freq)[:4]

    size_label = "small" if small >= big else "big"
    parity_label = "odd" if odd >= even else "even"
    return AnalysisResult(
        name="size_parity_majority",
        ranked=ranked,
        rationale=(
            f"Size/parity: last {len(recent)} draws small {small} / big {big}, "
            f"odd {odd} / even {even}; favour {size_label}-{parity_label}"
        ),
    )


def parity_streak(records: list[DrawRecord]) -> AnalysisResult:
    """A run of 3+ same-parity draws predicts a reversal; otherwise follow the majority."""
    recent = records[-WINDOW:]
    odd_streak = 0
    even_streak = 0
    for r in reversed(recent):
        if r.secondary % 2 == 1:
            if even_streak:
                break
            odd_streak += 1
        else:
            if odd_streak:
                break
            even_streak += 1

    odd_total = sum(1 for r in recent if r.secondary % 2 == 1)
    even_total = len(recent) - odd_total
    freq = frequency(recent, "secondary")

    if odd_streak >= STREAK_REVERSAL:
        ranked = rank_within(EVEN, freq)
        rationale = f"Parity streak: odd for {odd_streak} draws, expect even"
    elif even_streak >= STREAK_REVERSAL:
        ranked = rank_within(ODD, freq)
        rationale = f"Parity streak: even for {even_streak} draws, expect odd"
    elif odd_total > even_total:
        ranked = rank_within(ODD, freq)
        rationale = f"Parity streak: odd leads overall ({odd_total}:{even_total}), stay odd"
    else:
        ranked = rank_within(EVEN, freq)
        rationale = f"Parity streak: even leads overall ({even_total}:{odd_total}), stay even"

    return AnalysisResult(name="parity_streak", ranked=ranked, rationale=rationale)


def joint_category(records: list[DrawRecord]) -> AnalysisResult:
    """Most frequent of the four size×parity categories."""
    recent = records[-WINDOW:]
    counts = {name: 0 for name in JOINT_CATEGORIES}
    for r in recent:
        for name, members in JOINT_CATEGORIES.items():
            if r.secondary in members:
                counts[name] += 1
                break

    ordered = sorted(JOINT_CATEGORIES, key=lambda name: counts[name], reverse=True)
    top = ordered[0]
    freq = frequency(recent, "secondary")
    summary = ", ".join(f"{name} {counts[name]}" for name in ordered)
    return AnalysisResult(
        name="joint_category",
        ranked=rank_within(JOINT_CATEGORIES[top], freq),
        rationale=f"Joint category: {summary}; favour {top}",
    )


def hot_cold_trend(records: list[DrawRecord]) -> AnalysisResult:
    """Top 5 hot, next 6 warm, rest cold; the last 10 draws decide which tier leads."""
    recent = records[-WINDOW:]
    freq = frequency(recent, "secondary")
    ordered = sort_by_frequency(freq)
    hot = ordered[:HOT_COUNT]
    warm = ordered[HOT_COUNT:HOT_COUNT + WARM_COUNT]
    cold = ordered[HOT_COUNT + WARM_COUNT:]

    very_recent = records[-RECENT_WINDOW:]
    hot_hits = sum(1 for r in very_recent if r.secondary in hot)
    cold_hits = sum(1 for r in very_recent if r.secondary in cold)

    if cold_hits >= COLD_SURGE_HITS:
        ranked = warm + hot[:2]
        rationale = f"Hot/cold: cold hit {cold_hits} times in last {RECENT_WINDOW}, expect return to warm"
    elif hot_hits >= HOT_STREAK_HITS:
        ranked = hot + warm[:3]
        rationale = f"Hot/cold: hot hit {hot_hits} times in last {RECENT_WINDOW}, stays strong"
    else:
        ranked = warm + hot[:2]
        rationale = f"Hot/cold: hot {hot_hits} / cold {cold_hits}, lean warm"

    hot_info = " ".join(f"{n:02d}({freq[n]})" for n in hot)
    return AnalysisResult(name="hot_cold_trend", ranked=ranked, rationale=f"{rationale}; hot: {hot_info}")


AnalysisMethod = Callable[[list[DrawRecord]], AnalysisResult]

ANALYSIS_METHODS: dict[str, AnalysisMethod] = {
    "size_parity_majority": size_parity_majority,
    "parity_streak": parity_streak,
    "joint_category": joint_category,
    "hot_cold_trend": hot_cold_trend,
}


def combined_analysis(records: list[DrawRecord]) -> CombinedAnalysis:
    """
    Sum rank points across the four methods: position i in a list of length L
    earns L - i points. Returns the whole domain ranked by total score.
    """
    results = [method(records) for method in ANALYSIS_METHODS.values()]

    scores = {n: 0 for n in secondary_domain()}
    for res in results:
        size = len(res.ranked)
        for idx, num in enumerate(res.ranked):
            scores[num] += size - idx

    ranked = sorted(scores, key=lambda n: scores[n], reverse=True)
    return CombinedAnalysis(ranked=ranked, scores=scores, results=results)
