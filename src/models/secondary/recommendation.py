"""
src/models/secondary/recommendation.py
Merge the analysis ranking with the strong-exclusion set into the final
secondary-number recommendation.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from src.models.secondary.analysis import CombinedAnalysis, combined_analysis
from src.models.secondary.exclusion import CombinedExclusion, combined_exclusion
from src.models.types import DrawRecord
from src.utils.logger import get_logger

log = get_logger("secondary.recommendation")

MIN_SURVIVORS = 5
MAX_RECOMMENDED = 10


@dataclass
class SecondaryRecommendation:
    ranked: list[int]
    rationale: str
    exclusion: CombinedExclusion
    analysis: CombinedAnalysis


def merge_ranking(analysis_ranked: list[int], strongly_excluded: list[int]) -> list[int]:
    """
    Keep analysis order, dropping strongly excluded numbers. If fewer than 5
    survive, backfill with the next analysis picks regardless of exclusion.
    """
    survivors = [n for n in analysis_ranked if n not in strongly_excluded]
    if len(survivors) < MIN_SURVIVORS:
        survivors = survivors + [n for n in analysis_ranked if n not in survivors]
    return survivors[:MAX_RECOMMENDED]


def recommend_secondary(records: list[DrawRecord], now: datetime) -> SecondaryRecommendation:
    exclusion = combined_exclusion(records, now)
    analysis = combined_analysis(records)
    ranked = merge_ranking(analysis.ranked, exclusion.excluded)

    lines = [f"Strongly excluded: {', '.join(str(n) for n in exclusion.excluded) or 'none'}"]
    lines.extend(r.rationale for r in exclusion.results)
    lines.extend(r.rationale for r in analysis.results)

    log.info(f"Secondary recommendation: {ranked}")
    return SecondaryRecommendation(
        ranked=ranked,
        rationale="\n".join(lines),
        exclusion=exclusion,
        analysis=analysis,
    )
