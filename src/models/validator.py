"""
src/models/validator.py
Structural validity, tuple equality, history collision and first-seen dedup.
"""
from __future__ import annotations

from typing import Iterable

from src.models.types import DrawRecord, PredictionKey, PredictionTuple
from src.utils.config import PRIMARY_PICK, PRIMARY_RANGE, SECONDARY_RANGE
from src.utils.logger import get_logger

log = get_logger("validator")


def is_valid(prediction: PredictionTuple) -> bool:
    """6 distinct primary numbers in [1,33] and an integer secondary in [1,16]."""
    lo, hi = PRIMARY_RANGE
    s_lo, s_hi = SECONDARY_RANGE
    primary = prediction.primary
    if len(primary) != PRIMARY_PICK or len(set(primary)) != PRIMARY_PICK:
        return False
    if not all(isinstance(n, int) and lo <= n <= hi for n in primary):
        return False
    return isinstance(prediction.secondary, int) and s_lo <= prediction.secondary <= s_hi


def same_prediction(a: PredictionTuple, b: PredictionTuple) -> bool:
    return a.key == b.key


def history_keys(records: Iterable[DrawRecord]) -> set[PredictionKey]:
    return {r.key for r in records}


def collides_with_history(prediction: PredictionTuple, keys: set[PredictionKey]) -> bool:
    return prediction.key in keys


def deduplicate(
    candidates: Iterable[PredictionTuple],
    records: Iterable[DrawRecord] | None = None,
    *,
    keys: set[PredictionKey] | None = None,
    kept: list[PredictionTuple] | None = None,
) -> list[PredictionTuple]:
    """
    Keep candidates that are valid, not equal to an earlier kept tuple and not
    a historical draw. First-seen order is preserved and kept primaries are
    sorted ascending.

    Pass `kept` to extend an existing deduplicated list incrementally.
    """
    if keys is None:
        keys = history_keys(records or [])
    result = list(kept or [])
    seen = {p.key for p in result}
    dropped = 0

    for candidate in candidates:
        if not is_valid(candidate):
            dropped += 1
            continue
        key = candidate.key
        if key in seen or key in keys:
            dropped += 1
            continue
        seen.add(key)
        result.append(
            PredictionTuple(
                primary=sorted(candidate.primary),
                secondary=candidate.secondary,
                confidence=candidate.confidence,
                strategy=candidate.strategy,
            )
        )

    if dropped:
        log.debug(f"[DEDUP] dropped {dropped} candidate(s), kept {len(result)}")
    return result
