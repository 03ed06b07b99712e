"""
src/pipeline/prediction_generator.py
Full prediction flow for one target draw:
history check → primary methods → secondary recommendation → suggestion
service → local strategy fill → dedup + bounded top-up → confidence sort.
"""
from __future__ import annotations

import random
from datetime import datetime
from typing import Callable

from src.models.primary.registry import run_primary_methods, successful_results
from src.models.secondary.recommendation import recommend_secondary
from src.models.strategy_engine import EngineSettings, StrategyEngine
from src.models.types import DrawRecord, MethodResult, PredictionTuple
from src.models.validator import deduplicate, history_keys
from src.suggestion.deepseek_client import SuggestionService, build_context
from src.utils.errors import InsufficientHistoryError
from src.utils.logger import get_logger

log = get_logger("pipeline.generator")

ProgressCallback = Callable[[str], None]


def _noop(_: str) -> None:
    return None


def _collect_suggestions(
    service: SuggestionService | None,
    records: list[DrawRecord],
    method_results: list[MethodResult],
    now: datetime,
    progress: ProgressCallback,
) -> list[PredictionTuple]:
    """Ask the suggestion service; any failure counts as zero suggestions."""
    if service is None:
        return []
    progress("Requesting external suggestions...")
    try:
        reply = service.suggest(build_context(records, method_results, now))
        suggestions = [s for s in (reply or []) if isinstance(s, PredictionTuple)]
    except Exception as exc:
        log.warning(f"[PREDICT] Suggestion service unavailable, using local strategies: {exc}")
        progress("Suggestion service unavailable, using local strategies...")
        return []
    if suggestions:
        progress(f"Received {len(suggestions)} external suggestion(s)")
    return suggestions


def run_prediction(
    records: list[DrawRecord],
    *,
    rng: random.Random | None = None,
    clock: Callable[[], datetime] | None = None,
    suggestion_service: SuggestionService | None = None,
    on_progress: ProgressCallback | None = None,
    settings: EngineSettings | None = None,
) -> list[PredictionTuple]:
    """
    Produce up to `target_count` distinct prediction tuples, none equal to a
    historical draw, sorted by descending confidence.

    Raises InsufficientHistoryError when fewer than `min_history` records are
    supplied; nothing else is raised for method or suggestion failures.
    """
    settings = settings or EngineSettings.from_config()
    if len(records) < settings.min_history:
        raise InsufficientHistoryError(len(records), settings.min_history)

    rng = rng or random.Random()
    now = (clock or datetime.now)()
    progress = on_progress or _noop
    target = settings.target_count

    log.info(f"[PREDICT] Starting with {len(records)} records (latest {records[-1].issue})")

    # Step 1: primary methods
    progress("Analysing primary numbers...")
    outcomes = run_primary_methods(records, rng, now)
    method_results = successful_results(outcomes)

    # Step 2: secondary recommendation
    progress("Analysing secondary numbers...")
    secondary = recommend_secondary(records, now)

    # Step 3: external suggestions
    predictions = _collect_suggestions(suggestion_service, records, method_results, now, progress)

    # Step 4: local fill by the fixed strategy mix
    engine = StrategyEngine(records, method_results, secondary.ranked, rng, settings)
    if len(predictions) < target:
        progress("Generating local predictions...")
        predictions.extend(engine.fill(len(predictions), target))

    # Step 5: dedup + bounded top-up
    progress("Validating and removing duplicates...")
    keys = history_keys(records)
    predictions = deduplicate(predictions, keys=keys)

    attempts = 0
    while len(predictions) < target and attempts < settings.dedup_max_attempts:
        predictions = deduplicate([engine.generate_random()], keys=keys, kept=predictions)
        attempts += 1

    if len(predictions) < target:
        log.warning(
            f"[PREDICT] Dedup exhausted after {attempts} attempts: "
            f"{len(predictions)}/{target} unique predictions"
        )

    # Step 6: stable sort by confidence
    predictions.sort(key=lambda p: p.confidence, reverse=True)
    predictions = predictions[:target]

    progress("Prediction complete")
    log.info(f"[PREDICT] Done → {len(predictions)} predictions")
    return predictions
