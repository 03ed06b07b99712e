"""
src/pipeline/run_manager.py
Next-draw target info, PredictionRun creation and persistence.
"""
from __future__ import annotations

import random
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, NamedTuple

from src.models.strategy_engine import EngineSettings
from src.models.types import DrawRecord, PredictionRun, PredictionTuple
from src.pipeline.prediction_generator import ProgressCallback, run_prediction
from src.suggestion.deepseek_client import SuggestionService
from src.utils import supabase_client as db
from src.utils.config import DRAW_CUTOFF, DRAW_WEEKDAYS
from src.utils.logger import get_logger

log = get_logger("pipeline.runs")

DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class DrawTarget(NamedTuple):
    issue: str
    date: str
    weekday: str


def next_draw_date(now: datetime) -> datetime:
    """Today if it is a draw day before the cut-off, else the next draw day."""
    hour, minute = DRAW_CUTOFF
    before_cutoff = (now.hour, now.minute) < (hour, minute)
    if now.weekday() in DRAW_WEEKDAYS and before_cutoff:
        return now
    for offset in range(1, 8):
        candidate = now + timedelta(days=offset)
        if candidate.weekday() in DRAW_WEEKDAYS:
            return candidate
    return now


def next_issue(latest_issue: str | None, year: int) -> str:
    """
    Latest issue + 1 when it belongs to `year`, otherwise the first issue
    of `year` ("2025001").
    """
    if latest_issue and latest_issue.isdigit() and latest_issue.startswith(str(year)):
        return str(int(latest_issue) + 1).zfill(len(latest_issue))
    return f"{year}001"


def next_draw_info(now: datetime, latest_issue: str | None) -> DrawTarget:
    draw = next_draw_date(now)
    return DrawTarget(
        issue=next_issue(latest_issue, draw.year),
        date=draw.strftime("%Y-%m-%d"),
        weekday=DAY_NAMES[draw.weekday()],
    )


def create_run(target: DrawTarget, predictions: list[PredictionTuple]) -> PredictionRun:
    return PredictionRun(
        id=uuid.uuid4().hex,
        target_issue=target.issue,
        target_date=target.date,
        predictions=list(predictions),
        created_at=datetime.now(timezone.utc).isoformat(),
    )


def generate_and_save(
    records: list[DrawRecord],
    *,
    rng: random.Random | None = None,
    clock: Callable[[], datetime] | None = None,
    suggestion_service: SuggestionService | None = None,
    on_progress: ProgressCallback | None = None,
    settings: EngineSettings | None = None,
    save: bool = True,
) -> PredictionRun:
    """
    Run the engine for the next draw and persist the batch once.
    InsufficientHistoryError propagates and nothing is saved.
    """
    clock = clock or datetime.now
    predictions = run_prediction(
        records,
        rng=rng,
        clock=clock,
        suggestion_service=suggestion_service,
        on_progress=on_progress,
        settings=settings,
    )
    target = next_draw_info(clock(), records[-1].issue if records else None)
    run = create_run(target, predictions)

    if save:
        db.save_run(run)
        log.info(f"[RUN] Saved run {run.id} for issue {run.target_issue} ({len(predictions)} predictions)")
    else:
        log.info(f"[RUN] Dry run for issue {run.target_issue}, nothing saved")
    return run


def list_runs(limit: int | None = None) -> list[PredictionRun]:
    return db.list_runs(limit=limit)


def delete_run(run_id: str) -> bool:
    deleted = db.delete_run(run_id)
    if deleted:
        log.info(f"[RUN] Deleted run {run_id}")
    else:
        log.warning(f"[RUN] Run {run_id} not found")
    return deleted
