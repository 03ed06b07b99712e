"""
src/utils/supabase_client.py
Typed Supabase client wrapper for the draw-record and prediction-run tables.
"""
from __future__ import annotations

from typing import Any

from supabase import Client, create_client

from src.models.types import DrawRecord, PredictionRun
from src.utils.config import (
    SUPABASE_KEY,
    SUPABASE_RECORDS_TABLE,
    SUPABASE_RUNS_TABLE,
    SUPABASE_URL,
    has_store_credentials,
)
from src.utils.errors import StoreNotConfiguredError
from src.utils.logger import get_logger

log = get_logger("supabase")

PAGE_SIZE = 1000
UPSERT_BATCH = 500

_client: Client | None = None


def get_client() -> Client:
    global _client
    if _client is None:
        if not has_store_credentials():
            raise StoreNotConfiguredError("SUPABASE_URL and SUPABASE_KEY must be set")
        _client = create_client(SUPABASE_URL, SUPABASE_KEY)
    return _client


# ── draw_records ──────────────────────────────────────────────────

def upsert_draw_records(records: list[DrawRecord]) -> int:
    """Upsert draws keyed by issue. Returns the number of rows sent."""
    db = get_client()
    rows = [r.to_row() for r in records]
    for start in range(0, len(rows), UPSERT_BATCH):
        batch = rows[start:start + UPSERT_BATCH]
        db.table(SUPABASE_RECORDS_TABLE).upsert(batch, on_conflict="issue").execute()
        log.debug(f"Upserted draw_records {start + 1}-{start + len(batch)}")
    return len(rows)


def get_records(limit: int | None = None) -> list[DrawRecord]:
    """
    Draw records ascending by issue. `limit` keeps only the trailing window;
    None pages through the whole table.
    """
    db = get_client()
    rows: list[dict[str, Any]] = []
    if limit is not None:
        resp = (
            db.table(SUPABASE_RECORDS_TABLE)
            .select("*")
            .order("issue", desc=True)
            .limit(limit)
            .execute()
        )
        rows = list(reversed(resp.data or []))
    else:
        start = 0
        while True:
            resp = (
                db.table(SUPABASE_RECORDS_TABLE)
                .select("*")
                .order("issue", desc=False)
                .range(start, start + PAGE_SIZE - 1)
                .execute()
            )
            page = resp.data or []
            rows.extend(page)
            if len(page) < PAGE_SIZE:
                break
            start += PAGE_SIZE
    return [DrawRecord.from_row(row) for row in rows]


def get_latest_record() -> DrawRecord | None:
    records = get_records(limit=1)
    return records[-1] if records else None


def count_records() -> int:
    db = get_client()
    resp = db.table(SUPABASE_RECORDS_TABLE).select("issue", count="exact").limit(1).execute()
    return resp.count or 0


# ── prediction_runs ───────────────────────────────────────────────

def save_run(run: PredictionRun) -> dict[str, Any]:
    db = get_client()
    resp = db.table(SUPABASE_RUNS_TABLE).insert(run.to_row()).execute()
    return resp.data[0] if resp.data else {}


def list_runs(limit: int | None = None) -> list[PredictionRun]:
    """Saved runs, newest first."""
    db = get_client()
    q = db.table(SUPABASE_RUNS_TABLE).select("*").order("created_at", desc=True)
    if limit is not None:
        q = q.limit(limit)
    resp = q.execute()
    return [PredictionRun.from_row(row) for row in resp.data or []]


def get_run_by_issue(target_issue: str) -> PredictionRun | None:
    db = get_client()
    resp = (
        db.table(SUPABASE_RUNS_TABLE)
        .select("*")
        .eq("target_issue", target_issue)
        .order("created_at", desc=True)
        .limit(1)
        .execute()
    )
    return PredictionRun.from_row(resp.data[0]) if resp.data else None


def delete_run(run_id: str) -> bool:
    db = get_client()
    resp = db.table(SUPABASE_RUNS_TABLE).delete().eq("id", run_id).execute()
    return bool(resp.data)
