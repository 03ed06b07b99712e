"""
src/utils/config.py
Load env vars, number-domain constants and the engine config JSON.
"""
import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

ROOT = Path(__file__).parent.parent.parent
CONFIG_DIR = ROOT / "config"
ENGINE_CONFIG_FILE = os.getenv("SSQ_ENGINE_CONFIG", "engine_params.json")

# ── Supabase ──────────────────────────────────────────────────────
SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")
SUPABASE_RECORDS_TABLE: str = os.getenv("SUPABASE_RECORDS_TABLE", "draw_records")
SUPABASE_RUNS_TABLE: str = os.getenv("SUPABASE_RUNS_TABLE", "prediction_runs")

# ── Draw feed ─────────────────────────────────────────────────────
FEED_URL: str = os.getenv("SSQ_FEED_URL", "http://data.17500.cn/ssq_asc.txt")

# ── Suggestion service (DeepSeek chat completions) ────────────────
DEEPSEEK_API_KEY: str = os.getenv("DEEPSEEK_API_KEY", "")
DEEPSEEK_API_URL: str = os.getenv("DEEPSEEK_API_URL", "https://api.deepseek.com/v1/chat/completions")
DEEPSEEK_MODEL: str = os.getenv("DEEPSEEK_MODEL", "deepseek-chat")
SUGGESTION_TIMEOUT: float = float(os.getenv("SUGGESTION_TIMEOUT", "30"))

# ── Number domain ─────────────────────────────────────────────────
PRIMARY_RANGE: tuple[int, int] = (1, 33)
SECONDARY_RANGE: tuple[int, int] = (1, 16)
PRIMARY_PICK = 6

# Three zones: 1–11 / 12–22 / 23–33
ZONE_BOUNDS: tuple[tuple[int, int], ...] = ((1, 11), (12, 22), (23, 33))

# Primary numbers ≥ 17 are "big"; secondary numbers ≥ 9 are "big"
PRIMARY_MAGNITUDE_SPLIT = 17
SECONDARY_MAGNITUDE_SPLIT = 9

# Draws happen Tue / Thu / Sun (Python weekday numbers), cut-off 21:15
DRAW_WEEKDAYS: tuple[int, ...] = (1, 3, 6)
DRAW_CUTOFF: tuple[int, int] = (21, 15)

LOTTERY_LABEL = "Double Color Ball"

_engine_config_cache: dict[str, Any] = {}


def get_engine_config(filename: str | None = None) -> dict[str, Any]:
    """Load and cache the aggregation-engine config JSON."""
    filename = filename or ENGINE_CONFIG_FILE
    if filename in _engine_config_cache:
        return _engine_config_cache[filename]
    path = CONFIG_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        config = json.load(f)
    _engine_config_cache[filename] = config
    return config


def primary_domain() -> list[int]:
    lo, hi = PRIMARY_RANGE
    return list(range(lo, hi + 1))


def secondary_domain() -> list[int]:
    lo, hi = SECONDARY_RANGE
    return list(range(lo, hi + 1))


def has_store_credentials() -> bool:
    """Return True if Supabase URL and key are both configured."""
    return bool(SUPABASE_URL and SUPABASE_KEY)
