"""
scripts/02_generate_prediction.py
Phase 2: Generate 10 predictions for the next draw and save the run to Supabase.
"""
from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.pipeline.run_manager import generate_and_save
from src.suggestion.deepseek_client import DeepSeekSuggestionService
from src.utils import supabase_client as db
from src.utils.config import DEEPSEEK_API_KEY, LOTTERY_LABEL
from src.utils.errors import InsufficientHistoryError
from src.utils.logger import get_logger

log = get_logger("generate")


def _fmt_numbers(nums: list[int]) -> str:
    return " ".join(f"{n:02d}" for n in sorted(nums))


def main():
    parser = argparse.ArgumentParser(description=f"{LOTTERY_LABEL} prediction run")
    parser.add_argument("--seed", type=int, default=None, help="Seed the random generator for a reproducible run")
    parser.add_argument("--window", type=int, default=None, help="Only load the latest N draws (default: all)")
    parser.add_argument("--no-ai", action="store_true", help="Skip the external suggestion service")
    parser.add_argument("--dry-run", action="store_true", help="Do not save the run")
    args = parser.parse_args()

    records = db.get_records(limit=args.window)
    log.info(f"Loaded {len(records)} draws")

    service = None
    if not args.no_ai and DEEPSEEK_API_KEY:
        service = DeepSeekSuggestionService()

    try:
        run = generate_and_save(
            records,
            rng=random.Random(args.seed),
            suggestion_service=service,
            on_progress=lambda msg: log.info(f"[PROGRESS] {msg}"),
            save=not args.dry_run,
        )
    except InsufficientHistoryError as exc:
        print(f"\n{exc}\nRun scripts/01_initial_crawl.py to load more draw history first.")
        sys.exit(1)

    print("\n" + "=" * 60)
    print(f"{LOTTERY_LABEL} — issue {run.target_issue} ({run.target_date})")
    print("=" * 60)
    for i, p in enumerate(run.predictions, 1):
        print(f"  {i:2d}. {_fmt_numbers(p.primary)} + {p.secondary:02d} | {p.confidence:3d} | {p.strategy}")
    print("=" * 60)
    print(f"  run id: {run.id}{' (not saved)' if args.dry_run else ''}")


if __name__ == "__main__":
    main()
