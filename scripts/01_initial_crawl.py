"""
scripts/01_initial_crawl.py
Phase 1: Historical crawl. Run locally or on a schedule.
Downloads the full draw feed (or only the latest N draws) and upserts into Supabase.
"""
from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.crawlers.ssq_crawler import SsqCrawler
from src.models.types import DrawRecord
from src.utils import supabase_client as db
from src.utils.logger import get_logger

log = get_logger("initial_crawl")

CSV_FIELDS = ["issue", "draw_date", "primary_numbers", "secondary_number", "sum_value", "odd_count", "high_count"]


def backup_csv(records: list[DrawRecord], path: Path) -> None:
    path.parent.mkdir(exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for record in records:
            row = record.to_row()
            writer.writerow({**row, "primary_numbers": " ".join(f"{n:02d}" for n in record.primary)})
    log.info(f"CSV backup saved to {path}")


def run_crawl(latest: int | None = None, dry_run: bool = False, csv_backup: bool = True) -> dict:
    log.info(f"[CRAWL] latest={latest or 'all'} | dry_run={dry_run}")

    crawler = SsqCrawler()
    records = crawler.fetch_latest(latest) if latest else crawler.fetch_all()
    log.info(f"Fetched {len(records)} draws")

    if not records:
        return {"fetched": 0, "upserted": 0}

    # ── Backup CSV ────────────────────────────────────────────────
    if csv_backup:
        backup_csv(records, Path("data") / f"ssq_{records[0].issue}_{records[-1].issue}.csv")

    # ── Upsert into Supabase ──────────────────────────────────────
    if dry_run:
        log.info(f"[DRY RUN] Would upsert {len(records)} draws ({records[0].issue} → {records[-1].issue})")
        return {"fetched": len(records), "upserted": 0}

    upserted = db.upsert_draw_records(records)
    total = db.count_records()
    log.info(f"[DONE] fetched={len(records)}, upserted={upserted}, stored={total}")
    return {"fetched": len(records), "upserted": upserted, "stored": total}


def main():
    parser = argparse.ArgumentParser(description="Double Color Ball historical crawl")
    parser.add_argument("--latest", type=int, default=None, help="Only keep the latest N draws")
    parser.add_argument("--dry-run", action="store_true", help="Simulate only, no DB writes")
    parser.add_argument("--no-csv", action="store_true", help="Skip CSV backup")
    args = parser.parse_args()

    result = run_crawl(latest=args.latest, dry_run=args.dry_run, csv_backup=not args.no_csv)

    print("\n" + "=" * 60)
    print("CRAWL SUMMARY")
    print("=" * 60)
    print(f"  fetched={result['fetched']:5d} | upserted={result['upserted']:5d} | stored={result.get('stored', '-')}")
    print("=" * 60)


if __name__ == "__main__":
    main()
