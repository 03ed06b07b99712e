"""
scripts/03_manage_runs.py
List, show or delete saved prediction runs.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.pipeline.run_manager import delete_run, list_runs
from src.utils import supabase_client as db
from src.utils.logger import get_logger

log = get_logger("manage_runs")


def _print_run(run) -> None:
    print(f"{run.id}  issue={run.target_issue}  date={run.target_date}  created={run.created_at}")
    for p in run.predictions:
        primary = " ".join(f"{n:02d}" for n in p.primary)
        print(f"    {primary} + {p.secondary:02d}  ({p.confidence}, {p.strategy})")


def main():
    parser = argparse.ArgumentParser(description="Manage saved prediction runs")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List saved runs, newest first")
    p_list.add_argument("--limit", type=int, default=20)
    p_list.add_argument("--details", action="store_true", help="Print every prediction")

    p_show = sub.add_parser("show", help="Show the latest run for an issue")
    p_show.add_argument("issue")

    p_delete = sub.add_parser("delete", help="Delete a run by id")
    p_delete.add_argument("run_id")

    args = parser.parse_args()

    if args.command == "list":
        runs = list_runs(limit=args.limit)
        log.info(f"Loaded {len(runs)} run(s)")
        if not runs:
            print("No saved runs.")
        for run in runs:
            if args.details:
                _print_run(run)
            else:
                print(f"{run.id}  issue={run.target_issue}  date={run.target_date}  "
                      f"predictions={len(run.predictions)}  created={run.created_at}")
    elif args.command == "show":
        run = db.get_run_by_issue(args.issue)
        if run is None:
            print(f"No run for issue {args.issue}.")
            sys.exit(1)
        _print_run(run)
    elif args.command == "delete":
        if not delete_run(args.run_id):
            sys.exit(1)
        print(f"Deleted {args.run_id}")


if __name__ == "__main__":
    main()
