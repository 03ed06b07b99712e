"""
src/models/secondary/exclusion.py
Six closed-form exclusion rules over the previous draw's secondary number,
and the combined "strong exclusion" vote.
"""
from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from src.models.statistical.distribution import tail
from src.models.types import DrawRecord
from src.utils.config import secondary_domain
from src.utils.logger import get_logger

log = get_logger("secondary.exclusion")

STRONG_EXCLUSION_VOTES = 2
ISSUE_SUFFIX_DIGITS = 3
DEFAULT_PREVIOUS_SECONDARY = 1


@dataclass
class ExclusionResult:
    name: str
    excluded: list[int]
    remaining: list[int]
    rationale: str


@dataclass
class CombinedExclusion:
    excluded: list[int]
    remaining: list[int]
    votes: dict[int, int]
    results: list[ExclusionResult]


def _previous_secondary(records: list[DrawRecord]) -> int:
    return records[-1].secondary if records else DEFAULT_PREVIOUS_SECONDARY


def _exclude_tail(digit: int) -> list[int]:
    return [n for n in secondary_domain() if tail(n) == digit]


def _result(name: str, excluded: list[int], rationale: str) -> ExclusionResult:
    remaining = [n for n in secondary_domain() if n not in excluded]
    return ExclusionResult(name=name, excluded=excluded, remaining=remaining, rationale=rationale)


def issue_suffix(issue: str) -> int:
    """Last three digits of the issue identifier ("2024153" -> 153)."""
    digits = re.sub(r"\D", "", issue)
    if not digits:
        return 0
    return int(digits[-ISSUE_SUFFIX_DIGITS:])


def day_of_month(draw_date: str) -> int:
    parts = draw_date.split("-")
    if len(parts) >= 3 and parts[2].isdigit():
        return int(parts[2])
    return 0


# ── Rules ─────────────────────────────────────────────────────────

def plus_six(records: list[DrawRecord], now: datetime) -> ExclusionResult:
    s = _previous_secondary(records)
    digit = tail(s + 6)
    excluded = _exclude_tail(digit)
    return _result("plus_six", excluded, f"Plus-six: {s}+6={s + 6}, tail {digit}, exclude {excluded}")


def plus_ten(records: list[DrawRecord], now: datetime) -> ExclusionResult:
    s = _previous_secondary(records)
    digit = tail(s + 10)
    excluded = _exclude_tail(digit)
    return _result("plus_ten", excluded, f"Plus-ten: {s}+10={s + 10}, tail {digit}, exclude {excluded}")


def minus_seven(records: list[DrawRecord], now: datetime) -> ExclusionResult:
    s = _previous_secondary(records)
    diff = abs(s - 7)
    digit = tail(diff)
    excluded = _exclude_tail(digit)
    return _result("minus_seven", excluded, f"Minus-seven: |{s}-7|={diff}, tail {digit}, exclude {excluded}")


def issue_date(records: list[DrawRecord], now: datetime) -> ExclusionResult:
    if not records:
        return _result("issue_date", [], "Issue+date: no previous draw")
    last = records[-1]
    suffix = issue_suffix(last.issue)
    day = day_of_month(last.draw_date)
    raw = (suffix + day) % 16
    number = raw or 16
    return _result(
        "issue_date",
        [number],
        f"Issue+date: issue {suffix} + day {day} = {suffix + day}, mod 16 = {raw}, exclude {number}",
    )


def month(records: list[DrawRecord], now: datetime) -> ExclusionResult:
    m = now.month
    return _result("month", [m], f"Month: current month {m}, exclude {m:02d}")


def tail_plus_one(records: list[DrawRecord], now: datetime) -> ExclusionResult:
    s = _previous_secondary(records)
    s_tail = tail(s)
    digit = tail(s_tail + 1)
    excluded = _exclude_tail(digit)
    return _result(
        "tail_plus_one",
        excluded,
        f"Tail-plus-one: {s} tail {s_tail}, +1 -> tail {digit}, exclude {excluded}",
    )


ExclusionRule = Callable[[list[DrawRecord], datetime], ExclusionResult]

EXCLUSION_RULES: dict[str, ExclusionRule] = {
    "plus_six": plus_six,
    "plus_ten": plus_ten,
    "minus_seven": minus_seven,
    "issue_date": issue_date,
    "month": month,
    "tail_plus_one": tail_plus_one,
}


def combined_exclusion(records: list[DrawRecord], now: datetime) -> CombinedExclusion:
    """
    Run every rule and strongly exclude numbers hit by ≥2 rules.
    The remaining pool is never empty: it falls back to the full domain.
    """
    results = [rule(records, now) for rule in EXCLUSION_RULES.values()]

    votes: Counter = Counter()
    for res in results:
        votes.update(res.excluded)

    strong = sorted(n for n, c in votes.items() if c >= STRONG_EXCLUSION_VOTES)
    remaining = [n for n in secondary_domain() if n not in strong]
    if not remaining:
        log.warning("Strong exclusion removed every secondary number, ignoring exclusion.")
        remaining = secondary_domain()

    log.debug(f"Strong exclusion: {strong} | votes={dict(votes)}")
    return CombinedExclusion(excluded=strong, remaining=remaining, votes=dict(votes), results=results)
