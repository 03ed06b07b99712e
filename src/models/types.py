"""
src/models/types.py
Value types shared by the statistical methods, strategy engine and store.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.utils.config import PRIMARY_MAGNITUDE_SPLIT, PRIMARY_PICK, PRIMARY_RANGE, SECONDARY_RANGE

FrequencyMap = dict[int, int]
PredictionKey = tuple[tuple[int, ...], int]


@dataclass(frozen=True)
class DrawRecord:
    """One historical draw. Primary numbers are stored ascending."""

    issue: str
    draw_date: str
    primary: tuple[int, ...]
    secondary: int

    @classmethod
    def create(cls, issue: str, draw_date: str, primary: list[int], secondary: int) -> "DrawRecord":
        """Sort, validate and build a record. Raises ValueError on bad data."""
        nums = tuple(sorted(int(n) for n in primary))
        lo, hi = PRIMARY_RANGE
        if len(nums) != PRIMARY_PICK:
            raise ValueError(f"Expected {PRIMARY_PICK} primary numbers, got {len(nums)}: {nums}")
        if len(set(nums)) != PRIMARY_PICK:
            raise ValueError(f"Duplicate primary numbers: {nums}")
        if not all(lo <= n <= hi for n in nums):
            raise ValueError(f"Primary numbers out of range [{lo},{hi}]: {nums}")
        s_lo, s_hi = SECONDARY_RANGE
        secondary = int(secondary)
        if not s_lo <= secondary <= s_hi:
            raise ValueError(f"Secondary number out of range [{s_lo},{s_hi}]: {secondary}")
        return cls(issue=str(issue), draw_date=str(draw_date), primary=nums, secondary=secondary)

    @property
    def sum(self) -> int:
        return sum(self.primary)

    @property
    def odd_count(self) -> int:
        return sum(1 for n in self.primary if n % 2 == 1)

    @property
    def high_count(self) -> int:
        return sum(1 for n in self.primary if n >= PRIMARY_MAGNITUDE_SPLIT)

    @property
    def key(self) -> PredictionKey:
        return self.primary, self.secondary

    def to_row(self) -> dict[str, Any]:
        return {
            "issue": self.issue,
            "draw_date": self.draw_date,
            "primary_numbers": list(self.primary),
            "secondary_number": self.secondary,
            "sum_value": self.sum,
            "odd_count": self.odd_count,
            "high_count": self.high_count,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "DrawRecord":
        return cls.create(
            issue=row["issue"],
            draw_date=row["draw_date"],
            primary=row["primary_numbers"],
            secondary=row["secondary_number"],
        )


@dataclass
class MethodResult:
    """Output of one primary-number method."""

    name: str
    primary: list[int]
    secondary_candidates: list[int]
    rationale: str


@dataclass
class MethodOutcome:
    """Success-or-failure wrapper around one method invocation."""

    name: str
    result: MethodResult | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None


@dataclass
class PredictionTuple:
    primary: list[int]
    secondary: int
    confidence: int
    strategy: str

    @property
    def key(self) -> PredictionKey:
        return tuple(sorted(self.primary)), self.secondary

    def to_dict(self) -> dict[str, Any]:
        return {
            "primary": list(self.primary),
            "secondary": self.secondary,
            "confidence": self.confidence,
            "strategy": self.strategy,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PredictionTuple":
        return cls(
            primary=sorted(int(n) for n in data["primary"]),
            secondary=int(data["secondary"]),
            confidence=int(data.get("confidence", 0)),
            strategy=str(data.get("strategy", "")),
        )


@dataclass(frozen=True)
class PredictionRun:
    """A saved batch of predictions for one target draw."""

    id: str
    target_issue: str
    target_date: str
    predictions: list[PredictionTuple] = field(default_factory=list)
    created_at: str = ""

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "target_issue": self.target_issue,
            "target_date": self.target_date,
            "predictions": [p.to_dict() for p in self.predictions],
            "created_at": self.created_at,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "PredictionRun":
        return cls(
            id=row["id"],
            target_issue=row["target_issue"],
            target_date=row["target_date"],
            predictions=[PredictionTuple.from_dict(p) for p in row.get("predictions") or []],
            created_at=row.get("created_at", ""),
        )
