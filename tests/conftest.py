"""tests/conftest.py"""
import random
from datetime import date, datetime, timedelta

import pytest

from src.models.types import DrawRecord


def build_record(idx: int, primary, secondary: int, year: int = 2024) -> DrawRecord:
    draw_date = date(year, 1, 2) + timedelta(days=idx * 2 + idx // 3)
    return DrawRecord.create(f"{year}{idx + 1:03d}", draw_date.isoformat(), list(primary), secondary)


def build_history(count: int, seed: int = 42) -> list[DrawRecord]:
    rng = random.Random(seed)
    return [
        build_record(i, rng.sample(range(1, 34), 6), rng.randint(1, 16))
        for i in range(count)
    ]


@pytest.fixture
def make_record():
    return build_record


@pytest.fixture
def history() -> list[DrawRecord]:
    """120 pseudo-random draws, ascending by issue."""
    return build_history(120)


@pytest.fixture
def scenario_records() -> list[DrawRecord]:
    """49 × [1..6]+01 followed by [7..12]+02 as the latest draw."""
    records = [build_record(i, [1, 2, 3, 4, 5, 6], 1) for i in range(49)]
    records.append(build_record(49, [7, 8, 9, 10, 11, 12], 2))
    return records


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 10, 15, 10, 30)
