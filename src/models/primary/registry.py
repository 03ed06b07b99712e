"""
src/models/primary/registry.py
Named table of the six primary methods and a runner that turns each call
into a MethodOutcome.
"""
from __future__ import annotations

import random
from datetime import datetime
from typing import Callable

from src.models.primary.decision_tree import decision_tree
from src.models.primary.hot_cold_warm import hot_cold_warm
from src.models.primary.magnitude_parity import magnitude_parity
from src.models.primary.mod3_residue import mod3_residue
from src.models.primary.sum_tail import sum_tail
from src.models.primary.zone_distribution import zone_distribution_method
from src.models.statistical.selection import validate_primary_set
from src.models.types import DrawRecord, MethodOutcome, MethodResult
from src.utils.config import PRIMARY_PICK
from src.utils.logger import get_logger

log = get_logger("method.registry")

PrimaryMethod = Callable[[list[DrawRecord], random.Random, datetime], MethodResult]

PRIMARY_METHODS: dict[str, PrimaryMethod] = {
    "decision_tree": decision_tree,
    "sum_tail": sum_tail,
    "zone_distribution": zone_distribution_method,
    "mod3_residue": mod3_residue,
    "hot_cold_warm": hot_cold_warm,
    "magnitude_parity": magnitude_parity,
}


def run_method(
    name: str,
    method: PrimaryMethod,
    records: list[DrawRecord],
    rng: random.Random,
    now: datetime,
) -> MethodOutcome:
    """Run one method. Any exception or malformed result becomes a failed outcome."""
    try:
        result = method(records, rng, now)
    except Exception as exc:
        log.warning(f"Method {name} failed: {exc!r}")
        return MethodOutcome(name=name, error=repr(exc))

    if len(validate_primary_set(result.primary)) != PRIMARY_PICK or len(result.primary) != PRIMARY_PICK:
        msg = f"invalid primary set {result.primary}"
        log.warning(f"Method {name} produced an {msg}")
        return MethodOutcome(name=name, error=msg)

    log.debug(f"Method {name}: {result.primary} | secondary {result.secondary_candidates}")
    return MethodOutcome(name=name, result=result)


def run_primary_methods(
    records: list[DrawRecord],
    rng: random.Random,
    now: datetime,
    methods: dict[str, PrimaryMethod] | None = None,
) -> list[MethodOutcome]:
    """One outcome per registered method, in registry order."""
    table = PRIMARY_METHODS if methods is None else methods
    outcomes = [run_method(name, method, records, rng, now) for name, method in table.items()]
    ok = sum(1 for o in outcomes if o.ok)
    log.info(f"Primary methods: {ok}/{len(outcomes)} succeeded")
    return outcomes


def successful_results(outcomes: list[MethodOutcome]) -> list[MethodResult]:
    return [o.result for o in outcomes if o.result is not None]
