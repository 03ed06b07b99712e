"""
src/models/strategy_engine.py
Four named strategies that turn method outputs into full prediction tuples:
consensus, balanced, trend, exploratory.
"""
from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Iterator

from src.models.statistical.frequency_analyzer import classify, frequency, sort_by_frequency
from src.models.statistical.selection import (
    fill_primary_set,
    random_pick,
    validate_primary_set,
    validate_secondary,
)
from src.models.types import DrawRecord, MethodResult, PredictionTuple
from src.utils.config import SECONDARY_RANGE, get_engine_config
from src.utils.logger import get_logger

log = get_logger("strategy")

STRATEGIES = ("consensus", "balanced", "trend", "exploratory")


@dataclass(frozen=True)
class EngineSettings:
    """Aggregation contract: history floor, output size, retry bound, strategy mix."""

    min_history: int = 50
    target_count: int = 10
    dedup_max_attempts: int = 50
    secondary_top_n: int = 5
    strategy_mix: dict[str, int] = field(
        default_factory=lambda: {"consensus": 3, "balanced": 3, "trend": 2, "exploratory": 2}
    )
    confidence_bands: dict[str, tuple[int, int]] = field(
        default_factory=lambda: {
            "consensus": (85, 95),
            "balanced": (75, 85),
            "trend": (65, 75),
            "exploratory": (55, 65),
        }
    )
    tier_window: int = 50
    hot_threshold: int = 10
    cold_threshold: int = 4
    trend_window: int = 10
    trend_pool: int = 10
    consensus_pool: int = 8

    @classmethod
    def from_config(cls, config: dict[str, Any] | None = None) -> "EngineSettings":
        cfg = config if config is not None else get_engine_config()
        strategy = cfg.get("strategy", {})
        defaults = cls()
        return cls(
            min_history=cfg.get("min_history", defaults.min_history),
            target_count=cfg.get("target_count", defaults.target_count),
            dedup_max_attempts=cfg.get("dedup_max_attempts", defaults.dedup_max_attempts),
            secondary_top_n=cfg.get("secondary_top_n", defaults.secondary_top_n),
            strategy_mix=dict(cfg.get("strategy_mix", defaults.strategy_mix)),
            confidence_bands={
                k: (int(v[0]), int(v[1]))
                for k, v in cfg.get("confidence_bands", defaults.confidence_bands).items()
            },
            tier_window=strategy.get("tier_window", defaults.tier_window),
            hot_threshold=strategy.get("hot_threshold", defaults.hot_threshold),
            cold_threshold=strategy.get("cold_threshold", defaults.cold_threshold),
            trend_window=strategy.get("trend_window", defaults.trend_window),
            trend_pool=strategy.get("trend_pool", defaults.trend_pool),
            consensus_pool=strategy.get("consensus_pool", defaults.consensus_pool),
        )

    def schedule(self) -> list[str]:
        """Fixed fill order: every strategy repeated by its mix weight."""
        order: list[str] = []
        for name in STRATEGIES:
            order.extend([name] * self.strategy_mix.get(name, 0))
        return order or list(STRATEGIES)


class StrategyEngine:
    """
    Builds PredictionTuples from the successful primary-method results and the
    ranked secondary recommendation.
    """

    def __init__(
        self,
        records: list[DrawRecord],
        method_results: list[MethodResult],
        secondary_ranked: list[int],
        rng: random.Random,
        settings: EngineSettings | None = None,
    ):
        self.records = records
        self.method_results = method_results
        self.secondary_ranked = secondary_ranked
        self.rng = rng
        self.settings = settings or EngineSettings()

        self.freq = frequency(records[-self.settings.tier_window:], "primary")
        self.tiers = classify(self.freq, self.settings.hot_threshold, self.settings.cold_threshold)

    # ── Primary numbers ───────────────────────────────────────────

    def _consensus(self) -> list[int]:
        votes: Counter = Counter()
        for result in self.method_results:
            votes.update(result.primary)
        ranked = sorted(sorted(votes), key=lambda n: votes[n], reverse=True)
        return fill_primary_set(ranked[: self.settings.consensus_pool], self.freq, self.rng)

    def _mix(self, hot: int, warm: int, cold: int) -> list[int]:
        picked = (
            random_pick(self.tiers.hot, hot, self.rng)
            + random_pick(self.tiers.warm, warm, self.rng)
            + random_pick(self.tiers.cold, cold, self.rng)
        )
        return fill_primary_set(validate_primary_set(picked), self.freq, self.rng)

    def _trend(self) -> list[int]:
        recent = frequency(self.records[-self.settings.trend_window:], "primary")
        trending = sort_by_frequency(recent)[: self.settings.trend_pool]
        return fill_primary_set(random_pick(trending, 6, self.rng), self.freq, self.rng)

    # ── Secondary number / confidence ─────────────────────────────

    def _secondary(self) -> int:
        top = self.secondary_ranked[: self.settings.secondary_top_n]
        if not top:
            lo, hi = SECONDARY_RANGE
            return self.rng.randint(lo, hi)
        return validate_secondary(self.rng.choice(top))

    def _confidence(self, strategy: str) -> int:
        lo, hi = self.settings.confidence_bands[strategy]
        return lo + self.rng.randrange(max(1, hi - lo))

    # ── Public API ────────────────────────────────────────────────

    def generate(self, strategy: str) -> PredictionTuple:
        if strategy == "consensus":
            primary = self._consensus()
        elif strategy == "balanced":
            primary = self._mix(2, 2, 2)
        elif strategy == "trend":
            primary = self._trend()
        elif strategy == "exploratory":
            primary = self._mix(1, 2, 3)
        else:
            raise ValueError(f"Unknown strategy: {strategy}")

        log.debug(f"[STRATEGY] {strategy}: {sorted(primary)}")

        return PredictionTuple(
            primary=sorted(primary),
            secondary=self._secondary(),
            confidence=self._confidence(strategy),
            strategy=strategy,
        )

    def generate_random(self) -> PredictionTuple:
        return self.generate(self.rng.choice(STRATEGIES))

    def fill(self, start: int, count: int) -> Iterator[PredictionTuple]:
        """Tuples for slots start..count-1, cycling through the fixed strategy mix."""
        order = self.settings.schedule()
        for slot in range(start, count):
            yield self.generate(order[slot % len(order)])
