"""tests/test_strategy_engine.py"""
import random

import pytest

from src.models.strategy_engine import STRATEGIES, EngineSettings, StrategyEngine
from src.models.types import MethodResult


def _results():
    return [
        MethodResult("a", [1, 2, 3, 4, 5, 6], [1, 2], ""),
        MethodResult("b", [1, 2, 3, 10, 11, 12], [1], ""),
        MethodResult("c", [1, 2, 20, 21, 22, 23], [3], ""),
    ]


class TestEngineSettings:
    def test_defaults_from_config_file(self):
        settings = EngineSettings.from_config()
        assert settings.min_history == 50
        assert settings.target_count == 10
        assert settings.dedup_max_attempts == 50

    def test_schedule_follows_mix(self):
        assert EngineSettings().schedule() == [
            "consensus", "consensus", "consensus",
            "balanced", "balanced", "balanced",
            "trend", "trend",
            "exploratory", "exploratory",
        ]

    def test_from_config_overrides(self):
        settings = EngineSettings.from_config({"dedup_max_attempts": 0, "strategy": {"hot_threshold": 7}})
        assert settings.dedup_max_attempts == 0
        assert settings.hot_threshold == 7
        assert settings.cold_threshold == 4


class TestStrategyEngine:
    def setup_method(self):
        self.secondary = [3, 7, 11, 2, 9, 5]

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_generates_valid_tuple(self, strategy, history):
        engine = StrategyEngine(history, _results(), self.secondary, random.Random(4))
        p = engine.generate(strategy)
        assert p.strategy == strategy
        assert len(set(p.primary)) == 6
        assert p.primary == sorted(p.primary)
        assert all(1 <= n <= 33 for n in p.primary)
        assert p.secondary in self.secondary[:5]

    @pytest.mark.parametrize("strategy", STRATEGIES)
    def test_confidence_band(self, strategy, history):
        settings = EngineSettings()
        lo, hi = settings.confidence_bands[strategy]
        engine = StrategyEngine(history, _results(), self.secondary, random.Random(9), settings)
        for _ in range(20):
            assert lo <= engine.generate(strategy).confidence < hi

    def test_consensus_prefers_shared_numbers(self, history):
        engine = StrategyEngine(history, _results(), self.secondary, random.Random(1))
        p = engine.generate("consensus")
        # 1 and 2 are proposed by every method
        assert {1, 2} <= set(p.primary)

    def test_consensus_without_results_still_fills(self, history):
        engine = StrategyEngine(history, [], self.secondary, random.Random(1))
        assert len(engine.generate("consensus").primary) == 6

    def test_unknown_strategy(self, history):
        engine = StrategyEngine(history, _results(), self.secondary, random.Random(1))
        with pytest.raises(ValueError):
            engine.generate("lucky")

    def test_fill_uses_schedule_from_offset(self, history):
        engine = StrategyEngine(history, _results(), self.secondary, random.Random(1))
        filled = list(engine.fill(7, 10))
        assert [p.strategy for p in filled] == ["trend", "exploratory", "exploratory"]

    def test_empty_secondary_ranking_falls_back_to_domain(self, history):
        engine = StrategyEngine(history, _results(), [], random.Random(1))
        assert 1 <= engine.generate("trend").secondary <= 16
