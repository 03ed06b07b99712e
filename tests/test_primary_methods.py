"""tests/test_primary_methods.py"""
import random

import pytest

from src.models.primary.common import rank_secondary_candidates
from src.models.primary.hot_cold_warm import tier_ratio
from src.models.primary.magnitude_parity import split_categories
from src.models.primary.registry import PRIMARY_METHODS, run_method, run_primary_methods, successful_results
from src.models.primary.sum_tail import top_sum_tails
from src.models.secondary.exclusion import ExclusionResult, minus_seven, plus_six
from src.models.statistical.frequency_analyzer import Tiers


@pytest.mark.parametrize("name", list(PRIMARY_METHODS))
class TestEveryMethod:
    def test_primary_set_is_valid(self, name, history, fixed_now):
        result = PRIMARY_METHODS[name](history, random.Random(7), fixed_now)
        assert result.name == name
        assert len(result.primary) == 6
        assert len(set(result.primary)) == 6
        assert result.primary == sorted(result.primary)
        assert all(1 <= n <= 33 for n in result.primary)

    def test_secondary_candidates(self, name, history, fixed_now):
        result = PRIMARY_METHODS[name](history, random.Random(7), fixed_now)
        assert 1 <= len(result.secondary_candidates) <= 5
        assert len(set(result.secondary_candidates)) == len(result.secondary_candidates)
        assert all(1 <= n <= 16 for n in result.secondary_candidates)
        assert result.rationale

    def test_reproducible_for_seed(self, name, history, fixed_now):
        a = PRIMARY_METHODS[name](history, random.Random(3), fixed_now)
        b = PRIMARY_METHODS[name](history, random.Random(3), fixed_now)
        assert a.primary == b.primary
        assert a.secondary_candidates == b.secondary_candidates

    def test_degenerate_history(self, name, scenario_records, fixed_now):
        result = PRIMARY_METHODS[name](scenario_records, random.Random(1), fixed_now)
        assert len(set(result.primary)) == 6


class TestSecondaryExclusionPerMethod:
    def test_decision_tree_skips_plus_six(self, history, fixed_now):
        excluded = plus_six(history, fixed_now).excluded
        result = PRIMARY_METHODS["decision_tree"](history, random.Random(2), fixed_now)
        assert not set(result.secondary_candidates) & set(excluded)

    def test_zone_distribution_skips_minus_seven(self, history, fixed_now):
        excluded = minus_seven(history, fixed_now).excluded
        result = PRIMARY_METHODS["zone_distribution"](history, random.Random(2), fixed_now)
        assert not set(result.secondary_candidates) & set(excluded)

    def test_hot_cold_warm_skips_month(self, history, fixed_now):
        result = PRIMARY_METHODS["hot_cold_warm"](history, random.Random(2), fixed_now)
        assert fixed_now.month not in result.secondary_candidates


class TestHelpers:
    def test_split_categories_balanced(self):
        assert split_categories(3, 3, 3, 3) == (2, 1, 1, 2)

    def test_split_categories_sum_to_six(self):
        for small in range(7):
            for odd in range(7):
                counts = split_categories(small, 6 - small, odd, 6 - odd)
                assert all(c >= 0 for c in counts)

    def test_tier_ratio_hot(self, make_record):
        tiers = Tiers(hot=[1, 2, 3, 4, 5, 6], warm=[], cold=list(range(7, 34)))
        recent = [make_record(i, [1, 2, 3, 4, 5, 6], 1) for i in range(10)]
        assert tier_ratio(recent, tiers) == (3, 2, 1)

    def test_tier_ratio_cold(self, make_record):
        tiers = Tiers(hot=[1, 2, 3, 4, 5, 6], warm=[], cold=list(range(7, 34)))
        recent = [make_record(i, [7, 8, 9, 10, 11, 12], 1) for i in range(10)]
        assert tier_ratio(recent, tiers) == (1, 2, 3)

    def test_tier_ratio_default(self):
        assert tier_ratio([], Tiers([], [], [])) == (2, 2, 2)

    def test_top_sum_tails(self, make_record):
        records = [make_record(i, [1, 2, 3, 4, 5, 6], 1) for i in range(3)]   # sum 21
        records.append(make_record(3, [1, 2, 3, 4, 5, 7], 1))                  # sum 22
        assert top_sum_tails(records)[:2] == [1, 2]

    def test_secondary_candidates_with_empty_pool(self, make_record):
        window = [make_record(i, [1, 2, 3, 4, 5, 6], 9) for i in range(3)]
        window.append(make_record(3, [1, 2, 3, 4, 5, 6], 4))
        everything = ExclusionResult("all", list(range(1, 17)), [], "excludes every number")
        ranked = rank_secondary_candidates(window, everything)
        assert ranked == [9, 4, 1, 2, 3]


class TestRegistry:
    def test_failing_method_becomes_failed_outcome(self, history, fixed_now):
        def broken(records, rng, now):
            raise RuntimeError("boom")

        outcome = run_method("broken", broken, history, random.Random(0), fixed_now)
        assert not outcome.ok
        assert "boom" in outcome.error

    def test_run_primary_methods_omits_failures(self, history, fixed_now):
        def broken(records, rng, now):
            raise ZeroDivisionError

        methods = {"decision_tree": PRIMARY_METHODS["decision_tree"], "broken": broken}
        outcomes = run_primary_methods(history, random.Random(0), fixed_now, methods=methods)
        assert [o.name for o in outcomes] == ["decision_tree", "broken"]
        results = successful_results(outcomes)
        assert [r.name for r in results] == ["decision_tree"]

    def test_all_methods_succeed(self, history, fixed_now):
        outcomes = run_primary_methods(history, random.Random(0), fixed_now)
        assert len(outcomes) == 6
        assert all(o.ok for o in outcomes)
