"""tests/test_secondary.py"""
from datetime import datetime
from unittest.mock import patch

from src.models.secondary.analysis import (
    EVEN,
    ODD,
    combined_analysis,
    hot_cold_trend,
    joint_category,
    parity_streak,
    size_parity_majority,
)
from src.models.secondary.exclusion import (
    ExclusionResult,
    combined_exclusion,
    issue_date,
    issue_suffix,
    minus_seven,
    month,
    plus_six,
    plus_ten,
    tail_plus_one,
)
from src.models.secondary.recommendation import merge_ranking, recommend_secondary
from src.models.types import DrawRecord

NOW = datetime(2024, 10, 15, 10, 30)


def _last(secondary: int, issue: str = "2024010", draw_date: str = "2024-10-08") -> list[DrawRecord]:
    return [DrawRecord.create(issue, draw_date, [1, 2, 3, 4, 5, 6], secondary)]


class TestExclusionRules:
    def test_plus_six(self):
        assert plus_six(_last(2), NOW).excluded == [8]
        assert plus_six(_last(6), NOW).excluded == [2, 12]

    def test_plus_ten(self):
        assert plus_ten(_last(5), NOW).excluded == [5, 15]

    def test_minus_seven(self):
        assert minus_seven(_last(7), NOW).excluded == [10]
        assert minus_seven(_last(2), NOW).excluded == [5, 15]

    def test_issue_date(self):
        # 150 + 6 = 156, 156 mod 16 = 12
        assert issue_date(_last(1, "2024150", "2024-03-06"), NOW).excluded == [12]

    def test_issue_date_zero_maps_to_sixteen(self):
        # 10 + 6 = 16, 16 mod 16 = 0
        assert issue_date(_last(1, "2024010", "2024-01-06"), NOW).excluded == [16]

    def test_month(self):
        assert month([], NOW).excluded == [10]

    def test_tail_plus_one(self):
        assert tail_plus_one(_last(9), NOW).excluded == [10]
        assert tail_plus_one(_last(16), NOW).excluded == [7]

    def test_remaining_complements_excluded(self):
        res = plus_six(_last(6), NOW)
        assert sorted(res.excluded + res.remaining) == list(range(1, 17))

    def test_no_history_uses_default(self):
        assert plus_six([], NOW).excluded == [7]
        assert issue_date([], NOW).excluded == []

    def test_issue_suffix(self):
        assert issue_suffix("2024153") == 153
        assert issue_suffix("abc") == 0


class TestCombinedExclusion:
    def test_strong_exclusion_needs_two_votes(self):
        # S=2: plus_six [8], plus_ten [2,12], minus_seven [5,15], tail_plus_one [3,13],
        # month [10], issue_date 10+8=18 mod 16=2 -> [2]
        combined = combined_exclusion(_last(2), NOW)
        assert combined.excluded == [2]
        assert combined.votes[2] == 2
        assert 2 not in combined.remaining
        assert len(combined.remaining) == 15
        assert len(combined.results) == 6

    def test_everything_excluded_falls_back_to_full_domain(self):
        def exclude_all(records, now):
            return ExclusionResult("all", list(range(1, 17)), [], "excludes every number")

        rules = {"first": exclude_all, "second": exclude_all}
        with patch.dict("src.models.secondary.exclusion.EXCLUSION_RULES", rules, clear=True):
            combined = combined_exclusion(_last(2), NOW)
        assert combined.excluded == list(range(1, 17))
        assert combined.remaining == list(range(1, 17))
        assert len(combined.results) == 2


class TestAnalysis:
    def test_parity_streak_reverses_after_three(self, make_record):
        records = [make_record(i, [1, 2, 3, 4, 5, 6], s) for i, s in enumerate([2, 4, 1, 3, 5])]
        result = parity_streak(records)
        assert set(result.ranked) == set(EVEN)

    def test_parity_streak_follows_majority(self, make_record):
        records = [make_record(i, [1, 2, 3, 4, 5, 6], s) for i, s in enumerate([1, 3, 5, 2, 7, 4])]
        result = parity_streak(records)
        assert set(result.ranked) == set(ODD)

    def test_methods_rank_within_domain(self, history):
        for method in (size_parity_majority, parity_streak, joint_category, hot_cold_trend):
            result = method(history)
            assert result.ranked
            assert len(set(result.ranked)) == len(result.ranked)
            assert all(1 <= n <= 16 for n in result.ranked)
            assert result.rationale

    def test_combined_analysis_ranks_whole_domain(self, history):
        combined = combined_analysis(history)
        assert sorted(combined.ranked) == list(range(1, 17))
        scores = [combined.scores[n] for n in combined.ranked]
        assert scores == sorted(scores, reverse=True)


class TestRecommendation:
    def test_merge_keeps_order_and_drops_excluded(self):
        ranked = merge_ranking(list(range(1, 17)), [1, 2, 3])
        assert ranked == list(range(4, 14))

    def test_merge_backfills_when_too_few_survive(self):
        analysis = [5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16, 1, 2, 3, 4]
        excluded = [n for n in range(1, 17) if n not in (7, 9)]
        ranked = merge_ranking(analysis, excluded)
        assert ranked[:2] == [7, 9]
        assert len(ranked) == 10
        assert len(set(ranked)) == 10

    def test_recommend_secondary(self, history, fixed_now):
        rec = recommend_secondary(history, fixed_now)
        assert 5 <= len(rec.ranked) <= 10
        assert len(set(rec.ranked)) == len(rec.ranked)
        assert all(1 <= n <= 16 for n in rec.ranked)
        assert "Strongly excluded" in rec.rationale
