"""tests/test_stats.py"""
import random

import pytest

from src.models.statistical.distribution import (
    magnitude_ratio,
    mode_pattern,
    parity_ratio,
    residue_distribution,
    round_half_up,
    sum_stats,
    tail,
    top_patterns,
    zone_distribution,
)
from src.models.statistical.frequency_analyzer import classify, frequency, sort_by_frequency
from src.models.statistical.selection import (
    fill_primary_set,
    random_pick,
    validate_primary_set,
    validate_secondary,
    weighted_sample,
)


class TestFrequency:
    def test_zero_initialised_over_domain(self):
        freq = frequency([], "primary")
        assert sorted(freq) == list(range(1, 34))
        assert all(v == 0 for v in freq.values())

        sec = frequency([], "secondary")
        assert sorted(sec) == list(range(1, 17))

    def test_counts(self, make_record):
        records = [
            make_record(0, [1, 2, 3, 4, 5, 6], 3),
            make_record(1, [1, 7, 8, 9, 10, 33], 3),
        ]
        freq = frequency(records, "primary")
        assert freq[1] == 2
        assert freq[33] == 1
        assert freq[20] == 0
        assert frequency(records, "secondary")[3] == 2

    def test_unknown_field_raises(self):
        with pytest.raises(ValueError):
            frequency([], "bonus")

    def test_sort_ties_keep_ascending_order(self):
        freq = {1: 2, 2: 5, 3: 2, 4: 0}
        assert sort_by_frequency(freq) == [2, 1, 3, 4]
        assert sort_by_frequency(freq, desc=False) == [4, 1, 3, 2]


class TestClassify:
    def test_partition_is_exhaustive_and_disjoint(self, history):
        freq = frequency(history[-50:], "primary")
        tiers = classify(freq, 10, 4)
        combined = tiers.hot + tiers.warm + tiers.cold
        assert sorted(combined) == list(range(1, 34))
        assert len(set(combined)) == 33

    def test_thresholds(self):
        freq = {1: 10, 2: 11, 3: 4, 4: 5, 5: 9, 6: 0}
        tiers = classify(freq, 10, 4)
        assert tiers.hot == [1, 2]
        assert tiers.warm == [4, 5]
        assert tiers.cold == [3, 6]


class TestWeightedSample:
    def test_forced_when_k_equals_candidates(self):
        for seed in range(20):
            assert weighted_sample([5, 10], [1, 1], 2, random.Random(seed)) == [5, 10]

    def test_distinct_and_sorted(self):
        picked = weighted_sample(list(range(1, 34)), [1] * 33, 6, random.Random(3))
        assert len(picked) == 6
        assert len(set(picked)) == 6
        assert picked == sorted(picked)

    def test_reproducible_for_seed(self):
        cands = list(range(1, 34))
        weights = [n % 5 for n in cands]
        a = weighted_sample(cands, weights, 6, random.Random(11))
        b = weighted_sample(cands, weights, 6, random.Random(11))
        assert a == b

    def test_k_larger_than_pool_returns_everything(self):
        assert weighted_sample([3, 1, 2], [5, 0, 1], 10, random.Random(0)) == [1, 2, 3]

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            weighted_sample([1, 2], [1], 1, random.Random(0))

    def test_heavy_weight_dominates(self):
        rng = random.Random(5)
        hits = sum(1 for _ in range(200) if weighted_sample([1, 2], [1000, 1], 1, rng) == [1])
        assert hits > 180


class TestRandomPick:
    def test_caps_at_population(self):
        assert sorted(random_pick([1, 2, 3], 10, random.Random(0))) == [1, 2, 3]

    def test_zero_or_empty(self):
        assert random_pick([1, 2, 3], 0, random.Random(0)) == []
        assert random_pick([], 3, random.Random(0)) == []


class TestDistribution:
    def test_zone_distribution(self):
        assert zone_distribution([1, 5, 10, 15, 20, 30]) == (3, 2, 1)

    def test_residue_distribution(self):
        assert residue_distribution([3, 4, 5, 6, 7, 8]) == (2, 2, 2)
        assert residue_distribution([3, 6, 9, 12, 15, 18]) == (6, 0, 0)

    def test_parity_ratio(self):
        assert parity_ratio([1, 2, 3, 4, 5, 7]) == (4, 2)

    def test_magnitude_ratio(self):
        assert magnitude_ratio([1, 2, 16, 17, 20, 33], 17) == (3, 3)

    def test_mode_pattern_first_seen_wins_ties(self):
        assert mode_pattern([(1, 5), (2, 4), (2, 4), (1, 5)]) == ((1, 5), 2)
        assert mode_pattern([(3, 3), (2, 4), (2, 4)]) == ((2, 4), 2)

    def test_mode_pattern_empty_raises(self):
        with pytest.raises(ValueError):
            mode_pattern([])

    def test_top_patterns(self):
        ranked = top_patterns([(1,), (2,), (2,), (3,), (3,), (3,)], n=2)
        assert ranked == [((3,), 3), ((2,), 2)]

    def test_tail_and_rounding(self):
        assert tail(26) == 6
        assert tail(-7) == 7
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4) == 2
        assert round_half_up(-0.5) == 0

    def test_sum_stats(self, make_record):
        records = [
            make_record(0, [1, 2, 3, 4, 5, 6], 1),    # 21
            make_record(1, [1, 2, 3, 4, 5, 16], 1),   # 31
        ]
        mean, std = sum_stats(records)
        assert mean == pytest.approx(26.0)
        assert std == pytest.approx(5.0)
        assert sum_stats([]) == (0.0, 0.0)


class TestValidation:
    def test_validate_primary_set(self):
        assert validate_primary_set([5, 5, 40, 0, 3, 1, 2, 9, 8, 7]) == [1, 2, 3, 5, 7, 8]

    def test_fill_is_idempotent_on_valid_set(self, history):
        freq = frequency(history, "primary")
        full = [3, 8, 15, 21, 27, 33]
        assert fill_primary_set(full, freq, random.Random(1)) == full

    def test_fill_tops_up_to_six(self, history):
        freq = frequency(history, "primary")
        filled = fill_primary_set([1, 2], freq, random.Random(1))
        assert len(filled) == 6
        assert len(set(filled)) == 6
        assert {1, 2} <= set(filled)
        assert filled == sorted(filled)
        assert all(1 <= n <= 33 for n in filled)

    def test_validate_secondary(self):
        assert validate_secondary(0) == 1
        assert validate_secondary(17) == 16
        assert validate_secondary(7.5) == 8
        assert validate_secondary(2.4) == 2
        assert validate_secondary(validate_secondary(12)) == 12
