"""tests/test_validator.py"""
from src.models.types import PredictionTuple
from src.models.validator import collides_with_history, deduplicate, history_keys, is_valid, same_prediction


def _p(primary, secondary, confidence=80, strategy="balanced"):
    return PredictionTuple(primary=list(primary), secondary=secondary, confidence=confidence, strategy=strategy)


class TestIsValid:
    def test_valid(self):
        assert is_valid(_p([1, 2, 3, 4, 5, 6], 16))

    def test_wrong_size_or_duplicates(self):
        assert not is_valid(_p([1, 2, 3, 4, 5], 1))
        assert not is_valid(_p([1, 1, 3, 4, 5, 6], 1))

    def test_out_of_range(self):
        assert not is_valid(_p([0, 2, 3, 4, 5, 6], 1))
        assert not is_valid(_p([1, 2, 3, 4, 5, 34], 1))
        assert not is_valid(_p([1, 2, 3, 4, 5, 6], 17))
        assert not is_valid(_p([1, 2, 3, 4, 5, 6], 0))


class TestEquality:
    def test_order_insensitive(self):
        assert same_prediction(_p([6, 5, 4, 3, 2, 1], 3), _p([1, 2, 3, 4, 5, 6], 3, confidence=60))
        assert not same_prediction(_p([1, 2, 3, 4, 5, 6], 3), _p([1, 2, 3, 4, 5, 6], 4))

    def test_history_collision(self, make_record):
        keys = history_keys([make_record(0, [3, 1, 2, 6, 5, 4], 9)])
        assert collides_with_history(_p([1, 2, 3, 4, 5, 6], 9), keys)
        assert not collides_with_history(_p([1, 2, 3, 4, 5, 6], 8), keys)


class TestDeduplicate:
    def test_first_seen_order_and_sorted_output(self, make_record):
        history = [make_record(0, [1, 2, 3, 4, 5, 6], 1)]
        candidates = [
            _p([12, 8, 7, 9, 10, 11], 2, confidence=70),
            _p([1, 2, 3, 4, 5, 6], 1),                 # historical
            _p([7, 8, 9, 10, 11, 12], 2, confidence=90),  # duplicate of first
            _p([1, 2, 3, 4, 5, 6], 2),
            _p([1, 2, 3, 4, 5], 2),                    # invalid
        ]
        kept = deduplicate(candidates, history)
        assert [p.key for p in kept] == [((7, 8, 9, 10, 11, 12), 2), ((1, 2, 3, 4, 5, 6), 2)]
        assert kept[0].primary == [7, 8, 9, 10, 11, 12]
        assert kept[0].confidence == 70

    def test_incremental_extension(self):
        kept = deduplicate([_p([1, 2, 3, 4, 5, 6], 2)], [])
        extended = deduplicate([_p([1, 2, 3, 4, 5, 6], 2), _p([1, 2, 3, 4, 5, 7], 2)], keys=set(), kept=kept)
        assert len(extended) == 2
        assert len(kept) == 1

    def test_no_pairwise_duplicates(self, history):
        keys = history_keys(history)
        candidates = [_p(r.primary, r.secondary) for r in history[:20]]
        candidates += [_p([1, 2, 3, 4, 5, 6], s % 16 + 1) for s in range(40)]
        kept = deduplicate(candidates, keys=keys)
        assert len({p.key for p in kept}) == len(kept)
        assert not any(p.key in keys for p in kept)
        assert len(kept) <= 16
