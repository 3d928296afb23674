"""
Tests for the Jones, Motzkin and Kauffman idempotent counts
"""

import pytest

from planar_idempotents.constants import MOTZKIN_WEIGHT_0, MOTZKIN_WEIGHT_1
from planar_idempotents import monoids
from planar_idempotents.monoids import (
    check_degree, count_idempotents, count_jones, count_kauffman, count_motzkin,
    motzkin_even_rank_words, motzkin_odd_rank_words,
)
from planar_idempotents.reducer import ParallelReducer, ReducerConfig
from planar_idempotents.reference import count_idempotents_brute_force


THREADS = ReducerConfig(workers=3, use_processes=False, serial_threshold=0)


class TestKnownValues:
    @pytest.mark.parametrize("degree, expected", [(1, 1), (2, 2), (3, 5), (4, 12)])
    def test_jones(self, degree, expected):
        assert count_jones(degree).total == expected

    @pytest.mark.parametrize("degree, expected", [(1, 2), (2, 7)])
    def test_motzkin(self, degree, expected):
        assert count_motzkin(degree).total == expected

    @pytest.mark.parametrize("degree, expected", [(1, 1), (2, 1), (3, 3), (4, 5)])
    def test_kauffman(self, degree, expected):
        assert count_kauffman(degree).total == expected


class TestAgainstBruteForce:
    @pytest.mark.parametrize("degree", range(1, 7))
    def test_jones(self, degree):
        assert count_jones(degree).total == count_idempotents_brute_force("jones", degree)

    @pytest.mark.parametrize("degree", range(1, 5))
    def test_motzkin(self, degree):
        assert count_motzkin(degree).total == count_idempotents_brute_force("motzkin", degree)

    @pytest.mark.parametrize("degree", range(1, 7))
    def test_kauffman(self, degree):
        assert count_kauffman(degree).total == count_idempotents_brute_force("kauffman", degree)


class TestDrivers:
    def test_degree_one(self):
        result = count_jones(1)
        assert result.total == 1
        assert result.base == 1
        assert result.pairs == 0

    def test_jones_even_phases(self):
        result = count_jones(6)
        assert len(result.phases) == 4
        assert result.total == result.base + result.pairs

    def test_jones_odd_phases(self):
        result = count_jones(5)
        assert list(result.phases) == ["pairs"]

    @pytest.mark.parametrize("monoid", ["jones", "motzkin", "kauffman"])
    def test_parallel_matches_serial(self, monoid):
        serial = count_idempotents(monoid, 5, ReducerConfig(workers=1))
        parallel = count_idempotents(monoid, 5, THREADS)
        assert serial.total == parallel.total
        assert serial.phases == parallel.phases

    def test_repeatable(self):
        reducer = ParallelReducer(THREADS)
        assert count_jones(8, reducer).total == count_jones(8, reducer).total

    def test_result_fields(self):
        result = count_idempotents("kauffman", 4)
        assert result.monoid == "kauffman"
        assert result.degree == 4
        assert result.elapsed >= 0


class TestMotzkinWords:
    @pytest.mark.parametrize("degree", range(1, 9))
    def test_word_counts_match_tables(self, degree):
        assert len(motzkin_even_rank_words(degree)) == MOTZKIN_WEIGHT_0[degree] - 1
        assert len(motzkin_odd_rank_words(degree)) == MOTZKIN_WEIGHT_1[degree]

    def test_word_count_mismatch_aborts(self, monkeypatch):
        wrong = tuple(count + 1 for count in MOTZKIN_WEIGHT_1)
        monkeypatch.setattr(monoids, "MOTZKIN_WEIGHT_1", wrong)
        with pytest.raises(AssertionError, match="weight 1 words"):
            motzkin_odd_rank_words(3)
        with pytest.raises(AssertionError):
            count_motzkin(3)

    def test_odd_rank_extra_point_is_last(self):
        for degree in (2, 3):
            assert motzkin_odd_rank_words(degree).length == degree + 1


class TestValidation:
    @pytest.mark.parametrize("degree", [0, -3, 41])
    def test_degree_out_of_range(self, degree):
        with pytest.raises(ValueError):
            count_idempotents("jones", degree)

    def test_degree_not_an_integer(self):
        with pytest.raises(ValueError):
            check_degree(2.0)
        with pytest.raises(ValueError):
            check_degree(True)

    def test_unknown_monoid(self):
        with pytest.raises(ValueError, match="Unknown monoid"):
            count_idempotents("brauer", 3)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
