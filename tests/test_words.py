"""
Tests for Dyck word, subset and Motzkin word generation
"""

import pytest
from math import comb

from planar_idempotents.constants import CATALAN_NUMBERS
from planar_idempotents.words import (
    minimum, maximum, next_word, dyck_words, is_dyck_word,
    reverse_word, is_palindrome, subsets, motzkin_words,
)


class TestDyckWords:
    def test_small_half_length(self):
        assert list(dyck_words(1)) == [0b10]
        assert list(dyck_words(2)) == [0b1010, 0b1100]

    def test_count_matches_catalan(self):
        for n in range(0, 11):
            assert sum(1 for _ in dyck_words(n)) == CATALAN_NUMBERS[n]

    def test_strictly_increasing_and_valid(self):
        for n in range(1, 9):
            words = list(dyck_words(n))
            assert all(a < b for a, b in zip(words, words[1:]))
            assert all(is_dyck_word(w, 2 * n) for w in words)

    def test_minimum_and_maximum(self):
        assert minimum(3) == 0b101010
        assert maximum(3) == 0b111000
        words = list(dyck_words(3))
        assert words[0] == minimum(3)
        assert words[-1] == maximum(3)

    def test_successor_walks_from_minimum_to_maximum(self):
        n = 6
        w = minimum(n)
        for _ in range(CATALAN_NUMBERS[n] - 1):
            w = next_word(w)
        assert w == maximum(n)

    def test_empty_word(self):
        assert list(dyck_words(0)) == [0]

    def test_half_length_out_of_range(self):
        with pytest.raises(ValueError):
            list(dyck_words(31))
        with pytest.raises(ValueError):
            minimum(-1)

    def test_is_dyck_word_rejects(self):
        assert not is_dyck_word(0b0110, 4)
        assert not is_dyck_word(0b1110, 4)
        assert is_dyck_word(0b1100, 4)


class TestReverse:
    def test_reverse_is_mirror(self):
        # (())() <-> ()(())
        assert reverse_word(0b110010, 6) == 0b101100
        assert reverse_word(0b101100, 6) == 0b110010

    def test_reverse_is_involution(self):
        for w in dyck_words(5):
            assert reverse_word(reverse_word(w, 10), 10) == w
            assert is_dyck_word(reverse_word(w, 10), 10)

    def test_palindromes(self):
        assert is_palindrome(0b1100, 4)
        assert is_palindrome(0b110100, 6)
        assert not is_palindrome(0b110010, 6)
        palindromes = [w for w in dyck_words(3) if is_palindrome(w, 6)]
        assert palindromes == [0b101010, 0b110100, 0b111000]


class TestSubsets:
    def test_gosper_order(self):
        assert list(subsets(2, 4)) == [0b0011, 0b0101, 0b0110, 0b1001, 0b1010, 0b1100]

    def test_counts(self):
        for size in range(0, 8):
            for k in range(0, size + 1):
                masks = list(subsets(k, size))
                assert len(masks) == comb(size, k)
                assert all(bin(s).count("1") == k for s in masks)
                assert all(s < (1 << size) for s in masks)

    def test_empty_subset(self):
        assert list(subsets(0, 5)) == [0]


class TestMotzkinWords:
    def test_count(self):
        # length 3, one pair, one free point among 3 positions
        words = list(motzkin_words(3, 3, 1, 1, lambda m: 3 - 2 * m))
        assert len(words) == 3
        assert {s for _, _, s in words} == {0b001, 0b010, 0b100}

    def test_count_over_several_half_lengths(self):
        words = list(motzkin_words(4, 4, 1, 2, lambda m: 4 - 2 * m))
        # C(4, 2) * Catalan(1) + C(4, 0) * Catalan(2)
        assert len(words) == 6 + 2

    def test_inconsistent_subset_size(self):
        with pytest.raises(AssertionError):
            list(motzkin_words(4, 4, 1, 1, lambda m: 1))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
