"""
Tests for diagram decoding and collections
"""

import pytest
import numpy as np

from planar_idempotents.diagrams import (
    DiagramCollection, PalindromeSplit, decode_dyck, decode_motzkin,
)


class TestDecodeDyck:
    def test_nested(self):
        d = decode_dyck(0b1100, 4)
        assert d.matching == (3, 2, 1, 0)
        assert d.outer == (0,)
        assert d.is_outer == (True, False, False, False)
        assert d.length == 4

    def test_side_by_side(self):
        d = decode_dyck(0b1010, 4)
        assert d.matching == (1, 0, 3, 2)
        assert d.outer == (0, 2)
        assert d(2) == 3

    def test_malformed(self):
        with pytest.raises(ValueError):
            decode_dyck(0b0110, 4)
        with pytest.raises(ValueError):
            decode_dyck(0b1110, 4)

    def test_involution_and_outer_consistency(self):
        for d in DiagramCollection.from_dyck(5):
            for i, p in enumerate(d.matching):
                assert d.matching[p] == i
                assert p != i
                assert d.is_outer[i] == (i in d.outer)
            assert list(d.outer) == sorted(d.outer)
            # outer brackets tile the word
            assert d.outer[0] == 0
            assert d.matching[d.outer[-1]] == d.length - 1

    def test_outer_walk_reconstructs_outer(self):
        for d in DiagramCollection.from_dyck(5):
            walked = []
            j = 0
            while j < d.length:
                walked.append(j)
                j = d.matching[j] + 1
            assert tuple(walked) == d.outer

    def test_non_crossing(self):
        for d in DiagramCollection.from_motzkin(6, 6, 1, 3, lambda m: 6 - 2 * m):
            for i, p in enumerate(d.matching):
                if p > i:
                    assert all(i < d.matching[k] < p for k in range(i + 1, p))


class TestDecodeMotzkin:
    def test_free_point_first(self):
        d = decode_motzkin(0b10, 0b100, 3, 3)
        assert d.matching == (0, 2, 1)
        assert d.outer == (1,)
        assert d.free_points() == (0,)
        assert d.is_free(0)

    def test_partner_beyond_set_size_is_not_outer(self):
        d = decode_motzkin(0b10, 0b01, 3, 2)
        assert d.matching == (2, 1, 0)
        assert d.outer == ()

    def test_free_points_are_fixed(self):
        collection = DiagramCollection.from_motzkin(5, 5, 1, 2, lambda m: 5 - 2 * m)
        for d in collection:
            assert len(d.free_points()) == bin(d.subset).count("1")
            for i, p in enumerate(d.matching):
                assert d.matching[p] == i


class TestDiagramCollection:
    def test_from_dyck(self):
        collection = DiagramCollection.from_dyck(4)
        assert len(collection) == 14
        assert collection.length == 8
        words = [d.word for d in collection]
        assert words == sorted(words)

    def test_outer_sizes_are_read_only(self):
        collection = DiagramCollection.from_dyck(3)
        sizes = collection.outer_sizes()
        assert sizes.dtype == np.uint64
        assert sizes.tolist() == [3, 2, 2, 1, 1]
        with pytest.raises(ValueError):
            sizes[0] = 0

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            DiagramCollection((decode_dyck(0b10, 2),), 4)

    def test_base_contribution(self):
        collection = DiagramCollection.from_dyck(2)
        # outer sizes 2 and 1
        assert collection.base_contribution() == 4 + 2
        assert collection.base_contribution(offset=-1) == 2 + 1
        assert collection.base_contribution(offset=1) == 8 + 4

    def test_negative_exponent(self):
        collection = DiagramCollection.from_dyck(0)
        with pytest.raises(ValueError):
            collection.base_contribution(offset=-1)

    def test_base_contribution_beyond_64_bits(self):
        collection = DiagramCollection.from_dyck(2)
        total = collection.base_contribution(offset=70)
        assert total == 2 ** 72 + 2 ** 71
        assert isinstance(total, int)

    def test_nbytes(self):
        assert DiagramCollection.from_dyck(3).nbytes > 0


class TestPalindromeSplit:
    def test_half_length_three(self):
        split = PalindromeSplit.from_half_length(3)
        assert [d.word for d in split.palindromic] == [0b101010, 0b110100, 0b111000]
        assert [d.word for d in split.non_palindromic] == [0b101100]
        assert [d.word for d in split.mirrors] == [0b110010]
        assert len(split) == 5

    def test_partition_of_all_words(self):
        n = 5
        split = PalindromeSplit.from_half_length(n)
        words = ([d.word for d in split.palindromic]
                 + [d.word for d in split.non_palindromic]
                 + [d.word for d in split.mirrors])
        assert sorted(words) == sorted(d.word for d in DiagramCollection.from_dyck(n))
        assert len(set(words)) == len(words)

    def test_base_contribution(self):
        split = PalindromeSplit.from_half_length(2)
        assert split.base_contribution() == 6


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
