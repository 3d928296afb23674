"""
Tests for cost models and work partitioning
"""

import pytest
import numpy as np

from planar_idempotents.partition import CostModel, partition, partition_loads


def assert_covers(ranges, n, workers):
    assert len(ranges) == workers
    indices = [i for r in ranges for i in r]
    assert indices == list(range(n))
    for a, b in zip(ranges, ranges[1:]):
        assert a.stop == b.start


class TestCostModel:
    def test_triangular(self):
        model = CostModel.triangular(4)
        assert model.costs().tolist() == [3, 2, 1, 0]
        assert model.total == 6

    def test_rectangular(self):
        assert CostModel.rectangular(2, 5).costs().tolist() == [5, 5]

    def test_mirror(self):
        assert CostModel.mirror(3, 3).costs().tolist() == [3, 2, 1]

    def test_invalid(self):
        with pytest.raises(ValueError):
            CostModel("diagonal", 3)
        with pytest.raises(ValueError):
            CostModel.mirror(3, 2)
        with pytest.raises(ValueError):
            CostModel.rectangular(-1, 2)


class TestPartition:
    def test_two_workers(self):
        ranges = partition([3, 2, 1, 0], 2)
        assert ranges == [range(0, 1), range(1, 4)]
        assert partition_loads([3, 2, 1, 0], ranges) == [3, 3]

    def test_one_worker(self):
        assert partition([1, 2, 3], 1) == [range(0, 3)]

    def test_as_many_workers_as_indices(self):
        ranges = partition(CostModel.triangular(6).costs(), 6)
        assert_covers(ranges, 6, 6)
        assert all(len(r) == 1 for r in ranges)

    def test_more_workers_than_indices(self):
        ranges = partition([1, 1], 4)
        assert_covers(ranges, 2, 4)
        assert [len(r) for r in ranges] == [1, 1, 0, 0]

    def test_empty(self):
        ranges = partition([], 3)
        assert_covers(ranges, 0, 3)

    def test_invalid_worker_count(self):
        with pytest.raises(ValueError):
            partition([1, 2], 0)

    def test_random_costs(self):
        rng = np.random.default_rng(7)
        for _ in range(50):
            n = int(rng.integers(0, 200))
            workers = int(rng.integers(1, 16))
            costs = rng.integers(0, 1000, size=n)
            ranges = partition(costs, workers)
            assert_covers(ranges, n, workers)
            assert sum(partition_loads(costs, ranges)) == int(costs.sum())
            if n >= workers:
                assert all(len(r) > 0 for r in ranges)

    def test_triangular_balance(self):
        costs = CostModel.triangular(1000).costs()
        loads = partition_loads(costs, partition(costs, 4))
        average = int(costs.sum()) // 4
        # every closed range stops at the first index reaching the average
        assert all(load >= average for load in loads[:-1])
        assert all(load < average + 1000 for load in loads[:-1])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
