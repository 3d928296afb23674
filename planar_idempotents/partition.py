"""
Work Partitioning

The pair space is split by the index of the first diagram of each pair.
Index i costs a statically known number of pair evaluations:

- triangular (i < j in one collection):   N - i - 1
- rectangular (every i against every j):  M
- mirror (i against mirror j >= i):       M - i

Partitions are contiguous index ranges filled greedily in index order until
their cost reaches the average load, total // workers. The last partition
absorbs the remainder.
"""

from __future__ import annotations
from typing import List, Sequence, Union
from dataclasses import dataclass

import numpy as np


TRIANGULAR = "triangular"
RECTANGULAR = "rectangular"
MIRROR = "mirror"

ENUMERATIONS = (TRIANGULAR, RECTANGULAR, MIRROR)


@dataclass(frozen=True)
class CostModel:
    """Per-index cost of one pair enumeration."""
    kind: str
    size: int
    other_size: int = 0

    def __post_init__(self):
        if self.kind not in ENUMERATIONS:
            raise ValueError(f"Unknown enumeration: {self.kind}")
        if self.size < 0 or self.other_size < 0:
            raise ValueError("Collection sizes must be non-negative")
        if self.kind == MIRROR and self.other_size < self.size:
            raise ValueError("Mirror enumeration needs at least as many mirrors as words")

    @classmethod
    def triangular(cls, n: int) -> CostModel:
        return cls(TRIANGULAR, n, n)

    @classmethod
    def rectangular(cls, n: int, m: int) -> CostModel:
        return cls(RECTANGULAR, n, m)

    @classmethod
    def mirror(cls, n: int, m: int) -> CostModel:
        return cls(MIRROR, n, m)

    def costs(self) -> np.ndarray:
        idx = np.arange(self.size, dtype=np.int64)
        if self.kind == TRIANGULAR:
            return self.size - idx - 1
        if self.kind == RECTANGULAR:
            return np.full(self.size, self.other_size, dtype=np.int64)
        return self.other_size - idx

    @property
    def total(self) -> int:
        return int(self.costs().sum())


def partition(costs: Union[Sequence[int], np.ndarray], workers: int) -> List[range]:
    """
    Split indices 0..len(costs)-1 into exactly ``workers`` contiguous ranges.

    A range is closed once its cost reaches total // workers, or when the
    indices left are only just enough to give every remaining range one.
    Ranges are therefore non-empty whenever there are at least as many
    indices as workers; otherwise the trailing ranges are empty.

    Args:
        costs: Cost of each index
        workers: Number of ranges to produce (>= 1)

    Returns:
        List of ``workers`` ranges, pairwise disjoint, covering every index
    """
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    costs = np.asarray(costs, dtype=np.int64)
    n = len(costs)
    av_load = int(costs.sum()) // workers

    ranges: List[range] = []
    start = 0
    load = 0
    for i in range(n):
        load += int(costs[i])
        if len(ranges) == workers - 1:
            continue
        remaining_indices = n - i - 1
        remaining_ranges = workers - len(ranges) - 1
        if load >= av_load or remaining_indices <= remaining_ranges:
            ranges.append(range(start, i + 1))
            start = i + 1
            load = 0

    ranges.append(range(start, n))
    while len(ranges) < workers:
        ranges.append(range(n, n))
    return ranges


def partition_loads(costs: Union[Sequence[int], np.ndarray], ranges: Sequence[range]) -> List[int]:
    """Total cost assigned to each range."""
    costs = np.asarray(costs, dtype=np.int64)
    return [int(costs[r.start:r.stop].sum()) for r in ranges]


__all__ = [
    "TRIANGULAR",
    "RECTANGULAR",
    "MIRROR",
    "CostModel",
    "partition",
    "partition_loads",
]
