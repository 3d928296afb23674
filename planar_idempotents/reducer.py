"""
Parallel Reduction over Diagram Pairs

A PairJob describes one pair enumeration over read-only collections. The
ParallelReducer partitions the first collection's indices by estimated cost,
runs one worker per partition, and sums the workers' private subtotals once
every worker has joined.

Workers share nothing mutable: each returns its own subtotal, and the
reduction is a plain sum, so neither partition boundaries nor scheduling
order can change the total.

Usage:
    job = PairJob.triangular(collection, CompositionCycleCounter(), multiplier=2)
    total = ParallelReducer(ReducerConfig(workers=4)).reduce(job)
"""

from __future__ import annotations
from typing import List, Optional, Tuple, Union
from dataclasses import dataclass
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
import logging
import os

from .constants import RESERVED_CORES, SERIAL_THRESHOLD
from .cycles import CompositionCycleCounter
from .diagrams import DiagramCollection
from .full_scan import FullScanCycleCounter
from .partition import MIRROR, RECTANGULAR, TRIANGULAR, CostModel, partition, partition_loads
from .utils import Timer, format_seconds


logger = logging.getLogger(__name__)

PairCounter = Union[CompositionCycleCounter, FullScanCycleCounter]


# =============================================================================
# SECTION 1: Configuration
# =============================================================================

@dataclass(frozen=True)
class ReducerConfig:
    """Configuration for the parallel phase."""
    workers: Optional[int] = None           # None = cpu_count - reserved_cores
    reserved_cores: int = RESERVED_CORES
    use_processes: bool = True              # False = threads (shared memory, GIL-bound)
    serial_threshold: int = SERIAL_THRESHOLD    # pair evaluations, not diagrams

    def resolve_workers(self) -> int:
        if self.workers is not None:
            if self.workers < 1:
                raise ValueError(f"workers must be >= 1, got {self.workers}")
            return self.workers
        return max(1, (os.cpu_count() or 1) - self.reserved_cores)


# =============================================================================
# SECTION 2: Pair Jobs
# =============================================================================

@dataclass(frozen=True)
class PairJob:
    """
    One pair enumeration.

    Attributes:
        kind: TRIANGULAR, RECTANGULAR or MIRROR
        first: Collection whose indices are partitioned (the upper halves)
        second: Collection providing the lower halves
        counter: Cycle counter applied to every pair
        multiplier: Weight of each pair's count
    """
    kind: str
    first: DiagramCollection
    second: DiagramCollection
    counter: PairCounter
    multiplier: int = 1

    @classmethod
    def triangular(cls, collection: DiagramCollection, counter: PairCounter,
                   multiplier: int = 2) -> PairJob:
        """Every pair i < j of one collection, upper = i, lower = j."""
        return cls(TRIANGULAR, collection, collection, counter, multiplier)

    @classmethod
    def rectangular(cls, first: DiagramCollection, second: DiagramCollection,
                    counter: PairCounter, multiplier: int = 4) -> PairJob:
        """Every i of ``first`` against every j of ``second``."""
        return cls(RECTANGULAR, first, second, counter, multiplier)

    @classmethod
    def mirror(cls, words: DiagramCollection, mirrors: DiagramCollection,
               counter: PairCounter, multiplier: int = 4) -> PairJob:
        """
        Every word against the mirrors j >= i.

        The pair (w_i, mirror_i) has half the weight of the others.
        """
        if len(words) != len(mirrors):
            raise ValueError(f"{len(words)} words but {len(mirrors)} mirrors")
        return cls(MIRROR, words, mirrors, counter, multiplier)

    def cost_model(self) -> CostModel:
        return CostModel(self.kind, len(self.first), len(self.second))

    def __len__(self) -> int:
        return len(self.first)


def run_pairs(job: PairJob, indices: range) -> int:
    """Sum of weighted pair counts for the upper indices in ``indices``."""
    count = job.counter.count
    first = job.first.diagrams
    second = job.second.diagrams
    total = 0

    if job.kind == TRIANGULAR:
        n = len(first)
        for i in indices:
            upper = first[i]
            for j in range(i + 1, n):
                total += count(upper, first[j])
        return job.multiplier * total

    if job.kind == RECTANGULAR:
        for i in indices:
            upper = first[i]
            for lower in second:
                total += count(upper, lower)
        return job.multiplier * total

    if job.kind == MIRROR:
        diagonal = 0
        n = len(second)
        for i in indices:
            upper = first[i]
            diagonal += count(upper, second[i])
            for j in range(i + 1, n):
                total += count(upper, second[j])
        return (job.multiplier // 2) * diagonal + job.multiplier * total

    raise ValueError(f"Unknown enumeration: {job.kind}")


def _run_partition(worker_id: int, job: PairJob, indices: range) -> Tuple[int, int, float]:
    """Worker entry point (top level so process pools can pickle it)."""
    timer = Timer()
    subtotal = run_pairs(job, indices)
    return worker_id, subtotal, timer.stop()


# =============================================================================
# SECTION 3: Parallel Reducer
# =============================================================================

class ParallelReducer:
    """
    Fans a PairJob out over a bounded pool and sums the results.

    A fresh pool is created and joined for every reduce() call, so a run
    with several phases gets one batch of workers per phase.
    """

    def __init__(self, config: Optional[ReducerConfig] = None):
        self.config = config or ReducerConfig()

    @property
    def workers(self) -> int:
        return self.config.resolve_workers()

    def plan(self, job: PairJob) -> List[range]:
        """Partition the job's upper indices across the workers."""
        workers = self.workers
        costs = job.cost_model().costs()
        if int(costs.sum()) < self.config.serial_threshold:
            workers = 1
        ranges = partition(costs, workers)

        if logger.isEnabledFor(logging.INFO):
            for worker_id, load in enumerate(partition_loads(costs, ranges)):
                logger.info("Worker %d has load %d", worker_id, load)
        return ranges

    def reduce(self, job: PairJob) -> int:
        """
        Run the job and return its weighted pair total.

        Raises:
            Any exception raised by a worker; partial sums are discarded
        """
        ranges = self.plan(job)

        if len(ranges) == 1:
            _, subtotal, elapsed = _run_partition(0, job, ranges[0])
            logger.info("Worker 0 is finished, elapsed time = %s", format_seconds(elapsed))
            return subtotal

        executor_class = ProcessPoolExecutor if self.config.use_processes else ThreadPoolExecutor
        total = 0
        with executor_class(max_workers=len(ranges)) as executor:
            futures = [
                executor.submit(_run_partition, worker_id, job, indices)
                for worker_id, indices in enumerate(ranges)
            ]
            for future in futures:
                worker_id, subtotal, elapsed = future.result()
                logger.info("Worker %d is finished, elapsed time = %s",
                            worker_id, format_seconds(elapsed))
                total += subtotal
        return total


__all__ = [
    "ReducerConfig",
    "PairJob",
    "run_pairs",
    "ParallelReducer",
]
