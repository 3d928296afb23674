"""
Planar Idempotents - Counting Idempotents of Planar Diagram Monoids

Counts the idempotent elements of the Jones, Motzkin and Kauffman monoids
of a given degree without enumerating the monoid itself:

1. Words: Dyck and Motzkin words generated in canonical order
2. Diagrams: each word decoded once into a matching and its outer brackets
3. Cycles: stacking two half-diagrams and walking the cycles they close
4. Reducer: pairs of half-diagrams partitioned over a worker pool and summed

The pipeline:
    words -> DiagramCollection -> PairJob -> ParallelReducer -> total
"""

__version__ = "0.1.0"

from .diagrams import Diagram, DiagramCollection, PalindromeSplit, decode_dyck, decode_motzkin
from .cycles import (
    CompositionCycleCounter,
    SentinelCycleCounter,
    FixedPointCycleCounter,
    FixedPointSentinelCycleCounter,
    WalkState,
)
from .full_scan import FullScanCycleCounter, FullScanSentinelCycleCounter
from .partition import CostModel, partition
from .reducer import PairJob, ParallelReducer, ReducerConfig
from .monoids import CountResult, count_idempotents, count_jones, count_kauffman, count_motzkin

__all__ = [
    "Diagram",
    "DiagramCollection",
    "PalindromeSplit",
    "decode_dyck",
    "decode_motzkin",
    "CompositionCycleCounter",
    "SentinelCycleCounter",
    "FixedPointCycleCounter",
    "FixedPointSentinelCycleCounter",
    "WalkState",
    "FullScanCycleCounter",
    "FullScanSentinelCycleCounter",
    "CostModel",
    "partition",
    "PairJob",
    "ParallelReducer",
    "ReducerConfig",
    "CountResult",
    "count_idempotents",
    "count_jones",
    "count_motzkin",
    "count_kauffman",
]
