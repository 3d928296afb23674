"""
Idempotent Counts for Planar Diagram Monoids
============================================

Three drivers share the same shape:

    words -> DiagramCollection -> PairJob(s) -> ParallelReducer -> total

plus a base contribution computed outside the parallel phase (the diagrams
stacked against themselves).

Jones monoid J_deg:
    even deg: Dyck words of length deg, split into palindromes and mirror
              pairs; four pair phases weighted 2, 4, 4 and 4 (2 on the
              word/mirror diagonal).
    odd deg:  Dyck words of length deg + 1; the extra point is a sentinel.

Motzkin monoid M_deg:
    even rank: weight-0 Motzkin words (the empty Dyck word handled in
               closed form), free points void cycles.
    odd rank:  weight-1 Motzkin words with the extra point at position deg.

Kauffman monoid K_deg:
    Dyck words, full-scan walk; only the identity is idempotent on the
    diagonal.
"""

from __future__ import annotations
from typing import Callable, Dict, Optional
from dataclasses import dataclass, field
import logging
import os

from .constants import (
    CATALAN_NUMBERS, MOTZKIN_WEIGHT_0, MOTZKIN_WEIGHT_1,
    MIN_DEGREE, MAX_DEGREE, MONOIDS,
)
from .cycles import (
    CompositionCycleCounter, SentinelCycleCounter,
    FixedPointCycleCounter, FixedPointSentinelCycleCounter,
)
from .diagrams import DiagramCollection, PalindromeSplit
from .full_scan import FullScanCycleCounter, FullScanSentinelCycleCounter
from .reducer import PairJob, ParallelReducer, ReducerConfig
from .utils import Timer, format_bytes


logger = logging.getLogger(__name__)


@dataclass
class CountResult:
    """Outcome of one run."""
    monoid: str
    degree: int
    total: int
    base: int
    phases: Dict[str, int] = field(default_factory=dict)
    elapsed: float = 0.0

    @property
    def pairs(self) -> int:
        return sum(self.phases.values())


def check_degree(degree: int) -> int:
    """Validate a degree, returning it unchanged."""
    if isinstance(degree, bool) or not isinstance(degree, int):
        raise ValueError(f"degree must be an integer, got {degree!r}")
    if not MIN_DEGREE <= degree <= MAX_DEGREE:
        raise ValueError(f"degree must be an integer in [{MIN_DEGREE}, {MAX_DEGREE}], got {degree}")
    return degree


def _log_collection(label: str, size: int, nbytes: int, timer: Timer, reducer: ParallelReducer) -> None:
    logger.info("Processing %d %s, elapsed time = %s", size, label, timer.string())
    logger.info("%s use ~ %s", label, format_bytes(nbytes))
    logger.info("Using %d / %d workers", reducer.workers, os.cpu_count() or 1)


def _run_phase(phases: Dict[str, int], name: str, reducer: ParallelReducer, job: PairJob) -> None:
    timer = Timer()
    phases[name] = reducer.reduce(job)
    logger.info("From %s: %d (%s)", name, phases[name], timer.string())


# =============================================================================
# SECTION 1: Jones monoid
# =============================================================================

def count_jones(degree: int, reducer: Optional[ParallelReducer] = None) -> CountResult:
    """
    Number of idempotents in the Jones monoid of the given degree.

    Args:
        degree: Number of points on each side, 1 <= degree <= 40
        reducer: Parallel reducer (default configuration if None)

    Returns:
        CountResult with the total and the per-phase pair subtotals
    """
    check_degree(degree)
    reducer = reducer or ParallelReducer()
    total_timer = Timer()
    phases: Dict[str, int] = {}

    if degree % 2 == 0:
        n = degree // 2
        logger.info("Number of Dyck words is %d", CATALAN_NUMBERS[n])
        timer = Timer()
        split = PalindromeSplit.from_half_length(n)
        _log_collection("Dyck words", len(split), split.nbytes, timer, reducer)
        logger.info("Number of palindromic Dyck words is %d", len(split.palindromic))
        logger.info("Number of non-palindromic Dyck words is %d", len(split.non_palindromic))

        counter = CompositionCycleCounter()
        base = split.base_contribution()
        _run_phase(phases, "palindromic x palindromic", reducer,
                   PairJob.triangular(split.palindromic, counter, multiplier=2))
        _run_phase(phases, "non-palindromic x non-palindromic", reducer,
                   PairJob.triangular(split.non_palindromic, counter, multiplier=4))
        _run_phase(phases, "palindromic x non-palindromic", reducer,
                   PairJob.rectangular(split.palindromic, split.non_palindromic, counter, multiplier=4))
        _run_phase(phases, "non-palindromic x reverses", reducer,
                   PairJob.mirror(split.non_palindromic, split.mirrors, counter, multiplier=4))
    else:
        n = (degree + 1) // 2
        logger.info("Number of Dyck words is %d", CATALAN_NUMBERS[n])
        timer = Timer()
        collection = DiagramCollection.from_dyck(n)
        _log_collection("Dyck words", len(collection), collection.nbytes, timer, reducer)

        base = collection.base_contribution(offset=-1)
        _run_phase(phases, "pairs", reducer,
                   PairJob.triangular(collection, SentinelCycleCounter(), multiplier=2))

    result = CountResult("jones", degree, base + sum(phases.values()), base, phases,
                         total_timer.stop())
    logger.info("Total elapsed time = %s", total_timer.string())
    return result


# =============================================================================
# SECTION 2: Motzkin monoid
# =============================================================================

def motzkin_even_rank_words(degree: int) -> DiagramCollection:
    """Weight-0 Motzkin words of the degree, without the empty Dyck word."""
    n = degree // 2
    if degree % 2 == 0:
        collection = DiagramCollection.from_motzkin(2 * n, 2 * n, 1, n, lambda m: 2 * n - 2 * m)
    else:
        collection = DiagramCollection.from_motzkin(2 * n + 1, 2 * n + 1, 1, n,
                                                    lambda m: 2 * n - 2 * m + 1)
    expected = MOTZKIN_WEIGHT_0[degree] - 1
    if len(collection) != expected:
        raise AssertionError(f"generated {len(collection)} weight 0 words, expected {expected}")
    return collection


def motzkin_odd_rank_words(degree: int) -> DiagramCollection:
    """Weight-1 Motzkin words of the degree; position ``degree`` is the extra point."""
    n = degree // 2
    if degree % 2 == 0:
        collection = DiagramCollection.from_motzkin(2 * n + 1, 2 * n, 1, n,
                                                    lambda m: 2 * n - 2 * m + 1)
    else:
        collection = DiagramCollection.from_motzkin(2 * n + 2, 2 * n + 1, 1, n + 1,
                                                    lambda m: 2 * n - 2 * m + 2)
    expected = MOTZKIN_WEIGHT_1[degree]
    if len(collection) != expected:
        raise AssertionError(f"generated {len(collection)} weight 1 words, expected {expected}")
    return collection


def count_motzkin(degree: int, reducer: Optional[ParallelReducer] = None) -> CountResult:
    """
    Number of idempotents in the Motzkin monoid of the given degree.

    Counted in two phases, even rank then odd rank, each with its own
    collection and its own batch of workers.
    """
    check_degree(degree)
    reducer = reducer or ParallelReducer()
    total_timer = Timer()
    phases: Dict[str, int] = {}

    # Even rank
    logger.info("Counting even rank Motzkin idempotents . . .")
    logger.info("Number of weight 0 Motzkin words is %d", MOTZKIN_WEIGHT_0[degree])
    timer = Timer()
    collection = motzkin_even_rank_words(degree)
    _log_collection("Motzkin words", len(collection), collection.nbytes, timer, reducer)

    # The empty Dyck word pairs with every weight 0 word in both orders
    base_even = 2 * MOTZKIN_WEIGHT_0[degree] - 1 + collection.base_contribution()
    _run_phase(phases, "even rank pairs", reducer,
               PairJob.triangular(collection, FixedPointCycleCounter(), multiplier=2))
    logger.info("There are %d even rank idempotents", base_even + phases["even rank pairs"])

    # Odd rank
    logger.info("Counting odd rank Motzkin idempotents . . .")
    logger.info("Number of weight 1 Motzkin words is %d", MOTZKIN_WEIGHT_1[degree])
    timer = Timer()
    collection = motzkin_odd_rank_words(degree)
    _log_collection("Motzkin words", len(collection), collection.nbytes, timer, reducer)

    base_odd = collection.base_contribution()
    _run_phase(phases, "odd rank pairs", reducer,
               PairJob.triangular(collection, FixedPointSentinelCycleCounter(degree), multiplier=2))
    logger.info("There are %d odd rank idempotents", base_odd + phases["odd rank pairs"])

    base = base_even + base_odd
    result = CountResult("motzkin", degree, base + sum(phases.values()), base, phases,
                         total_timer.stop())
    logger.info("Total elapsed time = %s", total_timer.string())
    return result


# =============================================================================
# SECTION 3: Kauffman monoid
# =============================================================================

def count_kauffman(degree: int, reducer: Optional[ParallelReducer] = None) -> CountResult:
    """
    Number of idempotents in the Kauffman monoid of the given degree.

    A diagram stacked on itself always closes a loop unless it is the
    identity, so the diagonal contributes exactly one idempotent.
    """
    check_degree(degree)
    reducer = reducer or ParallelReducer()
    total_timer = Timer()
    phases: Dict[str, int] = {}

    if degree % 2 == 0:
        n = degree // 2
        counter = FullScanCycleCounter()
    else:
        n = (degree + 1) // 2
        counter = FullScanSentinelCycleCounter()

    logger.info("Number of Dyck words is %d", CATALAN_NUMBERS[n])
    timer = Timer()
    collection = DiagramCollection.from_dyck(n)
    _log_collection("Dyck words", len(collection), collection.nbytes, timer, reducer)

    base = 1
    _run_phase(phases, "pairs", reducer, PairJob.triangular(collection, counter, multiplier=2))

    result = CountResult("kauffman", degree, base + sum(phases.values()), base, phases,
                         total_timer.stop())
    logger.info("Total elapsed time = %s", total_timer.string())
    return result


# =============================================================================
# SECTION 4: Dispatch
# =============================================================================

COUNTERS: Dict[str, Callable[..., CountResult]] = {
    "jones": count_jones,
    "motzkin": count_motzkin,
    "kauffman": count_kauffman,
}

assert tuple(COUNTERS) == MONOIDS


def count_idempotents(monoid: str,
                      degree: int,
                      config: Optional[ReducerConfig] = None) -> CountResult:
    """
    Count the idempotents of a planar diagram monoid.

    Args:
        monoid: One of "jones", "motzkin", "kauffman"
        degree: Number of points on each side of a diagram
        config: Parallel configuration (defaults if None)

    Raises:
        ValueError: for an unknown monoid or a degree outside [1, 40]
    """
    try:
        counter = COUNTERS[monoid]
    except KeyError:
        raise ValueError(f"Unknown monoid: {monoid!r} (expected one of {', '.join(MONOIDS)})") from None
    return counter(degree, ParallelReducer(config))


__all__ = [
    "CountResult",
    "check_degree",
    "count_jones",
    "count_motzkin",
    "count_kauffman",
    "count_idempotents",
    "motzkin_even_rank_words",
    "motzkin_odd_rank_words",
    "COUNTERS",
]
