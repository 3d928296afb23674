"""
Composition Cycle Counting
==========================

Stacking an upper half-diagram ``u`` on a lower half-diagram ``l`` joins
their matchings. Alternately applying ``l`` and ``u`` from an outer bracket
of ``l`` traces a cycle; every cycle offers ``nr_u * nr_l`` ways to connect
the outer brackets of the two sides it meets, plus the choice of connecting
none of them. The product over all cycles is the number of idempotents the
pair contributes.

The walk is written as a small state machine::

    ADVANCE_WATERMARK -> WALK_OUTWARD -> (WALK_INWARD) -> CYCLE_CLOSED
           ^                                                  |
           +--------------------------------------------------+
                                   |
                                FINISHED            PAIR_VOID -> FINISHED

- ADVANCE_WATERMARK: skip outer brackets of l already swallowed by a closed
  cycle (below the watermark) and start a new cycle.
- WALK_OUTWARD: follow the cycle counting outer brackets of both sides.
- WALK_INWARD: after meeting an outer bracket of u, count only those.
- CYCLE_CLOSED: multiply the running count, decide whether to continue.
- PAIR_VOID: the pair contributes nothing.

Variants:
- CompositionCycleCounter: Dyck words of even length (Jones monoid).
- SentinelCycleCounter: an extra point closes the walk (Jones, odd degree).
- FixedPointCycleCounter: free points void cycles (Motzkin, even rank).
- FixedPointSentinelCycleCounter: free points plus an extra point
  (Motzkin, odd rank).
"""

from __future__ import annotations
from typing import Dict, List, Sequence
from dataclasses import dataclass
from enum import Enum, auto

from .diagrams import Diagram


class WalkState(Enum):
    ADVANCE_WATERMARK = auto()
    WALK_OUTWARD = auto()
    WALK_INWARD = auto()
    CYCLE_CLOSED = auto()
    PAIR_VOID = auto()
    FINISHED = auto()


@dataclass
class CycleWalk:
    """Mutable state of one pair's walk, local to a single count() call."""
    upper: Diagram
    lower: Diagram
    cnt: int = 1
    watermark: int = 0
    it: int = 0             # index into lower.outer
    start: int = 0
    pos: int = 0
    nr_upper: int = 0
    nr_lower: int = 0
    voided: bool = False    # current cycle contributes no factor
    halted: bool = False    # the walk reached the sentinel


def _not_closed(walk: CycleWalk) -> AssertionError:
    return AssertionError(
        f"cycle from {walk.start} did not close within {walk.lower.length} steps "
        f"(upper={walk.upper.word:#b}, lower={walk.lower.word:#b})"
    )


# =============================================================================
# SECTION 1: Dyck words (Jones monoid, even degree)
# =============================================================================

class CompositionCycleCounter:
    """
    Counts the idempotents contributed by stacking ``upper`` on ``lower``.

    Instances hold no per-pair state and can be shared by any number of
    workers (or pickled into worker processes).
    """

    _HANDLERS: Dict[WalkState, str] = {
        WalkState.ADVANCE_WATERMARK: "advance_watermark",
        WalkState.WALK_OUTWARD: "walk_outward",
        WalkState.WALK_INWARD: "walk_inward",
        WalkState.CYCLE_CLOSED: "cycle_closed",
        WalkState.PAIR_VOID: "pair_void",
    }

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # -------------------------------------------------------------------------
    # Driver
    # -------------------------------------------------------------------------

    def count(self, upper: Diagram, lower: Diagram) -> int:
        """
        Multiplicative idempotent count for the pair.

        Args:
            upper: Diagram acting as the upper half
            lower: Diagram acting as the lower half (its outer brackets
                drive the walk)

        Returns:
            Non-negative count; the caller applies the symmetry multiplier
        """
        walk = self.begin(upper, lower)
        state = self.initial_state(walk)
        while state is not WalkState.FINISHED:
            state = self.transition(state, walk)
        return walk.cnt

    def trace(self, upper: Diagram, lower: Diagram) -> List[WalkState]:
        """States visited while counting the pair, ending with FINISHED."""
        walk = self.begin(upper, lower)
        state = self.initial_state(walk)
        states = [state]
        while state is not WalkState.FINISHED:
            state = self.transition(state, walk)
            states.append(state)
        return states

    def begin(self, upper: Diagram, lower: Diagram) -> CycleWalk:
        if upper.length != lower.length:
            raise ValueError(f"Length mismatch: {upper.length} vs {lower.length}")
        return CycleWalk(upper=upper, lower=lower)

    def initial_state(self, walk: CycleWalk) -> WalkState:
        if not walk.lower.outer:
            return WalkState.FINISHED
        return WalkState.ADVANCE_WATERMARK

    def transition(self, state: WalkState, walk: CycleWalk) -> WalkState:
        return getattr(self, self._HANDLERS[state])(walk)

    # -------------------------------------------------------------------------
    # States
    # -------------------------------------------------------------------------

    def advance_watermark(self, walk: CycleWalk) -> WalkState:
        outer = walk.lower.outer
        it = walk.it
        while it < len(outer) and outer[it] < walk.watermark:
            it += 1
        walk.it = it
        if it == len(outer):
            return WalkState.FINISHED

        start = outer[it]
        walk.start = start
        walk.nr_lower = 1
        walk.nr_upper = 1 if walk.upper.is_outer[start] else 0
        walk.voided = False
        walk.watermark = walk.lower.matching[start]
        return self.first_step(walk)

    def first_step(self, walk: CycleWalk) -> WalkState:
        walk.pos = walk.upper.matching[walk.lower.matching[walk.start]]
        return WalkState.WALK_OUTWARD

    def walk_outward(self, walk: CycleWalk) -> WalkState:
        u = walk.upper.matching
        l = walk.lower.matching
        u_outer = walk.upper.is_outer
        l_outer = walk.lower.is_outer
        start = walk.start
        pos = walk.pos

        for _ in range(len(l) + 1):
            if pos == start:
                break
            if l_outer[pos]:
                walk.nr_lower += 1
                if l[pos] > walk.watermark:
                    walk.watermark = l[pos]
            elif u_outer[pos]:
                walk.nr_upper += 1
                walk.pos = u[l[pos]]
                return WalkState.WALK_INWARD
            pos = u[l[pos]]
        else:
            raise _not_closed(walk)

        walk.pos = pos
        return WalkState.CYCLE_CLOSED

    def walk_inward(self, walk: CycleWalk) -> WalkState:
        u = walk.upper.matching
        l = walk.lower.matching
        u_outer = walk.upper.is_outer
        start = walk.start
        pos = walk.pos

        for _ in range(len(l) + 1):
            if pos == start:
                break
            if u_outer[pos]:
                walk.nr_upper += 1
            pos = u[l[pos]]
        else:
            raise _not_closed(walk)

        walk.pos = pos
        return WalkState.CYCLE_CLOSED

    def cycle_closed(self, walk: CycleWalk) -> WalkState:
        if not walk.voided:
            walk.cnt *= walk.nr_upper * walk.nr_lower + 1
        if self.is_finished(walk):
            return WalkState.FINISHED
        return WalkState.ADVANCE_WATERMARK

    def pair_void(self, walk: CycleWalk) -> WalkState:
        walk.cnt = 0
        return WalkState.FINISHED

    def is_finished(self, walk: CycleWalk) -> bool:
        return walk.watermark >= walk.lower.outer[-1]


# =============================================================================
# SECTION 2: Extra point (Jones monoid, odd degree)
# =============================================================================

class SentinelCycleCounter(CompositionCycleCounter):
    """
    Odd degree: words carry one extra position.

    The sentinel is the image of the last position under ``upper``. A cycle
    that reaches it is left unmultiplied and ends the walk for the pair.
    """

    def _sentinel(self, walk: CycleWalk) -> int:
        return walk.upper.matching[-1]

    def walk_outward(self, walk: CycleWalk) -> WalkState:
        u = walk.upper.matching
        l = walk.lower.matching
        u_outer = walk.upper.is_outer
        l_outer = walk.lower.is_outer
        start = walk.start
        sentinel = self._sentinel(walk)
        pos = walk.pos

        for _ in range(len(l) + 1):
            if pos == start or pos == sentinel:
                break
            if l_outer[pos]:
                walk.nr_lower += 1
                if l[pos] > walk.watermark:
                    walk.watermark = l[pos]
            elif u_outer[pos]:
                walk.nr_upper += 1
                walk.pos = u[l[pos]]
                return WalkState.WALK_INWARD
            pos = u[l[pos]]
        else:
            raise _not_closed(walk)

        walk.pos = pos
        return WalkState.CYCLE_CLOSED

    def walk_inward(self, walk: CycleWalk) -> WalkState:
        u = walk.upper.matching
        l = walk.lower.matching
        u_outer = walk.upper.is_outer
        start = walk.start
        sentinel = self._sentinel(walk)
        pos = walk.pos

        for _ in range(len(l) + 1):
            if pos == start or pos == sentinel:
                break
            if u_outer[pos]:
                walk.nr_upper += 1
            pos = u[l[pos]]
        else:
            raise _not_closed(walk)

        walk.pos = pos
        return WalkState.CYCLE_CLOSED

    def cycle_closed(self, walk: CycleWalk) -> WalkState:
        if walk.pos == self._sentinel(walk):
            walk.voided = True
            walk.halted = True
        return super().cycle_closed(walk)

    def is_finished(self, walk: CycleWalk) -> bool:
        return walk.halted


# =============================================================================
# SECTION 3: Free points (Motzkin monoid)
# =============================================================================

class FixedPointCycleCounter(CompositionCycleCounter):
    """
    Motzkin words, even rank.

    There is no inward phase: outer brackets of both sides are counted for
    the whole cycle. A step that lands on a free point of either diagram
    voids the current cycle's factor; the walk then carries on with the next
    outer bracket of ``lower``.
    """

    def _stops_after_lower(self, pos: int, u: Sequence[int]) -> bool:
        return u[pos] == pos

    def first_step(self, walk: CycleWalk) -> WalkState:
        pos = walk.lower.matching[walk.start]
        if walk.upper.matching[pos] == pos:
            walk.voided = True
            return WalkState.CYCLE_CLOSED
        walk.pos = walk.upper.matching[pos]
        return WalkState.WALK_OUTWARD

    def walk_outward(self, walk: CycleWalk) -> WalkState:
        u = walk.upper.matching
        l = walk.lower.matching
        u_outer = walk.upper.is_outer
        l_outer = walk.lower.is_outer
        start = walk.start
        pos = walk.pos

        for _ in range(len(l) + 1):
            if pos == start:
                break
            if l_outer[pos]:
                walk.nr_lower += 1
                if l[pos] > walk.watermark:
                    walk.watermark = l[pos]
            elif u_outer[pos]:
                walk.nr_upper += 1
            if l[pos] == pos:
                walk.voided = True
                break
            pos = l[pos]
            if self._stops_after_lower(pos, u):
                walk.voided = True
                break
            pos = u[pos]
        else:
            raise _not_closed(walk)

        walk.pos = pos
        return WalkState.CYCLE_CLOSED

    def walk_inward(self, walk: CycleWalk) -> WalkState:
        raise AssertionError("Motzkin walks have no inward phase")


class FixedPointSentinelCycleCounter(FixedPointCycleCounter):
    """
    Motzkin words, odd rank: position ``extra`` is the added point.

    Before any cycle is walked, the path through the extra point is followed
    alternately through ``upper`` and ``lower``; meeting a free point voids
    the whole pair. Cycles additionally stop when ``lower`` leads to the
    extra point.
    """

    def __init__(self, extra: int):
        self.extra = extra

    def __repr__(self) -> str:
        return f"{type(self).__name__}(extra={self.extra})"

    def __eq__(self, other):
        return isinstance(other, FixedPointSentinelCycleCounter) and other.extra == self.extra

    def __hash__(self):
        return hash((type(self).__name__, self.extra))

    def _stops_after_lower(self, pos: int, u: Sequence[int]) -> bool:
        return u[pos] == pos or pos == self.extra

    def initial_state(self, walk: CycleWalk) -> WalkState:
        u = walk.upper.matching
        l = walk.lower.matching
        pos = self.extra

        for _ in range(len(l) + 1):
            if u[pos] == pos:
                return WalkState.PAIR_VOID
            pos = u[pos]
            if l[pos] == pos:
                return WalkState.PAIR_VOID
            pos = l[pos]
            if pos == self.extra:
                break
        else:
            raise AssertionError(f"path through extra point {self.extra} did not close")

        if not walk.lower.outer or not walk.upper.outer:
            return WalkState.FINISHED
        return WalkState.ADVANCE_WATERMARK


__all__ = [
    "WalkState",
    "CycleWalk",
    "CompositionCycleCounter",
    "SentinelCycleCounter",
    "FixedPointCycleCounter",
    "FixedPointSentinelCycleCounter",
]
