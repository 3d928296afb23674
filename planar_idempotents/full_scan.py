"""
Full-Scan Cycle Counting (Kauffman monoid)

Same contract as the watermark walk in ``cycles``: given an upper and a lower
half-diagram, return the multiplicative idempotent count of the pair. Instead
of driving the walk from the outer brackets of ``lower``, every position is
scanned left to right against a visited table, and the first unvisited
position after a cycle closes starts the next one.

Differences in what is counted: loops are not free in the Kauffman monoid,
so a cycle that meets no outer bracket on one side voids the whole pair,
and a cycle contributes ``nr_u * nr_l`` (there is no "connect nothing"
choice).
"""

from __future__ import annotations
from typing import List, Tuple

from .diagrams import Diagram


class FullScanCycleCounter:
    """Even degree: Dyck words of length 2n, no extra point."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def count(self, upper: Diagram, lower: Diagram) -> int:
        if upper.length != lower.length:
            raise ValueError(f"Length mismatch: {upper.length} vs {lower.length}")
        seen = [False] * lower.length
        cnt, _ = self._scan(upper, lower, seen, 0, lower.length, lower.length - 1)
        return cnt

    @staticmethod
    def _scan(upper: Diagram,
              lower: Diagram,
              seen: List[bool],
              pos: int,
              stop: int,
              skip_limit: int) -> Tuple[int, int]:
        """
        Walk every cycle whose smallest unvisited position is below ``stop``.

        Returns:
            (count, position where the scan stopped); count is 0 as soon as a
            cycle meets no outer bracket on one of the two sides
        """
        u = upper.matching
        l = lower.matching
        u_outer = upper.is_outer
        l_outer = lower.is_outer
        cnt = 1

        while pos < stop:
            nr_u = 1 if u_outer[pos] else 0
            nr_l = 1 if l_outer[pos] else 0
            seen[pos] = True
            seen[l[pos]] = True
            pos = u[l[pos]]

            while not seen[pos]:
                seen[pos] = True
                seen[l[pos]] = True
                if l_outer[pos]:
                    nr_l += 1
                elif u_outer[pos]:
                    nr_u += 1
                    pos = u[l[pos]]
                    break
                pos = u[l[pos]]

            while not seen[pos]:
                if u_outer[pos]:
                    nr_u += 1
                seen[pos] = True
                seen[l[pos]] = True
                pos = u[l[pos]]

            if nr_u == 0 or nr_l == 0:
                return 0, pos
            cnt *= nr_u * nr_l

            while pos <= skip_limit and seen[pos]:
                pos += 1

        return cnt, pos


class FullScanSentinelCycleCounter(FullScanCycleCounter):
    """
    Odd degree: Dyck words of length 2n = degree + 1.

    The path through the last (extra) position is walked first. If it
    visits every position the pair contributes exactly one idempotent
    (before the symmetry multiplier). Otherwise the smallest position it
    touched is a cutoff: cycles are scanned below it, and every position
    above it must already have been visited.
    """

    def count(self, upper: Diagram, lower: Diagram) -> int:
        if upper.length != lower.length:
            raise ValueError(f"Length mismatch: {upper.length} vs {lower.length}")
        u = upper.matching
        l = lower.matching
        u_outer = upper.is_outer
        length = lower.length

        seen = [False] * length
        pos = length - 1
        nr_seen = 0
        cutoff = length

        while not seen[pos]:
            nr_seen += 2
            seen[pos] = True
            pos = l[pos]
            seen[pos] = True
            cutoff = min(pos, cutoff)
            if u_outer[pos]:
                pos = u[pos]
                break
            pos = u[pos]

        while not seen[pos]:
            nr_seen += 2
            seen[pos] = True
            pos = l[pos]
            seen[pos] = True
            pos = u[pos]

        if nr_seen == length:
            return 1

        cnt, pos = self._scan(upper, lower, seen, 0, cutoff, cutoff)
        if cnt == 0:
            return 0
        if not all(seen[pos:]):
            return 0
        return cnt


__all__ = [
    "FullScanCycleCounter",
    "FullScanSentinelCycleCounter",
]
