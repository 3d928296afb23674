"""
Brute-Force Reference Enumeration
=================================

Small-degree ground truth for the fast counters. Every element of the monoid
is generated explicitly, squared by stacking, and compared with itself.

A diagram of degree d is an involution on 2d labels:

    top point i     -> label i
    bottom point i  -> label d + i

Free points (Motzkin only) are fixed by the involution. Planarity means the
matching is non-crossing when the labels are read around the boundary:
top 0..d-1 left to right, then bottom d-1..0 right to left.

Stacking x over y glues the bottom of x to the top of y. Components that
touch neither outer row are dropped; for the Kauffman monoid a dropped loop
makes the product a scalar multiple, so the element is not idempotent.
"""

from __future__ import annotations
from typing import Iterator, List, Sequence, Tuple

from .constants import MONOIDS


Involution = Tuple[int, ...]

# Exhaustive enumeration is exponential; keep callers honest.
MAX_REFERENCE_DEGREE = 7


def _check(monoid: str, degree: int) -> None:
    if monoid not in MONOIDS:
        raise ValueError(f"Unknown monoid: {monoid!r}")
    if not 1 <= degree <= MAX_REFERENCE_DEGREE:
        raise ValueError(f"Reference degree must be in [1, {MAX_REFERENCE_DEGREE}], got {degree}")


def boundary_order(degree: int) -> List[int]:
    """Labels in the order they appear around the boundary of the diagram."""
    return list(range(degree)) + [degree + i for i in reversed(range(degree))]


def _noncrossing(points: Sequence[int], partial: bool) -> Iterator[List[Tuple[int, int]]]:
    """Non-crossing matchings of points on a circle, as lists of (a, b) pairs."""
    if not points:
        yield []
        return
    first, rest = points[0], points[1:]
    if partial:
        for pairs in _noncrossing(rest, partial):
            yield [(first, first)] + pairs
    for k in range(len(rest)):
        inside, outside = rest[:k], rest[k + 1:]
        if not partial and len(inside) % 2:
            continue
        for left in _noncrossing(inside, partial):
            for right in _noncrossing(outside, partial):
                yield [(first, rest[k])] + left + right


def diagrams(monoid: str, degree: int) -> List[Involution]:
    """
    Every element of the monoid of the given degree.

    Jones and Kauffman elements are the non-crossing perfect matchings
    (Catalan(d) of them); Motzkin elements also allow free points.
    """
    _check(monoid, degree)
    result = []
    for pairs in _noncrossing(boundary_order(degree), partial=(monoid == "motzkin")):
        inv = list(range(2 * degree))
        for a, b in pairs:
            inv[a] = b
            inv[b] = a
        result.append(tuple(inv))
    return result


def compose(x: Involution, y: Involution, degree: int) -> Tuple[Involution, int]:
    """
    Stack x on top of y.

    Node i < 2d is label i of x; node d + i is label i of y, so the bottom
    row of x and the top row of y share the nodes d..2d-1.

    Returns:
        (product, number of closed loops removed)
    """
    d = degree
    size = 3 * d

    def neighbours(node: int) -> Iterator[int]:
        if node < 2 * d and x[node] != node:
            yield x[node]
        if node >= d and y[node - d] != node - d:
            yield y[node - d] + d

    product = list(range(2 * d))
    seen = [False] * size
    loops = 0
    for root in range(size):
        if seen[root]:
            continue
        component = []
        stack = [root]
        seen[root] = True
        while stack:
            node = stack.pop()
            component.append(node)
            for other in neighbours(node):
                if not seen[other]:
                    seen[other] = True
                    stack.append(other)

        ends = [node if node < d else node - d for node in component if node < d or node >= 2 * d]
        if len(ends) > 2:
            raise AssertionError(f"component {component} meets {len(ends)} outer points")
        if len(ends) == 2:
            a, b = ends
            product[a] = b
            product[b] = a
        elif not ends and all(x[node] != node and y[node - d] != node - d for node in component):
            loops += 1

    return tuple(product), loops


def is_idempotent(monoid: str, x: Involution, degree: int) -> bool:
    product, loops = compose(x, x, degree)
    if monoid == "kauffman" and loops:
        return False
    return product == x


def count_idempotents_brute_force(monoid: str, degree: int) -> int:
    """Number of idempotents found by squaring every element."""
    return sum(1 for x in diagrams(monoid, degree) if is_idempotent(monoid, x, degree))


__all__ = [
    "MAX_REFERENCE_DEGREE",
    "boundary_order",
    "diagrams",
    "compose",
    "is_idempotent",
    "count_idempotents_brute_force",
]
