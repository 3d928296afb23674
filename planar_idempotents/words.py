"""
Word Generation

Dyck words are packed into Python integers, one bit per position with the
most significant bit at position 0:

    1 = opening bracket
    0 = closing bracket

For half-length n the valid words are enumerated in strictly increasing
numeric order, from the alternating word 1010...10 (``minimum``) to the word
with every opening bracket at the most significant end, 11..100..0
(``maximum``). The successor relation is Cassio Neri's branch-free
"next Dyck word" step.

Motzkin words are a Dyck word plus a subset mask marking the free points.
"""

from __future__ import annotations
from typing import Callable, Iterator, Tuple

from .constants import CATALAN_NUMBERS, MAX_HALF_LENGTH


# Alternating 1010... mask wide enough for every supported half-length
_ALTERNATING = int("10" * (MAX_HALF_LENGTH + 2), 2)


def _check_half_length(n: int) -> None:
    if n < 0 or n > MAX_HALF_LENGTH:
        raise ValueError(f"half-length must be in [0, {MAX_HALF_LENGTH}], got {n}")


# =============================================================================
# SECTION 1: Dyck Words
# =============================================================================

def minimum(n: int) -> int:
    """Smallest Dyck word of half-length n: 1010...10."""
    _check_half_length(n)
    return int("10" * n, 2) if n else 0


def maximum(n: int) -> int:
    """Largest Dyck word of half-length n: 1...10...0."""
    _check_half_length(n)
    return ((1 << n) - 1) << n


def next_word(w: int) -> int:
    """
    Successor of the Dyck word w in increasing numeric order.

    Only meaningful for w < maximum(n); the successor of the maximum is not
    a Dyck word of the same half-length.
    """
    a = w & -w
    b = w + a
    c = w ^ b
    c = (c // a >> 2) + 1
    return ((c * c - 1) & _ALTERNATING) | b


def dyck_words(n: int) -> Iterator[int]:
    """
    Yield all Catalan(n) Dyck words of half-length n in increasing order.

    Args:
        n: Half-length (number of bracket pairs), 0 <= n <= 30

    Raises:
        ValueError: if n is outside the precomputed Catalan table
    """
    w = minimum(n)
    count = CATALAN_NUMBERS[n]
    for i in range(count):
        yield w
        if i + 1 < count:
            w = next_word(w)


def is_dyck_word(w: int, length: int) -> bool:
    """Check that the length-bit pattern w is balanced and never dips below zero."""
    depth = 0
    for shift in range(length - 1, -1, -1):
        depth += 1 if (w >> shift) & 1 else -1
        if depth < 0:
            return False
    return depth == 0 and w >> length == 0


def reverse_word(w: int, length: int) -> int:
    """
    Mirror image of a bracket word.

    Reading a word backwards turns opening brackets into closing ones, so the
    bits are reversed and complemented.
    """
    r = 0
    for _ in range(length):
        r = (r << 1) | (~w & 1)
        w >>= 1
    return r


def is_palindrome(w: int, length: int) -> bool:
    return reverse_word(w, length) == w


# =============================================================================
# SECTION 2: Subsets and Motzkin Words
# =============================================================================

def subsets(k: int, size: int) -> Iterator[int]:
    """
    Yield every k-subset of {0, ..., size-1} as a bit mask, in increasing order.

    Uses Gosper's hack: the next mask with the same popcount is obtained
    from the lowest set bit and the lowest zero bit above it.
    """
    if k == 0:
        yield 0
        return

    s = (1 << k) - 1
    limit = 1 << size
    while not s & limit:
        yield s
        lo = s & -s            # lowest one bit
        lz = (s + lo) & ~s     # lowest zero bit above lo
        s |= lz
        s &= ~(lz - 1)
        s |= (lz // lo // 2) - 1


def motzkin_words(length: int,
                  set_size: int,
                  m_min: int,
                  m_max: int,
                  subset_size: Callable[[int], int]) -> Iterator[Tuple[int, int, int]]:
    """
    Yield (dyck_word, m, subset) triples describing Motzkin words.

    For every Dyck half-length m in [m_min, m_max], every Dyck word of
    half-length m is combined with every subset of {0, ..., set_size-1} of
    size subset_size(m). Free points plus bracket positions must fill the
    whole word.

    Args:
        length: Total number of positions in each word
        set_size: Number of leading positions that may be free
        m_min: Smallest Dyck half-length
        m_max: Largest Dyck half-length
        subset_size: Number of free points for a given Dyck half-length

    Yields:
        (dyck_word, m, subset) with subset as a set_size-bit mask
    """
    for m in range(m_min, m_max + 1):
        k = subset_size(m)
        if k + 2 * m != length:
            raise AssertionError(f"{k} free points and {m} pairs do not fill {length}")
        masks = list(subsets(k, set_size))
        for w in dyck_words(m):
            for s in masks:
                yield w, m, s


__all__ = [
    "minimum",
    "maximum",
    "next_word",
    "dyck_words",
    "is_dyck_word",
    "reverse_word",
    "is_palindrome",
    "subsets",
    "motzkin_words",
]
