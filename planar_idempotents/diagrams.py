"""
Diagrams and Diagram Collections

A Diagram is one half of a planar diagram, decoded from a packed word:

- matching: position -> partner position (an involution; free points map
  to themselves)
- outer: the paired positions at nesting depth 0, in increasing order
- is_outer: membership table for outer

Collections are built once, single-threaded, and never mutated afterwards.
Every field is a tuple and the outer-size vector is marked read-only, so the same
collection can be handed to any number of workers.
"""

from __future__ import annotations
from typing import Callable, Iterator, List, Optional, Sequence, Tuple
from dataclasses import dataclass
import logging

import numpy as np

from .words import dyck_words, motzkin_words, reverse_word


logger = logging.getLogger(__name__)


# =============================================================================
# SECTION 1: Diagram
# =============================================================================

@dataclass(frozen=True)
class Diagram:
    """One decoded half-diagram."""
    word: int
    matching: Tuple[int, ...]
    outer: Tuple[int, ...]
    is_outer: Tuple[bool, ...]
    subset: int = 0     # free-point mask (Motzkin words only)

    @property
    def length(self) -> int:
        return len(self.matching)

    def __call__(self, i: int) -> int:
        return self.matching[i]

    def is_free(self, i: int) -> bool:
        return self.matching[i] == i

    def free_points(self) -> Tuple[int, ...]:
        return tuple(i for i, p in enumerate(self.matching) if p == i)


def decode_dyck(word: int, length: int) -> Diagram:
    """
    Decode a Dyck word into a Diagram.

    Scans positions left to right with a local stack of unmatched opening
    brackets. A position is outer iff it closes the only open span.

    Args:
        word: Packed Dyck word, most significant bit = position 0
        length: Number of positions (bits) in the word

    Raises:
        ValueError: if the word is not balanced
    """
    matching = [0] * length
    is_outer = [False] * length
    outer: List[int] = []
    stack: List[int] = []

    mask = 1 << (length - 1) if length else 0
    for j in range(length):
        if word & mask:
            stack.append(j)
        else:
            if not stack:
                raise ValueError(f"word {word:#b} closes an unopened bracket at {j}")
            top = stack.pop()
            matching[j] = top
            matching[top] = j
            if not stack:
                outer.append(top)
                is_outer[top] = True
        mask >>= 1

    if stack:
        raise ValueError(f"word {word:#b} leaves {len(stack)} brackets open")

    return Diagram(word=word, matching=tuple(matching), outer=tuple(outer),
                   is_outer=tuple(is_outer))


def decode_motzkin(word: int, subset: int, length: int, set_size: int) -> Diagram:
    """
    Decode a Motzkin word (Dyck word + free-point mask) into a Diagram.

    Positions j < set_size whose subset bit is set (most significant bit
    first) are free; the remaining positions consume the Dyck word bits in
    order. Outer positions are the depth-0 pairs whose partner also lies in
    the first set_size positions.

    Args:
        word: Packed Dyck word for the paired positions
        subset: set_size-bit mask of free points
        length: Total number of positions
        set_size: Number of leading positions that may be free

    Raises:
        ValueError: if the Dyck part is not balanced
    """
    matching = list(range(length))
    stack: List[int] = []

    nr_paired = length - bin(subset).count("1")
    mask_word = 1 << (nr_paired - 1) if nr_paired else 0

    for j in range(length):
        if j < set_size and (subset >> (set_size - 1 - j)) & 1:
            continue
        if word & mask_word:
            stack.append(j)
        else:
            if not stack:
                raise ValueError(f"word {word:#b} closes an unopened bracket at {j}")
            top = stack.pop()
            matching[j] = top
            matching[top] = j
        mask_word >>= 1

    if stack:
        raise ValueError(f"word {word:#b} leaves {len(stack)} brackets open")

    is_outer = [False] * length
    outer: List[int] = []
    j = 0
    while j < set_size:
        partner = matching[j]
        if partner != j and partner < set_size:
            outer.append(j)
            is_outer[j] = True
        j = partner + 1

    return Diagram(word=word, matching=tuple(matching), outer=tuple(outer),
                   is_outer=tuple(is_outer), subset=subset)


# =============================================================================
# SECTION 2: DiagramCollection
# =============================================================================

@dataclass(frozen=True)
class DiagramCollection:
    """
    Ordered, immutable sequence of diagrams of a common length.

    Attributes:
        diagrams: The decoded diagrams, in generation order
        length: Number of positions in every diagram
    """
    diagrams: Tuple[Diagram, ...]
    length: int

    def __post_init__(self):
        for d in self.diagrams:
            if d.length != self.length:
                raise ValueError(f"Diagram of length {d.length} in collection of length {self.length}")

    def __len__(self) -> int:
        return len(self.diagrams)

    def __getitem__(self, i: int) -> Diagram:
        return self.diagrams[i]

    def __iter__(self) -> Iterator[Diagram]:
        return iter(self.diagrams)

    @classmethod
    def from_dyck(cls, n: int, length: Optional[int] = None) -> DiagramCollection:
        """All Dyck words of half-length n, decoded in increasing word order."""
        length = 2 * n if length is None else length
        return cls(tuple(decode_dyck(w, length) for w in dyck_words(n)), length)

    @classmethod
    def from_motzkin(cls,
                     length: int,
                     set_size: int,
                     m_min: int,
                     m_max: int,
                     subset_size: Callable[[int], int]) -> DiagramCollection:
        """Motzkin words in (Dyck half-length, Dyck word, subset) order."""
        diagrams = tuple(
            decode_motzkin(w, s, length, set_size)
            for w, _, s in motzkin_words(length, set_size, m_min, m_max, subset_size)
        )
        return cls(diagrams, length)

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def outer_sizes(self) -> np.ndarray:
        """Read-only vector of |outer| per diagram."""
        sizes = np.fromiter((len(d.outer) for d in self.diagrams),
                            dtype=np.uint64, count=len(self.diagrams))
        sizes.setflags(write=False)
        return sizes

    def base_contribution(self, offset: int = 0) -> int:
        """
        Sum of 2^(|outer| + offset) over the collection.

        This is the contribution of each diagram stacked against itself
        (offset 0), against itself and its mirror (offset 1), or against
        itself with the extra point fixed (offset -1).
        """
        if not self.diagrams:
            return 0
        exponents = self.outer_sizes().astype(np.int64) + offset
        if exponents.min() < 0:
            raise ValueError("Negative exponent in base contribution")
        # object dtype: exact Python ints
        powers = np.ones(len(exponents), dtype=object) << exponents.astype(object)
        return int(powers.sum())

    @property
    def nbytes(self) -> int:
        """Approximate memory held by the tables, as the compiled layout would store it."""
        n = len(self.diagrams)
        outer = int(self.outer_sizes().sum()) if n else 0
        return n * self.length * 2 + outer


# =============================================================================
# SECTION 3: Palindrome Split (Jones, even degree)
# =============================================================================

@dataclass(frozen=True)
class PalindromeSplit:
    """
    Dyck words of half-length n split by mirror symmetry.

    - palindromic: words equal to their own reversal
    - non_palindromic: one representative of every mirror pair
    - mirrors: mirrors[k] is the reversal of non_palindromic[k]
    """
    palindromic: DiagramCollection
    non_palindromic: DiagramCollection
    mirrors: DiagramCollection

    @classmethod
    def from_half_length(cls, n: int) -> PalindromeSplit:
        length = 2 * n
        palin: List[Diagram] = []
        nonpalin: List[Diagram] = []
        mirrors: List[Diagram] = []
        seen = set()

        for w in dyck_words(n):
            ww = reverse_word(w, length)
            if ww == w:
                palin.append(decode_dyck(w, length))
            elif ww not in seen:
                seen.add(w)
                nonpalin.append(decode_dyck(w, length))
                mirrors.append(decode_dyck(ww, length))

        logger.debug("Half-length %d: %d palindromic, %d mirror pairs",
                     n, len(palin), len(nonpalin))
        return cls(
            palindromic=DiagramCollection(tuple(palin), length),
            non_palindromic=DiagramCollection(tuple(nonpalin), length),
            mirrors=DiagramCollection(tuple(mirrors), length),
        )

    def base_contribution(self) -> int:
        """Idempotents from (w, w): 2^|outer| for palindromes, twice that per mirror pair."""
        return (self.palindromic.base_contribution()
                + self.non_palindromic.base_contribution(offset=1))

    @property
    def nbytes(self) -> int:
        return self.palindromic.nbytes + self.non_palindromic.nbytes + self.mirrors.nbytes

    def __len__(self) -> int:
        return len(self.palindromic) + 2 * len(self.non_palindromic)


__all__ = [
    "Diagram",
    "decode_dyck",
    "decode_motzkin",
    "DiagramCollection",
    "PalindromeSplit",
]
