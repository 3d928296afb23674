# planar_idempotents/constants.py
"""
Planar Idempotents Constants

This module defines the numeric tables and defaults used throughout:

LAYER 1: Word Tables
- CATALAN_NUMBERS: number of Dyck words of half-length n, n = 0..30
- MOTZKIN_WEIGHT_0: weight-0 Motzkin words per degree (even rank phase)
- MOTZKIN_WEIGHT_1: weight-1 Motzkin words per degree (odd rank phase)

LAYER 2: Degree Bounds
- MIN_DEGREE, MAX_DEGREE: accepted range for a run
- MAX_HALF_LENGTH: largest half-length covered by CATALAN_NUMBERS

LAYER 3: Parallel Defaults
- RESERVED_CORES: cores left free when sizing the worker pool
- SERIAL_THRESHOLD: jobs with fewer pair evaluations run in-process
"""


# =============================================================================
# LAYER 1: Word Tables
# =============================================================================

CATALAN_NUMBERS = (
    1, 1, 2, 5, 14, 42, 132, 429, 1430, 4862, 16796, 58786, 208012, 742900,
    2674440, 9694845, 35357670, 129644790, 477638700, 1767263190, 6564120420,
    24466267020, 91482563640, 343059613650, 1289904147324, 4861946401452,
    18367353072152, 69533550916004, 263747951750360, 1002242216651368,
    3814986502092304,
)

# Index = degree. Entry 0 is unused.
MOTZKIN_WEIGHT_0 = (
    0, 1, 2, 4, 9, 21, 51, 127, 323, 835, 2188, 5798, 15511, 41835, 113634,
    310572, 853467, 2356779, 6536382, 18199284, 50852019, 142547559,
    400763223, 1129760415, 3192727797, 9043402501, 25669818476,
    73007772802, 208023278209, 593742784829, 1697385471211,
    4859761676391, 13933569346707, 40002464776083, 114988706524270,
    330931069469828, 953467954114363, 2750016719520991, 7939655757745265,
    22944749046030949, 66368199913921497,
)

MOTZKIN_WEIGHT_1 = (
    0, 1, 2, 5, 12, 30, 76, 196, 512, 1353, 3610, 9713, 26324, 71799,
    196938, 542895, 1503312, 4179603, 11662902, 32652735, 91695540,
    258215664, 728997192, 2062967382, 5850674704, 16626415975, 47337954326,
    135015505407, 385719506620, 1103642686382, 3162376205180,
    9073807670316, 26068895429376, 74986241748187, 215942362945558,
    622536884644535, 1796548765406628, 5189639038224274, 15005093288285684,
    43423450867890548, 125769718187920320,
)


# =============================================================================
# LAYER 2: Degree Bounds
# =============================================================================

MIN_DEGREE = 1
MAX_DEGREE = 40
MAX_HALF_LENGTH = len(CATALAN_NUMBERS) - 1

assert len(MOTZKIN_WEIGHT_0) == len(MOTZKIN_WEIGHT_1) == MAX_DEGREE + 1


# =============================================================================
# LAYER 3: Parallel Defaults
# =============================================================================

RESERVED_CORES = 2       # Cores left free when sizing the pool
SERIAL_THRESHOLD = 400 * 399 // 2   # Triangular pairs of 400 diagrams

MONOIDS = ("jones", "motzkin", "kauffman")
