"""
Command line entry point.

    planar-idempotents [-h] [-v] [-m {jones,motzkin,kauffman}] [-w WORKERS] [--threads] deg

Prints the number of idempotents as a single line on stdout. Diagnostics
(-v) go to stderr.
"""

from __future__ import annotations
from typing import Optional, Sequence
import argparse
import logging
import sys

from .constants import MAX_DEGREE, MIN_DEGREE, MONOIDS
from .monoids import count_idempotents
from .reducer import ReducerConfig


def degree_type(value: str) -> int:
    """argparse type for the degree argument."""
    try:
        degree = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid degree: {value!r}") from None
    if not MIN_DEGREE <= degree <= MAX_DEGREE:
        raise argparse.ArgumentTypeError(
            f"degree must be an integer in [{MIN_DEGREE}, {MAX_DEGREE}], got {degree}"
        )
    return degree


def workers_type(value: str) -> int:
    try:
        workers = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid worker count: {value!r}") from None
    if workers < 1:
        raise argparse.ArgumentTypeError(f"worker count must be >= 1, got {workers}")
    return workers


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="planar-idempotents",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        description="Count the idempotents of the Jones, Motzkin or Kauffman monoid of a given degree.",
    )
    p.add_argument("deg", type=degree_type,
                   help=f"Degree of the monoid ({MIN_DEGREE} <= deg <= {MAX_DEGREE}).")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="Log word counts, memory use, worker loads and timings to stderr.")
    p.add_argument("-m", "--monoid", choices=MONOIDS, default="jones",
                   help="Which monoid to count.")
    p.add_argument("-w", "--workers", type=workers_type, default=None,
                   help="Number of workers (default: CPU count minus two, at least one).")
    p.add_argument("--threads", action="store_true",
                   help="Use a thread pool instead of a process pool.")
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, stream=sys.stderr,
                            format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    config = ReducerConfig(workers=args.workers, use_processes=not args.threads)
    result = count_idempotents(args.monoid, args.deg, config)
    print(result.total)
    return 0


if __name__ == "__main__":
    sys.exit(main())
