#!/usr/bin/env python3
"""Time merkle_root over a large synthetic stream of identical records."""
from __future__ import annotations

import argparse
import logging
import os
import time
from typing import Iterator, Sequence

from .merkle import merkle_root

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 1 << 20
DEFAULT_RECORD = "42"


def synthetic_stream(record: bytes, iterations: int) -> Iterator[bytes]:
    """Yield ``record`` ``iterations`` times."""
    for _ in range(iterations):
        yield record


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fastmerkle-bench",
        description="Benchmark the incremental Merkle root over a synthetic stream",
    )
    parser.add_argument(
        "--iterations",
        type=_positive_int,
        default=os.getenv("FASTMERKLE_BENCH_ITERATIONS", str(DEFAULT_ITERATIONS)),
        help="number of records in the stream (env FASTMERKLE_BENCH_ITERATIONS)",
    )
    parser.add_argument(
        "--record",
        default=os.getenv("FASTMERKLE_BENCH_RECORD", DEFAULT_RECORD),
        help="record contents, UTF-8 encoded (env FASTMERKLE_BENCH_RECORD)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    record = args.record.encode("utf-8")
    logger.info("Hashing %d records of %d bytes", args.iterations, len(record))

    start = time.perf_counter()
    root = merkle_root(synthetic_stream(record, args.iterations))
    elapsed = time.perf_counter() - start

    print(f"Merkle root: {root.hex()}")
    print(f"Elapsed time: {elapsed:.6f}s")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
