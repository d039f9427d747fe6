#!/usr/bin/env python3
"""Performance micro-benchmarks for the SHA-1 core and batch engine."""
from __future__ import annotations

import argparse
import random
import time
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

import numpy as np

from sha1ref.batch import compress_lanes, digest_batch
from sha1ref.core import SHA1_IV, compress_block
from sha1ref.selftest import LONG_A
from sha1ref.sha1 import digest


def bench_compress_block(trials: int, seed: int) -> None:
    rng = random.Random(seed)
    blocks = [[rng.getrandbits(32) for _ in range(16)] for _ in range(trials)]
    state = SHA1_IV
    start = time.time()
    for block in blocks:
        state, _ = compress_block(state, block)
    elapsed = time.time() - start
    rate = trials / elapsed if elapsed else 0.0
    print(f"compress_block: trials={trials} time={elapsed:.3f}s rate={rate:.2f} blocks/s")


def bench_compress_lanes(trials: int, lanes: int, seed: int) -> None:
    rng = np.random.default_rng(seed)
    state = np.tile(np.array(SHA1_IV, dtype=np.uint32), (lanes, 1))
    blocks = rng.integers(0, 1 << 32, size=(trials, lanes, 16), dtype=np.uint32)
    start = time.time()
    for i in range(trials):
        state = compress_lanes(state, blocks[i])
    elapsed = time.time() - start
    rate = trials * lanes / elapsed if elapsed else 0.0
    print(f"compress_lanes: trials={trials} lanes={lanes} time={elapsed:.3f}s rate={rate:.2f} blocks/s")


def bench_long_message() -> None:
    start = time.time()
    digest(LONG_A)
    scalar = time.time() - start
    start = time.time()
    digest_batch([LONG_A])
    batch = time.time() - start
    print(f"million_a: scalar={scalar:.3f}s batch={batch:.3f}s")


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--trials", type=int, default=2000)
    ap.add_argument("--lanes", type=int, default=1024)
    ap.add_argument("--seed", type=int, default=2024)
    ap.add_argument("--long", action="store_true", help="also time the one-million 'a' message")
    args = ap.parse_args()

    bench_compress_block(args.trials, args.seed)
    bench_compress_lanes(max(1, args.trials // 10), args.lanes, args.seed)
    if args.long:
        bench_long_message()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
