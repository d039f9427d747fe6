#!/usr/bin/env python3
"""Accuracy checks for the SHA-1 core against hashlib."""
from __future__ import annotations

import argparse
import hashlib
import random
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from sha1ref.batch import digest_batch
from sha1ref.core import BLOCK_SIZE, MASK32, rl
from sha1ref.message import decode_length, pad_message
from sha1ref.selftest import VECTORS
from sha1ref.sha1 import digest, format_digest, hexdigest


def random_text(rng: random.Random, length: int) -> str:
    return "".join(chr(rng.randrange(256)) for _ in range(length))


def check_sha1_vectors() -> bool:
    ok = True
    for text, expected in VECTORS:
        ours = format_digest(digest(text))
        if ours != expected:
            print(f"SHA1 mismatch: {text[:20]!r} ours={ours} expected={expected}")
            ok = False
    print(f"sha1_vectors: {'PASS' if ok else 'FAIL'}")
    return ok


def check_random_vs_hashlib(trials: int, seed: int) -> bool:
    rng = random.Random(seed)
    ok = True
    for _ in range(trials):
        text = random_text(rng, rng.randrange(300))
        ours = hexdigest(text)
        ref = hashlib.sha1(text.encode("latin-1")).hexdigest()
        if ours != ref:
            print(f"SHA1 mismatch: len={len(text)} ours={ours} ref={ref}")
            ok = False
    print(f"random_vs_hashlib: {'PASS' if ok else 'FAIL'} trials={trials}")
    return ok


def check_padding(max_len: int) -> bool:
    ok = True
    for n in range(max_len + 1):
        padded = pad_message(b"x" * n)
        if len(padded) % BLOCK_SIZE or decode_length(padded) != n:
            print(f"padding broken at length {n}: padded={len(padded)}")
            ok = False
            break
    print(f"padding: {'PASS' if ok else 'FAIL'} lengths=0..{max_len}")
    return ok


def check_rotation(trials: int, seed: int) -> bool:
    rng = random.Random(seed)
    ok = True
    for _ in range(trials):
        w = rng.getrandbits(32)
        for r in range(32):
            if rl(rl(w, r), 32 - r) != w or rl(w, r) > MASK32:
                print(f"rotation broken: w={w:08x} r={r}")
                ok = False
    print(f"rotation: {'PASS' if ok else 'FAIL'}")
    return ok


def check_batch(trials: int, seed: int) -> bool:
    rng = random.Random(seed)
    texts = [random_text(rng, rng.randrange(200)) for _ in range(trials)]
    ok = digest_batch(texts) == [digest(t) for t in texts]
    print(f"batch_vs_scalar: {'PASS' if ok else 'FAIL'} messages={trials}")
    return ok


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--trials", type=int, default=200)
    ap.add_argument("--max-len", type=int, default=10000)
    ap.add_argument("--seed", type=int, default=123)
    args = ap.parse_args()

    ok = True
    ok &= check_sha1_vectors()
    ok &= check_random_vs_hashlib(args.trials, args.seed)
    ok &= check_padding(args.max_len)
    ok &= check_rotation(args.trials, args.seed)
    ok &= check_batch(args.trials, args.seed)

    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
