from __future__ import annotations

import argparse
import hashlib
import random
import string
import time
from pathlib import Path
from typing import List

from .batch import digest_batch
from .errors import Sha1Error
from .selftest import LONG_VECTORS, VECTORS, run_selftest
from .sha1 import digest, format_digest


def cmd_digest(ns: argparse.Namespace) -> int:
    for text in ns.text:
        print(format_digest(digest(text), ns.sep))
    return 0


def cmd_verify_core(ns: argparse.Namespace) -> int:
    results = run_selftest(repeat=ns.repeat, include_long=ns.long)
    table = list(VECTORS) + (list(LONG_VECTORS) if ns.long else [])
    ok_all = True
    for (text, _), res in zip(table, results):
        ref = hashlib.sha1(text.encode("latin-1")).hexdigest()
        ours = res.actual.replace(" ", "")
        status = "OK" if res.ok and ours == ref else "FAIL"
        if not ns.quiet:
            print(f"SHA1({res.preview!r}) -> {status} ({res.seconds * 1e3:.3f} ms)")
        if status != "OK":
            print(f"  ours    ={res.actual}\n  expected={res.expected}\n  hashlib ={ref}")
            ok_all = False
    print("verify-core:", "PASS" if ok_all else "FAIL")
    return 0 if ok_all else 1


def cmd_batch(ns: argparse.Namespace) -> int:
    path = Path(ns.file)
    if not path.exists():
        print(f"batch: file not found: {path}")
        return 1
    lines = path.read_text(encoding="latin-1").splitlines()
    for words in digest_batch(lines):
        print(format_digest(words, ns.sep))
    return 0


def cmd_bench(ns: argparse.Namespace) -> int:
    rng = random.Random(ns.seed)
    texts = ["".join(rng.choice(string.ascii_letters) for _ in range(ns.length)) for _ in range(ns.size)]

    start = time.perf_counter()
    for _ in range(ns.repeat):
        scalar = [digest(t) for t in texts]
    t_scalar = (time.perf_counter() - start) / ns.repeat

    start = time.perf_counter()
    for _ in range(ns.repeat):
        lanes = digest_batch(texts)
    t_batch = (time.perf_counter() - start) / ns.repeat

    if scalar != lanes:
        print("bench: scalar and batch digests disagree")
        return 1
    rate = ns.size / t_batch if t_batch else 0.0
    print(f"bench: size={ns.size} length={ns.length} scalar={t_scalar:.3f}s batch={t_batch:.3f}s batch_rate={rate:.1f}/s")
    return 0


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="sha1ref", description="Reference SHA-1 over text (one byte per character)")
    sub = ap.add_subparsers(dest="cmd", required=True)

    s1 = sub.add_parser("digest", help="print the SHA-1 digest of each argument")
    s1.add_argument("text", nargs="+")
    s1.add_argument("--sep", default=" ", help="separator between the five words")
    s1.set_defaults(func=cmd_digest)

    s2 = sub.add_parser("verify-core", help="run the test-vector table and compare with hashlib")
    s2.add_argument("--long", action="store_true", help="include the one-million 'a' vector")
    s2.add_argument("--repeat", type=int, default=1)
    s2.add_argument("--quiet", "-q", action="store_true")
    s2.set_defaults(func=cmd_verify_core)

    s3 = sub.add_parser("batch", help="digest every line of a file with the NumPy batch engine")
    s3.add_argument("file")
    s3.add_argument("--sep", default=" ")
    s3.set_defaults(func=cmd_batch)

    s4 = sub.add_parser("bench", help="time scalar digest against the batch engine")
    s4.add_argument("--size", type=int, default=256)
    s4.add_argument("--length", type=int, default=100)
    s4.add_argument("--repeat", type=int, default=1)
    s4.add_argument("--seed", type=int, default=2024)
    s4.set_defaults(func=cmd_bench)

    ns = ap.parse_args(argv)
    if getattr(ns, "repeat", 1) < 1:
        ap.error("--repeat must be >= 1")
    try:
        return ns.func(ns)
    except Sha1Error as err:
        print(f"sha1ref: error: {err}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
