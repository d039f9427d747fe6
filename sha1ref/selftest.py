from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from .sha1 import digest, format_digest

LONG_A = "a" * 1_000_000

MSG_448 = "abcdbcdecdefdefgefghfghighijhijkijkljklmklmnlmnomnopnopq"
MSG_896 = (
    "abcdefghbcdefghicdefghijdefghijkefghijklfghijklmghijklmn"
    "hijklmnoijklmnopjklmnopqklmnopqrlmnopqrsmnopqrstnopqrstu"
)

# (input, expected digest as 5 space-separated words)
VECTORS: Tuple[Tuple[str, str], ...] = (
    ("", "da39a3ee 5e6b4b0d 3255bfef 95601890 afd80709"),
    ("a", "86f7e437 faa5a7fc e15d1ddc b9eaeaea 377667b8"),
    ("abc", "a9993e36 4706816a ba3e2571 7850c26c 9cd0d89d"),
    ("message digest", "c12252ce da8be899 4d5fa029 0a47231c 1d16aae3"),
    ("abcdefghijklmnopqrstuvwxyz", "32d10c7b 8cf96570 ca04ce37 f2a19d84 240d3a89"),
    (MSG_448, "84983e44 1c3bd26e baae4aa1 f95129e5 e54670f1"),
    (MSG_896, "a49b2446 a02c645b f419f995 b6709125 3a04a259"),
)

LONG_VECTORS: Tuple[Tuple[str, str], ...] = (
    (LONG_A, "34aa973c d4c4daa4 f61eeb2b dbad2731 6534016f"),
)


@dataclass
class VectorResult:
    preview: str
    expected: str
    actual: str
    seconds: float

    @property
    def ok(self) -> bool:
        return self.actual == self.expected


def preview(text: str, limit: int = 20) -> str:
    if len(text) > limit:
        return f"{text[:limit]}... ({len(text)} chars)"
    return text


def run_vector(
    text: str,
    expected: str,
    repeat: int = 1,
    fn: Callable[[str], Sequence[int]] = digest,
) -> VectorResult:
    if repeat < 1:
        raise ValueError("repeat must be >= 1")
    start = time.perf_counter()
    for _ in range(repeat):
        words = fn(text)
    elapsed = time.perf_counter() - start
    return VectorResult(
        preview=preview(text),
        expected=expected,
        actual=format_digest(words),
        seconds=elapsed / repeat,
    )


def run_selftest(
    vectors: Sequence[Tuple[str, str]] = VECTORS,
    repeat: int = 1,
    include_long: bool = False,
) -> List[VectorResult]:
    table = list(vectors)
    if include_long:
        table.extend(LONG_VECTORS)
    return [run_vector(text, expected, repeat) for text, expected in table]
