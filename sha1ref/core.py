from __future__ import annotations

import os
from typing import Dict, Iterator, List, Sequence, Tuple

from .errors import IncompleteBlock, IncompleteWord, InvalidRoundIndex, NotUint32

MASK32 = 0xFFFFFFFF

BLOCK_SIZE = 64
WORD_SIZE = 4
WORDS_PER_BLOCK = BLOCK_SIZE // WORD_SIZE
ROUNDS = 80

# SHA-1 initial value (H0..H4) from FIPS 180-4
SHA1_IV = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476, 0xC3D2E1F0)

# K_t per 20-round band
SHA1_K: Tuple[int, int, int, int] = (0x5A827999, 0x6ED9EBA1, 0x8F1BBCDC, 0xCA62C1D6)

CHECKS = os.getenv("SHA1REF_CHECKS") == "1"

State = Tuple[int, int, int, int, int]


def u32(x: int) -> int:
    return x & MASK32


def check_u32(x: int) -> int:
    if not 0 <= x <= MASK32:
        raise NotUint32(f"not uint32: {x}")
    return x


def rl(x: int, n: int) -> int:
    n &= 31
    x &= MASK32
    return ((x << n) | (x >> (32 - n))) & MASK32


def rr(x: int, n: int) -> int:
    n &= 31
    x &= MASK32
    return ((x >> n) | (x << (32 - n))) & MASK32


def ft(t: int, B: int, C: int, D: int) -> int:
    B, C, D = u32(B), u32(C), u32(D)
    if 0 <= t < 20:
        # Ch
        return u32((B & C) | ((~B) & D))
    if 20 <= t < 40:
        return u32(B ^ C ^ D)
    if 40 <= t < 60:
        # Maj
        return u32((B & C) | (B & D) | (C & D))
    if 60 <= t < 80:
        return u32(B ^ C ^ D)
    raise InvalidRoundIndex(f"invalid round index for f: {t}")


def kt(t: int) -> int:
    if not 0 <= t < ROUNDS:
        raise InvalidRoundIndex(f"invalid round index for K: {t}")
    return SHA1_K[t // 20]


def bytes_to_words_be(chunk: bytes) -> List[int]:
    if len(chunk) % WORD_SIZE:
        raise IncompleteWord(f"incomplete word: {len(chunk) % WORD_SIZE} trailing byte(s)")
    return [int.from_bytes(chunk[i : i + WORD_SIZE], "big") for i in range(0, len(chunk), WORD_SIZE)]


def words_to_bytes_be(words: Sequence[int]) -> bytes:
    return b"".join(u32(w).to_bytes(WORD_SIZE, "big") for w in words)


def iter_blocks(stream: bytes) -> Iterator[List[int]]:
    """Yield the 16-word blocks of a padded stream, in order.

    The whole stream is validated up front, so a bad length fails before
    any block is handed out.
    """
    if len(stream) % BLOCK_SIZE:
        raise IncompleteBlock(
            f"incomplete block at the end of stream: {len(stream)} bytes is not a multiple of {BLOCK_SIZE}"
        )
    return (bytes_to_words_be(stream[off : off + BLOCK_SIZE]) for off in range(0, len(stream), BLOCK_SIZE))


def expand_schedule(block: Sequence[int], check: bool = CHECKS) -> List[int]:
    W = list(block) + [0] * (ROUNDS - WORDS_PER_BLOCK)
    for t in range(WORDS_PER_BLOCK, ROUNDS):
        W[t] = rl(W[t - 3] ^ W[t - 8] ^ W[t - 14] ^ W[t - 16], 1)
        if check:
            check_u32(W[t])
    return W


def compress_block(
    state: Sequence[int],
    block: Sequence[int],
    check: bool = CHECKS,
) -> Tuple[State, Dict[str, List[int]]]:
    """
    SHA-1 compression of one block.
    Inputs:
      - state: (H0, H1, H2, H3, H4)
      - block: 16 big-endian 32-bit words
    Returns:
      - new_state: tuple, old state plus the working variables after round 79
      - trace: dict with arrays W[0..79] and A[0..79] (value of a after each round)
    """
    if len(block) != WORDS_PER_BLOCK:
        raise IncompleteBlock(f"invalid block size: {len(block)} words")
    if len(state) != 5:
        raise ValueError("state must have 5 words")
    if check:
        for w in block:
            check_u32(w)
        for w in state:
            check_u32(w)

    W = expand_schedule(block, check)
    A = [0] * ROUNDS

    H0, H1, H2, H3, H4 = (u32(x) for x in state)
    a, b, c, d, e = H0, H1, H2, H3, H4

    for t in range(ROUNDS):
        T = u32(rl(a, 5) + ft(t, b, c, d) + e + kt(t) + W[t])
        e = d
        d = c
        c = rl(b, 30)
        b = a
        a = T
        if check:
            check_u32(a)
            check_u32(c)
        A[t] = a

    new_state = (
        u32(H0 + a),
        u32(H1 + b),
        u32(H2 + c),
        u32(H3 + d),
        u32(H4 + e),
    )
    trace = {
        "W": W,
        "A": A,
    }
    return new_state, trace
