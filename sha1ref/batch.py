"""
Lane-parallel SHA-1 over many independent messages using NumPy.

Messages whose padded form has the same number of blocks are stacked as
rows of a uint32 array and compressed together: one row per message, one
column per word. uint32 arrays wrap on overflow, so no masking is needed.
Each message's own block chain is still folded strictly in order.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import numpy as np

from .core import BLOCK_SIZE, ROUNDS, SHA1_IV, SHA1_K, WORDS_PER_BLOCK, State
from .message import pad_message, text_bytes

_IV_U32 = np.array(SHA1_IV, dtype=np.uint32)
_K_U32 = np.array(SHA1_K, dtype=np.uint32)


def _rotl(x: np.ndarray, n: int) -> np.ndarray:
    return (x << np.uint32(n)) | (x >> np.uint32(32 - n))


def compress_lanes(state: np.ndarray, blocks: np.ndarray) -> np.ndarray:
    """Compress one block per lane. state: (lanes, 5), blocks: (lanes, 16), both uint32."""
    lanes = state.shape[0]
    W = np.empty((lanes, ROUNDS), dtype=np.uint32)
    W[:, :WORDS_PER_BLOCK] = blocks
    for t in range(WORDS_PER_BLOCK, ROUNDS):
        W[:, t] = _rotl(W[:, t - 3] ^ W[:, t - 8] ^ W[:, t - 14] ^ W[:, t - 16], 1)

    a, b, c, d, e = (state[:, i].copy() for i in range(5))
    for t in range(ROUNDS):
        if t < 20:
            f = (b & c) | (~b & d)
        elif 40 <= t < 60:
            f = (b & c) | (b & d) | (c & d)
        else:
            f = b ^ c ^ d
        T = _rotl(a, 5) + f + e + _K_U32[t // 20] + W[:, t]
        e = d
        d = c
        c = _rotl(b, 30)
        b = a
        a = T

    return state + np.stack([a, b, c, d, e], axis=1)


def sha1_words_batch(messages: Sequence[bytes]) -> List[State]:
    padded = [pad_message(m) for m in messages]

    # lanes grouped by block count, keeping input positions
    groups: Dict[int, List[int]] = {}
    for i, p in enumerate(padded):
        groups.setdefault(len(p) // BLOCK_SIZE, []).append(i)

    out: List[Optional[State]] = [None] * len(messages)
    for nblocks, idx in groups.items():
        words = (
            np.frombuffer(b"".join(padded[i] for i in idx), dtype=">u4")
            .astype(np.uint32)
            .reshape(len(idx), nblocks, WORDS_PER_BLOCK)
        )
        state = np.tile(_IV_U32, (len(idx), 1))
        for j in range(nblocks):
            state = compress_lanes(state, words[:, j, :])
        for lane, i in enumerate(idx):
            h = state[lane]
            out[i] = (int(h[0]), int(h[1]), int(h[2]), int(h[3]), int(h[4]))
    return out  # type: ignore[return-value]


def digest_batch(texts: Sequence[str]) -> List[State]:
    return sha1_words_batch([text_bytes(t) for t in texts])
