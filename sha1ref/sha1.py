from __future__ import annotations

from typing import Sequence

from .core import SHA1_IV, State, compress_block, iter_blocks, u32, words_to_bytes_be
from .message import pad_message, text_bytes


def sha1_words(data: bytes, iv: Sequence[int] = SHA1_IV) -> State:
    state = (u32(iv[0]), u32(iv[1]), u32(iv[2]), u32(iv[3]), u32(iv[4]))
    for block in iter_blocks(pad_message(data)):
        state, _ = compress_block(state, block)
    return state


def digest(text: str) -> State:
    return sha1_words(text_bytes(text))


def sha1_bytes(text: str) -> bytes:
    return words_to_bytes_be(digest(text))


def format_digest(words: Sequence[int], sep: str = " ") -> str:
    return sep.join(f"{u32(w):08x}" for w in words)


def hexdigest(text: str, sep: str = "") -> str:
    return format_digest(digest(text), sep)
