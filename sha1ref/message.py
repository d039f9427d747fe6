from __future__ import annotations

from .core import BLOCK_SIZE
from .errors import IncompleteBlock, InvalidByte, NegativeLength, UnsupportedInputType

MASK64 = (1 << 64) - 1

# 0x80 marker byte plus the 64-bit length trailer
_PAD_OVERHEAD = 9


def text_bytes(text: str) -> bytes:
    """One byte per character: the character code, which must fit in a byte."""
    if not isinstance(text, str):
        raise UnsupportedInputType(f"unsupported input type: {type(text).__name__}")
    try:
        return text.encode("latin-1")
    except UnicodeEncodeError as err:
        raise InvalidByte(
            f"character {text[err.start]!r} at position {err.start} does not fit in a byte"
        ) from err


def encode_length(bits: int) -> bytes:
    if bits < 0:
        raise NegativeLength(f"negative length: {bits}")
    return (bits & MASK64).to_bytes(8, "big")


def sha1_padding(msg_len_bytes: int) -> bytes:
    if msg_len_bytes < 0:
        raise NegativeLength(f"negative length: {msg_len_bytes}")
    # msg_len + 1 + k + 8 = 64n, with the smallest such n
    n = (msg_len_bytes + _PAD_OVERHEAD + BLOCK_SIZE - 1) // BLOCK_SIZE
    k = BLOCK_SIZE * n - _PAD_OVERHEAD - msg_len_bytes
    return b"\x80" + b"\x00" * k + encode_length(msg_len_bytes * 8)


def pad_message(data: bytes) -> bytes:
    padded = data + sha1_padding(len(data))
    assert len(padded) > 0 and len(padded) % BLOCK_SIZE == 0
    return padded


def decode_length(padded: bytes) -> int:
    """Length in bytes of the original message, read from the trailer."""
    if not padded or len(padded) % BLOCK_SIZE:
        raise IncompleteBlock(f"padded stream of {len(padded)} bytes is not a positive multiple of {BLOCK_SIZE}")
    return int.from_bytes(padded[-8:], "big") // 8


def strip_padding(padded: bytes) -> bytes:
    return padded[: decode_length(padded)]
