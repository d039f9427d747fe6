import random
import unittest

from sha1ref.core import (
    MASK32,
    SHA1_IV,
    bytes_to_words_be,
    check_u32,
    compress_block,
    expand_schedule,
    ft,
    iter_blocks,
    kt,
    rl,
    rr,
    u32,
    words_to_bytes_be,
)
from sha1ref.errors import IncompleteBlock, IncompleteWord, InvalidRoundIndex, NotUint32
from sha1ref.message import pad_message
from sha1ref.sha1 import digest


class TestWordOps(unittest.TestCase):
    def test_rotation_round_trip(self) -> None:
        rng = random.Random(7)
        words = [0, 1, MASK32, 0x80000000, 0x67452301] + [rng.getrandbits(32) for _ in range(50)]
        for w in words:
            for r in range(32):
                self.assertEqual(rl(rl(w, r), 32 - r), w)
                self.assertEqual(rr(rl(w, r), r), w)
                self.assertLessEqual(rl(w, r), MASK32)

    def test_rotation_values(self) -> None:
        self.assertEqual(rl(0x80000000, 1), 1)
        self.assertEqual(rl(0x12345678, 4), 0x23456781)
        self.assertEqual(rl(0x00000001, 30), 0x40000000)
        self.assertEqual(rl(0x00000004, 30), 0x00000001)

    def test_u32_wraps(self) -> None:
        self.assertEqual(u32(MASK32 + 1), 0)
        self.assertEqual(u32(-1), MASK32)

    def test_check_u32(self) -> None:
        self.assertEqual(check_u32(MASK32), MASK32)
        with self.assertRaises(NotUint32):
            check_u32(MASK32 + 1)
        with self.assertRaises(NotUint32):
            check_u32(-1)


class TestRoundFunctions(unittest.TestCase):
    def test_round_constants(self) -> None:
        self.assertEqual(kt(0), 0x5A827999)
        self.assertEqual(kt(19), 0x5A827999)
        self.assertEqual(kt(20), 0x6ED9EBA1)
        self.assertEqual(kt(40), 0x8F1BBCDC)
        self.assertEqual(kt(79), 0xCA62C1D6)

    def test_selector_bands(self) -> None:
        B, C, D = 0xF0F0F0F0, 0xCCCCCCCC, 0xAAAAAAAA
        choice = (B & C) | (~B & D & MASK32)
        parity = B ^ C ^ D
        majority = (B & C) | (B & D) | (C & D)
        for t in range(0, 20):
            self.assertEqual(ft(t, B, C, D), choice)
        for t in list(range(20, 40)) + list(range(60, 80)):
            self.assertEqual(ft(t, B, C, D), parity)
        for t in range(40, 60):
            self.assertEqual(ft(t, B, C, D), majority)

    def test_invalid_round_index(self) -> None:
        for t in (-1, 80, 1000):
            with self.assertRaises(InvalidRoundIndex):
                kt(t)
            with self.assertRaises(InvalidRoundIndex):
                ft(t, 0, 0, 0)


class TestBlockParser(unittest.TestCase):
    def test_big_endian_words(self) -> None:
        self.assertEqual(bytes_to_words_be(b"\x01\x02\x03\x04\xff\x00\x00\x00"), [0x01020304, 0xFF000000])
        self.assertEqual(words_to_bytes_be([0x01020304, 0xFF000000]), b"\x01\x02\x03\x04\xff\x00\x00\x00")

    def test_blocks_in_order(self) -> None:
        stream = bytes(range(128))
        blocks = list(iter_blocks(stream))
        self.assertEqual(len(blocks), 2)
        self.assertEqual(len(blocks[0]), 16)
        self.assertEqual(blocks[0][0], 0x00010203)
        self.assertEqual(blocks[1][0], 0x40414243)
        self.assertEqual(list(iter_blocks(b"")), [])

    def test_incomplete_block(self) -> None:
        with self.assertRaises(IncompleteBlock):
            iter_blocks(b"\x00" * 63)
        with self.assertRaises(IncompleteBlock):
            compress_block(SHA1_IV, [0] * 15)

    def test_incomplete_word(self) -> None:
        with self.assertRaises(IncompleteWord):
            bytes_to_words_be(b"\x00" * 5)


class TestCompressBlock(unittest.TestCase):
    def test_schedule_recurrence(self) -> None:
        block = list(range(16))
        W = expand_schedule(block)
        self.assertEqual(len(W), 80)
        self.assertEqual(W[:16], block)
        for t in range(16, 80):
            self.assertEqual(W[t], rl(W[t - 3] ^ W[t - 8] ^ W[t - 14] ^ W[t - 16], 1))

    def test_single_block_is_digest(self) -> None:
        (block,) = iter_blocks(pad_message(b"abc"))
        state, trace = compress_block(SHA1_IV, block)
        self.assertEqual(state, digest("abc"))
        self.assertEqual(len(trace["W"]), 80)
        self.assertEqual(len(trace["A"]), 80)

    def test_feed_forward(self) -> None:
        (block,) = iter_blocks(pad_message(b""))
        state, trace = compress_block(SHA1_IV, block)
        A = trace["A"]
        self.assertEqual(state[0], u32(SHA1_IV[0] + A[79]))
        self.assertEqual(state[1], u32(SHA1_IV[1] + A[78]))
        self.assertEqual(state[2], u32(SHA1_IV[2] + rl(A[77], 30)))
        self.assertEqual(state[3], u32(SHA1_IV[3] + rl(A[76], 30)))
        self.assertEqual(state[4], u32(SHA1_IV[4] + rl(A[75], 30)))

    def test_checked_mode_rejects_wide_words(self) -> None:
        block = [1 << 32] + [0] * 15
        with self.assertRaises(NotUint32):
            compress_block(SHA1_IV, block, check=True)
        # unchecked mode still reduces modulo 2**32
        state, _ = compress_block(SHA1_IV, block, check=False)
        self.assertEqual(state, compress_block(SHA1_IV, [0] * 16, check=False)[0])

    def test_checked_mode_matches_unchecked(self) -> None:
        rng = random.Random(11)
        block = [rng.getrandbits(32) for _ in range(16)]
        self.assertEqual(compress_block(SHA1_IV, block, check=True)[0], compress_block(SHA1_IV, block, check=False)[0])


if __name__ == "__main__":
    unittest.main()
