from __future__ import annotations

from typing import List, Sequence, Tuple
import struct

from .wrapping import Add32, MASK32, add32, rotl32

# RFC 1321 compression function.
# This module provides:
# - the fixed per-step tables (message index, rotation amount, additive constant)
# - a decoder from a 64-byte window to sixteen little-endian words
# - BlockCompressor, which applies the 64 steps to one block

BLOCK_SIZE = 64
WORDS_PER_BLOCK = 16

DigestState = Tuple[int, int, int, int]

MD5_IV: DigestState = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)

# T[i] = floor(abs(sin(i + 1)) * 2**32)
T: Tuple[int, ...] = (
    0xD76AA478, 0xE8C7B756, 0x242070DB, 0xC1BDCEEE,
    0xF57C0FAF, 0x4787C62A, 0xA8304613, 0xFD469501,
    0x698098D8, 0x8B44F7AF, 0xFFFF5BB1, 0x895CD7BE,
    0x6B901122, 0xFD987193, 0xA679438E, 0x49B40821,
    0xF61E2562, 0xC040B340, 0x265E5A51, 0xE9B6C7AA,
    0xD62F105D, 0x02441453, 0xD8A1E681, 0xE7D3FBC8,
    0x21E1CDE6, 0xC33707D6, 0xF4D50D87, 0x455A14ED,
    0xA9E3E905, 0xFCEFA3F8, 0x676F02D9, 0x8D2A4C8A,
    0xFFFA3942, 0x8771F681, 0x6D9D6122, 0xFDE5380C,
    0xA4BEEA44, 0x4BDECFA9, 0xF6BB4B60, 0xBEBFBC70,
    0x289B7EC6, 0xEAA127FA, 0xD4EF3085, 0x04881D05,
    0xD9D4D039, 0xE6DB99E5, 0x1FA27CF8, 0xC4AC5665,
    0xF4292244, 0x432AFF97, 0xAB9423A7, 0xFC93A039,
    0x655B59C3, 0x8F0CCC92, 0xFFEFF47D, 0x85845DD1,
    0x6FA87E4F, 0xFE2CE6E0, 0xA3014314, 0x4E0811A1,
    0xF7537E82, 0xBD3AF235, 0x2AD7D2BB, 0xEB86D391,
)

SHIFTS: Tuple[int, ...] = (
    7, 12, 17, 22, 7, 12, 17, 22, 7, 12, 17, 22, 7, 12, 17, 22,
    5, 9, 14, 20, 5, 9, 14, 20, 5, 9, 14, 20, 5, 9, 14, 20,
    4, 11, 16, 23, 4, 11, 16, 23, 4, 11, 16, 23, 4, 11, 16, 23,
    6, 10, 15, 21, 6, 10, 15, 21, 6, 10, 15, 21, 6, 10, 15, 21,
)

# Message word consumed by each step.
INDEX: Tuple[int, ...] = (
    0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15,
    1, 6, 11, 0, 5, 10, 15, 4, 9, 14, 3, 8, 13, 2, 7, 12,
    5, 8, 11, 14, 1, 4, 7, 10, 13, 0, 3, 6, 9, 12, 15, 2,
    0, 7, 14, 5, 12, 3, 10, 1, 8, 15, 6, 13, 4, 11, 2, 9,
)


def F(b: int, c: int, d: int) -> int:
    return (b & c) | (~b & d)


def G(b: int, c: int, d: int) -> int:
    return (b & d) | (c & ~d)


def H(b: int, c: int, d: int) -> int:
    return b ^ c ^ d


def I(b: int, c: int, d: int) -> int:  # noqa: E743
    return c ^ (b | ~d)


ROUND_FUNCTIONS = (F, G, H, I)

_BLOCK_STRUCT = struct.Struct("<16I")


def decode_block(buf) -> List[int]:
    """Decode sixteen little-endian uint32 words from the first 64 bytes of ``buf``."""
    if len(buf) < BLOCK_SIZE:
        raise ValueError(f"Block needs {BLOCK_SIZE} bytes, got {len(buf)}")
    return list(_BLOCK_STRUCT.unpack_from(buf))


class BlockCompressor:
    """
    One MD5 compression: (state, 16-word block) -> new state.

    `add32` is the wrapping-addition strategy used for every addition in the
    step function and in the final feed-forward. The default masks to 32 bits;
    an alternative (e.g. one emulating signed 32-bit arithmetic) can be passed
    in to check that the digest does not depend on the word representation.
    """

    def __init__(self, add32: Add32 = add32):
        self.add32 = add32

    def compress(self, state: Sequence[int], block: Sequence[int]) -> DigestState:
        if len(block) != WORDS_PER_BLOCK:
            raise ValueError(f"Block must have {WORDS_PER_BLOCK} words, got {len(block)}")
        if len(state) != 4:
            raise ValueError(f"State must have 4 words, got {len(state)}")

        add = self.add32
        a, b, c, d = state
        for i in range(64):
            f = ROUND_FUNCTIONS[i >> 4](b, c, d)
            tmp = add(add(add(a, f), block[INDEX[i]]), T[i])
            a, d, c, b = d, c, b, add(b, rotl32(tmp, SHIFTS[i]))

        return (
            add(state[0], a),
            add(state[1], b),
            add(state[2], c),
            add(state[3], d),
        )


DEFAULT_COMPRESSOR = BlockCompressor()


def normalize_state(state: Sequence[int]) -> DigestState:
    a, b, c, d = state
    return (a & MASK32, b & MASK32, c & MASK32, d & MASK32)
