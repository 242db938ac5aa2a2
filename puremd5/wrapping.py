from __future__ import annotations

from typing import Callable

# 32-bit word primitives shared by the compressor and its tests.
# Python ints never overflow, so every result is masked back to 32 bits.

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

Add32 = Callable[[int, int], int]


def add32(x: int, y: int) -> int:
    return (x + y) & MASK32


def rotl32(x: int, s: int) -> int:
    # Mask first: a signed representation must rotate exactly like its unsigned twin.
    x &= MASK32
    return ((x << s) | (x >> (32 - s))) & MASK32
