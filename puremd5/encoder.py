from __future__ import annotations

from typing import Sequence
import struct

from .wrapping import MASK32

# Each state word is emitted least-significant byte first, so 0x67452301
# renders as "01234567". Packing "<4I" and hex-encoding gives exactly that.

_STATE_STRUCT = struct.Struct("<4I")


def digest_bytes(state: Sequence[int]) -> bytes:
    return _STATE_STRUCT.pack(*(int(w) & MASK32 for w in state))


def encode_digest(state: Sequence[int]) -> str:
    return digest_bytes(state).hex()
