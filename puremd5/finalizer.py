from __future__ import annotations

import struct

from .compressor import BLOCK_SIZE, BlockCompressor, DigestState, decode_block
from .wrapping import MASK64

# MD5 padding: 0x80, zero fill to 56 mod 64, then the message length in bits as
# a little-endian uint64 (low word at offset 56, high word at offset 60).

LENGTH_OFFSET = BLOCK_SIZE - 8


def length_field(total_bytes: int) -> bytes:
    return struct.pack("<Q", (total_bytes * 8) & MASK64)


def finalize_state(
    compressor: BlockCompressor,
    state: DigestState,
    pending,
    pending_length: int,
    total_bytes: int,
) -> DigestState:
    """
    Pad the pending tail, encode the length and run the last one or two compressions.

    `pending_length` must be 0..63. When more than 55 bytes are pending the 0x80
    marker still fits but the length does not, so that block is compressed with a
    zero length field and a fresh zero block carries the length alone.
    """
    if not 0 <= pending_length < BLOCK_SIZE:
        raise ValueError(f"Pending length out of range: {pending_length}")

    tail = bytearray(BLOCK_SIZE)
    tail[:pending_length] = pending[:pending_length]
    tail[pending_length] = 0x80

    if pending_length >= LENGTH_OFFSET:
        state = compressor.compress(state, decode_block(tail))
        tail = bytearray(BLOCK_SIZE)

    tail[LENGTH_OFFSET:] = length_field(total_bytes)
    return compressor.compress(state, decode_block(tail))
