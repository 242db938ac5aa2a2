from __future__ import annotations

from typing import Optional

import numpy as np

from .compressor import (
    BLOCK_SIZE,
    DEFAULT_COMPRESSOR,
    MD5_IV,
    WORDS_PER_BLOCK,
    BlockCompressor,
    DigestState,
    decode_block,
)

# Blocks handed to the compressor per numpy -> list conversion on the bulk path.
SLAB_BLOCKS = 1024


def as_byte_view(data) -> memoryview:
    """Return a flat unsigned-byte view over any C-contiguous buffer."""
    if isinstance(data, str):
        raise TypeError("Strings must be encoded before hashing")
    try:
        mv = memoryview(data)
    except TypeError:
        raise TypeError(f"Expected a bytes-like object, got {type(data).__name__}") from None
    if not mv.c_contiguous:
        raise BufferError("Buffer must be C-contiguous")
    if mv.format != "B" or mv.ndim != 1:
        mv = mv.cast("B")
    return mv


class ByteBlockAssembler:
    """
    Turns arbitrarily sized writes into whole 64-byte blocks.

    Holds the running digest state, a reusable 64-byte pending buffer and the
    byte/block counters. After writes totalling L bytes, exactly L // 64 blocks
    have been compressed and L % 64 bytes are pending:

        total_bytes == BLOCK_SIZE * blocks_compressed + pending_length
    """

    def __init__(self, compressor: Optional[BlockCompressor] = None):
        self.compressor = compressor or DEFAULT_COMPRESSOR
        self.state: DigestState = MD5_IV
        self.pending = bytearray(BLOCK_SIZE)
        self.pending_length = 0
        self.total_bytes = 0
        self.blocks_compressed = 0

    def write(self, data) -> None:
        mv = as_byte_view(data)
        n = len(mv)
        if n == 0:
            return

        off = 0

        if self.pending_length:
            take = min(n, BLOCK_SIZE - self.pending_length)
            self.pending[self.pending_length : self.pending_length + take] = mv[:take]
            self.pending_length += take
            off = take
            if self.pending_length < BLOCK_SIZE:
                self.total_bytes += n
                return
            self._compress(decode_block(self.pending))
            self.pending_length = 0

        full = (n - off) // BLOCK_SIZE
        end = off + full * BLOCK_SIZE
        if full:
            self._compress_many(mv[off:end], full)

        rest = n - end
        if rest:
            self.pending[:rest] = mv[end:]
            self.pending_length = rest
        self.total_bytes += n

    def _compress(self, block) -> None:
        self.state = self.compressor.compress(self.state, block)
        self.blocks_compressed += 1

    def _compress_many(self, window: memoryview, count: int) -> None:
        # Zero-copy view of the caller's buffer as (count, 16) little-endian words.
        words = np.frombuffer(window, dtype="<u4").reshape(count, WORDS_PER_BLOCK)
        compress = self.compressor.compress
        state = self.state
        for start in range(0, count, SLAB_BLOCKS):
            for block in words[start : start + SLAB_BLOCKS].tolist():
                state = compress(state, block)
        self.state = state
        self.blocks_compressed += count

    def pending_bytes(self) -> bytes:
        return bytes(self.pending[: self.pending_length])

    def copy(self) -> "ByteBlockAssembler":
        other = ByteBlockAssembler(self.compressor)
        other.state = self.state
        other.pending[:] = self.pending
        other.pending_length = self.pending_length
        other.total_bytes = self.total_bytes
        other.blocks_compressed = self.blocks_compressed
        return other
