import hashlib

import numpy as np
import pytest

from puremd5.assembler import ByteBlockAssembler
from puremd5.compressor import MD5_IV, BlockCompressor
from puremd5.session import StreamingDigestSession


class RecordingCompressor(BlockCompressor):
    def __init__(self):
        super().__init__()
        self.blocks = []

    def compress(self, state, block):
        self.blocks.append(list(block))
        return super().compress(state, block)


def _check_invariant(asm):
    assert asm.total_bytes == 64 * asm.blocks_compressed + asm.pending_length


def test_empty_write_is_noop():
    asm = ByteBlockAssembler()
    asm.write(b"")
    assert asm.total_bytes == 0
    assert asm.pending_length == 0
    assert asm.state == MD5_IV


@pytest.mark.parametrize("size", [0, 1, 63, 64, 65, 127, 128, 129, 1000])
def test_block_and_pending_counts(size):
    asm = ByteBlockAssembler()
    asm.write(b"x" * size)
    assert asm.blocks_compressed == size // 64
    assert asm.pending_length == size % 64
    _check_invariant(asm)


def test_write_completing_pending_buffer_compresses_once():
    comp = RecordingCompressor()
    asm = ByteBlockAssembler(comp)
    asm.write(b"a" * 40)
    assert comp.blocks == []
    asm.write(b"b" * 24)
    assert len(comp.blocks) == 1
    assert asm.pending_length == 0
    _check_invariant(asm)


def test_split_mid_word_yields_same_blocks():
    data = bytes(range(256)) * 2
    whole = RecordingCompressor()
    ByteBlockAssembler(whole).write(data)

    split = RecordingCompressor()
    asm = ByteBlockAssembler(split)
    for cut in (3, 5, 61, 66, 130, 201):
        asm.write(data[:cut])
        data = data[cut:]
    asm.write(data)
    assert split.blocks == whole.blocks
    _check_invariant(asm)


def test_bulk_path_matches_pending_path():
    data = hashlib.sha256(b"seed").digest() * 100  # 3200 bytes
    bulk = ByteBlockAssembler()
    bulk.write(data)

    bytewise = ByteBlockAssembler()
    for i in range(len(data)):
        bytewise.write(data[i : i + 1])

    assert bulk.state == bytewise.state
    assert bulk.pending_bytes() == bytewise.pending_bytes()


def test_accepts_buffer_types():
    data = bytes(range(200))
    ref = ByteBlockAssembler()
    ref.write(data)
    for obj in (bytearray(data), memoryview(data), np.frombuffer(data, dtype=np.uint8)):
        asm = ByteBlockAssembler()
        asm.write(obj)
        assert asm.state == ref.state
        assert asm.pending_bytes() == ref.pending_bytes()


def test_multibyte_buffer_is_viewed_as_bytes():
    words = np.arange(40, dtype="<u4")
    asm = ByteBlockAssembler()
    asm.write(words)
    assert asm.total_bytes == 160


def test_rejects_str():
    with pytest.raises(TypeError):
        ByteBlockAssembler().write("abc")
    with pytest.raises(TypeError):
        ByteBlockAssembler().write(123)


def test_does_not_keep_reference_to_caller_buffer():
    buf = bytearray(b"z" * 70)
    asm = ByteBlockAssembler()
    asm.write(buf)
    buf[64:] = b"\x00" * 6
    assert asm.pending_bytes() == b"z" * 6


def test_strided_buffer_rejected_before_counters_change():
    asm = ByteBlockAssembler()
    asm.write(b"abcd")
    before = (asm.state, asm.total_bytes, asm.blocks_compressed, asm.pending_bytes())
    for view in (memoryview(b"abcdefgh")[::2], memoryview(bytes(range(256)))[::2]):
        with pytest.raises(BufferError):
            asm.write(view)
    assert (asm.state, asm.total_bytes, asm.blocks_compressed, asm.pending_bytes()) == before
    _check_invariant(asm)


def test_strided_write_leaves_session_usable():
    s = StreamingDigestSession()
    s.write(b"message ")
    with pytest.raises(BufferError):
        s.write(memoryview(bytes(range(256)))[::2])
    s.write(b"digest")
    assert s.finalize().digest_hex == hashlib.md5(b"message digest").hexdigest()
