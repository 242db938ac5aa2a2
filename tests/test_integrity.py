import hashlib

from puremd5.integrity import RunningHash, verify_running_hash


def test_running_hash():
    h = RunningHash()
    chunks = []
    for i in range(3):
        chunk = f"chunk-{i}".encode() * (i + 20)
        chunks.append(chunk)
        h.update(chunk)
    assert verify_running_hash(chunks, h.hexdigest())
    assert verify_running_hash(chunks, h.hexdigest().upper())
    assert not verify_running_hash(chunks[:2], h.hexdigest())


def test_interim_digest_does_not_end_stream():
    h = RunningHash(b"message ")
    ref = hashlib.md5(b"message ")
    assert h.hexdigest() == ref.hexdigest()
    h.update(b"digest")
    ref.update(b"digest")
    assert h.digest() == ref.digest()
    assert h.bytes_processed == 14


def test_copy_forks_state():
    h = RunningHash(b"abc")
    c = h.copy()
    c.update(b"def")
    assert h.hexdigest() == hashlib.md5(b"abc").hexdigest()
    assert c.hexdigest() == hashlib.md5(b"abcdef").hexdigest()


def test_hashlib_attributes():
    h = RunningHash()
    assert (h.name, h.digest_size, h.block_size) == ("md5", 16, 64)
