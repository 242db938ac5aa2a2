from __future__ import annotations

from typing import Iterable, Optional

from .compressor import BLOCK_SIZE, BlockCompressor
from .session import StreamingDigestSession

# hashlib-style running hash over the streaming session, for callers that
# expect update()/hexdigest() and interim digests without ending the stream.


class RunningHash:
    name = "md5"
    digest_size = 16
    block_size = BLOCK_SIZE

    def __init__(self, data=None, *, compressor: Optional[BlockCompressor] = None):
        self._session = StreamingDigestSession(compressor=compressor)
        if data is not None:
            self.update(data)

    @property
    def bytes_processed(self) -> int:
        return self._session.bytes_processed

    def update(self, data) -> None:
        self._session.write(data)

    def hexdigest(self) -> str:
        # Finalize a copy; the running session stays open for further updates.
        return self._session.copy().finalize().digest_hex

    def digest(self) -> bytes:
        return bytes.fromhex(self.hexdigest())

    def copy(self) -> "RunningHash":
        other = RunningHash.__new__(RunningHash)
        other._session = self._session.copy()
        return other


def verify_running_hash(chunks: Iterable[bytes], expected_hex: str) -> bool:
    h = RunningHash()
    for chunk in chunks:
        h.update(chunk)
    return h.hexdigest().lower() == expected_hex.strip().lower()
