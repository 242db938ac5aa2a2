from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple
import logging

from .assembler import ByteBlockAssembler
from .compressor import BlockCompressor, normalize_state
from .encoder import encode_digest
from .errors import InvalidStateError
from .finalizer import finalize_state

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    OPEN = "open"
    FINALIZED = "finalized"


@dataclass(frozen=True)
class DigestResult:
    digest_hex: str
    total_bytes: int

    def to_dict(self) -> Dict[str, Any]:
        return {"digest": self.digest_hex, "bytes_processed": int(self.total_bytes)}


@dataclass(frozen=True)
class Progress:
    state_snapshot: Tuple[int, int, int, int]
    bytes_processed: int


class StreamingDigestSession:
    """
    Incremental MD5 over bytes delivered in arbitrary chunks.

    Usage:
        session = StreamingDigestSession()
        for chunk in chunks:
            session.write(chunk)
        result = session.finalize()

    The session is OPEN until finalize(), after which it is FINALIZED and rejects
    write() and finalize() with InvalidStateError. reset() returns it to a fresh
    OPEN state from anywhere.
    """

    def __init__(self, *, compressor: Optional[BlockCompressor] = None):
        self._compressor = compressor
        self._assembler = ByteBlockAssembler(compressor)
        self._state = SessionState.OPEN

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def bytes_processed(self) -> int:
        return self._assembler.total_bytes

    def write(self, data) -> None:
        if self._state is not SessionState.OPEN:
            raise InvalidStateError("write", self._state.value)
        self._assembler.write(data)

    def finalize(self) -> DigestResult:
        if self._state is not SessionState.OPEN:
            raise InvalidStateError("finalize", self._state.value)

        asm = self._assembler
        state = finalize_state(
            asm.compressor,
            asm.state,
            asm.pending,
            asm.pending_length,
            asm.total_bytes,
        )
        asm.state = state
        self._state = SessionState.FINALIZED
        result = DigestResult(digest_hex=encode_digest(state), total_bytes=asm.total_bytes)
        logger.debug(
            "Finalized session: %d bytes in %d blocks -> %s",
            asm.total_bytes,
            asm.blocks_compressed,
            result.digest_hex,
        )
        return result

    def reset(self) -> None:
        if self._assembler.total_bytes or self._state is SessionState.FINALIZED:
            logger.debug("Resetting session (%s, %d bytes)", self._state.value, self._assembler.total_bytes)
        self._assembler = ByteBlockAssembler(self._compressor)
        self._state = SessionState.OPEN

    def get_progress(self) -> Progress:
        return Progress(
            state_snapshot=normalize_state(self._assembler.state),
            bytes_processed=self._assembler.total_bytes,
        )

    def copy(self) -> "StreamingDigestSession":
        other = StreamingDigestSession(compressor=self._compressor)
        other._assembler = self._assembler.copy()
        other._state = self._state
        return other


def md5(data) -> str:
    """Hex MD5 of a bytes-like object, or of a str encoded as UTF-8."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    session = StreamingDigestSession()
    session.write(data)
    return session.finalize().digest_hex
