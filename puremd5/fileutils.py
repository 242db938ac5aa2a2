from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Union
import logging
import math
import os

from .session import DigestResult, StreamingDigestSession

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024

PathLike = Union[str, "os.PathLike[str]"]
ProgressCallback = Callable[[int], None]


@dataclass
class HashConfig:
    chunk_size: int = DEFAULT_CHUNK_SIZE
    on_progress: Optional[ProgressCallback] = None  # called with cumulative bytes read

    def __post_init__(self) -> None:
        if int(self.chunk_size) <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")


def hash_stream(
    fileobj: BinaryIO,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    on_progress: Optional[ProgressCallback] = None,
) -> DigestResult:
    """
    Hash a binary file object from its current position to EOF.

    The object only needs `read(n)`; `readinto` is used when available so the
    same buffer is reused for every chunk.
    """
    cfg = HashConfig(chunk_size=chunk_size, on_progress=on_progress)
    session = StreamingDigestSession()
    done = 0

    readinto = getattr(fileobj, "readinto", None)
    if readinto is not None:
        buf = bytearray(cfg.chunk_size)
        view = memoryview(buf)
        while True:
            n = readinto(buf)
            if not n:
                break
            session.write(view[:n])
            done += n
            if cfg.on_progress is not None:
                cfg.on_progress(done)
    else:
        for chunk in iter(lambda: fileobj.read(cfg.chunk_size), b""):
            session.write(chunk)
            done += len(chunk)
            if cfg.on_progress is not None:
                cfg.on_progress(done)

    return session.finalize()


def _check_file(path: PathLike) -> Path:
    p = Path(path)
    if not str(path).strip():
        raise ValueError("Invalid file path: must be a non-empty string")
    if not p.exists():
        raise FileNotFoundError(f"File not found: {p}")
    if p.is_dir():
        raise IsADirectoryError(f"Path is a directory: {p}")
    return p


def hash_file(
    path: PathLike,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    on_progress: Optional[ProgressCallback] = None,
) -> DigestResult:
    p = _check_file(path)
    with p.open("rb") as f:
        result = hash_stream(f, chunk_size=chunk_size, on_progress=on_progress)
    logger.debug("Hashed %s: %s (%d bytes)", p, result.digest_hex, result.total_bytes)
    return result


def hash_file_digest(path: PathLike, **kwargs) -> str:
    return hash_file(path, **kwargs).digest_hex


def verify_file(path: PathLike, expected_digest: str, **kwargs) -> bool:
    actual = hash_file(path, **kwargs).digest_hex
    ok = actual == expected_digest.strip().lower()
    if not ok:
        logger.info("Digest mismatch for %s: expected %s, got %s", path, expected_digest, actual)
    return ok


def create_progress_tracker(total_size: int, on_update: Callable[[float], None]) -> ProgressCallback:
    """
    Wrap `on_update(percentage)` as a byte-count progress callback.

    `on_update` fires only when the whole-number percentage changes, so a large
    file with a small chunk size reports at most ~100 times. A zero total never
    reports.
    """
    last = 0.0

    def track(current: int) -> None:
        nonlocal last
        if total_size <= 0:
            return
        pct = min(100.0, current / total_size * 100.0)
        if math.floor(pct) != math.floor(last):
            on_update(pct)
            last = pct

    return track
