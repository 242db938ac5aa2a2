"""Pure-Python streaming MD5.

The digest core (compressor, block assembler, finalizer, encoder, session) has no I/O and
depends only on numpy for bulk word decoding. File helpers and the CLI sit on top of the
session's write/finalize contract.
"""

from .compressor import MD5_IV, BlockCompressor, decode_block
from .encoder import digest_bytes, encode_digest
from .errors import InvalidStateError, PureMD5Error
from .fileutils import HashConfig, create_progress_tracker, hash_file, hash_file_digest, hash_stream, verify_file
from .integrity import RunningHash, verify_running_hash
from .session import DigestResult, Progress, SessionState, StreamingDigestSession, md5
from .wrapping import add32, rotl32

__all__ = [
    "MD5_IV",
    "BlockCompressor",
    "decode_block",
    "add32",
    "rotl32",
    "digest_bytes",
    "encode_digest",
    "StreamingDigestSession",
    "SessionState",
    "DigestResult",
    "Progress",
    "md5",
    "RunningHash",
    "verify_running_hash",
    "HashConfig",
    "hash_stream",
    "hash_file",
    "hash_file_digest",
    "verify_file",
    "create_progress_tracker",
    "PureMD5Error",
    "InvalidStateError",
]
