from __future__ import annotations

from typing import List, Optional
import argparse
import json
import logging
import os
import sys

from .fileutils import DEFAULT_CHUNK_SIZE, create_progress_tracker, hash_file, hash_stream, verify_file
from .session import DigestResult


def _hash_one(path: str, args: argparse.Namespace) -> DigestResult:
    if path == "-":
        return hash_stream(sys.stdin.buffer, chunk_size=args.chunk_size)

    on_progress = None
    if args.progress:
        size = os.path.getsize(path)

        def report(pct: float) -> None:
            print(f"\r{path}: {pct:5.1f}%", end="", file=sys.stderr, flush=True)

        on_progress = create_progress_tracker(size, report)

    result = hash_file(path, chunk_size=args.chunk_size, on_progress=on_progress)
    if args.progress:
        print(file=sys.stderr)
    return result


def cmd_hash(args: argparse.Namespace) -> int:
    rc = 0
    for path in args.paths:
        try:
            result = _hash_one(path, args)
        except (OSError, ValueError) as e:
            print(f"puremd5: {path}: {e}", file=sys.stderr)
            rc = 1
            continue

        if args.json:
            print(json.dumps({"path": path, **result.to_dict()}))
        else:
            print(f"{result.digest_hex}  {path}")
    return rc


def cmd_verify(args: argparse.Namespace) -> int:
    try:
        ok = verify_file(args.path, args.digest, chunk_size=args.chunk_size)
    except (OSError, ValueError) as e:
        print(f"puremd5: {args.path}: {e}", file=sys.stderr)
        return 1
    print(f"{args.path}: {'OK' if ok else 'FAILED'}")
    return 0 if ok else 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="puremd5", description="Streaming pure-Python MD5")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    h = sub.add_parser("hash", help="Print the MD5 digest of each file ('-' for stdin)")
    h.add_argument("paths", nargs="+", help="Files to hash")
    h.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE, help="Read size in bytes")
    h.add_argument("--json", action="store_true", help="Emit one JSON object per file")
    h.add_argument("--progress", action="store_true", help="Report progress on stderr")
    h.set_defaults(func=cmd_hash)

    v = sub.add_parser("verify", help="Check a file against an expected digest")
    v.add_argument("path")
    v.add_argument("digest", help="Expected hex digest (case-insensitive)")
    v.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE, help="Read size in bytes")
    v.set_defaults(func=cmd_verify)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    p = build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
