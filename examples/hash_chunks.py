import sys

from puremd5 import StreamingDigestSession, hash_file

if __name__ == "__main__":
    session = StreamingDigestSession()
    for chunk in (b"message", b" ", b"digest"):
        session.write(chunk)
        print("progress:", session.get_progress())
    result = session.finalize()
    print("DIGEST:", result.digest_hex, "BYTES:", result.total_bytes)

    for path in sys.argv[1:]:
        print(hash_file(path).digest_hex, path)
