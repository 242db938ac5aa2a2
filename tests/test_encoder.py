import re

from puremd5.compressor import MD5_IV
from puremd5.encoder import digest_bytes, encode_digest


def test_words_render_least_significant_byte_first():
    assert encode_digest(MD5_IV) == "0123456789abcdeffedcba9876543210"
    assert encode_digest((0x000000FF, 0, 0, 0)).startswith("ff000000")


def test_signed_words_render_as_unsigned():
    assert encode_digest((-1, 0, 0, 0)) == "ffffffff" + "0" * 24


def test_output_shape():
    for state in [MD5_IV, (0, 0, 0, 0), (0xFFFFFFFF,) * 4]:
        assert re.fullmatch(r"[0-9a-f]{32}", encode_digest(state))
        assert len(digest_bytes(state)) == 16
