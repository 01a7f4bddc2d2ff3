"""Tests for the preset-dictionary compression engine."""

import os
import zlib

import pytest

from compressembed.codec import compress, decompress
from compressembed.errors import DecompressionError

ZERO_KEY = bytes(32)


class TestRoundTrip:
    def test_hello_world_with_zero_key(self):
        compressed = compress(b"Hello World!", ZERO_KEY)
        assert decompress(compressed, ZERO_KEY) == b"Hello World!"

    @pytest.mark.parametrize(
        "payload",
        [
            b"",
            b"\x00",
            b"abc" * 1000,
            bytes(range(256)) * 8,
            os.urandom(4096),
        ],
    )
    def test_random_keys(self, payload):
        key = os.urandom(32)
        assert decompress(compress(payload, key), key) == payload

    def test_deterministic(self):
        payload = b"repeatable build output " * 40
        assert compress(payload, ZERO_KEY) == compress(payload, ZERO_KEY)

    def test_stream_carries_dictionary_id(self):
        compressed = compress(b"Hello World!", ZERO_KEY)
        assert compressed[1] & 0x20
        assert int.from_bytes(compressed[2:6], "big") == zlib.adler32(ZERO_KEY)

    def test_dictionary_improves_self_similar_payload(self):
        key = b'{"name": "", "items": [], "enabled": true}'.ljust(32, b" ")
        payload = b'{"name": "x", "items": [1], "enabled": true}'
        assert len(compress(payload, key)) < len(zlib.compress(payload, 9))


class TestKeySensitivity:
    def test_wrong_key_fails(self):
        compressed = compress(b"Hello World!", ZERO_KEY)
        with pytest.raises(DecompressionError):
            decompress(compressed, b"\x01" * 32)

    def test_random_key_pairs_never_recover_payload(self):
        payload = b"asset bytes " * 64
        for _ in range(20):
            key_a, key_b = os.urandom(32), os.urandom(32)
            compressed = compress(payload, key_a)
            try:
                recovered = decompress(compressed, key_b)
            except DecompressionError:
                continue
            assert recovered != payload


class TestFailures:
    def test_truncated_stream(self):
        compressed = compress(b"some payload that compresses" * 10, ZERO_KEY)
        with pytest.raises(DecompressionError):
            decompress(compressed[:-6], ZERO_KEY)

    def test_trailing_bytes_rejected(self):
        compressed = compress(b"hi", ZERO_KEY)
        with pytest.raises(DecompressionError):
            decompress(compressed + b"JUNKJUNK", ZERO_KEY)

    def test_garbage_stream(self):
        with pytest.raises(DecompressionError):
            decompress(b"definitely not zlib", ZERO_KEY)

    def test_unusable_dictionary_returns_empty(self):
        assert compress(b"payload", "not bytes") == b""  # type: ignore[arg-type]
