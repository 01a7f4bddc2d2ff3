"""Preset-dictionary zlib compression engine."""

from __future__ import annotations

import logging
import zlib
from typing import Final

from compressembed.errors import DecompressionError

LOGGER = logging.getLogger(__name__)

COMPRESSION_LEVEL: Final = zlib.Z_BEST_COMPRESSION


def compress(payload: bytes, key: bytes) -> bytes:
    """Compress ``payload`` at maximum effort with ``key`` as preset dictionary.

    Returns ``b""`` when the compressor rejects the dictionary; callers treat an
    empty result as a failed construction.
    """

    try:
        compressor = zlib.compressobj(level=COMPRESSION_LEVEL, zdict=key)
    except (zlib.error, TypeError, ValueError) as exc:
        LOGGER.warning("codec.compress.construct_failed key_bytes=%s error=%s", len(key), exc)
        return b""
    return compressor.compress(payload) + compressor.flush()


def decompress(payload: bytes, key: bytes) -> bytes:
    """Inflate a stream produced by ``compress`` with the same ``key``."""

    try:
        decompressor = zlib.decompressobj(zdict=key)
        data = decompressor.decompress(payload) + decompressor.flush()
    except (zlib.error, TypeError, ValueError) as exc:
        raise DecompressionError(f"cannot inflate stream: {exc}") from exc
    if not decompressor.eof:
        raise DecompressionError("compressed stream is truncated")
    if decompressor.unused_data:
        raise DecompressionError(f"{len(decompressor.unused_data)} trailing bytes after compressed stream")
    return data
