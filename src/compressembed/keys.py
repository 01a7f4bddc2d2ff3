"""Dictionary key generation and unpadded base64 encoding."""

from __future__ import annotations

import base64
import binascii
import secrets
from typing import Final

from compressembed.errors import InvalidKeyError

KEY_SIZE: Final = 32


def encode_key(raw: bytes) -> str:
    """Encode raw key bytes as unpadded standard base64."""

    return base64.b64encode(raw).decode("ascii").rstrip("=")


def decode_key(text: str) -> bytes:
    """Decode an unpadded standard base64 key.

    Padded input is rejected, matching the encoding produced by ``encode_key``.
    """

    if "=" in text:
        raise InvalidKeyError("key must be unpadded base64")
    padded = text + "=" * (-len(text) % 4)
    try:
        raw = base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidKeyError(f"key is not valid base64: {exc}") from exc
    if not raw:
        raise InvalidKeyError("key must not be empty")
    return raw


def new_key() -> str:
    """Return a fresh random dictionary key, base64 encoded without padding."""

    return encode_key(secrets.token_bytes(KEY_SIZE))
