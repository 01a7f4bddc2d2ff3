"""Shared utility helpers."""

from compressembed.utils.paths import atomic_temp_path, write_bytes_atomically, write_text_atomically
from compressembed.utils.time_utils import now_utc

__all__ = [
    "atomic_temp_path",
    "write_bytes_atomically",
    "write_text_atomically",
    "now_utc",
]
