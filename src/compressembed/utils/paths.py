"""Path and filesystem helper functions."""

from __future__ import annotations

import os
from pathlib import Path
from uuid import uuid4


def atomic_temp_path(target_path: Path) -> Path:
    """Create a unique temp path next to the target for atomic replacement."""

    return target_path.parent / f".{target_path.name}.{uuid4().hex}.tmp"


def write_bytes_atomically(data: bytes, output_path: Path) -> Path:
    """Write bytes atomically via temporary file then os.replace."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = atomic_temp_path(output_path)
    try:
        temp_path.write_bytes(data)
        os.replace(temp_path, output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()
    return output_path


def write_text_atomically(text: str, output_path: Path) -> Path:
    """Write UTF-8 text atomically via temporary file then os.replace."""

    return write_bytes_atomically(text.encode("utf-8"), output_path)
