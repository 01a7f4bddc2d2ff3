"""Compress a file into an artifact and generate source that embeds it."""

from compressembed.codec import compress, decompress
from compressembed.config import EmbedConfig
from compressembed.identifiers import generate_identifier, is_valid_identifier
from compressembed.keys import KEY_SIZE, decode_key, new_key
from compressembed.pipeline import EmbedRunResult, run_embed_pipeline, unpack_artifact

__version__ = "0.1.0"

__all__ = [
    "KEY_SIZE",
    "EmbedConfig",
    "EmbedRunResult",
    "compress",
    "decode_key",
    "decompress",
    "generate_identifier",
    "is_valid_identifier",
    "new_key",
    "run_embed_pipeline",
    "unpack_artifact",
]
