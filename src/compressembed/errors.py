"""Exception hierarchy for embed runs."""

from __future__ import annotations


class EmbedError(Exception):
    """Base class for failures that abort an embed run."""


class ConfigurationError(EmbedError):
    """Run configuration is unusable; raised before any file is written."""


class InvalidIdentifierError(ConfigurationError):
    """A configured name is not a valid identifier for the target language."""


class InvalidKeyError(ConfigurationError):
    """Dictionary key is not valid unpadded base64."""


class InputReadError(EmbedError):
    """Input file could not be read."""


class CompressionError(EmbedError):
    """Compression engine failed to produce a stream."""


class EmptyArtifactError(CompressionError):
    """Compression returned no bytes, so no artifact is written."""


class DecompressionError(EmbedError, ValueError):
    """Compressed stream could not be inflated with the supplied key."""


class OutputWriteError(EmbedError):
    """Artifact or generated source could not be written."""


class TemplateError(EmbedError):
    """Source template could not be loaded or rendered."""
