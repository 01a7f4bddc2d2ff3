"""Embed run orchestration: validate, compress, write artifact, emit source."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from string import Template
from typing import Any
from uuid import uuid4

from compressembed.codec import compress, decompress
from compressembed.config import EmbedConfig
from compressembed.emitter import (
    artifact_reference,
    check_artifact_reference,
    generated_symbols,
    load_template,
    render_source,
)
from compressembed.errors import (
    ConfigurationError,
    EmptyArtifactError,
    InputReadError,
    InvalidIdentifierError,
    OutputWriteError,
)
from compressembed.identifiers import is_reserved_word, is_valid_identifier
from compressembed.keys import decode_key
from compressembed.utils.paths import write_bytes_atomically, write_text_atomically
from compressembed.utils.time_utils import now_utc

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EmbedRunResult:
    """Return object for one embed run."""

    run_id: str
    started_ts: datetime
    target: str
    input_path: Path
    output_path: Path
    source_path: Path
    function_name: str
    key: str
    input_bytes: int
    artifact_bytes: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "started_ts": self.started_ts.isoformat(),
            "target": self.target,
            "input_path": str(self.input_path),
            "output_path": str(self.output_path),
            "source_path": str(self.source_path),
            "function_name": self.function_name,
            "key": self.key,
            "input_bytes": self.input_bytes,
            "artifact_bytes": self.artifact_bytes,
        }


@dataclass(frozen=True, slots=True)
class _ValidatedRun:
    key_bytes: bytes
    template: Template


def _require_identifier(value: str, *, label: str, target: str) -> None:
    if not is_valid_identifier(value):
        raise InvalidIdentifierError(f"invalid {label} {value!r}: must match ^[A-Za-z_][A-Za-z0-9_]*$")
    if is_reserved_word(value, target):
        raise InvalidIdentifierError(f"invalid {label} {value!r}: reserved word in {target}")


def _require_distinct_paths(config: EmbedConfig) -> None:
    labelled = {
        "input": config.input_path.resolve(),
        "output": config.output_path.resolve(),
        "source": config.source_path.resolve(),
    }
    seen: dict[Path, str] = {}
    for label, path in labelled.items():
        if path in seen:
            raise ConfigurationError(f"{seen[path]} and {label} paths both resolve to {path}")
        seen[path] = label


def validate_config(config: EmbedConfig) -> _ValidatedRun:
    """Check every configuration field that can fail before any file is touched."""

    _require_identifier(config.variable, label="variable name", target=config.target)
    _require_identifier(config.function_name, label="function name", target=config.target)
    if config.target == "go":
        _require_identifier(config.package, label="package name", target=config.target)
    else:
        for part in config.package.split("."):
            _require_identifier(part, label=f"package name {config.package!r} component", target=config.target)
    if config.variable in generated_symbols(config.function_name, config.target):
        raise InvalidIdentifierError(
            f"invalid variable name {config.variable!r}: clashes with a generated {config.target} symbol"
        )
    _require_distinct_paths(config)
    key_bytes = decode_key(config.key)
    template = load_template(config.target)
    check_artifact_reference(artifact_reference(config.output_path, config.source_path), config.target)
    return _ValidatedRun(key_bytes=key_bytes, template=template)


def _read_input(input_path: Path) -> bytes:
    try:
        return input_path.read_bytes()
    except OSError as exc:
        raise InputReadError(f"cannot read input file {input_path}: {exc.strerror or exc}") from exc


def _write_output(kind: str, path: Path, data: bytes | str) -> Path:
    try:
        if isinstance(data, str):
            return write_text_atomically(data, path)
        return write_bytes_atomically(data, path)
    except OSError as exc:
        raise OutputWriteError(f"cannot create {kind} {path}: {exc.strerror or exc}") from exc


def run_embed_pipeline(
    config: EmbedConfig,
    *,
    logger: logging.Logger | None = None,
) -> EmbedRunResult:
    """Compress the input into an artifact and generate its loader source.

    Stages run strictly in order; the first failure raises an ``EmbedError``
    and files written by earlier stages are left in place.
    """

    effective_logger = logger or LOGGER
    run_id = f"embed-run-{uuid4().hex[:12]}"
    started_ts = now_utc()

    validated = validate_config(config)
    effective_logger.info(
        "embed.validated run_id=%s target=%s variable=%s function=%s",
        run_id,
        config.target,
        config.variable,
        config.function_name,
    )

    payload = _read_input(config.input_path)
    effective_logger.info("embed.input_read path=%s bytes=%s", config.input_path, len(payload))

    artifact = compress(payload, validated.key_bytes)
    if not artifact:
        raise EmptyArtifactError(f"compression produced no data for {config.input_path}")

    _write_output("artifact", config.output_path, artifact)
    effective_logger.info(
        "embed.artifact_written path=%s bytes=%s ratio=%.3f",
        config.output_path,
        len(artifact),
        len(artifact) / max(1, len(payload)),
    )

    source_text = render_source(config, validated.template)
    _write_output("source", config.source_path, source_text)
    effective_logger.info("embed.source_written path=%s target=%s", config.source_path, config.target)

    return EmbedRunResult(
        run_id=run_id,
        started_ts=started_ts,
        target=config.target,
        input_path=config.input_path,
        output_path=config.output_path,
        source_path=config.source_path,
        function_name=config.function_name,
        key=config.key,
        input_bytes=len(payload),
        artifact_bytes=len(artifact),
    )


def unpack_artifact(artifact_path: Path, key: str, *, output_path: Path | None = None) -> bytes:
    """Read an artifact and inflate it with its base64 dictionary key.

    When ``output_path`` is given the recovered bytes are also written there.
    """

    key_bytes = decode_key(key)
    data = decompress(_read_input(artifact_path), key_bytes)
    if output_path is not None:
        _write_output("unpacked file", output_path, data)
    return data
