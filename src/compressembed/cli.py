"""Typer CLI entrypoint for compressembed."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, cast

import typer
import yaml

from compressembed.config import AppSettings, EmbedConfig, TargetName, load_settings
from compressembed.emitter import TARGETS
from compressembed.errors import EmbedError
from compressembed.keys import new_key
from compressembed.logging_utils import configure_logging
from compressembed.pipeline import run_embed_pipeline, unpack_artifact

app = typer.Typer(
    add_completion=False,
    help="Compress a file into an artifact and generate source that embeds it.",
    no_args_is_help=True,
)


def _load_and_optionally_configure_logger(
    config_file: Path | None,
    configure: bool,
    log_level: str | None = None,
) -> tuple[AppSettings, logging.Logger]:
    settings = load_settings(config_file=config_file)
    if configure:
        level_name = (log_level or settings.logging.level).upper()
        logger = configure_logging(settings.logging.log_file, level=logging.getLevelName(level_name))
    else:
        logger = logging.getLogger("compressembed")
    return settings, logger


def _normalize_choice(value: str | None, *, allowed: set[str], option_name: str) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in allowed:
        allowed_rendered = ",".join(sorted(allowed))
        raise typer.BadParameter(f"{option_name} must be one of: {allowed_rendered}")
    return normalized


def _fail(logger: logging.Logger, event: str, exc: EmbedError) -> NoReturn:
    logger.error("%s error=%s", event, exc)
    typer.echo(f"error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command("embed")
def embed(
    input_path: Path = typer.Option(
        ...,
        "--in",
        help="Input file (required).",
    ),
    variable: str = typer.Option(
        ...,
        "--var",
        help="Variable name for the decompressed resource (required).",
    ),
    output_path: Path | None = typer.Option(
        None,
        "--out",
        help="Compressed output file [default: resource.dat].",
    ),
    source_path: Path | None = typer.Option(
        None,
        "--src",
        help="Source file name to create [default: compressed.<ext>].",
    ),
    package: str | None = typer.Option(
        None,
        "--pkg",
        help="Name of package for the generated source [default: main].",
    ),
    target: str | None = typer.Option(
        None,
        "--target",
        help="Generated source language: go or python.",
    ),
    key: str | None = typer.Option(
        None,
        "--key",
        help="Pin an existing base64 dictionary key for reproducible builds.",
    ),
    function_name: str | None = typer.Option(
        None,
        "--func",
        help="Pin the generated function name instead of a random one.",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Override logging level: DEBUG, INFO, WARNING, ERROR.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Compress one input file and generate the source that inflates it."""

    normalized_target = _normalize_choice(target, allowed=set(TARGETS), option_name="target")
    normalized_level = _normalize_choice(
        log_level,
        allowed={"debug", "info", "warning", "error"},
        option_name="log-level",
    )
    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True, log_level=normalized_level)
    config = EmbedConfig.build(
        input_path,
        variable,
        output_path=output_path,
        source_path=source_path,
        package=package,
        target=cast(TargetName | None, normalized_target),
        key=key,
        function_name=function_name,
        defaults=settings.defaults,
    )

    try:
        result = run_embed_pipeline(config, logger=logger)
    except EmbedError as exc:
        _fail(logger, "embed.failed", exc)

    typer.echo(f"run_id: {result.run_id}")
    typer.echo(f"target: {result.target}")
    typer.echo(f"input_bytes: {result.input_bytes}")
    typer.echo(f"artifact_bytes: {result.artifact_bytes}")
    typer.echo(f"artifact_path: {result.output_path}")
    typer.echo(f"source_path: {result.source_path}")
    typer.echo(f"function: {result.function_name}")


@app.command("keygen")
def keygen() -> None:
    """Print a fresh base64 dictionary key."""

    typer.echo(new_key())


@app.command("unpack")
def unpack(
    artifact_path: Path = typer.Option(
        ...,
        "--in",
        help="Compressed artifact to inflate.",
    ),
    key: str = typer.Option(
        ...,
        "--key",
        help="Base64 dictionary key the artifact was built with.",
    ),
    output_path: Path | None = typer.Option(
        None,
        "--out",
        help="Write recovered bytes here instead of stdout.",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Inflate an artifact with its key to verify a build."""

    _, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    try:
        data = unpack_artifact(artifact_path, key, output_path=output_path)
    except EmbedError as exc:
        _fail(logger, "unpack.failed", exc)

    if output_path is None:
        typer.echo(data, nl=False)
        return
    logger.info("unpack.written path=%s bytes=%s", output_path, len(data))
    typer.echo(f"output_path: {output_path}")
    typer.echo(f"bytes: {len(data)}")


@app.command("show-config")
def show_config(
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Print the effective configuration after env overrides."""

    settings, _ = _load_and_optionally_configure_logger(config_file, configure=False)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False)
    typer.echo(rendered)


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
