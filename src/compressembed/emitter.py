"""Generated-source rendering for embed runs."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from string import Template

from compressembed.config import EmbedConfig
from compressembed.errors import ConfigurationError, TemplateError

TEMPLATE_PACKAGE = "compressembed.templates"


@dataclass(frozen=True, slots=True)
class TargetSpec:
    """Template file and literal rules for one output language."""

    name: str
    template_file: str
    # go:embed patterns cannot name files outside the source directory.
    artifact_must_be_local: bool


TARGETS: dict[str, TargetSpec] = {
    "go": TargetSpec(name="go", template_file="go.tmpl", artifact_must_be_local=True),
    "python": TargetSpec(name="python", template_file="python.tmpl", artifact_must_be_local=False),
}


def get_target(target: str) -> TargetSpec:
    try:
        return TARGETS[target]
    except KeyError as exc:
        allowed_rendered = ",".join(sorted(TARGETS))
        raise TemplateError(f"unknown target {target!r}; expected one of: {allowed_rendered}") from exc


def load_template(target: str) -> Template:
    """Load the packaged template for ``target``."""

    spec = get_target(target)
    try:
        text = resources.files(TEMPLATE_PACKAGE).joinpath(spec.template_file).read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateError(f"cannot read template {spec.template_file}: {exc}") from exc
    return Template(text)


def artifact_reference(output_path: Path, source_path: Path) -> str:
    """Return the artifact path relative to the generated source's directory."""

    relative = os.path.relpath(output_path.resolve(), source_path.resolve().parent)
    return Path(relative).as_posix()


def check_artifact_reference(reference: str, target: str) -> None:
    """Reject artifact locations the target language cannot load."""

    spec = get_target(target)
    if spec.artifact_must_be_local and (reference == ".." or reference.startswith("../")):
        raise ConfigurationError(
            f"artifact {reference!r} is outside the generated source directory; "
            f"target {target} can only embed files beside or below the source"
        )


def generated_symbols(function_name: str, target: str) -> frozenset[str]:
    """Return the top-level names a template defines besides the variable."""

    if get_target(target).name == "go":
        # Package-level names clash with the file-scope imports as well.
        return frozenset({function_name, f"{function_name}Data", "bytes", "zlib", "base64", "io"})
    return frozenset({function_name, f"_{function_name}_key", f"_{function_name}_artifact"})


def _artifact_literal(reference: str, target: str) -> str:
    if target == "python":
        return repr(reference)
    return json.dumps(reference)


def render_source(config: EmbedConfig, template: Template | None = None) -> str:
    """Render the generated source file text for ``config``."""

    chosen = template or load_template(config.target)
    reference = artifact_reference(config.output_path, config.source_path)
    try:
        return chosen.substitute(
            package=config.package,
            function=config.function_name,
            key=config.key,
            artifact=_artifact_literal(reference, config.target),
            variable=config.variable,
        )
    except (KeyError, ValueError) as exc:
        raise TemplateError(f"cannot render {config.target} template: {exc!r}") from exc
