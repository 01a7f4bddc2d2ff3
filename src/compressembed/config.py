"""Configuration models and loading logic."""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from compressembed.identifiers import DEFAULT_FUNCTION_NAME_LENGTH, generate_identifier
from compressembed.keys import new_key

DEFAULT_SETTINGS_FILE = Path("configs/settings.yaml")
SETTINGS_FILE_ENV = "COMPRESSEMBED_SETTINGS_FILE"

TargetName = Literal["go", "python"]

SOURCE_EXTENSIONS: dict[str, str] = {
    "go": ".go",
    "python": ".py",
}


def default_source_path(target: str) -> Path:
    """Return ``compressed.<ext>`` for the target language."""

    return Path(f"compressed{SOURCE_EXTENSIONS[target]}")


class ProjectConfig(BaseModel):
    """Project metadata settings."""

    name: str = "compressembed"
    env: str = "dev"


class EmbedDefaultsConfig(BaseModel):
    """Fallback values for options not given on the command line."""

    output_path: Path = Path("resource.dat")
    package: str = "main"
    target: TargetName = "go"
    function_name_length: int = Field(default=DEFAULT_FUNCTION_NAME_LENGTH, ge=1)


class LoggingConfig(BaseModel):
    """Console and optional file logging settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: Path | None = None


class EmbedConfig(BaseModel):
    """Immutable description of one embed run."""

    model_config = ConfigDict(frozen=True)

    package: str
    function_name: str
    key: str
    input_path: Path
    output_path: Path
    variable: str
    source_path: Path
    target: TargetName = "go"

    @classmethod
    def build(
        cls,
        input_path: Path,
        variable: str,
        *,
        output_path: Path | None = None,
        source_path: Path | None = None,
        package: str | None = None,
        target: TargetName | None = None,
        key: str | None = None,
        function_name: str | None = None,
        defaults: EmbedDefaultsConfig | None = None,
    ) -> "EmbedConfig":
        """Fill unset fields from defaults, a fresh key and a random function name."""

        effective = defaults or EmbedDefaultsConfig()
        chosen_target = target or effective.target
        return cls(
            package=effective.package if package is None else package,
            function_name=(
                generate_identifier(effective.function_name_length) if function_name is None else function_name
            ),
            key=new_key() if key is None else key,
            input_path=input_path,
            output_path=output_path or effective.output_path,
            variable=variable,
            source_path=source_path or default_source_path(chosen_target),
            target=chosen_target,
        )


class AppSettings(BaseSettings):
    """Top-level application settings."""

    _yaml_file_override: ClassVar[Path | None] = None

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    defaults: EmbedDefaultsConfig = Field(default_factory=EmbedDefaultsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="COMPRESSEMBED_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Use YAML defaults while allowing env vars to override values."""

        yaml_file = resolve_settings_file(cls._yaml_file_override)
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    def as_dict(self) -> dict[str, object]:
        """Return settings as a standard nested dictionary."""

        return self.model_dump(mode="json")


def find_project_root(start: Path | None = None) -> Path:
    """Locate the project root by traversing upward for config markers."""

    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / DEFAULT_SETTINGS_FILE).exists():
            return candidate
    return current


def resolve_settings_file(override: Path | None = None) -> Path:
    """Resolve settings file from explicit override, env var, or default."""

    chosen = override
    if chosen is None:
        env_value = os.getenv(SETTINGS_FILE_ENV)
        if env_value:
            chosen = Path(env_value)
    if chosen is None:
        chosen = DEFAULT_SETTINGS_FILE

    if not chosen.is_absolute():
        chosen = (find_project_root() / chosen).resolve()
    return chosen


def load_settings(config_file: Path | None = None) -> AppSettings:
    """Load settings with YAML defaults and environment variable overrides."""

    settings_file = resolve_settings_file(config_file)
    AppSettings._yaml_file_override = settings_file
    try:
        settings = AppSettings()
    finally:
        AppSettings._yaml_file_override = None
    log_file = settings.logging.log_file
    if log_file is not None and not log_file.is_absolute():
        project_root = settings_file.parent.parent.resolve()
        resolved_logging = settings.logging.model_copy(update={"log_file": (project_root / log_file).resolve()})
        return settings.model_copy(update={"logging": resolved_logging})
    return settings
