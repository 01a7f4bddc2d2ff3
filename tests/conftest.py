"""Shared fixtures for compressembed tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from compressembed.config import EmbedConfig

ZERO_KEY = "A" * 43  # 32 zero bytes, unpadded base64


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run each test in its own directory with no settings file and clean logging."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("COMPRESSEMBED_SETTINGS_FILE", str(tmp_path / "missing-settings.yaml"))
    root_logger = logging.getLogger()
    saved_level = root_logger.level
    yield
    # configure_logging installs plain stream/file handlers; pytest's own are subclasses.
    for handler in list(root_logger.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(saved_level)


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    path = tmp_path / "assets" / "config.json"
    path.parent.mkdir(parents=True)
    path.write_bytes(b'{"name": "demo", "items": [1, 2, 3], "enabled": true}\n' * 20)
    return path


@pytest.fixture
def make_config(tmp_path: Path, input_file: Path):
    def _make(**overrides) -> EmbedConfig:
        fields = {
            "input_path": input_file,
            "variable": "payload",
            "output_path": tmp_path / "build" / "out.bin",
            "source_path": tmp_path / "build" / "out.go",
            "package": "demo",
            "key": ZERO_KEY,
            "function_name": "loadRes",
        }
        fields.update(overrides)
        input_path = fields.pop("input_path")
        variable = fields.pop("variable")
        return EmbedConfig.build(input_path, variable, **fields)

    return _make
