"""Tests for generated source rendering."""

from pathlib import Path
from string import Template

import pytest

from compressembed.emitter import (
    TARGETS,
    artifact_reference,
    check_artifact_reference,
    generated_symbols,
    load_template,
    render_source,
)
from compressembed.errors import ConfigurationError, TemplateError


class TestArtifactReference:
    def test_sibling(self, tmp_path):
        assert artifact_reference(tmp_path / "out.bin", tmp_path / "out.go") == "out.bin"

    def test_nested(self, tmp_path):
        ref = artifact_reference(tmp_path / "data" / "res.dat", tmp_path / "gen.go")
        assert ref == "data/res.dat"

    def test_outside_source_dir(self, tmp_path):
        ref = artifact_reference(tmp_path / "res.dat", tmp_path / "pkg" / "gen.go")
        assert ref == "../res.dat"

    def test_go_rejects_parent_reference(self):
        with pytest.raises(ConfigurationError):
            check_artifact_reference("../res.dat", "go")

    def test_python_allows_parent_reference(self):
        check_artifact_reference("../res.dat", "python")


class TestGeneratedSymbols:
    def test_go_symbols(self):
        symbols = generated_symbols("loadRes", "go")
        assert {"loadRes", "loadResData", "zlib", "io"} <= symbols

    def test_python_symbols(self):
        assert generated_symbols("loadRes", "python") == {"loadRes", "_loadRes_key", "_loadRes_artifact"}


class TestTemplates:
    @pytest.mark.parametrize("target", sorted(TARGETS))
    def test_packaged_templates_load(self, target):
        assert isinstance(load_template(target), Template)

    def test_unknown_target(self):
        with pytest.raises(TemplateError):
            load_template("cobol")


class TestRenderSource:
    def test_go_source(self, make_config):
        config = make_config()
        text = render_source(config)
        assert text.startswith("// Code generated by compressembed. DO NOT EDIT.")
        assert "package demo\n" in text
        assert '//go:embed "out.bin"\n' in text
        assert "var loadResData []byte" in text
        assert "var payload = loadRes()" in text
        assert f'base64.RawStdEncoding.DecodeString("{config.key}")' in text
        assert "zlib.NewReaderDict" in text
        assert "$" not in text

    def test_python_source(self, make_config, tmp_path):
        config = make_config(source_path=tmp_path / "build" / "embedded.py", target="python")
        text = render_source(config)
        assert "# package: demo" in text
        assert "_loadRes_artifact = Path(__file__).resolve().parent / 'out.bin'" in text
        assert "payload = loadRes()" in text
        assert config.key in text
        compile(text, "embedded.py", "exec")

    def test_bad_placeholder_is_template_error(self, make_config):
        with pytest.raises(TemplateError):
            render_source(make_config(), Template("package $package\nvar $unknown"))

    def test_stray_dollar_is_template_error(self, make_config):
        with pytest.raises(TemplateError):
            render_source(make_config(), Template("cost: $ 5"))

    def test_rendering_is_deterministic(self, make_config):
        config = make_config()
        assert render_source(config) == render_source(config)
