"""CLI tests for xapi-stub-generator.

Tests cover:
- Argument parsing and defaults
- Reading JSON and YAML schemas
- Writing to a file and to stdout
- Error handling for invalid inputs
"""

from __future__ import annotations

import argparse
import json
import subprocess

import pytest

from xapi_stub_generator import run as run_module
from xapi_stub_generator.cli import main, setup_parser
from xapi_stub_generator.run import SchemaLoadError, format_outputs, load_schema


@pytest.fixture
def temp_output_dir(tmp_path):
    """Create a temporary output directory for tests."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    yield output_dir


class TestArgumentParsing:
    """Test argument parsing and validation."""

    def test_parser_setup(self):
        """Test that parser is set up correctly."""
        parser = setup_parser()
        assert isinstance(parser, argparse.ArgumentParser)
        assert parser.description is not None

    def test_default_arguments(self):
        """Test default argument values."""
        args = setup_parser().parse_args(["schema.json"])

        assert args.schema == "schema.json"
        assert args.output == ""
        assert args.xapi_import == "jsxapi"
        assert args.class_name == "TypedXAPI"
        assert args.base == "XAPI"
        assert args.with_connect is True
        assert args.format is False
        assert args.verbose is False

    def test_overrides(self):
        """Test that all document options can be overridden."""
        args = setup_parser().parse_args(
            [
                "schema.json",
                "-o",
                "out/xapi.d.ts",
                "--xapi-import",
                "../src/xapi",
                "--class-name",
                "XapiWithTypes",
                "--base",
                "JSXAPI",
                "--no-connect",
            ]
        )

        assert args.output == "out/xapi.d.ts"
        assert args.xapi_import == "../src/xapi"
        assert args.class_name == "XapiWithTypes"
        assert args.base == "JSXAPI"
        assert args.with_connect is False

    def test_schema_is_required(self):
        """Test that a missing schema argument exits with an error."""
        with pytest.raises(SystemExit):
            setup_parser().parse_args([])


class TestLoadSchema:
    """Test reading schema files."""

    def test_json(self, codec_schema_path):
        schema = load_schema(str(codec_schema_path))
        assert list(schema) == ["Command", "Configuration", "StatusSchema"]

    def test_yaml(self, codec_yaml_schema_path):
        schema = load_schema(str(codec_yaml_schema_path))
        assert schema["Command"]["Dial"]["command"] == "True"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaLoadError):
            load_schema(str(tmp_path / "missing.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{ Command: ")

        with pytest.raises(SchemaLoadError):
            load_schema(str(path))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("Command: [unclosed")

        with pytest.raises(SchemaLoadError):
            load_schema(str(path))


class TestGeneration:
    """Test end-to-end generation from the command line."""

    def test_writes_output_file(self, codec_schema_path, temp_output_dir):
        output_path = temp_output_dir / "nested" / "xapi.ts"

        assert main([str(codec_schema_path), "-o", str(output_path)]) == 0

        content = output_path.read_text()
        assert content.startswith('import { XAPI, connectGen } from "jsxapi";')
        assert "export interface CommandTree {" in content
        assert "Play<R=any>(args: CommandAudioSoundPlayArgs): Promise<R>," in content
        assert "Dial<R=any>(args: CommandDialArgs): Promise<R>;" in content
        assert "Post<R=any>(args: CommandHttpClientPostArgs, body: string): Promise<R>," in content
        assert "Config: Configify<ConfigTree>;" in content
        assert "Status: Statusify<StatusTree>;" in content
        assert "export const connect = connectGen(TypedXAPI);" in content

    def test_writes_stdout(self, codec_yaml_schema_path, capsys):
        assert main([str(codec_yaml_schema_path)]) == 0

        captured = capsys.readouterr()
        assert "Dial<R=any>(args: CommandDialArgs): Promise<R>;" in captured.out
        assert "Volume: number," in captured.out

    def test_options_reach_output(self, codec_yaml_schema_path, capsys):
        argv = [
            str(codec_yaml_schema_path),
            "--xapi-import",
            "../src/xapi",
            "--class-name",
            "XapiWithTypes",
            "--base",
            "JSXAPI",
            "--no-connect",
        ]
        assert main(argv) == 0

        output = capsys.readouterr().out
        assert 'import { JSXAPI } from "../src/xapi";' in output
        assert "export class XapiWithTypes extends JSXAPI {}" in output
        assert "connect" not in output

    def test_output_is_deterministic(self, codec_schema_path, temp_output_dir):
        first = temp_output_dir / "first.ts"
        second = temp_output_dir / "second.ts"

        main([str(codec_schema_path), "-o", str(first)])
        main([str(codec_schema_path), "-o", str(second)])

        assert first.read_text() == second.read_text()

    def test_invalid_schema_fails(self, tmp_path, temp_output_dir):
        schema_path = tmp_path / "invalid.json"
        schema_path.write_text(json.dumps({"Command": "foobar"}))
        output_path = temp_output_dir / "xapi.ts"

        assert main([str(schema_path), "-o", str(output_path)]) == 1
        assert not output_path.exists()

    def test_missing_schema_fails(self, tmp_path):
        assert main([str(tmp_path / "missing.json")]) == 1


class TestFormatting:
    """Test the optional prettier pass."""

    def test_falls_back_without_prettier(self, monkeypatch):
        def raise_not_found(*args, **kwargs):
            raise FileNotFoundError("prettier")

        monkeypatch.setattr(run_module.subprocess, "run", raise_not_found)
        assert format_outputs("export interface A {}\n") == "export interface A {}\n"

    def test_falls_back_on_prettier_error(self, monkeypatch):
        def raise_error(*args, **kwargs):
            raise subprocess.CalledProcessError(2, ["prettier"], stderr="SyntaxError")

        monkeypatch.setattr(run_module.subprocess, "run", raise_error)
        assert format_outputs("export interface {") == "export interface {"

    def test_uses_prettier_output(self, monkeypatch):
        def fake_run(command, **kwargs):
            assert command == ["prettier", "--parser", "typescript"]
            return subprocess.CompletedProcess(command, 0, stdout="formatted\n", stderr="")

        monkeypatch.setattr(run_module.subprocess, "run", fake_run)
        assert format_outputs("raw") == "formatted\n"
