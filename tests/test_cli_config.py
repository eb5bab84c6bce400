"""Tests for configuration loading and CLI precedence."""

import json

import pytest

from args import parse_args
from bundling.errors import ConfigError
from cli_config import build_function_props, default_config_path, load_config


class TestLoadConfig:
    def test_yaml(self, tmp_path):
        path = tmp_path / "nestbundle.yml"
        path.write_text(
            "project: api\n"
            "runtime: nodejs18.x\n"
            "node_modules:\n"
            "  - axios\n"
            "  - sharp\n"
            "environment:\n"
            "  STAGE: dev\n"
        )

        cfg = load_config(str(path))

        assert cfg["project"] == "api"
        assert cfg["node_modules"] == ["axios", "sharp"]
        assert cfg["environment"] == {"STAGE": "dev"}

    def test_json(self, tmp_path):
        path = tmp_path / "nestbundle.json"
        path.write_text(json.dumps({"project": "worker", "log_level": "error"}))

        assert load_config(str(path)) == {"project": "worker", "log_level": "error"}

    def test_bundling_section(self, tmp_path):
        path = tmp_path / "nestbundle.yaml"
        path.write_text("bundling:\n  node_modules: [pg]\n  log_level: silent\n")

        cfg = load_config(str(path))

        assert cfg == {"node_modules": ["pg"], "log_level": "silent"}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "nestbundle.yml"
        path.write_text("")
        assert load_config(str(path)) == {}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "nestbundle.yml"
        path.write_text("project: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(str(path))
        assert str(path) in str(exc_info.value)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "nestbundle.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_node_modules_must_be_list(self, tmp_path):
        path = tmp_path / "nestbundle.yml"
        path.write_text("node_modules: axios\n")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "nope.yml"))

    @pytest.mark.parametrize("body", ["log_level: warn\n", "bundling:\n  log_level: loud\n"])
    def test_unknown_log_level(self, tmp_path, body):
        path = tmp_path / "nestbundle.yml"
        path.write_text(body)

        with pytest.raises(ConfigError) as exc_info:
            load_config(str(path))
        assert "log_level" in str(exc_info.value)

    def test_log_level_case_insensitive(self, tmp_path):
        path = tmp_path / "nestbundle.yml"
        path.write_text("log_level: SILENT\n")
        assert load_config(str(path)) == {"log_level": "SILENT"}

    def test_empty_module_name(self, tmp_path):
        path = tmp_path / "nestbundle.yml"
        path.write_text("node_modules: [axios, '']\n")
        with pytest.raises(ConfigError):
            load_config(str(path))


class TestDefaultConfigPath:
    def test_env_wins(self, tmp_path, monkeypatch):
        (tmp_path / "nestbundle.yml").write_text("")
        monkeypatch.setenv("NESTBUNDLE_CONFIG", "/etc/nestbundle.yml")
        assert default_config_path(str(tmp_path)) == "/etc/nestbundle.yml"

    def test_default_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("NESTBUNDLE_CONFIG", raising=False)
        (tmp_path / "nestbundle.yaml").write_text("")
        assert default_config_path(str(tmp_path)) == str(tmp_path / "nestbundle.yaml")

    def test_none(self, tmp_path, monkeypatch):
        monkeypatch.delenv("NESTBUNDLE_CONFIG", raising=False)
        assert default_config_path(str(tmp_path)) is None


class TestBuildFunctionProps:
    def test_cli_overrides_config(self):
        args = parse_args(["-o", "out", "-p", "api", "-m", "axios", "--package-log-level", "INFO"])
        config = {"project": "worker", "node_modules": ["pg"], "log_level": "error", "runtime": "nodejs18.x"}

        props = build_function_props(args, config)

        assert props.project == "api"
        assert props.node_modules == ["axios"]
        assert props.log_level == "info"
        assert props.runtime == "nodejs18.x"

    def test_config_only(self):
        args = parse_args(["-o", "out"])
        props = build_function_props(args, {"handler": "run", "aws_sdk_connection_reuse": False})

        assert props.handler == "run"
        assert props.aws_sdk_connection_reuse is False
        assert props.node_modules is None

    def test_no_connection_reuse_flag(self):
        args = parse_args(["-o", "out", "--no-connection-reuse"])
        assert build_function_props(args, {}).aws_sdk_connection_reuse is False

    def test_environment_values_stringified(self):
        args = parse_args(["-o", "out"])
        props = build_function_props(args, {"environment": {"PORT": 3000}})
        assert props.environment == {"PORT": "3000"}
