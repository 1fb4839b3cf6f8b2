"""CLI tests using click's CliRunner."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from cleorouter.cli import cli
from cleorouter.commands import config_cmd
from cleorouter.commands.config_cmd import coerce_value
from cleorouter.config import init_config

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]


@pytest.fixture
def runner():
    return CliRunner()


class TestRouteAnalyze:
    def test_text_output(self, runner):
        result = runner.invoke(cli, ["route", "analyze", "hello"])
        assert result.exit_code == 0
        assert "Score: 10/100 (direct)" in result.output
        assert "greeting" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["route", "analyze", "--json", "fix the bug"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["score"] == 30
        assert data["recommendation"] == "clarify"


class TestConfigCommands:
    def test_coerce_value(self):
        assert coerce_value("true") is True
        assert coerce_value("120") == 120
        assert coerce_value("0.8") == 0.8
        assert coerce_value('["a", "b"]') == ["a", "b"]
        assert coerce_value("mongodb://db:27017") == "mongodb://db:27017"

    def test_set_updates_file(self, runner, tmp_path, monkeypatch):
        path = tmp_path / "config.toml"
        monkeypatch.setattr(config_cmd, "DEFAULT_CONFIG_PATH", path)
        init_config(path)
        result = runner.invoke(cli, ["config", "set", "routing.cache_ttl", "120"])
        assert result.exit_code == 0
        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert data["routing"]["cache_ttl"] == 120
        assert data["mongodb"]["database"] == "cleorouter"

    def test_set_without_file(self, runner, tmp_path, monkeypatch):
        monkeypatch.setattr(config_cmd, "DEFAULT_CONFIG_PATH", tmp_path / "missing.toml")
        result = runner.invoke(cli, ["config", "set", "routing.cache_ttl", "120"])
        assert result.exit_code == 0
        assert not (tmp_path / "missing.toml").exists()


class TestServerNotRunning:
    def test_cache_stats_requires_server(self, runner, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_RUNTIME_DIR", str(tmp_path))
        monkeypatch.setattr("cleorouter.config.DEFAULT_CONFIG_PATH", tmp_path / "none.toml")
        result = runner.invoke(cli, ["cache", "stats"])
        assert result.exit_code != 0
        assert "Server not running" in result.output
