"""Tests for config loading."""

from pathlib import Path

import pytest

from cleorouter.config import AppConfig, ServerConfig, init_config, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("MONGODB_URI", "CLEOROUTER_DB", "CLEOROUTER_CACHE_TTL"):
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    def test_load_defaults(self):
        """Loading with no file should return defaults."""
        config = load_config(Path("/nonexistent/config.toml"))
        assert config.mongodb.uri == "mongodb://localhost:27017"
        assert config.mongodb.database == "cleorouter"
        assert config.routing.cache_ttl == 3600.0
        assert config.routing.cache_max_size == 1000
        assert config.routing.min_confidence == 0.7
        assert config.routing.registry_enabled is True

    def test_init_config(self, tmp_path):
        path = tmp_path / "nested" / "config.toml"
        result = init_config(path)
        assert result == path
        assert path.exists()
        # Should be loadable
        config = load_config(path)
        assert config.mongodb.database == "cleorouter"
        assert config.config_path == path

    def test_custom_file(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[routing]\ncache_ttl = 60\nregistry_enabled = false\n\n[server]\nsocket_path = "/tmp/x.sock"\n'
        )
        config = load_config(path)
        assert config.routing.cache_ttl == 60.0
        assert config.routing.registry_enabled is False
        assert config.routing.cache_max_size == 1000
        assert config.server.resolved_socket_path == "/tmp/x.sock"

    def test_env_overlay(self, monkeypatch):
        monkeypatch.setenv("MONGODB_URI", "mongodb://db:27017")
        monkeypatch.setenv("CLEOROUTER_DB", "routing_test")
        monkeypatch.setenv("CLEOROUTER_CACHE_TTL", "120")
        config = load_config(Path("/nonexistent/config.toml"))
        assert config.mongodb.uri == "mongodb://db:27017"
        assert config.mongodb.database == "routing_test"
        assert config.routing.cache_ttl == 120.0

    def test_runtime_dir_paths(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_RUNTIME_DIR", str(tmp_path))
        server = ServerConfig()
        assert server.resolved_socket_path == str(tmp_path / "cleorouter.sock")
        assert server.resolved_pid_file == str(tmp_path / "cleorouter.pid")

    def test_app_config_defaults(self):
        config = AppConfig()
        assert config.routing.cleanup_interval == 300.0
