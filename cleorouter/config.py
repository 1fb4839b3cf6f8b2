"""Configuration loading: TOML file + environment variable overlay."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]


DEFAULT_CONFIG_DIR = Path.home() / ".config" / "cleorouter"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"


def _default_socket_path() -> str:
    """Return default socket path using XDG_RUNTIME_DIR or /tmp fallback."""
    runtime = os.environ.get("XDG_RUNTIME_DIR")
    if runtime:
        return str(Path(runtime) / "cleorouter.sock")
    return f"/tmp/cleorouter-{os.getuid()}.sock"


def _default_pid_path() -> str:
    """Return default PID file path."""
    runtime = os.environ.get("XDG_RUNTIME_DIR")
    if runtime:
        return str(Path(runtime) / "cleorouter.pid")
    return f"/tmp/cleorouter-{os.getuid()}.pid"


DEFAULT_CONFIG_TOML = """\
[mongodb]
uri = "mongodb://localhost:27017"
database = "cleorouter"

[routing]
cache_ttl = 3600
cache_max_size = 1000
min_confidence = 0.7
cleanup_interval = 300
registry_enabled = true

[server]
# socket_path and pid_file default to XDG_RUNTIME_DIR or /tmp
"""


@dataclass
class MongoConfig:
    uri: str = "mongodb://localhost:27017"
    database: str = "cleorouter"


@dataclass
class RoutingConfig:
    cache_ttl: float = 3600.0  # seconds
    cache_max_size: int = 1000
    min_confidence: float = 0.7
    cleanup_interval: float = 300.0  # seconds
    registry_enabled: bool = True  # load custom agents from MongoDB


@dataclass
class ServerConfig:
    socket_path: str = ""
    pid_file: str = ""

    @property
    def resolved_socket_path(self) -> str:
        return self.socket_path or _default_socket_path()

    @property
    def resolved_pid_file(self) -> str:
        return self.pid_file or _default_pid_path()


@dataclass
class AppConfig:
    mongodb: MongoConfig = field(default_factory=MongoConfig)
    routing: RoutingConfig = field(default_factory=RoutingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    config_path: Path = DEFAULT_CONFIG_PATH


def _env_overlay(config: AppConfig) -> None:
    """Override config values with environment variables where applicable."""
    if uri := os.environ.get("MONGODB_URI"):
        config.mongodb.uri = uri
    if db := os.environ.get("CLEOROUTER_DB"):
        config.mongodb.database = db
    if ttl := os.environ.get("CLEOROUTER_CACHE_TTL"):
        config.routing.cache_ttl = float(ttl)


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from TOML file with env var overlay."""
    path = config_path or DEFAULT_CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    else:
        raw = tomllib.loads(DEFAULT_CONFIG_TOML)

    mongo_raw = raw.get("mongodb", {})
    routing_raw = raw.get("routing", {})
    server_raw = raw.get("server", {})

    config = AppConfig(
        mongodb=MongoConfig(
            uri=mongo_raw.get("uri", "mongodb://localhost:27017"),
            database=mongo_raw.get("database", "cleorouter"),
        ),
        routing=RoutingConfig(
            cache_ttl=float(routing_raw.get("cache_ttl", 3600)),
            cache_max_size=int(routing_raw.get("cache_max_size", 1000)),
            min_confidence=float(routing_raw.get("min_confidence", 0.7)),
            cleanup_interval=float(routing_raw.get("cleanup_interval", 300)),
            registry_enabled=routing_raw.get("registry_enabled", True),
        ),
        server=ServerConfig(
            socket_path=server_raw.get("socket_path", ""),
            pid_file=server_raw.get("pid_file", ""),
        ),
        config_path=path,
    )

    _env_overlay(config)
    return config


def init_config(config_path: Path | None = None) -> Path:
    """Create default config file."""
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG_TOML)
    return path
