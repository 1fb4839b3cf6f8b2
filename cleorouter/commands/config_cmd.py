"""CLI handlers for config commands."""

from __future__ import annotations

import json

import click
import tomli_w

from cleorouter.config import DEFAULT_CONFIG_PATH, init_config, load_config

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]


def coerce_value(value: str):
    """Best-effort typing of a command-line value for TOML."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit():
        return int(value)
    try:
        return float(value)
    except ValueError:
        pass
    if value.startswith("[") or value.startswith("{"):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


@click.group("config")
def config_group():
    """Manage configuration."""
    pass


@config_group.command("init")
def config_init():
    """Create default configuration file."""
    path = init_config()
    click.echo(f"Configuration created at: {path}")


@config_group.command("show")
def config_show():
    """Show current configuration."""
    config = load_config()
    routing = config.routing
    click.echo(f"Config file: {config.config_path}")
    click.echo(f"  MongoDB: {config.mongodb.uri}/{config.mongodb.database}")
    click.echo(f"  Custom agents: {'enabled' if routing.registry_enabled else 'disabled'}")
    click.echo(f"  Cache TTL: {routing.cache_ttl:g}s")
    click.echo(f"  Cache max size: {routing.cache_max_size}")
    click.echo(f"  Cache min confidence: {routing.min_confidence}")
    click.echo(f"  Cache cleanup interval: {routing.cleanup_interval:g}s")
    click.echo(f"  Server socket: {config.server.resolved_socket_path}")
    click.echo(f"  Server PID file: {config.server.resolved_pid_file}")


@config_group.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str):
    """Set a configuration value.

    Modifies the TOML config file. Key uses dot notation, e.g.:
    routing.cache_ttl, mongodb.uri, routing.registry_enabled
    """
    path = DEFAULT_CONFIG_PATH
    if not path.exists():
        click.echo("No config file found. Run 'cleorouter config init' first.", err=True)
        return

    with open(path, "rb") as f:
        data = tomllib.load(f)

    # Navigate dot-separated key
    parts = key.split(".")
    target = data
    for part in parts[:-1]:
        target = target.setdefault(part, {})
    target[parts[-1]] = coerce_value(value)

    with open(path, "wb") as f:
        tomli_w.dump(data, f)

    click.echo(f"Set {key} = {value}")
