"""Click CLI definitions - main entry point."""

from __future__ import annotations

import logging
import sys

import click

from cleorouter.commands.agents_cmd import agents_group
from cleorouter.commands.cache_cmd import cache_group
from cleorouter.commands.config_cmd import config_group
from cleorouter.commands.route_cmd import route_group
from cleorouter.commands.server_cmd import server_group


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, debug: bool) -> None:
    """cleorouter - delegation routing for specialist agents."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


cli.add_command(route_group, "route")
cli.add_command(cache_group, "cache")
cli.add_command(agents_group, "agents")
cli.add_command(config_group, "config")
cli.add_command(server_group, "server")


if __name__ == "__main__":
    cli()
