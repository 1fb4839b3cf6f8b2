"""CLI handlers for specialist agents."""

from __future__ import annotations

import click

from cleorouter.commands._helpers import get_remote_context, run


@click.group("agents")
def agents_group():
    """Manage specialist agents."""
    pass


@agents_group.command("list")
def agents_list():
    """List built-in and custom agents."""

    async def _list():
        ctx = await get_remote_context()
        try:
            agents = await ctx.agent_registry.list_agents()
            for a in agents:
                kind = "builtin" if a["builtin"] else "custom"
                click.echo(f"  {a['id']:<20} {a['name']:<12} [{kind}] {a['description'][:50]}")
        finally:
            await ctx.close()

    run(_list())


@agents_group.command("add")
@click.argument("name")
@click.option("--description", "-d", default="", help="What the agent does")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable)")
@click.option("--tool", "tools", multiple=True, help="Tool name (repeatable)")
def agents_add(name: str, description: str, tags: tuple[str, ...], tools: tuple[str, ...]):
    """Register a custom agent called NAME."""

    async def _add():
        ctx = await get_remote_context()
        try:
            agent = await ctx.agent_registry.add_agent(
                name=name, description=description, tags=tags, tools=tools,
            )
            click.echo(f"Registered agent: {agent['name']} (id={agent['id']})")
        except RuntimeError as e:
            click.echo(f"Error: {e}", err=True)
        finally:
            await ctx.close()

    run(_add())


@agents_group.command("remove")
@click.argument("agent_id")
def agents_remove(agent_id: str):
    """Remove the custom agent AGENT_ID."""

    async def _remove():
        ctx = await get_remote_context()
        try:
            if await ctx.agent_registry.remove_agent(agent_id):
                click.echo(f"Removed agent: {agent_id}")
            else:
                click.echo(f"Agent not found: {agent_id}", err=True)
        except RuntimeError as e:
            click.echo(f"Error: {e}", err=True)
        finally:
            await ctx.close()

    run(_remove())
