"""CLI handlers for the server's routing cache."""

from __future__ import annotations

import click

from cleorouter.commands._helpers import get_remote_context, run


@click.group("cache")
def cache_group():
    """Inspect the server's routing cache."""
    pass


@cache_group.command("stats")
def cache_stats():
    """Show hit/miss counters."""

    async def _stats():
        ctx = await get_remote_context()
        try:
            stats = await ctx.routing_cache.get_stats()
            click.echo(f"Entries: {stats.cache_size}")
            click.echo(f"  Queries: {stats.total_queries}")
            click.echo(f"  Hits: {stats.hits}")
            click.echo(f"  Misses: {stats.misses}")
            click.echo(f"  Hit rate: {stats.hit_rate:.2f}%")
        finally:
            await ctx.close()

    run(_stats())


@cache_group.command("top")
@click.option("--limit", "-l", default=10, help="Max entries")
def cache_top(limit: int):
    """Show the most-hit cached routings."""

    async def _top():
        ctx = await get_remote_context()
        try:
            entries = await ctx.routing_cache.get_top_entries(limit)
            if not entries:
                click.echo("Cache is empty.")
                return
            for e in entries:
                click.echo(f"  {e.hit_count:>5}  {e.agent_id:<20} {e.input[:60]}")
        finally:
            await ctx.close()

    run(_top())


@cache_group.command("clear")
def cache_clear():
    """Drop all entries and reset counters."""

    async def _clear():
        ctx = await get_remote_context()
        try:
            await ctx.routing_cache.clear()
            click.echo("Routing cache cleared")
        finally:
            await ctx.close()

    run(_clear())


@cache_group.command("cleanup")
def cache_cleanup():
    """Remove expired entries now."""

    async def _cleanup():
        ctx = await get_remote_context()
        try:
            removed = await ctx.routing_cache.cleanup()
            click.echo(f"Removed {removed} expired entries")
        finally:
            await ctx.close()

    run(_cleanup())
