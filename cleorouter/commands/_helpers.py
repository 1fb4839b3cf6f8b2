"""CLI helpers for connecting to the RPC server."""

from __future__ import annotations

import asyncio

from cleorouter.config import load_config


def run(coro):
    """Run an async function from sync context."""
    return asyncio.run(coro)


def get_socket_path() -> str:
    """Return the socket path from config or default."""
    return load_config().server.resolved_socket_path


def get_pid_path() -> str:
    """Return the PID file path from config or default."""
    return load_config().server.resolved_pid_file


async def get_remote_context():
    """Create and connect a RemoteContext. Raises if server not running."""
    from cleorouter.remote_context import RemoteContext

    ctx = RemoteContext(get_socket_path())
    try:
        await ctx.initialize()
    except (ConnectionRefusedError, FileNotFoundError, OSError) as e:
        raise SystemExit("Server not running. Start with: cleorouter server start") from e
    return ctx


async def get_local_context():
    """Create an in-process AppContext (its own fresh routing cache)."""
    from cleorouter.context import AppContext

    ctx = AppContext()
    await ctx.initialize()
    return ctx
