"""CLI handlers for server commands: start, stop, status."""

from __future__ import annotations

import asyncio
import os
import signal

import click

from cleorouter.commands._helpers import get_pid_path, get_socket_path, run


@click.group("server")
def server_group():
    """Manage the routing server."""
    pass


@server_group.command("start")
def server_start():
    """Start the routing server in the foreground."""

    async def _start():
        from cleorouter.context import AppContext
        from cleorouter.infra.rpc.server import RpcServer

        socket_path = get_socket_path()
        pid_path = get_pid_path()

        with open(pid_path, "w") as f:
            f.write(str(os.getpid()))

        ctx = AppContext()
        rpc_server = RpcServer(ctx, socket_path)
        try:
            click.echo(f"Initializing server (pid={os.getpid()})...")
            await ctx.initialize()
            if ctx.mongo is not None:
                click.echo("MongoDB connected")
            else:
                click.echo("Custom agents unavailable, using built-in agents only")

            ctx.cache_sweeper.start()
            await rpc_server.start()
            click.echo(f"RPC server listening on {socket_path}")
            click.echo("Server ready")

            stop_event = asyncio.Event()
            loop = asyncio.get_running_loop()
            for signum in (signal.SIGTERM, signal.SIGINT):
                loop.add_signal_handler(signum, stop_event.set)

            await stop_event.wait()
            click.echo("\nShutting down...")
        finally:
            await rpc_server.stop()
            await ctx.close()
            try:
                os.unlink(pid_path)
            except FileNotFoundError:
                pass
            click.echo("Server stopped")

    run(_start())


@server_group.command("stop")
def server_stop():
    """Stop the running server."""
    pid_path = get_pid_path()

    try:
        with open(pid_path) as f:
            pid = int(f.read().strip())
    except FileNotFoundError:
        click.echo("Server not running (no PID file found)")
        return
    except ValueError:
        click.echo("Invalid PID file", err=True)
        return

    try:
        os.kill(pid, signal.SIGTERM)
        click.echo(f"Sent SIGTERM to server (pid={pid})")
    except ProcessLookupError:
        click.echo("Server process not found (stale PID file)")
        try:
            os.unlink(pid_path)
        except FileNotFoundError:
            pass


@server_group.command("status")
def server_status():
    """Check if the server is running."""

    async def _status():
        from cleorouter.infra.rpc.client import RpcClient

        client = RpcClient(get_socket_path())
        try:
            await client.connect()
            result = await client.call("server.status")
            click.echo("Server: running")
            for key, value in result.items():
                click.echo(f"  {key}: {value}")
        except (ConnectionRefusedError, FileNotFoundError, OSError):
            click.echo("Server: not running")
        finally:
            await client.close()

    run(_status())
