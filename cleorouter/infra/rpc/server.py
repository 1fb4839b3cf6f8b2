"""Asyncio Unix socket JSON-RPC server for routing requests."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import TYPE_CHECKING

from cleorouter.infra.rpc.methods import MethodRegistry
from cleorouter.infra.rpc.protocol import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    MAX_LINE_BYTES,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    JsonRpcRequest,
    JsonRpcResponse,
    RpcError,
    decode,
    encode,
    make_error,
)

if TYPE_CHECKING:
    from cleorouter.context import AppContext

logger = logging.getLogger(__name__)


class RpcServer:
    """Serves routing decisions to chat front-ends on the same host."""

    def __init__(self, ctx: AppContext, socket_path: str) -> None:
        self._socket_path = socket_path
        self._registry = MethodRegistry(ctx)
        self._server: asyncio.Server | None = None

    @property
    def socket_path(self) -> str:
        return self._socket_path

    async def start(self) -> None:
        """Start listening on the Unix socket."""
        # Remove stale socket file
        try:
            os.unlink(self._socket_path)
        except FileNotFoundError:
            pass

        self._server = await asyncio.start_unix_server(
            self._handle_client,
            path=self._socket_path,
            limit=MAX_LINE_BYTES,
        )
        os.chmod(self._socket_path, 0o600)
        logger.info("RPC server listening on %s", self._socket_path)

    async def stop(self) -> None:
        """Stop the server and clean up the socket file."""
        if self._server:
            self._server.close()
            await self._server.wait_closed()
            self._server = None

        try:
            os.unlink(self._socket_path)
        except FileNotFoundError:
            pass
        logger.info("RPC server stopped")

    async def handle_line(self, line: bytes) -> JsonRpcResponse | None:
        """Turn one request line into a response; None for notifications."""
        try:
            msg = decode(line)
        except ValueError:
            return make_error(None, PARSE_ERROR, "Parse error")

        if not isinstance(msg, JsonRpcRequest):
            return make_error(None, INVALID_REQUEST, "Invalid request")
        if not isinstance(msg.method, str):
            return make_error(msg.id, INVALID_REQUEST, "Invalid request: method must be a string")

        if not self._registry.has_method(msg.method):
            if msg.is_notification:
                return None
            return make_error(msg.id, METHOD_NOT_FOUND, f"Method not found: {msg.method}")

        try:
            result = await self._registry.dispatch(msg.method, msg.params)
        except RpcError as e:
            resp = make_error(msg.id, e.code, e.message)
        except (KeyError, TypeError, ValueError) as e:
            resp = make_error(msg.id, INVALID_PARAMS, str(e))
        except Exception as e:
            logger.exception("Error dispatching %s", msg.method)
            resp = make_error(msg.id, INTERNAL_ERROR, str(e))
        else:
            resp = JsonRpcResponse(id=msg.id, result=result)

        return None if msg.is_notification else resp

    async def _handle_client(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> None:
        """Read JSON lines, dispatch, write responses until the client hangs up."""
        logger.debug("Client connected")
        try:
            while True:
                try:
                    line = await reader.readuntil(b"\n")
                except asyncio.IncompleteReadError as e:
                    # EOF; a final unterminated line is still a request
                    if not e.partial:
                        break
                    resp = await self.handle_line(e.partial)
                except asyncio.LimitOverrunError:
                    await _skip_line(reader)
                    resp = make_error(None, INVALID_REQUEST, "Request too large")
                else:
                    resp = await self.handle_line(line)

                if resp is not None:
                    writer.write(encode(resp))
                    await writer.drain()
        except asyncio.CancelledError:
            pass
        except ConnectionResetError:
            logger.debug("Client reset connection")
        except Exception:
            logger.exception("Error handling client")
        finally:
            try:
                writer.close()
                await writer.wait_closed()
            except Exception:
                pass
            logger.debug("Client disconnected")


async def _skip_line(reader: asyncio.StreamReader) -> None:
    """Discard input up to and including the next newline."""
    while True:
        try:
            await reader.readuntil(b"\n")
            return
        except asyncio.LimitOverrunError as e:
            await reader.readexactly(e.consumed)
        except asyncio.IncompleteReadError:
            return
