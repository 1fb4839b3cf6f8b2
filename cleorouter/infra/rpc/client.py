"""Asyncio Unix socket JSON-RPC client."""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Any

from cleorouter.infra.rpc.protocol import (
    MAX_LINE_BYTES,
    JsonRpcRequest,
    JsonRpcResponse,
    decode,
    encode,
)

logger = logging.getLogger(__name__)


class RpcClient:
    """Asyncio Unix domain socket JSON-RPC 2.0 client."""

    def __init__(self, socket_path: str) -> None:
        self._socket_path = socket_path
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._id_counter = itertools.count(1)
        self._lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self._writer is not None and not self._writer.is_closing()

    async def connect(self) -> None:
        self._reader, self._writer = await asyncio.open_unix_connection(
            self._socket_path, limit=MAX_LINE_BYTES,
        )
        logger.debug("Connected to RPC server at %s", self._socket_path)

    async def close(self) -> None:
        if self._writer:
            try:
                self._writer.close()
                await self._writer.wait_closed()
            except Exception:
                pass
            self._writer = None
            self._reader = None
        logger.debug("RPC client disconnected")

    async def call(self, method: str, **params: Any) -> Any:
        """Send a request and return its result.

        Raises RpcError on error responses. Reconnects once on connection failure.
        """
        async with self._lock:
            try:
                return await self._call_inner(method, params)
            except (ConnectionError, OSError):
                logger.debug("Connection lost, reconnecting...")
                await self.close()
                return await self._call_inner(method, params)

    async def _call_inner(self, method: str, params: dict) -> Any:
        if not self.connected:
            await self.connect()
        assert self._reader is not None
        assert self._writer is not None

        request = JsonRpcRequest(method=method, params=params, id=next(self._id_counter))
        self._writer.write(encode(request))
        await self._writer.drain()

        line = await self._reader.readline()
        if not line:
            raise ConnectionError("Server closed connection")

        msg = decode(line)
        if not isinstance(msg, JsonRpcResponse):
            raise RuntimeError(f"Expected response, got {type(msg).__name__}")
        msg.raise_for_error()
        return msg.result
