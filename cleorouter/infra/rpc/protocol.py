"""JSON-RPC 2.0 message framing over newline-delimited JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

MAX_MESSAGE_CHARS = 20_000
# json.dumps escapes non-ASCII, up to 12 bytes per code point (surrogate pairs)
MAX_LINE_BYTES = MAX_MESSAGE_CHARS * 12 + 4096


class RpcError(RuntimeError):
    """An error response, raised by handlers on the server and by the client."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.message = message


@dataclass(frozen=True)
class JsonRpcRequest:
    """JSON-RPC 2.0 request. A request without an id is a notification."""

    method: str
    params: dict[str, Any] = field(default_factory=dict)
    id: int | str | None = 0

    @property
    def is_notification(self) -> bool:
        return self.id is None

    def to_dict(self) -> dict:
        d: dict = {"jsonrpc": "2.0", "method": self.method, "params": self.params}
        if self.id is not None:
            d["id"] = self.id
        return d


@dataclass(frozen=True)
class JsonRpcResponse:
    """JSON-RPC 2.0 response (success or error)."""

    id: int | str | None = 0
    result: Any = None
    error: dict | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise RpcError(
                self.error.get("code", INTERNAL_ERROR),
                self.error.get("message", "Unknown error"),
            )

    def to_dict(self) -> dict:
        d: dict = {"jsonrpc": "2.0", "id": self.id}
        if self.error is not None:
            d["error"] = self.error
        else:
            d["result"] = self.result
        return d


def encode(msg: JsonRpcRequest | JsonRpcResponse) -> bytes:
    """Encode a JSON-RPC message as a newline-delimited JSON bytes line."""
    return json.dumps(msg.to_dict(), default=str).encode() + b"\n"


def decode(line: bytes) -> JsonRpcRequest | JsonRpcResponse:
    """Decode one JSON line. Raises ValueError on anything that is not JSON-RPC."""
    data = json.loads(line)
    if not isinstance(data, dict):
        raise ValueError("JSON-RPC message must be an object")

    if "method" in data:
        params = data.get("params", {})
        if not isinstance(params, dict):
            raise ValueError("Only named params are supported")
        return JsonRpcRequest(method=data["method"], params=params, id=data.get("id"))

    if "result" in data or "error" in data:
        return JsonRpcResponse(
            id=data.get("id"),
            result=data.get("result"),
            error=data.get("error"),
        )
    raise ValueError("Neither a request nor a response")


def make_error(id: int | str | None, code: int, message: str) -> JsonRpcResponse:
    """Create a JSON-RPC error response."""
    return JsonRpcResponse(id=id, error={"code": code, "message": message})
