"""RPC method registry: maps JSON-RPC method names to AppContext service calls."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cleorouter.infra.rpc.protocol import MAX_MESSAGE_CHARS
from cleorouter.services.complexity import analyze_task_complexity

if TYPE_CHECKING:
    from cleorouter.context import AppContext

logger = logging.getLogger(__name__)


class MethodRegistry:
    """Dispatch table mapping RPC method names to service calls."""

    def __init__(self, ctx: AppContext) -> None:
        self._ctx = ctx
        self._methods: dict[str, Any] = {
            "server.ping": self._server_ping,
            "server.status": self._server_status,
            "routing.analyze": self._routing_analyze,
            "routing.suggest": self._routing_suggest,
            "routing.decide": self._routing_decide,
            "routing.hint": self._routing_hint,
            "cache.stats": self._cache_stats,
            "cache.top": self._cache_top,
            "cache.clear": self._cache_clear,
            "cache.cleanup": self._cache_cleanup,
            "agents.list": self._agents_list,
            "agents.add": self._agents_add,
            "agents.remove": self._agents_remove,
        }

    @staticmethod
    def _message(params: dict) -> str:
        """Validate and return the ``message`` param."""
        message = params.get("message")
        if not isinstance(message, str):
            raise ValueError("Missing required parameter: message")
        if len(message) > MAX_MESSAGE_CHARS:
            raise ValueError(f"message too long (max {MAX_MESSAGE_CHARS} chars)")
        return message

    async def dispatch(self, method: str, params: dict) -> Any:
        """Dispatch an RPC method call. Returns serializable result."""
        handler = self._methods.get(method)
        if handler is None:
            raise ValueError(f"Unknown method: {method}")
        return await handler(params)

    def has_method(self, method: str) -> bool:
        return method in self._methods

    @property
    def method_names(self) -> list[str]:
        return sorted(self._methods)

    # --- Server ---

    async def _server_ping(self, params: dict) -> str:
        return "pong"

    async def _server_status(self, params: dict) -> dict:
        return {
            "status": "running",
            "custom_agents": self._ctx.agent_registry.has_custom_agents,
            "sweeper_running": self._ctx.cache_sweeper.is_running,
            "cache": self._ctx.routing_cache.get_stats().to_dict(),
        }

    # --- Routing ---

    async def _routing_analyze(self, params: dict) -> dict:
        return analyze_task_complexity(self._message(params)).to_dict()

    async def _routing_suggest(self, params: dict) -> str | None:
        return await self._ctx.suggester.suggest(self._message(params))

    async def _routing_decide(self, params: dict) -> dict:
        decision = await self._ctx.delegation_service.decide(self._message(params))
        return decision.to_dict()

    async def _routing_hint(self, params: dict) -> dict:
        decision, hint = await self._ctx.hint_builder.build(self._message(params))
        return {"decision": decision.to_dict(), "hint": hint}

    # --- Cache ---

    async def _cache_stats(self, params: dict) -> dict:
        return self._ctx.routing_cache.get_stats().to_dict()

    async def _cache_top(self, params: dict) -> list[dict]:
        limit = int(params.get("limit", 10))
        if limit < 1:
            raise ValueError("limit must be a positive integer")
        return [e.to_dict() for e in self._ctx.routing_cache.get_top_entries(limit)]

    async def _cache_clear(self, params: dict) -> bool:
        self._ctx.routing_cache.clear()
        return True

    async def _cache_cleanup(self, params: dict) -> int:
        return self._ctx.routing_cache.cleanup()

    # --- Agents ---

    async def _agents_list(self, params: dict) -> list[dict]:
        agents = await self._ctx.agent_registry.get_all_agents()
        return [
            {
                "id": a.id,
                "name": a.name,
                "description": a.description,
                "tags": list(a.tags),
                "tools": list(a.tools),
                "builtin": a.builtin,
            }
            for a in agents
        ]

    async def _agents_add(self, params: dict) -> dict:
        name = params.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Missing or empty required parameter: name")
        agent = await self._ctx.agent_registry.add_agent(
            name=name.strip(),
            description=params.get("description", ""),
            tags=tuple(params.get("tags", [])),
            tools=tuple(params.get("tools", [])),
        )
        return {"id": agent.id, "name": agent.name}

    async def _agents_remove(self, params: dict) -> bool:
        return await self._ctx.agent_registry.remove_agent(params["agent_id"])
