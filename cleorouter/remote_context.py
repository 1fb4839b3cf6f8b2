"""RemoteContext: routes CLI calls to the running server over RPC."""

from __future__ import annotations

import logging

from cleorouter.infra.rpc.client import RpcClient
from cleorouter.models.complexity import ComplexityScore
from cleorouter.models.decision import DelegationDecision
from cleorouter.models.routing_cache import CacheStats, RoutingCacheEntry

logger = logging.getLogger(__name__)


class RemoteContext:
    """Proxy for the server's services.

    The routing cache only exists inside the server process, so cache commands
    always go through here.
    """

    def __init__(self, socket_path: str) -> None:
        self._client = RpcClient(socket_path)
        self._routing: RemoteRoutingService | None = None
        self._cache: RemoteRoutingCache | None = None
        self._agents: RemoteAgentRegistry | None = None

    async def initialize(self) -> None:
        """Connect to the server and verify it's running."""
        await self._client.connect()
        result = await self._client.call("server.ping")
        if result != "pong":
            raise RuntimeError("Server did not respond to ping")
        logger.info("RemoteContext connected to server")

    async def close(self) -> None:
        await self._client.close()
        logger.info("RemoteContext disconnected")

    @property
    def routing(self) -> RemoteRoutingService:
        if self._routing is None:
            self._routing = RemoteRoutingService(self._client)
        return self._routing

    @property
    def routing_cache(self) -> RemoteRoutingCache:
        if self._cache is None:
            self._cache = RemoteRoutingCache(self._client)
        return self._cache

    @property
    def agent_registry(self) -> RemoteAgentRegistry:
        if self._agents is None:
            self._agents = RemoteAgentRegistry(self._client)
        return self._agents


class RemoteRoutingService:
    """Routing calls over RPC."""

    def __init__(self, client: RpcClient) -> None:
        self._client = client

    async def analyze(self, message: str) -> ComplexityScore:
        return ComplexityScore.from_dict(await self._client.call("routing.analyze", message=message))

    async def suggest(self, message: str) -> str | None:
        return await self._client.call("routing.suggest", message=message)

    async def decide(self, message: str) -> DelegationDecision:
        data = await self._client.call("routing.decide", message=message)
        return DelegationDecision.from_dict(data)

    async def hint(self, message: str) -> tuple[DelegationDecision, str]:
        data = await self._client.call("routing.hint", message=message)
        return DelegationDecision.from_dict(data["decision"]), data["hint"]


class RemoteRoutingCache:
    """Proxy for the server's RoutingCache."""

    def __init__(self, client: RpcClient) -> None:
        self._client = client

    async def get_stats(self) -> CacheStats:
        return CacheStats.from_dict(await self._client.call("cache.stats"))

    async def get_top_entries(self, limit: int = 10) -> list[RoutingCacheEntry]:
        data = await self._client.call("cache.top", limit=limit)
        return [RoutingCacheEntry.from_dict(e) for e in data]

    async def clear(self) -> None:
        await self._client.call("cache.clear")

    async def cleanup(self) -> int:
        return await self._client.call("cache.cleanup")


class RemoteAgentRegistry:
    """Proxy for the server's AgentRegistry. Returns plain dicts."""

    def __init__(self, client: RpcClient) -> None:
        self._client = client

    async def list_agents(self) -> list[dict]:
        return await self._client.call("agents.list")

    async def add_agent(
        self,
        name: str,
        description: str = "",
        tags: tuple[str, ...] = (),
        tools: tuple[str, ...] = (),
    ) -> dict:
        return await self._client.call(
            "agents.add", name=name, description=description,
            tags=list(tags), tools=list(tools),
        )

    async def remove_agent(self, agent_id: str) -> bool:
        return await self._client.call("agents.remove", agent_id=agent_id)
