"""AppContext: wires DB, config, and services together."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cleorouter.config import AppConfig, load_config
from cleorouter.infra.db.client import MongoClient

if TYPE_CHECKING:
    from pathlib import Path

    from cleorouter.infra.agents.registry import AgentRegistry
    from cleorouter.infra.db.agents import AgentRepo
    from cleorouter.services.delegation import DelegationService
    from cleorouter.services.prompt_hint import DelegationHintBuilder
    from cleorouter.services.routing_cache import CacheSweeper, RoutingCache
    from cleorouter.services.suggestion import AgentSuggester

logger = logging.getLogger(__name__)


class AppContext:
    """Central wiring for all application dependencies.

    Lazily initializes services on first access. Call `initialize()` to set up
    the database connection; without it (or when MongoDB is unreachable) the
    agent registry serves built-in specialists only.
    """

    def __init__(self, config: AppConfig | None = None, config_path: Path | None = None) -> None:
        self.config = config or load_config(config_path)
        self._mongo: MongoClient | None = None
        self._agent_repo: AgentRepo | None = None
        self._agent_registry: AgentRegistry | None = None
        self._routing_cache: RoutingCache | None = None
        self._cache_sweeper: CacheSweeper | None = None
        self._suggester: AgentSuggester | None = None
        self._delegation_service: DelegationService | None = None
        self._hint_builder: DelegationHintBuilder | None = None

    async def initialize(self) -> None:
        """Connect to MongoDB and run migrations if custom agents are enabled."""
        from cleorouter.infra.db.migrations import run_migrations

        if not self.config.routing.registry_enabled:
            logger.info("AppContext initialized (registry disabled)")
            return

        mongo = MongoClient(
            uri=self.config.mongodb.uri,
            database=self.config.mongodb.database,
        )
        if not await mongo.ping():
            logger.warning("MongoDB unreachable, serving built-in agents only")
            mongo.close()
            return

        self._mongo = mongo
        await run_migrations(self._mongo.db)
        logger.info("AppContext initialized")

    async def close(self) -> None:
        """Stop background work and close connections."""
        if self._cache_sweeper is not None:
            await self._cache_sweeper.stop()
        if self._mongo:
            self._mongo.close()
        logger.info("AppContext closed")

    @property
    def mongo(self) -> MongoClient | None:
        return self._mongo

    @property
    def agent_repo(self) -> AgentRepo | None:
        if self._agent_repo is None and self._mongo is not None:
            from cleorouter.infra.db.agents import AgentRepo

            self._agent_repo = AgentRepo(self._mongo.db)
        return self._agent_repo

    @property
    def agent_registry(self) -> AgentRegistry:
        if self._agent_registry is None:
            from cleorouter.infra.agents.registry import AgentRegistry

            self._agent_registry = AgentRegistry(self.agent_repo)
        return self._agent_registry

    @property
    def routing_cache(self) -> RoutingCache:
        if self._routing_cache is None:
            from cleorouter.services.routing_cache import RoutingCache

            self._routing_cache = RoutingCache(
                ttl=self.config.routing.cache_ttl,
                max_size=self.config.routing.cache_max_size,
                min_confidence=self.config.routing.min_confidence,
            )
        return self._routing_cache

    @property
    def cache_sweeper(self) -> CacheSweeper:
        if self._cache_sweeper is None:
            from cleorouter.services.routing_cache import CacheSweeper

            self._cache_sweeper = CacheSweeper(
                self.routing_cache,
                interval=self.config.routing.cleanup_interval,
            )
        return self._cache_sweeper

    @property
    def suggester(self) -> AgentSuggester:
        if self._suggester is None:
            from cleorouter.services.suggestion import AgentSuggester, RegistryLookup

            self._suggester = AgentSuggester(lookup=RegistryLookup(self.agent_registry))
        return self._suggester

    @property
    def delegation_service(self) -> DelegationService:
        if self._delegation_service is None:
            from cleorouter.services.delegation import DelegationService

            self._delegation_service = DelegationService(
                suggester=self.suggester,
                cache=self.routing_cache,
            )
        return self._delegation_service

    @property
    def hint_builder(self) -> DelegationHintBuilder:
        if self._hint_builder is None:
            from cleorouter.services.prompt_hint import DelegationHintBuilder

            self._hint_builder = DelegationHintBuilder(
                self.delegation_service,
                registry=self.agent_registry,
            )
        return self._hint_builder
