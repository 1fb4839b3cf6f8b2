"""Agent registry: built-in specialists plus user-defined agents."""

from __future__ import annotations

import logging

from cleorouter.infra.agents.builtin import BUILTIN_AGENTS, BUILTIN_IDS
from cleorouter.infra.db.agents import AgentRepo
from cleorouter.models.agent import AgentProfile, slugify_agent_name

logger = logging.getLogger(__name__)


class AgentRegistry:
    """Lists every agent the assistant can delegate to.

    Built-in specialists are always available. Custom agents live in the
    ``agents`` collection; without a repo the registry serves built-ins only.
    Repo errors propagate to the caller.
    """

    def __init__(self, repo: AgentRepo | None = None) -> None:
        self._repo = repo

    @property
    def has_custom_agents(self) -> bool:
        return self._repo is not None

    async def get_all_agents(self) -> list[AgentProfile]:
        """Built-ins first, then custom agents in creation order."""
        agents = list(BUILTIN_AGENTS)
        if self._repo is None:
            return agents

        for agent in await self._repo.list_all():
            if agent.id in BUILTIN_IDS:
                logger.warning("Ignoring custom agent shadowing built-in id: %s", agent.id)
                continue
            agents.append(agent)
        return agents

    async def get_agent(self, agent_id: str) -> AgentProfile | None:
        for agent in BUILTIN_AGENTS:
            if agent.id == agent_id:
                return agent
        if self._repo is None:
            return None
        return await self._repo.get(agent_id)

    async def add_agent(
        self,
        name: str,
        description: str = "",
        tags: tuple[str, ...] = (),
        tools: tuple[str, ...] = (),
    ) -> AgentProfile:
        """Create a custom agent. The id is derived from the display name."""
        if self._repo is None:
            raise RuntimeError("Custom agents require a MongoDB-backed registry")

        agent_id = slugify_agent_name(name)
        if not agent_id:
            raise ValueError(f"Cannot derive an agent id from name: {name!r}")
        if agent_id in BUILTIN_IDS or await self._repo.get(agent_id):
            raise ValueError(f"Agent already exists: {agent_id}")
        if await self._repo.find_by_name(name):
            raise ValueError(f"Agent name already in use: {name}")

        agent = AgentProfile(
            id=agent_id,
            name=name,
            description=description,
            tags=tags,
            tools=tools,
        )
        await self._repo.insert(agent)
        logger.info("Registered custom agent %s (%s)", agent.name, agent.id)
        return agent

    async def remove_agent(self, agent_id: str) -> bool:
        """Delete a custom agent. Built-in agents cannot be removed."""
        if agent_id in BUILTIN_IDS:
            raise ValueError(f"Cannot remove built-in agent: {agent_id}")
        if self._repo is None:
            return False
        removed = await self._repo.delete(agent_id)
        if removed:
            logger.info("Removed custom agent %s", agent_id)
        return removed
