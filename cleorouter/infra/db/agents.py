"""Custom agent repository - MongoDB CRUD for user-defined specialists."""

from __future__ import annotations

import logging
import re

from cleorouter.models.agent import AgentProfile

logger = logging.getLogger(__name__)


class AgentRepo:
    """CRUD operations for custom agents in MongoDB."""

    COLLECTION = "agents"

    def __init__(self, db) -> None:
        self._col = db[self.COLLECTION]

    async def insert(self, agent: AgentProfile) -> AgentProfile:
        """Insert a new custom agent."""
        await self._col.insert_one(agent.to_doc())
        return agent

    async def list_all(self) -> list[AgentProfile]:
        """List all custom agents, oldest first."""
        cursor = self._col.find().sort("created_at", 1)
        return [AgentProfile.from_doc(doc) async for doc in cursor]

    async def get(self, agent_id: str) -> AgentProfile | None:
        doc = await self._col.find_one({"agent_id": agent_id})
        return AgentProfile.from_doc(doc) if doc else None

    async def find_by_name(self, name: str) -> AgentProfile | None:
        """Case-insensitive exact match on display name."""
        doc = await self._col.find_one(
            {"name": {"$regex": f"^{re.escape(name)}$", "$options": "i"}}
        )
        return AgentProfile.from_doc(doc) if doc else None

    async def delete(self, agent_id: str) -> bool:
        result = await self._col.delete_one({"agent_id": agent_id})
        logger.debug("Deleted agent %s: %s", agent_id, result.deleted_count)
        return result.deleted_count > 0
