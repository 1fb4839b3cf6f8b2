"""MongoDB index creation."""

from __future__ import annotations

import logging

import pymongo

logger = logging.getLogger(__name__)


async def run_migrations(db) -> None:
    """Create indexes on startup."""
    logger.info("Running MongoDB migrations...")

    agents = db["agents"]
    await agents.create_index([("agent_id", pymongo.ASCENDING)], unique=True)
    await agents.create_index([("name", pymongo.ASCENDING)])

    logger.info("MongoDB migrations complete")
