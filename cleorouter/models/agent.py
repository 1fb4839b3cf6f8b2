"""Specialist agent domain model."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify_agent_name(name: str) -> str:
    """Derive an agent id from a display name: ``"Dr. Who"`` -> ``"dr-who"``."""
    return _SLUG_RE.sub("-", name.lower()).strip("-")


@dataclass(frozen=True)
class AgentProfile:
    """A named specialist persona that the assistant can delegate to."""

    id: str
    name: str
    description: str = ""
    tags: tuple[str, ...] = ()
    tools: tuple[str, ...] = ()
    builtin: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("AgentProfile id cannot be empty")
        if not self.name:
            raise ValueError("AgentProfile name cannot be empty")

    def to_doc(self) -> dict:
        """Serialize to MongoDB document. The agent id is stored as ``agent_id``."""
        return {
            "agent_id": self.id,
            "name": self.name,
            "description": self.description,
            "tags": list(self.tags),
            "tools": list(self.tools),
            "created_at": self.created_at,
        }

    @classmethod
    def from_doc(cls, doc: dict) -> AgentProfile:
        return cls(
            id=doc["agent_id"],
            name=doc["name"],
            description=doc.get("description", ""),
            tags=tuple(doc.get("tags", [])),
            tools=tuple(doc.get("tools", [])),
            created_at=doc.get("created_at", datetime.now(timezone.utc)),
        )
