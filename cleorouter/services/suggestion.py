"""Specialist suggestion: static keyword rules, then a registry name lookup."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Protocol

from cleorouter.models.agent import AgentProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuggestionRule:
    """Suggest ``agent_id`` when ``pattern`` is found in the lowercased message."""

    name: str
    pattern: re.Pattern
    agent_id: str

    def matches(self, message: str) -> bool:
        return self.pattern.search(message) is not None


# First match wins. Telegram is checked before generic social media so that
# "publica ... @channel" routes to the channel publisher.
STATIC_RULES: tuple[SuggestionRule, ...] = (
    SuggestionRule(
        "telegram",
        re.compile(r"(telegram|publica.*@[\w_]+|broadcast.*@[\w_]+|canal.*telegram|telegram.*channel)"),
        "jenn-community",
    ),
    SuggestionRule(
        "social",
        re.compile(
            r"(twitter|tweet|instagram|facebook|social\s+media|community|engagement|"
            r"post\s+on|publica|publish)"
        ),
        "jenn-community",
    ),
    SuggestionRule(
        "technical",
        re.compile(
            r"(fastapi|endpoint|api|programa|programación|programming|typescript|javascript|"
            r"node|python|backend|database|sql|deploy|docker|git|bug|error|stacktrace|exception)"
        ),
        "toby-technical",
    ),
    SuggestionRule(
        "research",
        re.compile(r"(research|analyze|investigate|news|market|stock|search|academic|scholar|serpapi)"),
        "apu-support",
    ),
    SuggestionRule(
        "notion",
        re.compile(r"(notion|workspace|page|database|organize|notes|knowledge\s+base)"),
        "ami-creative",
    ),
    SuggestionRule(
        "google_workspace",
        re.compile(r"(google\s+(docs|sheets|drive|calendar)|document|spreadsheet|productivity)"),
        "peter-financial",
    ),
    SuggestionRule(
        "ecommerce",
        re.compile(r"(shopify|store|product|price|inventory|sales|ecommerce|online\s+store)"),
        "emma-ecommerce",
    ),
    SuggestionRule(
        "finance",
        re.compile(r"(stock|market|finance|investment|analysis|financial|competitor|news|search)"),
        "apu-support",
    ),
    SuggestionRule(
        "email",
        re.compile(r"(email|gmail|send\s+message|draft|reply|communication|correspondence)"),
        "astra-email",
    ),
    SuggestionRule(
        "admin",
        re.compile(r"(calendar|schedule|meeting|appointment|admin|coordinate|organize)"),
        "ami-creative",
    ),
    SuggestionRule(
        "web_automation",
        re.compile(r"(browser|automation|scrape|form|screenshot|web\s+interaction)"),
        "wex-intelligence",
    ),
)


class AgentSource(Protocol):
    async def get_all_agents(self) -> list[AgentProfile]: ...


class StaticMatcher:
    """Synchronous keyword table lookup."""

    def __init__(self, rules: tuple[SuggestionRule, ...] = STATIC_RULES) -> None:
        self._rules = rules

    @property
    def rules(self) -> tuple[SuggestionRule, ...]:
        return self._rules

    def match_rule(self, message: str) -> SuggestionRule | None:
        low = message.lower()
        for rule in self._rules:
            if rule.matches(low):
                return rule
        return None

    def match(self, message: str) -> str | None:
        rule = self.match_rule(message)
        return rule.agent_id if rule else None


def agent_name_pattern(name: str) -> re.Pattern:
    """Whole-word match on an agent name, skipping ``@name`` social handles."""
    return re.compile(rf"(?<!@)\b{re.escape(name.lower())}\b", re.IGNORECASE)


class RegistryLookup:
    """Find a registered agent whose display name appears in the message."""

    def __init__(self, registry: AgentSource) -> None:
        self._registry = registry

    async def lookup(self, message: str) -> str | None:
        low = message.lower()
        try:
            agents = await self._registry.get_all_agents()
        except Exception:
            logger.exception("Error in dynamic agent suggestion")
            return None

        name_to_id: dict[str, str] = {}
        for agent in agents:
            if agent.name:
                name_to_id[agent.name.lower()] = agent.id

        for name, agent_id in name_to_id.items():
            if agent_name_pattern(name).search(low):
                logger.debug("Dynamic delegation: found agent mention %s -> %s", name, agent_id)
                return agent_id
        return None


class AgentSuggester:
    """Compose the static matcher with the registry lookup.

    The registry is consulted only when no static rule fires.
    """

    def __init__(
        self,
        matcher: StaticMatcher | None = None,
        lookup: RegistryLookup | None = None,
    ) -> None:
        self._matcher = matcher or StaticMatcher()
        self._lookup = lookup

    async def suggest(self, message: str) -> str | None:
        static = self._matcher.match(message)
        if static:
            return static
        if self._lookup is None:
            return None
        return await self._lookup.lookup(message)


async def suggest_agent(message: str, registry: AgentSource | None = None) -> str | None:
    """Suggest a specialist id for a message, or None."""
    lookup = RegistryLookup(registry) if registry is not None else None
    return await AgentSuggester(lookup=lookup).suggest(message)
