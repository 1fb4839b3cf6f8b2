"""Delegation decision: early-exit mentions, then complexity + suggestion."""

from __future__ import annotations

import logging
from dataclasses import replace

from cleorouter.models.complexity import ComplexityScore, Recommendation, explicit_mention_score
from cleorouter.models.decision import DelegationDecision
from cleorouter.services.complexity import analyze_task_complexity
from cleorouter.services.routing_cache import RoutingCache
from cleorouter.services.suggestion import AgentSuggester

logger = logging.getLogger(__name__)

_MENTION_TEMPLATES = ("@{name}", "{name},", "pregúntale a {name}", "consulta con {name}")

_MENTION_AGENTS = (
    ("jenn-community", "jenn"),
    ("ami-creative", "ami"),
    ("toby-technical", "toby"),
    ("peter-financial", "peter"),
    ("apu-support", "apu"),
    ("wex-intelligence", "wex"),
    ("astra-email", "astra"),
    ("nora-medical", "nora"),
    ("iris-insights", "iris"),
)

# Checked in order; the first phrase contained in the message wins.
EXPLICIT_MENTIONS: tuple[tuple[str, tuple[str, ...]], ...] = tuple(
    (agent_id, tuple(t.format(name=name) for t in _MENTION_TEMPLATES))
    for agent_id, name in _MENTION_AGENTS
)


def find_explicit_mention(message: str) -> tuple[str, str] | None:
    """Return ``(agent_id, phrase)`` for the first explicit mention, if any."""
    low = message.lower()
    for agent_id, phrases in EXPLICIT_MENTIONS:
        for phrase in phrases:
            if phrase in low:
                return agent_id, phrase
    return None


def _decide(complexity: ComplexityScore, suggested: str | None) -> DelegationDecision:
    score = complexity.score
    if complexity.recommendation == Recommendation.DIRECT:
        return DelegationDecision(
            should_delegate=False,
            reasoning=f"Simple query (score: {score}): {complexity.reasoning}",
            complexity=complexity,
        )

    if complexity.recommendation == Recommendation.DELEGATE and suggested:
        return DelegationDecision(
            should_delegate=True,
            target_agent=suggested,
            reasoning=(
                f"Complex query (score: {score}) requiring {suggested} expertise: "
                f"{complexity.reasoning}"
            ),
            complexity=complexity,
        )

    # A clear specialist match outweighs an ambiguous complexity score
    if complexity.recommendation == Recommendation.CLARIFY and suggested:
        return DelegationDecision(
            should_delegate=True,
            target_agent=suggested,
            reasoning=(
                f"Moderate complexity (score: {score}). Clear specialist detected: "
                f"{suggested}. Delegating for better accuracy."
            ),
            complexity=complexity,
        )

    return DelegationDecision(
        should_delegate=False,
        reasoning=(
            f"Moderate complexity (score: {score}): {complexity.reasoning}. "
            "Will handle directly with potential follow-up."
        ),
        complexity=complexity,
    )


class DelegationService:
    """Decides whether a chat message should go to a specialist agent."""

    def __init__(
        self,
        suggester: AgentSuggester | None = None,
        cache: RoutingCache | None = None,
    ) -> None:
        self._suggester = suggester or AgentSuggester()
        self._cache = cache

    @property
    def cache(self) -> RoutingCache | None:
        return self._cache

    async def decide(self, message: str) -> DelegationDecision:
        mention = find_explicit_mention(message)
        if mention is not None:
            agent_id, phrase = mention
            logger.info("Early exit: explicit mention %r -> %s", phrase, agent_id)
            return DelegationDecision(
                should_delegate=True,
                target_agent=agent_id,
                reasoning=(
                    f'Early exit: Explicit mention detected ("{phrase}"). '
                    "Score: 0.99 (skip AI analysis)"
                ),
                complexity=explicit_mention_score(),
                early_exit=True,
            )

        complexity = analyze_task_complexity(message)

        cached_agent = self._cache.get_cached(message) if self._cache is not None else None
        if cached_agent is not None:
            suggested: str | None = cached_agent
        else:
            suggested = await self._suggester.suggest(message)

        decision = _decide(complexity, suggested)
        if cached_agent is not None:
            if decision.should_delegate:
                decision = replace(decision, cached=True)
        elif self._cache is not None and decision.should_delegate:
            self._cache.set(message, decision.target_agent, decision.confidence)

        logger.debug(
            "Delegation decision: score=%d route=%s delegate=%s target=%s",
            complexity.score,
            complexity.recommendation.value,
            decision.should_delegate,
            decision.target_agent,
        )
        return decision


async def make_delegation_decision(
    message: str,
    suggester: AgentSuggester | None = None,
    cache: RoutingCache | None = None,
) -> DelegationDecision:
    """One-shot decision without a long-lived service."""
    return await DelegationService(suggester=suggester, cache=cache).decide(message)
