"""Tests for DelegationService with mocked suggestion and a real cache."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from cleorouter.models.complexity import Recommendation
from cleorouter.services.delegation import (
    DelegationService,
    find_explicit_mention,
    make_delegation_decision,
)
from cleorouter.services.routing_cache import RoutingCache
from cleorouter.services.suggestion import AgentSuggester, RegistryLookup

COMBO_MESSAGE = "schedule a meeting and send an email to the team"


@pytest.fixture
def registry():
    reg = AsyncMock()
    reg.get_all_agents.return_value = []
    return reg


@pytest.fixture
def service(registry):
    return DelegationService(suggester=AgentSuggester(lookup=RegistryLookup(registry)))


class TestEarlyExit:
    @pytest.mark.asyncio
    async def test_explicit_mention(self, service, registry):
        decision = await service.decide("@toby, fix this bug")
        assert decision.early_exit is True
        assert decision.should_delegate is True
        assert decision.target_agent == "toby-technical"
        assert decision.complexity.score == 99
        assert decision.complexity.factors == ("explicit_mention",)
        assert decision.confidence == 0.99
        registry.get_all_agents.assert_not_called()

    @pytest.mark.asyncio
    async def test_spanish_mention(self, service):
        decision = await service.decide("Pregúntale a Apu por las noticias de hoy")
        assert decision.early_exit
        assert decision.target_agent == "apu-support"

    def test_mention_patterns(self):
        assert find_explicit_mention("Astra, draft a reply") == ("astra-email", "astra,")
        assert find_explicit_mention("consulta con nora sobre esto") == ("nora-medical", "consulta con nora")
        assert find_explicit_mention("no agents here") is None


class TestStandardPath:
    @pytest.mark.asyncio
    async def test_direct(self, service):
        decision = await service.decide("hello")
        assert decision.should_delegate is False
        assert decision.early_exit is False
        assert decision.complexity.recommendation == Recommendation.DIRECT
        assert decision.reasoning.startswith("Simple query (score: 10)")

    @pytest.mark.asyncio
    async def test_delegate_with_suggestion(self, service):
        decision = await service.decide(COMBO_MESSAGE)
        assert decision.should_delegate is True
        assert decision.target_agent == "astra-email"
        assert decision.reasoning.startswith("Complex query (score: 85)")

    @pytest.mark.asyncio
    async def test_clarify_with_suggestion_delegates(self, service):
        decision = await service.decide("fix the bug")
        assert decision.complexity.recommendation == Recommendation.CLARIFY
        assert decision.should_delegate is True
        assert decision.target_agent == "toby-technical"
        assert "Clear specialist detected: toby-technical" in decision.reasoning

    @pytest.mark.asyncio
    async def test_clarify_without_suggestion(self, service):
        decision = await service.decide("tell me a joke")
        assert decision.should_delegate is False
        assert decision.target_agent is None
        assert decision.reasoning.endswith("Will handle directly with potential follow-up.")

    @pytest.mark.asyncio
    async def test_delegate_without_suggestion(self, service):
        decision = await service.decide("first plan it, then build it")
        assert decision.complexity.recommendation == Recommendation.DELEGATE
        assert decision.should_delegate is False

    @pytest.mark.asyncio
    async def test_registry_failure_degrades(self, registry):
        registry.get_all_agents.side_effect = RuntimeError("registry unavailable")
        service = DelegationService(suggester=AgentSuggester(lookup=RegistryLookup(registry)))
        decision = await service.decide("tell me a joke")
        assert decision.should_delegate is False

    @pytest.mark.asyncio
    async def test_module_helper(self):
        decision = await make_delegation_decision("@peter, build the budget sheet")
        assert decision.target_agent == "peter-financial"


class TestCaching:
    @pytest.fixture
    def suggester(self):
        s = AsyncMock()
        s.suggest.return_value = "astra-email"
        return s

    @pytest.mark.asyncio
    async def test_confident_decision_is_cached(self, suggester):
        cache = RoutingCache()
        service = DelegationService(suggester=suggester, cache=cache)

        first = await service.decide(COMBO_MESSAGE)
        second = await service.decide(COMBO_MESSAGE + "!")

        assert first.cached is False
        assert second.cached is True
        assert second.target_agent == "astra-email"
        suggester.suggest.assert_awaited_once()
        assert cache.get_stats().hits == 1

    @pytest.mark.asyncio
    async def test_low_confidence_not_cached(self):
        cache = RoutingCache()
        service = DelegationService(cache=cache)
        decision = await service.decide("fix the bug")
        assert decision.should_delegate
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_early_exit_not_cached(self):
        cache = RoutingCache()
        service = DelegationService(cache=cache)
        await service.decide("@toby, fix this bug")
        assert len(cache) == 0
        assert cache.get_stats().total_queries == 0

    @pytest.mark.asyncio
    async def test_cache_hit_on_direct_message_is_not_flagged(self):
        cache = RoutingCache()
        cache.set("what is a bug", "toby-technical", 0.9)
        service = DelegationService(cache=cache)

        decision = await service.decide("what is a bug?")

        assert decision.complexity.recommendation == Recommendation.DIRECT
        assert decision.should_delegate is False
        assert decision.cached is False
