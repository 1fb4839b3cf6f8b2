"""Tests for static and registry-based agent suggestion."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from cleorouter.models.agent import AgentProfile
from cleorouter.services.suggestion import (
    AgentSuggester,
    RegistryLookup,
    StaticMatcher,
    agent_name_pattern,
    suggest_agent,
)


@pytest.fixture
def registry():
    reg = AsyncMock()
    reg.get_all_agents.return_value = [
        AgentProfile(id="toby-technical", name="Toby", builtin=True),
        AgentProfile(id="cleo-test", name="cleo_test"),
        AgentProfile(id="marvin", name="Marvin"),
        AgentProfile(id="max", name="Max"),
    ]
    return reg


class TestStaticMatcher:
    @pytest.mark.parametrize(
        "message,agent_id",
        [
            ("Post this update on Telegram", "jenn-community"),
            ("publica las novedades del mes", "jenn-community"),
            ("fix the bug in my python script", "toby-technical"),
            ("investigate the latest news", "apu-support"),
            ("create a shopify product listing", "emma-ecommerce"),
            ("draft a reply to my landlord", "astra-email"),
            ("automate the browser to take a screenshot", "wex-intelligence"),
        ],
    )
    def test_match(self, message, agent_id):
        assert StaticMatcher().match(message) == agent_id

    def test_no_match(self):
        assert StaticMatcher().match("tell me a joke") is None

    def test_telegram_handle_checked_before_social(self):
        matcher = StaticMatcher()
        assert matcher.match_rule("publica en @mi_canal las novedades").name == "telegram"
        assert matcher.match_rule("publica las novedades del mes").name == "social"

    def test_first_rule_wins(self):
        # "search" is in both the research and finance tables; research comes first
        assert StaticMatcher().match_rule("search for competitor pricing").name == "research"


class TestRegistryLookup:
    @pytest.mark.asyncio
    async def test_finds_custom_agent_name(self, registry):
        lookup = RegistryLookup(registry)
        assert await lookup.lookup("ask cleo_test about it") == "cleo-test"

    @pytest.mark.asyncio
    async def test_skips_social_handles(self, registry):
        lookup = RegistryLookup(registry)
        assert await lookup.lookup("Say thanks to @cleo_test for the help") is None

    @pytest.mark.asyncio
    async def test_case_insensitive(self, registry):
        lookup = RegistryLookup(registry)
        assert await lookup.lookup("Can MARVIN help me?") == "marvin"

    @pytest.mark.asyncio
    async def test_whole_word_only(self, registry):
        lookup = RegistryLookup(registry)
        assert await lookup.lookup("maximum effort") is None

    @pytest.mark.asyncio
    async def test_registry_failure_returns_none(self, registry):
        registry.get_all_agents.side_effect = ConnectionError("mongo down")
        lookup = RegistryLookup(registry)
        assert await lookup.lookup("ask cleo_test about it") is None

    def test_name_pattern_escapes_regex(self):
        pattern = agent_name_pattern("R2.D2")
        assert pattern.search("hey r2.d2 there")
        assert not pattern.search("hey r2xd2 there")


class TestAgentSuggester:
    @pytest.mark.asyncio
    async def test_static_match_skips_registry(self, registry):
        suggester = AgentSuggester(lookup=RegistryLookup(registry))
        assert await suggester.suggest("fix the bug") == "toby-technical"
        registry.get_all_agents.assert_not_called()

    @pytest.mark.asyncio
    async def test_falls_back_to_registry(self, registry):
        suggester = AgentSuggester(lookup=RegistryLookup(registry))
        assert await suggester.suggest("ask cleo_test about it") == "cleo-test"
        registry.get_all_agents.assert_called_once()

    @pytest.mark.asyncio
    async def test_without_registry(self):
        assert await AgentSuggester().suggest("tell me a joke") is None

    @pytest.mark.asyncio
    async def test_suggest_agent_helper(self, registry):
        assert await suggest_agent("fix the bug") == "toby-technical"
        assert await suggest_agent("Can Marvin help me?", registry) == "marvin"
