"""Tests for delegation hint rendering."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from cleorouter.models.agent import AgentProfile
from cleorouter.services.delegation import DelegationService
from cleorouter.services.prompt_hint import (
    BASE_HINT,
    DelegationHintBuilder,
    build_delegation_hint,
    delegate_tool_name,
)


@pytest.fixture
def registry():
    reg = AsyncMock()
    reg.get_all_agents.return_value = [
        AgentProfile(id="toby-technical", name="Toby", builtin=True),
        AgentProfile(id="cleo.test", name="Cleo Test"),
    ]
    return reg


class TestToolName:
    def test_sanitizes_id(self):
        assert delegate_tool_name("toby-technical") == "delegate_to_toby_technical"
        assert delegate_tool_name("cleo.test 2") == "delegate_to_cleo_test_2"


class TestBuildHint:
    @pytest.mark.asyncio
    async def test_early_exit_is_mandatory(self):
        decision = await DelegationService().decide("@toby, fix this bug")
        hint = build_delegation_hint(decision)
        assert hint.startswith(BASE_HINT)
        assert "MANDATORY DELEGATION" in hint
        assert "Call ONLY the tool: delegate_to_toby_technical" in hint
        assert '"TOBY-TECHNICAL"' in hint

    @pytest.mark.asyncio
    async def test_smart_delegation(self):
        decision = await DelegationService().decide("fix the bug")
        hint = build_delegation_hint(decision, tool_name="delegate_to_toby")
        assert "SMART DELEGATION DECISION" in hint
        assert "Complexity Score: 30/100 (clarify)" in hint
        assert "Tool: delegate_to_toby" in hint

    @pytest.mark.asyncio
    async def test_direct_response(self):
        decision = await DelegationService().decide("hello")
        hint = build_delegation_hint(decision)
        assert "DIRECT RESPONSE" in hint
        assert "Complexity Score: 10/100 (direct)" in hint
        assert "delegate_to_toby" not in hint


class TestHintBuilder:
    @pytest.mark.asyncio
    async def test_resolves_by_name(self, registry):
        builder = DelegationHintBuilder(DelegationService(), registry=registry)
        assert await builder.resolve_tool_name("Cleo Test") == "delegate_to_cleo_test"

    @pytest.mark.asyncio
    async def test_unknown_agent_falls_back(self, registry):
        builder = DelegationHintBuilder(DelegationService(), registry=registry)
        assert await builder.resolve_tool_name("emma-ecommerce") == "delegate_to_emma_ecommerce"

    @pytest.mark.asyncio
    async def test_registry_failure_falls_back(self, registry):
        registry.get_all_agents.side_effect = ConnectionError("down")
        builder = DelegationHintBuilder(DelegationService(), registry=registry)
        assert await builder.resolve_tool_name("toby-technical") == "delegate_to_toby_technical"

    @pytest.mark.asyncio
    async def test_build(self, registry):
        builder = DelegationHintBuilder(DelegationService(), registry=registry)
        decision, hint = await builder.build("@toby, fix this bug")
        assert decision.early_exit
        assert "delegate_to_toby_technical" in hint
