"""Internal delegation hint appended to the assistant's system prompt."""

from __future__ import annotations

import logging
import re

from cleorouter.models.decision import DelegationDecision
from cleorouter.services.delegation import DelegationService
from cleorouter.services.suggestion import AgentSource

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")

BASE_HINT = """INTERNAL DELEGATION HINT (NOT USER VISIBLE)
- You have access to specialist agents via delegate_to_* tools.
- Prefer delegation when the task clearly matches an agent's expertise (technical->Toby, research->Apu, content->Peter/Jenn, email/productivity->Ami/Astra, ecommerce->Emma, insights->Iris/Wex).
- For simple, generic questions you can answer directly without delegation.
- When a router or complexity scorer suggests a specific agent with high confidence, treat it as a strong recommendation to delegate."""


def delegate_tool_name(agent_id: str) -> str:
    """``toby-technical`` -> ``delegate_to_toby_technical``."""
    return "delegate_to_" + _NON_ALNUM.sub("_", agent_id)


def build_delegation_hint(decision: DelegationDecision, tool_name: str | None = None) -> str:
    """Render a decision as prompt text that biases the model's tool choice."""
    complexity = decision.complexity

    if not (decision.should_delegate and decision.target_agent):
        return f"""{BASE_HINT}

DIRECT RESPONSE:
- Complexity Score: {complexity.score}/100 ({complexity.recommendation.value})
- Route: Direct response (no delegation needed)
- Reasoning: {decision.reasoning}"""

    target = decision.target_agent
    tool = tool_name or delegate_tool_name(target)

    if decision.early_exit:
        return f"""{BASE_HINT}

MANDATORY DELEGATION:
The user explicitly mentioned "{target.upper()}" by name.
1. Call ONLY the tool: {tool}
2. Do not call any other delegation tools in parallel
3. Do not try to handle this yourself
4. Pass a clear taskDescription with all details from the user's request

Reasoning: Explicit agent mention detected (score: {complexity.score}/100). This overrides normal complexity analysis."""

    return f"""{BASE_HINT}

SMART DELEGATION DECISION:
- Complexity Score: {complexity.score}/100 ({complexity.recommendation.value})
- Target: {target.upper()} specialist
- Tool: {tool}
- Reasoning: {decision.reasoning}"""


class DelegationHintBuilder:
    """Decides a message and renders the hint, resolving tool names via the registry."""

    def __init__(self, delegation: DelegationService, registry: AgentSource | None = None) -> None:
        self._delegation = delegation
        self._registry = registry

    async def resolve_tool_name(self, agent_id: str) -> str:
        """Tool name for a registered agent id or display name; sanitized id otherwise."""
        if self._registry is not None:
            key = agent_id.lower()
            try:
                agents = await self._registry.get_all_agents()
            except Exception:
                logger.warning("Unable to load agents for tool mapping", exc_info=True)
                agents = []
            for agent in agents:
                if agent.id.lower() == key or agent.name.lower() == key:
                    return delegate_tool_name(agent.id)
        return delegate_tool_name(agent_id)

    async def build(self, message: str) -> tuple[DelegationDecision, str]:
        decision = await self._delegation.decide(message)
        tool_name = None
        if decision.should_delegate and decision.target_agent:
            tool_name = await self.resolve_tool_name(decision.target_agent)
        return decision, build_delegation_hint(decision, tool_name)
