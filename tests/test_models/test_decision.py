"""Tests for DelegationDecision."""

import pytest

from cleorouter.models.complexity import ComplexityScore, explicit_mention_score
from cleorouter.models.decision import DelegationDecision


class TestDelegationDecision:
    def test_delegating_requires_target(self):
        with pytest.raises(ValueError):
            DelegationDecision(should_delegate=True, reasoning="", complexity=ComplexityScore(score=80))

    def test_confidence_from_score(self):
        decision = DelegationDecision(
            should_delegate=True,
            reasoning="",
            complexity=ComplexityScore(score=85),
            target_agent="astra-email",
        )
        assert decision.confidence == 0.85

    def test_early_exit_confidence(self):
        decision = DelegationDecision(
            should_delegate=True,
            reasoning="",
            complexity=explicit_mention_score(),
            target_agent="toby-technical",
            early_exit=True,
        )
        assert decision.confidence == 0.99

    def test_dict_round_trip(self):
        decision = DelegationDecision(
            should_delegate=False,
            reasoning="Simple query",
            complexity=ComplexityScore(score=10, recommendation="direct"),
        )
        data = decision.to_dict()
        assert data["target_agent"] is None
        assert DelegationDecision.from_dict(data) == decision
