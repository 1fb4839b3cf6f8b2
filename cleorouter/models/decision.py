"""Delegation decision domain model."""

from __future__ import annotations

from dataclasses import dataclass

from cleorouter.models.complexity import ComplexityScore

EARLY_EXIT_CONFIDENCE = 0.99


@dataclass(frozen=True)
class DelegationDecision:
    """Outcome of routing one user message."""

    should_delegate: bool
    reasoning: str
    complexity: ComplexityScore
    target_agent: str | None = None
    early_exit: bool = False
    cached: bool = False

    def __post_init__(self) -> None:
        if self.should_delegate and not self.target_agent:
            raise ValueError("Delegating decision must name a target_agent")

    @property
    def confidence(self) -> float:
        """Routing confidence in [0, 1] used by the routing cache."""
        if self.early_exit:
            return EARLY_EXIT_CONFIDENCE
        return self.complexity.score / 100

    def to_dict(self) -> dict:
        return {
            "should_delegate": self.should_delegate,
            "target_agent": self.target_agent,
            "reasoning": self.reasoning,
            "complexity": self.complexity.to_dict(),
            "early_exit": self.early_exit,
            "cached": self.cached,
        }

    @classmethod
    def from_dict(cls, data: dict) -> DelegationDecision:
        return cls(
            should_delegate=data["should_delegate"],
            target_agent=data.get("target_agent"),
            reasoning=data.get("reasoning", ""),
            complexity=ComplexityScore.from_dict(data["complexity"]),
            early_exit=data.get("early_exit", False),
            cached=data.get("cached", False),
        )
