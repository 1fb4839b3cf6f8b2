"""Task complexity domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Recommendation(str, Enum):
    DIRECT = "direct"
    DELEGATE = "delegate"
    CLARIFY = "clarify"


@dataclass(frozen=True)
class ComplexityFactors:
    """Boolean signals detected in a lowercased user message."""

    # Simple indicators (lower score)
    is_greeting: bool = False
    is_simple_question: bool = False
    is_definition_request: bool = False
    is_single_concept: bool = False

    # Complex indicators (higher score)
    has_multiple_steps: bool = False
    requires_specialized_knowledge: bool = False
    needs_external_data: bool = False
    involves_multiple_domains: bool = False
    requires_creative_work: bool = False
    needs_file_manipulation: bool = False
    has_unclear_scope: bool = False

    # Calendar + email in the same message
    has_calendar_email_combo: bool = False


@dataclass(frozen=True)
class ComplexityScore:
    """Heuristic complexity of a message and what to do about it."""

    score: int  # 0-100
    factors: tuple[str, ...] = ()
    recommendation: Recommendation = Recommendation.CLARIFY
    reasoning: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.score <= 100:
            raise ValueError(f"ComplexityScore score out of range: {self.score}")
        # Accept plain strings from deserialized payloads
        if not isinstance(self.recommendation, Recommendation):
            object.__setattr__(self, "recommendation", Recommendation(self.recommendation))
        if not isinstance(self.factors, tuple):
            object.__setattr__(self, "factors", tuple(self.factors))

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "factors": list(self.factors),
            "recommendation": self.recommendation.value,
            "reasoning": self.reasoning,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ComplexityScore:
        return cls(
            score=data["score"],
            factors=tuple(data.get("factors", [])),
            recommendation=Recommendation(data.get("recommendation", "clarify")),
            reasoning=data.get("reasoning", ""),
        )


EXPLICIT_MENTION_FACTOR = "explicit_mention"
EARLY_EXIT_SCORE = 99


def explicit_mention_score() -> ComplexityScore:
    """The fixed score attached to an early-exit decision."""
    return ComplexityScore(
        score=EARLY_EXIT_SCORE,
        factors=(EXPLICIT_MENTION_FACTOR,),
        recommendation=Recommendation.DELEGATE,
        reasoning="Direct agent mention",
    )

