"""Task complexity scoring for smart delegation.

Scores a free-text user message with weighted keyword patterns and maps the
score to a coarse recommendation: answer directly, delegate to a specialist,
or treat as ambiguous. Point values and cutoffs are fixed tuning constants.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from cleorouter.models.complexity import ComplexityFactors, ComplexityScore, Recommendation

BASE_SCORE = 40
DIRECT_BELOW = 30
DELEGATE_ABOVE = 70
CALENDAR_EMAIL_BONUS = 25
SINGLE_CONCEPT_MAX_WORDS = 8
LONG_MESSAGE_CHARS = 200

# Simple patterns
_GREETING = re.compile(r"^(hi|hello|hey|good\s+(morning|afternoon|evening)|how are you)")
_SIMPLE_QUESTION = re.compile(
    r"^(what is|what are|who is|when is|where is|how do i|can you).{1,50}\?$"
)
_DEFINITION = re.compile(r"(what\s+(is|are|means?)|define|explain\s+(what|how)\s+)")

# Complex patterns
_MULTI_STEP = re.compile(r"(first.*then|step\s+\d|and then|after that|next.*do|also.*need)")
_TOOL = re.compile(r"(create|build|make|generate|design|analyze|calculate|optimize|implement)")
_DATA = re.compile(r"(fetch|search|find|get.*data|analyze.*from|look up|research)")
_FILE = re.compile(r"(upload|download|file|document|save|export|import|pdf|csv|excel)")
_UNCLEAR = re.compile(r"(maybe|perhaps|might|could|not sure|help me with|figure out|anything)")

# Domain dictionaries
_TECHNICAL = re.compile(
    r"(code|programming|programación|desarrollo|developer|dev|api|rest|fastapi|django|"
    r"flask|express|node|typescript|javascript|database|db|sql|postgres|server|backend|"
    r"debug|git|deploy|deployment|ci|cd)"
)
_NOTION = re.compile(r"(notion|workspace|page|database|organize|notes)")
_GOOGLE = re.compile(r"(google\s+(docs|sheets|drive|calendar)|document|spreadsheet)")
_ECOMMERCE = re.compile(r"(shopify|store|product|price|inventory|sales|ecommerce)")
_FINANCIAL = re.compile(r"(stock|market|finance|investment|price|analysis|financial)")
_CREATIVE = re.compile(r"(design|creative|brand|logo|color|visual|ui|ux|layout)")

CALENDAR_PATTERN = re.compile(r"(reunión|meeting|calendar|evento|appointment|schedule|cita)")
EMAIL_PATTERN = re.compile(r"(email|correo|enviar|send|confirmation|confirmación)")

_SPECIALIZED_DOMAINS = (_TECHNICAL, _NOTION, _GOOGLE, _ECOMMERCE, _FINANCIAL)
_ALL_DOMAINS = (_TECHNICAL, _NOTION, _GOOGLE, _ECOMMERCE, _FINANCIAL, _CREATIVE)


@dataclass(frozen=True)
class ScoreRule:
    """Adds ``points`` (negative for simple signals) when ``applies`` holds."""

    label: str
    points: int
    applies: Callable[[ComplexityFactors], bool]


# Evaluated in order; the order is the order factor labels are reported in.
SCORE_RULES: tuple[ScoreRule, ...] = (
    ScoreRule("greeting", -20, lambda f: f.is_greeting),
    ScoreRule("simple question", -15, lambda f: f.is_simple_question),
    ScoreRule("definition request", -10, lambda f: f.is_definition_request),
    ScoreRule("single concept", -10, lambda f: f.is_single_concept),
    ScoreRule("multiple steps", 25, lambda f: f.has_multiple_steps),
    ScoreRule("specialized knowledge", 30, lambda f: f.requires_specialized_knowledge),
    ScoreRule("external data required", 35, lambda f: f.needs_external_data),
    ScoreRule("multiple domains", 20, lambda f: f.involves_multiple_domains),
    ScoreRule("creative work", 25, lambda f: f.requires_creative_work),
    ScoreRule("file manipulation", 30, lambda f: f.needs_file_manipulation),
    ScoreRule("unclear scope", 15, lambda f: f.has_unclear_scope),
    ScoreRule(
        "calendar + email coordination",
        CALENDAR_EMAIL_BONUS,
        lambda f: f.has_calendar_email_combo,
    ),
)

_REASONING = {
    Recommendation.DIRECT: "Simple query that can be answered directly without delegation",
    Recommendation.DELEGATE: "Complex task requiring specialized expertise or tools",
    Recommendation.CLARIFY: "Moderate complexity - may need clarification before deciding",
}


def detect_factors(message: str) -> ComplexityFactors:
    """Evaluate every complexity signal against an already-lowercased message."""
    multi_step = bool(_MULTI_STEP.search(message))
    calendar_email = bool(CALENDAR_PATTERN.search(message)) and bool(
        EMAIL_PATTERN.search(message)
    )
    domain_hits = sum(1 for pattern in _ALL_DOMAINS if pattern.search(message))

    return ComplexityFactors(
        is_greeting=bool(_GREETING.search(message)),
        is_simple_question=bool(_SIMPLE_QUESTION.search(message)),
        is_definition_request=bool(_DEFINITION.search(message)),
        is_single_concept=len(message.split(" ")) <= SINGLE_CONCEPT_MAX_WORDS and not multi_step,
        has_multiple_steps=multi_step,
        requires_specialized_knowledge=any(p.search(message) for p in _SPECIALIZED_DOMAINS),
        needs_external_data=bool(_DATA.search(message)),
        involves_multiple_domains=domain_hits > 1 or calendar_email,
        requires_creative_work=bool(_CREATIVE.search(message) or _TOOL.search(message)),
        needs_file_manipulation=bool(_FILE.search(message)),
        has_unclear_scope=bool(_UNCLEAR.search(message)) or len(message) > LONG_MESSAGE_CHARS,
        has_calendar_email_combo=calendar_email,
    )


def recommend(score: int) -> Recommendation:
    """Map a clamped score onto a recommendation."""
    if score < DIRECT_BELOW:
        return Recommendation.DIRECT
    if score > DELEGATE_ABOVE:
        return Recommendation.DELEGATE
    return Recommendation.CLARIFY


def analyze_task_complexity(message: str) -> ComplexityScore:
    """Score a user message and recommend a delegation strategy."""
    factors = detect_factors(message.lower().strip())

    delta = 0
    labels: list[str] = []
    for rule in SCORE_RULES:
        if rule.applies(factors):
            delta += rule.points
            labels.append(rule.label)

    score = max(0, min(100, BASE_SCORE + delta))
    recommendation = recommend(score)
    return ComplexityScore(
        score=score,
        factors=tuple(labels),
        recommendation=recommendation,
        reasoning=_REASONING[recommendation],
    )
