"""Tests for complexity score models."""

import pytest

from cleorouter.models.complexity import (
    ComplexityScore,
    Recommendation,
    explicit_mention_score,
)


class TestComplexityScore:
    def test_range(self):
        with pytest.raises(ValueError):
            ComplexityScore(score=101)
        with pytest.raises(ValueError):
            ComplexityScore(score=-1)

    def test_coerces_plain_values(self):
        score = ComplexityScore(score=50, factors=["a", "b"], recommendation="delegate")
        assert score.recommendation is Recommendation.DELEGATE
        assert score.factors == ("a", "b")

    def test_dict_round_trip(self):
        score = ComplexityScore(score=85, factors=("multiple domains",), recommendation=Recommendation.DELEGATE)
        data = score.to_dict()
        assert data["recommendation"] == "delegate"
        assert ComplexityScore.from_dict(data) == score

    def test_explicit_mention_score(self):
        score = explicit_mention_score()
        assert score.score == 99
        assert score.factors == ("explicit_mention",)
        assert score.recommendation == Recommendation.DELEGATE
