"""Tests for AgentProfile."""

from datetime import datetime, timezone

import pytest

from cleorouter.models.agent import AgentProfile, slugify_agent_name


class TestSlugify:
    def test_slug(self):
        assert slugify_agent_name("Dr. Who") == "dr-who"
        assert slugify_agent_name("  Cleo Test  ") == "cleo-test"
        assert slugify_agent_name("!!!") == ""


class TestAgentProfile:
    def test_defaults(self):
        agent = AgentProfile(id="marvin", name="Marvin")
        assert agent.description == ""
        assert agent.tags == ()
        assert agent.builtin is False

    def test_requires_id_and_name(self):
        with pytest.raises(ValueError):
            AgentProfile(id="", name="Marvin")
        with pytest.raises(ValueError):
            AgentProfile(id="marvin", name="")

    def test_doc_round_trip(self):
        created = datetime(2024, 1, 1, tzinfo=timezone.utc)
        agent = AgentProfile(
            id="marvin",
            name="Marvin",
            description="Paranoid android",
            tags=("robots",),
            tools=("search",),
            created_at=created,
        )
        doc = agent.to_doc()
        assert doc["agent_id"] == "marvin"
        assert "builtin" not in doc
        assert AgentProfile.from_doc(doc) == agent
