"""Tests for the enterprise search agent."""

import json

import pytest

from tmsai.agents import EnterpriseSearchAgent
from tmsai.agents.search import EMBEDDING_DIMENSIONS
from tmsai.models.search import SearchQuery

RESULT = {
    "id": "v1", "title": "Van 1", "content": "Active van", "entityType": "vehicle", "relevance": 0.9,
    "metadata": {"category": "fleet", "tags": ["van"], "createdAt": "2025-01-01", "updatedAt": "2025-01-02"},
    "highlights": [{"field": "title", "snippet": "Van", "score": 0.8}],
    "relatedEntities": [],
}
DOCUMENT = {
    "id": "doc-1", "title": "Walkaround checks", "content": "x" * 800,
    "entity_type": "document", "entity_id": "proc-7",
}
ENTRY = {
    "title": "Daily checks", "content": "Check tyres and lights.", "category": "procedure",
    "tags": ["safety", "daily"], "author": "Sam",
}


@pytest.fixture
def agent(service, context):
    agent = EnterpriseSearchAgent(service)
    agent.set_context(context)
    return agent


def test_search_parses_and_limits(agent, provider):
    provider.reply = json.dumps({"searchResults": [RESULT, dict(RESULT, id="v2")]})
    results = agent.search({"query": "vans", "limit": 1})
    assert [r.id for r in results] == ["v1"]
    assert results[0].metadata.author is None

    prompt = provider.calls[-1][0]
    assert 'SEARCH QUERY: "vans"' in prompt
    assert "- Total Vehicles: 2" in prompt
    assert "SEARCH FILTERS:\nNone specified" in prompt


def test_search_fallback_empty(agent, provider):
    provider.reply = "Nothing found."
    assert agent.search(SearchQuery(query="unicorns")) == []


def test_index_document_with_embeddings(agent, provider):
    provider.reply = "Vector: [0.1, 0.2, 0.3]"
    indexed = agent.index_document(DOCUMENT)
    assert indexed.embeddings == [0.1, 0.2, 0.3]
    assert indexed.version == 1
    assert agent.document_index["doc-1"] is indexed
    assert "- Content: " + "x" * 500 + "..." in provider.calls[-1][0]


def test_index_document_fallback_zero_vector_and_reindex(agent, provider):
    provider.reply = "I cannot embed this."
    first = agent.index_document(DOCUMENT)
    assert first.embeddings == [0.0] * EMBEDDING_DIMENSIONS
    assert agent.last_extraction.used_fallback

    provider.reply = "[1, 2]"
    second = agent.index_document(dict(DOCUMENT, title="Walkaround checks v2"))
    assert second.version == 2
    assert second.embeddings == [1.0, 2.0]


def test_create_knowledge_entry_fallback(agent, provider):
    provider.reply = "Summary: " + "s" * 300
    entry = agent.create_knowledge_base_entry(ENTRY)
    assert entry.id.startswith("kb-")
    assert entry.title == "Daily checks"
    assert entry.version == "1.0"
    assert entry.status == "published"
    assert entry.ai_generated
    assert entry.ai_insights.summary == provider.reply[:200]
    assert agent.knowledge_base[entry.id] is entry
    assert "- Tags: safety, daily" in provider.calls[-1][0]


def test_update_knowledge_entry_merges_existing(agent, provider):
    provider.reply = "Created."
    created = agent.create_knowledge_base_entry(ENTRY)

    provider.reply = "Updated the wording."
    updated = agent.update_knowledge_base_entry(created.id, {"content": "Check tyres, lights and mirrors."})
    assert updated.id == created.id
    assert updated.title == "Daily checks"
    assert updated.content == "Check tyres, lights and mirrors."
    assert updated.ai_insights.summary == "Updated the wording."
    assert f"ENTRY ID: {created.id}" in provider.calls[-1][0]


def test_update_knowledge_entry_accepts_camel_case_keys(agent, provider):
    provider.reply = "Created."
    created = agent.create_knowledge_base_entry(ENTRY)

    provider.reply = "Linked it."
    updated = agent.update_knowledge_base_entry(created.id, {"relatedEntries": ["kb-2"], "accessCount": 4})
    assert updated.related_entries == ["kb-2"]
    assert updated.access_count == 4
    assert updated.title == "Daily checks"


def test_invalid_knowledge_entry_rejected_before_asking(agent, provider):
    with pytest.raises(ValueError, match="Invalid knowledge base entry"):
        agent.create_knowledge_base_entry(dict(ENTRY, category="safety"))
    assert provider.calls == []

    provider.reply = "Created."
    created = agent.create_knowledge_base_entry(ENTRY)
    calls = len(provider.calls)
    with pytest.raises(ValueError):
        agent.update_knowledge_base_entry(created.id, {"status": "deleted"})
    assert len(provider.calls) == calls


def test_search_analytics_fallback(agent, provider):
    provider.reply = "Users search for tachograph rules most."
    analytics = agent.get_search_analytics({"start": "a", "end": "b"})
    assert analytics.total_queries == 0
    assert analytics.ai_insights.search_trends == ["Users search for tachograph rules most."]


def test_suggest_related_content(agent, provider):
    provider.reply = json.dumps({"searchResults": [RESULT]})
    results = agent.suggest_related_content("c" * 400, "vehicle")
    assert results[0].title == "Van 1"
    assert "CONTENT: " + "c" * 300 + "..." in provider.calls[-1][0]


def test_search_insights_fallback(agent, provider):
    provider.reply = "People look for MOT dates."
    assert agent.generate_search_insights([{"query": "mot", "results": 0}]) == {"insights": "People look for MOT dates."}
