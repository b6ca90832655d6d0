"""Semantic search, document indexing and the knowledge base."""

from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from tmsai.agents.base import BaseAgent, now_iso, range_bounds
from tmsai.llm.prompt_manager import json_or_none, to_json, truncate
from tmsai.models.search import (
    DocumentIndex,
    KnowledgeBaseEntry,
    KnowledgeInsights,
    SearchAnalytics,
    SearchAnalyticsInsights,
    SearchPerformance,
    SearchQuery,
    SearchResult,
    SearchResultList,
    UserBehavior,
)

EMBEDDING_DIMENSIONS = 128


def entry_fields(entry: dict[str, Any]) -> dict[str, Any]:
    """Snake_case view of a knowledge base entry given with either snake_case or camelCase keys."""
    snake = {to_camel(name): name for name in KnowledgeBaseEntry.model_fields}
    return {snake.get(key, key): value for key, value in entry.items()}


class EnterpriseSearchAgent(BaseAgent):
    """
    Search across fleet records and a small in-process knowledge base.

    ``document_index`` holds indexed documents by id and ``knowledge_base``
    holds entries created or updated through this agent.
    """

    role = "Enterprise Search AI Agent"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.document_index: dict[str, DocumentIndex] = {}
        self.knowledge_base: dict[str, KnowledgeBaseEntry] = {}

    def search(self, query: SearchQuery | dict[str, Any]) -> list[SearchResult]:
        context = self._require_context()
        if not isinstance(query, SearchQuery):
            query = SearchQuery.model_validate(query)
        prompt = self._prompt(
            "search_query",
            query=query.query,
            total_vehicles=len(context.vehicles),
            total_drivers=len(context.drivers),
            total_inspections=len(context.inspections),
            indexed_documents=len(self.document_index),
            filters=json_or_none(query.filters),
        )
        results = self._ask(prompt, "search", SearchResultList())
        return results.search_results[: query.limit]

    def index_document(self, document: dict[str, Any]) -> DocumentIndex:
        """Ask the model for an embedding vector and store the document under its id."""
        self._require_context()
        doc_id = str(document["id"])
        entity_type = document.get("entity_type") or document.get("entityType") or ""
        entity_id = document.get("entity_id") or document.get("entityId") or ""
        prompt = self._prompt(
            "search_index_document",
            id=doc_id,
            title=document.get("title", ""),
            content=truncate(document.get("content"), self._limit("document", 500)),
            entity_type=entity_type,
            entity_id=entity_id,
        )
        embeddings = self._ask(
            prompt,
            "index document",
            [0.0] * EMBEDDING_DIMENSIONS,
            shape=list[float],
            array=True,
        )

        previous = self.document_index.get(doc_id)
        indexed = DocumentIndex(
            document_id=doc_id,
            title=document.get("title", ""),
            content=document.get("content", ""),
            entity_type=entity_type,
            entity_id=str(entity_id),
            metadata=document.get("metadata") or {},
            embeddings=embeddings,
            last_indexed=now_iso(),
            version=previous.version + 1 if previous else 1,
        )
        self.document_index[doc_id] = indexed
        return indexed

    def create_knowledge_base_entry(self, entry: dict[str, Any]) -> KnowledgeBaseEntry:
        self._require_context()
        entry = entry_fields(entry)
        self._check_entry(entry)
        prompt = self._prompt(
            "search_knowledge_entry",
            title=entry.get("title", ""),
            content=entry.get("content", ""),
            category=entry.get("category", ""),
            tags=", ".join(entry.get("tags") or []),
            author=entry.get("author", ""),
        )
        created = self._ask(
            prompt,
            "create knowledge base entry",
            lambda raw: self._entry_fallback(raw, entry),
        )
        self.knowledge_base[created.id] = created
        return created

    def update_knowledge_base_entry(self, entry_id: str, updates: dict[str, Any]) -> KnowledgeBaseEntry:
        self._require_context()
        prompt = self._prompt(
            "search_knowledge_update",
            entry_id=entry_id,
            updates=to_json(updates),
        )
        existing = self.knowledge_base.get(entry_id)
        base = existing.model_dump() if existing else {}
        base.update(entry_fields(updates))
        base["id"] = entry_id
        self._check_entry(base)
        updated = self._ask(
            prompt,
            "update knowledge base entry",
            lambda raw: self._entry_fallback(raw, base),
        )
        self.knowledge_base[updated.id] = updated
        return updated

    def _check_entry(self, entry: dict[str, Any]) -> None:
        try:
            self._entry_fallback("", entry)
        except ValidationError as e:
            raise ValueError(f"Invalid knowledge base entry: {e}") from e

    def _entry_fallback(self, raw: str, entry: dict[str, Any]) -> KnowledgeBaseEntry:
        now = now_iso()
        stamp = int(datetime.now(timezone.utc).timestamp() * 1000)
        return KnowledgeBaseEntry(
            id=entry.get("id") or f"kb-{stamp}",
            title=entry.get("title", ""),
            content=entry.get("content", ""),
            category=entry.get("category") or "procedure",
            tags=entry.get("tags") or [],
            author=entry.get("author", ""),
            version=entry.get("version") or "1.0",
            status=entry.get("status") or "published",
            created_at=entry.get("created_at") or now,
            updated_at=now,
            access_count=entry.get("access_count") or 0,
            related_entries=entry.get("related_entries") or [],
            ai_generated=True,
            ai_insights=KnowledgeInsights(summary=truncate(raw, self._limit("summary", 200))),
        )

    def get_search_analytics(self, time_range: Any) -> SearchAnalytics:
        self._require_context()
        start, end = range_bounds(time_range)
        prompt = self._prompt("search_analytics", start=start, end=end)

        def fallback(raw: str) -> SearchAnalytics:
            return SearchAnalytics(
                total_queries=0,
                popular_queries=[],
                search_performance=SearchPerformance(),
                user_behavior=UserBehavior(),
                ai_insights=SearchAnalyticsInsights(
                    search_trends=[truncate(raw, self._limit("short", 100))]
                ),
            )

        return self._ask(prompt, "get search analytics", fallback)

    def suggest_related_content(self, content: str, entity_type: str) -> list[SearchResult]:
        self._require_context()
        prompt = self._prompt(
            "search_related_content",
            content=truncate(content, self._limit("content", 300)),
            entity_type=entity_type,
        )
        results = self._ask(prompt, "suggest related content", SearchResultList())
        return results.search_results

    def generate_search_insights(self, search_history: list[dict[str, Any]]) -> dict[str, Any]:
        self._require_context()
        prompt = self._prompt("search_insights", history=to_json(search_history))
        return self._ask(prompt, "generate search insights", lambda raw: {"insights": raw})
