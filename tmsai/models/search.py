"""Enterprise search reply shapes."""

from typing import Any, Literal

from tmsai.models.base import Level, ReplyModel, TimeRange

EntityType = Literal["vehicle", "driver", "job", "inspection", "maintenance", "document"]
KnowledgeCategory = Literal["procedure", "policy", "guideline", "faq", "troubleshooting", "compliance"]


class SearchFilters(ReplyModel):
    category: list[str] | None = None
    date_range: TimeRange | None = None
    entity_type: EntityType | None = None
    priority: Level | None = None


class SearchQuery(ReplyModel):
    query: str
    filters: SearchFilters | None = None
    limit: int = 10
    include_related: bool = False


class ResultMetadata(ReplyModel):
    category: str
    tags: list[str]
    created_at: str
    updated_at: str
    author: str | None = None
    status: str | None = None


class Highlight(ReplyModel):
    field: str
    snippet: str
    score: float


class RelatedEntity(ReplyModel):
    id: str
    type: str
    title: str
    relevance: float


class SearchResult(ReplyModel):
    id: str
    title: str
    content: str
    entity_type: Literal["vehicle", "driver", "job", "inspection", "maintenance", "document", "knowledge"]
    relevance: float
    metadata: ResultMetadata
    highlights: list[Highlight]
    related_entities: list[RelatedEntity]


class SearchResultList(ReplyModel):
    search_results: list[SearchResult] = []


class KnowledgeInsights(ReplyModel):
    summary: str = ""
    key_points: list[str] = []
    related_topics: list[str] = []
    suggested_updates: list[str] = []


class KnowledgeBaseEntry(ReplyModel):
    id: str
    title: str
    content: str
    category: KnowledgeCategory
    tags: list[str]
    author: str
    version: str
    status: Literal["draft", "published", "archived"]
    created_at: str
    updated_at: str
    last_accessed: str | None = None
    access_count: int
    related_entries: list[str]
    ai_generated: bool
    ai_insights: KnowledgeInsights


class DocumentIndex(ReplyModel):
    document_id: str
    title: str
    content: str
    entity_type: str
    entity_id: str
    metadata: dict[str, Any]
    embeddings: list[float]
    last_indexed: str
    version: int


class PopularQuery(ReplyModel):
    query: str
    count: int
    avg_relevance: float


class SearchPerformance(ReplyModel):
    avg_response_time: float = 0
    avg_relevance_score: float = 0
    zero_result_queries: int = 0


class CategoryCount(ReplyModel):
    category: str
    count: int


class SearchPattern(ReplyModel):
    pattern: str
    frequency: float


class UserBehavior(ReplyModel):
    most_searched_categories: list[CategoryCount] = []
    search_patterns: list[SearchPattern] = []


class SearchAnalyticsInsights(ReplyModel):
    search_trends: list[str] = []
    optimization_suggestions: list[str] = []
    knowledge_gaps: list[str] = []


class SearchAnalytics(ReplyModel):
    total_queries: int
    popular_queries: list[PopularQuery]
    search_performance: SearchPerformance
    user_behavior: UserBehavior
    ai_insights: SearchAnalyticsInsights
