"""Article search: title, content and excerpt; category name for display."""

from collections.abc import Mapping
from typing import Any

from app.application.dtos.search import SearchResult
from app.domain.enums import EntityType
from app.infrastructure.persistence.repositories.search_adapters.base import (
    EntitySearchAdapter,
    FilterSpec,
)


class ArticleSearchAdapter(EntitySearchAdapter):
    """Articles are shared content: no ownership scope. Unpublished counts as archived."""

    entity_type = EntityType.ARTICLES
    document = (
        "COALESCE(a.title, '') || ' ' || "
        "COALESCE(a.content, '') || ' ' || "
        "COALESCE(a.excerpt, '')"
    )
    # content is matched but not selected; result payloads are cached.
    columns = (
        "a.id, a.title, a.excerpt, a.status, a.category_id, a.published_at, "
        "a.created_at, a.updated_at, cc.name AS category_name"
    )
    source = "articles a LEFT JOIN content_categories cc ON a.category_id = cc.id"
    order_key = "a.id"
    active_condition = "a.status = 'published'"
    filter_specs = {
        "status": FilterSpec("a.status = :status", "status"),
        "categoryId": FilterSpec("a.category_id = :category_id", "category_id"),
    }

    def to_result(self, row: Mapping[str, Any]) -> SearchResult:
        return self.make_result(
            row,
            title=row["title"],
            description=row["excerpt"],
            metadata={
                "status": row["status"],
                "categoryId": row["category_id"],
                "categoryName": row["category_name"],
                "publishedAt": row["published_at"],
                "createdAt": row["created_at"],
                "updatedAt": row["updated_at"],
            },
            path="articles",
        )
