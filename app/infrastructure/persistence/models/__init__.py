"""Persistence models: search analytics ORM entities."""

from app.infrastructure.persistence.models.search_history import (
    SearchHistory,
    SearchPopularTerm,
)

__all__ = [
    "SearchHistory",
    "SearchPopularTerm",
]
