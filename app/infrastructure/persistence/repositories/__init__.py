"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.search_adapters import (
    AdapterRegistry,
    EntitySearchAdapter,
    build_default_registry,
)
from app.infrastructure.persistence.repositories.search_history_repo import (
    SearchHistoryRepository,
)

__all__ = [
    "AdapterRegistry",
    "EntitySearchAdapter",
    "SearchHistoryRepository",
    "build_default_registry",
]
