"""Application use cases: the operations the HTTP layer calls."""

from app.application.use_cases.search import SearchService

__all__ = ["SearchService"]
