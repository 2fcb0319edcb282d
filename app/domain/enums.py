"""Domain enumerations for unified search.

Enums represent fixed sets of domain values (searchable entity types,
sort keys). Declaration order of EntityType is the canonical adapter
invocation order.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class EntityType(_ValuesMixin, str, Enum):
    """Searchable entity stores."""

    CASES = "cases"
    CLIENTS = "clients"
    DOCUMENTS = "documents"
    USERS = "users"
    EXPENSES = "expenses"
    ARTICLES = "articles"
    TASKS = "tasks"
    INVOICES = "invoices"
    TIME_ENTRIES = "time_entries"

    @classmethod
    def parse_many(cls, raw: str | None) -> list["EntityType"]:
        """Parse a comma-separated list (e.g. "cases,clients") into entity types.

        Blank items are skipped; unknown names raise ValueError.
        """
        if not raw:
            return []
        return [cls(item.strip()) for item in raw.split(",") if item.strip()]


class SortBy(_ValuesMixin, str, Enum):
    """Global sort key for merged search results."""

    RELEVANCE = "relevance"
    DATE = "date"
    TITLE = "title"


class SortOrder(_ValuesMixin, str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"
