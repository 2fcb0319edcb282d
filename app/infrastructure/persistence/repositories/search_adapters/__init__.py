"""Per-entity full-text search adapters and their registry."""

from app.infrastructure.persistence.repositories.search_adapters.articles import (
    ArticleSearchAdapter,
)
from app.infrastructure.persistence.repositories.search_adapters.base import (
    EntitySearchAdapter,
    FilterSpec,
)
from app.infrastructure.persistence.repositories.search_adapters.cases import (
    CaseSearchAdapter,
)
from app.infrastructure.persistence.repositories.search_adapters.clients import (
    ClientSearchAdapter,
)
from app.infrastructure.persistence.repositories.search_adapters.documents import (
    DocumentSearchAdapter,
)
from app.infrastructure.persistence.repositories.search_adapters.expenses import (
    ExpenseSearchAdapter,
)
from app.infrastructure.persistence.repositories.search_adapters.invoices import (
    InvoiceSearchAdapter,
)
from app.infrastructure.persistence.repositories.search_adapters.registry import (
    DEFAULT_ADAPTERS,
    AdapterRegistry,
    build_default_registry,
)
from app.infrastructure.persistence.repositories.search_adapters.tasks import (
    TaskSearchAdapter,
)
from app.infrastructure.persistence.repositories.search_adapters.time_entries import (
    TimeEntrySearchAdapter,
)
from app.infrastructure.persistence.repositories.search_adapters.users import (
    UserSearchAdapter,
)

__all__ = [
    "DEFAULT_ADAPTERS",
    "AdapterRegistry",
    "ArticleSearchAdapter",
    "CaseSearchAdapter",
    "ClientSearchAdapter",
    "DocumentSearchAdapter",
    "EntitySearchAdapter",
    "ExpenseSearchAdapter",
    "FilterSpec",
    "InvoiceSearchAdapter",
    "TaskSearchAdapter",
    "TimeEntrySearchAdapter",
    "UserSearchAdapter",
    "build_default_registry",
]
