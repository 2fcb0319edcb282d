"""Registry mapping EntityType to its search adapter.

The aggregator only talks to the registry, so a new entity store is added
by registering one more adapter.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.interfaces.repositories import IEntitySearchAdapter
from app.core.config import Settings, get_settings
from app.domain.enums import EntityType
from app.infrastructure.persistence.repositories.search_adapters.articles import (
    ArticleSearchAdapter,
)
from app.infrastructure.persistence.repositories.search_adapters.base import (
    EntitySearchAdapter,
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
from app.infrastructure.persistence.repositories.search_adapters.tasks import (
    TaskSearchAdapter,
)
from app.infrastructure.persistence.repositories.search_adapters.time_entries import (
    TimeEntrySearchAdapter,
)
from app.infrastructure.persistence.repositories.search_adapters.users import (
    UserSearchAdapter,
)

DEFAULT_ADAPTERS: tuple[type[EntitySearchAdapter], ...] = (
    CaseSearchAdapter,
    ClientSearchAdapter,
    DocumentSearchAdapter,
    UserSearchAdapter,
    ExpenseSearchAdapter,
    ArticleSearchAdapter,
    TaskSearchAdapter,
    InvoiceSearchAdapter,
    TimeEntrySearchAdapter,
)


class AdapterRegistry:
    """EntityType -> adapter lookup; resolve() yields canonical EntityType order."""

    def __init__(self, adapters: Iterable[IEntitySearchAdapter] = ()) -> None:
        self._adapters: dict[EntityType, IEntitySearchAdapter] = {}
        for adapter in adapters:
            self.register(adapter)

    def register(self, adapter: IEntitySearchAdapter) -> None:
        """Register (or replace) the adapter for adapter.entity_type."""
        self._adapters[adapter.entity_type] = adapter

    def get(self, entity_type: EntityType) -> IEntitySearchAdapter | None:
        return self._adapters.get(entity_type)

    def __contains__(self, entity_type: object) -> bool:
        return entity_type in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)

    def resolve(self, entities: Iterable[EntityType]) -> list[EntityType]:
        """Effective entity list in EntityType declaration order.

        An empty selection means every entity type. Requested types without a
        registered adapter are still returned so the caller can report them.
        """
        requested = set(entities)
        if not requested:
            return list(EntityType)
        return [entity for entity in EntityType if entity in requested]


def build_default_registry(
    session_factory: async_sessionmaker[AsyncSession],
    settings: Settings | None = None,
) -> AdapterRegistry:
    """Registry with all nine PostgreSQL adapters sharing one session factory."""
    settings = settings or get_settings()
    return AdapterRegistry(
        adapter_cls(
            session_factory,
            timeout_seconds=settings.search_adapter_timeout_seconds,
            retries=settings.search_adapter_retries,
        )
        for adapter_cls in DEFAULT_ADAPTERS
    )
