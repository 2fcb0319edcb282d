"""Client search: names, contact details and company name."""

from collections.abc import Mapping
from typing import Any

from app.application.dtos.search import SearchResult
from app.domain.enums import EntityType
from app.infrastructure.persistence.repositories.search_adapters.base import (
    EntitySearchAdapter,
    FilterSpec,
    full_name,
)


class ClientSearchAdapter(EntitySearchAdapter):
    """Clients; archived means is_active = false. Owned when created by the user."""

    entity_type = EntityType.CLIENTS
    document = (
        "COALESCE(c.first_name, '') || ' ' || "
        "COALESCE(c.last_name, '') || ' ' || "
        "COALESCE(c.email, '') || ' ' || "
        "COALESCE(c.phone, '') || ' ' || "
        "COALESCE(c.company_name, '')"
    )
    columns = (
        "c.id, c.first_name, c.last_name, c.company_name, c.email, c.phone, "
        "c.client_type, c.created_at, c.updated_at"
    )
    source = "clients c"
    order_key = "c.id"
    active_condition = "c.is_active = true"
    owner_condition = "c.created_by = :user_id"
    filter_specs = {
        "clientType": FilterSpec("c.client_type = :client_type", "client_type"),
    }

    def to_result(self, row: Mapping[str, Any]) -> SearchResult:
        return self.make_result(
            row,
            title=full_name(row["first_name"], row["last_name"]) or row["company_name"],
            description=row["email"] or row["phone"],
            metadata={
                "firstName": row["first_name"],
                "lastName": row["last_name"],
                "companyName": row["company_name"],
                "email": row["email"],
                "phone": row["phone"],
                "clientType": row["client_type"],
                "createdAt": row["created_at"],
                "updatedAt": row["updated_at"],
            },
            path="clients",
        )
