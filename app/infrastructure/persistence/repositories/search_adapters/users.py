"""User search: names and email. Only active users; never ownership-scoped."""

from collections.abc import Mapping
from typing import Any

from app.application.dtos.search import SearchResult
from app.domain.enums import EntityType
from app.infrastructure.persistence.repositories.search_adapters.base import (
    EntitySearchAdapter,
    FilterSpec,
    full_name,
)


class UserSearchAdapter(EntitySearchAdapter):
    """Users; inactive users are never returned, even with include_archived."""

    entity_type = EntityType.USERS
    document = (
        "COALESCE(u.first_name, '') || ' ' || "
        "COALESCE(u.last_name, '') || ' ' || "
        "COALESCE(u.email, '')"
    )
    columns = "u.id, u.first_name, u.last_name, u.email, u.role, u.created_at, u.updated_at"
    source = "users u"
    order_key = "u.id"
    scope_condition = "u.is_active = true"
    filter_specs = {
        "role": FilterSpec("u.role = :role", "role"),
    }

    def to_result(self, row: Mapping[str, Any]) -> SearchResult:
        return self.make_result(
            row,
            title=full_name(row["first_name"], row["last_name"]) or row["email"],
            description=row["email"],
            metadata={
                "firstName": row["first_name"],
                "lastName": row["last_name"],
                "email": row["email"],
                "role": row["role"],
                "createdAt": row["created_at"],
                "updatedAt": row["updated_at"],
            },
            path="users",
        )
