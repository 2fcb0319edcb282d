"""Case search: title, description and case number; client name for display."""

from collections.abc import Mapping
from typing import Any

from app.application.dtos.search import SearchResult
from app.domain.enums import EntityType
from app.infrastructure.persistence.repositories.search_adapters.base import (
    EntitySearchAdapter,
    FilterSpec,
    full_name,
)


class CaseSearchAdapter(EntitySearchAdapter):
    """Cases; archived means status = 'deleted'. Owned when created by or assigned to the user."""

    entity_type = EntityType.CASES
    document = (
        "COALESCE(c.title, '') || ' ' || "
        "COALESCE(c.description, '') || ' ' || "
        "COALESCE(c.case_number, '')"
    )
    columns = (
        "c.id, c.title, c.description, c.case_number, c.status, c.priority, "
        "c.created_at, c.updated_at, "
        "cl.first_name AS client_first_name, cl.last_name AS client_last_name, "
        "cl.company_name AS client_company"
    )
    source = "cases c LEFT JOIN clients cl ON c.client_id = cl.id"
    order_key = "c.id"
    active_condition = "c.status != 'deleted'"
    owner_condition = "(c.created_by = :user_id OR c.assigned_to = :user_id)"
    filter_specs = {
        "status": FilterSpec("c.status = :status", "status"),
        "priority": FilterSpec("c.priority = :priority", "priority"),
    }

    def to_result(self, row: Mapping[str, Any]) -> SearchResult:
        client_name = (
            full_name(row["client_first_name"], row["client_last_name"])
            or row["client_company"]
        )
        return self.make_result(
            row,
            title=row["title"],
            description=row["description"],
            metadata={
                "caseNumber": row["case_number"],
                "status": row["status"],
                "priority": row["priority"],
                "clientName": client_name,
                "createdAt": row["created_at"],
                "updatedAt": row["updated_at"],
            },
            path="cases",
        )
