"""Task search: title and description; owning case for display."""

from collections.abc import Mapping
from typing import Any

from app.application.dtos.search import SearchResult
from app.domain.enums import EntityType
from app.infrastructure.persistence.repositories.search_adapters.base import (
    EntitySearchAdapter,
    FilterSpec,
)


class TaskSearchAdapter(EntitySearchAdapter):
    """Tasks (no archival state). Owned when assigned to the user."""

    entity_type = EntityType.TASKS
    document = "COALESCE(t.title, '') || ' ' || COALESCE(t.description, '')"
    columns = (
        "t.id, t.title, t.description, t.status, t.priority, t.due_date, "
        "t.created_at, t.updated_at, c.title AS case_title"
    )
    source = "tasks t LEFT JOIN cases c ON t.case_id = c.id"
    order_key = "t.id"
    owner_condition = "t.assigned_to = :user_id"
    filter_specs = {
        "status": FilterSpec("t.status = :status", "status"),
        "priority": FilterSpec("t.priority = :priority", "priority"),
    }

    def to_result(self, row: Mapping[str, Any]) -> SearchResult:
        return self.make_result(
            row,
            title=row["title"],
            description=row["description"],
            metadata={
                "status": row["status"],
                "priority": row["priority"],
                "dueDate": row["due_date"],
                "caseTitle": row["case_title"],
                "createdAt": row["created_at"],
                "updatedAt": row["updated_at"],
            },
            path="tasks",
        )
