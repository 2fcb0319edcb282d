"""Time entry search: description plus case and task titles."""

from collections.abc import Mapping
from typing import Any

from app.application.dtos.search import SearchResult
from app.domain.enums import EntityType
from app.infrastructure.persistence.repositories.search_adapters.base import (
    EntitySearchAdapter,
    FilterSpec,
    as_date,
)
from app.shared.utils.serialization import to_json_value


class TimeEntrySearchAdapter(EntitySearchAdapter):
    """Time entries (no archival state). Owned when logged by the user."""

    entity_type = EntityType.TIME_ENTRIES
    document = (
        "COALESCE(te.description, '') || ' ' || "
        "COALESCE(c.title, '') || ' ' || "
        "COALESCE(t.title, '')"
    )
    columns = (
        "te.id, te.description, te.duration_minutes, te.date, "
        "te.created_at, te.updated_at, c.title AS case_title, t.title AS task_title"
    )
    source = (
        "time_entries te "
        "LEFT JOIN cases c ON te.case_id = c.id "
        "LEFT JOIN tasks t ON te.task_id = t.id"
    )
    order_key = "te.id"
    owner_condition = "te.user_id = :user_id"
    filter_specs = {
        "dateFrom": FilterSpec("te.date >= :date_from", "date_from", as_date),
        "dateTo": FilterSpec("te.date <= :date_to", "date_to", as_date),
    }

    def to_result(self, row: Mapping[str, Any]) -> SearchResult:
        return self.make_result(
            row,
            title=row["description"],
            description=f"{row['duration_minutes']} minutes - {to_json_value(row['date'])}",
            metadata={
                "durationMinutes": row["duration_minutes"],
                "date": row["date"],
                "caseTitle": row["case_title"],
                "taskTitle": row["task_title"],
                "createdAt": row["created_at"],
                "updatedAt": row["updated_at"],
            },
            path="time-entries",
        )
