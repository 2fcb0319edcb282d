"""Document search: title, description and file name; owning case for display."""

from collections.abc import Mapping
from typing import Any

from app.application.dtos.search import SearchResult
from app.domain.enums import EntityType
from app.infrastructure.persistence.repositories.search_adapters.base import (
    EntitySearchAdapter,
    FilterSpec,
)


class DocumentSearchAdapter(EntitySearchAdapter):
    """Documents; archived means is_deleted = true. Owned when uploaded by the user."""

    entity_type = EntityType.DOCUMENTS
    document = (
        "COALESCE(d.title, '') || ' ' || "
        "COALESCE(d.description, '') || ' ' || "
        "COALESCE(d.file_name, '')"
    )
    columns = (
        "d.id, d.title, d.description, d.file_name, d.file_type, d.case_id, "
        "d.created_at, d.updated_at, c.title AS case_title"
    )
    source = "documents d LEFT JOIN cases c ON d.case_id = c.id"
    order_key = "d.id"
    active_condition = "d.is_deleted = false"
    owner_condition = "d.uploaded_by = :user_id"
    filter_specs = {
        "fileType": FilterSpec("d.file_type = :file_type", "file_type"),
        "caseId": FilterSpec("d.case_id = :case_id", "case_id"),
    }

    def to_result(self, row: Mapping[str, Any]) -> SearchResult:
        return self.make_result(
            row,
            title=row["title"] or row["file_name"],
            description=row["description"],
            metadata={
                "fileName": row["file_name"],
                "fileType": row["file_type"],
                "caseId": row["case_id"],
                "caseTitle": row["case_title"],
                "createdAt": row["created_at"],
                "updatedAt": row["updated_at"],
            },
            path="documents",
        )
