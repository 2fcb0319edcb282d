"""Invoice search: invoice number plus case title and client name."""

from collections.abc import Mapping
from typing import Any

from app.application.dtos.search import SearchResult
from app.domain.enums import EntityType
from app.infrastructure.persistence.repositories.search_adapters.base import (
    EntitySearchAdapter,
    FilterSpec,
    full_name,
    money,
)


class InvoiceSearchAdapter(EntitySearchAdapter):
    """Invoices (no archival state). Owned when created by the user."""

    entity_type = EntityType.INVOICES
    document = (
        "COALESCE(i.invoice_number, '') || ' ' || "
        "COALESCE(c.title, '') || ' ' || "
        "COALESCE(cl.first_name, '') || ' ' || "
        "COALESCE(cl.last_name, '')"
    )
    columns = (
        "i.id, i.invoice_number, i.amount, i.status, i.due_date, "
        "i.created_at, i.updated_at, c.title AS case_title, "
        "cl.first_name AS client_first_name, cl.last_name AS client_last_name"
    )
    source = (
        "invoices i "
        "LEFT JOIN cases c ON i.case_id = c.id "
        "LEFT JOIN clients cl ON i.client_id = cl.id"
    )
    order_key = "i.id"
    owner_condition = "i.created_by = :user_id"
    filter_specs = {
        "status": FilterSpec("i.status = :status", "status"),
    }

    def to_result(self, row: Mapping[str, Any]) -> SearchResult:
        return self.make_result(
            row,
            title=f"Invoice {row['invoice_number']}",
            description=f"{money(row['amount'])} - {row['status']}",
            metadata={
                "invoiceNumber": row["invoice_number"],
                "amount": row["amount"],
                "status": row["status"],
                "dueDate": row["due_date"],
                "caseTitle": row["case_title"],
                "clientName": full_name(row["client_first_name"], row["client_last_name"]),
                "createdAt": row["created_at"],
                "updatedAt": row["updated_at"],
            },
            path="invoices",
        )
