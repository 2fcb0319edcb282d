"""Expense search: description and category; case and client for display."""

from collections.abc import Mapping
from typing import Any

from app.application.dtos.search import SearchResult
from app.domain.enums import EntityType
from app.infrastructure.persistence.repositories.search_adapters.base import (
    EntitySearchAdapter,
    FilterSpec,
    as_bool,
    full_name,
    money,
)


class ExpenseSearchAdapter(EntitySearchAdapter):
    """Expenses (no archival state). Owned when created by the user."""

    entity_type = EntityType.EXPENSES
    document = "COALESCE(e.description, '') || ' ' || COALESCE(e.category, '')"
    columns = (
        "e.id, e.description, e.amount, e.category, e.expense_date, e.is_approved, "
        "e.created_at, e.updated_at, c.title AS case_title, "
        "cl.first_name AS client_first_name, cl.last_name AS client_last_name"
    )
    source = (
        "expenses e "
        "LEFT JOIN cases c ON e.case_id = c.id "
        "LEFT JOIN clients cl ON e.client_id = cl.id"
    )
    order_key = "e.id"
    owner_condition = "e.created_by = :user_id"
    filter_specs = {
        "category": FilterSpec("e.category = :category", "category"),
        "isApproved": FilterSpec("e.is_approved = :is_approved", "is_approved", as_bool),
    }

    def to_result(self, row: Mapping[str, Any]) -> SearchResult:
        return self.make_result(
            row,
            title=row["description"],
            description=f"{money(row['amount'])} - {row['category']}",
            metadata={
                "amount": row["amount"],
                "category": row["category"],
                "expenseDate": row["expense_date"],
                "isApproved": row["is_approved"],
                "caseTitle": row["case_title"],
                "clientName": full_name(row["client_first_name"], row["client_last_name"]),
                "createdAt": row["created_at"],
                "updatedAt": row["updated_at"],
            },
            path="expenses",
        )
