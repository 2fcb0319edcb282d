"""add search_history and search_popular_terms tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

Append-only query history and one row per query term occurrence; both are
read grouped by text and ordered by count.
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

revision: str = "a1b2c3d4e5f6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "search_history",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("query", sa.Text(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("results_count", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_search_history_query", "search_history", ["query"], unique=False)
    op.create_index("ix_search_history_user_id", "search_history", ["user_id"], unique=False)
    op.create_index(
        "ix_search_history_created_at", "search_history", ["created_at"], unique=False
    )

    op.create_table(
        "search_popular_terms",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("term", sa.String(length=255), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_search_popular_terms_term", "search_popular_terms", ["term"], unique=False
    )
    op.create_index(
        "ix_search_popular_terms_created_at",
        "search_popular_terms",
        ["created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_search_popular_terms_created_at", table_name="search_popular_terms")
    op.drop_index("ix_search_popular_terms_term", table_name="search_popular_terms")
    op.drop_table("search_popular_terms")
    op.drop_index("ix_search_history_created_at", table_name="search_history")
    op.drop_index("ix_search_history_user_id", table_name="search_history")
    op.drop_index("ix_search_history_query", table_name="search_history")
    op.drop_table("search_history")
