"""Shared utilities: datetime, generators, serialization."""

from app.shared.utils.datetime import days_ago, ensure_utc, utc_now
from app.shared.utils.generators import generate_cuid
from app.shared.utils.serialization import json_safe_metadata, to_json_value

__all__ = [
    "days_ago",
    "ensure_utc",
    "generate_cuid",
    "json_safe_metadata",
    "to_json_value",
    "utc_now",
]
