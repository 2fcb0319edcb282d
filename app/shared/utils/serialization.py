"""JSON-safe conversion for values read from the relational store.

Row values such as NUMERIC amounts (Decimal), DATE columns and UUID keys
must become plain JSON types before they go into result metadata, which is
both returned over HTTP and stored in the cache.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from app.shared.utils.datetime import ensure_utc


def to_json_value(value: Any) -> Any:
    """Convert a single DB value to a JSON-serializable value."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, datetime):
        return ensure_utc(value).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, dict):
        return {str(k): to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_json_value(v) for v in value]
    return str(value)


def json_safe_metadata(metadata: dict[str, Any]) -> dict[str, Any]:
    """Convert every metadata value with to_json_value."""
    return {key: to_json_value(value) for key, value in metadata.items()}
