"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import EntityType, SortBy, SortOrder
from app.domain.exceptions import (
    AdapterException,
    InvalidQueryException,
    PersistenceException,
    PracticeSearchException,
    SqlNotConfiguredException,
    ValidationException,
)

__all__ = [
    "AdapterException",
    "EntityType",
    "InvalidQueryException",
    "PersistenceException",
    "PracticeSearchException",
    "SortBy",
    "SortOrder",
    "SqlNotConfiguredException",
    "ValidationException",
]
