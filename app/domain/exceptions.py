"""Domain exceptions for the search service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.

Only ValidationException escapes a search call; adapter, cache and
persistence failures are recovered where they occur.
"""

from typing import Any


class PracticeSearchException(Exception):
    """Base exception for all search service errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, entity_type).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(PracticeSearchException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidQueryException(ValidationException):
    """Raised when the search query is too short after trimming."""

    def __init__(self, min_length: int) -> None:
        super().__init__(
            f"Search query must be at least {min_length} characters long",
            field="query",
        )
        self.details["min_length"] = min_length


class AdapterException(PracticeSearchException):
    """Raised inside an entity adapter; always recovered to an empty result list."""

    def __init__(self, entity_type: str, message: str) -> None:
        super().__init__(message, "ADAPTER_ERROR", {"entity_type": entity_type})


class PersistenceException(PracticeSearchException):
    """Raised when the search history / popularity store fails."""

    def __init__(self, operation: str, message: str | None = None) -> None:
        super().__init__(
            message or f"Search analytics store failed during {operation}",
            "PERSISTENCE_ERROR",
            {"operation": operation},
        )


class SqlNotConfiguredException(PracticeSearchException):
    """Raised when an operation requires Postgres but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
