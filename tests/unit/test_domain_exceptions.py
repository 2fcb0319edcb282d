"""Domain exception payloads."""

from app.domain.exceptions import (
    AdapterException,
    InvalidQueryException,
    PersistenceException,
    PracticeSearchException,
    SqlNotConfiguredException,
    ValidationException,
)


def test_base_exception_defaults_error_code_to_class_name() -> None:
    exc = PracticeSearchException("boom")
    assert exc.error_code == "PracticeSearchException"
    assert exc.to_dict() == {"error": "PracticeSearchException", "message": "boom", "details": {}}


def test_validation_exception_carries_field() -> None:
    exc = ValidationException("limit must be between 1 and 100", field="limit")
    assert exc.to_dict()["details"] == {"field": "limit"}
    assert ValidationException("bad").details == {}


def test_invalid_query_is_a_validation_error() -> None:
    exc = InvalidQueryException(2)
    assert isinstance(exc, ValidationException)
    assert exc.error_code == "VALIDATION_ERROR"
    assert "at least 2 characters" in exc.message


def test_infrastructure_error_codes() -> None:
    assert AdapterException("cases", "timeout").details == {"entity_type": "cases"}
    persistence = PersistenceException("add_query")
    assert persistence.error_code == "PERSISTENCE_ERROR"
    assert "add_query" in persistence.message
    assert SqlNotConfiguredException().error_code == "SERVICE_UNAVAILABLE"
