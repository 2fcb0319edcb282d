"""Query normalization and term extraction."""

import pytest

from app.application.services.query_normalizer import (
    extract_terms,
    normalize_query,
    normalize_text,
)
from app.domain.exceptions import InvalidQueryException, ValidationException


@pytest.mark.parametrize("raw", ["", " ", "a", " a ", "\tb\n", None])
def test_short_queries_are_rejected(raw) -> None:
    with pytest.raises(InvalidQueryException) as exc_info:
        normalize_query(raw)
    assert isinstance(exc_info.value, ValidationException)
    assert exc_info.value.error_code == "VALIDATION_ERROR"
    assert exc_info.value.details == {"field": "query", "min_length": 2}


def test_two_characters_are_enough() -> None:
    assert normalize_query("ab") == "ab"
    assert normalize_query("  Ab  ") == "ab"


def test_length_is_checked_before_punctuation_is_removed() -> None:
    assert normalize_query("c#") == "c"


def test_punctuation_and_whitespace_are_collapsed() -> None:
    assert normalize_query("Smith & Jones,  LLP!") == "smith jones llp"
    assert normalize_text("contract-review\t2025") == "contract review 2025"
    assert normalize_text("!!!") == ""


def test_unicode_letters_survive() -> None:
    assert normalize_text("Müller–Café") == "müller café"


def test_extract_terms_keeps_order_and_repeats() -> None:
    assert extract_terms("Contract review of a contract") == [
        "contract",
        "review",
        "contract",
    ]


def test_extract_terms_drops_short_words() -> None:
    assert extract_terms("to be or not") == ["not"]
    assert extract_terms("ab cd", min_length=2) == ["ab", "cd"]
