"""Search query normalization (pure functions, no I/O)."""

from __future__ import annotations

import re

from app.core.constants import MIN_QUERY_LENGTH, MIN_TERM_LENGTH
from app.domain.exceptions import InvalidQueryException

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(raw: str) -> str:
    """Replace punctuation with spaces, collapse whitespace, trim, lowercase."""
    cleaned = _NON_WORD.sub(" ", raw or "")
    return _WHITESPACE.sub(" ", cleaned).strip().lower()


def normalize_query(raw: str) -> str:
    """Validate and normalize a search query for the full-text store.

    The length check runs on the trimmed original text, before punctuation
    is stripped, so "a." is rejected but "c#" is accepted.

    Raises:
        InvalidQueryException: If the trimmed query is shorter than 2 characters.
    """
    if raw is None or len(raw.strip()) < MIN_QUERY_LENGTH:
        raise InvalidQueryException(MIN_QUERY_LENGTH)
    return normalize_text(raw)


def extract_terms(raw: str, min_length: int = MIN_TERM_LENGTH) -> list[str]:
    """Return normalized terms of at least min_length chars, in order, repeats kept."""
    return [term for term in normalize_text(raw).split(" ") if len(term) >= min_length]
