"""Settings validation for search tuning."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings


def test_defaults() -> None:
    settings = Settings()
    assert settings.search_results_cache_ttl == 300
    assert settings.search_suggestions_cache_ttl == 3600
    assert settings.search_default_limit == 50
    assert settings.search_max_limit == 100
    assert settings.popular_terms_window_days == 30


@pytest.mark.parametrize(
    "overrides",
    [
        {"search_max_limit": 0},
        {"search_default_limit": 0},
        {"search_default_limit": 200},
        {"search_adapter_timeout_seconds": 0},
        {"search_adapter_retries": -1},
    ],
)
def test_invalid_search_settings_are_rejected(overrides) -> None:
    with pytest.raises(ValidationError):
        Settings(**overrides)
