"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IAdapterRegistry,
    IEntitySearchAdapter,
    ISearchHistoryRepository,
)
from app.application.interfaces.services import IAnalyticsRecorder, ISearchCache

__all__ = [
    "IAdapterRegistry",
    "IAnalyticsRecorder",
    "IEntitySearchAdapter",
    "ISearchCache",
    "ISearchHistoryRepository",
]
