"""Services for ranking exam results and resolving feature flags."""

from .ranking import RankingEngine, assign_competition_ranks
from .features import FeatureFlagService

__all__ = [
    "RankingEngine",
    "assign_competition_ranks",
    "FeatureFlagService",
]
