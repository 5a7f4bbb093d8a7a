"""Pokemon team builder with type coverage analytics."""

from .analysis.recommender import Recommender
from .analysis.team_analyzer import TeamAnalyzer
from .services.team_session import TeamSession

__all__ = [
    "Recommender",
    "TeamAnalyzer",
    "TeamSession",
]
