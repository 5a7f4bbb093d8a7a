"""Type-effectiveness analytics for Pokemon teams."""

from .effectiveness import defensive_profile, effectiveness
from .evolution import format_evolution_condition, next_evolution, parse_evolution_chain
from .learnset import learnable_moves, moves_at_level, upcoming_moves
from .recommender import Recommender, SampleResult, sample_ids, score_candidate
from .team_analyzer import TeamAnalyzer

__all__ = [
    "Recommender",
    "SampleResult",
    "TeamAnalyzer",
    "defensive_profile",
    "effectiveness",
    "format_evolution_condition",
    "learnable_moves",
    "moves_at_level",
    "next_evolution",
    "parse_evolution_chain",
    "sample_ids",
    "score_candidate",
    "upcoming_moves",
]
