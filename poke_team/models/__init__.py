"""Shared dataclasses for the team builder."""

from .pokedex import EvolutionNode, LearnableMove
from .team import (
    DEFAULT_LEVEL,
    MAX_LEVEL,
    MAX_SELECTED_MOVES,
    MAX_TEAM_SIZE,
    MIN_LEVEL,
    CoverageEntry,
    MatchupOption,
    MoveSummary,
    PokemonSet,
    Recommendation,
    TeamAnalysis,
    TeamMember,
    WeaknessTally,
    coerce_level,
)
from .types import (
    EffectivenessProfile,
    MalformedTypeDataError,
    TypeRelation,
    TypeTable,
    validate_type_table,
)

__all__ = [
    "DEFAULT_LEVEL",
    "MAX_LEVEL",
    "MAX_SELECTED_MOVES",
    "MAX_TEAM_SIZE",
    "MIN_LEVEL",
    "CoverageEntry",
    "EffectivenessProfile",
    "EvolutionNode",
    "LearnableMove",
    "MalformedTypeDataError",
    "MatchupOption",
    "MoveSummary",
    "PokemonSet",
    "Recommendation",
    "TeamAnalysis",
    "TeamMember",
    "TypeRelation",
    "TypeTable",
    "WeaknessTally",
    "coerce_level",
    "validate_type_table",
]
