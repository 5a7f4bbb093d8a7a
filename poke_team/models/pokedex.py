"""Dataclasses describing evolution chains and learnsets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class EvolutionNode:
    """One species of a flattened evolution chain.

    Only the first evolution-detail entry of the source node is kept.
    """

    species: str
    min_level: Optional[int] = None
    trigger: Optional[str] = None
    item: Optional[str] = None
    min_happiness: Optional[int] = None
    time_of_day: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LearnableMove:
    name: str
    url: Optional[str] = None
    level: int = 0
