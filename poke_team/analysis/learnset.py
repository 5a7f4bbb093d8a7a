"""Learnset queries over a PokeAPI ``pokemon`` payload."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from ..models import LearnableMove

LEVEL_UP = "level-up"

# PokeAPI learn method -> bucket name
LEARN_METHODS = {
    "level-up": "level_up",
    "machine": "machine",
    "egg": "egg",
    "tutor": "tutor",
}


def _level_up_levels(entry: Mapping[str, Any]) -> List[int]:
    return [
        detail.get("level_learned_at", 0)
        for detail in entry.get("version_group_details", [])
        if (detail.get("move_learn_method") or {}).get("name") == LEVEL_UP
    ]


def moves_at_level(pokemon: Mapping[str, Any], level: int) -> List[LearnableMove]:
    """Level-up moves already available at ``level``, most recent first."""

    moves: List[LearnableMove] = []
    for entry in pokemon.get("moves", []):
        levels = [learned for learned in _level_up_levels(entry) if learned <= level]
        if not levels:
            continue
        moves.append(
            LearnableMove(
                name=entry["move"]["name"],
                url=entry["move"].get("url"),
                level=max(levels),
            )
        )
    return sorted(moves, key=lambda move: move.level, reverse=True)


def upcoming_moves(pokemon: Mapping[str, Any], level: int, count: int = 5) -> List[LearnableMove]:
    """The next ``count`` level-up moves learned above ``level``."""

    moves: List[LearnableMove] = []
    for entry in pokemon.get("moves", []):
        levels = [learned for learned in _level_up_levels(entry) if learned > level]
        if not levels:
            continue
        moves.append(
            LearnableMove(
                name=entry["move"]["name"],
                url=entry["move"].get("url"),
                level=min(levels),
            )
        )
    return sorted(moves, key=lambda move: move.level)[:count]


def learnable_moves(pokemon: Mapping[str, Any]) -> Dict[str, List[LearnableMove]]:
    """All learnable moves grouped by learn method, one entry per move name."""

    grouped: Dict[str, List[LearnableMove]] = {bucket: [] for bucket in LEARN_METHODS.values()}
    seen: Dict[str, set[str]] = {bucket: set() for bucket in LEARN_METHODS.values()}
    for entry in pokemon.get("moves", []):
        name = entry["move"]["name"]
        for detail in entry.get("version_group_details", []):
            bucket = LEARN_METHODS.get((detail.get("move_learn_method") or {}).get("name"))
            if bucket is None or name in seen[bucket]:
                continue
            seen[bucket].add(name)
            grouped[bucket].append(
                LearnableMove(
                    name=name,
                    url=entry["move"].get("url"),
                    level=detail.get("level_learned_at", 0),
                )
            )
    grouped["level_up"].sort(key=lambda move: move.level)
    return grouped
