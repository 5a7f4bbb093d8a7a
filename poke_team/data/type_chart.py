"""Static type chart used to build an offline Type Relation Table."""

from __future__ import annotations

from typing import Dict, List

from ..models import TypeRelation, TypeTable

TYPE_ORDER: List[str] = [
    "normal",
    "fire",
    "water",
    "electric",
    "grass",
    "ice",
    "fighting",
    "poison",
    "ground",
    "flying",
    "psychic",
    "bug",
    "rock",
    "ghost",
    "dragon",
    "dark",
    "steel",
    "fairy",
]

# Keyed by attacking type.
TYPE_CHART: dict[str, dict[str, tuple[str, ...]]] = {
    "normal": {"double": (), "half": ("rock", "steel"), "zero": ("ghost",)},
    "fire": {
        "double": ("grass", "ice", "bug", "steel"),
        "half": ("fire", "water", "rock", "dragon"),
        "zero": (),
    },
    "water": {
        "double": ("fire", "ground", "rock"),
        "half": ("water", "grass", "dragon"),
        "zero": (),
    },
    "electric": {
        "double": ("water", "flying"),
        "half": ("electric", "grass", "dragon"),
        "zero": ("ground",),
    },
    "grass": {
        "double": ("water", "ground", "rock"),
        "half": ("fire", "grass", "poison", "flying", "bug", "dragon", "steel"),
        "zero": (),
    },
    "ice": {
        "double": ("grass", "ground", "flying", "dragon"),
        "half": ("fire", "water", "ice", "steel"),
        "zero": (),
    },
    "fighting": {
        "double": ("normal", "ice", "rock", "dark", "steel"),
        "half": ("poison", "flying", "psychic", "bug", "fairy"),
        "zero": ("ghost",),
    },
    "poison": {
        "double": ("grass", "fairy"),
        "half": ("poison", "ground", "rock", "ghost"),
        "zero": ("steel",),
    },
    "ground": {
        "double": ("fire", "electric", "poison", "rock", "steel"),
        "half": ("grass", "bug"),
        "zero": ("flying",),
    },
    "flying": {
        "double": ("grass", "fighting", "bug"),
        "half": ("electric", "rock", "steel"),
        "zero": (),
    },
    "psychic": {
        "double": ("fighting", "poison"),
        "half": ("psychic", "steel"),
        "zero": ("dark",),
    },
    "bug": {
        "double": ("grass", "psychic", "dark"),
        "half": ("fire", "fighting", "poison", "flying", "ghost", "steel", "fairy"),
        "zero": (),
    },
    "rock": {
        "double": ("fire", "ice", "flying", "bug"),
        "half": ("fighting", "ground", "steel"),
        "zero": (),
    },
    "ghost": {
        "double": ("psychic", "ghost"),
        "half": ("dark",),
        "zero": ("normal",),
    },
    "dragon": {
        "double": ("dragon",),
        "half": ("steel",),
        "zero": ("fairy",),
    },
    "dark": {
        "double": ("psychic", "ghost"),
        "half": ("fighting", "dark", "fairy"),
        "zero": (),
    },
    "steel": {
        "double": ("ice", "rock", "fairy"),
        "half": ("fire", "water", "electric", "steel"),
        "zero": (),
    },
    "fairy": {
        "double": ("fighting", "dragon", "dark"),
        "half": ("fire", "poison", "steel"),
        "zero": (),
    },
}


def build_static_type_table() -> TypeTable:
    """Invert the attacker-keyed chart into per-type damage relations."""

    taken: Dict[str, Dict[str, List[str]]] = {
        name: {"double": [], "half": [], "zero": []} for name in TYPE_ORDER
    }
    for attacker in TYPE_ORDER:
        for bucket, defenders in TYPE_CHART[attacker].items():
            for defender in defenders:
                taken[defender][bucket].append(attacker)

    table: TypeTable = {}
    for name in TYPE_ORDER:
        dealt = TYPE_CHART[name]
        table[name] = TypeRelation(
            name=name,
            double_damage_from=tuple(taken[name]["double"]),
            half_damage_from=tuple(taken[name]["half"]),
            no_damage_from=tuple(taken[name]["zero"]),
            double_damage_to=dealt["double"],
            half_damage_to=dealt["half"],
            no_damage_to=dealt["zero"],
        )
    return table
