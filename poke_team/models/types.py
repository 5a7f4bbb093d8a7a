"""Type relation dataclasses backing the effectiveness calculations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Tuple


class MalformedTypeDataError(ValueError):
    """Raised when damage relation data breaks the type chart invariants."""


_FROM_FIELDS = ("double_damage_from", "half_damage_from", "no_damage_from")
_TO_FIELDS = ("double_damage_to", "half_damage_to", "no_damage_to")


def _names(entries: Iterable[Any]) -> Tuple[str, ...]:
    names: List[str] = []
    for entry in entries or ():
        if isinstance(entry, Mapping):
            name = entry.get("name")
        else:
            name = entry
        if not isinstance(name, str) or not name:
            raise MalformedTypeDataError(f"Invalid type reference: {entry!r}")
        names.append(name.strip().lower())
    return tuple(names)


@dataclass(frozen=True, slots=True)
class TypeRelation:
    """Damage relations for a single elemental type.

    The ``*_from`` sets describe how the type fares when defending; the
    ``*_to`` sets describe how moves of this type fare when attacking.
    """

    name: str
    double_damage_from: Tuple[str, ...] = ()
    half_damage_from: Tuple[str, ...] = ()
    no_damage_from: Tuple[str, ...] = ()
    double_damage_to: Tuple[str, ...] = ()
    half_damage_to: Tuple[str, ...] = ()
    no_damage_to: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        seen: Dict[str, str] = {}
        for relation in _FROM_FIELDS:
            for attacker in getattr(self, relation):
                if attacker in seen:
                    raise MalformedTypeDataError(
                        f"{attacker} listed in both {seen[attacker]} and {relation} of {self.name}"
                    )
                seen[attacker] = relation

    @classmethod
    def from_damage_relations(cls, name: str, relations: Mapping[str, Any]) -> "TypeRelation":
        """Build a relation from a PokeAPI ``damage_relations`` payload."""

        if not isinstance(relations, Mapping):
            raise MalformedTypeDataError(f"damage_relations for {name} is not a mapping")
        values = {key: _names(relations.get(key, [])) for key in _FROM_FIELDS + _TO_FIELDS}
        return cls(name=name.strip().lower(), **values)

    def to_dict(self) -> Dict[str, List[str]]:
        return {key: list(getattr(self, key)) for key in _FROM_FIELDS + _TO_FIELDS}


# Keyed by lower-case type name, in chart order.
TypeTable = Dict[str, TypeRelation]


def validate_type_table(table: Mapping[str, TypeRelation], expected: Iterable[str]) -> None:
    """Fail loudly when a loaded table does not cover the expected types."""

    missing = [name for name in expected if name not in table]
    if missing:
        raise MalformedTypeDataError(f"Type table is missing: {', '.join(missing)}")
    for key, relation in table.items():
        if relation.name != key:
            raise MalformedTypeDataError(f"Type table key {key} holds relation {relation.name}")


@dataclass(slots=True)
class EffectivenessProfile:
    """Defensive profile of a typing against every attacking type."""

    weaknesses: Dict[str, float] = field(default_factory=dict)
    resistances: Dict[str, float] = field(default_factory=dict)
    immunities: List[str] = field(default_factory=list)

    def covers(self, attack_type: str) -> bool:
        """True when the typing resists or is immune to ``attack_type``."""

        return attack_type in self.resistances or attack_type in self.immunities
