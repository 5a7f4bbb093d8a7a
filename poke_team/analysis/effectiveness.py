"""Type effectiveness calculator and defensive profile builder."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..models import EffectivenessProfile, TypeRelation


def effectiveness(
    attack_type: Optional[str],
    defender_types: Sequence[str],
    type_table: Mapping[str, TypeRelation],
) -> float:
    """Damage multiplier of ``attack_type`` against a one- or two-type defender.

    Defender types missing from the table count as neutral.
    """

    attack = (attack_type or "").lower()
    multiplier = 1.0
    for defender in defender_types:
        relation = type_table.get(defender.lower())
        if relation is None:
            continue
        if attack in relation.double_damage_from:
            multiplier *= 2.0
        elif attack in relation.half_damage_from:
            multiplier *= 0.5
        elif attack in relation.no_damage_from:
            return 0.0
    return multiplier


def defensive_profile(
    defender_types: Sequence[str],
    type_table: Mapping[str, TypeRelation],
) -> EffectivenessProfile:
    """Classify every attacking type in the table against ``defender_types``."""

    profile = EffectivenessProfile()
    for attack_type in type_table:
        multiplier = effectiveness(attack_type, defender_types, type_table)
        if multiplier == 0:
            profile.immunities.append(attack_type)
        elif multiplier >= 2:
            profile.weaknesses[attack_type] = multiplier
        elif multiplier <= 0.5:
            profile.resistances[attack_type] = multiplier
    return profile
