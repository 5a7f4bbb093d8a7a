"""Tests for the Showdown export parser."""

import pytest

from poke_team.parsers import parse_team

SAMPLE_TEAM = """Hatterene @ Safety Goggles
Ability: Magic Bounce
Level: 50
Tera Type: Fairy
EVs: 252 HP / 4 SpA / 252 SpD
Sassy Nature
- Trick Room
- Reflect
- Dazzling Gleam
- Heal Pulse

Toad (Amoonguss) (F) @ Leftovers
Ability: Effect Spore
- Foul Play
- Spore

Mr. Mime (M)
Level: high
- Psychic
"""


def test_parse_team_extracts_pokemon_sets() -> None:
    team = parse_team(SAMPLE_TEAM)

    assert len(team) == 3
    hatterene = team[0]
    assert hatterene.name == "Hatterene"
    assert hatterene.species == "Hatterene"
    assert hatterene.item == "Safety Goggles"
    assert hatterene.level == 50
    assert hatterene.moves == ["Trick Room", "Reflect", "Dazzling Gleam", "Heal Pulse"]
    assert "Tera Type: Fairy" in hatterene.notes


def test_parse_team_resolves_nicknames_and_gender() -> None:
    _, amoonguss, mime = parse_team(SAMPLE_TEAM)

    assert amoonguss.name == "Toad (Amoonguss) (F)"
    assert amoonguss.species == "Amoonguss"
    assert amoonguss.moves[-1] == "Spore"

    assert mime.species == "Mr. Mime"
    assert mime.item is None
    assert mime.level is None


def test_parse_team_rejects_empty_text() -> None:
    with pytest.raises(ValueError):
        parse_team("\n  \n")
