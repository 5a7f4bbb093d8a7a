"""Tests for learnset queries."""

from __future__ import annotations

from poke_team.analysis import learnable_moves, moves_at_level, upcoming_moves


def _move(name, *details):
    return {
        "move": {"name": name, "url": f"https://pokeapi.co/api/v2/move/{name}/"},
        "version_group_details": [
            {"level_learned_at": level, "move_learn_method": {"name": method}}
            for method, level in details
        ],
    }


CHARMANDER = {
    "id": 4,
    "name": "charmander",
    "moves": [
        _move("scratch", ("level-up", 1)),
        _move("ember", ("level-up", 4), ("level-up", 7)),
        _move("dragon-breath", ("level-up", 12)),
        _move("fire-fang", ("level-up", 17)),
        _move("flamethrower", ("level-up", 24), ("machine", 0)),
        _move("dragon-dance", ("egg", 0)),
        _move("fire-punch", ("tutor", 0)),
        _move("swords-dance", ("machine", 0), ("machine", 0)),
    ],
}


def test_moves_at_level_most_recent_first() -> None:
    moves = moves_at_level(CHARMANDER, 12)

    assert [(move.name, move.level) for move in moves] == [
        ("dragon-breath", 12),
        ("ember", 7),
        ("scratch", 1),
    ]


def test_moves_at_level_ignores_later_learn_levels() -> None:
    moves = moves_at_level(CHARMANDER, 5)

    assert [(move.name, move.level) for move in moves] == [("ember", 4), ("scratch", 1)]


def test_upcoming_moves_ascending_and_limited() -> None:
    moves = upcoming_moves(CHARMANDER, 5, count=2)

    assert [(move.name, move.level) for move in moves] == [("ember", 7), ("dragon-breath", 12)]


def test_upcoming_moves_at_max_level() -> None:
    assert upcoming_moves(CHARMANDER, 100) == []


def test_learnable_moves_grouped_by_method() -> None:
    grouped = learnable_moves(CHARMANDER)

    assert [move.name for move in grouped["level_up"]] == [
        "scratch",
        "ember",
        "dragon-breath",
        "fire-fang",
        "flamethrower",
    ]
    assert [move.name for move in grouped["machine"]] == ["flamethrower", "swords-dance"]
    assert [move.name for move in grouped["egg"]] == ["dragon-dance"]
    assert [move.name for move in grouped["tutor"]] == ["fire-punch"]
