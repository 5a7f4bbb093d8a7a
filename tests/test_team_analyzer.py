"""Tests for the TeamAnalyzer coverage and weakness aggregation."""

from __future__ import annotations

from poke_team.analysis import TeamAnalyzer
from poke_team.data import TYPE_ORDER, build_static_type_table
from poke_team.models import MoveSummary, TeamMember

TABLE = build_static_type_table()


def _member(pid: int, name: str, types, moves=()) -> TeamMember:
    return TeamMember(
        id=pid,
        name=name,
        types=list(types),
        selected_moves=[MoveSummary(name=move, type=move_type) for move, move_type in moves],
    )


def test_coverage_records_super_effective_moves() -> None:
    team = [
        _member(9, "blastoise", ["water"], [("surf", "water")]),
        _member(25, "pikachu", ["electric"], [("thunderbolt", "electric")]),
    ]

    report = TeamAnalyzer(TABLE).analyze(team)

    assert [entry.move for entry in report.coverage["fire"]] == ["surf"]
    assert [entry.pokemon for entry in report.coverage["water"]] == ["pikachu"]
    assert report.coverage["flying"][0].multiplier == 2.0
    assert set(report.coverage) == {"fire", "ground", "rock", "water", "flying"}


def test_coverage_gaps_are_uncovered_types_in_chart_order() -> None:
    team = [_member(9, "blastoise", ["water"], [("surf", "water")])]

    gaps = TeamAnalyzer(TABLE).coverage_gaps(team)

    assert gaps == [name for name in TYPE_ORDER if name not in {"fire", "ground", "rock"}]


def test_team_without_moves_has_every_type_as_gap() -> None:
    report = TeamAnalyzer(TABLE).analyze([_member(1, "bulbasaur", ["grass", "poison"])])

    assert report.coverage == {}
    assert report.coverage_gaps == TYPE_ORDER


def test_shared_weaknesses_are_counted_per_member() -> None:
    team = [
        _member(6, "charizard", ["fire", "flying"]),
        _member(38, "ninetales", ["fire"]),
        _member(9, "blastoise", ["water"]),
    ]

    report = TeamAnalyzer(TABLE).analyze(team)

    rock = report.weaknesses["rock"]
    assert rock.count == 2
    assert rock.multipliers == [4.0, 2.0]
    assert report.weaknesses["electric"].count == 2
    assert report.weaknesses["ground"].count == 1
    assert report.ranked_weaknesses()[0][1].count == 2


def test_empty_team_analysis() -> None:
    report = TeamAnalyzer(TABLE).analyze([])

    assert report.coverage == {}
    assert report.weaknesses == {}
    assert report.coverage_gaps == TYPE_ORDER


def test_battle_matchup_lists_members_with_super_effective_moves() -> None:
    team = [
        _member(9, "blastoise", ["water"], [("surf", "water"), ("ice-beam", "ice")]),
        _member(25, "pikachu", ["electric"], [("thunderbolt", "electric")]),
        _member(143, "snorlax", ["normal"], [("body-slam", "normal")]),
    ]

    options = TeamAnalyzer(TABLE).battle_matchup(team, ["ground", "rock"])

    assert [option.pokemon for option in options] == ["blastoise"]
    assert [move.name for move in options[0].moves] == ["surf", "ice-beam"]


def test_battle_matchup_respects_immunities() -> None:
    team = [_member(25, "pikachu", ["electric"], [("thunderbolt", "electric")])]

    assert TeamAnalyzer(TABLE).battle_matchup(team, ["water", "ground"]) == []
