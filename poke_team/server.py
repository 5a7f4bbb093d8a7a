"""FastMCP server exposing team-building tools."""

from __future__ import annotations

import sys
from dataclasses import asdict
from typing import Annotated, Any, Dict, List

from fastmcp import FastMCP

from .analysis import effectiveness, format_evolution_condition, parse_evolution_chain
from .clients import PokeAPIClientError
from .config import Settings
from .services import MemorySnapshotStore, TeamSession, create_session

app = FastMCP("poke-team", version="0.1.0")
_settings = Settings.from_env()
_session = create_session(_settings, store=MemorySnapshotStore())


def _scratch_session(team_text: str) -> tuple[TeamSession, List[str]]:
    """Fresh roster sharing the client and type table of the server session."""

    session = TeamSession(
        _session.client,
        store=MemorySnapshotStore(),
        type_table=_session.ensure_type_table(),
        max_recommendations=_settings.max_recommendations,
    )
    problems = session.import_team(team_text)
    return session, problems


@app.tool()
def calculate_type_matchup(
    attacker_type: Annotated[str, "Attacking type"],
    defender_types: Annotated[str, "Defending type or two types separated by a comma"],
) -> str:
    """Return the effectiveness multiplier of an attacking type against a defender typing."""

    try:
        table = _session.ensure_type_table()
    except PokeAPIClientError as exc:  # pragma: no cover - network failure
        return f"Error fetching type data: {exc}"

    defenders = [part.strip().lower() for part in defender_types.split(",") if part.strip()]
    multiplier = effectiveness(attacker_type.strip().lower(), defenders, table)
    return f"{attacker_type.title()} vs {'/'.join(d.title() for d in defenders)} -> {multiplier}x"


@app.tool()
def get_pokemon_data(
    species: Annotated[str, "Species name or national dex number (e.g., 'pikachu' or '25')"],
) -> str:
    """Get basic typing and stat info for a Pokémon via PokéAPI."""

    data = _session.client.search_pokemon(species)
    if data is None:
        return f"No Pokémon found for {species}"

    stats = {entry["stat"]["name"]: entry["base_stat"] for entry in data.get("stats", [])}
    types = [slot["type"]["name"] for slot in data.get("types", [])]
    return (
        f"Name: {data.get('name', species)} (#{data.get('id')})\n"
        f"Types: {', '.join(types) or 'unknown'}\n"
        f"Stats: {stats or 'unknown'}"
    )


@app.tool()
def analyze_team(
    team_text: Annotated[str, "Showdown export text (species, level and moves are used)"],
) -> Dict[str, Any]:
    """Report offensive coverage, shared weaknesses and coverage gaps for a team."""

    session, problems = _scratch_session(team_text)
    report = session.analysis()
    return {
        "team": [member.to_snapshot() for member in session.team],
        "coverage": {
            type_name: [asdict(entry) for entry in entries]
            for type_name, entries in report.coverage.items()
        },
        "weaknesses": {type_name: asdict(tally) for type_name, tally in report.ranked_weaknesses()},
        "coverage_gaps": report.coverage_gaps,
        "skipped": problems,
    }


@app.tool()
def recommend_pokemon(
    team_text: Annotated[str, "Showdown export text"],
    generations: Annotated[str, "Comma separated generation numbers, e.g. '1,2,3'"] = "1,2,3,4,5,6,7,8,9",
    limit: Annotated[int, "Maximum number of recommendations"] = 10,
) -> List[Dict[str, Any]]:
    """Suggest Pokémon that patch the team's weaknesses and coverage gaps."""

    session, _ = _scratch_session(team_text)
    session.set_generations(int(part) for part in generations.split(",") if part.strip())
    return [asdict(rec) for rec in session.recommendations(limit)]


@app.tool()
def get_evolution_chain(
    species: Annotated[str, "Species name or national dex number"],
) -> List[Dict[str, Any]]:
    """List a species' evolution family in order with the condition for each step."""

    chain = parse_evolution_chain(_session.client.get_pokemon_evolution_chain(species))
    return [
        {
            **asdict(node),
            "condition": format_evolution_condition(node) if idx else "Base form",
        }
        for idx, node in enumerate(chain)
    ]


def run() -> None:
    """Entry point for `python -m poke_team.server` or console script."""

    print("[poke-team] Starting MCP server. Press Ctrl+C to stop.", file=sys.stderr)
    app.run()


if __name__ == "__main__":
    run()
