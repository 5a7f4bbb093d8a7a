"""Command-line interface for managing a Pokemon team and its type analysis."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from poke_team.analysis import format_evolution_condition, parse_evolution_chain
from poke_team.clients import PokeAPIClientError, PokeAPINotFoundError
from poke_team.config import Settings
from poke_team.formatting import format_name
from poke_team.services import TeamError, TeamSession, create_session


def _read_team_text(path: str) -> str:
    if path == "-":
        data = sys.stdin.read()
        if not data.strip():
            raise SystemExit("No team text provided on stdin.")
        return data
    file_path = Path(path)
    if not file_path.exists():
        raise SystemExit(f"File not found: {file_path}")
    return file_path.read_text(encoding="utf-8")


def _debug_print(enabled: bool, message: str) -> None:
    if enabled:
        sys.stderr.write(f"[debug] {message}\n")


def _humanize_team(session: TeamSession) -> str:
    if not session.team:
        return "Team is empty (0/6)."
    lines = [f"Team ({len(session.team)}/6):"]
    for index, member in enumerate(session.team):
        moves = ", ".join(format_name(move.name) for move in member.selected_moves) or "no moves selected"
        lines.append(
            f"  [{index}] {format_name(member.name)} Lv. {member.level}"
            f" ({'/'.join(member.types)}) :: {moves}"
        )
    return "\n".join(lines)


def _humanize_analysis(session: TeamSession) -> str:
    lines = [_humanize_team(session), ""]
    if not session.team:
        return lines[0]
    report = session.analysis()

    if report.coverage:
        lines.append("Super-effective coverage:")
        for type_name, entries in report.coverage.items():
            users = ", ".join(f"{format_name(e.pokemon)} ({format_name(e.move)})" for e in entries)
            lines.append(f"  - {format_name(type_name)}: {users}")
        lines.append("")
    else:
        lines.append("Select moves to see coverage.")
        lines.append("")

    ranked = report.ranked_weaknesses()
    if ranked:
        lines.append("Shared weaknesses:")
        for type_name, tally in ranked:
            multipliers = ", ".join(f"{m:g}x" for m in tally.multipliers)
            lines.append(f"  - {format_name(type_name)} ({tally.count}) :: {multipliers}")
        lines.append("")
    else:
        lines.append("No common weaknesses.")
        lines.append("")

    if report.coverage_gaps:
        lines.append("Coverage gaps: " + ", ".join(format_name(t) for t in report.coverage_gaps))
    return "\n".join(lines).strip()


def _emit(args: argparse.Namespace, payload: Any, text: str) -> None:
    if args.json:
        json.dump(payload, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print(text)


def _team_payload(session: TeamSession) -> List[Dict[str, Any]]:
    return [member.to_snapshot() for member in session.team]


# ----------------------------------------------------------------------
# Sub-commands
# ----------------------------------------------------------------------
def _cmd_add(session: TeamSession, args: argparse.Namespace) -> int:
    member = session.add_by_query(args.pokemon)
    if args.level is not None:
        session.update_level(len(session.team) - 1, args.level)
    _emit(args, _team_payload(session), f"Added {format_name(member.name)}.\n" + _humanize_team(session))
    return 0


def _cmd_remove(session: TeamSession, args: argparse.Namespace) -> int:
    member = session.remove_member(args.index)
    _emit(args, _team_payload(session), f"Removed {format_name(member.name)}.\n" + _humanize_team(session))
    return 0


def _cmd_level(session: TeamSession, args: argparse.Namespace) -> int:
    if args.all:
        session.bulk_level_up()
    elif args.index is None or args.level is None:
        raise SystemExit("Provide INDEX and LEVEL, or --all to level up every member.")
    else:
        session.update_level(args.index, args.level)
    _emit(args, _team_payload(session), _humanize_team(session))
    return 0


def _cmd_move(session: TeamSession, args: argparse.Namespace) -> int:
    added = session.toggle_move(args.index, args.move)
    verb = "Selected" if added else "Removed"
    _emit(args, _team_payload(session), f"{verb} {format_name(args.move)}.\n" + _humanize_team(session))
    return 0


def _cmd_show(session: TeamSession, args: argparse.Namespace) -> int:
    if args.json:
        report = session.analysis() if session.team else None
        payload = {
            "team": _team_payload(session),
            "selected_generations": session.selected_generations,
            "analysis": asdict(report) if report else None,
        }
        _emit(args, payload, "")
    else:
        print(_humanize_analysis(session))
    return 0


def _cmd_import(session: TeamSession, args: argparse.Namespace) -> int:
    team_text = _read_team_text(args.team_file)
    problems = session.import_team(team_text)
    for problem in problems:
        sys.stderr.write(f"Skipped {problem}\n")
    _emit(args, {"team": _team_payload(session), "skipped": problems}, _humanize_team(session))
    return 0


def _cmd_recommend(session: TeamSession, args: argparse.Namespace) -> int:
    if args.generations:
        session.set_generations(int(gen) for gen in args.generations.split(","))
    if not session.team:
        _emit(args, [], "Add Pokémon to your team to see recommendations.")
        return 0
    recs = session.recommendations(args.limit)
    if not recs:
        _emit(args, [], "No recommendations found for selected generations.")
        return 0
    lines = ["Recommendations:"]
    for rec in recs:
        lines.append(
            f"  - #{rec.pokemon_id} {format_name(rec.name)} ({'/'.join(rec.types)})"
            f" score {rec.score} :: {', '.join(rec.reasons)}"
        )
    _emit(args, [asdict(rec) for rec in recs], "\n".join(lines))
    return 0


def _cmd_evolution(session: TeamSession, args: argparse.Namespace) -> int:
    chain = parse_evolution_chain(session.client.get_pokemon_evolution_chain(args.pokemon))
    steps = [
        format_name(node.species) + (f" ({format_evolution_condition(node)})" if idx else "")
        for idx, node in enumerate(chain)
    ]
    _emit(args, [asdict(node) for node in chain], " -> ".join(steps))
    return 0


def _cmd_matchup(session: TeamSession, args: argparse.Namespace) -> int:
    opponent = session.select_opponent(args.opponent)
    options = session.battle_matchup()
    if options:
        lines = [f"Against {format_name(opponent['name'])}:"]
        for option in options:
            moves = ", ".join(format_name(move.name) for move in option.moves)
            lines.append(f"  - {format_name(option.pokemon)}: {moves}")
        text = "\n".join(lines)
    else:
        text = "No team members have super effective moves. Make sure to select moves for your team!"
    _emit(args, [asdict(option) for option in options], text)
    return 0


def _cmd_serve(session: TeamSession, args: argparse.Namespace) -> int:
    from poke_team.web_server import run

    run(host=args.host, port=args.port, session=session)
    return 0


def _cmd_mcp(session: TeamSession, args: argparse.Namespace) -> int:
    from poke_team.server import run

    run()
    return 0


COMMANDS = {
    "add": _cmd_add,
    "remove": _cmd_remove,
    "level": _cmd_level,
    "move": _cmd_move,
    "show": _cmd_show,
    "import": _cmd_import,
    "recommend": _cmd_recommend,
    "evolution": _cmd_evolution,
    "matchup": _cmd_matchup,
    "serve": _cmd_serve,
    "mcp": _cmd_mcp,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build a Pokémon team and analyze its type coverage")
    parser.add_argument("--snapshot", help="Path of the JSON snapshot holding the team")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print debug progress information to stderr",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Add a Pokémon by name or dex number")
    add.add_argument("pokemon")
    add.add_argument("--level", type=int, help="Starting level (default 5)")

    remove = sub.add_parser("remove", help="Remove the team member at INDEX")
    remove.add_argument("index", type=int)

    level = sub.add_parser("level", help="Set a member's level, or --all to level everyone up")
    level.add_argument("index", type=int, nargs="?")
    level.add_argument("level", nargs="?")
    level.add_argument("--all", action="store_true")

    move = sub.add_parser("move", help="Select or deselect a move for a member")
    move.add_argument("index", type=int)
    move.add_argument("move")

    sub.add_parser("show", help="Show the team with coverage and weaknesses")

    imp = sub.add_parser("import", help="Add the sets of a Showdown export")
    imp.add_argument("team_file", help="Path to Showdown export text or '-' to read from stdin")

    rec = sub.add_parser("recommend", help="Suggest Pokémon that patch the team's gaps")
    rec.add_argument("--generations", help="Comma separated generations, e.g. 1,2,3")
    rec.add_argument("--limit", type=int)

    evo = sub.add_parser("evolution", help="Show a species' evolution chain")
    evo.add_argument("pokemon")

    matchup = sub.add_parser("matchup", help="Find team members with super-effective moves")
    matchup.add_argument("opponent")

    serve = sub.add_parser("serve", help="Run the web UI and REST API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    sub.add_parser("mcp", help="Run the MCP tool server over stdio")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _debug_print(args.debug, f"Arguments parsed: {args}")

    settings = Settings.from_env()
    if args.snapshot:
        settings = replace(settings, snapshot_path=Path(args.snapshot))
    session = create_session(settings, debug_logger=lambda msg: _debug_print(args.debug, msg))
    session.load(refresh=False)
    _debug_print(args.debug, f"Loaded {len(session.team)} team member(s) from {settings.snapshot_path}")

    try:
        return COMMANDS[args.command](session, args)
    except TeamError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    except PokeAPINotFoundError as exc:
        sys.stderr.write(f"Not found: {exc}\n")
        return 1
    except PokeAPIClientError as exc:
        sys.stderr.write(f"Error talking to PokéAPI: {exc}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
