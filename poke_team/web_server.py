"""FastAPI web server backing the browser team builder."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from .analysis import effectiveness
from .clients import PokeAPIClientError, PokeAPINotFoundError
from .services import TeamError, TeamSession, create_session

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

FALLBACK_PAGE = (
    "<html><body><h1>Poke-Team Web API</h1>"
    "<p>Static files not found. Please ensure static/index.html exists.</p></body></html>"
)


class ResultResponse(BaseModel):
    """Envelope shared by every API response."""

    result: Any


class QueryRequest(BaseModel):
    """Species name or national dex number."""

    query: Union[int, str]


class LevelRequest(BaseModel):
    level: Any


class MoveRequest(BaseModel):
    move: str


class GenerationsRequest(BaseModel):
    generations: List[int]


def _call(func: Callable[..., Any], *args: Any) -> Any:
    """Run a session operation, translating domain errors into HTTP errors."""

    try:
        return func(*args)
    except TeamError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PokeAPINotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PokeAPIClientError as exc:
        raise HTTPException(status_code=502, detail=f"PokeAPI request failed: {exc}") from exc


def _team_payload(session: TeamSession) -> List[Dict[str, Any]]:
    return [
        {"index": index, **member.to_snapshot()}
        for index, member in enumerate(session.team)
    ]


def create_app(session: Optional[TeamSession] = None) -> FastAPI:
    if session is None:
        session = create_session()
        session.load(refresh=False)

    app = FastAPI(
        title="Poke-Team Web API",
        description="REST API for Pokemon team building and type coverage analysis",
        version="0.1.0",
    )
    app.state.session = session

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.get("/", response_class=HTMLResponse)
    async def root():
        """Serve the main HTML page."""
        index_path = STATIC_DIR / "index.html"
        if index_path.exists():
            return index_path.read_text(encoding="utf-8")
        return FALLBACK_PAGE

    # ------------------------------------------------------------------
    # Search & pokedex
    # ------------------------------------------------------------------
    @app.get("/api/search", response_model=ResultResponse)
    async def search(
        q: str = Query(..., description="Name fragment or dex number"),
        limit: int = Query(8, ge=1, le=25),
    ) -> ResultResponse:
        results = _call(session.client.autocomplete, q, limit)
        for entry in results:
            entry.pop("pokemon", None)
        return ResultResponse(result=results)

    @app.get("/api/pokedex/{query}", response_model=ResultResponse)
    async def pokedex(query: str) -> ResultResponse:
        return ResultResponse(result=_call(session.pokedex_entry, query))

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------
    @app.get("/api/team", response_model=ResultResponse)
    async def get_team() -> ResultResponse:
        return ResultResponse(result=_team_payload(session))

    @app.post("/api/team", response_model=ResultResponse)
    async def add_member(request: QueryRequest) -> ResultResponse:
        _call(session.add_by_query, request.query)
        return ResultResponse(result=_team_payload(session))

    @app.delete("/api/team/{index}", response_model=ResultResponse)
    async def remove_member(index: int) -> ResultResponse:
        _call(session.remove_member, index)
        return ResultResponse(result=_team_payload(session))

    @app.put("/api/team/{index}/level", response_model=ResultResponse)
    async def update_level(index: int, request: LevelRequest) -> ResultResponse:
        _call(session.update_level, index, request.level)
        return ResultResponse(result=_team_payload(session))

    @app.post("/api/team/level-up", response_model=ResultResponse)
    async def bulk_level_up() -> ResultResponse:
        session.bulk_level_up()
        return ResultResponse(result=_team_payload(session))

    @app.post("/api/team/{index}/moves", response_model=ResultResponse)
    async def toggle_move(index: int, request: MoveRequest) -> ResultResponse:
        added = _call(session.toggle_move, index, request.move)
        return ResultResponse(result={"added": added, "team": _team_payload(session)})

    @app.get("/api/team/{index}", response_model=ResultResponse)
    async def member_detail(index: int) -> ResultResponse:
        return ResultResponse(result=_call(session.member_detail, index))

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------
    @app.get("/api/analysis", response_model=ResultResponse)
    async def analysis() -> ResultResponse:
        if not session.team:
            return ResultResponse(result={"coverage": {}, "weaknesses": [], "coverage_gaps": []})
        report = _call(session.analysis)
        return ResultResponse(
            result={
                "coverage": {
                    type_name: [asdict(entry) for entry in entries]
                    for type_name, entries in report.coverage.items()
                },
                "weaknesses": [
                    {"type": type_name, **asdict(tally)}
                    for type_name, tally in report.ranked_weaknesses()
                ],
                "coverage_gaps": report.coverage_gaps,
            }
        )

    @app.get("/api/generations", response_model=ResultResponse)
    async def get_generations() -> ResultResponse:
        return ResultResponse(result=session.selected_generations)

    @app.put("/api/generations", response_model=ResultResponse)
    async def set_generations(request: GenerationsRequest) -> ResultResponse:
        return ResultResponse(result=session.set_generations(request.generations))

    @app.get("/api/recommendations", response_model=ResultResponse)
    async def recommendations(limit: Optional[int] = Query(None, ge=1, le=50)) -> ResultResponse:
        recs = _call(session.recommendations, limit)
        return ResultResponse(result=[asdict(rec) for rec in recs])

    @app.post("/api/battle", response_model=ResultResponse)
    async def battle(request: QueryRequest) -> ResultResponse:
        opponent = _call(session.select_opponent, request.query)
        options = _call(session.battle_matchup)
        return ResultResponse(
            result={
                "opponent": {
                    "id": opponent["id"],
                    "name": opponent["name"],
                    "types": [slot["type"]["name"] for slot in opponent.get("types", [])],
                    "sprite": (opponent.get("sprites") or {}).get("front_default"),
                },
                "options": [asdict(option) for option in options],
            }
        )

    @app.get("/api/calculate_type_matchup", response_model=ResultResponse)
    async def calculate_type_matchup(
        attacker_type: str = Query(..., description="Attacking type"),
        defender_type: str = Query(..., description="Defending type(s), comma separated"),
    ) -> ResultResponse:
        """Return the effectiveness multiplier of an attacking type against defender types."""
        table = _call(session.ensure_type_table)
        defenders = [part.strip().lower() for part in defender_type.split(",") if part.strip()]
        multiplier = effectiveness(attacker_type.strip().lower(), defenders, table)
        return ResultResponse(
            result={
                "attacker": attacker_type.lower(),
                "defenders": defenders,
                "multiplier": multiplier,
            }
        )

    return app


def run(host: str = "127.0.0.1", port: int = 8000, session: Optional[TeamSession] = None) -> None:
    """Entry point for running the web server."""
    import uvicorn

    print(f"[poke-team-web] Starting web server at http://{host}:{port}")
    print("[poke-team-web] Press Ctrl+C to stop.")
    uvicorn.run(create_app(session), host=host, port=port)


if __name__ == "__main__":
    run()
