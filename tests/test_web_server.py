"""Tests for the REST API using FastAPI's TestClient."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from poke_team.clients import PokeAPIClientError, PokeAPINotFoundError
from poke_team.data import build_static_type_table
from poke_team.models import MoveSummary
from poke_team.services import MemorySnapshotStore, TeamSession
from poke_team.web_server import create_app


def _pokemon(pid, name, *types):
    return {
        "id": pid,
        "name": name,
        "types": [{"slot": i + 1, "type": {"name": t}} for i, t in enumerate(types)],
        "sprites": {"front_default": None},
        "stats": [],
        "moves": [],
    }


class FakeClient:
    def __init__(self) -> None:
        self.pokemon = {
            p["name"]: p
            for p in (
                _pokemon(4, "charmander", "fire"),
                _pokemon(7, "squirtle", "water"),
                _pokemon(74, "geodude", "rock", "ground"),
            )
        }

    def search_pokemon(self, query):
        cleaned = str(query).strip().lower()
        for payload in self.pokemon.values():
            if cleaned in (payload["name"], str(payload["id"])):
                return payload
        return None

    def get_pokemon(self, id_or_name):
        payload = self.search_pokemon(id_or_name)
        if payload is None:
            raise PokeAPIClientError("upstream timeout")
        return payload

    def get_move_summary(self, move_name):
        types = {"surf": "water", "ember": "fire"}
        if move_name not in types:
            raise PokeAPINotFoundError(f"Not found: move/{move_name}")
        return MoveSummary(name=move_name, type=types[move_name])

    def autocomplete(self, query, limit=10):
        return [
            {"id": p["id"], "name": p["name"], "types": [], "sprite": None, "pokemon": p}
            for p in self.pokemon.values()
            if query in p["name"]
        ][:limit]

    def get_complete_pokemon(self, id_or_name):
        return {"pokemon": self.get_pokemon(id_or_name), "species": {"genera": [], "flavor_text_entries": []}}

    def get_pokemon_evolution_chain(self, id_or_name):
        return {"chain": {"species": {"name": "squirtle"}, "evolution_details": [], "evolves_to": []}}


@pytest.fixture()
def client() -> TestClient:
    session = TeamSession(
        FakeClient(),
        store=MemorySnapshotStore(),
        type_table=build_static_type_table(),
    )
    return TestClient(create_app(session))


def test_root_serves_page(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert "Poke-Team" in response.text


def test_roster_lifecycle(client: TestClient) -> None:
    response = client.post("/api/team", json={"query": "squirtle"})
    assert response.status_code == 200
    assert response.json()["result"][0]["level"] == 5

    response = client.put("/api/team/0/level", json={"level": "150"})
    assert response.json()["result"][0]["level"] == 100

    response = client.post("/api/team/0/moves", json={"move": "surf"})
    body = response.json()["result"]
    assert body["added"] is True
    assert body["team"][0]["selected_moves"][0]["type"] == "water"

    response = client.delete("/api/team/0")
    assert response.json()["result"] == []


def test_domain_errors_map_to_status_codes(client: TestClient) -> None:
    client.post("/api/team", json={"query": "squirtle"})

    assert client.post("/api/team", json={"query": "squirtle"}).status_code == 400
    assert client.post("/api/team", json={"query": "mew"}).status_code == 404
    assert client.delete("/api/team/9").status_code == 400
    assert client.post("/api/team/0/moves", json={"move": "splash"}).status_code == 404


def test_analysis_endpoint(client: TestClient) -> None:
    empty = client.get("/api/analysis").json()["result"]
    assert empty == {"coverage": {}, "weaknesses": [], "coverage_gaps": []}

    client.post("/api/team", json={"query": "charmander"})
    client.post("/api/team/0/moves", json={"move": "ember"})
    report = client.get("/api/analysis").json()["result"]

    assert report["coverage"]["grass"][0]["move"] == "ember"
    assert {entry["type"] for entry in report["weaknesses"]} == {"water", "ground", "rock"}
    assert "fire" in report["coverage_gaps"]


def test_generations_and_recommendations(client: TestClient) -> None:
    assert client.put("/api/generations", json={"generations": [2, 1, 1]}).json()["result"] == [1, 2]
    assert client.get("/api/generations").json()["result"] == [1, 2]

    assert client.get("/api/recommendations").json()["result"] == []

    client.put("/api/generations", json={"generations": [1]})
    client.post("/api/team", json={"query": "charmander"})
    recs = client.get("/api/recommendations").json()["result"]
    assert [rec["name"] for rec in recs] == ["squirtle"]


def test_battle_endpoint(client: TestClient) -> None:
    client.post("/api/team", json={"query": "squirtle"})
    client.post("/api/team/0/moves", json={"move": "surf"})

    result = client.post("/api/battle", json={"query": "geodude"}).json()["result"]

    assert result["opponent"]["types"] == ["rock", "ground"]
    assert result["options"][0]["pokemon"] == "squirtle"


def test_calculate_type_matchup(client: TestClient) -> None:
    response = client.get(
        "/api/calculate_type_matchup",
        params={"attacker_type": "Water", "defender_type": "fire,rock"},
    )

    assert response.json()["result"]["multiplier"] == 4.0


def test_search_and_pokedex(client: TestClient) -> None:
    results = client.get("/api/search", params={"q": "squ"}).json()["result"]
    assert results == [{"id": 7, "name": "squirtle", "types": [], "sprite": None}]

    entry = client.get("/api/pokedex/squirtle").json()["result"]
    assert entry["evolutions"][0]["condition"] == "Base form"
