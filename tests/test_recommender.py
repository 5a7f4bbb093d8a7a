"""Tests for candidate sampling and recommendation scoring."""

from __future__ import annotations

from poke_team.analysis import Recommender, sample_ids, score_candidate
from poke_team.clients import PokeAPIClientError
from poke_team.data import build_static_type_table, in_generations
from poke_team.models import TeamMember, WeaknessTally

TABLE = build_static_type_table()


def _payload(pid: int, name: str, *types: str) -> dict:
    return {
        "id": pid,
        "name": name,
        "types": [{"slot": idx + 1, "type": {"name": t}} for idx, t in enumerate(types)],
        "sprites": {"front_default": f"https://img/{pid}.png"},
    }


class FakePokemonSource:
    def __init__(self, payloads, failing=()):
        self._payloads = payloads
        self._failing = set(failing)
        self.requested = []

    def get_pokemon(self, id_or_name):
        self.requested.append(id_or_name)
        if id_or_name in self._failing:
            raise PokeAPIClientError("HTTP 500")
        return self._payloads[id_or_name]


# max_samples=5 over generation 1 samples ids 1, 31, 61, 91, 121.
PAYLOADS = {
    1: _payload(1, "bulbasaur", "grass", "poison"),
    61: _payload(61, "charizard", "fire", "flying"),
    91: _payload(91, "snorlax", "normal"),
    121: _payload(121, "starmie", "water", "psychic"),
}

TEAM = [TeamMember(id=61, name="charizard", types=["fire", "flying"])]


def test_sample_ids_spread_over_a_single_generation() -> None:
    ids = sample_ids([1])

    assert len(ids) == 50
    assert ids[:3] == [1, 4, 7]
    assert ids[-1] == 148


def test_sample_ids_skip_unselected_generations_in_between() -> None:
    ids = sample_ids([1, 3])

    assert ids
    assert all(in_generations(pid, [1, 3]) for pid in ids)
    assert not any(152 <= pid <= 251 for pid in ids)


def test_sample_ids_without_generations() -> None:
    assert sample_ids([]) == []
    assert sample_ids([42]) == []


def test_score_candidate_rewards_resistance_and_gap_coverage() -> None:
    score, reasons = score_candidate(
        ["steel"],
        {"fairy": WeaknessTally(count=2, multipliers=[2.0, 2.0])},
        ["rock"],
        TABLE,
    )

    assert score == 5
    assert reasons == ["Resists Fairy", "Provides Steel coverage"]


def test_score_candidate_counts_each_gap_but_one_reason_per_type() -> None:
    score, reasons = score_candidate(["grass"], {}, ["water", "ground", "rock"], TABLE)

    assert score == 3
    assert reasons == ["Provides Grass coverage"]


def test_score_candidate_immunity_counts_as_resisting() -> None:
    score, reasons = score_candidate(
        ["ground"], {"electric": WeaknessTally(count=1, multipliers=[2.0])}, [], TABLE
    )

    assert score == 2
    assert reasons == ["Resists Electric"]


def test_recommend_ranks_candidates_and_skips_roster_and_zero_scores() -> None:
    messages = []
    source = FakePokemonSource(PAYLOADS, failing={31})
    recommender = Recommender(source, TABLE, max_samples=5, debug_logger=messages.append)

    recs = recommender.recommend(TEAM, [1], limit=10)

    assert [rec.name for rec in recs] == ["bulbasaur", "starmie"]
    assert [rec.score for rec in recs] == [9, 7]
    assert recs[0].reasons == ["Resists Water", "Resists Electric"]
    assert recs[1].sprite == "https://img/121.png"
    assert all(rec.pokemon_id != 61 for rec in recs)
    assert any("#31" in message for message in messages)


def test_recommend_stops_once_limit_is_reached() -> None:
    source = FakePokemonSource(PAYLOADS, failing={31})
    recommender = Recommender(source, TABLE, max_samples=5)

    recs = recommender.recommend(TEAM, [1], limit=1)

    assert [rec.name for rec in recs] == ["bulbasaur"]
    assert source.requested == [1]


def test_recommend_with_empty_team_or_no_generations() -> None:
    source = FakePokemonSource(PAYLOADS)
    recommender = Recommender(source, TABLE, max_samples=5)

    assert recommender.recommend([], [1]) == []
    assert recommender.recommend(TEAM, []) == []
    assert source.requested == []


def test_fetch_sample_reports_failures() -> None:
    recommender = Recommender(FakePokemonSource({}, failing={7}), TABLE)

    sample = recommender.fetch_sample(7)

    assert not sample.ok
    assert sample.error == "HTTP 500"


def test_tied_scores_keep_sample_order() -> None:
    payloads = {
        1: _payload(1, "psyduck", "water"),
        31: _payload(31, "poliwag", "water"),
        61: _payload(61, "onix", "rock"),
        91: _payload(91, "shellder", "water"),
        121: _payload(121, "charizard", "fire", "flying"),
    }
    team = [TeamMember(id=121, name="charizard", types=["fire", "flying"])]
    recommender = Recommender(FakePokemonSource(payloads), TABLE, max_samples=5)

    recs = recommender.recommend(team, [1], limit=10)

    assert [(rec.name, rec.score) for rec in recs] == [
        ("psyduck", 5),
        ("poliwag", 5),
        ("shellder", 5),
        ("onix", 4),
    ]
