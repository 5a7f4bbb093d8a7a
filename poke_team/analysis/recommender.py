"""Recommendation scorer ranking candidates against a roster's gaps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

from ..data import generation_bounds, in_generations
from ..formatting import format_name
from ..models import Recommendation, TeamMember, TypeRelation, WeaknessTally
from .effectiveness import defensive_profile
from .team_analyzer import TeamAnalyzer

MAX_SAMPLES = 50
MAX_REASONS = 2


class PokemonSource(Protocol):
    def get_pokemon(self, id_or_name: Any) -> Dict[str, Any]: ...


@dataclass(frozen=True, slots=True)
class SampleResult:
    """Outcome of fetching one sampled candidate.

    ``payload`` is set on success; ``error`` describes why the sample was skipped.
    """

    pokemon_id: int
    payload: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.payload is not None


def sample_ids(generations: Iterable[int], max_samples: int = MAX_SAMPLES) -> List[int]:
    """Evenly spaced dex ids across the span of the selected generations.

    Ids falling in unselected generations between the lowest and highest
    selected ones are dropped, so the result may hold fewer than
    ``max_samples`` ids.
    """

    selected = list(generations)
    bounds = generation_bounds(selected)
    if bounds is None:
        return []
    lowest, highest = bounds
    sample_size = min(max_samples, highest - lowest + 1)
    stride = max(1, (highest - lowest) // sample_size)
    ids = list(range(lowest, highest + 1, stride))[:sample_size]
    return [pid for pid in ids if in_generations(pid, selected)]


def score_candidate(
    candidate_types: Sequence[str],
    team_weaknesses: Mapping[str, WeaknessTally],
    coverage_gaps: Sequence[str],
    type_table: Mapping[str, TypeRelation],
) -> tuple[int, List[str]]:
    """Score one candidate typing; returns the total and every reason collected."""

    score = 0
    reasons: List[str] = []
    profile = defensive_profile(candidate_types, type_table)

    for weak_type, tally in team_weaknesses.items():
        if profile.covers(weak_type):
            score += tally.count * 2
            reason = f"Resists {format_name(weak_type)}"
            if reason not in reasons:
                reasons.append(reason)

    gaps = set(coverage_gaps)
    for own_type in candidate_types:
        relation = type_table.get(own_type)
        if relation is None:
            continue
        for target in relation.double_damage_to:
            if target in gaps:
                score += 1
                reason = f"Provides {format_name(own_type)} coverage"
                if reason not in reasons:
                    reasons.append(reason)

    return score, reasons


class Recommender:
    """Samples candidates from the selected generations and ranks them."""

    def __init__(
        self,
        client: PokemonSource,
        type_table: Mapping[str, TypeRelation],
        *,
        max_samples: int = MAX_SAMPLES,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.client = client
        self.type_table = type_table
        self.max_samples = max_samples
        self.analyzer = TeamAnalyzer(type_table)
        self._debug_logger = debug_logger

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    def recommend(
        self,
        team: Sequence[TeamMember],
        generations: Iterable[int],
        limit: int = 10,
    ) -> List[Recommendation]:
        if not team or limit <= 0:
            return []

        weaknesses = self.analyzer.defensive_weaknesses(team)
        gaps = self.analyzer.coverage_gaps(team)
        roster_ids = {member.id for member in team}

        recommendations: List[Recommendation] = []
        for pokemon_id in sample_ids(generations, self.max_samples):
            if len(recommendations) >= limit:
                break
            sample = self.fetch_sample(pokemon_id)
            if not sample.ok:
                self._debug(f"Skipping sample #{pokemon_id}: {sample.error}")
                continue
            candidate = self._score_sample(sample.payload, roster_ids, weaknesses, gaps)
            if candidate is not None:
                recommendations.append(candidate)

        recommendations.sort(key=lambda rec: rec.score, reverse=True)
        return recommendations[:limit]

    def fetch_sample(self, pokemon_id: int) -> SampleResult:
        try:
            payload = self.client.get_pokemon(pokemon_id)
        except Exception as exc:
            return SampleResult(pokemon_id=pokemon_id, error=str(exc) or type(exc).__name__)
        return SampleResult(pokemon_id=pokemon_id, payload=payload)

    def _score_sample(
        self,
        payload: Dict[str, Any],
        roster_ids: set[int],
        weaknesses: Mapping[str, WeaknessTally],
        gaps: Sequence[str],
    ) -> Optional[Recommendation]:
        if payload.get("id") in roster_ids:
            return None
        types = [slot["type"]["name"] for slot in payload.get("types", [])]
        score, reasons = score_candidate(types, weaknesses, gaps, self.type_table)
        if score <= 0:
            return None
        return Recommendation(
            pokemon_id=payload["id"],
            name=payload["name"],
            types=types,
            score=score,
            reasons=reasons[:MAX_REASONS],
            sprite=(payload.get("sprites") or {}).get("front_default"),
        )
