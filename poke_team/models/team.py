"""Core dataclasses shared across the team builder."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

MAX_TEAM_SIZE = 6
MAX_SELECTED_MOVES = 4
MIN_LEVEL = 1
MAX_LEVEL = 100
DEFAULT_LEVEL = 5


def coerce_level(value: Any) -> int:
    """Parse a requested level; unparsable input and 0 become 1, then clamp to 1..100."""

    try:
        level = int(float(value))
    except (TypeError, ValueError, OverflowError):
        level = 0
    if level == 0:
        level = MIN_LEVEL
    return max(MIN_LEVEL, min(MAX_LEVEL, level))


@dataclass(frozen=True, slots=True)
class MoveSummary:
    """Snapshot of a move taken when it is selected for a team member."""

    name: str
    type: str
    power: Optional[int] = None
    accuracy: Optional[int] = None
    pp: Optional[int] = None

    @classmethod
    def from_move_payload(cls, name: str, payload: Dict[str, Any]) -> "MoveSummary":
        return cls(
            name=name,
            type=(payload.get("type") or {}).get("name") or "",
            power=payload.get("power"),
            accuracy=payload.get("accuracy"),
            pp=payload.get("pp"),
        )


@dataclass(slots=True)
class TeamMember:
    """A Pokemon occupying one of the roster slots."""

    id: int
    name: str
    types: List[str]
    level: int = DEFAULT_LEVEL
    sprite: Optional[str] = None
    selected_moves: List[MoveSummary] = field(default_factory=list)
    pokemon_data: Optional[Dict[str, Any]] = None

    @classmethod
    def from_pokemon(cls, payload: Dict[str, Any], *, level: int = DEFAULT_LEVEL) -> "TeamMember":
        """Create a member from a PokeAPI ``pokemon`` payload."""

        return cls(
            id=int(payload["id"]),
            name=payload["name"],
            types=[slot["type"]["name"] for slot in payload.get("types", [])],
            level=level,
            sprite=(payload.get("sprites") or {}).get("front_default"),
            pokemon_data=payload,
        )

    def find_move(self, move_name: str) -> int:
        for idx, move in enumerate(self.selected_moves):
            if move.name == move_name:
                return idx
        return -1

    def to_snapshot(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "types": list(self.types),
            "level": self.level,
            "sprite": self.sprite,
            "selected_moves": [asdict(move) for move in self.selected_moves],
        }

    @classmethod
    def from_snapshot(cls, data: Dict[str, Any]) -> "TeamMember":
        return cls(
            id=int(data["id"]),
            name=data["name"],
            types=list(data.get("types", [])),
            level=coerce_level(data.get("level", DEFAULT_LEVEL)),
            sprite=data.get("sprite"),
            selected_moves=[
                MoveSummary(**move) for move in data.get("selected_moves", [])[:MAX_SELECTED_MOVES]
            ],
        )


@dataclass(frozen=True, slots=True)
class CoverageEntry:
    """A selected move that hits a defending type super-effectively."""

    pokemon: str
    move: str
    multiplier: float


@dataclass(slots=True)
class WeaknessTally:
    """How many team members share a weakness, with their multipliers."""

    count: int = 0
    multipliers: List[float] = field(default_factory=list)


@dataclass(slots=True)
class TeamAnalysis:
    """Offensive coverage, shared weaknesses and coverage gaps of a roster."""

    coverage: Dict[str, List[CoverageEntry]] = field(default_factory=dict)
    weaknesses: Dict[str, WeaknessTally] = field(default_factory=dict)
    coverage_gaps: List[str] = field(default_factory=list)

    def ranked_weaknesses(self) -> List[tuple[str, WeaknessTally]]:
        return sorted(self.weaknesses.items(), key=lambda kv: kv[1].count, reverse=True)


@dataclass(slots=True)
class Recommendation:
    """Candidate Pokemon scored against the roster's gaps."""

    pokemon_id: int
    name: str
    types: List[str]
    score: int
    reasons: List[str] = field(default_factory=list)
    sprite: Optional[str] = None


@dataclass(slots=True)
class MatchupOption:
    """Team member holding super-effective moves against an opponent."""

    pokemon: str
    types: List[str]
    moves: List[MoveSummary] = field(default_factory=list)
    sprite: Optional[str] = None


@dataclass(slots=True)
class PokemonSet:
    """A single entry of a Showdown/Smogon export."""

    name: str
    species: Optional[str] = None
    item: Optional[str] = None
    level: Optional[int] = None
    moves: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
