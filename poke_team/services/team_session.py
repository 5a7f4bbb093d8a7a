"""Session service owning the roster, type table and generation filter."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from ..analysis import (
    Recommender,
    TeamAnalyzer,
    defensive_profile,
    format_evolution_condition,
    learnable_moves,
    moves_at_level,
    next_evolution,
    parse_evolution_chain,
    upcoming_moves,
)
from ..clients import PokeAPIClient, PokeAPIClientError, PokeAPINotFoundError, slugify_name
from ..config import Settings
from ..data import ALL_GENERATIONS, build_static_type_table, normalize_generations
from ..models import (
    MAX_LEVEL,
    MAX_SELECTED_MOVES,
    MAX_TEAM_SIZE,
    MatchupOption,
    Recommendation,
    TeamAnalysis,
    TeamMember,
    TypeTable,
    coerce_level,
)
from ..parsers import parse_team
from .snapshot_store import JsonFileSnapshotStore, MemorySnapshotStore, SnapshotStore

STORAGE_KEY = "pokemon-team"


class TeamError(ValueError):
    """Base class for rejected roster operations."""


class TeamFullError(TeamError):
    pass


class DuplicateMemberError(TeamError):
    pass


class MoveLimitError(TeamError):
    pass


class MemberIndexError(TeamError):
    pass


class TeamSession:
    """Coordinates roster edits, analytics and persistence for one user.

    All reads and writes of the roster go through this object; every
    successful mutation is snapshotted to the store.
    """

    def __init__(
        self,
        client: Optional[PokeAPIClient] = None,
        *,
        store: Optional[SnapshotStore] = None,
        type_table: Optional[TypeTable] = None,
        generations: Optional[Iterable[int]] = None,
        max_recommendations: int = 10,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.client = client or PokeAPIClient()
        self.store: SnapshotStore = store if store is not None else MemorySnapshotStore()
        self.type_table = type_table
        self.team: List[TeamMember] = []
        self.selected_generations: List[int] = normalize_generations(
            ALL_GENERATIONS if generations is None else generations
        )
        self.current_opponent: Optional[Dict[str, Any]] = None
        self.max_recommendations = max_recommendations
        self._debug_logger = debug_logger

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    # ------------------------------------------------------------------
    # Type data
    # ------------------------------------------------------------------
    def ensure_type_table(self) -> TypeTable:
        if self.type_table is None:
            self._debug("Loading type relations from PokeAPI")
            self.type_table = self.client.get_type_table()
        return self.type_table

    @property
    def analyzer(self) -> TeamAnalyzer:
        return TeamAnalyzer(self.ensure_type_table())

    # ------------------------------------------------------------------
    # Roster edits
    # ------------------------------------------------------------------
    def add_member(self, pokemon: Dict[str, Any]) -> TeamMember:
        if len(self.team) >= MAX_TEAM_SIZE:
            raise TeamFullError("Your team is full! Remove a Pokémon first.")
        if any(member.id == pokemon.get("id") for member in self.team):
            raise DuplicateMemberError("This Pokémon is already in your team!")

        member = TeamMember.from_pokemon(pokemon)
        self.team.append(member)
        self._debug(f"Added {member.name} (#{member.id})")
        self.save()
        return member

    def add_by_query(self, query: Union[int, str]) -> TeamMember:
        pokemon = self.client.search_pokemon(query)
        if pokemon is None:
            raise PokeAPINotFoundError(f"No Pokémon found for {query!r}")
        return self.add_member(pokemon)

    def remove_member(self, index: int) -> TeamMember:
        member = self._member(index)
        del self.team[index]
        self.save()
        return member

    def update_level(self, index: int, level: Any) -> int:
        member = self._member(index)
        member.level = coerce_level(level)
        self.save()
        return member.level

    def bulk_level_up(self) -> None:
        for member in self.team:
            member.level = min(MAX_LEVEL, member.level + 1)
        self.save()

    def toggle_move(self, index: int, move_name: str) -> bool:
        """Deselect ``move_name`` if selected, otherwise fetch and select it.

        Returns True when the move was added.
        """

        member = self._member(index)
        position = member.find_move(move_name)
        if position >= 0:
            del member.selected_moves[position]
            self.save()
            return False

        if len(member.selected_moves) >= MAX_SELECTED_MOVES:
            raise MoveLimitError("Maximum 4 moves! Remove a move first.")
        summary = self.client.get_move_summary(move_name)
        member.selected_moves.append(summary)
        self.save()
        return True

    def set_generations(self, generations: Iterable[int]) -> List[int]:
        self.selected_generations = normalize_generations(generations)
        self.save()
        return self.selected_generations

    def import_team(self, team_text: str) -> List[str]:
        """Add every set of a Showdown export; returns messages for skipped entries."""

        try:
            entries = parse_team(team_text)
        except ValueError as exc:
            raise TeamError(str(exc)) from exc

        problems: List[str] = []
        for entry in entries:
            species = entry.species or entry.name
            try:
                self.add_by_query(species)
            except (TeamError, PokeAPIClientError) as exc:
                problems.append(f"{species}: {exc}")
                continue
            index = len(self.team) - 1
            if entry.level is not None:
                self.update_level(index, entry.level)
            for move in entry.moves[:MAX_SELECTED_MOVES]:
                slug = slugify_name(move)
                try:
                    self.toggle_move(index, slug)
                except PokeAPIClientError as exc:
                    problems.append(f"{species} / {move}: {exc}")
        return problems

    def _member(self, index: int) -> TeamMember:
        if not 0 <= index < len(self.team):
            raise MemberIndexError(f"No team member at slot {index}")
        return self.team[index]

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------
    def analysis(self) -> TeamAnalysis:
        return self.analyzer.analyze(self.team)

    def recommendations(self, limit: Optional[int] = None) -> List[Recommendation]:
        recommender = Recommender(
            self.client,
            self.ensure_type_table(),
            debug_logger=self._debug_logger,
        )
        return recommender.recommend(
            self.team,
            self.selected_generations,
            self.max_recommendations if limit is None else limit,
        )

    def select_opponent(self, query: Union[int, str, Dict[str, Any]]) -> Dict[str, Any]:
        opponent = query if isinstance(query, dict) else self.client.search_pokemon(query)
        if opponent is None:
            raise PokeAPINotFoundError(f"No Pokémon found for {query!r}")
        self.current_opponent = opponent
        return opponent

    def battle_matchup(self) -> List[MatchupOption]:
        if not self.current_opponent or not self.team:
            return []
        opponent_types = [slot["type"]["name"] for slot in self.current_opponent.get("types", [])]
        return self.analyzer.battle_matchup(self.team, opponent_types)

    def member_detail(self, index: int) -> Dict[str, Any]:
        """Defensive profile, learnset and evolution outlook for one member."""

        member = self._member(index)
        pokemon = member.pokemon_data or self.client.get_pokemon(member.id)
        member.pokemon_data = pokemon
        chain = self.client.get_pokemon_evolution_chain(pokemon["id"])
        upcoming = upcoming_moves(pokemon, member.level)
        profile = defensive_profile(member.types, self.ensure_type_table())
        return {
            "member": member.to_snapshot(),
            "effectiveness": asdict(profile),
            "available_moves": [asdict(move) for move in moves_at_level(pokemon, member.level)],
            "upcoming_moves": [asdict(move) for move in upcoming],
            "next_move": asdict(upcoming[0]) if upcoming else None,
            "learnable_moves": {
                method: [asdict(move) for move in moves]
                for method, moves in learnable_moves(pokemon).items()
            },
            "next_evolution": _optional_asdict(next_evolution(pokemon["name"], chain)),
        }

    def pokedex_entry(self, query: Union[int, str]) -> Dict[str, Any]:
        pokemon = self.client.search_pokemon(query)
        if pokemon is None:
            raise PokeAPINotFoundError(f"No Pokémon found for {query!r}")
        complete = self.client.get_complete_pokemon(pokemon["id"])
        species = complete["species"]
        chain = parse_evolution_chain(self.client.get_pokemon_evolution_chain(pokemon["id"]))
        return {
            "id": pokemon["id"],
            "name": pokemon["name"],
            "types": [slot["type"]["name"] for slot in pokemon.get("types", [])],
            "sprite": (pokemon.get("sprites") or {}).get("front_default"),
            "height": pokemon.get("height"),
            "weight": pokemon.get("weight"),
            "genus": _english(species.get("genera", []), "genus"),
            "flavor_text": _english(species.get("flavor_text_entries", []), "flavor_text"),
            "stats": {
                entry["stat"]["name"]: entry["base_stat"] for entry in pokemon.get("stats", [])
            },
            "evolutions": [
                {
                    **asdict(node),
                    "condition": format_evolution_condition(node) if idx else "Base form",
                }
                for idx, node in enumerate(chain)
            ],
            "learnable_moves": {
                method: [asdict(move) for move in moves]
                for method, moves in learnable_moves(pokemon).items()
            },
        }

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def to_snapshot(self) -> Dict[str, Any]:
        return {
            "team": [member.to_snapshot() for member in self.team],
            "selected_generations": list(self.selected_generations),
        }

    def save(self) -> None:
        self.store.save(STORAGE_KEY, self.to_snapshot())

    def load(self, *, refresh: bool = True) -> bool:
        """Restore the last snapshot; returns False when none was stored."""

        saved = self.store.load(STORAGE_KEY)
        if not saved:
            return False
        self.team = [TeamMember.from_snapshot(entry) for entry in saved.get("team") or []]
        generations = saved.get("selected_generations")
        self.selected_generations = normalize_generations(
            ALL_GENERATIONS if generations is None else generations
        )
        if refresh:
            self.refresh_member_data()
        return True

    def refresh_member_data(self) -> None:
        """Re-fetch cached PokeAPI payloads; failures leave the member untouched."""

        for member in self.team:
            try:
                member.pokemon_data = self.client.get_pokemon(member.id)
            except PokeAPIClientError as exc:
                self._debug(f"Error reloading {member.name}: {exc}")


def _english(entries: List[Dict[str, Any]], field: str) -> Optional[str]:
    for entry in entries:
        if (entry.get("language") or {}).get("name") == "en":
            return " ".join(entry.get(field, "").split())
    return None


def _optional_asdict(value: Any) -> Optional[Dict[str, Any]]:
    return asdict(value) if value is not None else None


def create_session(
    settings: Optional[Settings] = None,
    *,
    debug_logger: Optional[Callable[[str], None]] = None,
    store: Optional[SnapshotStore] = None,
) -> TeamSession:
    """Wire a session from settings: PokeAPI client, snapshot file and type source."""

    settings = settings or Settings.from_env()
    client = PokeAPIClient(
        base_url=settings.pokeapi_base_url,
        cache_ttl=settings.cache_ttl,
        timeout=settings.http_timeout,
        user_agent=settings.user_agent,
        debug_logger=debug_logger,
    )
    if store is None:
        store = JsonFileSnapshotStore(settings.snapshot_path, debug_logger=debug_logger)
    return TeamSession(
        client,
        store=store,
        type_table=build_static_type_table() if settings.offline_types else None,
        max_recommendations=settings.max_recommendations,
        debug_logger=debug_logger,
    )
