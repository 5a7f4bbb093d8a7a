"""Lightweight wrapper around PokeAPI for fetching species, type and move data."""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

import requests

from ..data import MAX_DEX_ID, TYPE_ORDER
from ..models import MoveSummary, TypeRelation, TypeTable, validate_type_table
from .cache import MemoryCache, ResponseCache

IdOrName = Union[int, str]


def slugify_name(name: IdOrName) -> str:
    """Normalise a species or move name into a PokeAPI path segment."""

    if isinstance(name, int):
        return str(name)
    slug = name.strip().lower()
    slug = re.sub(r"[\s\.]+", "-", slug)
    slug = slug.replace("'", "")
    slug = slug.replace(":", "")
    slug = slug.replace("%", "")
    slug = re.sub(r"[^a-z0-9\-]", "", slug)
    return slug


class PokeAPIClientError(RuntimeError):
    """Raised when the PokeAPI request fails."""


class PokeAPINotFoundError(PokeAPIClientError):
    """Raised when the requested resource does not exist upstream."""


class PokeAPIClient:
    """Small helper client; every JSON response is cached by URL."""

    BASE_URL = "https://pokeapi.co/api/v2"

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        cache: Optional[ResponseCache] = None,
        base_url: Optional[str] = None,
        cache_ttl: Optional[int] = 600,
        timeout: int = 10,
        user_agent: str = "poke-team/0.1 (+https://github.com/)",
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.session = session or requests.Session()
        self.cache: ResponseCache = cache if cache is not None else MemoryCache(cache_ttl)
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._debug_logger = debug_logger
        self._name_list: Optional[List[Dict[str, Any]]] = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get_pokemon(self, id_or_name: IdOrName) -> Dict[str, Any]:
        return self._get_json(f"pokemon/{slugify_name(id_or_name)}")

    def get_pokemon_types(self, id_or_name: IdOrName) -> List[str]:
        payload = self.get_pokemon(id_or_name)
        return [slot["type"]["name"] for slot in payload.get("types", [])]

    def get_species(self, id_or_name: IdOrName) -> Dict[str, Any]:
        return self._get_json(f"pokemon-species/{slugify_name(id_or_name)}")

    def get_evolution_chain(self, chain_id: IdOrName) -> Dict[str, Any]:
        return self._get_json(f"evolution-chain/{chain_id}")

    def get_pokemon_evolution_chain(self, id_or_name: IdOrName) -> Dict[str, Any]:
        """Resolve a species' evolution chain through its species record."""

        species = self.get_species(id_or_name)
        url = (species.get("evolution_chain") or {}).get("url")
        if not url:
            raise PokeAPINotFoundError(f"No evolution chain listed for {id_or_name}")
        chain_id = url.rstrip("/").split("/")[-1]
        return self.get_evolution_chain(chain_id)

    def get_complete_pokemon(self, id_or_name: IdOrName) -> Dict[str, Any]:
        pokemon = self.get_pokemon(id_or_name)
        species = self.get_species(pokemon["species"]["name"])
        return {"pokemon": pokemon, "species": species}

    def get_type(self, type_name: str) -> Dict[str, Any]:
        return self._get_json(f"type/{self._slugify_type(type_name)}")

    def get_type_damage_relations(self, type_name: str) -> Dict[str, Any]:
        return self.get_type(type_name).get("damage_relations", {})

    def get_type_relation(self, type_name: str) -> TypeRelation:
        return TypeRelation.from_damage_relations(
            type_name, self.get_type_damage_relations(type_name)
        )

    def get_type_table(self, types: Iterable[str] = TYPE_ORDER) -> TypeTable:
        """Fetch damage relations for every known type, one request per type."""

        names = list(types)
        table: TypeTable = {}
        for type_name in names:
            relation = self.get_type_relation(type_name)
            table[relation.name] = relation
        validate_type_table(table, names)
        return table

    def get_move(self, move_name: str) -> Dict[str, Any]:
        return self._get_json(f"move/{slugify_name(move_name)}")

    def get_move_summary(self, move_name: str) -> MoveSummary:
        return MoveSummary.from_move_payload(move_name, self.get_move(move_name))

    def get_generation(self, generation: int) -> Dict[str, Any]:
        return self._get_json(f"generation/{generation}")

    def get_pokemon_by_generation(self, generation: int) -> List[Dict[str, Any]]:
        return self.get_generation(generation).get("pokemon_species", [])

    def get_pokemon_name_list(self, limit: int = MAX_DEX_ID) -> List[Dict[str, Any]]:
        """Return ``{id, name}`` entries for the national dex, memoised.

        When the listing cannot be fetched, placeholder names are used so that
        numeric lookups keep working.
        """

        if self._name_list is not None:
            return self._name_list
        try:
            payload = self._get_json(f"pokemon?limit={limit}")
            names = [
                {"id": index + 1, "name": entry["name"]}
                for index, entry in enumerate(payload.get("results", []))
            ]
        except PokeAPIClientError as exc:
            self._debug(f"Falling back to placeholder name list: {exc}")
            names = [{"id": idx, "name": f"pokemon-{idx}"} for idx in range(1, limit + 1)]
        self._name_list = names
        return names

    def search_pokemon(self, query: Union[int, str]) -> Optional[Dict[str, Any]]:
        """Look a Pokemon up by id or name; failures degrade to ``None``."""

        cleaned = str(query).strip().lower()
        if not cleaned:
            return None
        target: IdOrName = int(cleaned) if cleaned.isdigit() else cleaned
        try:
            return self.get_pokemon(target)
        except PokeAPIClientError:
            return None

    def autocomplete(self, query: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Search-box matches; an exact dex number wins over name matches."""

        lowered = (query or "").strip().lower()
        if not lowered:
            return []

        if lowered.isdigit():
            pokemon_id = int(lowered)
            if 1 <= pokemon_id <= MAX_DEX_ID:
                try:
                    return [self._search_result(self.get_pokemon(pokemon_id))]
                except PokeAPIClientError:
                    pass

        matches = [
            entry
            for entry in self.get_pokemon_name_list()
            if lowered in entry["name"] or str(entry["id"]) == lowered
        ]
        results: List[Dict[str, Any]] = []
        for entry in matches[:limit]:
            try:
                payload = self.get_pokemon(entry["id"])
            except PokeAPIClientError:
                continue
            results.append(self._search_result(payload))
        return results

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _get_json(self, endpoint: str) -> Dict[str, Any]:
        url = self._build_url(endpoint)
        cached = self.cache.get(url)
        if cached is not None:
            return cached

        try:
            response = self.session.get(
                url,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            )
            if response.status_code == 404:
                raise PokeAPINotFoundError(f"Not found: {url}")
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise PokeAPIClientError(str(exc)) from exc
        except ValueError as exc:
            raise PokeAPIClientError(f"Invalid JSON from {url}: {exc}") from exc

        self.cache.set(url, payload)
        return payload

    def _build_url(self, endpoint: str) -> str:
        endpoint = endpoint.lstrip("/")
        return f"{self.base_url}/{endpoint}"

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    @staticmethod
    def _search_result(payload: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "id": payload["id"],
            "name": payload["name"],
            "sprite": (payload.get("sprites") or {}).get("front_default"),
            "types": [slot["type"]["name"] for slot in payload.get("types", [])],
            "pokemon": payload,
        }

    @staticmethod
    def _slugify_type(type_name: str) -> str:
        return type_name.strip().lower().replace(" ", "-")
