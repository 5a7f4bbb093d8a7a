"""External data clients used by the team builder."""

from .cache import MemoryCache, ResponseCache
from .pokeapi import PokeAPIClient, PokeAPIClientError, PokeAPINotFoundError, slugify_name

__all__ = [
    "MemoryCache",
    "PokeAPIClient",
    "PokeAPIClientError",
    "PokeAPINotFoundError",
    "ResponseCache",
    "slugify_name",
]
