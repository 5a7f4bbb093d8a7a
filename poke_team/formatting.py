"""Display helpers for PokeAPI slugs."""

from __future__ import annotations


def format_name(slug: str) -> str:
    """Turn a hyphenated slug such as ``mr-mime`` into ``Mr Mime``."""

    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-"))
