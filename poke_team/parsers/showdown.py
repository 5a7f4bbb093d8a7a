"""Parser for Showdown/Smogon team exports used to seed a roster."""

from __future__ import annotations

import re
from typing import List, Optional

from ..models import PokemonSet


def parse_team(raw_text: str) -> List[PokemonSet]:
    """Parse a Showdown export; entries are separated by blank lines."""

    cleaned = raw_text.strip()
    if not cleaned:
        raise ValueError("Team text is empty")

    chunks = [chunk.strip() for chunk in re.split(r"\n\s*\n", cleaned) if chunk.strip()]
    return [_parse_entry(chunk) for chunk in chunks]


def _parse_entry(chunk: str) -> PokemonSet:
    lines = [line.strip() for line in chunk.splitlines() if line.strip()]
    name, item = _parse_header(lines[0])
    entry = PokemonSet(name=name, species=_infer_species(name), item=item)

    for line in lines[1:]:
        if line.startswith("Level:"):
            entry.level = _parse_level(line.split(":", 1)[1])
        elif line.startswith("-"):
            entry.moves.append(line.lstrip("- ").strip())
        else:
            entry.notes.append(line)
    return entry


def _parse_header(line: str) -> tuple[str, Optional[str]]:
    if "@" not in line:
        return line.strip(), None
    name_part, item_part = line.split("@", 1)
    return name_part.strip(), item_part.strip() or None


def _parse_level(raw: str) -> Optional[int]:
    try:
        return int(raw.strip())
    except ValueError:
        return None


def _infer_species(name: str) -> str:
    # "Nickname (Species) (M)" -> Species; gender markers are ignored.
    for candidate in re.findall(r"\(([^)]*)\)", name):
        candidate = candidate.strip()
        if candidate and candidate.upper() not in {"M", "F"}:
            return candidate
    cleaned = re.sub(r"\([^)]*\)", "", name).strip()
    return cleaned or name.strip()
