"""National dex id ranges for each release generation."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

GENERATION_RANGES: Dict[int, Tuple[int, int]] = {
    1: (1, 151),
    2: (152, 251),
    3: (252, 386),
    4: (387, 493),
    5: (494, 649),
    6: (650, 721),
    7: (722, 809),
    8: (810, 905),
    9: (906, 1025),
}

ALL_GENERATIONS: Tuple[int, ...] = tuple(GENERATION_RANGES)
MAX_DEX_ID = GENERATION_RANGES[max(GENERATION_RANGES)][1]


def generation_for_id(pokemon_id: int) -> int:
    """Return the generation of a dex number; ids past the table fall in the latest one."""

    for generation, (_, last) in GENERATION_RANGES.items():
        if pokemon_id <= last:
            return generation
    return max(GENERATION_RANGES)


def in_generations(pokemon_id: int, generations: Iterable[int]) -> bool:
    return generation_for_id(pokemon_id) in set(generations)


def generation_bounds(generations: Iterable[int]) -> Optional[Tuple[int, int]]:
    """Lowest and highest dex id spanned by the selected generations."""

    ranges = [GENERATION_RANGES[gen] for gen in generations if gen in GENERATION_RANGES]
    if not ranges:
        return None
    return min(lo for lo, _ in ranges), max(hi for _, hi in ranges)


def normalize_generations(generations: Iterable[int]) -> List[int]:
    """Keep known generations, deduplicated, in ascending order."""

    return sorted({int(gen) for gen in generations if int(gen) in GENERATION_RANGES})
