"""Static reference data."""

from .generations import (
    ALL_GENERATIONS,
    GENERATION_RANGES,
    MAX_DEX_ID,
    generation_bounds,
    generation_for_id,
    in_generations,
    normalize_generations,
)
from .type_chart import TYPE_CHART, TYPE_ORDER, build_static_type_table

__all__ = [
    "ALL_GENERATIONS",
    "GENERATION_RANGES",
    "MAX_DEX_ID",
    "TYPE_CHART",
    "TYPE_ORDER",
    "build_static_type_table",
    "generation_bounds",
    "generation_for_id",
    "in_generations",
    "normalize_generations",
]
