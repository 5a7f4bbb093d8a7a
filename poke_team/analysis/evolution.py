"""Evolution chain flattening and condition formatting."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Union

from ..formatting import format_name
from ..models import EvolutionNode


def parse_evolution_chain(root: Mapping[str, Any]) -> List[EvolutionNode]:
    """Flatten an evolution tree in pre-order (parent before its children).

    ``root`` is a PokeAPI ``chain`` node; a full ``evolution-chain`` payload
    is accepted too. Branches stay as siblings in listing order.
    """

    if "chain" in root and "species" not in root:
        root = root["chain"]

    nodes: List[EvolutionNode] = []

    def traverse(node: Mapping[str, Any]) -> None:
        details = node.get("evolution_details") or []
        first = details[0] if details else {}
        nodes.append(
            EvolutionNode(
                species=node["species"]["name"],
                min_level=first.get("min_level") or None,
                trigger=(first.get("trigger") or {}).get("name") or None,
                item=(first.get("item") or {}).get("name") or None,
                min_happiness=first.get("min_happiness") or None,
                time_of_day=first.get("time_of_day") or None,
            )
        )
        for child in node.get("evolves_to") or []:
            traverse(child)

    traverse(root)
    return nodes


def next_evolution(
    species: str,
    chain: Union[Sequence[EvolutionNode], Mapping[str, Any]],
) -> Optional[EvolutionNode]:
    """Node following the first occurrence of ``species``, if any."""

    nodes = parse_evolution_chain(chain) if isinstance(chain, Mapping) else list(chain)
    for index, node in enumerate(nodes):
        if node.species == species:
            return nodes[index + 1] if index + 1 < len(nodes) else None
    return None


def format_evolution_condition(node: EvolutionNode) -> str:
    if not node.trigger:
        return "Does not evolve"

    if node.trigger == "level-up":
        if node.min_level:
            return f"Level {node.min_level}"
        if node.min_happiness:
            return "High friendship"
        if node.time_of_day:
            return f"Level up ({node.time_of_day})"
        return "Level up"

    if node.trigger == "use-item" and node.item:
        return format_name(node.item)

    if node.trigger == "trade":
        if node.item:
            return f"Trade holding {format_name(node.item)}"
        return "Trade"

    return format_name(node.trigger)
