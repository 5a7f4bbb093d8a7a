"""Team-wide aggregation of offensive coverage and shared weaknesses."""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

from ..models import (
    CoverageEntry,
    MatchupOption,
    TeamAnalysis,
    TeamMember,
    TypeRelation,
    WeaknessTally,
)
from .effectiveness import defensive_profile, effectiveness

SUPER_EFFECTIVE = 2.0


class TeamAnalyzer:
    """Aggregates per-member effectiveness over a roster.

    The analyzer holds a read-only type table; every method is a pure
    function of the roster passed in.
    """

    def __init__(self, type_table: Mapping[str, TypeRelation]) -> None:
        self.type_table = type_table

    def analyze(self, team: Sequence[TeamMember]) -> TeamAnalysis:
        coverage = self.offensive_coverage(team)
        return TeamAnalysis(
            coverage=coverage,
            weaknesses=self.defensive_weaknesses(team),
            coverage_gaps=self._gaps_from(coverage),
        )

    # ------------------------------------------------------------------
    # Offensive coverage
    # ------------------------------------------------------------------
    def offensive_coverage(self, team: Sequence[TeamMember]) -> Dict[str, List[CoverageEntry]]:
        """Map each defending type to the selected moves that hit it super-effectively."""

        coverage: Dict[str, List[CoverageEntry]] = {}
        for member in team:
            for move in member.selected_moves:
                for defender_type in self.type_table:
                    multiplier = effectiveness(move.type, [defender_type], self.type_table)
                    if multiplier >= SUPER_EFFECTIVE:
                        coverage.setdefault(defender_type, []).append(
                            CoverageEntry(pokemon=member.name, move=move.name, multiplier=multiplier)
                        )
        return coverage

    def coverage_gaps(self, team: Sequence[TeamMember]) -> List[str]:
        return self._gaps_from(self.offensive_coverage(team))

    def _gaps_from(self, coverage: Mapping[str, List[CoverageEntry]]) -> List[str]:
        return [type_name for type_name in self.type_table if type_name not in coverage]

    # ------------------------------------------------------------------
    # Defensive weaknesses
    # ------------------------------------------------------------------
    def defensive_weaknesses(self, team: Sequence[TeamMember]) -> Dict[str, WeaknessTally]:
        """Count how many members are weak to each attacking type."""

        tallies: Dict[str, WeaknessTally] = {}
        for member in team:
            profile = defensive_profile(member.types, self.type_table)
            for attack_type, multiplier in profile.weaknesses.items():
                tally = tallies.setdefault(attack_type, WeaknessTally())
                tally.count += 1
                tally.multipliers.append(multiplier)
        return tallies

    # ------------------------------------------------------------------
    # Battle helper
    # ------------------------------------------------------------------
    def battle_matchup(
        self, team: Sequence[TeamMember], opponent_types: Sequence[str]
    ) -> List[MatchupOption]:
        """Team members carrying at least one super-effective move against the opponent."""

        options: List[MatchupOption] = []
        for member in team:
            moves = [
                move
                for move in member.selected_moves
                if effectiveness(move.type, opponent_types, self.type_table) >= SUPER_EFFECTIVE
            ]
            if moves:
                options.append(
                    MatchupOption(
                        pokemon=member.name,
                        types=list(member.types),
                        moves=moves,
                        sprite=member.sprite,
                    )
                )
        return options
