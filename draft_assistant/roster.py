"""Roster statistics and lineup requirement checks."""

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from draft_assistant.config import POSITIONS, Position
from draft_assistant.models import Player


def count_by_position(players: Iterable[Player]) -> dict[Position, int]:
    """Count players at each of the six positions (missing positions are 0)."""
    counts = {position: 0 for position in POSITIONS}
    for player in players:
        counts[player.position] += 1
    return counts


@dataclass(frozen=True)
class TeamStats:
    """Aggregate numbers for one team's roster.

    Attributes:
        total_points: Sum of projected points
        average_tier: Mean tier, 0.0 for an empty roster
        player_count: Players on the roster
        by_position: Players per position
    """

    total_points: float
    average_tier: float
    player_count: int
    by_position: dict[Position, int]

    def to_dict(self) -> dict[str, Any]:
        """Serialize with display rounding (whole points, one-decimal tier)."""
        return {
            "total_points": round(self.total_points),
            "average_tier": round(self.average_tier, 1),
            "player_count": self.player_count,
            "by_position": {
                position.value: count for position, count in self.by_position.items()
            },
        }


def calculate_team_stats(roster: Iterable[Player]) -> TeamStats:
    """Summarize a roster.

    Args:
        roster: Players on the team (may be empty)

    Returns:
        TeamStats for the roster
    """
    players = list(roster)
    total_points = sum(player.projected_points for player in players)
    average_tier = (
        sum(player.tier for player in players) / len(players) if players else 0.0
    )
    return TeamStats(
        total_points=total_points,
        average_tier=average_tier,
        player_count=len(players),
        by_position=count_by_position(players),
    )


@dataclass(frozen=True)
class RosterValidation:
    """Result of checking a roster against lineup requirements."""

    is_valid: bool
    violations: list[str] = field(default_factory=list)
    counts: dict[Position, int] = field(default_factory=dict)


def validate_roster(
    roster: Iterable[Player], requirements: Mapping[Position, int]
) -> RosterValidation:
    """Check that a roster meets every positional minimum.

    Args:
        roster: Players on the team
        requirements: Required count per position

    Returns:
        RosterValidation listing any unmet requirements
    """
    counts = count_by_position(roster)
    violations = []
    for position, required in requirements.items():
        actual = counts.get(position, 0)
        if actual < required:
            violations.append(f"Need {required - actual} more {position.value}(s)")

    return RosterValidation(
        is_valid=not violations, violations=violations, counts=counts
    )
