"""Core data structures for players, picks, teams and draft state."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from draft_assistant.config import Position
from draft_assistant.errors import ValidationError


MAX_BYE_WEEK = 18


@dataclass(frozen=True)
class Player:
    """Player record loaded into the catalog.

    Availability is tracked by the PlayerCatalog, not on the record itself.

    Attributes:
        player_id: Unique identifier
        name: Player's full name
        position: Position (QB, RB, WR, TE, K, DST)
        team: NFL team abbreviation
        rank: Overall rank (1 = best)
        projected_points: Projected season fantasy points
        adp: Average draft position (lower = drafted earlier)
        tier: Quality tier (1 = best)
        bye_week: Bye week (0 if unknown)
    """

    player_id: str
    name: str
    position: Position
    team: str
    rank: int
    projected_points: float
    adp: float
    tier: int
    bye_week: int = 0

    def __post_init__(self) -> None:
        """Coerce known position labels to Position; validate() reports the rest."""
        if not isinstance(self.position, Position):
            try:
                object.__setattr__(self, "position", Position.parse(self.position))
            except ValidationError:
                pass

    def validate(self) -> None:
        """Check that every field holds a usable value.

        Raises:
            ValidationError: If the position is unknown, a numeric field has the
                wrong type or is not finite, or a value is out of range
        """
        label = f"Player {self.player_id!r}"
        if not str(self.player_id).strip():
            raise ValidationError("Player id cannot be empty")
        if not str(self.name).strip():
            raise ValidationError(f"{label} has no name")
        if not isinstance(self.position, Position):
            raise ValidationError(f"{label} has unknown position {self.position!r}")
        for name in ("rank", "tier", "bye_week"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(
                    f"{label} {name} must be an integer, got {value!r}"
                )
        for name in ("projected_points", "adp"):
            value = getattr(self, name)
            if (
                isinstance(value, bool)
                or not isinstance(value, (int, float))
                or not math.isfinite(value)
            ):
                raise ValidationError(
                    f"{label} {name} must be a finite number, got {value!r}"
                )
        if self.rank < 1:
            raise ValidationError(f"{label} rank must be positive, got {self.rank}")
        if self.projected_points < 0:
            raise ValidationError(
                f"{label} projected points cannot be negative, "
                f"got {self.projected_points}"
            )
        if self.adp < 0:
            raise ValidationError(f"{label} ADP cannot be negative, got {self.adp}")
        if self.tier < 1:
            raise ValidationError(f"{label} tier must be positive, got {self.tier}")
        if not 0 <= self.bye_week <= MAX_BYE_WEEK:
            raise ValidationError(
                f"{label} bye week must be between 0 and {MAX_BYE_WEEK}, "
                f"got {self.bye_week}"
            )

    def to_dict(self, is_available: bool | None = None) -> dict[str, Any]:
        """Serialize the player, optionally including catalog availability."""
        data: dict[str, Any] = {
            "id": self.player_id,
            "name": self.name,
            "position": self.position.value,
            "team": self.team,
            "rank": self.rank,
            "projected_points": self.projected_points,
            "adp": self.adp,
            "tier": self.tier,
            "bye_week": self.bye_week,
        }
        if is_available is not None:
            data["is_available"] = is_available
        return data


@dataclass
class DraftPick:
    """One slot on the draft board.

    Attributes:
        round: Round number (1-based)
        pick_number: Overall pick number (1-based)
        team_id: Team that owns this slot
        player: Drafted player, None until the slot is filled
        timestamp: When the slot was filled
    """

    round: int
    pick_number: int
    team_id: int
    player: Player | None = None
    timestamp: datetime | None = None

    @property
    def is_filled(self) -> bool:
        return self.player is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "round": self.round,
            "pick_number": self.pick_number,
            "team_id": self.team_id,
            "player": self.player.to_dict() if self.player else None,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }


@dataclass
class Team:
    """Team roster and the picks used to build it.

    Attributes:
        team_id: Team identifier (1-based)
        name: Display name
        roster: Players in the order they were drafted
        picks: Filled draft slots owned by this team
    """

    team_id: int
    name: str = ""
    roster: list[Player] = field(default_factory=list)
    picks: list[DraftPick] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name:
            self.name = f"Team {self.team_id}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.team_id,
            "name": self.name,
            "roster": [player.to_dict() for player in self.roster],
            "picks": [pick.to_dict() for pick in self.picks],
        }


@dataclass
class DraftState:
    """Progress of the draft.

    Attributes:
        current_round: Round of the pick on the clock
        current_pick: Overall pick number on the clock
        total_picks: Picks in the whole draft
        is_complete: True once every pick has been made
    """

    current_round: int = 1
    current_pick: int = 1
    total_picks: int = 0
    is_complete: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_round": self.current_round,
            "current_pick": self.current_pick,
            "total_picks": self.total_picks,
            "is_complete": self.is_complete,
        }
