"""League configuration, scoring settings and draft order rules."""

import logging
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Mapping

from draft_assistant.errors import ValidationError

logger = logging.getLogger(__name__)


class Position(str, Enum):
    """Roster positions tracked by the draft assistant."""

    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    K = "K"
    DST = "DST"

    @classmethod
    def parse(cls, value: Any) -> "Position":
        """Convert a raw position label to a Position.

        Args:
            value: Position or label such as "qb", "WR" or "DEF"

        Returns:
            Matching Position member

        Raises:
            ValidationError: If the label is not one of the six positions
        """
        if isinstance(value, Position):
            return value
        label = str(value).strip().upper()
        if label == "DEF":
            label = "DST"
        try:
            return cls(label)
        except ValueError:
            raise ValidationError(f"Unknown position: {value!r}") from None


POSITIONS: tuple[Position, ...] = tuple(Position)

# Every draft runs a fixed number of rounds
TOTAL_ROUNDS = 15

# Supported league sizes (inclusive)
MIN_TEAMS = 8
MAX_TEAMS = 16

# Starting lineup requirements for a standard league
DEFAULT_ROSTER_REQUIREMENTS: dict[Position, int] = {
    Position.QB: 1,
    Position.RB: 2,
    Position.WR: 2,
    Position.TE: 1,
    Position.K: 1,
    Position.DST: 1,
}

# League type presets and their display labels
LEAGUE_TYPES: dict[str, str] = {
    "Standard": "Standard",
    "PPR": "PPR",
    "HalfPPR": "Half PPR",
    "Superflex": "Superflex",
    "Dynasty": "Dynasty",
}

DYNASTY_ROSTER_REQUIREMENTS: dict[Position, int] = {
    Position.QB: 2,
    Position.RB: 4,
    Position.WR: 6,
    Position.TE: 2,
    Position.K: 1,
    Position.DST: 1,
}

# Defense points by points allowed: first threshold >= points allowed wins
DEFAULT_POINTS_ALLOWED: dict[int, float] = {
    0: 10.0,
    6: 7.0,
    13: 4.0,
    20: 1.0,
    27: 0.0,
    34: -1.0,
    35: -4.0,
}


@dataclass(frozen=True)
class ScoringSettings:
    """Fantasy points awarded per unit of each stat.

    Attributes:
        passing_yards .. safety: Points per stat unit
        points_allowed: Defense bracket mapping threshold -> points
    """

    passing_yards: float = 0.04
    passing_touchdowns: float = 4.0
    interceptions: float = -2.0
    rushing_yards: float = 0.1
    rushing_touchdowns: float = 6.0
    receiving_yards: float = 0.1
    receiving_touchdowns: float = 6.0
    receptions: float = 1.0
    fumbles_lost: float = -2.0
    field_goals: float = 3.0
    extra_points: float = 1.0
    sacks: float = 1.0
    interceptions_defense: float = 2.0
    fumble_recoveries: float = 2.0
    defensive_touchdowns: float = 6.0
    safety: float = 2.0
    points_allowed: dict[int, float] = field(
        default_factory=lambda: dict(DEFAULT_POINTS_ALLOWED)
    )

    @classmethod
    def stat_names(cls) -> list[str]:
        """Names of the per-unit stat multipliers."""
        return [f.name for f in fields(cls) if f.name != "points_allowed"]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ScoringSettings":
        """Build scoring settings from a plain mapping, rejecting unknown keys."""
        return cls().update(**{str(name): value for name, value in data.items()})

    def update(self, **changes: Any) -> "ScoringSettings":
        """Return a copy with the given multipliers replaced.

        Raises:
            ValidationError: If a key is unknown or a value is not numeric
        """
        known = set(self.stat_names()) | {"points_allowed"}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ValidationError(f"Unknown scoring settings: {', '.join(unknown)}")

        cleaned: dict[str, Any] = {}
        for name, value in changes.items():
            if name == "points_allowed":
                try:
                    cleaned[name] = {
                        int(threshold): float(points)
                        for threshold, points in dict(value).items()
                    }
                except (TypeError, ValueError):
                    raise ValidationError(
                        f"Invalid points_allowed brackets: {value!r}"
                    ) from None
            else:
                try:
                    cleaned[name] = float(value)
                except (TypeError, ValueError):
                    raise ValidationError(
                        f"Scoring setting {name} must be numeric, got {value!r}"
                    ) from None
        return replace(self, **cleaned)

    def calculate_points(self, stats: Mapping[str, float]) -> float:
        """Calculate fantasy points for a stat line.

        Args:
            stats: Mapping of stat name -> value; missing stats count as zero.
                   "points_allowed" is matched against the defense brackets.

        Returns:
            Fantasy points rounded to 2 decimal places
        """
        points = 0.0
        for name in self.stat_names():
            points += float(stats.get(name) or 0) * getattr(self, name)

        allowed = stats.get("points_allowed")
        if allowed is not None:
            for threshold, bracket_points in sorted(self.points_allowed.items()):
                if allowed <= threshold:
                    points += bracket_points
                    break

        return round(points, 2)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain mapping."""
        data: dict[str, Any] = {name: getattr(self, name) for name in self.stat_names()}
        data["points_allowed"] = dict(self.points_allowed)
        return data


@dataclass(frozen=True)
class PickInfo:
    """Where a team picks within a given round."""

    round: int
    pick_position: int
    pick_number: int
    is_user_pick: bool


def _normalize_requirements(requirements: Mapping[Any, Any]) -> dict[Position, int]:
    """Coerce roster requirements to a full Position -> int mapping."""
    if not isinstance(requirements, Mapping):
        raise ValidationError(
            "roster_requirements must be a mapping of position to count, "
            f"got {requirements!r}"
        )
    normalized = {position: 0 for position in POSITIONS}
    for key, count in requirements.items():
        position = Position.parse(key)
        if isinstance(count, bool) or not isinstance(count, int):
            raise ValidationError(
                f"Roster requirement for {position.value} must be an integer, "
                f"got {count!r}"
            )
        if count < 0:
            raise ValidationError(
                f"Roster requirement for {position.value} cannot be negative: {count}"
            )
        normalized[position] = count
    return normalized


def _resolve_league_type(league_type: str) -> str:
    """Map a preset name or display label to its canonical preset name."""
    for name, label in LEAGUE_TYPES.items():
        if league_type in (name, label):
            return name
    raise ValidationError(
        f"Unknown league type {league_type!r}; expected one of "
        f"{', '.join(LEAGUE_TYPES)}"
    )


@dataclass(frozen=True)
class LeagueConfig:
    """Validated league settings for one draft session.

    Instances are immutable; ``update`` and ``apply_preset`` return new,
    fully validated configurations so a bad change never leaves a
    half-applied config behind.

    Attributes:
        number_of_teams: Teams in the league (MIN_TEAMS..MAX_TEAMS)
        draft_position: The user's team id (1..number_of_teams)
        snake_draft: Reverse the pick order in even rounds
        roster_requirements: Required starters per position
        league_type: Name of the last applied preset
        scoring: Fantasy point multipliers
        total_rounds: Rounds in the draft (always TOTAL_ROUNDS)
    """

    number_of_teams: int = 12
    draft_position: int = 1
    snake_draft: bool = True
    roster_requirements: dict[Position, int] = field(
        default_factory=lambda: dict(DEFAULT_ROSTER_REQUIREMENTS)
    )
    league_type: str = "PPR"
    scoring: ScoringSettings = field(default_factory=ScoringSettings)
    total_rounds: int = field(default=TOTAL_ROUNDS, init=False)

    def __post_init__(self) -> None:
        """Normalize requirements and validate the whole configuration."""
        object.__setattr__(
            self,
            "roster_requirements",
            _normalize_requirements(self.roster_requirements),
        )
        object.__setattr__(self, "league_type", _resolve_league_type(self.league_type))
        if isinstance(self.scoring, Mapping):
            object.__setattr__(self, "scoring", ScoringSettings.from_dict(self.scoring))
        elif not isinstance(self.scoring, ScoringSettings):
            raise ValidationError(f"Invalid scoring settings: {self.scoring!r}")
        self.validate()

    def validate(self) -> None:
        """Check team count and draft position bounds.

        Raises:
            ValidationError: If any field is out of range
        """
        teams = self.number_of_teams
        if isinstance(teams, bool) or not isinstance(teams, int):
            raise ValidationError(f"number_of_teams must be an integer, got {teams!r}")
        if not MIN_TEAMS <= teams <= MAX_TEAMS:
            raise ValidationError(
                f"number_of_teams must be between {MIN_TEAMS} and {MAX_TEAMS}, "
                f"got {teams}"
            )

        position = self.draft_position
        if isinstance(position, bool) or not isinstance(position, int):
            raise ValidationError(
                f"draft_position must be an integer, got {position!r}"
            )
        if not 1 <= position <= teams:
            raise ValidationError(
                f"draft_position must be between 1 and {teams}, got {position}"
            )

        if not isinstance(self.snake_draft, bool):
            raise ValidationError(
                f"snake_draft must be a boolean, got {self.snake_draft!r}"
            )

    @classmethod
    def create(
        cls,
        number_of_teams: int,
        draft_position: int,
        snake_draft: bool = True,
        roster_requirements: Mapping[Any, int] | None = None,
        league_type: str = "PPR",
        scoring: ScoringSettings | None = None,
    ) -> "LeagueConfig":
        """Create a validated configuration.

        Raises:
            ValidationError: If any value is invalid
        """
        if roster_requirements is None:
            roster_requirements = DEFAULT_ROSTER_REQUIREMENTS
        return cls(
            number_of_teams=number_of_teams,
            draft_position=draft_position,
            snake_draft=snake_draft,
            roster_requirements=roster_requirements,
            league_type=league_type,
            scoring=scoring if scoring is not None else ScoringSettings(),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LeagueConfig":
        """Build a configuration from a settings mapping (e.g. a YAML file).

        A ``league_type`` key applies that preset first; the remaining keys
        are then merged on top, so explicit requirements and scoring win.

        Raises:
            ValidationError: If the mapping or any setting is invalid
        """
        if not isinstance(data, Mapping):
            raise ValidationError(f"League settings must be a mapping, got {data!r}")
        settings = {str(key): value for key, value in data.items()}
        config = cls()
        if "league_type" in settings:
            config = config.apply_preset(settings.pop("league_type"))
        return config.update(**settings)

    def update(self, **changes: Any) -> "LeagueConfig":
        """Merge a partial change set and return the new configuration.

        Roster requirements and scoring settings merge per key; every other
        field is replaced. ``league_type`` only relabels the config; use
        apply_preset to change requirements and scoring with it. The result
        is validated as a whole.

        Raises:
            ValidationError: If a key is unknown or the merged config is invalid
        """
        allowed = {f.name for f in fields(self) if f.init}
        unknown = sorted(set(changes) - allowed)
        if unknown:
            raise ValidationError(f"Unknown league settings: {', '.join(unknown)}")

        merged = dict(changes)
        if "roster_requirements" in merged:
            if not isinstance(merged["roster_requirements"], Mapping):
                raise ValidationError(
                    "roster_requirements must be a mapping of position to count, "
                    f"got {merged['roster_requirements']!r}"
                )
            requirements = dict(self.roster_requirements)
            for key, count in merged["roster_requirements"].items():
                requirements[Position.parse(key)] = count
            merged["roster_requirements"] = requirements
        if "scoring" in merged and not isinstance(merged["scoring"], ScoringSettings):
            if not isinstance(merged["scoring"], Mapping):
                raise ValidationError(
                    f"scoring must be a mapping of settings, got {merged['scoring']!r}"
                )
            merged["scoring"] = self.scoring.update(
                **{str(name): value for name, value in merged["scoring"].items()}
            )

        return replace(self, **merged)

    def apply_preset(self, league_type: str) -> "LeagueConfig":
        """Return the configuration with a league type preset applied.

        Args:
            league_type: Preset name (Standard, PPR, HalfPPR, Superflex, Dynasty)

        Returns:
            New configuration with preset roster requirements and reception scoring

        Raises:
            ValidationError: If the preset is unknown
        """
        name = _resolve_league_type(league_type)
        requirements = dict(self.roster_requirements)
        receptions = 1.0

        if name == "Standard":
            receptions = 0.0
        elif name == "HalfPPR":
            receptions = 0.5
        elif name == "Superflex":
            requirements[Position.QB] = 2
        elif name == "Dynasty":
            requirements = dict(DYNASTY_ROSTER_REQUIREMENTS)

        logger.debug(f"Applying {name} preset (receptions={receptions})")
        return replace(
            self,
            league_type=name,
            roster_requirements=requirements,
            scoring=replace(self.scoring, receptions=receptions),
        )

    @property
    def total_picks(self) -> int:
        """Total number of picks in the draft."""
        return self.number_of_teams * self.total_rounds

    def draft_order(self, round_number: int) -> list[int]:
        """Team ids in pick order for a round.

        Odd rounds (and every round of a linear draft) run 1..N; even rounds
        of a snake draft run N..1.
        """
        order = list(range(1, self.number_of_teams + 1))
        if self.snake_draft and round_number % 2 == 0:
            order.reverse()
        return order

    def round_for_pick(self, pick_number: int) -> int:
        """Round containing an overall pick number."""
        return (pick_number - 1) // self.number_of_teams + 1

    def team_for_pick(self, pick_number: int) -> int:
        """Team id holding an overall pick number."""
        order = self.draft_order(self.round_for_pick(pick_number))
        return order[(pick_number - 1) % self.number_of_teams]

    def team_pick_info(self, team_id: int, round_number: int) -> PickInfo:
        """Locate a team's pick within a round.

        Raises:
            ValidationError: If team_id is not in the league
        """
        order = self.draft_order(round_number)
        if team_id not in order:
            raise ValidationError(f"Team {team_id} is not in this league")
        pick_position = order.index(team_id) + 1
        return PickInfo(
            round=round_number,
            pick_position=pick_position,
            pick_number=(round_number - 1) * self.number_of_teams + pick_position,
            is_user_pick=team_id == self.draft_position,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain mapping suitable for YAML output."""
        return {
            "league_type": self.league_type,
            "number_of_teams": self.number_of_teams,
            "draft_position": self.draft_position,
            "snake_draft": self.snake_draft,
            "roster_requirements": {
                position.value: count
                for position, count in self.roster_requirements.items()
            },
            "scoring": self.scoring.to_dict(),
        }
