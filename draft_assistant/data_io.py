"""Data input/output for player rankings, league settings and draft boards."""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from draft_assistant.config import LeagueConfig
from draft_assistant.errors import ValidationError
from draft_assistant.models import DraftPick, Player

logger = logging.getLogger(__name__)

# Built-in rankings used when no player file is supplied
DEFAULT_PLAYER_ROWS: list[tuple[str, str, str, str, float, float, int, int]] = [
    ("1", "Patrick Mahomes", "QB", "KC", 420.5, 15.2, 1, 10),
    ("2", "Josh Allen", "QB", "BUF", 410.3, 18.7, 1, 13),
    ("3", "Jalen Hurts", "QB", "PHI", 395.8, 22.1, 1, 10),
    ("4", "Christian McCaffrey", "RB", "SF", 380.2, 2.3, 1, 9),
    ("5", "Austin Ekeler", "RB", "LAC", 365.7, 8.9, 1, 5),
    ("6", "Saquon Barkley", "RB", "NYG", 350.4, 12.4, 1, 13),
    ("7", "Justin Jefferson", "WR", "MIN", 330.5, 1.1, 1, 13),
    ("8", "Ja'Marr Chase", "WR", "CIN", 325.3, 3.8, 1, 7),
    ("9", "Tyreek Hill", "WR", "MIA", 320.7, 5.2, 1, 10),
    ("10", "Travis Kelce", "TE", "KC", 305.8, 4.5, 1, 10),
    ("11", "Mark Andrews", "TE", "BAL", 280.3, 25.7, 2, 13),
    ("12", "Bijan Robinson", "RB", "ATL", 270.5, 6.8, 2, 11),
    ("13", "A.J. Brown", "WR", "PHI", 260.7, 13.2, 2, 10),
    ("14", "Joe Burrow", "QB", "CIN", 250.2, 45.3, 2, 7),
    ("15", "Tony Pollard", "RB", "DAL", 235.3, 28.4, 2, 7),
]

# Accepted spellings for each Player field in JSON input
JSON_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "player_id": ("player_id", "id", "playerId"),
    "name": ("name",),
    "position": ("position",),
    "team": ("team",),
    "rank": ("rank",),
    "projected_points": ("projected_points", "projectedPoints"),
    "adp": ("adp",),
    "tier": ("tier",),
    "bye_week": ("bye_week", "byeWeek"),
}


def default_players() -> list[Player]:
    """Return the built-in sample rankings."""
    return [
        Player(
            player_id=player_id,
            name=name,
            position=position,
            team=team,
            rank=int(player_id),
            projected_points=points,
            adp=adp,
            tier=tier,
            bye_week=bye_week,
        )
        for player_id, name, position, team, points, adp, tier, bye_week in (
            DEFAULT_PLAYER_ROWS
        )
    ]


def _parse_number(value: Any, cast: type, field_name: str, row_label: str) -> Any:
    """Convert a raw field to int/float, naming the row on failure."""
    try:
        if cast is int:
            return int(float(value))
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"{row_label}: invalid {field_name} value {value!r}"
        ) from None


def load_players_csv(csv_path: str | Path) -> list[Player]:
    """Load player rankings from a CSV file.

    Args:
        csv_path: Path to a CSV with columns Rank, Name, Position, Team,
                  ProjectedPoints, ADP, Tier, ByeWeek and an optional Id

    Returns:
        List of Player objects in file order

    Rows without a name or position are skipped. The player id defaults to
    the Rank column when no Id column is present.

    Raises:
        ValidationError: If a numeric field cannot be parsed
    """
    players = []

    with open(csv_path, "r", newline="") as f:
        reader = csv.DictReader(f)

        for line_number, row in enumerate(reader, start=2):
            # Skip empty rows or rows with missing essential data
            if not row or not row.get("Name") or not row.get("Position"):
                continue

            row_label = f"{csv_path}:{line_number}"
            rank = _parse_number(row.get("Rank"), int, "Rank", row_label)
            bye_week = row.get("ByeWeek") or 0

            players.append(
                Player(
                    player_id=(row.get("Id") or row.get("Rank") or "").strip(),
                    name=row["Name"].strip(),
                    position=row["Position"].strip(),
                    team=(row.get("Team") or "").strip(),
                    rank=rank,
                    projected_points=_parse_number(
                        row.get("ProjectedPoints"), float, "ProjectedPoints", row_label
                    ),
                    adp=_parse_number(row.get("ADP"), float, "ADP", row_label),
                    tier=_parse_number(row.get("Tier"), int, "Tier", row_label),
                    bye_week=_parse_number(bye_week, int, "ByeWeek", row_label),
                )
            )

    logger.info(f"Read {len(players)} players from {csv_path}")
    return players


def _player_from_mapping(data: Mapping[str, Any], row_label: str) -> Player:
    """Build a Player from a JSON object using JSON_FIELD_ALIASES."""
    values: dict[str, Any] = {}
    for field_name, aliases in JSON_FIELD_ALIASES.items():
        for alias in aliases:
            if alias in data:
                values[field_name] = data[alias]
                break

    missing = [
        name for name in JSON_FIELD_ALIASES if name not in values and name != "bye_week"
    ]
    if missing:
        raise ValidationError(f"{row_label}: missing fields {', '.join(missing)}")

    return Player(
        player_id=str(values["player_id"]),
        name=str(values["name"]),
        position=values["position"],
        team=str(values["team"]),
        rank=_parse_number(values["rank"], int, "rank", row_label),
        projected_points=_parse_number(
            values["projected_points"], float, "projected_points", row_label
        ),
        adp=_parse_number(values["adp"], float, "adp", row_label),
        tier=_parse_number(values["tier"], int, "tier", row_label),
        bye_week=_parse_number(values.get("bye_week", 0), int, "bye_week", row_label),
    )


def load_players_json(json_path: str | Path) -> list[Player]:
    """Load player rankings from a JSON list of player objects.

    Keys may be snake_case (projected_points) or camelCase (projectedPoints).

    Raises:
        ValidationError: If the file is not a list or a record is incomplete
    """
    with open(json_path, "r") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValidationError(f"{json_path}: expected a JSON list of players")

    players = [
        _player_from_mapping(item, f"{json_path}[{index}]")
        for index, item in enumerate(data)
    ]
    logger.info(f"Read {len(players)} players from {json_path}")
    return players


def load_players(path: str | Path) -> list[Player]:
    """Load players from a .csv or .json file based on its extension."""
    suffix = Path(path).suffix.lower()
    if suffix == ".csv":
        return load_players_csv(path)
    if suffix == ".json":
        return load_players_json(path)
    raise ValidationError(f"Unsupported player file type: {suffix or path}")


def load_league_config(config_path: str | Path) -> LeagueConfig:
    """Load and validate league settings from a YAML file.

    Args:
        config_path: YAML file with any of league_type, number_of_teams,
                     draft_position, snake_draft, roster_requirements, scoring

    Returns:
        Validated LeagueConfig (unspecified settings keep their defaults)

    Raises:
        ValidationError: If the file content is not a mapping or is invalid
    """
    with open(config_path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValidationError(f"{config_path}: league settings must be a mapping")

    config = LeagueConfig.from_dict(data)
    logger.info(f"Loaded league settings from {config_path}")
    return config


def save_league_config(config_path: str | Path, config: LeagueConfig) -> None:
    """Write league settings to a YAML file."""
    Path(config_path).parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)


def save_board_csv(output_file_path: str | Path, board: list[list[DraftPick]]) -> None:
    """Save the draft board to a CSV file, one row per slot.

    Args:
        output_file_path: Path where to save the CSV file
        board: Draft slots grouped by round
    """
    Path(output_file_path).parent.mkdir(parents=True, exist_ok=True)

    with open(output_file_path, "w", newline="") as f:
        writer = csv.DictWriter(
            f,
            fieldnames=[
                "round",
                "pick_number",
                "team_id",
                "player_id",
                "name",
                "position",
                "team",
            ],
        )
        writer.writeheader()
        for round_picks in board:
            for pick in round_picks:
                player = pick.player
                writer.writerow(
                    {
                        "round": pick.round,
                        "pick_number": pick.pick_number,
                        "team_id": pick.team_id,
                        "player_id": player.player_id if player else "",
                        "name": player.name if player else "",
                        "position": player.position.value if player else "",
                        "team": player.team if player else "",
                    }
                )
