"""Tests for player, pick, team and draft state records."""

from datetime import datetime

import pytest

from draft_assistant.config import Position
from draft_assistant.errors import ValidationError
from draft_assistant.models import DraftPick, DraftState, Player, Team


def test_player_dataclass() -> None:
    """Test Player creation coerces the position label."""
    player = Player("1", "Patrick Mahomes", "qb", "KC", 1, 420.5, 15.2, 1, 10)

    assert player.player_id == "1"
    assert player.name == "Patrick Mahomes"
    assert player.position is Position.QB
    assert player.team == "KC"
    assert player.rank == 1
    assert player.projected_points == 420.5
    assert player.adp == 15.2
    assert player.tier == 1
    assert player.bye_week == 10
    player.validate()


def test_player_is_immutable() -> None:
    """Test Player records cannot be modified after creation."""
    player = Player("1", "Patrick Mahomes", "QB", "KC", 1, 420.5, 15.2, 1, 10)
    with pytest.raises(AttributeError):
        player.rank = 2  # type: ignore[misc]


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"position": "FLEX"}, "unknown position"),
        ({"rank": 0}, "rank"),
        ({"projected_points": -1.0}, "projected points"),
        ({"adp": -0.5}, "ADP"),
        ({"tier": 0}, "tier"),
        ({"bye_week": 19}, "bye week"),
        ({"bye_week": -1}, "bye week"),
        ({"name": " "}, "no name"),
        ({"player_id": ""}, "id cannot be empty"),
    ],
)
def test_player_validate_rejects(overrides: dict, message: str) -> None:
    """Test invalid player fields are reported by validate."""
    fields = {
        "player_id": "1",
        "name": "Patrick Mahomes",
        "position": "QB",
        "team": "KC",
        "rank": 1,
        "projected_points": 420.5,
        "adp": 15.2,
        "tier": 1,
        "bye_week": 10,
    }
    fields.update(overrides)
    player = Player(**fields)

    with pytest.raises(ValidationError, match=message):
        player.validate()


def test_player_to_dict() -> None:
    """Test serializing a player with availability."""
    player = Player("7", "Justin Jefferson", "WR", "MIN", 7, 330.5, 1.1, 1, 13)
    data = player.to_dict(is_available=False)

    assert data["id"] == "7"
    assert data["position"] == "WR"
    assert data["is_available"] is False
    assert "is_available" not in player.to_dict()


def test_draft_pick_starts_empty() -> None:
    """Test a new draft slot has no player or timestamp."""
    pick = DraftPick(round=2, pick_number=13, team_id=12)

    assert pick.is_filled is False
    assert pick.to_dict()["player"] is None
    assert pick.to_dict()["timestamp"] is None

    pick.player = Player("4", "Christian McCaffrey", "RB", "SF", 4, 380.2, 2.3, 1, 9)
    pick.timestamp = datetime(2025, 8, 30, 19, 0)
    assert pick.is_filled is True
    assert pick.to_dict()["player"]["name"] == "Christian McCaffrey"
    assert pick.to_dict()["timestamp"] == "2025-08-30T19:00:00"


def test_team_default_name() -> None:
    """Test teams are named after their id by default."""
    team = Team(team_id=3)

    assert team.name == "Team 3"
    assert team.roster == []
    assert team.picks == []
    assert Team(team_id=3, name="Sharks").name == "Sharks"


def test_draft_state_defaults() -> None:
    """Test a new draft state starts on the first pick."""
    state = DraftState(total_picks=120)

    assert state.to_dict() == {
        "current_round": 1,
        "current_pick": 1,
        "total_picks": 120,
        "is_complete": False,
    }
