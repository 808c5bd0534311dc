"""Tests for the recommendation scorer."""

import pytest

from draft_assistant.config import LeagueConfig, Position
from draft_assistant.data_io import default_players
from draft_assistant.models import Player
from draft_assistant.recommendation import (
    Recommendation,
    ScoredPlayer,
    calculate_team_needs,
    calculate_value_score,
    generate_reasoning,
    need_weight,
    position_scarcity,
    recommend,
    score_players,
)

NO_REQUIREMENTS = {position.value: 0 for position in Position}


def make_player(player_id: str, position: str, **overrides) -> Player:
    """Create a valid player with sensible defaults."""
    fields = {
        "player_id": player_id,
        "name": f"Player {player_id}",
        "position": position,
        "team": "TST",
        "rank": 50,
        "projected_points": 150.0,
        "adp": 60.0,
        "tier": 4,
        "bye_week": 7,
    }
    fields.update(overrides)
    return Player(**fields)


def test_team_need_scaled_by_scarcity() -> None:
    """Test need for a position with one player left doubles."""
    requirements = dict(NO_REQUIREMENTS, RB=2)
    config = LeagueConfig.create(12, 5, True, requirements)
    available = [make_player("rb1", "RB")] + [
        make_player(f"wr{i}", "WR") for i in range(9)
    ]
    assert len(available) == 10

    needs = calculate_team_needs([], config.roster_requirements, available)

    assert needs[Position.RB] == pytest.approx(4.0)
    assert needs[Position.QB] == 0.0
    assert needs[Position.WR] == 0.0


def test_team_need_counts_roster() -> None:
    """Test rostered players reduce need and never push it below zero."""
    config = LeagueConfig()
    roster = [
        make_player("q1", "QB"),
        make_player("q2", "QB"),
        make_player("r1", "RB"),
    ]
    available = [make_player(f"rb{i}", "RB") for i in range(4)]

    needs = calculate_team_needs(roster, config.roster_requirements, available)

    assert needs[Position.QB] == 0.0
    assert needs[Position.RB] == pytest.approx(1 * (1 + 1 / 4))
    # Nobody left at WR: scarcity divisor is clamped to 1
    assert needs[Position.WR] == pytest.approx(2 * 2.0)


def test_position_scarcity() -> None:
    """Test the scarcity multiplier and its cap."""
    counts = {Position.RB: 1, Position.WR: 9}

    assert position_scarcity(Position.RB, counts, 10) == 2.0
    assert position_scarcity(Position.WR, counts, 10) == pytest.approx(10 / 9)
    assert position_scarcity(Position.TE, counts, 10) == 2.0
    assert position_scarcity(Position.QB, {}, 0) == 1.0


def test_value_score() -> None:
    """Test the value score for the sample Mahomes record."""
    mahomes = default_players()[0]

    assert calculate_value_score(mahomes, 1, 1.0) == pytest.approx(
        420.5 + (15.2 - 1) * 0.5 + 10
    )
    assert calculate_value_score(mahomes, 1, 2.0) == pytest.approx(875.2)
    # ADP earlier than the current round adds nothing
    assert calculate_value_score(mahomes, 20, 1.0) == pytest.approx(430.5)


def test_need_weight() -> None:
    """Test need weight decays by round down to the floor."""
    assert need_weight(1) == pytest.approx(0.95)
    assert need_weight(10) == pytest.approx(0.5)
    assert need_weight(14) == pytest.approx(0.3)
    assert need_weight(15) == 0.3


def test_value_wins_when_no_team_needs() -> None:
    """Test a player without need can rank first when nobody has need."""
    config = LeagueConfig.create(12, 1, True, dict(NO_REQUIREMENTS, QB=1))
    roster = [make_player("q0", "QB")]
    star_qb = make_player("qb", "QB", projected_points=400.0, rank=3)
    role_rb = make_player("rb", "RB", projected_points=120.0, rank=1)

    result = recommend([role_rb, star_qb], roster, config, current_round=1)

    assert result.team_needs[Position.QB] == 0.0
    assert result.optimal_pick is not None
    assert result.optimal_pick.player.player_id == "qb"
    assert result.optimal_pick.need == 0.0
    assert result.optimal_pick.score == pytest.approx(result.optimal_pick.value * 0.05)


def test_combined_score_formula() -> None:
    """Test score = need * need_weight + value * value_weight."""
    config = LeagueConfig.create(12, 1, True, dict(NO_REQUIREMENTS, TE=1))
    tight_end = make_player("te", "TE", projected_points=200.0, adp=30.0, tier=3)
    receivers = [make_player(f"wr{i}", "WR") for i in range(3)]

    ranked, needs = score_players([tight_end] + receivers, [], config, current_round=4)
    scored = next(s for s in ranked if s.player.player_id == "te")

    assert needs[Position.TE] == pytest.approx(2.0)
    assert scored.scarcity == 2.0
    assert scored.value == pytest.approx((200.0 + 26.0 * 0.5 + 30.0) * 2.0)
    assert scored.score == pytest.approx(2.0 * 0.8 + scored.value * 0.2)


def test_ranking_tie_breaks() -> None:
    """Test equal scores fall back to rank, then player id."""
    config = LeagueConfig.create(12, 1, True, NO_REQUIREMENTS)
    players = [
        make_player("c", "WR", rank=5),
        make_player("b", "WR", rank=9),
        make_player("a", "WR", rank=9),
    ]

    ranked, _ = score_players(players, [], config, current_round=3)

    assert [s.player.player_id for s in ranked] == ["c", "a", "b"]


def test_recommend_default_players() -> None:
    """Test the optimal pick and alternatives for an empty roster in round 1."""
    result = recommend(default_players(), [], LeagueConfig(), current_round=1)

    assert result.optimal_pick is not None
    assert result.optimal_pick.player.name == "Patrick Mahomes"
    assert [c.player.name for c in result.alternatives] == [
        "Josh Allen",
        "Jalen Hurts",
        "Christian McCaffrey",
    ]
    assert len(result.ranked) == 15
    scores = [candidate.score for candidate in result.ranked]
    assert scores == sorted(scores, reverse=True)
    assert result.reasoning == ""


def test_recommend_does_not_mutate_inputs() -> None:
    """Test scoring leaves the player list and roster untouched."""
    available = default_players()
    roster = [available.pop(3)]
    before_available = list(available)
    before_roster = list(roster)

    recommend(available, roster, LeagueConfig(), current_round=2)

    assert available == before_available
    assert roster == before_roster


def test_recommend_empty_pool() -> None:
    """Test an empty pool gives an empty result instead of an error."""
    result = recommend([], [], LeagueConfig(), current_round=7)

    assert result.is_empty is True
    assert result.optimal_pick is None
    assert result.alternatives == []
    assert result.current_round == 7
    assert result.team_needs[Position.RB] == pytest.approx(2 * 2.0)
    assert result.to_dict()["optimal_pick"] is None


def test_recommendation_to_dict() -> None:
    """Test serializing a recommendation."""
    result = recommend(default_players(), [], LeagueConfig(), current_round=1)
    data = result.to_dict()

    assert data["optimal_pick"]["name"] == "Patrick Mahomes"
    assert len(data["alternatives"]) == 3
    assert set(data["team_needs"]) == {"QB", "RB", "WR", "TE", "K", "DST"}
    assert isinstance(Recommendation.empty({}, 1), Recommendation)


class TestGenerateReasoning:
    """Tests for the reasoning text built from a score breakdown."""

    def test_all_observations(self) -> None:
        """Test every qualifying observation is included in order."""
        player = make_player("qb", "QB", adp=0.5, tier=1)
        candidate = ScoredPlayer(
            player=player, score=50.0, need=2.0, value=900.0, scarcity=1.8
        )

        reasoning = generate_reasoning(candidate, {Position.QB: 2.0}, current_round=1)

        assert reasoning == (
            "Fills QB need (2.0 priority); "
            "Great value (ADP: 0.5, Current: 1); "
            "Tier 1 player - high upside; "
            "QB scarcity (1.8x multiplier)"
        )

    def test_no_observations(self) -> None:
        """Test an unremarkable pick has empty reasoning."""
        player = make_player("wr", "WR", adp=80.0, tier=5)
        candidate = ScoredPlayer(
            player=player, score=9.0, need=0.0, value=180.0, scarcity=1.2
        )

        assert generate_reasoning(candidate, {Position.WR: 0.0}, current_round=3) == ""
