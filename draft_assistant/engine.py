"""Draft engine: the single entry point front ends use to run a draft."""

import logging
from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping

from draft_assistant.catalog import PlayerCatalog
from draft_assistant.config import LeagueConfig, Position
from draft_assistant.draft import Draft, TeamRoster
from draft_assistant.errors import DraftError, ValidationError
from draft_assistant.models import DraftPick, DraftState, Player, Team
from draft_assistant.recommendation import (
    Recommendation,
    generate_reasoning,
    recommend,
)
from draft_assistant.roster import RosterValidation, validate_roster

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineState:
    """Snapshot of the draft for display."""

    state: DraftState
    teams: list[Team]
    available_players: list[Player]

    def to_dict(self) -> dict[str, Any]:
        data = self.state.to_dict()
        data["teams"] = [team.to_dict() for team in self.teams]
        data["available_players"] = [
            player.to_dict(is_available=True) for player in self.available_players
        ]
        return data


@dataclass(frozen=True)
class PickResult:
    """A committed pick and the draft state after it."""

    pick: DraftPick
    state: DraftState

    def to_dict(self) -> dict[str, Any]:
        return {"pick": self.pick.to_dict(), "draft_state": self.state.to_dict()}


class DraftEngine:
    """Owns the player catalog, league configuration and draft for one session.

    Construct one engine per draft and pass it to whatever front end drives
    the draft; there is no shared global state.

    Attributes:
        catalog: Player pool
        draft: Draft state machine
    """

    def __init__(
        self,
        players: Iterable[Player] | None = None,
        config: LeagueConfig | None = None,
    ):
        """Initialize the engine.

        Args:
            players: Initial player list (empty catalog if None)
            config: League configuration (defaults to LeagueConfig())

        Raises:
            ValidationError: If the player list is invalid
        """
        self.catalog = PlayerCatalog(players)
        if config is None:
            config = LeagueConfig()
        self.draft = Draft(config, self.catalog)

    @property
    def config(self) -> LeagueConfig:
        return self.draft.config

    def load_catalog(self, players: Iterable[Player]) -> None:
        """Replace the player pool and restart the draft.

        Raises:
            ValidationError: If any player record is invalid (nothing changes)
        """
        with self.draft.lock:
            self.catalog.load(players)
            self.draft.reset()

    def configure(self, config: LeagueConfig | Mapping[str, Any]) -> None:
        """Install a new league configuration.

        Args:
            config: A LeagueConfig or a settings mapping to validate

        Raises:
            ValidationError: If the settings are invalid
            InvalidStateError: If the team count changes after picks were made
        """
        if not isinstance(config, LeagueConfig):
            config = LeagueConfig.from_dict(config)
        self.draft.reconfigure(config)
        logger.info(
            f"Configured {config.league_type} league: {config.number_of_teams} teams, "
            f"draft position {config.draft_position}, "
            f"{'snake' if config.snake_draft else 'linear'} order"
        )

    def update_settings(self, **changes: Any) -> LeagueConfig:
        """Merge partial settings into the configuration and install the result."""
        with self.draft.lock:
            config = self.config.update(**changes)
            self.configure(config)
            return config

    def apply_league_preset(self, league_type: str) -> LeagueConfig:
        """Apply a league type preset (Standard, PPR, HalfPPR, Superflex, Dynasty)."""
        with self.draft.lock:
            config = self.config.apply_preset(league_type)
            self.configure(config)
            return config

    def get_state(self) -> EngineState:
        """Current draft state, teams and available players."""
        with self.draft.lock:
            return EngineState(
                state=self.draft.snapshot(),
                teams=[
                    replace(
                        team,
                        roster=list(team.roster),
                        picks=[replace(pick) for pick in team.picks],
                    )
                    for team in self.draft.teams.values()
                ],
                available_players=self.catalog.available(),
            )

    def team_on_clock(self) -> int | None:
        return self.draft.team_on_clock()

    def is_user_pick(self) -> bool:
        return self.draft.is_user_pick()

    def make_pick(
        self, player_id: str, team_id: int, round_number: int, pick_number: int
    ) -> PickResult:
        """Commit a pick for the team on the clock.

        Args:
            player_id: Id of the player to draft
            team_id: Team the caller expects to be on the clock
            round_number: Round the caller expects
            pick_number: Overall pick the caller expects

        Returns:
            PickResult with the filled slot and the updated draft state

        Raises:
            InvalidStateError: If the draft is complete
            NotFoundError: If the team or player is unknown
            ConflictError: If team/round/pick do not match the current turn
            AlreadyDraftedError: If the player has already been drafted
        """
        try:
            with self.draft.lock:
                pick = self.draft.make_pick(
                    player_id,
                    team_id=team_id,
                    round_number=round_number,
                    pick_number=pick_number,
                )
                return PickResult(pick=pick, state=self.draft.snapshot())
        except DraftError as e:
            logger.warning(f"Rejected pick of {player_id!r} by team {team_id}: {e}")
            raise

    def suggest(self, team_id: int, current_round: int | None = None) -> Recommendation:
        """Recommend a pick for a team.

        Args:
            team_id: Team to recommend for
            current_round: Round to score for (defaults to the draft's round)

        Returns:
            Recommendation with reasoning; empty if no players are available

        Raises:
            NotFoundError: If the team is unknown
            ValidationError: If current_round is not a positive integer
        """
        with self.draft.lock:
            team = self.draft.get_team(team_id)
            if current_round is None:
                current_round = self.draft.state.current_round
            if isinstance(current_round, bool) or not isinstance(current_round, int):
                raise ValidationError(
                    f"current_round must be an integer, got {current_round!r}"
                )
            if current_round < 1:
                raise ValidationError(
                    f"current_round must be positive, got {current_round}"
                )
            available = self.catalog.available()
            roster = list(team.roster)
            config = self.config

        recommendation = recommend(available, roster, config, current_round)
        if recommendation.optimal_pick is None:
            return recommendation
        return replace(
            recommendation,
            reasoning=generate_reasoning(
                recommendation.optimal_pick, recommendation.team_needs, current_round
            ),
        )

    def get_board(self) -> list[list[DraftPick]]:
        return self.draft.get_board()

    def get_history(self) -> list[DraftPick]:
        return self.draft.history()

    def get_team_roster(self, team_id: int) -> TeamRoster:
        return self.draft.get_team_roster(team_id)

    def validate_team_roster(self, team_id: int) -> RosterValidation:
        """Check a team's roster against the league's positional requirements."""
        roster = self.draft.get_team_roster(team_id).roster
        return validate_roster(roster, self.config.roster_requirements)

    def search_players(self, query: str) -> list[Player]:
        return self.catalog.search(query)

    def players_by_position(self, position: Position | str) -> list[Player]:
        return self.catalog.by_position(position)

    def position_counts(self) -> dict[Position, int]:
        """Available players left at each position."""
        with self.draft.lock:
            return self.catalog.position_counts()

    def reset(self) -> None:
        """Restart the draft with every player available."""
        self.draft.reset()
