"""Draft state machine: pick order, turn ownership and pick recording."""

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from draft_assistant.catalog import PlayerCatalog
from draft_assistant.config import LeagueConfig
from draft_assistant.errors import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
)
from draft_assistant.models import DraftPick, DraftState, Player, Team
from draft_assistant.roster import TeamStats, calculate_team_stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TeamRoster:
    """A team's roster, picks and derived statistics."""

    team_id: int
    name: str
    roster: list[Player]
    picks: list[DraftPick]
    stats: TeamStats

    def to_dict(self) -> dict[str, Any]:
        return {
            "team": {"id": self.team_id, "name": self.name},
            "roster": [player.to_dict() for player in self.roster],
            "picks": [pick.to_dict() for pick in self.picks],
            "stats": self.stats.to_dict(),
        }


class Draft:
    """Tracks pick progression for every team in a draft.

    The draft is Active until every slot is filled, then Complete. Only
    ``reset`` is accepted once the draft is complete.

    Attributes:
        config: League configuration
        catalog: Player pool; availability is flipped on each pick
        state: Current round/pick and completion flag
        teams: Teams keyed by team id (1-based)
        board: Draft slots grouped by round, in pick order
        lock: Serializes every mutation of the draft and catalog
    """

    def __init__(self, config: LeagueConfig, catalog: PlayerCatalog):
        """Initialize an empty draft board for the configured league.

        Args:
            config: League configuration
            catalog: Player pool shared with the recommendation scorer
        """
        self.config = config
        self.catalog = catalog
        self.lock = threading.RLock()
        self._initialize()

    def _initialize(self) -> None:
        """Create empty teams and an empty slot for every pick."""
        num_teams = self.config.number_of_teams
        self.state = DraftState(total_picks=self.config.total_picks)
        self.teams: dict[int, Team] = {
            team_id: Team(team_id=team_id) for team_id in range(1, num_teams + 1)
        }

        self.board: list[list[DraftPick]] = []
        self._slots: dict[int, DraftPick] = {}
        for round_number in range(1, self.config.total_rounds + 1):
            round_picks = []
            for index, team_id in enumerate(self.config.draft_order(round_number)):
                pick_number = (round_number - 1) * num_teams + index + 1
                slot = DraftPick(
                    round=round_number, pick_number=pick_number, team_id=team_id
                )
                round_picks.append(slot)
                self._slots[pick_number] = slot
            self.board.append(round_picks)

    @property
    def picks_made(self) -> int:
        return self.state.current_pick - 1

    def team_on_clock(self) -> int | None:
        """Team id holding the current pick, or None once the draft is complete."""
        if self.state.is_complete:
            return None
        return self.config.team_for_pick(self.state.current_pick)

    def is_user_pick(self) -> bool:
        """True if the configured draft position holds the current pick."""
        return self.team_on_clock() == self.config.draft_position

    def get_team(self, team_id: int) -> Team:
        """Look up a team by id.

        Raises:
            NotFoundError: If the team is not in this draft
        """
        try:
            return self.teams[team_id]
        except (KeyError, TypeError):
            raise NotFoundError(f"Team not found: {team_id!r}") from None

    def make_pick(
        self,
        player_id: str,
        team_id: int | None = None,
        round_number: int | None = None,
        pick_number: int | None = None,
    ) -> DraftPick:
        """Draft a player with the current pick.

        The optional team/round/pick arguments confirm which turn the caller
        believes is on the clock; any mismatch rejects the pick.

        Args:
            player_id: Id of the player to draft
            team_id: Expected team on the clock
            round_number: Expected current round
            pick_number: Expected current overall pick

        Returns:
            Copy of the filled draft slot

        Raises:
            InvalidStateError: If the draft is already complete
            NotFoundError: If the team or player is unknown
            ConflictError: If an expected value does not match the current turn
            AlreadyDraftedError: If the player has already been drafted
        """
        with self.lock:
            if self.state.is_complete:
                raise InvalidStateError("Draft is complete; no more picks allowed")

            slot = self._slots[self.state.current_pick]
            if team_id is not None:
                self.get_team(team_id)
                if team_id != slot.team_id:
                    raise ConflictError(
                        f"Pick {slot.pick_number} belongs to team {slot.team_id}, "
                        f"not team {team_id}"
                    )
            if round_number is not None and round_number != self.state.current_round:
                raise ConflictError(
                    f"Expected round {round_number} but draft is in round "
                    f"{self.state.current_round}"
                )
            if pick_number is not None and pick_number != self.state.current_pick:
                raise ConflictError(
                    f"Expected pick {pick_number} but current pick is "
                    f"{self.state.current_pick}"
                )

            # Raises before anything is mutated if the player is unavailable
            player = self.catalog.mark_drafted(player_id)

            slot.player = player
            slot.timestamp = datetime.now()
            team = self.teams[slot.team_id]
            team.roster.append(player)
            team.picks.append(slot)
            self._advance()

            logger.debug(
                f"Pick {slot.pick_number} (round {slot.round}): {team.name} "
                f"drafts {player.name} ({player.position.value})"
            )
            return replace(slot)

    def _advance(self) -> None:
        """Move to the next pick and flag completion after the last one."""
        self.state.current_pick += 1
        if self.state.current_pick > self.state.total_picks:
            self.state.is_complete = True
            logger.info(f"Draft complete: {self.state.total_picks} picks made")
        else:
            self.state.current_round = self.config.round_for_pick(
                self.state.current_pick
            )

    def snapshot(self) -> DraftState:
        """Copy of the current draft state."""
        with self.lock:
            return replace(self.state)

    def get_board(self) -> list[list[DraftPick]]:
        """All draft slots grouped by round, including unfilled ones."""
        with self.lock:
            return [
                [replace(slot) for slot in round_picks] for round_picks in self.board
            ]

    def history(self) -> list[DraftPick]:
        """Filled draft slots in pick order."""
        with self.lock:
            return [
                replace(self._slots[pick_number])
                for pick_number in range(1, self.state.current_pick)
            ]

    def get_team_roster(self, team_id: int) -> TeamRoster:
        """Roster, picks and statistics for a team.

        Raises:
            NotFoundError: If the team is not in this draft
        """
        with self.lock:
            team = self.get_team(team_id)
            return TeamRoster(
                team_id=team.team_id,
                name=team.name,
                roster=list(team.roster),
                picks=[replace(pick) for pick in team.picks],
                stats=calculate_team_stats(team.roster),
            )

    def reset(self) -> None:
        """Clear every pick and make all players available again."""
        with self.lock:
            self.catalog.reset()
            self._initialize()
            logger.info("Draft reset")

    def reconfigure(self, config: LeagueConfig) -> None:
        """Switch to a new league configuration.

        Before the first pick the board is rebuilt from scratch. Once picks
        have been made the team count is locked, and only the owners of
        future slots are recomputed.

        Raises:
            InvalidStateError: If picks exist and the team count would change
        """
        with self.lock:
            if self.picks_made == 0:
                self.config = config
                self._initialize()
                return

            if config.number_of_teams != self.config.number_of_teams:
                raise InvalidStateError(
                    "Cannot change the number of teams after picks have been made; "
                    "reset the draft first"
                )

            self.config = config
            remaining = range(self.state.current_pick, self.state.total_picks + 1)
            for pick_number in remaining:
                self._slots[pick_number].team_id = config.team_for_pick(pick_number)
