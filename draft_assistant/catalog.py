"""Player catalog: the pool of draftable players and their availability."""

import logging
from typing import Iterable, Iterator

from draft_assistant.config import POSITIONS, Position
from draft_assistant.errors import AlreadyDraftedError, NotFoundError, ValidationError
from draft_assistant.models import Player

logger = logging.getLogger(__name__)


class PlayerCatalog:
    """Holds every player record and tracks which are still available.

    Attributes:
        players: All players keyed by id, in load order
        drafted_ids: Ids of players who have been drafted
    """

    def __init__(self, players: Iterable[Player] | None = None):
        """Initialize the catalog, optionally loading an initial player list.

        Args:
            players: Players to load (see load)
        """
        self.players: dict[str, Player] = {}
        self.drafted_ids: set[str] = set()
        if players is not None:
            self.load(players)

    def __len__(self) -> int:
        return len(self.players)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self.players

    def __iter__(self) -> Iterator[Player]:
        return iter(self.players.values())

    def load(self, players: Iterable[Player]) -> None:
        """Replace the catalog with a new player list.

        Every player starts out available. If any record is invalid the
        previous catalog is left untouched.

        Args:
            players: Player records to load

        Raises:
            ValidationError: On a duplicate id or an invalid player record
        """
        loaded: dict[str, Player] = {}
        for player in players:
            if not isinstance(player, Player):
                raise ValidationError(f"Expected Player record, got {player!r}")
            player.validate()
            if player.player_id in loaded:
                raise ValidationError(f"Duplicate player id: {player.player_id!r}")
            loaded[player.player_id] = player

        self.players = loaded
        self.drafted_ids = set()
        logger.info(f"Loaded {len(loaded)} players into catalog")

    def get(self, player_id: str) -> Player:
        """Look up a player by id.

        Raises:
            NotFoundError: If no such player exists
        """
        try:
            return self.players[player_id]
        except KeyError:
            raise NotFoundError(f"Player not found: {player_id!r}") from None

    def is_available(self, player_id: str) -> bool:
        """Check whether a player can still be drafted.

        Raises:
            NotFoundError: If no such player exists
        """
        self.get(player_id)
        return player_id not in self.drafted_ids

    def available(self) -> list[Player]:
        """All players not yet drafted, in load order."""
        return [
            player
            for player_id, player in self.players.items()
            if player_id not in self.drafted_ids
        ]

    def by_position(self, position: Position | str) -> list[Player]:
        """Available players at one position.

        Raises:
            ValidationError: If the position label is unknown
        """
        position = Position.parse(position)
        return [player for player in self.available() if player.position == position]

    def search(self, query: str) -> list[Player]:
        """Available players whose name contains the query (case-insensitive)."""
        needle = query.strip().lower()
        return [player for player in self.available() if needle in player.name.lower()]

    def position_counts(self) -> dict[Position, int]:
        """Count of available players at each of the six positions."""
        counts = {position: 0 for position in POSITIONS}
        for player in self.available():
            counts[player.position] += 1
        return counts

    def mark_drafted(self, player_id: str) -> Player:
        """Mark a player as drafted.

        Args:
            player_id: Id of the player being drafted

        Returns:
            The drafted player

        Raises:
            NotFoundError: If no such player exists
            AlreadyDraftedError: If the player was already drafted
        """
        player = self.get(player_id)
        if player_id in self.drafted_ids:
            raise AlreadyDraftedError(
                f"{player.name} ({player_id}) has already been drafted"
            )
        self.drafted_ids.add(player_id)
        logger.debug(f"Drafted {player.name} ({player.position.value})")
        return player

    def reset(self) -> None:
        """Make every player available again."""
        self.drafted_ids.clear()
        logger.debug(f"Catalog reset: {len(self.players)} players available")
