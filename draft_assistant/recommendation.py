"""Pick recommendations combining team need, player value and scarcity.

Every function here is pure: it reads the players, roster and configuration
it is given and never mutates draft state.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from draft_assistant.config import POSITIONS, LeagueConfig, Position
from draft_assistant.models import Player
from draft_assistant.roster import count_by_position

logger = logging.getLogger(__name__)

# Need weight starts near 1.0 and decays each round down to a floor
NEED_WEIGHT_FLOOR = 0.3
NEED_WEIGHT_DECAY = 0.05

# Value score components
ADP_VALUE_WEIGHT = 0.5
TIER_WEIGHT = 10.0
SCARCITY_CAP = 2.0

ALTERNATIVE_COUNT = 3

# Reasoning thresholds
HIGH_TIER_CUTOFF = 2
SCARCITY_NOTE_THRESHOLD = 1.5


@dataclass(frozen=True)
class ScoredPlayer:
    """A candidate player with the numbers behind its score.

    Attributes:
        player: The candidate
        score: Combined need/value score (higher is better)
        need: Team need at the player's position
        value: Scarcity-adjusted value score
        scarcity: Positional scarcity multiplier applied to value
    """

    player: Player
    score: float
    need: float
    value: float
    scarcity: float

    def to_dict(self) -> dict[str, Any]:
        data = self.player.to_dict()
        data.update(
            score=self.score, need=self.need, value=self.value, scarcity=self.scarcity
        )
        return data


@dataclass(frozen=True)
class Recommendation:
    """Ranked suggestions for one team's pick.

    Attributes:
        optimal_pick: Best candidate, None when nobody is available
        alternatives: Next best candidates
        team_needs: Scarcity-scaled need per position used for scoring
        ranked: Every available player, best first
        current_round: Round the scores were computed for
        reasoning: Human-readable notes on the optimal pick
    """

    optimal_pick: ScoredPlayer | None
    alternatives: list[ScoredPlayer]
    team_needs: dict[Position, float]
    ranked: list[ScoredPlayer] = field(default_factory=list)
    current_round: int = 1
    reasoning: str = ""

    @property
    def is_empty(self) -> bool:
        return self.optimal_pick is None

    @classmethod
    def empty(
        cls, team_needs: dict[Position, float], current_round: int
    ) -> "Recommendation":
        """Result for a draft with no players left to recommend."""
        return cls(
            optimal_pick=None,
            alternatives=[],
            team_needs=team_needs,
            ranked=[],
            current_round=current_round,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "optimal_pick": self.optimal_pick.to_dict() if self.optimal_pick else None,
            "alternatives": [candidate.to_dict() for candidate in self.alternatives],
            "team_needs": {
                position.value: need for position, need in self.team_needs.items()
            },
            "current_round": self.current_round,
            "reasoning": self.reasoning,
        }


def calculate_team_needs(
    roster: Iterable[Player],
    requirements: Mapping[Position, int],
    available: list[Player],
) -> dict[Position, float]:
    """Calculate how badly a team needs each position.

    need = max(0, required - rostered), scaled by (1 + 1 / available at
    position) so that thin positions are more urgent.

    Args:
        roster: Players the team already has
        requirements: Required count per position
        available: Every available player in the catalog

    Returns:
        Dictionary mapping position -> need
    """
    current_counts = count_by_position(roster)
    available_counts = count_by_position(available)

    needs: dict[Position, float] = {}
    for position in POSITIONS:
        required = requirements.get(position, 0)
        need = float(max(0, required - current_counts[position]))
        scarcity = 1.0 / max(1, available_counts[position])
        needs[position] = need * (1.0 + scarcity)

    return needs


def position_scarcity(
    position: Position, available_counts: Mapping[Position, int], total_available: int
) -> float:
    """Multiplier for positions with few players left, capped at SCARCITY_CAP.

    Args:
        position: Position to evaluate
        available_counts: Available players per position
        total_available: Available players across all positions

    Returns:
        min(SCARCITY_CAP, total / at position), or 1.0 with nobody available
    """
    if total_available == 0:
        return 1.0
    position_available = available_counts.get(position, 0)
    return min(SCARCITY_CAP, total_available / max(1, position_available))


def calculate_value_score(player: Player, current_round: int, scarcity: float) -> float:
    """Value of a player independent of team need.

    Projected points, plus a bonus when ADP is later than the current round,
    plus a tier term, all scaled by positional scarcity.
    """
    # NOTE: adp is in overall-pick units, current_round counts rounds
    adp_value = max(0.0, player.adp - current_round)
    value = player.projected_points + adp_value * ADP_VALUE_WEIGHT
    value += player.tier * TIER_WEIGHT
    return value * scarcity


def need_weight(current_round: int) -> float:
    """Weight given to team need; value gets the remainder."""
    return max(NEED_WEIGHT_FLOOR, 1.0 - current_round * NEED_WEIGHT_DECAY)


def score_players(
    available: list[Player],
    roster: Iterable[Player],
    config: LeagueConfig,
    current_round: int,
) -> tuple[list[ScoredPlayer], dict[Position, float]]:
    """Score and rank every available player for a team.

    Args:
        available: All available players in the catalog
        roster: The team's current roster
        config: League configuration (roster requirements)
        current_round: Round the pick is being made in

    Returns:
        Tuple of:
        - Players ranked by score descending (ties: lower rank, then id)
        - Team needs used for scoring
    """
    team_needs = calculate_team_needs(roster, config.roster_requirements, available)
    available_counts = count_by_position(available)
    total_available = len(available)

    weight = need_weight(current_round)
    value_weight = 1.0 - weight

    scored = []
    for player in available:
        scarcity = position_scarcity(player.position, available_counts, total_available)
        value = calculate_value_score(player, current_round, scarcity)
        need = team_needs.get(player.position, 0.0)
        score = need * weight + value * value_weight
        scored.append(
            ScoredPlayer(
                player=player, score=score, need=need, value=value, scarcity=scarcity
            )
        )

    scored.sort(key=lambda s: (-s.score, s.player.rank, s.player.player_id))
    return scored, team_needs


def recommend(
    available: list[Player],
    roster: Iterable[Player],
    config: LeagueConfig,
    current_round: int,
) -> Recommendation:
    """Recommend the best pick and alternatives for a team.

    Args:
        available: All available players in the catalog
        roster: The team's current roster
        config: League configuration
        current_round: Round the pick is being made in

    Returns:
        Recommendation; empty (optimal_pick None) if no players are available
    """
    ranked, team_needs = score_players(available, roster, config, current_round)
    if not ranked:
        logger.debug("No available players to recommend")
        return Recommendation.empty(team_needs, current_round)

    best = ranked[0]
    logger.debug(
        f"Round {current_round}: recommending {best.player.name} "
        f"(score {best.score:.2f}, need {best.need:.2f}, value {best.value:.2f})"
    )
    return Recommendation(
        optimal_pick=best,
        alternatives=ranked[1 : 1 + ALTERNATIVE_COUNT],
        team_needs=team_needs,
        ranked=ranked,
        current_round=current_round,
    )


def generate_reasoning(
    candidate: ScoredPlayer, team_needs: Mapping[Position, float], current_round: int
) -> str:
    """Explain a recommendation from its already-computed score breakdown.

    Args:
        candidate: Scored player being explained
        team_needs: Team needs used for scoring
        current_round: Round the pick is being made in

    Returns:
        Semicolon-separated notes, or an empty string if none apply
    """
    player = candidate.player
    position = player.position.value
    reasons = []

    need = team_needs.get(player.position, 0.0)
    if need > 0:
        reasons.append(f"Fills {position} need ({need:.1f} priority)")

    if player.adp < current_round:
        reasons.append(f"Great value (ADP: {player.adp}, Current: {current_round})")

    if player.tier <= HIGH_TIER_CUTOFF:
        reasons.append(f"Tier {player.tier} player - high upside")

    if candidate.scarcity > SCARCITY_NOTE_THRESHOLD:
        reasons.append(f"{position} scarcity ({candidate.scarcity:.1f}x multiplier)")

    return "; ".join(reasons)
