"""Command-line interface for the live draft assistant."""

import logging
import sys
from typing import NoReturn

import click

from draft_assistant.config import LEAGUE_TYPES, LeagueConfig
from draft_assistant.data_io import (
    default_players,
    load_league_config,
    load_players,
    save_board_csv,
)
from draft_assistant.engine import DraftEngine
from draft_assistant.errors import DraftError


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""

    RED = "\033[91m"
    YELLOW = "\033[93m"
    GREEN = "\033[92m"
    BLUE = "\033[94m"
    RESET = "\033[0m"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors and emojis for different log levels."""

    LEVEL_COLORS = {
        "DEBUG": Colors.BLUE,
        "INFO": "",  # No color - plain white/default
        "WARNING": Colors.YELLOW,
        "ERROR": Colors.RED,
        "CRITICAL": Colors.RED,
    }

    LEVEL_EMOJIS = {
        "DEBUG": "🔍 ",
        "INFO": "",  # No emoji for info messages
        "WARNING": "⚠️  ",
        "ERROR": "❌ ",
        "CRITICAL": "💥 ",
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors and emojis."""
        level_color = self.LEVEL_COLORS.get(record.levelname, "")
        level_emoji = self.LEVEL_EMOJIS.get(record.levelname, "")

        message = record.getMessage()
        if level_color:
            return f"{level_emoji}{level_color}{message}{Colors.RESET}"
        return f"{level_emoji}{message}"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application with colors and emojis.

    Args:
        verbose: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ColoredFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()  # Remove any existing handlers
    root_logger.addHandler(handler)


def build_engine(players_path: str | None, league_path: str | None) -> DraftEngine:
    """Create an engine from optional player and league files."""
    players = load_players(players_path) if players_path else default_players()
    config = load_league_config(league_path) if league_path else LeagueConfig()
    return DraftEngine(players, config)


def replay_picks(engine: DraftEngine, picks: str | None) -> None:
    """Commit a comma-separated list of player ids in draft order."""
    if not picks:
        return
    for player_id in (p.strip() for p in picks.split(",")):
        if not player_id:
            continue
        state = engine.get_state().state
        engine.make_pick(
            player_id, engine.team_on_clock(), state.current_round, state.current_pick
        )


def fail(message: str) -> NoReturn:
    click.echo(f"❌ {message}", err=True)
    sys.exit(1)


@click.group()
@click.option(
    "--players",
    "players_path",
    type=click.Path(exists=True, dir_okay=False),
    help="CSV or JSON player rankings (default: built-in sample)",
)
@click.option(
    "--league",
    "league_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML league settings file",
)
@click.option(
    "--picks",
    help="Comma-separated player ids already drafted, in pick order",
)
@click.option("--verbose", is_flag=True, help="Enable verbose (DEBUG level) logging")
@click.pass_context
def cli(
    ctx: click.Context,
    players_path: str | None,
    league_path: str | None,
    picks: str | None,
    verbose: bool,
) -> None:
    """Track a fantasy football draft and suggest the best available pick."""
    setup_logging(verbose)
    if ctx.invoked_subcommand == "presets":
        return
    try:
        engine = build_engine(players_path, league_path)
        replay_picks(engine, picks)
    except DraftError as e:
        fail(str(e))
    ctx.obj = engine


@cli.command()
@click.option(
    "--output",
    type=click.Path(dir_okay=False),
    help="Also write the board to this CSV file",
)
@click.pass_obj
def board(engine: DraftEngine, output: str | None) -> None:
    """Print the draft board round by round."""
    for round_picks in engine.get_board():
        cells = []
        for pick in round_picks:
            label = pick.player.name if pick.player else "-"
            cells.append(f"{pick.pick_number}:T{pick.team_id} {label}")
        click.echo(f"Round {round_picks[0].round:>2} | " + " | ".join(cells))

    if output:
        save_board_csv(output, engine.get_board())
        click.echo(f"Board saved to {output}")


@cli.command()
@click.option(
    "--team", "team_id", type=int, help="Team id (default: team on the clock)"
)
@click.option("--round", "round_number", type=int, help="Round to score for")
@click.pass_obj
def suggest(engine: DraftEngine, team_id: int | None, round_number: int | None) -> None:
    """Recommend the best available pick for a team."""
    if team_id is None:
        team_id = engine.team_on_clock()
        if team_id is None:
            fail("Draft is complete")

    try:
        recommendation = engine.suggest(team_id, round_number)
    except DraftError as e:
        fail(str(e))

    if recommendation.optimal_pick is None:
        click.echo("No players available")
        return

    best = recommendation.optimal_pick
    click.echo(
        f"{Colors.GREEN}✅ {best.player.name} ({best.player.position.value}, "
        f"{best.player.team}) score {best.score:.1f}{Colors.RESET}"
    )
    if recommendation.reasoning:
        click.echo(f"   {recommendation.reasoning}")
    for candidate in recommendation.alternatives:
        click.echo(
            f"   alt: {candidate.player.name} ({candidate.player.position.value}) "
            f"score {candidate.score:.1f}"
        )
    needs = ", ".join(
        f"{position.value} {need:.1f}"
        for position, need in recommendation.team_needs.items()
        if need > 0
    )
    click.echo(f"   needs: {needs or 'none'}")
    left = ", ".join(
        f"{position.value} {count}"
        for position, count in engine.position_counts().items()
    )
    click.echo(f"   available: {left}")


@cli.command()
@click.argument("team_id", type=int)
@click.pass_obj
def roster(engine: DraftEngine, team_id: int) -> None:
    """Show a team's roster and statistics."""
    try:
        team_roster = engine.get_team_roster(team_id)
        validation = engine.validate_team_roster(team_id)
    except DraftError as e:
        fail(str(e))

    click.echo(f"{team_roster.name}")
    for pick, player in zip(team_roster.picks, team_roster.roster):
        click.echo(
            f"  R{pick.round} #{pick.pick_number}: {player.name} "
            f"({player.position.value}, {player.team})"
        )
    stats = team_roster.stats.to_dict()
    click.echo(
        f"  total points {stats['total_points']}, average tier "
        f"{stats['average_tier']}, {stats['player_count']} players"
    )
    for violation in validation.violations:
        click.echo(f"  {Colors.YELLOW}⚠️  {violation}{Colors.RESET}")


@cli.command()
def presets() -> None:
    """List the available league type presets."""
    for name, label in LEAGUE_TYPES.items():
        click.echo(f"{name}: {label}")


if __name__ == "__main__":
    cli()
