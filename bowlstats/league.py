"""League decoration: the full scoring and statistics pass."""

import logging
from typing import Optional

from .calculators import select_handicap_calculator, select_points_calculator
from .config import get_config
from .exceptions import LeagueDecorationError
from .leaders import gather_league_leaders
from .models import League
from .player_stats import calculate_league_player_stats
from .rollup import rollup_team_scores_and_points, update_team_stats_from_players
from .schemas import EngineSettings
from .scoring import assign_scores_and_points

logger = logging.getLogger('bowlstats.league')


def decorate_league(league: League, strict: bool = True, settings: Optional[EngineSettings] = None) -> League:
    """
    Derive every computed value of a league snapshot in place.

    Per team: score each matchup (frames, handicaps, points, Star/Hung
    frames), roll up the team's season, compute player statistics and add
    the team average and handicap. Then gather the league honor roll.

    Not idempotent: running twice appends a second set of accolades.

    Args:
        league: League to decorate
        strict: Raise after the pass if any game had malformed frame notation
        settings: Engine settings (default: get_config())

    Returns:
        The same league object

    Raises:
        LeagueDecorationError: If strict and some games could not be reconstructed
        OpponentScoringNotImplementedError: If a bowled matchup has a vacant or absent opponent
    """
    settings = settings or get_config()
    hdcp_calculator = select_handicap_calculator(league.scoring_rules)
    points_calculator = select_points_calculator(league.scoring_rules)
    games_per_series = league.games_per_series(settings.default_games_per_series)

    matchup_count = sum(len(t.matchups) for t in league.teams)
    logger.info(f'Decorating league {league.id}: {len(league.teams)} teams, {matchup_count} matchups')

    for team in league.teams:
        for matchup in team.matchups:
            logger.debug(f'Scoring {team.id} week {matchup.week} vs {matchup.opponent.team_id}')
            errors = assign_scores_and_points(
                matchup,
                league.scoring_rules,
                hdcp_calculator,
                points_calculator,
                team.roster,
                settings.parking_lot_threshold,
            )
            league.frame_errors.extend(errors)

        rollup_team_scores_and_points(team)
        calculate_league_player_stats(team, hdcp_calculator, games_per_series)
        update_team_stats_from_players(team, settings.team_average_regulars)

    gather_league_leaders(league)

    if league.frame_errors:
        logger.warning(f'{len(league.frame_errors)} game(s) skipped for malformed frame notation')
        if strict:
            raise LeagueDecorationError(list(league.frame_errors))
    logger.info(f'Decorated league {league.id}')
    return league
