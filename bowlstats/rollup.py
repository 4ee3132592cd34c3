"""Season totals per team."""

import logging
import math

from .constants import REGULAR, TEAM_AVERAGE_REGULARS
from .models import Team, TeamStats

logger = logging.getLogger('bowlstats.rollup')


def rollup_team_scores_and_points(team: Team) -> TeamStats:
    """
    Sum a team's points and pinfall and find its high and low game and series.

    Only matchups with recorded games take part in high/low; a team with no
    games at all keeps zeros everywhere. Scores are effective scratch, so
    blind games count at their adjusted value. Games with unreadable player
    notation (and their series) are left out of high/low but their recorded
    pins still count.

    Returns:
        The new TeamStats, also set on the team
    """
    points_won = 0.0
    points_lost = 0.0
    stats = TeamStats()
    game_scores = []
    series_scores = []

    for matchup in team.matchups:
        won, lost = matchup.points_won_lost
        points_won += won
        points_lost += lost

        series = matchup.scores.series
        if series.games == 0:
            continue
        stats.scratch_pins += series.effective_scratch_score
        unreadable = matchup.scores.unreadable_games()
        if not unreadable:
            series_scores.append(series.effective_scratch_score)
        game_scores.extend(
            g.effective_scratch_score for i, g in enumerate(matchup.scores.games) if i not in unreadable
        )

    if game_scores:
        stats.high_game = max(game_scores)
        stats.low_game = min(game_scores)
    if series_scores:
        stats.high_series = max(series_scores)
        stats.low_series = min(series_scores)

    team.points_won_lost = (points_won, points_lost)
    team.team_stats = stats
    logger.debug(f'Team {team.id}: {points_won}-{points_lost} points, {len(series_scores)} series')
    return stats


def update_team_stats_from_players(team: Team, regulars: int = TEAM_AVERAGE_REGULARS) -> TeamStats:
    """
    Add the team average and handicap from its first regular players.

    Args:
        team: Team whose roster already has player statistics
        regulars: How many REGULAR roster players to count, in roster order
    """
    stats = team.team_stats
    counted = [p for p in team.roster if p.status == REGULAR][:regulars]
    for player in counted:
        stats.average += math.floor(player.player_stats.game_stats.average)
        stats.handicap += math.floor(player.player_stats.handicap)
    return stats
