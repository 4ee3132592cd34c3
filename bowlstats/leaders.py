"""League honor roll: the seven season leader categories."""

import logging
from datetime import date
from typing import List, Optional

from .constants import (
    IND_GAME_OVER_AVERAGE,
    IND_HIGH_AVERAGE,
    IND_SCRATCH_GAME,
    IND_SCRATCH_SERIES,
    IND_SERIES_OVER_AVERAGE,
    TEAM_SCRATCH_GAME,
    TEAM_SCRATCH_SERIES,
    UNKNOWN,
)
from .models import Accolade, League, PlayerSeriesScore

logger = logging.getLogger('bowlstats.leaders')


class AccoladeTracker:
    """
    Tracks the holder of a record during a forward scan.

    Only a strictly greater value replaces the holder, so ties keep the
    earliest one seen. The record starts at zero, so non-positive values
    never hold it.
    """

    def __init__(self, accolade_type: str, who: str = ''):
        self.accolade = Accolade(type=accolade_type, who=who)

    def offer(self, how_much: float, who: str, when: Optional[date] = None, description: str = '') -> bool:
        """Replace the holder if how_much beats the current record."""
        if how_much > self.accolade.how_much:
            self.accolade.who = who
            self.accolade.when = when
            self.accolade.how_much = how_much
            self.accolade.description = description
            return True
        return False

    @property
    def held(self) -> bool:
        return self.accolade.how_much > 0


def offer_over_average(
    game_tracker: AccoladeTracker,
    series_tracker: AccoladeTracker,
    player_score: PlayerSeriesScore,
    when: Optional[date] = None,
) -> None:
    """
    Offer a player series to the game and series over-average records.

    Handicap setting days are skipped (the entering average is not set yet),
    as are games without a real score (blind, vacant or unreadable). A series
    with an unreadable game is not offered.
    """
    if player_score.hdcp_setting_day:
        return
    who = player_score.player or UNKNOWN
    average = player_score.entering_average
    for game in player_score.games:
        if not game.bowled:
            continue
        diff = game.scratch_score - average
        game_tracker.offer(diff, who, when, f'{game.scratch_score:g} - {average:g} = {diff:g}')

    if any(g.frames_error for g in player_score.games):
        return
    expected = average * player_score.series.games
    diff = player_score.series.scratch_score - expected
    series_tracker.offer(diff, who, when, f'{player_score.series.scratch_score:g} - {expected:g} = {diff:g}')


def gather_league_leaders(league: League) -> List[Accolade]:
    """
    Scan every team, matchup and player series once and append the seven
    honor roll records to league.accolades.

    Appends even when a category has no holder, so running twice appends
    a second set.

    Returns:
        The seven accolades, in the order they were appended
    """
    ind_game = AccoladeTracker(IND_SCRATCH_GAME)
    ind_series = AccoladeTracker(IND_SCRATCH_SERIES)
    team_game = AccoladeTracker(TEAM_SCRATCH_GAME)
    team_series = AccoladeTracker(TEAM_SCRATCH_SERIES)
    game_over_avg = AccoladeTracker(IND_GAME_OVER_AVERAGE)
    series_over_avg = AccoladeTracker(IND_SERIES_OVER_AVERAGE)
    high_average = AccoladeTracker(IND_HIGH_AVERAGE)

    for team in league.teams:
        team_id = team.id or UNKNOWN
        for matchup in team.matchups:
            when = matchup.bowl_date
            scores = matchup.scores
            unreadable = scores.unreadable_games()
            for index, game in enumerate(scores.games):
                if index not in unreadable:
                    team_game.offer(game.scratch_score, team_id, when)
            if not unreadable:
                team_series.offer(scores.series.scratch_score, team_id, when)

            for player_score in scores.player_scores:
                player = player_score.player or UNKNOWN
                for game in player_score.games:
                    ind_game.offer(game.scratch_score, player, when)
                if not any(g.frames_error for g in player_score.games):
                    ind_series.offer(player_score.series.scratch_score, player, when)
                offer_over_average(game_over_avg, series_over_avg, player_score, when)

        for player in team.roster:
            high_average.offer(player.player_stats.game_stats.average, player.id or UNKNOWN)

    trackers = [ind_game, ind_series, team_game, team_series, game_over_avg, series_over_avg, high_average]
    accolades = [t.accolade for t in trackers]
    league.accolades.extend(accolades)
    logger.debug(f'Honor roll: {sum(1 for t in trackers if t.held)} of {len(trackers)} categories held')
    return accolades
