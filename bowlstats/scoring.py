"""Matchup scoring: frames, handicaps, player series, team totals and points."""

import logging
from typing import List, Optional, Sequence

from .calculators import HandicapCalculator, PointsCalculator
from .constants import DEFAULT_PARKING_LOT_THRESHOLD
from .exceptions import FrameNotationError, OpponentScoringNotImplementedError
from .frames import calculate_frame_scores, set_cross_player_frame_attributes
from .models import (
    CarryOverStats,
    Matchup,
    Player,
    PlayerSeriesScore,
    ScoringRules,
    SeriesScore,
    TeamScore,
    find_player,
)

logger = logging.getLogger('bowlstats.scoring')


def reconstruct_games(
    player_score: PlayerSeriesScore,
    parking_lot_threshold: int = DEFAULT_PARKING_LOT_THRESHOLD,
    week: int = 0,
) -> List[FrameNotationError]:
    """
    Build frames for every game that has notation but no scratch score.

    A malformed game is left without frames; the others are unaffected.

    Returns:
        The notation errors, located by player, week and game number
    """
    errors = []
    for number, game in enumerate(player_score.games, start=1):
        if game.scratch_score == 0 and game.in_frames:
            try:
                calculate_frame_scores(game, parking_lot_threshold)
            except FrameNotationError as e:
                game.frames_error = True
                e.locate(player_score.player, week, number)
                logger.warning(f'Skipping frames: {e}')
                errors.append(e)
    return errors


def resolve_handicap(
    player_score: PlayerSeriesScore,
    hdcp_calculator: HandicapCalculator,
    carry_over: Optional[CarryOverStats] = None,
) -> int:
    """
    Work out the handicap for a player series and store it as the entering handicap.

    A non-zero entering handicap is kept. On handicap setting day the average
    comes from the series' own games (plus any carry-over pins and games),
    otherwise from the entering average.
    """
    hdcp = player_score.entering_hdcp
    if hdcp == 0:
        if player_score.hdcp_setting_day:
            carry_over = carry_over or CarryOverStats()
            bowled = [g for g in player_score.games if g.bowled]
            average = hdcp_calculator.calculate_average(bowled, carry_over.pins, carry_over.games)
            hdcp = hdcp_calculator.calculate_handicap(average)
        else:
            hdcp = hdcp_calculator.calculate_handicap(player_score.entering_average)
        player_score.entering_hdcp = hdcp
    return hdcp


def score_player_series(
    player_score: PlayerSeriesScore,
    hdcp_calculator: HandicapCalculator,
    scoring_rules: ScoringRules,
    player: Optional[Player] = None,
    week: int = 0,
    default_threshold: int = DEFAULT_PARKING_LOT_THRESHOLD,
) -> List[FrameNotationError]:
    """
    Score one player's series: frames, handicap, game and series totals.

    Args:
        player_score: The player's series for a matchup
        hdcp_calculator: League handicap calculator
        scoring_rules: League scoring rules (for the blind penalty)
        player: Roster entry, when the player id resolves
        week: Matchup week, used to locate notation errors
        default_threshold: Parking lot threshold when the player is not on the roster

    Returns:
        Frame notation errors for games that could not be reconstructed
    """
    threshold = player.parking_lot_threshold if player else default_threshold
    errors = reconstruct_games(player_score, threshold, week)

    hdcp = resolve_handicap(player_score, hdcp_calculator, player.carry_over_stats if player else None)
    blind_penalty = scoring_rules.blind_penalty.default_penalty

    for game in player_score.games:
        game.hdcp = hdcp
        if game.blind:
            game.effective_scratch_score = player_score.entering_average - blind_penalty
        elif game.vacant:
            game.effective_scratch_score = 0
        else:
            game.effective_scratch_score = game.scratch_score
        game.hdcp_score = game.effective_scratch_score + hdcp

    game_count = len(player_score.games)
    scratch = sum(g.scratch_score for g in player_score.games)
    player_score.series = SeriesScore(
        scratch_score=scratch,
        effective_scratch_score=sum(g.effective_scratch_score for g in player_score.games),
        hdcp=hdcp * game_count,
        hdcp_score=sum(g.hdcp_score for g in player_score.games),
        average=scratch / game_count if game_count else 0.0,
        games=game_count,
    )
    return errors


def sum_series(team_score: TeamScore) -> SeriesScore:
    """Total a team's game scores into its series score."""
    series = SeriesScore()
    for game in team_score.games:
        series.scratch_score += game.scratch_score
        series.effective_scratch_score += game.effective_scratch_score
        series.hdcp += game.hdcp
        series.hdcp_score += game.hdcp_score
        series.games += 1
    if series.games:
        series.average = series.scratch_score / series.games
    team_score.series = series
    return series


def _apply_team_handicap(team_score: TeamScore, team_hdcp: Optional[int] = None) -> None:
    for game in team_score.games:
        if team_hdcp is not None:
            game.hdcp = team_hdcp
        game.effective_scratch_score = game.scratch_score
        game.hdcp_score = game.effective_scratch_score + game.hdcp


def assign_scores_and_points(
    matchup: Matchup,
    scoring_rules: ScoringRules,
    hdcp_calculator: HandicapCalculator,
    points_calculator: PointsCalculator,
    roster: Sequence[Player],
    default_threshold: int = DEFAULT_PARKING_LOT_THRESHOLD,
) -> List[FrameNotationError]:
    """
    Populate the full score tree of a matchup and award points.

    Returns:
        Frame notation errors collected while reconstructing games

    Raises:
        OpponentScoringNotImplementedError: If a bowled matchup has a vacant
            or absent opponent
    """
    team_scores = matchup.scores
    errors: List[FrameNotationError] = []

    # Player series
    for player_score in team_scores.player_scores:
        player = find_player(roster, player_score.player)
        if player is None:
            logger.debug(f'Week {matchup.week}: player {player_score.player} is not on the roster')
        errors.extend(score_player_series(
            player_score, hdcp_calculator, scoring_rules, player, matchup.week, default_threshold
        ))

    # Team games are the sum of the player games
    if team_scores.player_scores:
        team_scores.games = []
        for player_score in team_scores.player_scores:
            for index, game in enumerate(player_score.games):
                team_game = team_scores.game(index)
                team_game.scratch_score += game.scratch_score
                team_game.effective_scratch_score += game.effective_scratch_score
                team_game.hdcp += game.hdcp
                team_game.hdcp_score += game.hdcp_score
    else:
        _apply_team_handicap(team_scores)
    sum_series(team_scores)

    # Opponent is only tracked at team level
    opponent = matchup.opponent
    _apply_team_handicap(opponent.scores, opponent.team_hdcp)
    sum_series(opponent.scores)

    if team_scores.games:
        if opponent.vacant or opponent.absent:
            condition = 'vacant' if opponent.vacant else 'absent'
            logger.warning(f'Week {matchup.week}: {condition} opponent {opponent.team_id} has no scoring policy')
            raise OpponentScoringNotImplementedError(matchup.week, opponent.team_id, condition)
        if opponent.scores.games:
            points_calculator.assign_points(team_scores, opponent.scores)
        else:
            logger.debug(f'Week {matchup.week}: no opponent scores, no points assigned')

    points_won = sum(g.points_won for g in team_scores.games) + team_scores.series.points_won
    points_lost = sum(g.points_won for g in opponent.scores.games) + opponent.scores.series.points_won
    matchup.points_won_lost = (points_won, points_lost)

    set_cross_player_frame_attributes(team_scores)
    return errors
