"""Consistency checks for a decorated league."""

from .constants import FRAMES_PER_GAME
from .models import GameScore, League, Matchup

TOLERANCE = 1e-6


def _differs(a: float, b: float) -> bool:
    return abs(a - b) > TOLERANCE


def _check_hdcp_identity(label: str, score: GameScore) -> list[str]:
    expected = score.effective_scratch_score + score.hdcp
    if _differs(score.hdcp_score, expected):
        return [f'{label}: handicap score {score.hdcp_score} != {score.effective_scratch_score} + {score.hdcp}']
    return []


def validate_matchup(team_id: str, matchup: Matchup) -> list[str]:
    """
    Validate the score tree of one decorated matchup.

    Checks:
    - Handicap score = effective scratch + handicap for every game and series
    - Effective scratch equals scratch for games that are neither blind nor vacant
    - Frame totals agree with the scratch score of complete games
    - Team games and series equal the sum of the player series
    - points_won_lost equals the points awarded on both sides

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    where = f'{team_id} week {matchup.week}'
    scores = matchup.scores

    for ps in scores.player_scores:
        for number, game in enumerate(ps.games, start=1):
            label = f'{where} {ps.player} game {number}'
            errors.extend(_check_hdcp_identity(label, game))
            if not game.blind and not game.vacant and _differs(game.effective_scratch_score, game.scratch_score):
                errors.append(f'{label}: effective scratch {game.effective_scratch_score} != {game.scratch_score}')
            if len(game.frames) == FRAMES_PER_GAME and game.frames[-1].cumulative_score != game.scratch_score:
                errors.append(
                    f'{label}: frames total {game.frames[-1].cumulative_score} != scratch {game.scratch_score}'
                )
        errors.extend(_check_hdcp_identity(f'{where} {ps.player} series', ps.series))

    if scores.player_scores:
        for index, team_game in enumerate(scores.games):
            player_games = [ps.games[index] for ps in scores.player_scores if len(ps.games) > index]
            total = sum(g.hdcp_score for g in player_games)
            if _differs(team_game.hdcp_score, total):
                errors.append(f'{where} game {index + 1}: team handicap score {team_game.hdcp_score} != {total}')
        total = sum(ps.series.hdcp_score for ps in scores.player_scores)
        if _differs(scores.series.hdcp_score, total):
            errors.append(f'{where} series: team handicap score {scores.series.hdcp_score} != {total}')

    for index, game in enumerate(scores.games, start=1):
        errors.extend(_check_hdcp_identity(f'{where} team game {index}', game))
    errors.extend(_check_hdcp_identity(f'{where} team series', scores.series))

    won = sum(g.points_won for g in scores.games) + scores.series.points_won
    lost = sum(g.points_won for g in matchup.opponent.scores.games) + matchup.opponent.scores.series.points_won
    if _differs(matchup.points_won_lost[0], won) or _differs(matchup.points_won_lost[1], lost):
        errors.append(f'{where}: points {matchup.points_won_lost} != ({won}, {lost})')

    return errors


def validate_league(league: League) -> list[str]:
    """
    Validate a decorated league.

    Also checks that each team's points_won_lost is the sum over its matchups.

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    for team in league.teams:
        for matchup in team.matchups:
            errors.extend(validate_matchup(team.id, matchup))

        won = sum(m.points_won_lost[0] for m in team.matchups)
        lost = sum(m.points_won_lost[1] for m in team.matchups)
        if _differs(team.points_won_lost[0], won) or _differs(team.points_won_lost[1], lost):
            errors.append(f'{team.id}: season points {team.points_won_lost} != ({won}, {lost})')
    return errors
