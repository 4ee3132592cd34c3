"""Shared builders for league test data."""

import pytest

from bowlstats.calculators import select_handicap_calculator, select_points_calculator
from bowlstats.models import (
    BlindPenaltyConfig,
    HandicapConfig,
    LeagueTeamScore,
    Matchup,
    MatchupGameScore,
    OpponentTeam,
    PercentOfAverageToTargetConfig,
    PlayerGameScore,
    PlayerSeriesScore,
    PointScoringConfig,
    PpgPpsConfig,
    ScoringRules,
    TeamScore,
)
from bowlstats.scoring import assign_scores_and_points

PERFECT_FRAMES = [['X']] * 9 + [['X', 'X', 'X']]
GUTTER_FRAMES = [['-', '-']] * 10
NINE_SPARE_FRAMES = [['9', '/']] * 9 + [['9', '/', '9']]
NINE_MISS_FRAMES = [['9', '-']] * 10  # 90


def make_game(frames=None, scratch=0, blind=False, vacant=False) -> PlayerGameScore:
    return PlayerGameScore(
        scratch_score=scratch,
        blind=blind,
        vacant=vacant,
        in_frames=[list(f) for f in frames] if frames else [],
    )


def make_series(player, games, entering_average=0, entering_hdcp=0, hdcp_setting_day=False) -> PlayerSeriesScore:
    """Player series from a list of games or plain scratch scores."""
    return PlayerSeriesScore(
        player=player,
        entering_average=entering_average,
        entering_hdcp=entering_hdcp,
        hdcp_setting_day=hdcp_setting_day,
        games=[g if isinstance(g, PlayerGameScore) else make_game(scratch=g) for g in games],
    )


def make_matchup(week, player_scores, opponent_games=None, opponent_hdcp=0, opponent_id='OPP', bowl_date=None,
                 vacant=False, absent=False) -> Matchup:
    opponent_scores = TeamScore(games=[MatchupGameScore(scratch_score=s) for s in (opponent_games or [])])
    return Matchup(
        week=week,
        bowl_date=bowl_date,
        scores=LeagueTeamScore(player_scores=list(player_scores)),
        opponent=OpponentTeam(
            team_id=opponent_id,
            team_hdcp=opponent_hdcp,
            vacant=vacant,
            absent=absent,
            scores=opponent_scores,
        ),
    )


def make_rules(target=200, pct=90, blind_penalty=10) -> ScoringRules:
    """90% of 200 handicap, one point per game and series, half points on ties."""
    return ScoringRules(
        handicap=HandicapConfig(
            type='PCT_AVG_TO_TGT',
            pct_avg_to_target=PercentOfAverageToTargetConfig(target=target, pct_to_target=pct),
        ),
        blind_penalty=BlindPenaltyConfig(allowed=True, default_penalty=blind_penalty),
        point_scoring=PointScoringConfig(rule='PPG_PPS', ppg_pps=PpgPpsConfig()),
    )


def score_matchup(matchup, rules, roster=()):
    """Run the matchup scorer with the calculators selected from rules."""
    return assign_scores_and_points(
        matchup,
        rules,
        select_handicap_calculator(rules),
        select_points_calculator(rules),
        list(roster),
    )


@pytest.fixture
def rules():
    return make_rules()
