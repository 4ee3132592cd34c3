"""Handicap and matchup point calculators.

Both are small strategy objects selected once per decoration pass from the
league's scoring rules. Unknown or incomplete configuration never aborts a
pass: it falls back to a neutral calculator and logs a warning.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from .constants import HANDICAP_NONE, HANDICAP_PCT_AVG_TO_TGT, POINTS_PPG_PPS
from .models import GameScore, MatchupGameScore, ScoringRules, TeamScore

logger = logging.getLogger('bowlstats.calculators')


# ---------------------------------------------------------------------------
# Handicap
# ---------------------------------------------------------------------------

def calculate_average(
    games: Sequence[GameScore],
    carry_over_pins: Optional[int] = None,
    carry_over_games: Optional[int] = None,
) -> float:
    """
    Average scratch score of a list of games.

    Carry-over pins and games (e.g. from last season) are included only when
    both are given and non-zero.

    Returns:
        The average, or 0 when there are no games at all
    """
    pinfall = sum(g.scratch_score for g in games)
    game_count = len(games)
    if carry_over_pins and carry_over_games:
        pinfall += carry_over_pins
        game_count += carry_over_games
    return pinfall / game_count if game_count else 0.0


class HandicapCalculator(Protocol):
    def calculate_average(
        self,
        games: Sequence[GameScore],
        carry_over_pins: Optional[int] = None,
        carry_over_games: Optional[int] = None,
    ) -> float: ...

    def calculate_handicap(self, average: float) -> int: ...


@dataclass(frozen=True)
class ZeroHandicapCalculator:
    """Scratch league: no handicap."""

    def calculate_average(self, games, carry_over_pins=None, carry_over_games=None) -> float:
        return calculate_average(games, carry_over_pins, carry_over_games)

    def calculate_handicap(self, average: float) -> int:
        return 0


@dataclass(frozen=True)
class PercentOfAverageToTargetHandicapCalculator:
    """
    Handicap as a percentage of the difference between average and a target.

    Example: 90% of 200 with a 180.6 average -> floor((200 - 180) * 0.9) = 18.
    """
    target_pins: int
    pct_to_target: float

    def calculate_average(self, games, carry_over_pins=None, carry_over_games=None) -> float:
        return calculate_average(games, carry_over_pins, carry_over_games)

    def calculate_handicap(self, average: float) -> int:
        if average >= self.target_pins:
            return 0
        return math.floor((self.target_pins - math.floor(average)) * self.pct_to_target / 100)


def select_handicap_calculator(scoring_rules: Optional[ScoringRules]) -> HandicapCalculator:
    """Pick the handicap calculator configured for a league."""
    handicap = scoring_rules.handicap if scoring_rules is not None else None
    if handicap is not None:
        if handicap.type == HANDICAP_NONE:
            return ZeroHandicapCalculator()
        if handicap.type == HANDICAP_PCT_AVG_TO_TGT and handicap.pct_avg_to_target is not None:
            config = handicap.pct_avg_to_target
            logger.debug(f'Using {config.pct_to_target}% of {config.target} handicap')
            return PercentOfAverageToTargetHandicapCalculator(config.target, config.pct_to_target)

    logger.warning(f'Missing or unsupported handicap config ({handicap}), using zero handicap')
    return ZeroHandicapCalculator()


# ---------------------------------------------------------------------------
# Points
# ---------------------------------------------------------------------------

class PointsCalculator(Protocol):
    def assign_points(self, team_a: TeamScore, team_b: TeamScore) -> None: ...


@dataclass(frozen=True)
class PpgPpsPointsCalculator:
    """Points per game won plus points for the series, on handicap scores."""
    points_on_game_win: float = 0
    points_on_game_tie: float = 0
    points_on_series_win: float = 0
    points_on_series_tie: float = 0

    def assign_points(self, team_a: TeamScore, team_b: TeamScore) -> None:
        """
        Set points_won on both sides for every game and the series.

        A side with fewer games is padded with empty games, which lose.
        """
        game_count = max(len(team_a.games), len(team_b.games))
        for i in range(game_count):
            self._award(team_a.game(i), team_b.game(i), self.points_on_game_win, self.points_on_game_tie)
        self._award(team_a.series, team_b.series, self.points_on_series_win, self.points_on_series_tie)

    @staticmethod
    def _award(a: MatchupGameScore, b: MatchupGameScore, win: float, tie: float) -> None:
        if a.hdcp_score == b.hdcp_score:
            a.points_won = tie
            b.points_won = tie
        elif a.hdcp_score > b.hdcp_score:
            a.points_won = win
            b.points_won = 0
        else:
            a.points_won = 0
            b.points_won = win


def select_points_calculator(scoring_rules: Optional[ScoringRules]) -> PointsCalculator:
    """Pick the matchup points calculator configured for a league."""
    point_scoring = scoring_rules.point_scoring if scoring_rules is not None else None
    if point_scoring is not None and point_scoring.rule == POINTS_PPG_PPS and point_scoring.ppg_pps is not None:
        config = point_scoring.ppg_pps
        return PpgPpsPointsCalculator(
            points_on_game_win=config.points_per_game,
            points_on_game_tie=config.points_per_game_on_tie,
            points_on_series_win=config.points_per_series,
            points_on_series_tie=config.points_per_series_on_tie,
        )

    logger.warning(f'Missing or unsupported point scoring config ({point_scoring}), no points will be awarded')
    return PpgPpsPointsCalculator()
