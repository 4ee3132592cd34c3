"""Season statistics per player.

Game and series figures come from scratch scores; frame figures (strikes,
spares, streaks and so on) come from frames already reconstructed by the
matchup scorer. Blind, vacant and unreadable games are never counted;
a game with partial frames counts its score but not its frames.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence

import polars as pl

from .calculators import HandicapCalculator
from .constants import (
    DEFAULT_GAMES_PER_SERIES,
    FRAMES_PER_GAME,
    GAME_MILESTONE,
    IND_GAME_OVER_AVERAGE,
    IND_SERIES_OVER_AVERAGE,
    MIN_STRIKE_STREAK,
    PERFECT_SCORE,
    PINS_PER_RACK,
    SERIES_HIGH_MILESTONE,
    SERIES_MILESTONE,
    SPARE,
    SPLIT,
    STRIKE,
)
from .frames import accumulate_frame_scores
from .leaders import AccoladeTracker, offer_over_average
from .models import Frame, PlayerGameScore, PlayerStatistics, RatioGroup, StatGroup, Team

logger = logging.getLogger('bowlstats.player_stats')


class FrameStatCalculator:
    """Accumulates frame-level counts over every game added."""

    def __init__(self):
        self.first_ball_pins = 0
        self.first_balls = 0
        self.clean_games = 0
        self.strikes = 0
        self.strike_opportunities = 0
        self.spares = 0
        self.spare_opportunities = 0
        self.single_pin_spares = 0
        self.single_pin_opportunities = 0
        self.splits_converted = 0
        self.split_opportunities = 0
        self.open_frames = 0
        self.total_frames = 0
        self.strikes_in_a_row: Dict[int, int] = {}
        self.single_pins_picked_up_scores: List[int] = []

    def _save_streak(self, streak: int) -> None:
        if streak >= MIN_STRIKE_STREAK:
            self.strikes_in_a_row[streak] = self.strikes_in_a_row.get(streak, 0) + 1

    def _spare_chance(self, leave_pins: int, leave_label: Optional[str], converted: bool) -> None:
        self.spare_opportunities += 1
        single_pin = leave_pins == PINS_PER_RACK - 1
        split = leave_label == SPLIT
        self.single_pin_opportunities += single_pin
        self.split_opportunities += split
        if converted:
            self.spares += 1
            self.single_pin_spares += single_pin
            self.splits_converted += split

    def add_game(self, game: PlayerGameScore) -> None:
        streak = 0
        clean = len(game.frames) == FRAMES_PER_GAME
        for frame in game.frames:
            tenth = frame.number == FRAMES_PER_GAME
            ball_count = len(frame.ball_scores)
            first = frame.pins(0)

            self.first_ball_pins += first
            self.first_balls += 1
            self.total_frames += 1

            if frame.last_label not in (STRIKE, SPARE):
                clean = False
                # Reaching the third ball in the tenth is not an open frame
                if not tenth or ball_count == 2:
                    self.open_frames += 1

            # Strikes and streaks, by ball
            balls = frame.ball_scores if tenth else frame.ball_scores[:1]
            for _pins, label in balls:
                if label == STRIKE:
                    self.strikes += 1
                    streak += 1
                else:
                    self._save_streak(streak)
                    streak = 0

            # One strike chance per fresh rack thrown at
            self.strike_opportunities += 1
            if tenth:
                if frame.label(0) == STRIKE and ball_count > 1:
                    self.strike_opportunities += 1
                if frame.label(1) in (STRIKE, SPARE) and ball_count > 2:
                    self.strike_opportunities += 1

            if first < PINS_PER_RACK and ball_count > 1:
                self._spare_chance(first, frame.label(0), first + frame.pins(1) == PINS_PER_RACK)
            if tenth and frame.label(0) == STRIKE and ball_count > 2 and frame.pins(1) < PINS_PER_RACK:
                self._spare_chance(
                    frame.pins(1), frame.label(1), frame.pins(1) + frame.pins(2) == PINS_PER_RACK
                )

        self._save_streak(streak)
        if clean:
            self.clean_games += 1
        self.single_pins_picked_up_scores.append(all_single_pins_picked_up_score(game))

    @property
    def first_ball_average(self) -> float:
        return self.first_ball_pins / self.first_balls if self.first_balls else 0.0

    def apply(self, stats: PlayerStatistics) -> None:
        stats.clean_games = self.clean_games
        stats.first_ball_average = self.first_ball_average
        stats.strikes = RatioGroup(self.strikes, self.strike_opportunities)
        stats.spares = RatioGroup(self.spares, self.spare_opportunities)
        stats.single_pin_spares = RatioGroup(self.single_pin_spares, self.single_pin_opportunities)
        stats.splits = RatioGroup(self.splits_converted, self.split_opportunities)
        stats.opens = RatioGroup(self.open_frames, self.total_frames)
        stats.strikes_to_spares = RatioGroup(self.strikes, self.spares)
        stats.strikes_in_a_row = sorted(self.strikes_in_a_row.items())
        if self.single_pins_picked_up_scores:
            stats.all_single_pins_picked_up_average = pl.Series(self.single_pins_picked_up_scores).mean()


def all_single_pins_picked_up_score(game: PlayerGameScore) -> int:
    """
    Score the game would have had if every single pin leave were converted.

    A 9 followed by a miss becomes a spare (and 9-0 after a strike in the
    tenth). The game's own frames are not changed.
    """
    if not game.frames:
        return game.scratch_score

    frames: List[Frame] = [f.copy_balls() for f in game.frames]
    for frame in frames:
        if len(frame.ball_scores) > 1 and frame.pins(0) == PINS_PER_RACK - 1 and frame.pins(1) == 0:
            frame.ball_scores[1] = (1, SPARE)
        if (
            frame.number == FRAMES_PER_GAME
            and len(frame.ball_scores) > 2
            and frame.label(0) == STRIKE
            and frame.pins(1) == PINS_PER_RACK - 1
            and frame.pins(2) == 0
        ):
            frame.ball_scores[2] = (1, SPARE)
    return accumulate_frame_scores(frames)


def _stat_group(values: Sequence[float]) -> StatGroup:
    if not values:
        return StatGroup()
    series = pl.Series(values)
    return StatGroup(
        count=len(series),
        average=series.mean(),
        min=series.min(),
        max=series.max(),
        sd=series.std(ddof=0),
    )


def calculate_player_stats(
    series_list: Sequence[Sequence[PlayerGameScore]],
    games_per_series: int = DEFAULT_GAMES_PER_SERIES,
) -> PlayerStatistics:
    """
    Compute a player's descriptive statistics from their game lists.

    Args:
        series_list: One list of games per matchup bowled
        games_per_series: Games in a full series

    Returns:
        A new PlayerStatistics; calling again with the same input gives the same result
    """
    stats = PlayerStatistics()
    scores_by_game: List[List[int]] = [[] for _ in range(games_per_series)]
    game_scores: List[int] = []
    series_scores: List[int] = []
    frame_stats = FrameStatCalculator()

    for games in series_list:
        series_total = 0
        full_series = len(games) >= games_per_series
        for index, game in enumerate(games):
            if not game.bowled:
                full_series = False
                if game.frames_error:
                    stats.incomplete_frame_data = True
                continue
            while len(scores_by_game) <= index:
                scores_by_game.append([])
            scores_by_game[index].append(game.scratch_score)
            game_scores.append(game.scratch_score)
            series_total += game.scratch_score

            if game.scratch_score >= GAME_MILESTONE:
                stats.games_200 += 1
                if game.scratch_score == PERFECT_SCORE:
                    stats.games_300 += 1

            # Partial notation scores what is known but stays out of the frame ratios
            if len(game.frames) == FRAMES_PER_GAME:
                frame_stats.add_game(game)
            else:
                stats.incomplete_frame_data = True

        if full_series:
            series_scores.append(series_total)
            if series_total >= SERIES_MILESTONE:
                stats.series_600 += 1
                if series_total > SERIES_HIGH_MILESTONE:
                    stats.series_800 += 1

    stats.game_stats = _stat_group(game_scores)
    stats.series_stats = _stat_group(series_scores)
    stats.pinfall = sum(game_scores)
    stats.game_averages = [pl.Series(s).mean() if s else 0.0 for s in scores_by_game]
    frame_stats.apply(stats)
    return stats


def calculate_league_player_stats(
    team: Team,
    hdcp_calculator: HandicapCalculator,
    games_per_series: int = DEFAULT_GAMES_PER_SERIES,
) -> None:
    """
    Compute statistics for every roster player of a team, including the
    league extras: handicap, average booster series and personal bests over
    average.
    """
    for player in team.roster:
        appearances = [
            (matchup, ps)
            for matchup in team.matchups
            for ps in matchup.scores.player_scores
            if ps.player == player.id
        ]
        stats = calculate_player_stats([ps.games for _, ps in appearances], games_per_series)

        average = stats.game_stats.average
        if average > 0:
            stats.handicap = hdcp_calculator.calculate_handicap(average)
            # Series needed to raise the average by one pin
            stats.average_booster_series = math.ceil(
                (math.floor(average) + 1) * (stats.game_stats.count + games_per_series) - stats.pinfall
            )

        game_over_avg = AccoladeTracker(IND_GAME_OVER_AVERAGE, player.id)
        series_over_avg = AccoladeTracker(IND_SERIES_OVER_AVERAGE, player.id)
        for matchup, ps in appearances:
            if ps.entering_average:
                offer_over_average(game_over_avg, series_over_avg, ps, matchup.bowl_date)
        if game_over_avg.held:
            stats.best_game_over_average = game_over_avg.accolade
        if series_over_avg.held:
            stats.best_series_over_average = series_over_avg.accolade

        if stats.incomplete_frame_data:
            logger.debug(f'Player {player.id}: some games have no frame data')
        player.player_stats = stats
