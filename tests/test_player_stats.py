"""Unit tests for player statistics."""

import math

import pytest

from bowlstats.calculators import PercentOfAverageToTargetHandicapCalculator
from bowlstats.frames import calculate_frame_scores
from bowlstats.models import Player, Team
from bowlstats.player_stats import (
    all_single_pins_picked_up_score,
    calculate_league_player_stats,
    calculate_player_stats,
)

from conftest import (
    NINE_MISS_FRAMES,
    NINE_SPARE_FRAMES,
    PERFECT_FRAMES,
    make_game,
    make_matchup,
    make_series,
)


def framed(frames):
    game = make_game(frames=frames)
    calculate_frame_scores(game)
    return game


def scratch_games(*scores):
    return [make_game(scratch=s) for s in scores]


class TestGameAndSeriesStats:
    """Tests for descriptive statistics from scratch scores."""

    def test_game_stats(self):
        """Test count, average, min, max and population sd."""
        stats = calculate_player_stats([scratch_games(150, 160, 170), scratch_games(180, 190, 200)])
        assert stats.game_stats.count == 6
        assert stats.game_stats.average == pytest.approx(175)
        assert (stats.game_stats.min, stats.game_stats.max) == (150, 200)
        assert stats.game_stats.sd == pytest.approx(math.sqrt(1750 / 6))
        assert stats.pinfall == 1050

    def test_series_stats(self):
        """Test series totals and per-game-number averages."""
        stats = calculate_player_stats([scratch_games(150, 160, 170), scratch_games(180, 190, 200)])
        assert stats.series_stats.count == 2
        assert stats.series_stats.average == pytest.approx(525)
        assert stats.series_stats.sd == pytest.approx(45)
        assert stats.game_averages == pytest.approx([165, 175, 185])

    def test_blind_excluded(self):
        """Test blind games are not counted and drop their series."""
        series = [scratch_games(150, 160, 170), [make_game(scratch=200), make_game(blind=True), make_game(scratch=190)]]
        stats = calculate_player_stats(series)
        assert stats.game_stats.count == 5
        assert stats.series_stats.count == 1
        assert stats.series_stats.max == 480

    def test_short_series_excluded_from_series_stats(self):
        """Test a series with fewer games than a full series is not a series."""
        stats = calculate_player_stats([scratch_games(150, 160)], games_per_series=3)
        assert stats.game_stats.count == 2
        assert stats.series_stats.count == 0

    def test_milestones(self):
        """Test 200 and 300 games and 600 and 800 series."""
        stats = calculate_player_stats([scratch_games(200, 210, 300), scratch_games(279, 279, 279)])
        assert stats.games_200 == 6
        assert stats.games_300 == 1
        assert stats.series_600 == 2
        assert stats.series_800 == 1

    def test_800_needs_more_than_800(self):
        """Test exactly 800 is a 600 series but not an 800 series."""
        stats = calculate_player_stats([scratch_games(300, 300, 200)])
        assert stats.series_600 == 1
        assert stats.series_800 == 0

    def test_no_games(self):
        """Test an empty season gives empty statistics."""
        stats = calculate_player_stats([])
        assert stats.game_stats.count == 0
        assert stats.game_averages == [0, 0, 0]
        assert stats.strikes.pct == 0

    def test_repeatable(self):
        """Test computing twice from the same games gives the same result."""
        series = [[framed(PERFECT_FRAMES), framed(NINE_SPARE_FRAMES), framed(NINE_MISS_FRAMES)]]
        assert calculate_player_stats(series) == calculate_player_stats(series)

    def test_incomplete_frame_data(self):
        """Test a counted game without frames sets the flag."""
        stats = calculate_player_stats([[framed(PERFECT_FRAMES), make_game(scratch=180)]])
        assert stats.incomplete_frame_data is True
        assert stats.clean_games == 1

    def test_partial_frames_count_score_not_frames(self):
        """Test an unfinished game counts its known score but stays out of the frame ratios."""
        game = framed([['X'], ['X'], ['X'], ['9', '-']])
        stats = calculate_player_stats([[game]])
        assert game.scratch_score == 87
        assert stats.incomplete_frame_data is True
        assert stats.game_stats.count == 1
        assert stats.pinfall == 87
        assert (stats.strikes.numerator, stats.strikes.denominator) == (0, 0)
        assert (stats.opens.numerator, stats.opens.denominator) == (0, 0)
        assert stats.clean_games == 0

    def test_unreadable_game_not_counted(self):
        """Test a game whose notation failed is not counted as a zero game."""
        unreadable = make_game(frames=[['X'], ['Z']])
        unreadable.frames_error = True
        stats = calculate_player_stats([[framed(PERFECT_FRAMES), unreadable, framed(PERFECT_FRAMES)]])
        assert stats.game_stats.count == 2
        assert (stats.game_stats.min, stats.game_stats.average) == (300, 300)
        assert stats.series_stats.count == 0
        assert stats.game_averages == pytest.approx([300, 0, 300])
        assert stats.games_300 == 2
        assert stats.incomplete_frame_data is True


class TestFrameStats:
    """Tests for strike, spare and streak figures from frames."""

    def test_perfect_game(self):
        """Test a perfect game is twelve strikes out of twelve in one streak."""
        stats = calculate_player_stats([[framed(PERFECT_FRAMES)]])
        assert (stats.strikes.numerator, stats.strikes.denominator) == (12, 12)
        assert stats.strikes.pct == 1.0
        assert stats.strikes_in_a_row == [(12, 1)]
        assert stats.clean_games == 1
        assert stats.opens.numerator == 0
        assert stats.spares.pct == 0
        assert stats.first_ball_average == 10

    def test_nine_spare_game(self):
        """Test ten single pin spares converted, no strikes, no opens."""
        stats = calculate_player_stats([[framed(NINE_SPARE_FRAMES)]])
        assert (stats.spares.numerator, stats.spares.denominator) == (10, 10)
        assert (stats.single_pin_spares.numerator, stats.single_pin_spares.denominator) == (10, 10)
        assert (stats.strikes.numerator, stats.strikes.denominator) == (0, 11)
        assert stats.opens.numerator == 0
        assert stats.clean_games == 0
        assert stats.first_ball_average == 9

    def test_open_game(self):
        """Test every frame open and every single pin missed."""
        stats = calculate_player_stats([[framed(NINE_MISS_FRAMES)]])
        assert (stats.opens.numerator, stats.opens.denominator) == (10, 10)
        assert (stats.single_pin_spares.numerator, stats.single_pin_spares.denominator) == (0, 10)
        assert stats.strikes_to_spares.pct == 0

    def test_split_conversion(self):
        """Test split leaves are counted and converted."""
        frames = [['8S', '/'], ['7S', '1']] + [['-', '-']] * 8
        stats = calculate_player_stats([[framed(frames)]])
        assert (stats.splits.numerator, stats.splits.denominator) == (1, 2)

    def test_strike_streaks(self):
        """Test streaks of three or more are counted by length."""
        frames = [['X'], ['X'], ['X'], ['9', '-'], ['X'], ['X'], ['X'], ['X'], ['9', '-'], ['9', '-']]
        stats = calculate_player_stats([[framed(frames)]])
        assert stats.strikes_in_a_row == [(3, 1), (4, 1)]
        assert stats.strikes.numerator == 7

    def test_tenth_frame_spare_after_strike(self):
        """Test a strike then 9/ in the tenth is a second spare chance."""
        frames = [['9', '-']] * 9 + [['X', '9', '/']]
        stats = calculate_player_stats([[framed(frames)]])
        assert (stats.spares.numerator, stats.spares.denominator) == (1, 10)
        assert (stats.strikes.numerator, stats.strikes.denominator) == (1, 11)
        assert stats.opens.numerator == 9

    def test_all_single_pins_picked_up(self):
        """Test 9- in every frame would have been 181 with every pin picked up."""
        game = framed(NINE_MISS_FRAMES)
        assert all_single_pins_picked_up_score(game) == 181
        assert game.frames[0].ball_scores[1] == (0, '-')
        stats = calculate_player_stats([[game]])
        assert stats.all_single_pins_picked_up_average == pytest.approx(181)

    def test_tenth_frame_strike_nine_miss_picked_up(self):
        """Test X-9-0 in the tenth becomes X-9-/."""
        game = framed([['-', '-']] * 9 + [['X', '9', '-']])
        assert game.scratch_score == 19
        assert all_single_pins_picked_up_score(game) == 20


class TestLeaguePlayerStats:
    """Tests for calculate_league_player_stats."""

    def _team(self):
        return Team(
            id='T1',
            roster=[Player(id='P1'), Player(id='P2')],
            matchups=[
                make_matchup(1, [make_series('P1', [150, 160, 170], entering_average=170)]),
                make_matchup(2, [make_series('P1', [180, 190, 200], entering_average=170)]),
            ],
        )

    def _run(self, team):
        for matchup in team.matchups:
            for ps in matchup.scores.player_scores:
                ps.series.scratch_score = sum(g.scratch_score for g in ps.games)
                ps.series.games = len(ps.games)
        calculate_league_player_stats(team, PercentOfAverageToTargetHandicapCalculator(200, 90), 3)

    def test_handicap_and_booster(self):
        """Test league handicap and the series needed to gain a pin of average."""
        team = self._team()
        self._run(team)
        stats = team.roster[0].player_stats
        assert stats.handicap == 22
        # (175 + 1) * (6 + 3) - 1050
        assert stats.average_booster_series == 534

    def test_personal_bests_over_average(self):
        """Test best game and series over entering average."""
        team = self._team()
        self._run(team)
        stats = team.roster[0].player_stats
        assert stats.best_game_over_average.how_much == 30
        assert stats.best_game_over_average.description == '200 - 170 = 30'
        assert stats.best_game_over_average.who == 'P1'
        assert stats.best_series_over_average.how_much == 60

    def test_player_without_games(self):
        """Test a roster player who never bowled gets empty statistics."""
        team = self._team()
        self._run(team)
        stats = team.roster[1].player_stats
        assert stats.game_stats.count == 0
        assert stats.handicap == 0
        assert stats.best_game_over_average is None
