"""Unit tests for the league honor roll."""

from datetime import date

import pytest

from bowlstats.calculators import select_handicap_calculator
from bowlstats.constants import ACCOLADE_TYPES, UNKNOWN
from bowlstats.leaders import AccoladeTracker, gather_league_leaders, offer_over_average
from bowlstats.models import League, Player, Team
from bowlstats.player_stats import calculate_league_player_stats

from conftest import make_game, make_matchup, make_series, score_matchup


@pytest.fixture
def league(rules):
    """Two weeks for one team, scored and with player statistics."""
    team = Team(
        id='T1',
        name='Pin Pals',
        roster=[Player(id='P1', name='Homer'), Player(id='P2', name='Otto')],
        matchups=[
            make_matchup(1, [
                make_series('P1', [200, 180, 160], entering_average=180),
                make_series('P2', [150, 150, 150], entering_average=150),
            ], bowl_date=date(2024, 9, 1)),
            make_matchup(2, [
                make_series('P1', [190, make_game(blind=True), 170], entering_average=180),
                make_series('P2', [210, 150, 150], entering_average=150),
            ], bowl_date=date(2024, 9, 8)),
        ],
    )
    for matchup in team.matchups:
        score_matchup(matchup, rules, team.roster)
    calculate_league_player_stats(team, select_handicap_calculator(rules))
    return League(id='L1', scoring_rules=rules, teams=[team])


def by_type(accolades):
    return {a.type: a for a in accolades}


class TestAccoladeTracker:
    """Tests for the record holder tracker."""

    def test_higher_replaces(self):
        """Test a strictly greater value takes the record."""
        tracker = AccoladeTracker('IND-SCRATCH-GAME')
        tracker.offer(200, 'P1')
        assert tracker.offer(210, 'P2') is True
        assert tracker.accolade.who == 'P2'
        assert tracker.accolade.how_much == 210

    def test_tie_keeps_earliest(self):
        """Test an equal value does not replace the holder."""
        tracker = AccoladeTracker('IND-SCRATCH-GAME')
        tracker.offer(200, 'P1', date(2024, 9, 1))
        assert tracker.offer(200, 'P2', date(2024, 9, 8)) is False
        assert tracker.accolade.who == 'P1'
        assert tracker.accolade.when == date(2024, 9, 1)

    def test_non_positive_never_held(self):
        """Test a record starts at zero."""
        tracker = AccoladeTracker('IND-GAME-OVER-AVERAGE')
        tracker.offer(0, 'P1')
        tracker.offer(-12, 'P2')
        assert not tracker.held
        assert tracker.accolade.who == ''


class TestOverAverage:
    """Tests for offer_over_average."""

    def test_handicap_setting_day_skipped(self):
        """Test a series bowled to set the average is not offered."""
        game_tracker = AccoladeTracker('IND-GAME-OVER-AVERAGE')
        series_tracker = AccoladeTracker('IND-SERIES-OVER-AVERAGE')
        series = make_series('P1', [250, 250, 250], hdcp_setting_day=True)
        offer_over_average(game_tracker, series_tracker, series)
        assert not game_tracker.held
        assert not series_tracker.held

    def test_blind_game_skipped(self):
        """Test a blind game is not offered even with a scratch score."""
        game_tracker = AccoladeTracker('IND-GAME-OVER-AVERAGE')
        series_tracker = AccoladeTracker('IND-SERIES-OVER-AVERAGE')
        series = make_series('P1', [make_game(scratch=250, blind=True), 160], entering_average=150)
        offer_over_average(game_tracker, series_tracker, series)
        assert game_tracker.accolade.how_much == 10
        assert game_tracker.accolade.description == '160 - 150 = 10'


class TestGatherLeagueLeaders:
    """Tests for gather_league_leaders."""

    def test_order(self, league):
        """Test the seven categories are appended in a fixed order."""
        accolades = gather_league_leaders(league)
        assert [a.type for a in accolades] == ACCOLADE_TYPES
        assert league.accolades == accolades

    def test_not_idempotent(self, league):
        """Test a second run appends a second set."""
        gather_league_leaders(league)
        gather_league_leaders(league)
        assert len(league.accolades) == 14

    def test_scratch_records(self, league):
        """Test individual and team scratch highs."""
        leaders = by_type(gather_league_leaders(league))
        assert (leaders['IND-SCRATCH-GAME'].who, leaders['IND-SCRATCH-GAME'].how_much) == ('P2', 210)
        assert leaders['IND-SCRATCH-GAME'].when == date(2024, 9, 8)
        assert (leaders['IND-SCRATCH-SERIES'].who, leaders['IND-SCRATCH-SERIES'].how_much) == ('P1', 540)
        assert (leaders['TEAM-SCRATCH-GAME'].who, leaders['TEAM-SCRATCH-GAME'].how_much) == ('T1', 400)
        assert leaders['TEAM-SCRATCH-SERIES'].how_much == 990
        assert leaders['TEAM-SCRATCH-SERIES'].when == date(2024, 9, 1)

    def test_over_average_records(self, league):
        """Test game and series over entering average."""
        leaders = by_type(gather_league_leaders(league))
        game = leaders['IND-GAME-OVER-AVERAGE']
        assert (game.who, game.how_much) == ('P2', 60)
        assert game.description == '210 - 150 = 60'
        series = leaders['IND-SERIES-OVER-AVERAGE']
        assert (series.who, series.how_much) == ('P2', 60)
        assert series.description == '510 - 450 = 60'

    def test_high_average(self, league):
        """Test the high average comes from player statistics."""
        leaders = by_type(gather_league_leaders(league))
        assert leaders['IND-HIGH-AVERAGE'].who == 'P1'
        assert leaders['IND-HIGH-AVERAGE'].how_much == pytest.approx(180)

    def test_empty_league(self):
        """Test a league without teams still gets seven empty categories."""
        accolades = gather_league_leaders(League(id='L1'))
        assert len(accolades) == 7
        assert all(a.how_much == 0 for a in accolades)

    def test_tie_across_teams_keeps_earliest(self, rules):
        """Test a high game tied by a player on a later team stays with the first holder."""
        teams = []
        for team_id, player_id, when in (('T1', 'P1', date(2024, 9, 1)), ('T2', 'P3', date(2024, 9, 8))):
            team = Team(id=team_id, roster=[Player(id=player_id)], matchups=[
                make_matchup(1, [make_series(player_id, [250, 150, 150], entering_average=160)], bowl_date=when),
            ])
            score_matchup(team.matchups[0], rules, team.roster)
            teams.append(team)
        leaders = by_type(gather_league_leaders(League(id='L1', teams=teams)))
        high_game = leaders['IND-SCRATCH-GAME']
        assert (high_game.who, high_game.when, high_game.how_much) == ('P1', date(2024, 9, 1), 250)
        assert leaders['TEAM-SCRATCH-GAME'].who == 'T1'

    def test_unreadable_game_not_a_record(self, rules):
        """Test a game with failed notation is kept out of the team and series records."""
        team = Team(id='T1', roster=[Player(id='P1')], matchups=[
            make_matchup(1, [make_series('P1', [200, make_game(frames=[['X'], ['Z']]), 210])]),
        ])
        score_matchup(team.matchups[0], rules, team.roster)
        leaders = by_type(gather_league_leaders(League(id='L1', teams=[team])))
        assert leaders['TEAM-SCRATCH-GAME'].how_much == 210
        assert not leaders['TEAM-SCRATCH-SERIES'].how_much
        assert not leaders['IND-SCRATCH-SERIES'].how_much


class TestLeagueNames:
    """Tests for resolving record holders to display names."""

    def test_player_name_from_roster(self, league):
        """Test a rostered player id resolves to the player's name."""
        assert league.player_name('P2') == 'Otto'

    def test_unknown_player(self, league):
        """Test an id on no tracked roster resolves to UNKNOWN."""
        assert league.player_name('P9') == UNKNOWN

    def test_team_name(self, league):
        """Test tracked team ids resolve and unknown ids do not."""
        assert league.team_name('T1') == 'Pin Pals'
        assert league.team_name('T9') == UNKNOWN
