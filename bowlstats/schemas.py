"""Pydantic schemas for the league JSON document and engine settings.

Document keys are kebab-case; every schema accepts either the document key
or the Python field name. Each schema builds its engine dataclass through
``to_model()``. Policy tags (handicap type, point scoring rule) are plain
strings so that an unknown tag reaches the calculator fallback instead of
failing validation.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from . import models
from .constants import (
    DEFAULT_GAMES_PER_SERIES,
    DEFAULT_PARKING_LOT_THRESHOLD,
    HANDICAP_NONE,
    POINTS_PPG_PPS,
    REGULAR,
    TEAM_AVERAGE_REGULARS,
    UNKNOWN,
)


class DocumentModel(BaseModel):
    """Base for league document schemas."""

    class Config:
        populate_by_name = True
        extra = 'ignore'


# ---------------------------------------------------------------------------
# Scores
# ---------------------------------------------------------------------------

class GameScoreSchema(DocumentModel):
    """Team-level game score (opponent games or teams without player scores)."""

    scratch_score: int = Field(default=0, ge=0, alias='scratch-score')
    hdcp: int = 0
    hdcp_score: float = Field(default=0, alias='hdcp-score')

    def to_model(self) -> models.MatchupGameScore:
        return models.MatchupGameScore(
            scratch_score=self.scratch_score,
            hdcp=self.hdcp,
            hdcp_score=self.hdcp_score,
        )


class PlayerGameSchema(DocumentModel):
    """One game of a player series, with optional frame notation."""

    scratch_score: int = Field(default=0, ge=0, le=300, alias='scratch-score')
    blind: bool = False
    vacant: bool = False
    arsenal: list[str] = Field(default_factory=list)
    frames: list[list[str]] = Field(default_factory=list)

    @field_validator('frames', mode='before')
    @classmethod
    def stringify_balls(cls, v):
        """Allow bare numbers for pin counts, e.g. [[7, 2], ["X"]]."""
        if isinstance(v, list):
            return [[str(ball) for ball in frame] if isinstance(frame, list) else frame for frame in v]
        return v

    def to_model(self) -> models.PlayerGameScore:
        return models.PlayerGameScore(
            scratch_score=self.scratch_score,
            blind=self.blind,
            vacant=self.vacant,
            arsenal=list(self.arsenal),
            in_frames=[list(f) for f in self.frames],
        )


class PlayerSeriesSchema(DocumentModel):
    """A player's series in a matchup."""

    player: str = UNKNOWN
    entering_average: float = Field(default=0, ge=0, alias='entering-average')
    entering_hdcp: int = Field(default=0, ge=0, alias='entering-hdcp')
    hdcp_setting_day: bool = Field(default=False, alias='hdcp-setting-day')
    games: list[PlayerGameSchema] = Field(default_factory=list)

    def to_model(self) -> models.PlayerSeriesScore:
        return models.PlayerSeriesScore(
            player=self.player,
            entering_average=self.entering_average,
            entering_hdcp=self.entering_hdcp,
            hdcp_setting_day=self.hdcp_setting_day,
            games=[g.to_model() for g in self.games],
        )


class TeamScoreSchema(DocumentModel):
    games: list[GameScoreSchema] = Field(default_factory=list)

    def to_model(self) -> models.TeamScore:
        return models.TeamScore(games=[g.to_model() for g in self.games])


class LeagueTeamScoreSchema(TeamScoreSchema):
    player_scores: list[PlayerSeriesSchema] = Field(default_factory=list, alias='player-scores')

    def to_model(self) -> models.LeagueTeamScore:
        return models.LeagueTeamScore(
            games=[g.to_model() for g in self.games],
            player_scores=[ps.to_model() for ps in self.player_scores],
        )


class OpponentSchema(DocumentModel):
    team_id: str = Field(default=UNKNOWN, alias='team-id')
    entering_rank: str = Field(default='', alias='entering-rank')
    players: list[str] = Field(default_factory=list)
    hdcp: int = 0
    vacant: bool = False
    absent: bool = False
    pre_post_bowl: bool = Field(default=False, alias='pre-post-bowl')
    scores: Optional[TeamScoreSchema] = None

    def to_model(self) -> models.OpponentTeam:
        return models.OpponentTeam(
            team_id=self.team_id,
            entering_rank=self.entering_rank,
            players_bowled=list(self.players),
            team_hdcp=self.hdcp,
            vacant=self.vacant,
            absent=self.absent,
            pre_post_bowl=self.pre_post_bowl,
            scores=self.scores.to_model() if self.scores else models.TeamScore(),
        )


class MatchupSchema(DocumentModel):
    week: int = Field(default=0, ge=0)
    scheduled_date: Optional[date] = Field(default=None, alias='scheduled-date')
    bowl_date: Optional[date] = Field(default=None, alias='bowl-date')
    matchup_type: str = Field(default='OTHERS', alias='matchup-type')
    entering_rank: str = Field(default='', alias='entering-rank')
    lanes: list[int] = Field(default_factory=list)
    oil_pattern: Optional[str] = Field(default=None, alias='oil-pattern')
    notes: list[str] = Field(default_factory=list)
    scores: Optional[LeagueTeamScoreSchema] = None
    opponent: Optional[OpponentSchema] = None

    def to_model(self) -> models.Matchup:
        return models.Matchup(
            week=self.week,
            scheduled_date=self.scheduled_date,
            bowl_date=self.bowl_date,
            matchup_type=self.matchup_type,
            entering_rank=self.entering_rank,
            lanes=list(self.lanes),
            oil_pattern=self.oil_pattern,
            notes=list(self.notes),
            scores=self.scores.to_model() if self.scores else models.LeagueTeamScore(),
            opponent=self.opponent.to_model() if self.opponent else models.OpponentTeam(),
        )


# ---------------------------------------------------------------------------
# Teams and players
# ---------------------------------------------------------------------------

class CarryOverSchema(DocumentModel):
    entering_hdcp: int = Field(default=0, ge=0, alias='entering-hdcp')
    pins: int = Field(default=0, ge=0)
    games: int = Field(default=0, ge=0)

    def to_model(self) -> models.CarryOverStats:
        return models.CarryOverStats(entering_hdcp=self.entering_hdcp, pins=self.pins, games=self.games)


class PlayerSchema(DocumentModel):
    """Roster entry of a tracked team."""

    id: str = Field(..., min_length=1)
    name: str = UNKNOWN
    status: str = Field(default=REGULAR, pattern=r'^(REGULAR|SUBSTITUTE)$')
    parking_lot_threshold: int = Field(
        default=DEFAULT_PARKING_LOT_THRESHOLD, ge=0, alias='parking-lot-threshold'
    )
    carry_over: Optional[CarryOverSchema] = Field(default=None, alias='carry-over-league-stats')

    def to_model(self) -> models.Player:
        return models.Player(
            id=self.id,
            name=self.name,
            status=self.status,
            parking_lot_threshold=self.parking_lot_threshold,
            carry_over_stats=self.carry_over.to_model() if self.carry_over else models.CarryOverStats(),
        )


class TeamSchema(DocumentModel):
    """A tracked team."""

    id: str = Field(..., min_length=1)
    number: int = 0
    division: str = ''
    name: str = ''
    current_rank: str = Field(default='', alias='current-rank')
    roster: list[PlayerSchema] = Field(default_factory=list)
    matchups: list[MatchupSchema] = Field(default_factory=list)

    @field_validator('roster')
    @classmethod
    def validate_unique_players(cls, v):
        """Ensure no player appears twice on a roster."""
        ids = [p.id for p in v]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f'Duplicate roster players: {", ".join(duplicates)}')
        return v

    def to_model(self) -> models.Team:
        return models.Team(
            id=self.id,
            number=self.number,
            division=self.division,
            name=self.name,
            current_rank=self.current_rank,
            roster=[p.to_model() for p in self.roster],
            matchups=[m.to_model() for m in self.matchups],
        )


class OtherTeamSchema(DocumentModel):
    """An opponent that is only listed by name and players."""

    id: str = Field(..., min_length=1)
    number: int = 0
    division: str = ''
    name: str = ''
    players: list[str] = Field(default_factory=list)

    def to_model(self) -> models.OtherTeam:
        return models.OtherTeam(
            id=self.id, number=self.number, division=self.division, name=self.name, players=list(self.players)
        )


# ---------------------------------------------------------------------------
# League rules
# ---------------------------------------------------------------------------

class PctAvgToTargetSchema(DocumentModel):
    target: int = Field(default=0, ge=0)
    pct_to_target: float = Field(default=0, ge=0, le=100, alias='pct-to-target')

    def to_model(self) -> models.PercentOfAverageToTargetConfig:
        return models.PercentOfAverageToTargetConfig(target=self.target, pct_to_target=self.pct_to_target)


class HandicapSchema(DocumentModel):
    type: str = HANDICAP_NONE
    pct_avg_to_target: Optional[PctAvgToTargetSchema] = Field(default=None, alias='pct-avg-to-tgt-config')

    def to_model(self) -> models.HandicapConfig:
        return models.HandicapConfig(
            type=self.type,
            pct_avg_to_target=self.pct_avg_to_target.to_model() if self.pct_avg_to_target else None,
        )


class BlindPenaltySchema(DocumentModel):
    allowed: bool = Field(default=False, alias='blinds-allowed')
    default_penalty: int = Field(default=0, ge=0, alias='default-penalty')
    missed_matchups_penalty: int = Field(default=0, ge=0, alias='missed-matchups-penalty')
    missed_matchups_threshold: int = Field(default=0, ge=0, alias='missed-matchups-threshold')

    def to_model(self) -> models.BlindPenaltyConfig:
        return models.BlindPenaltyConfig(
            allowed=self.allowed,
            default_penalty=self.default_penalty,
            missed_matchups_penalty=self.missed_matchups_penalty,
            missed_matchups_threshold=self.missed_matchups_threshold,
        )


class PointsWithinAverageSchema(DocumentModel):
    points_within_team_average: int = Field(default=0, ge=0, alias='points-within-team-avg')


class VacantAbsentScoringSchema(DocumentModel):
    allowed: bool = False
    type: str = 'FORFEIT'
    points_within_average: Optional[PointsWithinAverageSchema] = Field(
        default=None, alias='points-within-avg-config'
    )

    def to_model(self) -> models.VacantAbsentScoringConfig:
        return models.VacantAbsentScoringConfig(
            allowed=self.allowed,
            scoring_type=self.type,
            points_within_team_average=(
                self.points_within_average.points_within_team_average if self.points_within_average else 0
            ),
        )


class PpgPpsSchema(DocumentModel):
    points_per_game: float = Field(default=1, ge=0, alias='points-per-game')
    points_per_series: float = Field(default=1, ge=0, alias='points-per-series')
    points_per_game_on_tie: float = Field(default=0.5, ge=0, alias='points-per-game-on-tie')
    points_per_series_on_tie: float = Field(default=0.5, ge=0, alias='points-per-series-on-tie')
    vacant_opponent_allowed: bool = Field(default=False, alias='vacant-opponent-allowed')
    absent_opponent_allowed: bool = Field(default=False, alias='absent-opponent-allowed')

    def to_model(self) -> models.PpgPpsConfig:
        return models.PpgPpsConfig(
            points_per_game=self.points_per_game,
            points_per_series=self.points_per_series,
            points_per_game_on_tie=self.points_per_game_on_tie,
            points_per_series_on_tie=self.points_per_series_on_tie,
            vacant_opponent_allowed=self.vacant_opponent_allowed,
            absent_opponent_allowed=self.absent_opponent_allowed,
        )


class PointScoringSchema(DocumentModel):
    rule: str = Field(default=POINTS_PPG_PPS, alias='matchup-point-scoring-rule')
    ppg_pps: Optional[PpgPpsSchema] = Field(default=None, alias='ppg-pps-matchup-point-scoring-config')
    vacant_opponent_scoring: Optional[VacantAbsentScoringSchema] = Field(
        default=None, alias='vacant-opponent-scoring'
    )
    absent_opponent_scoring: Optional[VacantAbsentScoringSchema] = Field(
        default=None, alias='absent-opponent-scoring'
    )

    def to_model(self) -> models.PointScoringConfig:
        return models.PointScoringConfig(
            rule=self.rule,
            ppg_pps=self.ppg_pps.to_model() if self.ppg_pps else None,
            vacant_opponent_scoring=(
                self.vacant_opponent_scoring.to_model() if self.vacant_opponent_scoring else None
            ),
            absent_opponent_scoring=(
                self.absent_opponent_scoring.to_model() if self.absent_opponent_scoring else None
            ),
        )


class ScoringRulesSchema(DocumentModel):
    legal_min_lineup: int = Field(default=0, ge=0, alias='legal-min-lineup')
    lineup: int = Field(default=0, ge=0)
    roster: int = Field(default=0, ge=0)
    subs_allowed: bool = Field(default=False, alias='substitutes-allowed')
    handicap: Optional[HandicapSchema] = Field(default=None, alias='hdcp')
    blind_penalty: Optional[BlindPenaltySchema] = Field(default=None, alias='blind-penalty')
    point_scoring: Optional[PointScoringSchema] = Field(default=None, alias='point-scoring')

    def to_model(self) -> models.ScoringRules:
        return models.ScoringRules(
            legal_min_lineup=self.legal_min_lineup,
            lineup=self.lineup,
            roster=self.roster,
            subs_allowed=self.subs_allowed,
            handicap=self.handicap.to_model() if self.handicap else None,
            blind_penalty=self.blind_penalty.to_model() if self.blind_penalty else models.BlindPenaltyConfig(),
            point_scoring=self.point_scoring.to_model() if self.point_scoring else None,
        )


class BowlingDaysSchema(DocumentModel):
    games_per_week: int = Field(default=0, ge=0, alias='games-per-week')
    bowls_on: Optional[str] = Field(default=None, alias='bowls-on')
    start_time: Optional[str] = Field(default=None, alias='start-time')
    start_date: Optional[date] = Field(default=None, alias='start-date')
    duration: int = Field(default=0, ge=0)
    duration_unit: str = Field(default='WK', alias='duration-unit')
    position_rounds: list[str] = Field(default_factory=list, alias='position-rounds')

    def to_model(self) -> models.BowlingDays:
        return models.BowlingDays(
            games_per_week=self.games_per_week,
            bowls_on=self.bowls_on,
            start_time=self.start_time,
            start_date=self.start_date,
            duration=self.duration,
            duration_unit=self.duration_unit,
            position_rounds=list(self.position_rounds),
        )


class LeagueSchema(DocumentModel):
    """Complete league document."""

    id: str = Field(..., min_length=1)
    name: str = ''
    season: str = ''
    center: str = ''
    usbc_sanctioned: bool = Field(default=False, alias='usbc-sanctioned')
    completed: bool = False
    bowling_days: Optional[BowlingDaysSchema] = Field(default=None, alias='bowling-days')
    scoring_rules: Optional[ScoringRulesSchema] = Field(default=None, alias='scoring-rules')
    teams: list[TeamSchema] = Field(default_factory=list)
    other_teams: list[OtherTeamSchema] = Field(default_factory=list, alias='other-teams')

    def to_model(self) -> models.League:
        return models.League(
            id=self.id,
            name=self.name,
            season=self.season,
            center=self.center,
            usbc_sanctioned=self.usbc_sanctioned,
            completed=self.completed,
            bowling_days=self.bowling_days.to_model() if self.bowling_days else models.BowlingDays(),
            scoring_rules=self.scoring_rules.to_model() if self.scoring_rules else models.ScoringRules(),
            teams=[t.to_model() for t in self.teams],
            other_teams=[t.to_model() for t in self.other_teams],
        )


# ---------------------------------------------------------------------------
# Engine settings
# ---------------------------------------------------------------------------

class EngineSettings(BaseModel):
    """Engine-wide defaults, read from data/engine_config.json when present."""

    default_games_per_series: int = Field(default=DEFAULT_GAMES_PER_SERIES, ge=1)
    parking_lot_threshold: int = Field(default=DEFAULT_PARKING_LOT_THRESHOLD, ge=0)
    team_average_regulars: int = Field(default=TEAM_AVERAGE_REGULARS, ge=1)

    class Config:
        extra = 'forbid'
